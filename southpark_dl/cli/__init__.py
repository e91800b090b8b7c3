"""
Command-Line Interface Layer.

This package defines the Typer application and the Rich console output.
"""
