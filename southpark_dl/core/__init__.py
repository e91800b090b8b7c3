"""
Core application engine for orchestrating the assembly process.

The `Pipeline` resolves which episodes to process and drives the download,
merge, rename and cleanup stages for each of them.
"""

from .pipeline import Pipeline, PipelineState, RunSummary

__all__ = ["Pipeline", "PipelineState", "RunSummary"]
