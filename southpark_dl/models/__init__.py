"""
Data Models Layer.

This package contains the models that define the core data structures
used throughout the application, such as configuration and run state.
"""

from .config import AssemblerConfig
from .run_state import RunState

__all__ = ["AssemblerConfig", "RunState"]
