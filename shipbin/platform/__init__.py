"""Platform layer: child processes and filesystem writes."""

from .files import atomic_write_text
from .process import ProcessError, run_silent

__all__ = ["ProcessError", "atomic_write_text", "run_silent"]
