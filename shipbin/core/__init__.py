"""Core domain types and logic."""

from .config import ConfigError, ReleaseConfig, TargetPlatform, load_config
from .errors import ErrorCode
from .layout import MANIFEST_FILENAME, MirrorLayout
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "ReleaseConfig",
    "TargetPlatform",
    "load_config",
    # errors
    "ErrorCode",
    # layout
    "MANIFEST_FILENAME",
    "MirrorLayout",
    # result
    "Err",
    "Ok",
    "Result",
]
