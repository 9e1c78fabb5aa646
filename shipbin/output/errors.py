"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shipbin.core.config import ConfigError
from shipbin.core.errors import ErrorCode
from shipbin.output.console import Style
from shipbin.services.release.errors import ReleaseError

if TYPE_CHECKING:
    from shipbin.output.console import ConsoleProtocol

__all__ = ["print_error", "error_exit_code"]


def print_error(error: ReleaseError | ConfigError, console: ConsoleProtocol) -> None:
    """Print one error line, plus a dimmed hint when there is one."""
    message = error.message
    if isinstance(error, ConfigError) and error.path and str(error.path) not in message:
        message = f"{message} ({error.path})"
    console.error(message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def error_exit_code(error: ReleaseError | ConfigError) -> int:
    match error:
        case ConfigError():
            return int(ErrorCode.CONFIG_ERROR)
        case ReleaseError(kind="build_failed"):
            return int(ErrorCode.BUILD_ERROR)
        case ReleaseError(kind="publish_failed"):
            return int(ErrorCode.PUBLISH_ERROR)
        case ReleaseError(kind="output_missing" | "filesystem" | "manifest_mismatch"):
            return int(ErrorCode.IO_ERROR)
    return int(ErrorCode.USER_ERROR)
