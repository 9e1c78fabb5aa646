"""Error codes for CLI exit status.

The numeric values are used as process exit codes and should remain stable:
- 0: Success
- 1: User error (bad input)
- 2: Configuration error (missing or invalid release.toml, no bucket)
- 3: Build error (toolchain exited non-zero)
- 4: Publish error (bucket sync exited non-zero)
- 5: I/O error (missing build output, copy/write failure)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the release command."""

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    BUILD_ERROR = 3
    PUBLISH_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")
