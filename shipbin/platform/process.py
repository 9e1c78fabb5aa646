"""Subprocess execution with Result-based error handling.

Child processes always receive an explicit working directory; the current
directory of this process is never changed.

Usage:
    result = run_silent(["go", "build"], cwd=Path("cmd/updater"), env=env)
    match result:
        case Ok(_):
            ...
        case Err(error):
            print(f"Failed: {error.command_line}")
"""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from shipbin.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run_silent"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never started).
        stderr: Error details when the process could not be spawned.
    """

    command: tuple[str, ...]
    returncode: int
    stderr: str = ""

    @property
    def command_line(self) -> str:
        """The full command, shell-quoted."""
        return shlex.join(self.command)


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command, streaming its output to the terminal.

    Blocks until the process exits; there is no timeout.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Full environment for the child (inherits ours if None).

    Returns:
        Ok(None) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=dict(env) if env is not None else None,
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stderr=str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command=tuple(cmd), returncode=proc.returncode))

    return Ok(None)
