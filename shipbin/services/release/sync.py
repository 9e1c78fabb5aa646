"""Bucket sync used to publish the mirror."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from shipbin.core.result import Result
from shipbin.platform.process import ProcessError, run_silent

__all__ = ["AwsS3Sync", "Syncer"]


class Syncer(Protocol):
    def sync(self, *, source: Path, destination: str, cwd: Path) -> Result[None, ProcessError]:
        """Make ``destination`` hold exactly the files under ``source``."""
        ...


@dataclass(frozen=True, slots=True)
class AwsS3Sync:
    """``aws s3 sync --delete``; credentials come from the AWS CLI's own config."""

    aws: str = "aws"

    def command(self, source: Path, destination: str) -> list[str]:
        # Trailing slash: sync the directory's contents, not the directory.
        return [self.aws, "s3", "sync", f"{source}/", destination, "--delete"]

    def sync(self, *, source: Path, destination: str, cwd: Path) -> Result[None, ProcessError]:
        return run_silent(self.command(source, destination), cwd=cwd)
