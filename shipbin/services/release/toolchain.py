"""Cross-compilation toolchain used by the release driver."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from shipbin.core.config import TargetPlatform
from shipbin.core.result import Result
from shipbin.platform.process import ProcessError, run_silent

__all__ = ["GoToolchain", "Toolchain"]


class Toolchain(Protocol):
    def build(self, *, name: str, source_dir: Path) -> Result[None, ProcessError]:
        """Build artifact ``name`` inside ``source_dir``.

        On success the binary is at ``source_dir / name``.
        """
        ...


@dataclass(frozen=True, slots=True)
class GoToolchain:
    """Runs ``go build`` with GOOS/GOARCH/GOARM set for the target."""

    platform: TargetPlatform
    go: str = "go"
    base_env: Mapping[str, str] | None = field(default=None, compare=False)

    def command(self) -> list[str]:
        return [self.go, "build"]

    def env(self) -> dict[str, str]:
        env = dict(os.environ if self.base_env is None else self.base_env)
        env.update(self.platform.env())
        return env

    def build(self, *, name: str, source_dir: Path) -> Result[None, ProcessError]:
        # go names the binary after the package directory, which is `name`.
        return run_silent(self.command(), cwd=source_dir, env=self.env())
