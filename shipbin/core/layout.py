"""Filesystem layout of a release.

Source tree (build output)::

    <root>/<source>/<name>/<name>

Bucket mirror (synced to the bucket as-is)::

    <mirror>/<name>/<platform-tag>/<name>
    <mirror>/<name>/<platform-tag>/version.json
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import ReleaseConfig

__all__ = ["MANIFEST_FILENAME", "MirrorLayout"]

MANIFEST_FILENAME = "version.json"


@dataclass(frozen=True, slots=True)
class MirrorLayout:
    """Derives every per-artifact path from the configuration."""

    source_root: Path
    mirror_root: Path
    platform_tag: str

    @classmethod
    def from_config(cls, config: ReleaseConfig) -> MirrorLayout:
        return cls(
            source_root=config.source_root,
            mirror_root=config.mirror_root,
            platform_tag=config.platform.tag,
        )

    def source_dir(self, name: str) -> Path:
        """Directory the toolchain is run in."""
        return self.source_root / name

    def build_output(self, name: str) -> Path:
        return self.source_dir(name) / name

    def staged_dir(self, name: str) -> Path:
        return self.mirror_root / name / self.platform_tag

    def staged_binary(self, name: str) -> Path:
        return self.staged_dir(name) / name

    def manifest_path(self, name: str) -> Path:
        return self.staged_dir(name) / MANIFEST_FILENAME
