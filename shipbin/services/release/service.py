"""Release driver: build, stage and describe each artifact, then publish.

Every step returns a Result; the driver stops at the first Err. Each step
overwrites its outputs, so a failed release is fixed by re-running it.
"""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from shipbin.core.config import ReleaseConfig
from shipbin.core.layout import MirrorLayout
from shipbin.core.result import Err, Ok, Result
from shipbin.output.console import ConsoleProtocol, Style
from shipbin.platform.files import atomic_write_text
from shipbin.platform.process import ProcessError
from shipbin.services.release.errors import ReleaseError
from shipbin.services.release.manifest import (
    VersionManifest,
    sha256_file,
    stray_entries,
    verify_mirror,
)
from shipbin.services.release.sync import Syncer
from shipbin.services.release.toolchain import Toolchain

__all__ = ["ReleaseDriver", "ReleaseReport", "StagedArtifact"]


@dataclass(frozen=True, slots=True)
class StagedArtifact:
    name: str
    binary: Path
    manifest: Path
    digest: str


@dataclass(frozen=True, slots=True)
class ReleaseReport:
    artifacts: tuple[StagedArtifact, ...]
    published: bool


class ReleaseDriver:
    """Runs the release procedure for a configured set of artifacts."""

    def __init__(
        self,
        *,
        config: ReleaseConfig,
        toolchain: Toolchain,
        syncer: Syncer,
        console: ConsoleProtocol,
    ) -> None:
        self._config = config
        self._layout = MirrorLayout.from_config(config)
        self._toolchain = toolchain
        self._syncer = syncer
        self._console = console

    @property
    def layout(self) -> MirrorLayout:
        return self._layout

    def build_artifact(self, name: str) -> Result[Path, ReleaseError]:
        """Cross-compile ``name`` in its source directory.

        Returns:
            Ok(path) with the build output
            Err(ReleaseError) if the toolchain failed
        """
        self._console.print(f"Building binary: {name}...")
        source_dir = self._layout.source_dir(name)
        if not source_dir.is_dir():
            return Err(
                ReleaseError(
                    kind="build_failed",
                    message=f"source directory not found: {source_dir}",
                    hint=f"Expected a package at {self._config.paths.source}/{name}",
                )
            )

        result = self._toolchain.build(name=name, source_dir=source_dir).map_err(
            lambda error: _build_error(name, error)
        )
        if isinstance(result, Err):
            return result
        return Ok(self._layout.build_output(name))

    def stage_artifact(self, name: str) -> Result[Path, ReleaseError]:
        """Copy the build output into the mirror."""
        src = self._layout.build_output(name)
        dest = self._layout.staged_binary(name)
        if not src.is_file():
            return Err(
                ReleaseError(
                    kind="output_missing",
                    message=f"build output not found: {src}",
                    hint="The toolchain succeeded but produced no binary at the expected path",
                )
            )

        try:
            dest.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as e:
            return Err(
                ReleaseError(kind="filesystem", message=f"mkdir failed: {dest.parent}", hint=str(e))
            )

        self._console.print(f"Copying binary to bucket ({src} => {dest})")
        try:
            shutil.copy(src, dest)
        except OSError as e:
            return Err(
                ReleaseError(
                    kind="filesystem", message=f"copy failed: {src} => {dest}", hint=str(e)
                )
            )
        return Ok(dest)

    def write_manifest(self, name: str) -> Result[StagedArtifact, ReleaseError]:
        """Hash the staged binary and write ``version.json`` next to it."""
        binary = self._layout.staged_binary(name)
        if not binary.is_file():
            return Err(
                ReleaseError(kind="output_missing", message=f"staged binary not found: {binary}")
            )

        try:
            digest = sha256_file(binary)
        except OSError as e:
            return Err(
                ReleaseError(kind="filesystem", message=f"hash failed: {binary}", hint=str(e))
            )

        manifest_path = self._layout.manifest_path(name)
        manifest = VersionManifest(hash=digest, binary_path=name)
        self._console.print(f"Preparing version.json ({manifest_path})")
        try:
            atomic_write_text(manifest_path, manifest.to_json())
        except OSError as e:
            return Err(
                ReleaseError(
                    kind="filesystem", message=f"write failed: {manifest_path}", hint=str(e)
                )
            )

        return Ok(StagedArtifact(name=name, binary=binary, manifest=manifest_path, digest=digest))

    def release_artifact(self, name: str) -> Result[StagedArtifact, ReleaseError]:
        built = self.build_artifact(name)
        if isinstance(built, Err):
            return built
        staged = self.stage_artifact(name)
        if isinstance(staged, Err):
            return staged
        return self.write_manifest(name)

    def publish(self) -> Result[None, ReleaseError]:
        """Sync the mirror to the bucket, deleting remote objects not present locally."""
        mirror = self._layout.mirror_root
        self._console.print(f"Uploading bucket to {self._config.bucket}...")
        return self._syncer.sync(
            source=mirror, destination=self._config.bucket, cwd=mirror.parent
        ).map_err(_publish_error)

    def release_all(
        self,
        artifacts: Sequence[str] | None = None,
        *,
        publish: bool = True,
    ) -> Result[ReleaseReport, ReleaseError]:
        """Release every artifact in order, then publish unless build-only.

        Args:
            artifacts: Names to release (defaults to the configured list)
            publish: False for build-only mode (no bucket sync)

        Returns:
            Ok(ReleaseReport) on success
            Err(ReleaseError) for the first step that failed
        """
        names = tuple(self._config.artifacts if artifacts is None else artifacts)

        staged: list[StagedArtifact] = []
        for name in names:
            result = self.release_artifact(name)
            if isinstance(result, Err):
                return result
            staged.append(result.value)
            self._console.newline()

        verified = verify_mirror(self._layout, names)
        if isinstance(verified, Err):
            return verified

        for stray in stray_entries(self._layout, set(self._config.artifacts) | set(names)):
            self._console.warning(f"stray mirror entry, will be published: {stray}")

        if not publish:
            self._console.print("Skipping upload to bucket!", Style.DIM)
            self._console.success("Done!")
            return Ok(ReleaseReport(artifacts=tuple(staged), published=False))

        published = self.publish()
        if isinstance(published, Err):
            return published

        self._console.success("Done!")
        return Ok(ReleaseReport(artifacts=tuple(staged), published=True))


def _build_error(name: str, error: ProcessError) -> ReleaseError:
    if error.returncode == -1:
        return ReleaseError(
            kind="build_failed",
            message=f"cmd failed: {error.command_line}",
            hint=error.stderr or f"Is the toolchain for {name} installed?",
        )
    return ReleaseError(
        kind="build_failed",
        message=f"cmd failed: {error.command_line}",
        hint=f"building {name} exited with code {error.returncode}",
    )


def _publish_error(error: ProcessError) -> ReleaseError:
    return ReleaseError(
        kind="publish_failed",
        message=f"cmd failed: {error.command_line}",
        hint=error.stderr or f"exit code {error.returncode}",
    )
