"""Tests for the go toolchain and aws sync collaborators."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import pytest

from shipbin.core.config import TargetPlatform
from shipbin.core.result import Err, Ok, Result
from shipbin.platform.process import ProcessError
from shipbin.services.release.sync import AwsS3Sync
from shipbin.services.release.toolchain import GoToolchain


class TestGoToolchain:
    def test_env_sets_target(self) -> None:
        base_env = {"PATH": "/usr/bin", "GOOS": "darwin"}
        tc = GoToolchain(platform=TargetPlatform(), base_env=base_env)
        env = tc.env()
        assert env["PATH"] == "/usr/bin"
        assert env["GOOS"] == "linux"
        assert env["GOARCH"] == "arm"
        assert env["GOARM"] == "5"

    def test_env_without_goarm(self) -> None:
        tc = GoToolchain(platform=TargetPlatform(goarch="arm64", goarm=None), base_env={})
        assert tc.env() == {"GOOS": "linux", "GOARCH": "arm64"}

    def test_build_runs_go_build_in_source_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        import shipbin.services.release.toolchain as toolchain

        seen: dict[str, object] = {}

        def fake_run_silent(
            cmd: list[str],
            cwd: Path,
            env: Mapping[str, str] | None = None,
        ) -> Result[None, ProcessError]:
            seen["cmd"] = cmd
            seen["cwd"] = cwd
            seen["env"] = env
            return Ok(None)

        monkeypatch.setattr(toolchain, "run_silent", fake_run_silent)

        tc = GoToolchain(platform=TargetPlatform(), go="/opt/go/bin/go", base_env={})
        result = tc.build(name="updater", source_dir=tmp_path)

        assert result == Ok(None)
        assert seen["cmd"] == ["/opt/go/bin/go", "build"]
        assert seen["cwd"] == tmp_path
        assert seen["env"] == {"GOOS": "linux", "GOARCH": "arm", "GOARM": "5"}

    def test_build_propagates_failure(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        import shipbin.services.release.toolchain as toolchain

        def fake_run_silent(
            cmd: list[str],
            cwd: Path,
            env: Mapping[str, str] | None = None,
        ) -> Result[None, ProcessError]:
            return Err(ProcessError(command=tuple(cmd), returncode=1))

        monkeypatch.setattr(toolchain, "run_silent", fake_run_silent)

        result = GoToolchain(platform=TargetPlatform()).build(name="x", source_dir=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == 1


class TestAwsS3Sync:
    def test_command(self, tmp_path: Path) -> None:
        cmd = AwsS3Sync().command(tmp_path / "bucket", "s3://foobar/")
        source = f"{tmp_path / 'bucket'}/"
        assert cmd == ["aws", "s3", "sync", source, "s3://foobar/", "--delete"]

    def test_sync_uses_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        import shipbin.services.release.sync as sync

        seen: dict[str, object] = {}

        def fake_run_silent(
            cmd: list[str],
            cwd: Path,
            env: Mapping[str, str] | None = None,
        ) -> Result[None, ProcessError]:
            seen["cmd"] = cmd
            seen["cwd"] = cwd
            return Ok(None)

        monkeypatch.setattr(sync, "run_silent", fake_run_silent)

        result = AwsS3Sync(aws="aws2").sync(
            source=tmp_path / "bucket", destination="s3://foobar/", cwd=tmp_path
        )

        assert result == Ok(None)
        assert seen["cwd"] == tmp_path
        source = f"{tmp_path / 'bucket'}/"
        assert seen["cmd"] == ["aws2", "s3", "sync", source, "s3://foobar/", "--delete"]
