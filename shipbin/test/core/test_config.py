"""Tests for shipbin.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from shipbin.core.config import (
    DEFAULT_ARTIFACTS,
    PathsConfig,
    ReleaseConfig,
    TargetPlatform,
    load_config,
    resolve_config_path,
    resolve_root,
)
from shipbin.core.result import Err, Ok


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "release.toml"
    path.write_text(content, encoding="utf-8")
    return path


class TestTargetPlatform:
    def test_defaults(self) -> None:
        platform = TargetPlatform()
        assert platform.tag == "linux-arm"
        assert platform.env() == {"GOOS": "linux", "GOARCH": "arm", "GOARM": "5"}

    def test_no_goarm(self) -> None:
        platform = TargetPlatform(goos="linux", goarch="amd64", goarm=None)
        assert platform.tag == "linux-amd64"
        assert "GOARM" not in platform.env()

    def test_frozen(self) -> None:
        platform = TargetPlatform()
        with pytest.raises(AttributeError):
            platform.goos = "windows"  # type: ignore[misc]


class TestLoadConfig:
    def test_minimal(self, tmp_path: Path) -> None:
        path = _write(tmp_path, 'bucket = "s3://foobar/"\n')

        result = load_config(path, root=tmp_path, env={})

        assert isinstance(result, Ok)
        config = result.value
        assert config.bucket == "s3://foobar/"
        assert config.artifacts == DEFAULT_ARTIFACTS
        assert config.paths == PathsConfig()
        assert config.platform == TargetPlatform()
        assert config.source_root == tmp_path / "cmd"
        assert config.mirror_root == tmp_path / "auto-update" / "bucket"

    def test_full(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            """
bucket = "s3://releases/"
artifacts = ["alpha", "beta"]

[paths]
source = "apps"
mirror = "out/mirror"

[platform]
goos = "linux"
goarch = "arm64"
goarm = ""

[tools]
go = "/usr/local/go/bin/go"
aws = "aws2"
""",
        )

        result = load_config(path, root=tmp_path, env={})

        assert isinstance(result, Ok)
        config = result.value
        assert config.artifacts == ("alpha", "beta")
        assert config.source_root == tmp_path / "apps"
        assert config.mirror_root == tmp_path / "out" / "mirror"
        assert config.platform == TargetPlatform(goos="linux", goarch="arm64", goarm=None)
        assert config.tools.go == "/usr/local/go/bin/go"
        assert config.tools.aws == "aws2"

    def test_missing_bucket(self, tmp_path: Path) -> None:
        path = _write(tmp_path, 'artifacts = ["alpha"]\n')

        result = load_config(path, root=tmp_path, env={})

        assert isinstance(result, Err)
        assert "bucket" in result.error.message
        assert result.error.path == path
        assert result.error.hint is not None

    def test_blank_bucket(self, tmp_path: Path) -> None:
        path = _write(tmp_path, 'bucket = "   "\n')
        assert isinstance(load_config(path, root=tmp_path, env={}), Err)

    def test_bucket_from_env(self, tmp_path: Path) -> None:
        path = _write(tmp_path, 'bucket = "s3://file/"\n')

        result = load_config(path, root=tmp_path, env={"SHIPBIN_BUCKET": "s3://env/"})

        assert isinstance(result, Ok)
        assert result.value.bucket == "s3://env/"

    def test_env_supplies_missing_bucket(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "")
        result = load_config(path, root=tmp_path, env={"SHIPBIN_BUCKET": "s3://env/"})
        assert isinstance(result, Ok)

    def test_file_not_found(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "release.toml", root=tmp_path, env={})

        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "bucket = \n")

        result = load_config(path, root=tmp_path, env={})

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    @pytest.mark.parametrize(
        "artifacts",
        [
            "[]",
            '["alpha", "alpha"]',
            '["../escape"]',
            '["a/b"]',
            '["alpha", 3]',
            '"alpha"',
        ],
    )
    def test_invalid_artifacts(self, tmp_path: Path, artifacts: str) -> None:
        path = _write(tmp_path, f'bucket = "s3://b/"\nartifacts = {artifacts}\n')
        assert isinstance(load_config(path, root=tmp_path, env={}), Err)


class TestFromDict:
    def test_returns_result(self, tmp_path: Path) -> None:
        result = ReleaseConfig.from_dict({"bucket": "s3://b/"}, root=tmp_path, env={})
        assert isinstance(result, Ok)
        assert result.value.root == tmp_path


class TestResolve:
    def test_root_from_env(self, tmp_path: Path) -> None:
        assert resolve_root({"SHIPBIN_ROOT": str(tmp_path)}) == tmp_path.resolve()

    def test_root_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert resolve_root({}) == Path.cwd()

    def test_config_path(self, tmp_path: Path) -> None:
        assert resolve_config_path(tmp_path, {}) == tmp_path / "release.toml"
        other = tmp_path / "other.toml"
        assert resolve_config_path(tmp_path, {"SHIPBIN_CONFIG": str(other)}) == other
