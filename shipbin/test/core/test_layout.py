"""Tests for shipbin.core.layout module."""

from __future__ import annotations

from pathlib import Path

from shipbin.core.config import ReleaseConfig, TargetPlatform
from shipbin.core.layout import MirrorLayout


def test_paths_follow_bucket_layout(tmp_path: Path) -> None:
    config = ReleaseConfig(root=tmp_path, bucket="s3://b/")
    layout = MirrorLayout.from_config(config)

    assert layout.source_dir("updater") == tmp_path / "cmd" / "updater"
    assert layout.build_output("updater") == tmp_path / "cmd" / "updater" / "updater"

    staged = tmp_path / "auto-update" / "bucket" / "updater" / "linux-arm"
    assert layout.staged_dir("updater") == staged
    assert layout.staged_binary("updater") == staged / "updater"
    assert layout.manifest_path("updater") == staged / "version.json"


def test_platform_tag_from_config(tmp_path: Path) -> None:
    config = ReleaseConfig(
        root=tmp_path,
        bucket="s3://b/",
        platform=TargetPlatform(goos="linux", goarch="amd64", goarm=None),
    )
    layout = MirrorLayout.from_config(config)
    assert layout.staged_dir("x").name == "linux-amd64"
