"""Shared fixtures: a throwaway project tree and recording fakes."""

from __future__ import annotations

from pathlib import Path

import pytest

from shipbin.core.config import ReleaseConfig
from shipbin.output.console import MockConsole
from shipbin.test.fakes import FakeSyncer, FakeToolchain


def make_project(root: Path, artifacts: tuple[str, ...]) -> ReleaseConfig:
    for name in artifacts:
        (root / "cmd" / name).mkdir(parents=True, exist_ok=True)
    return ReleaseConfig(root=root, bucket="s3://test-bucket/", artifacts=artifacts)


@pytest.fixture
def config(tmp_path: Path) -> ReleaseConfig:
    return make_project(tmp_path, ("alpha", "beta"))


@pytest.fixture
def toolchain() -> FakeToolchain:
    return FakeToolchain()


@pytest.fixture
def syncer() -> FakeSyncer:
    return FakeSyncer()


@pytest.fixture
def console() -> MockConsole:
    return MockConsole()
