"""Typed release configuration.

The release is driven by ``release.toml`` at the project root:

    bucket = "s3://example-bucket/"
    artifacts = ["barcode-scanner", "error-checker", "updater"]

    [paths]
    source = "cmd"
    mirror = "auto-update/bucket"

    [platform]
    goos = "linux"
    goarch = "arm"
    goarm = "5"

    [tools]
    go = "go"
    aws = "aws"

Only ``bucket`` is required. ``SHIPBIN_BUCKET`` overrides it from the
environment.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "ConfigError",
    "PathsConfig",
    "ReleaseConfig",
    "TargetPlatform",
    "ToolsConfig",
    "load_config",
    "resolve_config_path",
    "resolve_root",
    "BUCKET_ENV",
    "CONFIG_ENV",
    "CONFIG_FILENAME",
    "DEFAULT_ARTIFACTS",
    "ROOT_ENV",
]

CONFIG_FILENAME = "release.toml"

ROOT_ENV = "SHIPBIN_ROOT"
CONFIG_ENV = "SHIPBIN_CONFIG"
BUCKET_ENV = "SHIPBIN_BUCKET"

DEFAULT_ARTIFACTS: tuple[str, ...] = (
    "barcode-scanner",
    "error-checker",
    "updater",
)


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or is incomplete."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class TargetPlatform:
    """Cross-compilation target passed to the toolchain."""

    goos: str = "linux"
    goarch: str = "arm"
    goarm: str | None = "5"

    @property
    def tag(self) -> str:
        """Directory name used in the bucket mirror (e.g. ``linux-arm``)."""
        return f"{self.goos}-{self.goarch}"

    def env(self) -> dict[str, str]:
        out = {"GOOS": self.goos, "GOARCH": self.goarch}
        if self.goarm:
            out["GOARM"] = self.goarm
        return out


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Paths relative to the project root."""

    source: str = "cmd"
    mirror: str = "auto-update/bucket"


@dataclass(frozen=True, slots=True)
class ToolsConfig:
    """Executables for the external collaborators."""

    go: str = "go"
    aws: str = "aws"


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Everything the release driver needs; passed in explicitly."""

    root: Path
    bucket: str
    artifacts: tuple[str, ...] = DEFAULT_ARTIFACTS
    paths: PathsConfig = field(default_factory=PathsConfig)
    platform: TargetPlatform = field(default_factory=TargetPlatform)
    tools: ToolsConfig = field(default_factory=ToolsConfig)

    @property
    def source_root(self) -> Path:
        return self.root / self.paths.source

    @property
    def mirror_root(self) -> Path:
        return self.root / self.paths.mirror

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, object],
        *,
        root: Path,
        env: Mapping[str, str] | None = None,
    ) -> Result[ReleaseConfig, ConfigError]:
        """Create a config from parsed TOML, applying env overrides."""
        env = os.environ if env is None else env

        bucket = get_str(env, BUCKET_ENV) or get_str(data, "bucket")
        if bucket is None:
            return Err(
                ConfigError(
                    "bucket missing from config",
                    hint=f'Add bucket = "s3://your-bucket/" to {CONFIG_FILENAME} '
                    f"or set {BUCKET_ENV}",
                )
            )

        artifacts: tuple[str, ...] = DEFAULT_ARTIFACTS
        if "artifacts" in data:
            names = get_str_list(data, "artifacts")
            if names is None:
                return Err(ConfigError("artifacts must be a list of strings"))
            checked = _check_artifact_names(names)
            if isinstance(checked, Err):
                return checked
            artifacts = checked.value

        paths: StrDict = get_table(data, "paths") or {}
        platform: StrDict = get_table(data, "platform") or {}
        tools: StrDict = get_table(data, "tools") or {}

        return Ok(
            cls(
                root=root,
                bucket=bucket,
                artifacts=artifacts,
                paths=PathsConfig(
                    source=get_str(paths, "source") or "cmd",
                    mirror=get_str(paths, "mirror") or "auto-update/bucket",
                ),
                platform=TargetPlatform(
                    goos=get_str(platform, "goos") or "linux",
                    goarch=get_str(platform, "goarch") or "arm",
                    # An explicit empty string disables GOARM.
                    goarm=get_str(platform, "goarm") if "goarm" in platform else "5",
                ),
                tools=ToolsConfig(
                    go=get_str(tools, "go") or "go",
                    aws=get_str(tools, "aws") or "aws",
                ),
            )
        )


def _check_artifact_names(names: list[str]) -> Result[tuple[str, ...], ConfigError]:
    if not names:
        return Err(ConfigError("artifacts list is empty"))
    seen: set[str] = set()
    for name in names:
        if not name or "/" in name or "\\" in name or name in {".", ".."}:
            return Err(ConfigError(f"invalid artifact name: {name!r}"))
        if name in seen:
            return Err(ConfigError(f"duplicate artifact name: {name}"))
        seen.add(name)
    return Ok(tuple(names))


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(
            ConfigError(
                f"Config file not found: {path}",
                path=path,
                hint=f"Create {CONFIG_FILENAME} with at least: bucket = \"s3://your-bucket/\"",
            )
        )
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def resolve_root(env: Mapping[str, str] | None = None) -> Path:
    """Project root: ``SHIPBIN_ROOT`` if set, else the current directory."""
    env = os.environ if env is None else env
    value = get_str(env, ROOT_ENV)
    if value:
        return Path(value).expanduser().resolve()
    return Path.cwd()


def resolve_config_path(root: Path, env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    value = get_str(env, CONFIG_ENV)
    if value:
        return Path(value).expanduser()
    return root / CONFIG_FILENAME


def load_config(
    path: Path,
    *,
    root: Path,
    env: Mapping[str, str] | None = None,
) -> Result[ReleaseConfig, ConfigError]:
    """Load and validate release configuration.

    Args:
        path: Path to release.toml
        root: Project root that relative paths are resolved against
        env: Environment used for overrides (defaults to os.environ)

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    config = ReleaseConfig.from_dict(result.value, root=root, env=env)
    if isinstance(config, Err):
        return Err(ConfigError(config.error.message, path=path, hint=config.error.hint))
    return config
