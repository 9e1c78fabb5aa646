from __future__ import annotations

from dataclasses import dataclass

import typer

from shipbin.core.config import ReleaseConfig, load_config, resolve_config_path, resolve_root
from shipbin.core.result import Err
from shipbin.output.console import ConsoleProtocol, RichConsole
from shipbin.output.errors import error_exit_code, print_error


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: ReleaseConfig
    console: ConsoleProtocol


def build_context(console: ConsoleProtocol | None = None) -> CLIContext:
    """Load release.toml or exit; nothing is built without a bucket."""
    console = console or RichConsole()
    root = resolve_root()
    config_result = load_config(resolve_config_path(root), root=root)
    if isinstance(config_result, Err):
        print_error(config_result.error, console)
        raise typer.Exit(code=error_exit_code(config_result.error))

    return CLIContext(config=config_result.value, console=console)
