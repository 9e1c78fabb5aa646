from __future__ import annotations

import typer

from shipbin.cli.context import build_context
from shipbin.core.config import ReleaseConfig
from shipbin.core.result import Err
from shipbin.output.console import ConsoleProtocol
from shipbin.output.errors import error_exit_code, print_error
from shipbin.services.release.service import ReleaseDriver
from shipbin.services.release.sync import AwsS3Sync
from shipbin.services.release.toolchain import GoToolchain

app = typer.Typer(add_completion=False, no_args_is_help=False)


def make_driver(config: ReleaseConfig, console: ConsoleProtocol) -> ReleaseDriver:
    return ReleaseDriver(
        config=config,
        toolchain=GoToolchain(platform=config.platform, go=config.tools.go),
        syncer=AwsS3Sync(aws=config.tools.aws),
        console=console,
    )


@app.command(
    add_help_option=False,
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def release(ctx: typer.Context) -> None:
    """Build every configured binary, stage it with its version.json, sync the bucket.

    Any extra argument, whatever it is, skips the bucket sync.
    """
    cli = build_context()
    build_only = len(ctx.args) > 0
    if build_only:
        cli.console.info("More than 1 argument passed, assuming build-only mode!")

    driver = make_driver(cli.config, cli.console)
    result = driver.release_all(publish=not build_only)
    if isinstance(result, Err):
        print_error(result.error, cli.console)
        raise typer.Exit(code=error_exit_code(result.error))


def main() -> None:
    app()
