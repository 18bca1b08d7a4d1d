"""Root CLI group for hakot with global flags and command registration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from hakot import __version__
from hakot.commands import register_commands
from hakot.commands._context import AppContext
from hakot.config.settings import HakotSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="hakot")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--snapshot",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Realtime database JSON export to read drivers and trucks from.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    snapshot: Path | None,
) -> None:
    """hakot — driver login and assigned truck schedules."""
    ctx.ensure_object(dict)
    flags: dict[str, Any] = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    if snapshot is not None:
        flags["snapshot"] = snapshot
    settings = HakotSettings.from_cli(config_path=config_path, **flags)
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
