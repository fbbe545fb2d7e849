"""Root CLI group for doomctl with global flags and command registration."""

from __future__ import annotations

from typing import Any

import click

from doomctl import __version__
from doomctl.commands import register_commands
from doomctl.commands._context import AppContext
from doomctl.config.settings import DoomSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="doomctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (candidate paths only).")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--export-logs", is_flag=True, help="Append JSON logs to DOOM_EXPORT/doomctl.log.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--path",
    "doom_path",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory to scan (overrides DOOM_PATH).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    export_logs: bool,
    config_path: str | None,
    doom_path: str | None,
) -> None:
    """doomctl: plan scheduled file cleanup from age, size, and name rules."""
    # Unset flags are left out so env vars and doom.toml still apply.
    flags: dict[str, Any] = {
        key: value
        for key, value in {
            "json_output": json_output,
            "quiet": quiet,
            "verbose": verbose,
            "log_json": log_json,
            "export_logs": export_logs,
        }.items()
        if value
    }
    if doom_path is not None:
        flags["doom_path"] = doom_path
    settings = DoomSettings.from_cli(config_path=config_path, **flags)
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
