"""Command: show the effective job configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from doomctl.commands._base import DoomCommand

if TYPE_CHECKING:
    from doomctl.commands._context import AppContext


@click.command(
    "config",
    cls=DoomCommand,
    examples="""\
  doomctl config
  doomctl --json config
  DOOM_PATH=/tmp RULE_AGE=1M doomctl config""",
)
@click.pass_obj
def config_cmd(app: AppContext) -> None:
    """Show the merged configuration (flags, env, doom.toml, defaults)."""
    from doomctl.services.config import ConfigService

    app.emit(ConfigService(app.options).show(config_path=app.settings.config_path))
