"""Command: list the files the configured rules would delete."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from doomctl.commands._base import DoomCommand

if TYPE_CHECKING:
    from doomctl.commands._context import AppContext


@click.command(
    cls=DoomCommand,
    examples="""\
  doomctl scan
  doomctl --path /srv/uploads scan --workers 8
  doomctl -q scan | xargs -r ls -l
  RULE_AGE=30d RULE_SIZE=0B RULE_NAME='\\.log$' doomctl --json scan""",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Worker threads for stat and rule evaluation.",
)
@click.option("--no-recursive", is_flag=True, help="Only scan the top-level directory.")
@click.option("--follow-symlinks", is_flag=True, help="Include symlinked files and directories.")
@click.pass_obj
def scan(
    app: AppContext,
    workers: int | None,
    no_recursive: bool,
    follow_symlinks: bool,
) -> None:
    """Scan DOOM_PATH and report deletion candidates (nothing is deleted)."""
    from doomctl.services.scan import ScanService

    cfg = app.settings.scan
    app.emit(
        ScanService(app.options).scan(
            workers=workers if workers is not None else cfg.workers,
            recursive=cfg.recursive and not no_recursive,
            follow_symlinks=follow_symlinks or cfg.follow_symlinks,
        )
    )
