"""Subcommand modules for doomctl.

Provides register_commands() which uses deferred imports to keep
``doomctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from doomctl.commands.rules import rules

    cli.add_command(rules)

    # --- Standalone commands ---
    from doomctl.commands.config_cmd import config_cmd
    from doomctl.commands.scan import scan

    cli.add_command(scan)
    cli.add_command(config_cmd)
