"""Custom Click base classes with --examples support.

DoomCommand and DoomGroup accept an ``examples`` parameter: one shell
command per line.  ``--examples`` prints them behind a ``$`` prompt,
followed by where the job settings come from, and exits.
"""

from __future__ import annotations

from typing import Any

import click

JOB_SETTINGS_HINT = (
    "Job settings: DOOM_PATH, DOOM_EXPORT, DOOM_CIRCLE, RULE_AGE, RULE_SIZE, RULE_NAME\n"
    "or doom.toml (see `doomctl config`)."
)


def format_examples(examples: str) -> str:
    """Render each non-blank line of *examples* as a shell prompt."""
    commands = (line.strip() for line in examples.splitlines())
    return "\n".join(f"  $ {command}" for command in commands if command)


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(format_examples(examples))
        click.echo(f"\n{JOB_SETTINGS_HINT}")
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class DoomCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class DoomGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Subcommands default to :class:`DoomCommand`.
    """

    command_class = DoomCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)
