"""Command group: inspect and try out deletion rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from doomctl.commands._base import DoomGroup

if TYPE_CHECKING:
    from doomctl.commands._context import AppContext

_RULES_EXAMPLES = """\
  doomctl rules list
  doomctl rules test app.log --size 150M --age 8d"""


@click.group(cls=DoomGroup, examples=_RULES_EXAMPLES)
@click.pass_obj
def rules(app: AppContext) -> None:
    """Inspect the configured deletion rules."""


@rules.command(
    "list",
    examples="""\
  doomctl rules list
  doomctl --json rules list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List parsed rules and the combination policy."""
    from doomctl.services.rules import RuleService

    app.emit(RuleService(app.options).list_rules())


@rules.command(
    examples="""\
  doomctl rules test app.log --size 150M --age 8d
  doomctl rules test cache.tmp --size 0B --age 0s
  RULE_AGE=1M doomctl rules test old.bin --size 1M --age 1M""",
)
@click.argument("name")
@click.option("--size", required=True, help="File size, e.g. 150M.")
@click.option("--age", required=True, help="File age, e.g. 8d.")
@click.pass_obj
def test(app: AppContext, name: str, size: str, age: str) -> None:
    """Decide whether a file called NAME with this size and age would be deleted."""
    from doomctl.services.rules import RuleService

    app.emit(RuleService(app.options).test(name, size=size, age=age))
