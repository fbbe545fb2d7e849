"""DoomOptions: one cleanup job's complete configuration.

Built wholesale from settings and never mutated afterwards.  A new
configuration means a new DoomOptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from doomctl.domain.rules import DoomRule, RuleSet

DEFAULT_DOOM_PATH = "./"
DEFAULT_DOOM_EXPORT = "/var/log"
DEFAULT_CIRCLE = "0 0 * * 0"


@dataclass(frozen=True, slots=True)
class DoomOptions:
    """Configuration for one cleanup pass.

    Attributes:
        doom_path: Directory to scan.
        doom_export: Directory that receives exported logs.
        circle: Cron expression for the schedule.  Stored verbatim; the
            scheduler that interprets it lives outside this package.
        rules: The deletion policy.
    """

    doom_path: Path
    doom_export: Path
    circle: str
    rules: RuleSet

    @property
    def rule(self) -> DoomRule | None:
        """The primary rule, or None for an empty rule set."""
        return self.rules.rules[0] if self.rules.rules else None

    def describe(self) -> dict[str, Any]:
        return {
            "doom_path": str(self.doom_path),
            "doom_export": str(self.doom_export),
            "circle": self.circle,
            "policy": str(self.rules.policy),
            "rules": [rule.describe() for rule in self.rules],
        }
