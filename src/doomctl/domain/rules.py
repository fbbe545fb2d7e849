"""Deletion rules and rule sets.

A rule is a conjunction: a file qualifies only when it is at least as old
as ``age``, at least as large as ``size``, and its name matches.  A rule
set combines rules with OR (default) or AND.

INVARIANT: rules and rule sets are immutable after construction.
``applies_to`` and ``should_delete`` never raise.
INVARIANT: an empty rule set never deletes anything.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import timedelta
from enum import StrEnum
from pathlib import Path
from typing import Any

from doomctl.domain.matcher import MATCH_ALL, NameMatcher, compile_pattern
from doomctl.domain.units import format_duration, format_size, parse_duration, parse_size

DEFAULT_AGE = "7d"
DEFAULT_SIZE = "100M"
DEFAULT_NAME = "*"


@dataclass(frozen=True, slots=True)
class FileMetadata:
    """What a rule needs to know about one file.

    Supplied by the filesystem walker; *path* is carried for reporting only.
    """

    name: str
    size_bytes: int
    age: timedelta
    path: Path | None = None


class RulePolicy(StrEnum):
    """How a rule set combines its rules."""

    ANY = "any"
    ALL = "all"


@dataclass(frozen=True, slots=True)
class DoomRule:
    """Conjunctive deletion predicate.

    ``None`` for *age* or *size* means the constraint is unset and always
    holds; the default matcher accepts every name.
    """

    age: timedelta | None = None
    size: int | None = None
    name: NameMatcher = MATCH_ALL

    @classmethod
    def from_strings(cls, age: str | None, size: str | None, name: str | None) -> DoomRule:
        """Build a rule from its textual form, failing fast on bad input.

        Raises:
            ParseError: If any field is malformed.
        """
        return cls(
            age=parse_duration(age) if age is not None else None,
            size=parse_size(size) if size is not None else None,
            name=compile_pattern(name) if name is not None else MATCH_ALL,
        )

    @classmethod
    def default(cls) -> DoomRule:
        """The stock rule: 7 days old AND 100 MiB AND any name."""
        return cls.from_strings(DEFAULT_AGE, DEFAULT_SIZE, DEFAULT_NAME)

    def applies_to(self, meta: FileMetadata) -> bool:
        if self.age is not None and meta.age < self.age:
            return False
        if self.size is not None and meta.size_bytes < self.size:
            return False
        return self.name.matches(meta.name)

    def describe(self) -> dict[str, Any]:
        """Canonical textual form, ``None`` for unset thresholds."""
        return {
            "age": format_duration(self.age) if self.age is not None else None,
            "size": format_size(self.size) if self.size is not None else None,
            "name": self.name.pattern,
            "match": str(self.name.kind),
        }


@dataclass(frozen=True, slots=True)
class RuleSet:
    """The full deletion policy for one cleanup pass."""

    rules: tuple[DoomRule, ...] = field(default_factory=tuple)
    policy: RulePolicy = RulePolicy.ANY

    @classmethod
    def of(cls, rules: Iterable[DoomRule], policy: RulePolicy = RulePolicy.ANY) -> RuleSet:
        return cls(tuple(rules), RulePolicy(policy))

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[DoomRule]:
        return iter(self.rules)

    def should_delete(self, meta: FileMetadata) -> bool:
        """Decide whether *meta* is a deletion candidate."""
        if not self.rules:
            return False
        if self.policy is RulePolicy.ALL:
            return all(rule.applies_to(meta) for rule in self.rules)
        return any(rule.applies_to(meta) for rule in self.rules)

    def matching(self, meta: FileMetadata) -> list[int]:
        """Indices of the rules that apply to *meta*."""
        return [i for i, rule in enumerate(self.rules) if rule.applies_to(meta)]
