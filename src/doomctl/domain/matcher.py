"""File-name matching for rules.

Pattern forms:
- ``*``: matches every name.
- ``""``: matches no name.
- ``glob:<pattern>``: shell glob over the whole name (``fnmatch`` rules).
- ``re:<pattern>``: regular expression, searched anywhere in the name.
- anything else: regular expression, searched anywhere in the name.  A
  leading ``*`` can never start a valid regex, so such a pattern is read
  as a glob instead (``*.tmp``).

INVARIANT: a NameMatcher is immutable and safe to share across threads.
"""

from __future__ import annotations

import fnmatch
import re
from dataclasses import dataclass
from enum import StrEnum

from doomctl.domain.errors import InvalidPatternError

MATCH_ALL_PATTERN = "*"
GLOB_PREFIX = "glob:"
REGEX_PREFIX = "re:"


class MatchKind(StrEnum):
    """How a pattern is interpreted."""

    ALL = "all"
    NONE = "none"
    GLOB = "glob"
    REGEX = "regex"


@dataclass(frozen=True, slots=True)
class NameMatcher:
    """Compiled name predicate.

    Attributes:
        pattern: The pattern text as configured.
        kind: How *pattern* was interpreted.
    """

    pattern: str
    kind: MatchKind
    _regex: re.Pattern[str] | None = None

    def matches(self, name: str) -> bool:
        """Return True if *name* satisfies this matcher."""
        if self.kind is MatchKind.ALL:
            return True
        if self.kind is MatchKind.NONE or self._regex is None:
            return False
        if self.kind is MatchKind.GLOB:
            return self._regex.match(name) is not None
        return self._regex.search(name) is not None


MATCH_ALL = NameMatcher(MATCH_ALL_PATTERN, MatchKind.ALL)
MATCH_NONE = NameMatcher("", MatchKind.NONE)


def _compile_regex(pattern: str, source: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        msg = f"Invalid name pattern {source!r}: {exc}"
        raise InvalidPatternError(msg, value=source) from exc


def _compile_glob(pattern: str) -> re.Pattern[str]:
    # fnmatch.translate anchors the end; re.match anchors the start.
    return re.compile(fnmatch.translate(pattern))


def compile_pattern(pattern: str) -> NameMatcher:
    """Compile *pattern* into a :class:`NameMatcher`.

    Raises:
        InvalidPatternError: If the pattern is not a valid regex (and not a
            leading-``*`` glob).

    Examples:
        >>> compile_pattern("*").matches("anything")
        True
        >>> compile_pattern(r"\\.log$").matches("app.log")
        True
        >>> compile_pattern("*.tmp").matches("build.tmp")
        True
    """
    if pattern == MATCH_ALL_PATTERN:
        return MATCH_ALL
    if pattern == "":
        return MATCH_NONE

    if pattern.startswith(GLOB_PREFIX):
        return NameMatcher(pattern, MatchKind.GLOB, _compile_glob(pattern[len(GLOB_PREFIX) :]))
    if pattern.startswith(REGEX_PREFIX):
        body = pattern[len(REGEX_PREFIX) :]
        return NameMatcher(pattern, MatchKind.REGEX, _compile_regex(body, pattern))

    try:
        return NameMatcher(pattern, MatchKind.REGEX, _compile_regex(pattern, pattern))
    except InvalidPatternError:
        if not pattern.startswith("*"):
            raise
    return NameMatcher(pattern, MatchKind.GLOB, _compile_glob(pattern))
