"""Parse errors raised while constructing rules.

INVARIANT: every error in this module is raised at construction time.
Evaluation (``applies_to``, ``should_delete``, ``matches``) never raises.
"""

from __future__ import annotations

from enum import StrEnum


class ParseErrorCode(StrEnum):
    """Machine-readable codes, reused as ``ServiceError.code``."""

    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_NUMBER = "INVALID_NUMBER"
    NEGATIVE = "NEGATIVE"
    INVALID_PATTERN = "INVALID_PATTERN"


class ParseError(ValueError):
    """Base class for malformed rule input.

    Attributes:
        value: The raw text that failed to parse.
        code: One of :class:`ParseErrorCode`.
    """

    code: ParseErrorCode

    def __init__(self, message: str, *, value: str) -> None:
        super().__init__(message)
        self.value = value


class InvalidFormatError(ParseError):
    """Unit suffix missing or not in the unit table."""

    code = ParseErrorCode.INVALID_FORMAT


class InvalidNumberError(ParseError):
    """Numeric prefix is not a decimal number."""

    code = ParseErrorCode.INVALID_NUMBER


class NegativeValueError(ParseError):
    """Ages and sizes are non-negative."""

    code = ParseErrorCode.NEGATIVE


class InvalidPatternError(ParseError):
    """Name pattern does not compile."""

    code = ParseErrorCode.INVALID_PATTERN
