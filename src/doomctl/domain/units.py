"""Human-readable age and size thresholds.

A threshold is a decimal number immediately followed by one unit letter:
``7d``, ``1.5h``, ``100M``.  Unit letters are case-sensitive and the two
tables are separate: ``M`` means months in an age and
mebibytes in a size.  Callers pick the table by calling the right parser.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import timedelta
from decimal import Decimal, localcontext

from doomctl.domain.errors import InvalidFormatError, InvalidNumberError, NegativeValueError

# A calendar month has no fixed length; ages use 30 days.
MONTH = timedelta(days=30)

DURATION_UNITS: dict[str, timedelta] = {
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
    "w": timedelta(weeks=1),
    "M": MONTH,
}

# Binary prefixes, each 1024x the previous.
SIZE_UNITS: dict[str, int] = {
    "B": 1,
    "K": 1024,
    "M": 1024**2,
    "G": 1024**3,
    "T": 1024**4,
    "P": 1024**5,
}

_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_MICROSECONDS = Decimal(1_000_000)


def _split(text: str, units: Mapping[str, object], kind: str) -> tuple[Decimal, str]:
    """Split *text* into ``(number, unit)`` and validate both halves."""
    raw = text.strip()
    if not raw or raw[-1] not in units:
        allowed = ", ".join(units)
        msg = f"Invalid {kind} {text!r}: expected a number followed by one of {allowed}"
        raise InvalidFormatError(msg, value=text)

    number_text, unit = raw[:-1], raw[-1]
    if not _NUMBER_RE.fullmatch(number_text):
        msg = f"Invalid {kind} {text!r}: {number_text!r} is not a decimal number"
        raise InvalidNumberError(msg, value=text)

    number = Decimal(number_text)
    if number < 0:
        msg = f"Invalid {kind} {text!r}: value must not be negative"
        raise NegativeValueError(msg, value=text)
    return number, unit


def _scale(number: Decimal, factor: int) -> int:
    """Return ``floor(number * factor)`` without rounding long inputs."""
    digits = len(number.as_tuple().digits) + len(str(factor))
    with localcontext(prec=max(digits, 28)):
        return int(number * factor)


def parse_duration(text: str) -> timedelta:
    """Parse an age threshold such as ``"7d"`` into a :class:`timedelta`.

    Examples:
        >>> parse_duration("7d")
        datetime.timedelta(days=7)
        >>> parse_duration("90m")
        datetime.timedelta(seconds=5400)
    """
    number, unit = _split(text, DURATION_UNITS, "age")
    unit_us = DURATION_UNITS[unit] // timedelta(microseconds=1)
    try:
        return timedelta(microseconds=_scale(number, unit_us))
    except OverflowError as exc:
        msg = f"Invalid age {text!r}: value is out of range"
        raise InvalidNumberError(msg, value=text) from exc


def parse_size(text: str) -> int:
    """Parse a size threshold such as ``"100M"`` into bytes.

    Fractional results are floored to whole bytes.

    Examples:
        >>> parse_size("100M")
        104857600
        >>> parse_size("1.5K")
        1536
    """
    number, unit = _split(text, SIZE_UNITS, "size")
    return _scale(number, SIZE_UNITS[unit])


def format_duration(value: timedelta) -> str:
    """Render *value* in the largest unit that represents it exactly.

    ``parse_duration(format_duration(td)) == td`` for any non-negative
    ``td``.
    """
    total_us = value // timedelta(microseconds=1)
    if total_us == 0:
        return "0s"
    for unit, size in sorted(DURATION_UNITS.items(), key=lambda kv: kv[1], reverse=True):
        unit_us = size // timedelta(microseconds=1)
        if total_us % unit_us == 0:
            return f"{total_us // unit_us}{unit}"
    seconds = Decimal(total_us) / _MICROSECONDS
    return f"{seconds.normalize():f}s"


def format_size(value: int) -> str:
    """Render *value* bytes in the largest binary unit that divides it."""
    if value == 0:
        return "0B"
    for unit, size in sorted(SIZE_UNITS.items(), key=lambda kv: kv[1], reverse=True):
        if value % size == 0:
            return f"{value // size}{unit}"
    return f"{value}B"
