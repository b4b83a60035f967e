"""
Time parsing and formatting for WinSplits exports.

WinSplits Online writes times as "h:mm.ss" or "m.ss". We format them back
as colon separated units ("1:02:05", "2:05", "5").
"""

from __future__ import annotations

import re

from .constants import TimeUnit

_TIME_SEPARATORS = re.compile(r"[:.]")


class FieldFormatError(ValueError):
    """A time or place field is not well-formed."""


def parse_time(text: str) -> int | None:
    """Parse a WinSplits time to seconds.

    Formats:
        ""         → None (missing time)
        "2.05"     → 125
        "1:02.05"  → 3725
        "01:02:05" → 3725 (format_time output)
        "5"        → 5
        "+0.25"    → 25 (relative gap)

    Units are not range checked: "75.00" is 4500 seconds.

    Raises:
        FieldFormatError: If a unit is not a base-10 integer.
    """
    text = text.strip()
    if not text:
        return None
    if text.startswith("+"):
        text = text[1:]

    units = _TIME_SEPARATORS.split(text)
    if len(units) > 3:
        raise FieldFormatError(f"Invalid time: {text!r}")

    total = 0
    for unit in units:
        if not (unit.isascii() and unit.isdigit()):
            raise FieldFormatError(f"Invalid time: {text!r}")
        total = total * 60 + int(unit, 10)
    return total


def format_time(
    seconds: int | None,
    minimum: TimeUnit | str = TimeUnit.SECONDS,
    double_digits: bool = False,
) -> str:
    """Format seconds as a colon separated time string.

    Args:
        seconds: Non-negative seconds, or None for a missing time
        minimum: Leading unit that is always emitted, even when zero
        double_digits: Zero-pad the leading unit too

    Examples:
        format_time(5)                    → "5"
        format_time(125)                  → "2:05"
        format_time(5, "minutes")         → "0:05"
        format_time(3725)                 → "1:02:05"
        format_time(3725, "hours", True)  → "01:02:05"
        format_time(None)                 → ""
    """
    if seconds is None:
        return ""
    if seconds < 0:
        raise ValueError(f"Cannot format negative time: {seconds}")

    minimum = TimeUnit(minimum)
    mandatory_hours = minimum is TimeUnit.HOURS
    mandatory_minutes = mandatory_hours or minimum is TimeUnit.MINUTES

    units: list[str] = []
    rest = seconds

    if mandatory_hours or rest >= 3600:
        hours, rest = divmod(rest, 3600)
        units.append(f"{hours:02d}" if double_digits else str(hours))

    if mandatory_minutes or rest >= 60 or units:
        minutes, rest = divmod(rest, 60)
        units.append(f"{minutes:02d}" if double_digits or units else str(minutes))

    units.append(f"{rest:02d}" if double_digits or units else str(rest))

    return ":".join(units)


def format_signed_time(seconds: int | None, minimum: TimeUnit | str = TimeUnit.SECONDS) -> str:
    """Format a gap with an explicit sign: 65 → "+1:05", -5 → "-5", 0 → "0"."""
    if seconds is None:
        return ""
    if seconds > 0:
        return "+" + format_time(seconds, minimum)
    if seconds < 0:
        return "-" + format_time(-seconds, minimum)
    return format_time(0, minimum)
