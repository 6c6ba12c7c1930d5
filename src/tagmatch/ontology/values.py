"""Parsing helpers for tag values.

Tag values travel in their wire shape (strings, ``{lower, upper}`` and
``{start, end}`` mappings, lists of options). These helpers turn them into
comparable Python values. Every parser returns None on malformed input
instead of raising, so a bad value only ever disables the tag it belongs to.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

_NUMBER_RE = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")


def parse_number(value: Any) -> float | None:
    """Parse a finite number from a numeric string or int/float.

    Args:
        value: Candidate value. Booleans are rejected.

    Returns:
        The number as a float, or None if missing, malformed or not finite.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def extract_number(text: str) -> float | None:
    """Find the first bare number in free text.

    Example:
        extract_number("paid 15 dollars")  # 15.0
        extract_number("no digits here")   # None
    """
    if not isinstance(text, str):
        return None
    found = _NUMBER_RE.search(text)
    if found is None:
        return None
    return parse_number(found.group(0))


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Timestamps without an offset are taken as UTC.

    Args:
        value: ISO-8601 string such as "2024-01-15" or "2024-01-15T10:00:00Z".

    Returns:
        Aware datetime, or None if the value does not parse.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        moment = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def compile_pattern(value: Any) -> re.Pattern[str] | None:
    """Compile a case-insensitive pattern, or None if it is not a valid regex."""
    if not isinstance(value, str):
        return None
    try:
        return re.compile(value, re.IGNORECASE)
    except re.error:
        return None


def as_text(value: Any) -> str | None:
    """Render a scalar tag value as text for containment checks."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def flatten_value(value: Any) -> list[str]:
    """Collect the searchable strings held by a tag value.

    Example:
        flatten_value({"lower": "10", "upper": "20"})  # ["10", "20"]
        flatten_value(["Software", "Service"])          # ["Software", "Service"]
    """
    if isinstance(value, Mapping):
        parts = value.values()
    elif isinstance(value, (list, tuple)):
        parts = value
    else:
        parts = [value]

    flattened: list[str] = []
    for part in parts:
        text = as_text(part)
        if text:
            flattened.append(text)
    return flattened


@dataclass(frozen=True)
class NumberRange:
    """Closed numeric interval parsed from a ``{lower, upper}`` value.

    Bounds are taken literally: an inverted range (lower > upper) contains
    no number.
    """

    lower: float
    upper: float

    @classmethod
    def parse(cls, value: Any) -> "NumberRange | None":
        """Parse a ``{lower, upper}`` mapping; None if either bound is malformed."""
        if not isinstance(value, Mapping):
            return None
        lower = parse_number(value.get("lower"))
        upper = parse_number(value.get("upper"))
        if lower is None or upper is None:
            return None
        return cls(lower, upper)

    def contains(self, number: float) -> bool:
        return self.lower <= number <= self.upper


@dataclass(frozen=True)
class TimeRange:
    """Closed time interval parsed from a ``{start, end}`` value."""

    start: datetime
    end: datetime

    @classmethod
    def parse(cls, value: Any) -> "TimeRange | None":
        """Parse a ``{start, end}`` mapping; None if either bound is malformed."""
        if not isinstance(value, Mapping):
            return None
        start = parse_timestamp(value.get("start"))
        end = parse_timestamp(value.get("end"))
        if start is None or end is None:
            return None
        return cls(start, end)

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end
