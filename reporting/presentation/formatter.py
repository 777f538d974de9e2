"""Value formatting for report fields.

Formatting is applied at render time, not during assembly, so the same
assembled document can be rendered with different formats.
"""

import math
from collections.abc import Mapping
from enum import Enum
from typing import Any

from api.config import NOT_AVAILABLE


class FormatKind(str, Enum):
    """Display formats a report field can request."""

    PERCENTAGE = "percentage"
    DECIMAL = "decimal"
    NUMBER = "number"
    TIME = "time"
    STRING = "string"


# Decimal places for fixed-point kinds
_FIXED_PLACES = {
    FormatKind.PERCENTAGE: 1,
    FormatKind.DECIMAL: 2,
}

# Kinds rounded to the nearest integer
_INTEGER_KINDS = {FormatKind.NUMBER, FormatKind.TIME}


def parse_number(value: Any) -> float | None:
    """
    Parse a raw value as a finite float.

    Booleans, composites and unparsable or non-finite values return None.
    """
    if value is None or isinstance(value, bool):
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


def round_half_up(number: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(number + 0.5)


def _coerce_kind(kind: str | FormatKind | None) -> FormatKind:
    if isinstance(kind, FormatKind):
        return kind
    try:
        return FormatKind(kind)
    except ValueError:
        return FormatKind.STRING


def _as_text(value: Any) -> str | None:
    """Pass-through rendering for the string kind."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return str(int(value)) if value.is_integer() else str(value)
    if isinstance(value, (Mapping, list, tuple)):
        return None
    return str(value)


def format_value(value: Any, kind: str | FormatKind | None = None, unit: str | None = None) -> str:
    """
    Convert a raw extracted value into display text.

    Args:
        value: Raw value returned by path extraction
        kind: Format kind (percentage, decimal, number, time, string)
        unit: Optional unit appended after a single space

    Returns:
        Display string. Missing or unformattable values yield "N/A"
        regardless of kind and unit.
    """
    if value is None or value == "":
        return NOT_AVAILABLE

    fmt = _coerce_kind(kind)

    if fmt == FormatKind.STRING:
        text = _as_text(value)
    else:
        number = parse_number(value)
        if number is None:
            text = None
        elif fmt in _INTEGER_KINDS:
            text = str(round_half_up(number))
        else:
            text = f"{number:.{_FIXED_PLACES[fmt]}f}"

    if text is None:
        return NOT_AVAILABLE

    return f"{text} {unit}" if unit else text
