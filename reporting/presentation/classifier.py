"""Range classification of numeric report values."""

import math
from dataclasses import dataclass
from typing import Any

from reporting.presentation.formatter import parse_number
from reporting.reports.config import ClassificationSpec


@dataclass(frozen=True)
class Classification:
    """Label and color of the range a value fell into."""

    label: str
    color: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"label": self.label, "color": self.color}


def classify(value: Any, spec: ClassificationSpec | None) -> Classification | None:
    """
    Map a numeric value to the first matching range.

    Ranges are checked in declaration order with inclusive bounds; a missing
    min is -inf and a missing max is +inf. Overlapping ranges resolve to the
    first declared match, so a value on a shared boundary takes the earlier
    range.
    """
    if spec is None:
        return None

    number = parse_number(value)
    if number is None:
        return None

    for bucket in spec.ranges:
        low = -math.inf if bucket.min is None else bucket.min
        high = math.inf if bucket.max is None else bucket.max
        if low <= number <= high:
            return Classification(label=bucket.label, color=bucket.color)

    return None
