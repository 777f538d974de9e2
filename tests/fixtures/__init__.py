"""Test fixtures for deterministic report generation."""

from tests.fixtures.records import SteppingClock, make_records

__all__ = [
    "SteppingClock",
    "make_records",
]
