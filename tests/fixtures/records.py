"""Deterministic assessment records and clocks for reporting tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta


def make_records() -> list[dict]:
    """Assessment records covering both bundled configurations."""
    return [
        {
            "session_id": "session_001",
            "assessment_id": "as_hr_02",
            "timestamp": 1735689600000,
            "accuracy": 80.456,
            "gender": "male",
            "height": 180,
            "weight": 75,
            "timeElapsed": 123.6,
            "vitalsMap": {
                "vitals": {
                    "heart_rate": 72,
                    "bp_sys": 120,
                    "bp_dia": 80,
                    "oxy_sat_prcnt": 98.2,
                },
                "health_risk_score": 15,
                "wellness_score": 80,
            },
            "bodyCompositionData": {"BMI": 22.5, "BFC": 18.25},
        },
        {
            "session_id": "session_002",
            "assessment_id": "as_card_01",
            "accuracy": 91,
            "vitalsMap": {"vitals": {"heart_rate": 64}},
            "exercises": [
                {"id": 101, "setList": [{"time": 30}]},
                {"id": 235, "setList": [{"time": 61.4}, {"time": 58}]},
            ],
        },
        {
            "session_id": "session_003",
            "assessment_id": "as_unknown",
        },
    ]


class SteppingClock:
    """Clock advancing a fixed step on every call."""

    def __init__(
        self,
        start: datetime | None = None,
        step: timedelta = timedelta(seconds=1),
    ):
        self.current = start or datetime(2025, 1, 1, 12, 0, tzinfo=UTC)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value
