"""Report document contract and data structures.

Defines the renderer-agnostic intermediate representation produced by the
assembler. Field values are kept raw; formatting and classification are
computed on demand by the presentation layer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from reporting.presentation.classifier import Classification, classify
from reporting.presentation.formatter import format_value
from reporting.reports.config import ClassificationSpec


@dataclass(frozen=True)
class ExtractedField:
    """One extracted field with its presentation metadata."""

    label: str
    value: Any
    format: str
    unit: str | None = None
    classification: ClassificationSpec | None = None

    @property
    def resolved(self) -> bool:
        """Whether the path produced a value."""
        return self.value is not None

    def display(self) -> str:
        """Formatted display text for the raw value."""
        return format_value(self.value, self.format, self.unit)

    def classify(self) -> Classification | None:
        """Classification bucket for the raw value, if any."""
        return classify(self.value, self.classification)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "label": self.label,
            "value": self.value,
            "format": self.format,
            "unit": self.unit,
            "classification": (
                self.classification.model_dump(mode="json") if self.classification else None
            ),
        }


@dataclass(frozen=True)
class ReportSection:
    """An enabled section of the assembled report."""

    id: str
    title: str
    fields: tuple[ExtractedField, ...] = ()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "fields": [f.to_dict() for f in self.fields],
        }


@dataclass(frozen=True)
class ReportDocument:
    """Fully assembled report, the sole input to rendering."""

    assessment_name: str
    session_id: str | None
    generated_at: datetime
    sections: tuple[ReportSection, ...] = field(default_factory=tuple)

    @property
    def field_count(self) -> int:
        return sum(len(s.fields) for s in self.sections)

    @property
    def unresolved_count(self) -> int:
        return sum(1 for s in self.sections for f in s.fields if not f.resolved)

    def section_ids(self) -> list[str]:
        return [s.id for s in self.sections]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "assessmentName": self.assessment_name,
            "sessionId": self.session_id,
            "generatedAt": self.generated_at.isoformat(),
            "sections": [s.to_dict() for s in self.sections],
        }
