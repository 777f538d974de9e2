"""Declarative report configuration models.

A report configuration lists sections and, per section, the fields to pull
out of an assessment record. Configurations are external, immutable input.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from api.exceptions import ConfigValidationError


class ClassificationRange(BaseModel):
    """Inclusive numeric interval mapped to a label and color."""

    model_config = ConfigDict(frozen=True)

    min: float | None = None
    max: float | None = None
    label: str
    color: str


class ClassificationSpec(BaseModel):
    """Ordered classification ranges; first match wins."""

    model_config = ConfigDict(frozen=True)

    ranges: tuple[ClassificationRange, ...] = ()


class FieldSpec(BaseModel):
    """A single labelled value to extract from a record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    label: str
    path: str = Field(..., alias="jsonPath")
    format: str = "string"
    unit: str | None = None
    classification: ClassificationSpec | None = None


class SectionSpec(BaseModel):
    """A titled group of fields. Disabled sections are skipped."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    enabled: bool = True
    fields: tuple[FieldSpec, ...] = ()


class ReportConfig(BaseModel):
    """Report configuration for one assessment type."""

    model_config = ConfigDict(frozen=True)

    name: str
    sections: tuple[SectionSpec, ...]

    @property
    def total_fields(self) -> int:
        """Number of fields across all sections, enabled or not."""
        return sum(len(section.fields) for section in self.sections)

    def to_dict(self) -> dict:
        """Convert to dictionary using the external key names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def load_report_config(data: ReportConfig | Mapping[str, Any]) -> ReportConfig:
    """
    Validate raw configuration data into a ReportConfig.

    Raises:
        ConfigValidationError: If the configuration is malformed
    """
    if isinstance(data, ReportConfig):
        return data
    if not isinstance(data, Mapping):
        raise ConfigValidationError(
            f"Report configuration must be an object, got {type(data).__name__}"
        )

    try:
        return ReportConfig.model_validate(dict(data))
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first.get("loc", ()))
        raise ConfigValidationError(
            f"Invalid report configuration: {first.get('msg', 'validation error')}",
            field=field or None,
        ) from e
