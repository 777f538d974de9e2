"""Report generation request and response schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from reporting.artifacts.store import Artifact
from reporting.pipeline import ConfigSummary, SessionSummary


class GenerateReportRequest(BaseModel):
    """Request body for report generation."""

    session_id: str = Field(..., min_length=1, description="Session to generate a report for")


class ArtifactRead(BaseModel):
    """A generated report artifact."""

    filename: str
    path: str
    created_at: datetime

    @classmethod
    def from_artifact(cls, artifact: Artifact) -> "ArtifactRead":
        return cls(filename=artifact.filename, path=artifact.path, created_at=artifact.created_at)


class SessionSummaryRead(BaseModel):
    """Session listing entry."""

    session_id: str
    assessment_id: str | None = None
    assessment_name: str
    timestamp: Any = None
    accuracy: Any = None
    gender: Any = None
    height: Any = None
    weight: Any = None

    @classmethod
    def from_summary(cls, summary: SessionSummary) -> "SessionSummaryRead":
        return cls(**summary.to_dict())


class SessionDetailRead(BaseModel):
    """A session record with its configuration."""

    session: dict[str, Any]
    config: dict[str, Any] | None = None
    config_available: bool


class ConfigSummaryRead(BaseModel):
    """Registered configuration overview."""

    assessment_id: str
    name: str
    sections_count: int
    total_fields: int

    @classmethod
    def from_summary(cls, summary: ConfigSummary) -> "ConfigSummaryRead":
        return cls(**summary.to_dict())


class ConfigDetailRead(BaseModel):
    """A single registered configuration."""

    assessment_id: str
    config: dict[str, Any]


class PreviewRead(BaseModel):
    """Dry-run assembly result for configuration testing."""

    session_id: str
    assessment_id: str | None = None
    data_keys: list[str] = Field(default_factory=list)
    configuration: ConfigSummaryRead
    document: dict[str, Any]
    unresolved_fields: int
