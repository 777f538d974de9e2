"""Pydantic schemas for API request/response validation."""

from api.schemas.report import (
    ArtifactRead,
    ConfigDetailRead,
    ConfigSummaryRead,
    GenerateReportRequest,
    PreviewRead,
    SessionDetailRead,
    SessionSummaryRead,
)
from api.schemas.responses import (
    ErrorDetail,
    ErrorResponse,
    SuccessResponse,
)

__all__ = [
    # Responses
    "ErrorDetail",
    "ErrorResponse",
    "SuccessResponse",
    # Reports
    "ArtifactRead",
    "ConfigDetailRead",
    "ConfigSummaryRead",
    "GenerateReportRequest",
    "PreviewRead",
    "SessionDetailRead",
    "SessionSummaryRead",
]
