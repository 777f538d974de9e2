"""Response envelopes shared by all endpoints."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorDetail(BaseModel):
    """Error detail in response."""

    code: str = Field(..., description="Machine-readable error code, e.g. session_not_found")
    message: str = Field(..., description="Human-readable error message")
    field: str | None = Field(None, description="Request field that failed validation")
    details: dict[str, Any] | None = Field(None, description="Additional error details")


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing request."""

    error: ErrorDetail


class SuccessResponse(BaseModel, Generic[T]):
    """Success envelope: payload plus optional metadata."""

    data: T
    meta: dict[str, Any] | None = None


# OpenAPI documentation for the error envelope on report endpoints
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse, "description": "Session, configuration or artifact not found"},
    422: {"model": ErrorResponse, "description": "Invalid request or report configuration"},
    500: {"model": ErrorResponse, "description": "Artifact could not be persisted"},
    502: {"model": ErrorResponse, "description": "Document renderer failed"},
}


def list_meta(items: list) -> dict[str, Any]:
    """Metadata for unpaginated list responses."""
    return {"total": len(items)}
