"""Custom exceptions and error handling."""

from typing import Any

from fastapi import status


class ReportServiceError(Exception):
    """Base exception for the report service."""

    def __init__(
        self,
        message: str,
        code: str = "error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class NotFoundError(ReportServiceError):
    """Resource not found."""

    def __init__(self, resource: str, identifier: str | None = None, code: str = "not_found"):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} with id '{identifier}' not found"
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_404_NOT_FOUND,
        )


class SessionNotFoundError(NotFoundError):
    """No assessment record exists for the requested session."""

    def __init__(self, session_id: str):
        super().__init__("Session", session_id, code="session_not_found")
        self.session_id = session_id


class ConfigNotFoundError(NotFoundError):
    """The record's assessment type has no registered report configuration."""

    def __init__(self, assessment_id: str | None):
        super().__init__(
            "Report configuration",
            str(assessment_id) if assessment_id is not None else None,
            code="config_not_found",
        )
        self.assessment_id = assessment_id


class ValidationError(ReportServiceError):
    """Validation error."""

    def __init__(self, message: str, field: str | None = None, code: str = "validation_error"):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
        )


class ConfigValidationError(ValidationError):
    """A report configuration is malformed."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, field=field, code="config_invalid")


class ExternalServiceError(ReportServiceError):
    """External service error."""

    def __init__(self, service: str, message: str, code: str = "external_service_error"):
        super().__init__(
            message=f"{service}: {message}",
            code=code,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details={"service": service},
        )


class RenderError(ExternalServiceError):
    """The document renderer failed to produce an artifact."""

    def __init__(self, message: str, renderer: str = "renderer"):
        super().__init__(renderer, message, code="render_failed")


class ArtifactPersistError(ReportServiceError):
    """Writing an artifact to the artifact medium failed."""

    def __init__(self, filename: str, reason: str):
        super().__init__(
            message=f"Failed to persist artifact '{filename}': {reason}",
            code="artifact_persist_failed",
            details={"filename": filename},
        )
        self.filename = filename
