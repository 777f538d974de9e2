"""Health check endpoints."""

import os
import time
from datetime import UTC, datetime

import structlog
from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.config import get_settings
from api.deps import ReportGeneratorDep
from reporting.pipeline import ReportGenerator

router = APIRouter(tags=["Health"])
logger = structlog.get_logger()

VERSION = "0.1.0"

# Track server start time for uptime calculation
_server_start_time = time.time()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status: healthy, degraded, unhealthy")
    timestamp: str = Field(..., description="ISO 8601 timestamp")
    version: str = Field(..., description="API version")
    uptime_seconds: int = Field(..., description="Server uptime in seconds")


class DependencyCheck(BaseModel):
    """Individual dependency check result."""

    status: str = Field(..., description="Status: healthy, unhealthy")
    latency_ms: float | None = Field(None, description="Check latency in milliseconds")
    error: str | None = Field(None, description="Error message if unhealthy")


class ReadyResponse(BaseModel):
    """Readiness check response with dependency status."""

    status: str = Field(..., description="Overall status")
    timestamp: str = Field(..., description="ISO 8601 timestamp")
    version: str = Field(..., description="API version")
    uptime_seconds: int = Field(..., description="Server uptime in seconds")
    checks: dict[str, DependencyCheck] = Field(..., description="Individual dependency checks")


class ApiInfoResponse(BaseModel):
    """API information response."""

    name: str
    version: str
    env: str
    docs: str | None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns healthy if the API is running. Does not check dependencies.
    Use /ready for full dependency checks.
    """
    uptime = int(time.time() - _server_start_time)
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat(),
        version=VERSION,
        uptime_seconds=uptime,
    )


def _check_sessions(generator: ReportGenerator) -> DependencyCheck:
    start = time.perf_counter()
    try:
        generator.sessions.list_all()
    except Exception as e:
        logger.warning("Session source check failed", error=str(e))
        return DependencyCheck(status="unhealthy", error=str(e))
    latency_ms = (time.perf_counter() - start) * 1000
    return DependencyCheck(status="healthy", latency_ms=round(latency_ms, 2))


def _check_artifacts() -> DependencyCheck:
    settings = get_settings()
    directory = settings.artifacts_dir
    start = time.perf_counter()
    try:
        directory.mkdir(parents=True, exist_ok=True)
        if not os.access(directory, os.W_OK):
            raise PermissionError(f"{directory} is not writable")
    except OSError as e:
        logger.warning("Artifact directory check failed", error=str(e))
        return DependencyCheck(status="unhealthy", error=str(e))
    latency_ms = (time.perf_counter() - start) * 1000
    return DependencyCheck(status="healthy", latency_ms=round(latency_ms, 2))


@router.get("/ready", response_model=ReadyResponse)
async def readiness_check(generator: ReportGeneratorDep) -> ReadyResponse:
    """
    Readiness check with dependency verification.

    Checks:
    - Session source is readable
    - Artifact directory is writable
    """
    checks = {
        "sessions": _check_sessions(generator),
        "artifacts": _check_artifacts(),
    }
    uptime = int(time.time() - _server_start_time)

    unhealthy_count = sum(1 for c in checks.values() if c.status == "unhealthy")
    if unhealthy_count == 0:
        overall_status = "healthy"
    elif unhealthy_count < len(checks):
        overall_status = "degraded"
    else:
        overall_status = "unhealthy"

    return ReadyResponse(
        status=overall_status,
        timestamp=datetime.now(UTC).isoformat(),
        version=VERSION,
        uptime_seconds=uptime,
        checks=checks,
    )


@router.get("/", response_model=ApiInfoResponse)
async def root() -> ApiInfoResponse:
    """Root endpoint with API information."""
    settings = get_settings()
    return ApiInfoResponse(
        name="Assessment Report Service API",
        version=VERSION,
        env=settings.env,
        docs="/docs" if settings.debug else None,
    )
