"""Assessment report service application."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from api.config import get_settings
from api.deps import close_report_generator
from api.exceptions import ReportServiceError
from api.logging import setup_logging
from api.middleware import LoggingMiddleware, RequestIDMiddleware
from api.routers import health, v1
from api.routers.health import VERSION

setup_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log service start and release the renderer's browser on shutdown."""
    settings = get_settings()
    logger.info(
        "service_started",
        env=settings.env,
        renderer=settings.renderer,
        artifacts_dir=str(settings.artifacts_dir),
        version=VERSION,
    )
    yield
    await close_report_generator()
    logger.info("service_stopped")


def create_app() -> FastAPI:
    """Build the report service: middleware, error envelope and routers."""
    settings = get_settings()
    show_docs = settings.debug

    app = FastAPI(
        title="Assessment Report Service",
        description="Configuration-driven assessment report generation",
        version=VERSION,
        docs_url="/docs" if show_docs else None,
        redoc_url="/redoc" if show_docs else None,
        openapi_url="/openapi.json" if show_docs else None,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    # Request ids must exist before the access log line is written
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router, prefix="/api")
    app.include_router(v1.router, prefix="/v1")
    return app


def error_response(status_code: int, code: str, message: str, **extra: Any) -> ORJSONResponse:
    """Render the service's error envelope."""
    body = {"code": code, "message": message}
    body.update({key: value for key, value in extra.items() if value is not None})
    return ORJSONResponse(status_code=status_code, content={"error": body})


def register_exception_handlers(app: FastAPI) -> None:
    """Map service, validation and unexpected errors onto the error envelope."""

    @app.exception_handler(ReportServiceError)
    async def handle_service_error(request: Request, exc: ReportServiceError) -> ORJSONResponse:
        logger.warning(
            "request_failed",
            error_code=exc.code,
            message=exc.message,
            path=request.url.path,
        )
        return error_response(exc.status_code, exc.code, exc.message, details=exc.details or None)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        # loc[0] is the request part (body, query, path)
        field = ".".join(str(part) for part in first.get("loc", [])[1:])

        logger.warning("request_invalid", path=request.url.path, field=field or None)
        return ORJSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": {
                    "code": "validation_error",
                    "message": first.get("msg", "Validation error"),
                    "field": field or None,
                    "details": {"errors": jsonable_errors(errors)},
                }
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> ORJSONResponse:
        logger.error(
            "request_crashed",
            exc_info=exc,
            method=request.method,
            path=request.url.path,
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_error",
            "An unexpected error occurred",
        )


def jsonable_errors(errors: list) -> list[dict]:
    """Keep only the serializable keys of pydantic validation errors."""
    return [{k: v for k, v in err.items() if k in ("type", "loc", "msg", "input")} for err in errors]


app = create_app()
