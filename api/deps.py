"""FastAPI dependencies for dependency injection."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from api.config import Settings, get_settings
from reporting.artifacts.medium import LocalArtifactMedium
from reporting.artifacts.store import ArtifactStore
from reporting.pipeline import ReportGenerator
from reporting.render.html import DocumentRenderer, HtmlRenderer
from reporting.sources.registry import JsonConfigRegistry
from reporting.sources.sessions import JsonFileSessionRepository

__all__ = ["SettingsDep", "ReportGeneratorDep", "get_report_generator"]


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]


def build_renderer(settings: Settings) -> DocumentRenderer:
    """Create the configured document renderer."""
    if settings.renderer == "html":
        return HtmlRenderer()

    # Playwright is only imported when PDF output is configured
    from reporting.render.pdf import PdfRenderer, PdfRendererConfig

    return PdfRenderer(
        PdfRendererConfig(
            page_format=settings.pdf_page_format,
            timeout_seconds=settings.render_timeout_seconds,
        )
    )


@lru_cache
def get_report_generator() -> ReportGenerator:
    """Get the process-wide report generator built from settings."""
    settings = get_settings()
    renderer = build_renderer(settings)
    return ReportGenerator(
        sessions=JsonFileSessionRepository(settings.sessions_path),
        configs=JsonConfigRegistry.from_file(settings.report_configs_path),
        renderer=renderer,
        store=ArtifactStore(
            LocalArtifactMedium(settings.artifacts_dir),
            extension=renderer.file_extension,
        ),
    )


async def close_report_generator() -> None:
    """Release renderer resources held by the cached generator."""
    if get_report_generator.cache_info().currsize:
        stop = getattr(get_report_generator().renderer, "stop", None)
        if stop is not None:
            await stop()
    get_report_generator.cache_clear()


ReportGeneratorDep = Annotated[ReportGenerator, Depends(get_report_generator)]
