"""Pytest configuration and fixtures."""

import os
import tempfile
from collections.abc import AsyncGenerator, Iterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment before any app code runs
_TEST_ROOT = Path(tempfile.mkdtemp(prefix="assessment-reports-test-"))
os.environ["ENV"] = "test"
os.environ["RENDERER"] = "html"
os.environ["SESSIONS_PATH"] = str(_TEST_ROOT / "sessions.json")
os.environ["ARTIFACTS_DIR"] = str(_TEST_ROOT / "artifacts")

from tests.fixtures import SteppingClock, make_records  # noqa: E402


@pytest.fixture
def records() -> list[dict]:
    return make_records()


@pytest.fixture
def config_registry():
    from reporting.sources.registry import JsonConfigRegistry

    return JsonConfigRegistry.from_file()


@pytest.fixture
def generator(tmp_path: Path, records: list[dict], config_registry):
    """Report generator rendering HTML into a temporary artifact directory."""
    from reporting.artifacts.medium import LocalArtifactMedium
    from reporting.artifacts.store import ArtifactStore
    from reporting.pipeline import ReportGenerator
    from reporting.render.html import HtmlRenderer
    from reporting.sources.sessions import InMemorySessionRepository

    return ReportGenerator(
        sessions=InMemorySessionRepository(records),
        configs=config_registry,
        renderer=HtmlRenderer(),
        store=ArtifactStore(LocalArtifactMedium(tmp_path / "artifacts"), extension="html"),
        clock=SteppingClock(),
    )


@pytest.fixture
def app(generator) -> Iterator:
    """Application with the report generator dependency overridden."""
    from api.config import get_settings
    from api.deps import get_report_generator
    from api.main import create_app

    get_settings.cache_clear()
    application = create_app()
    application.dependency_overrides[get_report_generator] = lambda: generator
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
