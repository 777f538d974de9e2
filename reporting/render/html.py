"""HTML rendering of assembled report documents using Jinja2 templates."""

from datetime import datetime
from pathlib import Path
from typing import Protocol

import structlog
from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from api.config import NOT_AVAILABLE
from api.exceptions import RenderError
from reporting.presentation.classifier import classify
from reporting.presentation.formatter import format_value
from reporting.reports.contract import ReportDocument

logger = structlog.get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = "assessment_report.html"


class DocumentRenderer(Protocol):
    """Turns an assembled report document into artifact bytes."""

    file_extension: str

    async def render(self, document: ReportDocument) -> bytes: ...


def format_date(timestamp: datetime | str | None) -> str:
    """Format a timestamp for display, e.g. 'March 05, 2025 at 02:30 PM'."""
    if not timestamp:
        return NOT_AVAILABLE
    if isinstance(timestamp, str):
        try:
            timestamp = datetime.fromisoformat(timestamp)
        except ValueError:
            return NOT_AVAILABLE
    return timestamp.strftime("%B %d, %Y at %I:%M %p")


def create_environment(templates_dir: Path | str = TEMPLATES_DIR) -> Environment:
    """Create a Jinja2 environment with the presentation filters registered."""
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["format_value"] = format_value
    env.filters["classify"] = classify
    env.filters["format_date"] = format_date
    return env


class HtmlRenderer:
    """Renders report documents to standalone HTML."""

    file_extension = "html"

    def __init__(
        self,
        templates_dir: Path | str = TEMPLATES_DIR,
        template_name: str = DEFAULT_TEMPLATE,
    ):
        self.env = create_environment(templates_dir)
        self.template_name = template_name

    def render_html(self, document: ReportDocument) -> str:
        """
        Render a document to an HTML string.

        Raises:
            RenderError: If the template is missing or fails to render
        """
        try:
            template = self.env.get_template(self.template_name)
            return template.render(report=document)
        except TemplateError as e:
            logger.error("html_render_failed", template=self.template_name, error=str(e))
            raise RenderError(str(e), renderer="html") from e

    async def render(self, document: ReportDocument) -> bytes:
        return self.render_html(document).encode("utf-8")
