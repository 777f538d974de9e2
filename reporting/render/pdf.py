"""PDF rendering through a headless Chromium browser (Playwright)."""

import asyncio
from dataclasses import dataclass

import structlog
from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from api.exceptions import RenderError
from reporting.render.html import HtmlRenderer
from reporting.reports.contract import ReportDocument

logger = structlog.get_logger(__name__)


@dataclass
class PdfRendererConfig:
    """Configuration for the PDF renderer."""

    page_format: str = "A4"
    margin: str = "20px"
    print_background: bool = True
    timeout_seconds: float = 60.0

    # Chromium flags for containerized environments
    launch_args: tuple[str, ...] = (
        "--no-sandbox",
        "--disable-setuid-sandbox",
        "--disable-dev-shm-usage",
        "--disable-gpu",
    )


class PdfRenderer:
    """Renders report documents to PDF by printing their HTML rendition."""

    file_extension = "pdf"

    def __init__(
        self,
        config: PdfRendererConfig | None = None,
        html_renderer: HtmlRenderer | None = None,
    ):
        self.config = config or PdfRendererConfig()
        self.html_renderer = html_renderer or HtmlRenderer()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()

    async def __aenter__(self) -> "PdfRenderer":
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.stop()

    async def start(self) -> None:
        """Start the browser (shared across renders)."""
        async with self._lock:
            if self._browser is None:
                self._playwright = await async_playwright().start()
                self._browser = await self._playwright.chromium.launch(
                    headless=True,
                    args=list(self.config.launch_args),
                )
                logger.info("pdf_browser_started")

    async def stop(self) -> None:
        """Stop the browser."""
        async with self._lock:
            if self._browser:
                await self._browser.close()
                self._browser = None
            if self._playwright:
                await self._playwright.stop()
                self._playwright = None

    async def _print(self, html: str) -> bytes:
        if not self._browser:
            await self.start()

        page: Page | None = None
        try:
            page = await self._browser.new_page()  # type: ignore[union-attr]
            await page.set_content(html, wait_until="networkidle")
            return await page.pdf(
                format=self.config.page_format,
                print_background=self.config.print_background,
                margin={
                    "top": self.config.margin,
                    "right": self.config.margin,
                    "bottom": self.config.margin,
                    "left": self.config.margin,
                },
            )
        finally:
            if page:
                await page.close()

    async def render(self, document: ReportDocument) -> bytes:
        """
        Render a document to PDF bytes.

        Raises:
            RenderError: On template, browser or timeout failure
        """
        html = self.html_renderer.render_html(document)
        try:
            return await asyncio.wait_for(self._print(html), timeout=self.config.timeout_seconds)
        except TimeoutError as e:
            logger.error("pdf_render_timeout", session_id=document.session_id)
            raise RenderError(
                f"Timed out after {self.config.timeout_seconds}s", renderer="pdf"
            ) from e
        except PlaywrightError as e:
            logger.error("pdf_render_failed", session_id=document.session_id, error=str(e))
            raise RenderError(str(e), renderer="pdf") from e
