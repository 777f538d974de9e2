"""Document renderers.

Use explicit imports (the PDF renderer requires Playwright browsers):
    from reporting.render.html import HtmlRenderer, DocumentRenderer
    from reporting.render.pdf import PdfRenderer, PdfRendererConfig
"""

__all__ = [
    "DocumentRenderer",
    "HtmlRenderer",
    "PdfRenderer",
    "PdfRendererConfig",
]
