"""Path extraction over JSON-like assessment records."""

from reporting.extraction.jsonpath import PathExtractor, extract, resolve

__all__ = ["PathExtractor", "extract", "resolve"]
