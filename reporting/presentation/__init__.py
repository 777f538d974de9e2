"""Presentation helpers applied at render time.

Use explicit imports:
    from reporting.presentation.formatter import format_value, FormatKind
    from reporting.presentation.classifier import classify, Classification
"""

__all__ = [
    "FormatKind",
    "format_value",
    "parse_number",
    "Classification",
    "classify",
]
