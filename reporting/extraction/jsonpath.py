"""Path expressions over JSON-like assessment records.

Supports dotted property paths rooted at ``$.``, numeric list indices
(``a.0`` or ``a[0]``) and exactly one array filter clause of the form
``name[?(@.key==literal)]`` followed by an optional continuation.

This is deliberately not a JSONPath implementation: the filter is matched by
a single fixed pattern and anything else falls through to plain traversal.
"""

import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

ROOT_PREFIX = "$."
FILTER_MARKER = "[?(@."

# <arrayPath>[?(@.<filterKey>==<filterValue>)]<remainingPath>
FILTER_PATTERN = re.compile(r"^(.+?)\[\?\(@\.(.+?)==(.+?)\)\](.*)$")

# name[0][1] -> name, [0, 1]
_INDEXED_SEGMENT = re.compile(r"^([^\[\]]*)((?:\[\d+\])+)$")
_INDEX = re.compile(r"\[(\d+)\]")

JSONValue = Any

_MISSING = object()


def _split_segments(path: str) -> list[str | int] | None:
    """Split a plain path into property names and list indices."""
    segments: list[str | int] = []
    for part in path.split("."):
        if not part:
            return None
        match = _INDEXED_SEGMENT.match(part)
        if match:
            name, indices = match.groups()
            if name:
                segments.append(name)
            segments.extend(int(i) for i in _INDEX.findall(indices))
        elif "[" in part or "]" in part:
            return None
        else:
            segments.append(part)
    return segments


def _step(node: JSONValue, segment: str | int) -> JSONValue:
    """Resolve one segment against a node, or return the missing marker."""
    if isinstance(node, Mapping):
        key = str(segment)
        return node[key] if key in node else _MISSING
    if isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
        if isinstance(segment, int):
            index = segment
        elif segment.isdigit():
            index = int(segment)
        else:
            return _MISSING
        return node[index] if index < len(node) else _MISSING
    return _MISSING


def resolve(node: JSONValue, path: str) -> JSONValue | None:
    """
    Resolve a plain dotted path (no filter clause) against a node.

    Returns None when any segment is missing or the node type does not
    support the lookup. Never raises.
    """
    if not path:
        return None

    segments = _split_segments(path)
    if segments is None:
        return None

    current = node
    for segment in segments:
        current = _step(current, segment)
        if current is _MISSING:
            return None
    return current


def parse_literal(raw: str) -> float | str:
    """Parse a filter literal: numeric when it parses as a number, else string."""
    text = raw.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1]
    try:
        number = float(text)
    except ValueError:
        return text
    return number if math.isfinite(number) else text


def _comparable(value: JSONValue) -> float | str | None:
    """Reduce a value to a primitive for loose comparison."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            return value
        return number if math.isfinite(number) else value
    return None


def loosely_equal(candidate: JSONValue, literal: float | str) -> bool:
    """Compare a record value against a filter literal with numeric coercion."""
    left = _comparable(candidate)
    right = _comparable(literal)
    if left is None or right is None:
        return False
    if isinstance(left, float) and isinstance(right, float):
        return left == right
    if isinstance(left, float) or isinstance(right, float):
        return False
    return left == right


def _extract_filtered(document: JSONValue, match: re.Match[str]) -> JSONValue | None:
    """Apply the single supported filter clause."""
    array_path, filter_key, filter_value, remaining = match.groups()

    items = resolve(document, array_path)
    if not isinstance(items, list):
        logger.debug("path_filter_target_not_list", array_path=array_path)
        return None

    literal = parse_literal(filter_value)
    selected = next(
        (item for item in items if loosely_equal(resolve(item, filter_key), literal)),
        None,
    )
    if selected is None:
        return None

    remaining = remaining[1:] if remaining.startswith(".") else remaining
    if remaining:
        return resolve(selected, remaining)
    return selected


def extract(document: JSONValue, path: str) -> JSONValue | None:
    """
    Extract a value from a document using a path expression.

    Args:
        document: JSON-like tree (mappings, lists, scalars)
        path: Path expression, e.g. ``$.exercises[?(@.id==235)].setList[0].time``

    Returns:
        The addressed value (composites returned as-is) or None when the path
        cannot be resolved. Failures are logged, never raised.
    """
    if not isinstance(path, str) or not path:
        return None

    relative = path[len(ROOT_PREFIX) :] if path.startswith(ROOT_PREFIX) else path
    if not relative:
        return None

    try:
        if FILTER_MARKER in relative:
            match = FILTER_PATTERN.match(relative)
            if match:
                value = _extract_filtered(document, match)
            else:
                value = resolve(document, relative)
        else:
            value = resolve(document, relative)
    except (TypeError, ValueError, IndexError, KeyError, RecursionError) as e:
        logger.debug("path_extraction_failed", path=path, error=str(e))
        return None

    if value is None:
        logger.debug("path_unresolved", path=path)
    return value


class PathExtractor:
    """Object wrapper around :func:`extract` for injection into assemblers."""

    def extract(self, document: JSONValue, path: str) -> JSONValue | None:
        return extract(document, path)
