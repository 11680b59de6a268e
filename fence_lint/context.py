"""Resolve the alignment context of a line from the lines above it."""

from __future__ import annotations

from collections.abc import Sequence

from .constants import BULLET_MARKERS, ORDERED_MARKER_SUFFIX
from .models import ContextKind, ListMarkerContext


def _skip_whitespace(line: str, start: int) -> int:
    position = start
    while position < len(line) and line[position].isspace():
        position += 1
    return position


def leading_whitespace_length(line: str) -> int:
    """Count the whitespace characters at the start of `line`.

    Tabs count as a single character; no tab expansion is applied.

    Args:
        line: Line to measure.

    Returns:
        int: Number of leading whitespace characters.

    Examples:
        leading_whitespace_length("  - item")  # 2
        leading_whitespace_length("\\tcode")  # 1
    """
    return _skip_whitespace(line, 0)


def list_marker_length(line: str) -> int | None:
    """Measure the list-item prefix of a line.

    The prefix is a whitespace run, then a single ``*`` or ``-`` or a run of
    decimal digits followed by ``.``, then a (possibly empty) whitespace run.
    Nothing is required after the marker, so ``"-"`` and ``"-item"`` both
    qualify with a prefix of one character.

    Args:
        line: Line to inspect.

    Returns:
        int | None: Length of the whole prefix, or None when the line is not a
            list item.

    Examples:
        list_marker_length("- item")  # 2
        list_marker_length("  42. item")  # 6
        list_marker_length("plain text")  # None
    """
    position = leading_whitespace_length(line)
    if position == len(line):
        return None

    if line[position] in BULLET_MARKERS:
        position += 1
    else:
        digits_end = position
        while digits_end < len(line) and line[digits_end] in "0123456789":
            digits_end += 1
        if digits_end == position or not line.startswith(ORDERED_MARKER_SUFFIX, digits_end):
            return None
        position = digits_end + len(ORDERED_MARKER_SUFFIX)

    return _skip_whitespace(line, position)


def resolve_context(lines: Sequence[str], fence_index: int) -> ListMarkerContext:
    """Find the nearest non-blank line above `fence_index` and its column.

    Only lines strictly before `fence_index` are examined. Empty lines are
    skipped; a line containing only whitespace is not empty and is treated as
    plain text. The first non-empty line decides the result and the scan stops
    there.

    Args:
        lines: Lines of a single document.
        fence_index: Zero-based index of the line whose context is wanted.

    Returns:
        ListMarkerContext: The resolved context. Its expected column is the
            list-marker prefix length for list items, the leading whitespace
            length for other lines, and 0 when nothing precedes the fence.

    Raises:
        IndexError: If `fence_index` is outside ``0..len(lines)``.

    Examples:
        resolve_context(["- item", "", "  ```sh"], 2).expected_column  # 2
    """
    if not 0 <= fence_index <= len(lines):
        raise IndexError(f"fence index {fence_index} out of range for {len(lines)} lines")

    for index in range(fence_index - 1, -1, -1):
        line = lines[index]
        if not line:
            continue

        marker_length = list_marker_length(line)
        if marker_length is not None:
            return ListMarkerContext(ContextKind.LIST_ITEM, marker_length, index)
        return ListMarkerContext(ContextKind.TEXT, leading_whitespace_length(line), index)

    return ListMarkerContext(ContextKind.NONE)


def expected_column(lines: Sequence[str], fence_index: int) -> int:
    """Return the column content at `fence_index` should be aligned to."""
    return resolve_context(lines, fence_index).expected_column
