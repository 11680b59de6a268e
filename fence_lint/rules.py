"""Fenced code block indentation rule."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .constants import FENCE_INDENT_MESSAGE, FENCE_INDENT_RULE, FENCE_SEQUENCE
from .context import expected_column, leading_whitespace_length
from .models import Document, FenceMarker, Finding, LintReport


def match_fence_open(line: str, line_index: int) -> FenceMarker | None:
    """Detect an opening fence that declares a language tag.

    After optional leading whitespace the line must start with exactly three
    backticks, immediately followed by the tag. Bare fences (```` ``` ````),
    fences followed by whitespace, and runs of four or more backticks do not
    match.

    Args:
        line: Line to inspect.
        line_index: Zero-based index of the line within its document.

    Returns:
        FenceMarker | None: The detected fence, or None when the line does not
            open a tagged fence.

    Examples:
        match_fence_open("  ```python", 4)  # FenceMarker(4, 2, "python")
        match_fence_open("``` python", 0)  # None
    """
    indent = leading_whitespace_length(line)
    if not line.startswith(FENCE_SEQUENCE, indent):
        return None

    tag_start = indent + len(FENCE_SEQUENCE)
    if tag_start == len(line):
        return None
    first = line[tag_start]
    if first.isspace() or first == FENCE_SEQUENCE[0]:
        return None

    tag_end = tag_start
    while tag_end < len(line) and not line[tag_end].isspace():
        tag_end += 1

    return FenceMarker(line_index=line_index, actual_column=indent, language=line[tag_start:tag_end])


def find_fence_markers(lines: Sequence[str]) -> list[FenceMarker]:
    """Return every tagged opening fence in `lines`, in line order."""
    markers = []
    for index, line in enumerate(lines):
        marker = match_fence_open(line, index)
        if marker is not None:
            markers.append(marker)
    return markers


def check_fence_indent(lines: Sequence[str], marker: FenceMarker) -> bool:
    """Tell whether a fence is acceptably indented.

    Top-level fences (no indentation) are always accepted. Indented fences
    must sit exactly at the column derived from the nearest non-blank line
    above them.
    """
    if marker.actual_column == 0:
        return True
    return marker.actual_column == expected_column(lines, marker.line_index)


def validate(document: Document) -> list[Finding]:
    """Check every tagged fence in a document against its list context.

    Args:
        document: Document to validate.

    Returns:
        list[Finding]: One finding per misaligned fence, in ascending line
            order. Empty when the document has no tagged fences or all of them
            are aligned.

    Examples:
        validate(Document.from_text("doc.md", "- item\\n    ```sh\\n```"))
    """
    findings = []
    for marker in find_fence_markers(document.lines):
        if marker.actual_column == 0:
            continue
        expected = expected_column(document.lines, marker.line_index)
        if marker.actual_column == expected:
            continue
        findings.append(
            Finding(
                document=document.path,
                line=marker.line_number,
                message=FENCE_INDENT_MESSAGE,
                rule=FENCE_INDENT_RULE,
                actual_column=marker.actual_column,
                expected_column=expected,
            )
        )
    return findings


def validate_text(text: str, path: str = "<string>") -> list[Finding]:
    """Validate raw Markdown text; see `validate`."""
    return validate(Document.from_text(path, text))


def validate_documents(
    documents: Iterable[Document], external_violations: int = 0
) -> LintReport:
    """Validate documents independently and aggregate their findings.

    Args:
        documents: Documents to validate, in reporting order.
        external_violations: Violations already counted by other checkers.

    Returns:
        LintReport: Findings of every document and the combined total.
    """
    report = LintReport(external_violations=external_violations)
    for document in documents:
        report.add(validate(document))
    return report
