"""Data models for fence-lint."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from .constants import FENCE_INDENT_MESSAGE, FENCE_INDENT_RULE, MAX_EXIT_STATUS


@dataclass(frozen=True)
class Document:
    """A Markdown document as an ordered sequence of lines.

    Attributes:
        path: Identifier used when reporting findings, usually a relative path.
        lines: Lines of the document without line terminators.
    """

    path: str
    lines: tuple[str, ...]

    @classmethod
    def from_text(cls, path: str, text: str) -> Document:
        """Build a document by splitting `text` on ``\\n`` or ``\\r\\n``.

        Examples:
            Document.from_text("README.md", "- item\\n  ```sh\\n")
        """
        *lines, last = text.split("\n")
        return cls(path=path, lines=(*(line.removesuffix("\r") for line in lines), last))


class ContextKind(Enum):
    """Outcome of the backward scan from a fence line.

    Attributes:
        NONE: No non-blank line precedes the fence.
        LIST_ITEM: The nearest non-blank line is a bullet or ordered list item.
        TEXT: The nearest non-blank line is anything else.
    """

    NONE = auto()
    LIST_ITEM = auto()
    TEXT = auto()


@dataclass(frozen=True)
class ListMarkerContext:
    """Context line resolved for a fence and the column it implies.

    Attributes:
        kind: What kind of line was found, if any.
        expected_column: Column nested content should start at.
        line_index: Zero-based index of the context line, or None for
            `ContextKind.NONE`.
    """

    kind: ContextKind
    expected_column: int = 0
    line_index: int | None = None


@dataclass(frozen=True)
class FenceMarker:
    """An opening fence that declares a language tag.

    Attributes:
        line_index: Zero-based index of the fence line.
        actual_column: Length of the fence line's leading whitespace.
        language: Language tag following the backticks.
    """

    line_index: int
    actual_column: int
    language: str

    @property
    def line_number(self) -> int:
        return self.line_index + 1


@dataclass(frozen=True, order=True)
class Finding:
    """A misaligned fenced code block.

    Attributes:
        document: Identifier of the document containing the fence.
        line: One-based line number of the fence.
        message: Explanation of the violation.
        rule: Identifier of the rule that produced the finding.
        actual_column: Indentation of the fence.
        expected_column: Indentation derived from the preceding context line.
    """

    document: str
    line: int
    message: str = FENCE_INDENT_MESSAGE
    rule: str = FENCE_INDENT_RULE
    actual_column: int = field(default=0, compare=False)
    expected_column: int = field(default=0, compare=False)


@dataclass
class LintReport:
    """Aggregated findings across all linted documents.

    Attributes:
        findings: Findings in the order documents were added.
        documents_checked: Number of documents validated.
        external_violations: Violations counted by other checkers run alongside
            this one; they only contribute to `total`.
    """

    findings: list[Finding] = field(default_factory=list)
    documents_checked: int = 0
    external_violations: int = 0

    def add(self, findings: list[Finding]) -> None:
        """Record the findings of one validated document."""
        self.documents_checked += 1
        self.findings.extend(findings)

    @property
    def total(self) -> int:
        return len(self.findings) + self.external_violations

    @property
    def exit_code(self) -> int:
        """Process exit status: 0 when clean, otherwise the capped total."""
        return min(self.total, MAX_EXIT_STATUS)
