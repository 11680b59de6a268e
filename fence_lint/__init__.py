"""
fence-lint: alignment checks for fenced code blocks in Markdown lists.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    fence-lint README.md docs/

Library Usage:
    from fence_lint import Document, validate

    document = Document.from_text("README.md", Path("README.md").read_text())
    for finding in validate(document):
        print(finding.line, finding.message)
"""

from .context import expected_column, list_marker_length, resolve_context
from .exceptions import DocumentReadError, DocumentTooLargeError, LintError
from .models import ContextKind, Document, FenceMarker, Finding, LintReport, ListMarkerContext
from .rules import find_fence_markers, validate, validate_documents, validate_text

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "validate",
    "validate_text",
    "validate_documents",
    "resolve_context",
    "expected_column",
    "list_marker_length",
    "find_fence_markers",
    # Data models
    "ContextKind",
    "Document",
    "FenceMarker",
    "Finding",
    "LintReport",
    "ListMarkerContext",
    # Exceptions
    "LintError",
    "DocumentReadError",
    "DocumentTooLargeError",
    # Version
    "__version__",
]
