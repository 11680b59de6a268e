"""Package-specific exception types.

Rule violations are reported as `Finding` values, never raised. The
exceptions below cover the layer that reads documents from disk.
"""

from __future__ import annotations

from pathlib import Path


class LintError(ValueError):
    """Base class for errors raised while preparing documents for linting."""


class DocumentReadError(LintError):
    """Raised when a document cannot be read or decoded.

    Args:
        path: Path of the offending document.
        reason: Human-readable description of the failure.
    """

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Error reading {path}: {reason}")


class DocumentTooLargeError(LintError):
    """Raised when a document exceeds the configured maximum size.

    Args:
        path: Path of the offending document.
        limit: Maximum allowed size in bytes.
    """

    def __init__(self, path: Path, limit: int):
        self.path = path
        self.limit = limit
        super().__init__(f"{path} exceeds the maximum allowed size of {limit} bytes.")
