"""Filesystem helpers for fence-lint."""

from __future__ import annotations

import os
import stat
from collections.abc import Iterable
from fnmatch import fnmatch
from pathlib import Path, PurePath

from .config import LintConfig
from .constants import DEFAULT_MAX_FILE_SIZE
from .exceptions import DocumentReadError, DocumentTooLargeError
from .models import Document

MAX_FILE_SIZE_ENV_VAR = "FENCE_LINT_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return `FENCE_LINT_MAX_FILE_SIZE` when set, otherwise `default`.

    Raises:
        ValueError: If the variable is set but is not a positive integer.
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        raise ValueError(
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        ) from error
    if max_size <= 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}.")
    return max_size


def is_excluded(relative_path: PurePath, config: LintConfig) -> bool:
    """Check a path, relative to the search root, against the exclusion rules.

    A path is excluded when any component is hidden (unless hidden paths are
    enabled), when a pattern matches the whole POSIX path, or when a pattern
    matches any single component.

    Examples:
        is_excluded(PurePath("node_modules/pkg/README.md"), LintConfig())  # True
        is_excluded(PurePath(".github/README.md"), LintConfig())  # True
    """
    parts = relative_path.parts
    if not config.include_hidden and any(part.startswith(".") for part in parts):
        return True

    posix_path = relative_path.as_posix()
    for pattern in config.exclude:
        if fnmatch(posix_path, pattern):
            return True
        if any(fnmatch(part, pattern) for part in parts):
            return True
    return False


def has_markdown_extension(path: Path, config: LintConfig) -> bool:
    return path.suffix.lower() in config.extensions


def iter_markdown_files(root: Path, config: LintConfig) -> list[Path]:
    """Discover Markdown files below a directory.

    Symlinks are not followed. Excluded directories are pruned rather than
    walked.

    Args:
        root: Directory to search.
        config: Configuration providing extensions and exclusion rules.

    Returns:
        list[Path]: Matching files, sorted by path.

    Examples:
        iter_markdown_files(Path("docs"), LintConfig())
    """
    found = []
    for directory, dirnames, filenames in os.walk(root):
        current = Path(directory)
        relative_dir = current.relative_to(root)
        dirnames[:] = sorted(
            name for name in dirnames if not is_excluded(relative_dir / name, config)
        )
        for name in filenames:
            candidate = current / name
            if candidate.is_symlink() or not has_markdown_extension(candidate, config):
                continue
            if is_excluded(relative_dir / name, config):
                continue
            found.append(candidate)
    return sorted(found)


def collect_targets(paths: Iterable[str], config: LintConfig) -> list[Path]:
    """Expand user-supplied paths into the Markdown files to lint.

    Directories are searched recursively; files named explicitly are kept even
    when an exclusion pattern would have matched them. Duplicates are dropped
    and the first occurrence wins.

    Args:
        paths: Files or directories supplied by the user.
        config: Configuration providing extensions and exclusion rules.

    Returns:
        list[Path]: Files to lint, in discovery order.

    Raises:
        ValueError: If a path does not exist, or a file does not have a
            Markdown extension.

    Examples:
        collect_targets(["README.md", "docs"], LintConfig())
    """
    targets: list[Path] = []
    seen: set[Path] = set()

    for raw_path in paths:
        path = Path(raw_path).expanduser()
        if path.is_dir():
            candidates = iter_markdown_files(path, config)
        elif path.exists():
            if not has_markdown_extension(path, config):
                error_message = f"{path} is not a Markdown file.\n"
                error_message += f"Supported extensions are: {', '.join(config.extensions)}"
                raise ValueError(error_message)
            candidates = [path]
        else:
            raise ValueError(f"{path} does not exist.")

        for candidate in candidates:
            key = candidate.resolve()
            if key in seen:
                continue
            seen.add(key)
            targets.append(candidate)

    return targets


def _regular_file_size(filepath: Path) -> int:
    # lstat so a symlinked document is reported rather than followed
    try:
        stat_result = os.lstat(filepath)
    except OSError as error:
        raise DocumentReadError(filepath, str(error)) from error

    if stat.S_ISLNK(stat_result.st_mode):
        raise DocumentReadError(filepath, "symlinks are not supported")
    if not stat.S_ISREG(stat_result.st_mode):
        raise DocumentReadError(filepath, "not a regular file")
    return stat_result.st_size


def read_document(
    filepath: Path, max_file_size: int, display_path: str | None = None
) -> Document:
    """Read a Markdown file into a `Document`.

    Line terminators are passed through untouched so that `Document.from_text`
    does the splitting.

    Args:
        filepath: Path to the file.
        max_file_size: Maximum allowed size in bytes.
        display_path: Identifier used in findings; defaults to `filepath`.

    Raises:
        DocumentTooLargeError: If the file exceeds `max_file_size`.
        DocumentReadError: If the path is not a readable regular file, or the
            content is not valid UTF-8.
    """
    if _regular_file_size(filepath) > max_file_size:
        raise DocumentTooLargeError(filepath, max_file_size)

    try:
        with open(filepath, "r", encoding="UTF-8", newline="") as file:
            content = file.read()
    except UnicodeDecodeError as error:
        raise DocumentReadError(filepath, f"invalid UTF-8 sequence: {error}") from error
    except OSError as error:
        raise DocumentReadError(filepath, str(error)) from error

    return Document.from_text(display_path or str(filepath), content)


def relative_display_path(filepath: Path, base_dir: Path) -> str:
    """Render `filepath` relative to `base_dir` when it lies beneath it."""
    try:
        return filepath.resolve().relative_to(base_dir).as_posix()
    except (OSError, ValueError):
        return filepath.as_posix()
