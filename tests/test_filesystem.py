from __future__ import annotations

import os
from pathlib import Path, PurePath

import pytest

from fence_lint.config import LintConfig
from fence_lint.exceptions import DocumentReadError, DocumentTooLargeError
from fence_lint.filesystem import (
    MAX_FILE_SIZE_ENV_VAR,
    collect_targets,
    get_max_file_size,
    is_excluded,
    iter_markdown_files,
    read_document,
    relative_display_path,
)


def _touch(path: Path, content: str = "# Title\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_get_max_file_size_uses_default(monkeypatch):
    monkeypatch.delenv(MAX_FILE_SIZE_ENV_VAR, raising=False)

    assert get_max_file_size(default=123) == 123


def test_get_max_file_size_reads_environment(monkeypatch):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "2048")

    assert get_max_file_size(default=123) == 2048


@pytest.mark.parametrize("value", ["abc", "0", "-1"])
def test_get_max_file_size_rejects_invalid_environment(monkeypatch, value: str):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, value)

    with pytest.raises(ValueError):
        get_max_file_size()


@pytest.mark.parametrize(
    ("path", "config", "expected"),
    [
        ("README.md", LintConfig(), False),
        ("node_modules/pkg/README.md", LintConfig(), True),
        (".github/README.md", LintConfig(), True),
        (".github/README.md", LintConfig(include_hidden=True), False),
        ("docs/generated/api.md", LintConfig(exclude=["docs/generated/*"]), True),
        ("docs/guide.md", LintConfig(exclude=["docs/generated/*"]), False),
        ("CHANGELOG.md", LintConfig(exclude=["CHANGE*"]), True),
    ],
)
def test_is_excluded(path: str, config: LintConfig, expected: bool):
    assert is_excluded(PurePath(path), config) is expected


def test_iter_markdown_files_discovers_and_prunes(tmp_path: Path):
    _touch(tmp_path / "README.md")
    _touch(tmp_path / "docs" / "guide.markdown")
    _touch(tmp_path / "docs" / "notes.txt")
    _touch(tmp_path / "node_modules" / "pkg" / "README.md")
    _touch(tmp_path / ".hidden" / "secret.md")

    found = iter_markdown_files(tmp_path, LintConfig())

    assert found == [tmp_path / "README.md", tmp_path / "docs" / "guide.markdown"]


def test_iter_markdown_files_matches_uppercase_suffix(tmp_path: Path):
    _touch(tmp_path / "NOTES.MD")

    assert iter_markdown_files(tmp_path, LintConfig()) == [tmp_path / "NOTES.MD"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="Symlink support is required")
def test_iter_markdown_files_skips_symlinks(tmp_path: Path):
    source = _touch(tmp_path / "source.md")
    try:
        os.symlink(source, tmp_path / "alias.md")
    except OSError as error:  # pragma: no cover - platform dependent
        pytest.skip(f"Unable to create symlink: {error}")

    assert iter_markdown_files(tmp_path, LintConfig()) == [source]


def test_collect_targets_expands_directories_and_deduplicates(tmp_path: Path):
    readme = _touch(tmp_path / "README.md")
    guide = _touch(tmp_path / "docs" / "guide.md")

    targets = collect_targets([str(readme), str(tmp_path)], LintConfig())

    assert targets == [readme, guide]


def test_collect_targets_keeps_explicitly_named_excluded_file(tmp_path: Path):
    vendored = _touch(tmp_path / "node_modules" / "README.md")

    assert collect_targets([str(vendored)], LintConfig()) == [vendored]


def test_collect_targets_rejects_non_markdown_file(tmp_path: Path):
    notes = _touch(tmp_path / "notes.txt")

    with pytest.raises(ValueError, match="not a Markdown file"):
        collect_targets([str(notes)], LintConfig())


def test_collect_targets_rejects_missing_path(tmp_path: Path):
    with pytest.raises(ValueError, match="does not exist"):
        collect_targets([str(tmp_path / "missing.md")], LintConfig())


def test_read_document_preserves_line_structure(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_bytes(b"- item\r\n\r\n  ```sh\r\n")

    document = read_document(target, 1024, "doc.md")

    assert document.path == "doc.md"
    assert document.lines == ("- item", "", "  ```sh", "")


def test_read_document_defaults_display_path(tmp_path: Path):
    target = _touch(tmp_path / "doc.md")

    assert read_document(target, 1024).path == str(target)


def test_read_document_rejects_large_file(tmp_path: Path):
    target = _touch(tmp_path / "big.md", "x" * 100)

    with pytest.raises(DocumentTooLargeError) as exc_info:
        read_document(target, 10)
    assert exc_info.value.limit == 10


def test_read_document_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "binary.md"
    target.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(DocumentReadError, match="invalid UTF-8"):
        read_document(target, 1024)


def test_read_document_rejects_missing_file(tmp_path: Path):
    with pytest.raises(DocumentReadError):
        read_document(tmp_path / "missing.md", 1024)


def test_relative_display_path(tmp_path: Path):
    target = _touch(tmp_path / "docs" / "guide.md")

    assert relative_display_path(target, tmp_path.resolve()) == "docs/guide.md"
    assert relative_display_path(target, tmp_path / "elsewhere") == target.as_posix()


def test_read_document_rejects_directory(tmp_path: Path):
    directory = tmp_path / "folder.md"
    directory.mkdir()

    with pytest.raises(DocumentReadError, match="not a regular file"):
        read_document(directory, 1024)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="Symlink support is required")
def test_read_document_rejects_symlink(tmp_path: Path):
    source = _touch(tmp_path / "source.md")
    link = tmp_path / "alias.md"
    try:
        os.symlink(source, link)
    except OSError as error:  # pragma: no cover - platform dependent
        pytest.skip(f"Unable to create symlink: {error}")

    with pytest.raises(DocumentReadError, match="symlinks are not supported"):
        read_document(link, 1024)
