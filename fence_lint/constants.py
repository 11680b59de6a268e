"""Constants used across the fence-lint package."""

from __future__ import annotations

FENCE_INDENT_RULE = "fence-indent"
FENCE_INDENT_MESSAGE = (
    "a fenced code block following a list item must be indented to the first "
    "non-whitespace character of the list item"
)

# Fence opening recognised by the rule: exactly three backticks, then a tag
FENCE_SEQUENCE = "```"
BULLET_MARKERS = ("*", "-")
ORDERED_MARKER_SUFFIX = "."

# Discovery and reading defaults
MARKDOWN_EXTENSIONS = (".md", ".markdown")
DEFAULT_EXCLUDES = ("node_modules",)
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

# Exit statuses wrap modulo 256 on POSIX
MAX_EXIT_STATUS = 255
