"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_EXCLUDES, DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSIONS


@dataclass
class LintConfig:
    """Configuration for discovering and reading Markdown documents.

    The fence rule itself takes no options; alignment is always derived from
    the line preceding a fence.

    Attributes:
        exclude: Glob patterns for paths to skip during discovery. Patterns are
            matched against the path relative to the search root and against
            each of its components.
        extensions: File suffixes treated as Markdown.
        include_hidden: Whether to descend into dot-files and dot-directories.
        max_file_size: Maximum file size in bytes that will be read.

    Examples:
        LintConfig(exclude=["vendor", "docs/generated/*"], include_hidden=True)
    """

    exclude: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDES))
    extensions: list[str] = field(default_factory=lambda: list(MARKDOWN_EXTENSIONS))
    include_hidden: bool = False
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


_MISSING = object()

CONFIG_SOURCES = (
    ("pyproject.toml", (("tool", "fence-lint"),)),
    (".fence-lint.toml", (("fence-lint",), ("tool", "fence-lint"))),
)


def load_config(search_path: Path) -> LintConfig:
    """Return the settings of the closest directory that declares any.

    Each directory from `search_path` upwards is checked for `pyproject.toml`,
    then `.fence-lint.toml`. The first file holding a fence-lint table wins,
    even an empty one; files that are not valid TOML are ignored.

    Raises:
        ConfigError: If the table is not a mapping or has unknown keys.
    """
    for directory in (search_path.resolve(), *search_path.resolve().parents):
        for filename, table_paths in CONFIG_SOURCES:
            located = _find_table(directory / filename, table_paths)
            if located is not None:
                return _config_from_table(*located)
    return LintConfig()


def _find_table(
    config_file: Path, table_paths: tuple[tuple[str, ...], ...]
) -> tuple[object, str, Path] | None:
    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        table: object = data
        for key in table_path:
            table = table.get(key, _MISSING) if isinstance(table, dict) else _MISSING
        if table is not _MISSING:
            return table, ".".join(table_path), config_file
    return None


def _config_from_table(table: object, table_name: str, config_file: Path) -> LintConfig:
    if not isinstance(table, dict):
        raise ConfigError(f"Invalid `[{table_name}]` settings in {config_file}")
    try:
        return LintConfig(**table)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_name}]` settings in {config_file}") from error


def normalize_config(config: LintConfig) -> LintConfig:
    """Lower-case extensions and give each a leading dot."""
    if not isinstance(config.extensions, list):
        return config
    extensions = [
        extension.lower() if extension.startswith(".") else f".{extension.lower()}"
        for extension in config.extensions
        if isinstance(extension, str) and extension
    ]
    if len(extensions) != len(config.extensions):
        return config
    return replace(config, extensions=extensions)


def validate_config(config: LintConfig) -> None:
    """Validate a `LintConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If list fields are not lists of non-empty strings, no
            extension is configured, `include_hidden` is not a boolean, or
            `max_file_size` is not a positive integer.

    Examples:
        validate_config(LintConfig(max_file_size=1024))
    """
    _ensure_string_list("exclude", config.exclude)
    _ensure_string_list("extensions", config.extensions)
    if not config.extensions:
        raise ConfigError("`extensions` must not be empty")
    if not isinstance(config.include_hidden, bool):
        raise ConfigError("`include_hidden` must be a boolean")

    value = config.max_file_size
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError("`max_file_size` must be an integer")
    if value <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: LintConfig, **overrides: object) -> LintConfig:
    """Apply override values to a `LintConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored. ``extra_exclude`` extends `exclude` instead of
            replacing it; a malformed configured `exclude` is left for
            `validate_config` to reject.

    Returns:
        LintConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `LintConfig`.

    Examples:
        updated = apply_overrides(config, include_hidden=True, extra_exclude=["build"])
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    extra_exclude = changes.pop("extra_exclude", None)
    if extra_exclude and isinstance(config.exclude, list):
        changes["exclude"] = [*config.exclude, *extra_exclude]
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> LintConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        LintConfig: Validated configuration ready for discovery.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), extra_exclude=["vendor"])
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_string_list(key: str, value: object) -> None:
    if not isinstance(value, list) or not all(isinstance(item, str) and item for item in value):
        raise ConfigError(f"`{key}` must be a list of non-empty strings")
