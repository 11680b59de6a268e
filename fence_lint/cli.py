"""
Checks that fenced code blocks inside Markdown lists are aligned with the
list item they belong to. Exits with the number of problems found.
"""

from __future__ import annotations

from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import LintError
from .filesystem import collect_targets, get_max_file_size, read_document, relative_display_path
from .reporter import format_summary, render_report
from .rules import validate_documents

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="fence-lint")
@click.option(
    "--exclude",
    "exclude",
    multiple=True,
    metavar="PATTERN",
    help="Glob pattern of paths to skip (repeatable)",
)
@click.option(
    "--include-hidden/--no-include-hidden",
    default=None,
    help="Search dot-files and dot-directories",
)
@click.option("--max-file-size", type=int, help="Maximum file size in bytes")
@click.option(
    "--external-violations",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Violations reported by other checkers, added to the total",
)
@click.option("-q", "--quiet", is_flag=True, help="Do not print the summary line")
@click.argument("paths", nargs=-1, type=click.Path())
@click.pass_context
def cli(
    ctx: click.Context,
    paths: tuple[str, ...],
    exclude: tuple[str, ...] = (),
    include_hidden: bool | None = None,
    max_file_size: int | None = None,
    external_violations: int = 0,
    quiet: bool = False,
):
    """
    Entry point for linting fenced code block indentation.

    Args:
        ctx: Click context used to set the exit status.
        paths: Markdown files or directories to check; defaults to the current
            directory.
        exclude: Extra exclusion patterns, added to the configured ones.
        include_hidden: Override for searching hidden paths.
        max_file_size: Override for the maximum file size in bytes.
        external_violations: Count from other checkers added to the total.
        quiet: Suppress the summary line.

    Returns:
        None. The process exits with 0 when no problems were found, otherwise
        with the total number of problems (capped at 255).

    Raises:
        click.BadParameter: If paths or configuration values are invalid.
        click.ClickException: If a document cannot be read.

    Examples:
        fence-lint docs README.md --exclude "docs/generated/*"
    """
    base_dir = Path.cwd().resolve()
    try:
        config = build_config(
            base_dir,
            extra_exclude=list(exclude),
            include_hidden=include_hidden,
            max_file_size=max_file_size,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    # --max-file-size beats FENCE_LINT_MAX_FILE_SIZE, which beats the config file
    if max_file_size is not None:
        size_limit = config.max_file_size
    else:
        try:
            size_limit = get_max_file_size(default=config.max_file_size)
        except ValueError as error:
            raise click.ClickException(str(error)) from error

    try:
        targets = collect_targets(paths or (".",), config)
    except ValueError as error:
        raise click.BadParameter(str(error), param_hint="PATHS") from error

    try:
        documents = [
            read_document(target, size_limit, relative_display_path(target, base_dir))
            for target in targets
        ]
    except LintError as error:
        raise click.ClickException(str(error)) from error

    report = validate_documents(documents, external_violations=external_violations)

    for line in render_report(report):
        click.echo(line)
    if not quiet:
        click.echo(format_summary(report), err=True)

    ctx.exit(report.exit_code)


if __name__ == "__main__":
    cli()
