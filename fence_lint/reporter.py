"""Human-readable rendering of lint results."""

from __future__ import annotations

from .models import Finding, LintReport


def format_finding(finding: Finding) -> str:
    """Render a finding as ``path:line: rule message (columns)``.

    Examples:
        format_finding(Finding("README.md", 12, actual_column=4, expected_column=2))
    """
    return (
        f"{finding.document}:{finding.line}: {finding.rule} {finding.message} "
        f"(expected column {finding.expected_column}, found {finding.actual_column})"
    )


def format_summary(report: LintReport) -> str:
    files = _plural(report.documents_checked, "file")
    if report.total == 0:
        return f"No problems found in {files}"

    summary = f"{_plural(report.total, 'problem')} in {files}"
    if report.external_violations:
        summary += f" ({report.external_violations} reported by other checkers)"
    return summary


def render_report(report: LintReport) -> list[str]:
    """Render every finding of `report`, one line each, in report order."""
    return [format_finding(finding) for finding in report.findings]


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"
