"""
Plain-text rendering of grouped lint diagnostics.

Output layout (deterministic; colour is cosmetic and off by default):

    [error] <message>
      - <name> (<version>, <version>)

    [warning] <message>
      - <name> (<version>)

    Analyzed <N> spec files.

    <verdict>
"""

from pathlib import Path
from typing import List

import click

from specrepo.core.models import SEVERITY_ORDER, GroupedReport, LintRunSummary, Severity

VERSION_SEPARATOR = ", "
SUCCESS_MESSAGE = "All the specs passed validation."

_SEVERITY_COLORS = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
}


def failure_message(failed_count: int) -> str:
    return f"{failed_count} items failed validation."


def _style(text: str, color: bool, **styles) -> str:
    return click.style(text, **styles) if color else text


def render_header(directory: Path, color: bool = False) -> str:
    """Section header printed before a directory's report."""
    name = Path(directory).resolve().name
    return _style(f"\nLinting spec repo `{name}`\n", color, fg="yellow")


def render_groups(report: GroupedReport, color: bool = False) -> List[str]:
    lines: List[str] = []
    for severity in SEVERITY_ORDER:
        messages = report.messages_for(severity)
        for text in sorted(messages):
            header = f"[{severity.value}] {text}"
            lines.append(_style(header, color, fg=_SEVERITY_COLORS[severity]))
            entities = messages[text]
            for name in sorted(entities):
                versions = VERSION_SEPARATOR.join(entities[name])
                lines.append(f"  - {name} ({versions})")
            lines.append("")
    return lines


def render_verdict(summary: LintRunSummary, color: bool = False) -> str:
    if summary.passed:
        return _style(SUCCESS_MESSAGE, color, fg="green")
    return _style(failure_message(summary.failed_count), color, fg="red")


def render(report: GroupedReport, summary: LintRunSummary, color: bool = False) -> str:
    """
    Render a grouped report and its verdict.

    Severities follow SEVERITY_ORDER, messages are sorted lexicographically,
    entities are sorted by name and versions keep their insertion order.
    The report is not modified.
    """
    lines = render_groups(report, color=color)
    lines.append(f"Analyzed {summary.total_files_analyzed} spec files.")
    lines.append("")
    lines.append(render_verdict(summary, color=color))
    return "\n".join(lines)
