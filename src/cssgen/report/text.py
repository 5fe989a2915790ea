"""Plain-text renderers: issue list, issue summary and statistics."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

import click

from cssgen.lint.analyzer import LintResult, QuickWin
from cssgen.model.finding import Finding, Severity

__all__ = [
    "caret_line",
    "progress_bar",
    "render_issue_summary",
    "render_issues",
    "render_statistics",
]

BAR_WIDTH = 20


def _style(text: str, use_color: bool, **styles) -> str:
    return click.style(text, **styles) if use_color else text


def _plural(count: int, singular: str, plural: str | None = None) -> str:
    return f"{count} {singular if count == 1 else (plural or singular + 's')}"


def caret_line(source_line: str, column: int) -> str:
    """A ``^`` under *column*, keeping the line's tabs so it lines up."""
    if column <= 0:
        return "^"
    prefix = source_line[: column - 1]
    return "".join("\t" if ch == "\t" else " " for ch in prefix) + "^"


def render_issues(
    findings: Iterable[Finding],
    *,
    print_lines: bool = True,
    print_linter_name: bool = True,
    use_color: bool = False,
) -> str:
    """Render findings as ``file:line:col: message (linter)`` blocks."""
    lines: list[str] = []
    for finding in sorted(findings, key=Finding.sort_key):
        location = f"{finding.file}:{finding.line}:{finding.column}:"
        location = _style(location, use_color, fg="cyan")
        suffix = ""
        if print_linter_name:
            suffix = _style(f" ({finding.linter})", use_color, fg="bright_black")
        message = finding.message
        if finding.severity is Severity.ERROR:
            message = _style(message, use_color, fg="red")
        lines.append(f"{location} {message}{suffix}")
        if print_lines and finding.source_line is not None:
            lines.append(f"\t{finding.source_line}")
            caret = caret_line(finding.source_line, finding.column)
            lines.append("\t" + _style(caret, use_color, fg="yellow"))
    return "\n".join(lines)


def render_issue_summary(result: LintResult, use_color: bool = False) -> str:
    """``N issues (X errors, Y warnings):`` plus a per-linter breakdown."""
    findings = result.findings
    errors = sum(1 for f in findings if f.is_error)
    warnings = sum(1 for f in findings if f.is_warning)

    details: list[str] = []
    if errors and warnings:
        details.append(f"{_plural(errors, 'error')}, {_plural(warnings, 'warning')}")
    if result.truncated:
        details.append(f"{_plural(result.truncated, 'issue')} truncated")
    head = _plural(len(findings), "issue")
    if details:
        head += f" ({'; '.join(details)})"

    lines = ["", head + ":"]
    for linter, count in sorted(Counter(f.linter for f in findings).items()):
        lines.append(f"* {linter}: {count}")
    if findings:
        lines.append("")
        lines.append(
            _style(
                "Hint: Run with --output-format full to see statistics and Quick Wins",
                use_color,
                fg="bright_black",
            )
        )
    return "\n".join(lines)


def progress_bar(percentage: float, width: int = BAR_WIDTH) -> str:
    filled = max(0, min(width, int(percentage / 100 * width)))
    return "[" + "█" * filled + "░" * (width - filled) + f"] {percentage:.1f}%"


def _heading(title: str, use_color: bool, fg: str) -> list[str]:
    return ["", _style(title, use_color, fg=fg, bold=True), "-" * len(title)]


def _quick_win_lines(wins: list[QuickWin]) -> list[str]:
    return [
        f'{i}. "{win.class_string}" - {_plural(win.occurrences, "occurrence")}'
        f" -> Use {win.suggestion}"
        for i, win in enumerate(wins, start=1)
    ]


def render_statistics(result: LintResult, use_color: bool = False) -> str:
    """Statistics, adoption bar, quick wins, recommendations and warnings."""
    stats = result.stats
    lines = _heading("CSS Linter Statistics", use_color, "cyan")
    lines += [
        f"Total Constants:         {stats.total_constants}",
        f"Actually Used:           {stats.actually_used} ({stats.usage_percentage:.1f}%)",
        f"Migration Opportunities: {stats.available_for_migration}",
        f"Completely Unused:       {stats.completely_unused}",
        f"Files Scanned:           {stats.files_scanned}",
        f"Hardcoded Classes:       {stats.hardcoded_found}",
        f"Constant References:     {stats.registry_refs_found}",
    ]

    lines += _heading("Adoption Progress", use_color, "cyan")
    lines.append(progress_bar(stats.usage_percentage))

    if result.quick_wins_single or result.quick_wins_multi:
        lines += _heading("Quick Wins", use_color, "green")
        if result.quick_wins_single:
            lines += ["", "High Confidence (Single Class - Direct Replace):"]
            lines += _quick_win_lines(result.quick_wins_single)
        if result.quick_wins_multi:
            lines += ["", "Migration Opportunities (Multi-Class Consolidation):"]
            lines += _quick_win_lines(result.quick_wins_multi)

    if result.recommendations:
        lines += _heading("Recommendations", use_color, "green")
        lines += [f"- {hint}" for hint in result.recommendations]

    if result.warnings:
        lines += _heading("Warnings", use_color, "yellow")
        lines += [f"- {warning}" for warning in result.warnings]
    return "\n".join(lines)
