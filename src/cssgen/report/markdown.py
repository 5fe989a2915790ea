"""Markdown report, suitable for CI job summaries and PR comments."""

from __future__ import annotations

from cssgen.lint.analyzer import LintResult, QuickWin
from cssgen.report.text import progress_bar

__all__ = ["render_markdown", "status_badge"]

FOOTER = "*Generated by cssgen linter v1.0*"


def _escape(text: str) -> str:
    return text.replace("|", "\\|")


def status_badge(result: LintResult) -> str:
    stats = result.stats
    if stats.error_count > 0:
        return "\U0001f534 Needs Attention"
    if stats.usage_percentage >= 80:
        return "\U0001f7e2 Excellent"
    if stats.usage_percentage >= 50:
        return "\U0001f7e1 Good Progress"
    return "\U0001f534 Needs Attention"


def _quick_win_table(title: str, wins: list[QuickWin]) -> list[str]:
    lines = ["", f"### {title}", "", "| Class | Occurrences | Suggestion |", "|---|---|---|"]
    for win in wins:
        lines.append(
            f"| `{_escape(win.class_string)}` | {win.occurrences} | `{_escape(win.suggestion)}` |"
        )
    return lines


def render_markdown(result: LintResult) -> str:
    stats = result.stats
    errors = [f for f in result.findings if f.is_error]
    warnings = sum(1 for f in result.findings if f.is_warning)

    lines = [
        "# CSS Linter Report",
        "",
        "## Executive Summary",
        "",
        "| Metric | Value |",
        "|---|---|",
        f"| **Status** | {status_badge(result)} |",
        f"| **Total Issues** | {len(result.findings)} "
        f"({len(errors)} errors, {warnings} warnings) |",
        f"| **Files Scanned** | {stats.files_scanned} |",
        f"| **Adoption Rate** | {stats.usage_percentage:.1f}% |",
        f"| **Constants Used** | {stats.actually_used} / {stats.total_constants} |",
    ]

    if errors:
        lines += ["", "## ❌ Errors", ""]
        for f in errors:
            lines.append(f"- `{f.file}:{f.line}:{f.column}` {_escape(f.message)}")

    if result.quick_wins_single or result.quick_wins_multi:
        lines += ["", "## \U0001f3af Quick Wins"]
        if result.quick_wins_single:
            lines += _quick_win_table("Single Class", result.quick_wins_single)
        if result.quick_wins_multi:
            lines += _quick_win_table("Multi-Class", result.quick_wins_multi)

    lines += [
        "",
        "## \U0001f4ca Detailed Statistics",
        "",
        "```",
        progress_bar(stats.usage_percentage),
        "```",
        "",
        "| Metric | Count |",
        "|---|---|",
        f"| Total constants | {stats.total_constants} |",
        f"| Actually used | {stats.actually_used} |",
        f"| Migration opportunities | {stats.available_for_migration} |",
        f"| Completely unused | {stats.completely_unused} |",
        f"| Hardcoded classes | {stats.hardcoded_found} |",
        f"| Constant references | {stats.registry_refs_found} |",
    ]

    if result.recommendations:
        lines += ["", "## ✅ Recommendations", ""]
        lines += [f"- {hint}" for hint in result.recommendations]

    lines += ["", "---", "", FOOTER, ""]
    return "\n".join(lines)
