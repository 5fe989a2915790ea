"""Machine-readable JSON report."""

from __future__ import annotations

import json
from typing import Any

from cssgen.lint.analyzer import LintResult, QuickWin

__all__ = ["JSON_REPORT_VERSION", "build_report", "render_json"]

JSON_REPORT_VERSION = "1.0"


def _quick_wins(wins: list[QuickWin]) -> list[dict[str, Any]]:
    return [
        {"class": w.class_string, "occurrences": w.occurrences, "suggestion": w.suggestion}
        for w in wins
    ]


def build_report(result: LintResult) -> dict[str, Any]:
    """Build the JSON document. It carries no timestamp so output is reproducible."""
    stats = result.stats
    issues = []
    for f in result.findings:
        issue: dict[str, Any] = {
            "file": f.file,
            "line": f.line,
            "column": f.column,
            "severity": f.severity.value,
            "message": f.message,
            "linter": f.linter,
        }
        if f.source_line:
            issue["source"] = f.source_line
        issues.append(issue)

    return {
        "version": JSON_REPORT_VERSION,
        "summary": {
            "total_issues": len(result.findings),
            "errors": sum(1 for f in result.findings if f.is_error),
            "warnings": sum(1 for f in result.findings if f.is_warning),
            "truncated": result.truncated,
            "files_scanned": stats.files_scanned,
        },
        "stats": {
            "total_constants": stats.total_constants,
            "actually_used": stats.actually_used,
            "migration_opportunities": stats.available_for_migration,
            "completely_unused": stats.completely_unused,
            "usage_percentage": round(stats.usage_percentage, 2),
            "hardcoded_classes": stats.hardcoded_found,
            "constant_references": stats.registry_refs_found,
        },
        "issues": issues,
        "quick_wins": {
            "single_class": _quick_wins(result.quick_wins_single),
            "multi_class": _quick_wins(result.quick_wins_multi),
        },
        "unused": [{"identifier": u.identifier, "class": u.class_name} for u in result.unused],
        "warnings": list(result.warnings),
    }


def render_json(result: LintResult) -> str:
    return json.dumps(build_report(result), indent=2, ensure_ascii=False)
