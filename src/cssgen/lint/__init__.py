"""Class usage linting: lookup, token resolution and usage analysis."""

from cssgen.lint.analyzer import (
    LINTER_NAME,
    LintResult,
    QuickWin,
    UsageStats,
    analyze_usage,
    limit_findings,
)
from cssgen.lint.lookup import Lookup, build_lookup
from cssgen.lint.resolver import Classification, Suggestion, classify, resolve

__all__ = [
    "Classification",
    "LINTER_NAME",
    "LintResult",
    "Lookup",
    "QuickWin",
    "Suggestion",
    "UsageStats",
    "analyze_usage",
    "build_lookup",
    "classify",
    "limit_findings",
    "resolve",
]
