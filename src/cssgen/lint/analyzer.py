"""Usage analysis: turn scanned references into findings and statistics."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from cssgen.lint.lookup import Lookup
from cssgen.lint.resolver import (
    Suggestion,
    format_suggestion,
    has_internal_classes,
    locate_token_column,
    resolve,
)
from cssgen.model.finding import Finding, Severity
from cssgen.model.reference import ClassReference

__all__ = [
    "HardcodedString",
    "LINTER_NAME",
    "LintResult",
    "QuickWin",
    "UnusedConstant",
    "UsageStats",
    "analyze_usage",
    "limit_findings",
]

logger = logging.getLogger(__name__)

LINTER_NAME = "csslint"

INVALID_CLASS_MESSAGE = 'invalid CSS class "{}" not found in stylesheet'
HARDCODED_CLASS_MESSAGE = 'hardcoded CSS class "{}" should use {} constant'

QUICK_WIN_LIMIT = 10
UNUSED_HINT_THRESHOLD = 50
LOW_ADOPTION_PERCENT = 20.0


@dataclass(frozen=True)
class UsageStats:
    """Adoption statistics for one lint run."""

    total_constants: int = 0
    actually_used: int = 0
    available_for_migration: int = 0
    completely_unused: int = 0
    usage_percentage: float = 0.0
    files_scanned: int = 0
    hardcoded_found: int = 0
    registry_refs_found: int = 0
    error_count: int = 0
    warning_count: int = 0


@dataclass(frozen=True)
class UnusedConstant:
    identifier: str
    class_name: str


@dataclass(frozen=True)
class QuickWin:
    """A hardcoded string worth replacing, with how often it occurs."""

    class_string: str
    occurrences: int
    suggestion: str


@dataclass(frozen=True)
class HardcodedString:
    reference: ClassReference
    suggestion: Suggestion


@dataclass
class LintResult:
    findings: list[Finding] = field(default_factory=list)
    stats: UsageStats = field(default_factory=UsageStats)
    unused: list[UnusedConstant] = field(default_factory=list)
    hardcoded: list[HardcodedString] = field(default_factory=list)
    quick_wins_single: list[QuickWin] = field(default_factory=list)
    quick_wins_multi: list[QuickWin] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    truncated: int = 0

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.is_error]

    @property
    def has_errors(self) -> bool:
        return self.stats.error_count > 0


# ---------------------------------------------------------------------------
# Findings
# ---------------------------------------------------------------------------


def _finding(ref: ClassReference, severity: Severity, message: str, column: int) -> Finding:
    loc = ref.location
    return Finding(
        linter=LINTER_NAME,
        severity=severity,
        message=message,
        file=loc.file,
        line=loc.line,
        column=column,
        source_line=loc.source_line or None,
    )


def _findings_for(
    ref: ClassReference, suggestion: Suggestion, package: str
) -> list[Finding]:
    """Errors for each zombie token, or one warning for a clean replacement."""
    loc = ref.location
    findings: list[Finding] = []
    for token in suggestion.invalid:
        column = locate_token_column(
            loc.source_line, ref.class_string, loc.column, token.offset, token.token
        )
        findings.append(
            _finding(ref, Severity.ERROR, INVALID_CLASS_MESSAGE.format(token.token), column)
        )
    if findings:
        return findings

    if suggestion.is_empty or has_internal_classes(ref.class_string):
        return findings

    first = ref.tokens[0] if ref.tokens else ref.class_string
    offset = ref.class_string.find(first)
    column = locate_token_column(
        loc.source_line, ref.class_string, loc.column, max(offset, 0), first
    )
    message = HARDCODED_CLASS_MESSAGE.format(
        ref.class_string, format_suggestion(suggestion, package)
    )
    findings.append(_finding(ref, Severity.WARNING, message, column))
    return findings


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


def _top(counter: Counter[str], suggestions: dict[str, str]) -> list[QuickWin]:
    ranked = sorted(counter.items(), key=lambda item: (-item[1], item[0]))
    return [
        QuickWin(class_string=s, occurrences=n, suggestion=suggestions[s])
        for s, n in ranked[:QUICK_WIN_LIMIT]
    ]


def quick_wins(
    hardcoded: Iterable[HardcodedString], package: str = "ui"
) -> tuple[list[QuickWin], list[QuickWin]]:
    """Most frequent fully-resolvable hardcoded strings, single and multi-class."""
    single: Counter[str] = Counter()
    multi: Counter[str] = Counter()
    suggestions: dict[str, str] = {}
    for item in hardcoded:
        if item.suggestion.has_unmatched:
            continue
        value = item.reference.class_string
        tokens = value.split()
        count = len(item.suggestion.identifiers)
        if len(tokens) == 1 and count == 1:
            single[value] += 1
        elif len(tokens) > 1 and count > 1:
            multi[value] += 1
        else:
            continue
        suggestions[value] = format_suggestion(item.suggestion, package)
    return _top(single, suggestions), _top(multi, suggestions)


def recommendations(result: LintResult, package: str = "ui") -> list[str]:
    """Short, actionable hints derived from the statistics."""
    hints: list[str] = []
    stats = result.stats
    if result.hardcoded:
        hints.append(f"Import the {package} registry module in files that build class lists")
        hints.append("Replace hardcoded strings with constants (see Quick Wins)")
    if stats.completely_unused > UNUSED_HINT_THRESHOLD:
        hints.append("Consider removing unused classes from the stylesheets or using them")
    if stats.total_constants and stats.usage_percentage < LOW_ADOPTION_PERCENT:
        hints.append("Low adoption detected - start with Quick Wins for maximum impact")
    return hints


def limit_findings(
    findings: list[Finding], max_per_linter: int = 0, max_same: int = 0
) -> tuple[list[Finding], int]:
    """Apply per-linter then same-message limits (0 = unlimited).

    Returns the kept findings and how many were dropped.
    """
    kept = list(findings)
    if max_per_linter > 0:
        per_linter: Counter[str] = Counter()
        limited: list[Finding] = []
        for finding in kept:
            if per_linter[finding.linter] < max_per_linter:
                limited.append(finding)
                per_linter[finding.linter] += 1
        kept = limited
    if max_same > 0:
        same: Counter[str] = Counter()
        limited = []
        for finding in kept:
            if same[finding.message] < max_same:
                limited.append(finding)
                same[finding.message] += 1
        kept = limited
    return kept, len(findings) - len(kept)


def analyze_usage(
    references: Iterable[ClassReference],
    lookup: Lookup,
    *,
    package: str = "ui",
    files_scanned: int | None = None,
) -> LintResult:
    """Resolve every reference against *lookup* and aggregate the results.

    A registry identifier is "used" when referenced directly, "available
    for migration" when only a hardcoded string resolves to it, and
    "completely unused" otherwise. Adoption counts used identifiers only.
    """
    references = list(references)
    result = LintResult()
    used: set[str] = set()
    migratable: set[str] = set()
    registry_refs = 0
    hardcoded_found = 0

    for ref in references:
        if ref.is_registry_ref:
            registry_refs += 1
            if ref.identifier in lookup.constants:
                used.add(ref.identifier)
            else:
                logger.debug(
                    "%s:%d: %s.%s is not in the registry",
                    ref.location.file, ref.location.line, package, ref.identifier,
                )
            continue

        hardcoded_found += 1
        suggestion = resolve(ref.class_string, lookup)
        result.findings.extend(_findings_for(ref, suggestion, package))
        if not suggestion.is_empty:
            migratable.update(suggestion.identifiers)
            result.hardcoded.append(HardcodedString(ref, suggestion))

    migratable -= used
    total = len(lookup.constants)
    usage = (len(used) / total * 100) if total else 0.0
    result.findings.sort(key=Finding.sort_key)

    if files_scanned is None:
        files_scanned = len({ref.location.file for ref in references})

    result.stats = UsageStats(
        total_constants=total,
        actually_used=len(used),
        available_for_migration=len(migratable),
        completely_unused=total - len(used) - len(migratable),
        usage_percentage=usage,
        files_scanned=files_scanned,
        hardcoded_found=hardcoded_found,
        registry_refs_found=registry_refs,
        error_count=sum(1 for f in result.findings if f.is_error),
        warning_count=sum(1 for f in result.findings if f.is_warning),
    )
    result.unused = sorted(
        (
            UnusedConstant(identifier, class_name)
            for identifier, class_name in lookup.constants.items()
            if identifier not in used and identifier not in migratable
        ),
        key=lambda u: u.identifier,
    )
    result.quick_wins_single, result.quick_wins_multi = quick_wins(result.hardcoded, package)
    result.recommendations = recommendations(result, package)
    return result
