"""Tests for the lookup, token resolver and usage analyzer."""

from __future__ import annotations

import pytest

from cssgen.lint import (
    Classification,
    analyze_usage,
    build_lookup,
    classify,
    limit_findings,
    resolve,
)
from cssgen.lint.analyzer import recommendations
from cssgen.lint.resolver import format_suggestion, has_internal_classes, locate_token_column
from cssgen.model.finding import Finding, Severity
from cssgen.scanner import scan_text

CONSTANTS = {"Btn": "btn", "BtnSm": "btn--sm", "Card": "card"}


@pytest.fixture
def lookup():
    return build_lookup(CONSTANTS, ["btn", "btn--sm", "card", "_focus", "legacy"])


def _lint(lookup, text: str, filename: str = "page.html"):
    return analyze_usage(scan_text(text, filename), lookup)


# ---------------------------------------------------------------------------
# Lookup and classification
# ---------------------------------------------------------------------------


class TestLookup:
    def test_registered_classes_are_always_known(self):
        lookup = build_lookup({"Btn": "btn"})
        assert lookup.is_known("btn")
        assert lookup.identifier_for("btn") == "Btn"
        assert lookup.identifier_for("card") is None

    def test_classify(self, lookup):
        assert classify("btn", lookup) is Classification.MATCHED
        assert classify("_focus", lookup) is Classification.BYPASSED
        assert classify("legacy", lookup) is Classification.BYPASSED
        assert classify("ghost", lookup) is Classification.ZOMBIE


class TestResolve:
    def test_exact_match(self, lookup):
        suggestion = resolve("btn", lookup)
        assert suggestion.exact
        assert suggestion.identifiers == ("Btn",)
        assert not suggestion.has_unmatched

    def test_token_order_is_kept(self, lookup):
        suggestion = resolve("btn--sm btn", lookup)
        assert suggestion.identifiers == ("BtnSm", "Btn")

    def test_zombie_and_bypassed_tokens(self, lookup):
        suggestion = resolve("btn legacy ghost", lookup)
        assert suggestion.identifiers == ("Btn",)
        assert [t.token for t in suggestion.invalid] == ["ghost"]
        assert [t.token for t in suggestion.unmatched] == ["legacy", "ghost"]
        assert suggestion.invalid[0].offset == 11

    def test_nothing_registered(self, lookup):
        suggestion = resolve("legacy", lookup)
        assert suggestion.is_empty
        assert not suggestion.has_invalid

    def test_format_suggestion(self, lookup):
        assert format_suggestion(resolve("btn", lookup)) == "ui.Btn"
        assert format_suggestion(resolve("btn btn--sm", lookup)) == "{ ui.Btn, ui.BtnSm }"
        assert format_suggestion(resolve("btn", lookup), "styles") == "styles.Btn"
        assert format_suggestion(resolve("legacy", lookup)) == "(no suggestion)"

    def test_internal_detection(self):
        assert has_internal_classes("btn _focus")
        assert not has_internal_classes("btn btn_focus")


class TestLocateTokenColumn:
    def test_in_string(self):
        line = '<a class="btn ghost">'
        column = line.index("btn") + 1
        assert locate_token_column(line, "btn ghost", column, 4, "ghost") == line.index("ghost") + 1

    def test_whole_word_fallback(self):
        line = "foo btn-x btn"
        assert locate_token_column(line, "btn", 1, 0, "btn") == 11

    def test_reference_column_fallback(self):
        assert locate_token_column("x", "abc", 5, 0, "abc") == 5


# ---------------------------------------------------------------------------
# Findings
# ---------------------------------------------------------------------------


class TestFindings:
    def test_zombie_token_is_an_error(self, lookup):
        line = '<a class="btn btn--sm btn--outline">'
        result = _lint(lookup, line)
        assert len(result.findings) == 1
        finding = result.findings[0]
        assert finding.severity is Severity.ERROR
        assert finding.message == 'invalid CSS class "btn--outline" not found in stylesheet'
        assert finding.column == line.index("btn--outline") + 1
        assert finding.line == 1
        assert finding.source_line == line
        assert result.stats.error_count == 1
        assert result.stats.warning_count == 0

    def test_each_zombie_occurrence_is_reported(self, lookup):
        line = '<a class="ghost ghost">'
        result = _lint(lookup, line)
        start = line.index("ghost") + 1
        assert [f.column for f in result.findings] == [start, start + 6]

    def test_multi_class_warning(self, lookup):
        line = '<a class="btn btn--sm">'
        (finding,) = _lint(lookup, line).findings
        assert finding.severity is Severity.WARNING
        assert finding.message == (
            'hardcoded CSS class "btn btn--sm" should use { ui.Btn, ui.BtnSm } constant'
        )
        assert finding.column == line.index("btn") + 1

    def test_single_class_warning(self, lookup):
        (finding,) = _lint(lookup, '<a class="btn">').findings
        assert finding.message == 'hardcoded CSS class "btn" should use ui.Btn constant'

    def test_internal_class_suppresses_warning(self, lookup):
        assert _lint(lookup, '<a class="btn _focus">').findings == []

    def test_internal_class_does_not_suppress_zombie(self, lookup):
        line = '<a class="_focus ghost">'
        (finding,) = _lint(lookup, line).findings
        assert finding.severity is Severity.ERROR
        assert finding.column == line.index("ghost") + 1

    def test_bypassed_only_is_silent(self, lookup):
        result = _lint(lookup, '<a class="legacy">')
        assert result.findings == []
        assert result.hardcoded == []

    def test_partial_suggestion_with_bypassed_token(self, lookup):
        (finding,) = _lint(lookup, '<a class="btn legacy">').findings
        assert finding.is_warning
        assert "should use ui.Btn constant" in finding.message

    def test_registry_references_are_never_findings(self, lookup):
        result = _lint(lookup, "x = ui.Btn\ny = ui.Nope\n", "app.py")
        assert result.findings == []
        assert result.stats.registry_refs_found == 2
        assert result.stats.actually_used == 1

    def test_findings_are_sorted(self, lookup):
        refs = scan_text('<a class="ghost">', "b.html") + scan_text('<a class="btn">', "a.html")
        result = analyze_usage(refs, lookup)
        assert [f.file for f in result.findings] == ["a.html", "b.html"]


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


class TestStats:
    TEXT = "\n".join(
        [
            "<div class={ ui.Card }>",
            '<a class="btn">',
            '<a class="btn">',
            '<a class="btn btn--sm">',
        ]
    )

    def test_counts(self, lookup):
        stats = _lint(lookup, self.TEXT).stats
        assert stats.total_constants == 3
        assert stats.actually_used == 1
        assert stats.available_for_migration == 2
        assert stats.completely_unused == 0
        assert stats.usage_percentage == pytest.approx(100 / 3)
        assert stats.hardcoded_found == 3
        assert stats.registry_refs_found == 1
        assert stats.files_scanned == 1

    def test_used_identifier_is_not_also_migratable(self, lookup):
        stats = _lint(lookup, '{ ui.Btn }\n<a class="btn">').stats
        assert stats.actually_used == 1
        assert stats.available_for_migration == 0
        assert stats.completely_unused == 2

    def test_unused_constants(self, lookup):
        result = _lint(lookup, '<a class="btn">')
        assert [u.identifier for u in result.unused] == ["BtnSm", "Card"]

    def test_quick_wins(self, lookup):
        result = _lint(lookup, self.TEXT)
        single = [(w.class_string, w.occurrences, w.suggestion) for w in result.quick_wins_single]
        assert single == [("btn", 2, "ui.Btn")]
        assert [(w.class_string, w.suggestion) for w in result.quick_wins_multi] == [
            ("btn btn--sm", "{ ui.Btn, ui.BtnSm }")
        ]

    def test_unresolvable_strings_are_not_quick_wins(self, lookup):
        result = _lint(lookup, '<a class="btn legacy">')
        assert result.quick_wins_single == []
        assert result.quick_wins_multi == []

    def test_empty_registry(self):
        result = analyze_usage([], build_lookup({}))
        assert result.stats.usage_percentage == 0.0
        assert result.recommendations == []

    def test_recommendations(self, lookup):
        result = _lint(lookup, '<a class="btn">')
        hints = recommendations(result)
        assert hints[0] == "Import the ui registry module in files that build class lists"
        assert any(h.startswith("Low adoption detected") for h in hints)


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------


def _finding(message: str, line: int, linter: str = "csslint") -> Finding:
    return Finding(linter, Severity.WARNING, message, "a.html", line, 1)


class TestLimits:
    def test_unlimited(self):
        findings = [_finding("m", i) for i in range(5)]
        assert limit_findings(findings) == (findings, 0)

    def test_max_same(self):
        findings = [_finding("m", i) for i in range(5)] + [_finding("other", 9)]
        kept, dropped = limit_findings(findings, max_same=2)
        assert [f.line for f in kept] == [0, 1, 9]
        assert dropped == 3

    def test_max_per_linter(self):
        findings = [_finding(f"m{i}", i) for i in range(5)]
        kept, dropped = limit_findings(findings, max_per_linter=3)
        assert len(kept) == 3
        assert dropped == 2
