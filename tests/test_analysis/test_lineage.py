"""Tests for lineage analysis: merging, BEM parents, identifiers and diffs."""

from __future__ import annotations

import pytest

from cssgen.analysis import analyze, detect_bem, diff_properties, merge_records, to_identifier
from cssgen.analysis.categories import (
    PropertyCategory,
    categorize_properties,
    categorize_property,
    is_token_value,
)
from cssgen.model.record import ClassRecord
from cssgen.stylesheet import parse_stylesheet


def _analyze(*files: tuple[str, str]):
    return analyze(parse_stylesheet(source, filename=name) for name, source in files)


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


class TestToIdentifier:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("btn", "Btn"),
            ("btn--primary", "BtnPrimary"),
            ("card__header", "CardHeader"),
            ("nav-item--with-icon", "NavItemWithIcon"),
            ("foo_bar", "FooBar"),
            (".btn", "Btn"),
            ("_internal-thing", "_InternalThing"),
            ("2col", "2col"),
        ],
    )
    def test_pascal_case(self, name, expected):
        assert to_identifier(name) == expected


class TestDetectBem:
    def test_modifier(self):
        assert detect_bem("btn--primary") == ("btn", True)

    def test_element(self):
        assert detect_bem("card__header") == ("card", True)

    def test_element_with_modifier_uses_modifier_split(self):
        assert detect_bem("card__header--large") == ("card__header", True)

    def test_standalone(self):
        assert detect_bem("flex") == ("", False)


# ---------------------------------------------------------------------------
# Merging
# ---------------------------------------------------------------------------


class TestMerge:
    def test_duplicates_across_files_are_merged_with_warning(self):
        analysis = _analyze(("a.css", ".x{color:red}"), ("b.css", ".x{margin:0}"))
        record = analysis.get("x")
        assert record.properties == {"color": "red", "margin": "0"}
        assert analysis.warnings == [
            "Duplicate class 'x' found in a.css and b.css - properties merged"
        ]

    def test_later_file_wins_on_conflict(self):
        analysis = _analyze(("b.css", ".x{color:blue}"), ("a.css", ".x{color:red}"))
        assert analysis.get("x").properties == {"color": "blue"}
        assert analysis.get("x").source_file == "a.css"

    def test_pseudo_states_are_unioned(self):
        a = ClassRecord("x", pseudo_states=[":hover"], pseudo_deltas={":hover": {"a": "1"}})
        b = ClassRecord("x", pseudo_states=[":focus"], pseudo_deltas={":focus": {"b": "2"}})
        records, warnings = merge_records([a, b])
        assert len(records) == 1
        assert records[0].pseudo_states == [":hover", ":focus"]
        assert records[0].pseudo_deltas == {":hover": {"a": "1"}, ":focus": {"b": "2"}}
        assert warnings == []

    def test_empty_layer_is_filled_from_later_record(self):
        records, _ = merge_records(
            [
                ClassRecord("x", source_file="a.css"),
                ClassRecord("x", layer="base", source_file="b.css"),
            ]
        )
        assert records[0].layer == "base"

    def test_input_records_are_not_modified(self):
        a = parse_stylesheet(".x{color:red}", filename="a.css")
        b = parse_stylesheet(".x{margin:0}", filename="b.css")
        analyze([a, b])
        assert a.get("x").properties == {"color": "red"}
        assert a.get("x").generated_id == ""
        assert b.get("x").properties == {"margin": "0"}
        assert analyze([a]).get("x").properties == {"color": "red"}


# ---------------------------------------------------------------------------
# Lineage
# ---------------------------------------------------------------------------


class TestLineage:
    def test_modifier_links_to_parent(self):
        analysis = _analyze(
            (
                "btn.css",
                ".btn{color:red;padding:4px}\n"
                ".btn--primary{color:blue;padding:4px;border:0}",
            )
        )
        child = analysis.get("btn--primary")
        assert child.parent == "btn"
        assert analysis.parent_of(child) is analysis.get("btn")
        diff = child.property_diff
        assert diff.added == {"border": "0"}
        assert diff.changed == {"color": "blue"}
        assert diff.unchanged == ("padding",)

    def test_missing_parent_is_not_linked(self):
        analysis = _analyze(("x.css", ".card__title{margin:0}"))
        record = analysis.get("card__title")
        assert record.parent is None
        assert record.property_diff is None
        assert analysis.parent_of(record) is None

    def test_identifier_collision(self):
        analysis = _analyze(("x.css", ".foo-bar{}\n.foo_bar{}"))
        assert analysis.get("foo-bar").generated_id == "FooBar"
        assert analysis.get("foo_bar").generated_id == "FooBar2"

    def test_collision_skips_taken_names(self):
        analysis = _analyze(("x.css", ".foo-bar{}\n.foo_bar{}\n.foo-bar2{}"))
        ids = {r.name: r.generated_id for r in analysis.records}
        assert ids["foo-bar2"] == "FooBar2"
        assert ids["foo_bar"] == "FooBar3"
        assert len(set(ids.values())) == 3

    def test_identifiers_do_not_depend_on_file_order(self):
        first = _analyze(("a.css", ".foo-bar{}"), ("b.css", ".foo_bar{}"))
        second = _analyze(("b.css", ".foo_bar{}"), ("a.css", ".foo-bar{}"))
        assert first.registry() == second.registry()

    def test_internal_classes_are_known_but_not_public(self):
        analysis = _analyze(("x.css", ".btn{}\n._reset{}"))
        assert analysis.registry() == {"Btn": "btn"}
        assert analysis.known_classes() == frozenset({"btn", "_reset"})

    def test_declared_layers_and_counts(self):
        analysis = _analyze(
            ("a.css", "@layer base { .a{} }"),
            ("b.css", "/* @intent Card */\n.b{}"),
        )
        assert analysis.declared_layers == ["base"]
        assert analysis.files_parsed == 2
        assert analysis.intents_extracted == 1

    def test_parse_warnings_are_collected(self):
        analysis = _analyze(("bad.css", ".a{color:red}\n.b{"))
        assert analysis.get("a") is not None
        assert any("bad.css" in w for w in analysis.warnings)


class TestDiff:
    def test_empty_diff(self):
        diff = diff_properties(ClassRecord("a--b"), ClassRecord("a"))
        assert diff.is_empty


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


class TestCategories:
    @pytest.mark.parametrize(
        "prop, category",
        [
            ("color", PropertyCategory.VISUAL),
            ("border-top-color", PropertyCategory.VISUAL),
            ("display", PropertyCategory.LAYOUT),
            ("grid-template-columns", PropertyCategory.LAYOUT),
            ("font-size", PropertyCategory.TYPOGRAPHY),
            ("line-height", PropertyCategory.TYPOGRAPHY),
            ("transition", PropertyCategory.EFFECTS),
            ("animation-fill-mode", PropertyCategory.EFFECTS),
            ("-webkit-appearance", PropertyCategory.INTERNAL),
            ("-moz-border-radius", PropertyCategory.INTERNAL),
        ],
    )
    def test_categorize(self, prop, category):
        assert categorize_property(prop) is category

    def test_token_values(self):
        assert is_token_value("var(--ui-color-primary)")
        assert not is_token_value("var(--other)")

    def test_grouping_order(self):
        grouped = categorize_properties(
            {"transition": "all 1s", "display": "flex", "color": "var(--ui-fg)"}
        )
        assert list(grouped) == [
            PropertyCategory.VISUAL,
            PropertyCategory.LAYOUT,
            PropertyCategory.EFFECTS,
        ]
        assert grouped[PropertyCategory.VISUAL][0].is_token
