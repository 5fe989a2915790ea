"""Integration tests: stylesheets to registry to lint results, end-to-end.

These tests lay out a small project on disk, run the generate pipeline,
import the registry it writes, and lint a source tree against it.
"""

from __future__ import annotations

import importlib.util
from dataclasses import replace
from pathlib import Path

import pytest

from cssgen.config import GenerateConfig, LintConfig
from cssgen.runner import gate_failure, generate, lint

FILES = {
    "styles/base.css": """\
._reset { margin: 0; }
.stack { display: flex; flex-direction: column; }
""",
    "styles/layers/components/button.css": """\
/* @intent Default clickable action */
.btn { color: var(--ui-fg); padding: 4px 8px; }
.btn:hover { color: var(--ui-fg-strong); }
.btn--primary { color: white; padding: 4px 8px; background: blue; }
.btn--sm { padding: 2px 4px; }
""",
    "styles/layers/components/card.css": """\
@layer components {
  .card { border: 1px solid grey; }
  .card__title { font-weight: 600; }
  .stack { gap: 8px; }
}
""",
    "styles/broken.css": ".ok { color: red; }\n.oops { color: blue;",
    "web/page.html": """\
<div class="stack">
  <button class="btn btn--primary">Save</button>
  <button class="btn btn--ghost">Cancel</button>
  <div class="card _reset">
</div>
""",
    "web/view.templ": """\
templ Card() {
  <div class={ templ.Classes(ui.Card, "card__title", templ.KV("btn--sm", small)) }>
  // <div class="ghost">
}
""",
    "web/app.py": """\
from ui import styles_gen as ui

STACK = ui.Stack
# LEGACY = "btn"
""",
}


@pytest.fixture
def project(tmp_path: Path) -> Path:
    for name, text in FILES.items():
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return tmp_path


def _generate(project: Path):
    config = GenerateConfig(source_dir=project / "styles", output_dir=project / "ui")
    return config, generate(config)


def _import(path: Path):
    spec = importlib.util.spec_from_file_location("styles_gen", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


class TestGeneratePipeline:
    def test_counts_and_warnings(self, project):
        _, result = _generate(project)
        assert result.files_scanned == 4
        # btn, btn--primary, btn--sm, card, card__title, stack, ok
        assert result.classes_generated == 7
        assert result.intents_extracted == 1
        assert any(w.startswith("Failed to parse broken.css") for w in result.warnings)
        assert any("Duplicate class 'stack'" in w for w in result.warnings)

    def test_registry_is_importable(self, project):
        config, _ = _generate(project)
        module = _import(config.registry_path)
        assert module.Btn == "btn"
        assert module.BtnPrimary == "btn--primary"
        assert module.CardTitle == "card__title"
        assert "_reset" in module.ALL_CSS_CLASSES
        assert not hasattr(module, "_Reset")
        assert not hasattr(module, "Oops")

    def test_layers(self, project):
        _, result = _generate(project)
        analysis = result.analysis
        assert analysis.get("btn").layer == "components"
        assert analysis.get("card").layer == "components"
        assert analysis.get("_reset").layer == "base"
        assert analysis.get("ok").layer == ""

    def test_merged_class(self, project):
        _, result = _generate(project)
        stack = result.analysis.get("stack")
        assert stack.properties == {
            "display": "flex",
            "flex-direction": "column",
            "gap": "8px",
        }

    def test_lineage(self, project):
        _, result = _generate(project)
        primary = result.analysis.get("btn--primary")
        assert primary.parent == "btn"
        assert primary.property_diff.added == {"background": "blue"}
        assert primary.property_diff.changed == {"color": "white"}
        assert primary.property_diff.unchanged == ("padding",)

    def test_output_is_stable(self, project):
        config, _ = _generate(project)
        first = config.registry_path.read_text(encoding="utf-8")
        _generate(project)
        assert config.registry_path.read_text(encoding="utf-8") == first

    def test_infer_layer_can_be_disabled(self, project):
        config = GenerateConfig(
            source_dir=project / "styles", output_dir=project / "ui", infer_layer=False
        )
        result = generate(config)
        assert result.analysis.get("btn").layer == ""
        assert result.analysis.get("card").layer == "components"


# ---------------------------------------------------------------------------
# lint
# ---------------------------------------------------------------------------


class TestLintPipeline:
    @pytest.fixture
    def config(self, project) -> LintConfig:
        generate_config, _ = _generate(project)
        return LintConfig(
            registry_path=generate_config.registry_path,
            root=project / "web",
            paths=("**/*.html", "**/*.templ", "**/*.py"),
        )

    def test_findings(self, config):
        result = lint(config)
        errors = [(f.file, f.line, f.message) for f in result.findings if f.is_error]
        assert errors == [
            ("page.html", 3, 'invalid CSS class "btn--ghost" not found in stylesheet'),
        ]
        warnings = {(f.file, f.line) for f in result.findings if f.is_warning}
        assert warnings == {
            ("page.html", 1),
            ("page.html", 2),
            ("view.templ", 2),
        }

    def test_builder_call_warnings(self, config):
        result = lint(config)
        messages = [f.message for f in result.findings if f.file == "view.templ"]
        assert messages == [
            'hardcoded CSS class "card__title" should use ui.CardTitle constant',
            'hardcoded CSS class "btn--sm" should use ui.BtnSm constant',
        ]

    def test_statistics(self, config):
        stats = lint(config).stats
        assert stats.files_scanned == 3
        assert stats.total_constants == 7
        # ui.Card and ui.Stack
        assert stats.actually_used == 2
        assert stats.registry_refs_found == 2
        # btn, btn--primary, card__title, btn--sm (stack is already used)
        assert stats.available_for_migration == 4
        assert stats.completely_unused == 1

    def test_gate(self, config):
        result = lint(config)
        assert gate_failure(result, config) == "1 invalid class reference(s)"

    def test_exclude_and_limits(self, config):
        result = lint(replace(config, exclude=("page.html",), max_same_issues=1))
        assert {f.file for f in result.findings} == {"view.templ"}
        assert gate_failure(result, config) is None
        assert gate_failure(result, replace(config, strict=True)) == "strict mode: 2 issue(s) found"
