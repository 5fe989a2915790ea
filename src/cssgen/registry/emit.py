"""Render the analyzed class records as an importable Python module.

The generated module looks like::

    # Code generated by cssgen. DO NOT EDIT.
    ...

    # Btn: btn
    # @layer components
    #
    # Visual:
    #   color: red
    Btn = "btn"

    ALL_CSS_CLASSES = frozenset({
        "btn",
    })

Output is a pure function of the analysis and the generate config: no
timestamps, records in analysis order, classes sorted.
"""

from __future__ import annotations

import keyword
import logging
from dataclasses import dataclass, field

from cssgen.analysis.categories import (
    VENDOR_PREFIXES,
    categorize_properties,
    is_token_value,
)
from cssgen.analysis.lineage import AnalysisResult
from cssgen.config import GenerateConfig
from cssgen.model.record import ClassRecord

__all__ = ["RenderedRegistry", "render_registry", "write_registry"]

logger = logging.getLogger(__name__)

HEADER = "# Code generated by cssgen. DO NOT EDIT."


@dataclass(frozen=True)
class RenderedRegistry:
    text: str
    constants: int
    skipped: list[str] = field(default_factory=list)


def _is_valid_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _comment_value(value: str) -> str:
    return " ".join(value.split())


def _visible(properties: dict[str, str], show_internal: bool) -> dict[str, str]:
    if show_internal:
        return properties
    return {k: v for k, v in properties.items() if not k.startswith(VENDOR_PREFIXES)}


def _limited(items: list[str], limit: int) -> list[str]:
    if limit and len(items) > limit:
        return items[:limit] + [f"... +{len(items) - limit} more"]
    return items


def _markdown_lines(
    record: ClassRecord, parent: ClassRecord | None, config: GenerateConfig
) -> list[str]:
    lines = [f"{record.generated_id}: {record.name}"]
    if record.layer:
        lines.append(f"@layer {record.layer}")
    if record.intent:
        lines.append(f"Intent: {record.intent}")

    grouped = categorize_properties(_visible(record.properties, config.show_internal))
    if grouped:
        lines.append("")
    for category, props in grouped.items():
        entries = [
            f"{p.name}: {_comment_value(p.value)}" + (" (token)" if p.is_token else "")
            for p in props
        ]
        lines.append(f"{category.value}:")
        lines.extend(f"  {entry}" for entry in _limited(entries, config.property_limit))

    if record.pseudo_states:
        lines.append("")
        lines.append("States:")
        for state in record.pseudo_states:
            delta = record.pseudo_deltas.get(state, {})
            changes = ", ".join(f"{k}: {_comment_value(v)}" for k, v in sorted(delta.items()))
            lines.append(f"  {state}" + (f" ({changes})" if changes else ""))

    if parent is not None:
        lines.append("")
        lines.append(f"Extends {parent.generated_id} ({parent.name})")
        diff = record.property_diff
        if diff is not None and not diff.is_empty:
            if diff.added:
                lines.append("  added: " + ", ".join(diff.added))
            if diff.changed:
                lines.append("  changed: " + ", ".join(diff.changed))
            if diff.unchanged:
                lines.append("  unchanged: " + ", ".join(diff.unchanged))
    return lines


def _compact_lines(
    record: ClassRecord, parent: ClassRecord | None, config: GenerateConfig
) -> list[str]:
    parts = [record.name]
    if record.layer:
        parts.append(f"@layer {record.layer}")
    props = _visible(record.properties, config.show_internal)
    if props:
        entries = [f"{k}: {_comment_value(v)}" for k, v in sorted(props.items())]
        parts.append("; ".join(_limited(entries, config.property_limit)))
    tokens = sum(1 for v in props.values() if is_token_value(v))
    if tokens:
        parts.append(f"{tokens} token{'s' if tokens != 1 else ''}")
    if record.pseudo_states:
        parts.append(" ".join(record.pseudo_states))
    if parent is not None:
        parts.append(f"extends {parent.generated_id}")
    lines = [" | ".join(parts)]
    if record.intent:
        lines.append(f"Intent: {record.intent}")
    return lines


def render_registry(analysis: AnalysisResult, config: GenerateConfig) -> RenderedRegistry:
    """Render *analysis* as Python source.

    Internal classes get no constant. Classes whose identifier is not a
    valid Python name are skipped with a warning; they stay in
    ``ALL_CSS_CLASSES`` so references to them are still accepted.
    """
    render = _compact_lines if config.comment_format == "compact" else _markdown_lines
    out = [
        HEADER,
        f'"""CSS class registry for package ``{config.package}``.',
        "",
        f"Reference classes as ``{config.package}.Name``; every class declared in",
        "the stylesheets, including internal ones, is listed in ALL_CSS_CLASSES.",
    ]
    if analysis.declared_layers:
        out.extend(["", "Cascade layers: " + ", ".join(analysis.declared_layers) + "."])
    out.extend(['"""', ""])

    skipped: list[str] = []
    constants = 0
    for record in analysis.public_records():
        if not _is_valid_identifier(record.generated_id):
            message = (
                f"Skipping class '{record.name}': {record.generated_id!r} "
                "is not a valid Python identifier"
            )
            logger.warning(message)
            skipped.append(message)
            continue

        out.append("")
        for line in render(record, analysis.parent_of(record), config):
            out.append(f"# {line}".rstrip())
        out.append(f"{record.generated_id} = {_quote(record.name)}")
        constants += 1

    out.append("")
    out.append("")
    out.append("ALL_CSS_CLASSES = frozenset({")
    for name in sorted(analysis.known_classes()):
        out.append(f"    {_quote(name)},")
    out.append("})")
    out.append("")

    return RenderedRegistry(text="\n".join(out), constants=constants, skipped=skipped)


def write_registry(analysis: AnalysisResult, config: GenerateConfig) -> RenderedRegistry:
    """Render and write the registry to ``config.registry_path``."""
    rendered = render_registry(analysis, config)
    path = config.registry_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(rendered.text, encoding="utf-8")
    logger.debug("Wrote %d constants to %s", rendered.constants, path)
    return rendered

