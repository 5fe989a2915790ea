"""Lineage analysis over parsed class records.

Merges records declared in several files, links BEM modifiers and elements
to their base class, derives a unique identifier for every class and
computes property diffs against the parent.

The analyzer owns the record collection. Parent links are stored as class
names and resolved through :meth:`AnalysisResult.parent_of`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable

from cssgen.model.record import ClassRecord, PropertyDiff
from cssgen.stylesheet.parser import ParseResult

__all__ = [
    "AnalysisResult",
    "analyze",
    "detect_bem",
    "diff_properties",
    "merge_records",
    "to_identifier",
]

logger = logging.getLogger(__name__)

BEM_SEPARATORS = ("--", "__")


def detect_bem(name: str) -> tuple[str, bool]:
    """Split a BEM name into its base class.

    Returns ``(base, True)`` for modifiers (``btn--primary``) and elements
    (``card__header``), splitting on the first separator occurrence, and
    ``("", False)`` for standalone classes.
    """
    for separator in BEM_SEPARATORS:
        if separator in name:
            return name.split(separator, 1)[0], True
    return "", False


def to_identifier(name: str) -> str:
    """Derive a PascalCase identifier from a class name.

    >>> to_identifier("btn--primary")
    'BtnPrimary'
    >>> to_identifier("_internal-thing")
    '_InternalThing'
    """
    name = name.removeprefix(".")
    internal = name.startswith("_")
    name = name.removeprefix("_")

    parts = name.replace("_", "-").split("-")
    result = "".join(part[:1].upper() + part[1:] for part in parts if part)
    if internal:
        result = "_" + result
    return result


def diff_properties(child: ClassRecord, parent: ClassRecord) -> PropertyDiff:
    """Compare *child*'s properties against its *parent*'s."""
    added: dict[str, str] = {}
    changed: dict[str, str] = {}
    unchanged: list[str] = []
    for prop in sorted(child.properties):
        value = child.properties[prop]
        if prop not in parent.properties:
            added[prop] = value
        elif parent.properties[prop] != value:
            changed[prop] = value
        else:
            unchanged.append(prop)
    return PropertyDiff(added=added, changed=changed, unchanged=tuple(unchanged))


def _copy_record(record: ClassRecord) -> ClassRecord:
    return replace(
        record,
        properties=dict(record.properties),
        pseudo_states=list(record.pseudo_states),
        pseudo_deltas={state: dict(delta) for state, delta in record.pseudo_deltas.items()},
    )


def merge_records(records: Iterable[ClassRecord]) -> tuple[list[ClassRecord], list[str]]:
    """Fold records with the same name into one, in first-seen order.

    Later declarations overwrite earlier property values; pseudo-states and
    their deltas are unioned. A warning naming both files is produced when
    the duplicates come from different files.

    The returned records are copies; the input records are left untouched.
    """
    merged: dict[str, ClassRecord] = {}
    warnings: list[str] = []

    for record in records:
        existing = merged.get(record.name)
        if existing is None:
            merged[record.name] = _copy_record(record)
            continue

        existing.properties.update(record.properties)
        for state in record.pseudo_states:
            existing.add_pseudo_state(state)
        for state, delta in record.pseudo_deltas.items():
            existing.merge_delta(state, delta)
        if not existing.layer:
            existing.layer = record.layer
        if not existing.intent:
            existing.intent = record.intent

        if record.source_file != existing.source_file:
            message = (
                f"Duplicate class '{record.name}' found in {existing.source_file} "
                f"and {record.source_file} - properties merged"
            )
            logger.warning(message)
            warnings.append(message)

    return list(merged.values()), warnings


def _assign_identifiers(records: list[ClassRecord]) -> None:
    """Give every record a unique identifier.

    The first record computing a given identifier keeps it. Later ones get a
    numeric suffix starting at 2, skipping any name that is already taken.
    """
    natural = [to_identifier(r.name) for r in records]
    taken: set[str] = set(natural)
    seen: dict[str, int] = {}

    for record, identifier in zip(records, natural):
        count = seen.get(identifier, 0) + 1
        seen[identifier] = count
        if count == 1:
            record.generated_id = identifier
            continue

        suffix = count
        candidate = f"{identifier}{suffix}"
        while candidate in taken:
            suffix += 1
            candidate = f"{identifier}{suffix}"
        seen[identifier] = suffix
        taken.add(candidate)
        record.generated_id = candidate
        logger.debug(
            "Identifier collision: %s -> %s (class %r)", identifier, candidate, record.name
        )


@dataclass
class AnalysisResult:
    """Lineage-analyzed records plus the warnings collected on the way."""

    records: list[ClassRecord]
    warnings: list[str] = field(default_factory=list)
    declared_layers: list[str] = field(default_factory=list)
    files_parsed: int = 0
    _by_name: dict[str, ClassRecord] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._by_name = {r.name: r for r in self.records}

    @property
    def by_name(self) -> dict[str, ClassRecord]:
        return self._by_name

    def get(self, name: str) -> ClassRecord | None:
        return self._by_name.get(name)

    def parent_of(self, record: ClassRecord) -> ClassRecord | None:
        if record.parent is None:
            return None
        return self._by_name.get(record.parent)

    def public_records(self) -> list[ClassRecord]:
        return [r for r in self.records if not r.is_internal]

    def registry(self) -> dict[str, str]:
        """Identifier to class-name mapping for the public records."""
        return {r.generated_id: r.name for r in self.public_records()}

    def known_classes(self) -> frozenset[str]:
        return frozenset(self._by_name)

    @property
    def intents_extracted(self) -> int:
        return sum(1 for r in self.records if r.intent)


def analyze(results: Iterable[ParseResult]) -> AnalysisResult:
    """Run lineage analysis over the parse results of several stylesheets.

    Files are processed in sorted filename order, so the merge winner and
    identifier collision order do not depend on discovery order.
    """
    ordered = sorted(results, key=lambda r: r.filename)
    warnings: list[str] = []
    declared_layers: list[str] = []
    collected: list[ClassRecord] = []
    for result in ordered:
        warnings.extend(result.warnings)
        collected.extend(result.records)
        for layer in result.declared_layers:
            if layer not in declared_layers:
                declared_layers.append(layer)

    records, merge_warnings = merge_records(collected)
    warnings.extend(merge_warnings)

    by_name = {r.name: r for r in records}
    for record in records:
        base, is_bem = detect_bem(record.name)
        record.parent = base if is_bem and base in by_name else None

    for record in records:
        if record.parent is not None:
            record.property_diff = diff_properties(record, by_name[record.parent])

    _assign_identifiers(records)

    return AnalysisResult(
        records=records,
        warnings=warnings,
        declared_layers=declared_layers,
        files_parsed=len(ordered),
    )
