"""Semantic model of a stylesheet class: ClassRecord and PropertyDiff."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PropertyDiff:
    """How a BEM modifier/element differs from its base class.

    Attributes:
        added: Properties present on the child but not on the parent.
        changed: Properties present on both with a different child value.
        unchanged: Names of properties present on both with equal values,
            sorted for determinism.
    """

    added: dict[str, str] = field(default_factory=dict)
    changed: dict[str, str] = field(default_factory=dict)
    unchanged: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.changed or self.unchanged)


@dataclass
class ClassRecord:
    """One unique class name seen in the stylesheet(s).

    Records are mutable while a parse pass and the lineage analysis run, and
    are treated as read-only afterwards.

    ``parent`` holds the *name* of the base class rather than the record
    itself; it is resolved through the owning collection (see
    :meth:`cssgen.analysis.lineage.AnalysisResult.parent_of`).
    """

    name: str
    layer: str = ""
    properties: dict[str, str] = field(default_factory=dict)
    pseudo_states: list[str] = field(default_factory=list)
    pseudo_deltas: dict[str, dict[str, str]] = field(default_factory=dict)
    generated_id: str = ""
    parent: str | None = None
    property_diff: PropertyDiff | None = None
    intent: str = ""
    source_file: str = ""
    line: int = 0

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("ClassRecord name must be a non-empty string")

    @property
    def is_internal(self) -> bool:
        """Internal classes start with ``_`` and stay out of the public registry."""
        return self.name.startswith("_")

    def add_pseudo_state(self, state: str) -> None:
        if state not in self.pseudo_states:
            self.pseudo_states.append(state)

    def merge_delta(self, state: str, delta: dict[str, str]) -> None:
        """Record property changes that apply only under *state*."""
        if delta:
            self.pseudo_deltas.setdefault(state, {}).update(delta)
