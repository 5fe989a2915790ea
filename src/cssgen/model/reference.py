"""Class references found in source text."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """Where a reference was found.

    ``column`` is 1-based and points at the first character of the matched
    text. ``source_line`` is the raw line, kept for display.
    """

    file: str
    line: int
    column: int
    source_line: str = ""


@dataclass(frozen=True)
class ClassReference:
    """A single occurrence of a class string or registry identifier.

    Exactly one of ``identifier`` (registry reference) or ``class_string``
    (hardcoded, space-separated list as written) is meaningful, selected by
    ``is_registry_ref``.
    """

    location: SourceLocation
    is_registry_ref: bool = False
    identifier: str = ""
    class_string: str = ""

    def __post_init__(self) -> None:
        if self.is_registry_ref and not self.identifier:
            raise ValueError("Registry references need an identifier")

    @property
    def tokens(self) -> list[str]:
        return self.class_string.split()
