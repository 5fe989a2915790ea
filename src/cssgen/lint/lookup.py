"""O(1) lookup structures built from the registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

__all__ = ["Lookup", "build_lookup"]


@dataclass(frozen=True)
class Lookup:
    """Class-name lookups used by the resolver.

    Attributes:
        exact_match: Class string to identifier (1:1).
        known_classes: Every class declared anywhere in the stylesheets,
            including internal classes and classes without an identifier.
        constants: Identifier to class string, the inverse of ``exact_match``.
    """

    exact_match: Mapping[str, str]
    known_classes: frozenset[str]
    constants: Mapping[str, str]

    def identifier_for(self, class_name: str) -> str | None:
        return self.exact_match.get(class_name)

    def is_known(self, class_name: str) -> bool:
        return class_name in self.known_classes


def build_lookup(constants: Mapping[str, str], known_classes: Iterable[str] = ()) -> Lookup:
    """Build a :class:`Lookup` from identifier constants and known classes.

    Registered class strings are always known, even if *known_classes*
    omits them.
    """
    exact_match = {class_name: identifier for identifier, class_name in constants.items()}
    known = frozenset(known_classes) | frozenset(exact_match)
    return Lookup(exact_match=exact_match, known_classes=known, constants=dict(constants))
