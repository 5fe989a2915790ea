"""Token classification and suggestion building for hardcoded class strings.

Every whitespace-separated token of a class string is classified as:

* ``MATCHED``: declared and registered, suggest its identifier;
* ``BYPASSED``: declared but without an identifier, silently allowed;
* ``ZOMBIE``: not declared anywhere, always an error.

A string containing a zombie token is never offered as a replacement.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from cssgen.lint.lookup import Lookup

__all__ = [
    "Classification",
    "Suggestion",
    "TokenAnalysis",
    "classify",
    "format_suggestion",
    "has_internal_classes",
    "locate_token_column",
    "resolve",
]

_TOKEN = re.compile(r"\S+")


class Classification(Enum):
    MATCHED = "matched"
    BYPASSED = "bypassed"
    ZOMBIE = "zombie"


@dataclass(frozen=True)
class TokenAnalysis:
    """Classification of one token; ``offset`` is its index in the class string."""

    token: str
    offset: int
    classification: Classification
    identifier: str = ""


@dataclass(frozen=True)
class Suggestion:
    """Best replacement for a class string.

    ``identifiers`` follow token order. ``exact`` is set when the whole
    string was registered verbatim, in which case ``tokens`` is empty.
    """

    identifiers: tuple[str, ...] = ()
    tokens: tuple[TokenAnalysis, ...] = ()
    exact: bool = False

    @property
    def invalid(self) -> tuple[TokenAnalysis, ...]:
        return tuple(t for t in self.tokens if t.classification is Classification.ZOMBIE)

    @property
    def unmatched(self) -> tuple[TokenAnalysis, ...]:
        return tuple(t for t in self.tokens if t.classification is not Classification.MATCHED)

    @property
    def has_invalid(self) -> bool:
        return bool(self.invalid)

    @property
    def has_unmatched(self) -> bool:
        return bool(self.unmatched)

    @property
    def is_empty(self) -> bool:
        return not self.identifiers


def classify(token: str, lookup: Lookup) -> Classification:
    if not lookup.is_known(token):
        return Classification.ZOMBIE
    if lookup.identifier_for(token) is not None:
        return Classification.MATCHED
    return Classification.BYPASSED


def resolve(class_string: str, lookup: Lookup) -> Suggestion:
    """Resolve *class_string* to the identifiers that would replace it."""
    exact = lookup.identifier_for(class_string)
    if exact is not None:
        return Suggestion(identifiers=(exact,), exact=True)

    identifiers: list[str] = []
    analysis: list[TokenAnalysis] = []
    for m in _TOKEN.finditer(class_string):
        token = m.group()
        classification = classify(token, lookup)
        identifier = ""
        if classification is Classification.MATCHED:
            identifier = lookup.exact_match[token]
            identifiers.append(identifier)
        analysis.append(TokenAnalysis(token, m.start(), classification, identifier))
    return Suggestion(identifiers=tuple(identifiers), tokens=tuple(analysis))


def format_suggestion(suggestion: Suggestion, package: str = "ui") -> str:
    """``ui.Btn`` for one identifier, ``{ ui.Btn, ui.BtnSm }`` for several."""
    if not suggestion.identifiers:
        return "(no suggestion)"
    names = [f"{package}.{identifier}" for identifier in suggestion.identifiers]
    if len(names) == 1:
        return names[0]
    return "{ " + ", ".join(names) + " }"


def has_internal_classes(class_string: str) -> bool:
    """True when any token is internal (``_``-prefixed)."""
    return any(token.startswith("_") for token in class_string.split())


def locate_token_column(
    source_line: str, class_string: str, column: int, offset: int, token: str
) -> int:
    """1-based column of *token* in *source_line*.

    The class string is expected to start at *column*; *offset* is the
    token's index inside it. When the class string is not found there (for
    example because it was written with escapes), the token is searched for
    as a whole word in the line, and failing that *column* is returned.
    """
    start = column - 1
    if 0 <= start and source_line[start : start + len(class_string)] == class_string:
        return column + offset

    word = re.compile(rf"(?<![\w-]){re.escape(token)}(?![\w-])")
    m = word.search(source_line)
    if m:
        return m.start() + 1
    return column
