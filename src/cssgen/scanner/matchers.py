"""Pattern matchers that find class references in a single line of source.

Matchers are grouped in tiers. Tiers are tried in order and the first tier
whose trigger appears on a line owns it: the matchers of later tiers never
see that line. Within a tier matchers are independent and their results
are concatenated. This keeps ``templ.Classes("btn")`` from also being
reported by the generic string matchers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Protocol

__all__ = [
    "BuilderCallMatcher",
    "DEFAULT_PREFIX",
    "LineMatch",
    "MatcherTier",
    "PrecedenceTable",
    "RegexMatcher",
    "build_matchers",
    "split_arguments",
]

DEFAULT_PREFIX = "ui"

COMMENT_LINE = re.compile(r"^\s*(?://|#)")


@dataclass(frozen=True)
class LineMatch:
    """A class string or registry identifier found at a 1-based column."""

    column: int
    class_string: str = ""
    identifier: str = ""

    @property
    def is_registry_ref(self) -> bool:
        return bool(self.identifier)


class Matcher(Protocol):
    name: str

    def triggers(self, line: str) -> bool: ...

    def find(self, line: str) -> Iterator[LineMatch]: ...


@dataclass(frozen=True)
class RegexMatcher:
    """Match a regex whose first group is a class string or an identifier."""

    name: str
    pattern: re.Pattern[str]
    is_registry: bool = False

    def triggers(self, line: str) -> bool:
        return self.pattern.search(line) is not None

    def find(self, line: str) -> Iterator[LineMatch]:
        for m in self.pattern.finditer(line):
            value = m.group(1)
            if not value.strip():
                continue
            column = m.start(1) + 1
            if self.is_registry:
                yield LineMatch(column=m.start() + 1, identifier=value)
            else:
                yield LineMatch(column=column, class_string=value)


def split_arguments(text: str, start: int = 0) -> tuple[list[tuple[str, int]], int]:
    """Split call arguments beginning at *start* (just after the ``(``).

    Returns ``(arguments, end)`` where each argument is ``(text, offset)``
    with the offset of its first character in *text*, and *end* is the
    index of the closing parenthesis (or ``len(text)`` when the call runs
    past the end of the line). Commas inside nested calls and string
    literals do not split.
    """
    args: list[tuple[str, int]] = []
    depth = 0
    quote = ""
    arg_start = start
    i = start
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = ""
        elif ch in "\"'`":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            if depth == 0:
                break
            depth -= 1
        elif ch == "," and depth == 0:
            args.append((text[arg_start:i], arg_start))
            arg_start = i + 1
        i += 1
    args.append((text[arg_start:i], arg_start))

    stripped: list[tuple[str, int]] = []
    for arg, offset in args:
        lead = len(arg) - len(arg.lstrip())
        if arg.strip():
            stripped.append((arg.strip(), offset + lead))
    return stripped, i


@dataclass(frozen=True)
class BuilderCallMatcher:
    """Match a class-building call such as ``templ.Classes("a", ui.B)``.

    String literal arguments become class strings and ``<prefix>.Name``
    arguments become registry references. With ``first_only`` only the
    first argument is considered (``templ.KV("active", cond)``).
    """

    name: str
    call: str
    prefix: str = DEFAULT_PREFIX
    first_only: bool = False

    def triggers(self, line: str) -> bool:
        return f"{self.call}(" in line

    def find(self, line: str) -> Iterator[LineMatch]:
        needle = f"{self.call}("
        registry = re.compile(rf"{re.escape(self.prefix)}\.([A-Z][A-Za-z0-9_]*)")
        pos = line.find(needle)
        while pos != -1:
            args, end = split_arguments(line, pos + len(needle))
            if self.first_only:
                args = args[:1]
            for arg, offset in args:
                if len(arg) >= 2 and arg[0] == arg[-1] and arg[0] in "\"'`":
                    value = arg[1:-1]
                    if value.strip():
                        yield LineMatch(column=offset + 2, class_string=value)
                    continue
                m = registry.fullmatch(arg)
                if m:
                    yield LineMatch(column=offset + 1, identifier=m.group(1))
            pos = line.find(needle, end)


@dataclass(frozen=True)
class MatcherTier:
    """Matchers that share a precedence level.

    A tier with ``exclusive`` set claims every line that one of its
    matchers triggers on.
    """

    name: str
    matchers: tuple[Matcher, ...]
    exclusive: bool = False

    def triggers(self, line: str) -> bool:
        return any(m.triggers(line) for m in self.matchers)


@dataclass(frozen=True)
class PrecedenceTable:
    tiers: tuple[MatcherTier, ...]

    def match_line(self, line: str) -> list[LineMatch]:
        """All references on *line*; comment lines yield nothing."""
        if COMMENT_LINE.match(line):
            return []
        found: list[LineMatch] = []
        for tier in self.tiers:
            if tier.exclusive and not tier.triggers(line):
                continue
            for matcher in tier.matchers:
                found.extend(matcher.find(line))
            if tier.exclusive:
                break
        return found


def build_matchers(prefix: str = DEFAULT_PREFIX) -> PrecedenceTable:
    """The default precedence table for registry name *prefix*."""
    builders = MatcherTier(
        name="builder calls",
        matchers=(
            BuilderCallMatcher("templ.Classes", "templ.Classes", prefix),
            BuilderCallMatcher("templ.KV", "templ.KV", prefix, first_only=True),
        ),
        exclusive=True,
    )
    generic = MatcherTier(
        name="generic",
        matchers=(
            RegexMatcher(
                "registry identifier",
                re.compile(rf"\b{re.escape(prefix)}\.([A-Z][A-Za-z0-9_]*)"),
                is_registry=True,
            ),
            RegexMatcher("class attribute", re.compile(r'\bclass="([^"]+)"')),
            RegexMatcher("class attribute (single quotes)", re.compile(r"\bclass='([^']+)'")),
            RegexMatcher("class expression", re.compile(r'\bclass=\{\s*"([^"]+)"')),
            RegexMatcher("ds.Class call", re.compile(r'\bds\.Class\(\s*"([^"]+)"')),
        ),
    )
    return PrecedenceTable(tiers=(builders, generic))
