"""Selector-level parser for stylesheets.

Walks the token stream from :mod:`cssgen.stylesheet.lexer` and builds one
:class:`~cssgen.model.record.ClassRecord` per class name:

    @layer components {
        .btn { color: red; }
        .btn:hover, .btn--primary { background: blue; }
        .card:not(.card--flat) { box-shadow: 0 1px 2px black; }
    }

Only class selectors are modelled. Declarations apply to every class in a
compound or comma-separated selector; pseudo-classes attach to the most
recently opened class; classes inside ``:not()``/``:is()``/``:where()``/
``:has()`` are recorded as known classes without declarations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from cssgen.errors import ParseError
from cssgen.model.record import ClassRecord
from cssgen.stylesheet.intent import extract_intent
from cssgen.stylesheet.lexer import Token, TokenStream

__all__ = ["ParseResult", "parse_stylesheet"]

logger = logging.getLogger(__name__)

# Functional pseudo-classes whose argument is a selector list.
SELECTOR_LIST_FUNCTIONS = frozenset({"not", "is", "where", "has", "matches"})

_OPENERS = frozenset({"LPAR", "FUNCTION"})


@dataclass
class ParseResult:
    """Outcome of parsing one stylesheet."""

    filename: str
    records: list[ClassRecord] = field(default_factory=list)
    declared_layers: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def class_names(self) -> list[str]:
        return [r.name for r in self.records]

    def get(self, name: str) -> ClassRecord | None:
        for record in self.records:
            if record.name == name:
                return record
        return None


@dataclass
class _Selector:
    class_name: str
    pseudo_states: list[str] = field(default_factory=list)
    declares: bool = True


@dataclass
class _SelectorGroup:
    selectors: list[_Selector]
    line: int
    layer: str

    @property
    def declaring(self) -> list[_Selector]:
        return [s for s in self.selectors if s.declares]


@dataclass
class _Rule:
    group: _SelectorGroup
    properties: dict[str, str]
    nested: list[_Rule]


# ---------------------------------------------------------------------------
# Token helpers
# ---------------------------------------------------------------------------


def _strip(tokens: list[Token]) -> list[Token]:
    """Drop leading and trailing whitespace tokens."""
    start, end = 0, len(tokens)
    while start < end and tokens[start].type == "WS":
        start += 1
    while end > start and tokens[end - 1].type == "WS":
        end -= 1
    return tokens[start:end]


def _join(tokens: list[Token]) -> str:
    """Re-join value tokens with single spaces between words."""
    text = "".join(" " if t.type == "WS" else str(t) for t in tokens)
    return " ".join(text.split())


def _unescape(name: str) -> str:
    r"""Resolve simple CSS escapes in an identifier (``sm\:flex`` -> ``sm:flex``)."""
    if "\\" not in name:
        return name
    out: list[str] = []
    i = 0
    while i < len(name):
        ch = name[i]
        if ch == "\\" and i + 1 < len(name):
            out.append(name[i + 1])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _is_class_start(tokens: list[Token], i: int) -> bool:
    return (
        tokens[i].type == "DELIM"
        and tokens[i] == "."
        and i + 1 < len(tokens)
        and tokens[i + 1].type == "IDENT"
    )


def _matching(tokens: list[Token], start: int, opener: set[str], closer: str) -> int:
    """Index of the token closing the group opened at *start*.

    Nesting is tracked with a depth counter. Returns ``len(tokens)`` when the
    group is never closed.
    """
    depth = 1
    i = start + 1
    while i < len(tokens):
        kind = tokens[i].type
        if kind in opener:
            depth += 1
        elif kind == closer:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return len(tokens)


def _classes_in(tokens: list[Token]) -> list[str]:
    """Every ``.name`` class selector in *tokens*, skipping attribute selectors."""
    names: list[str] = []
    i = 0
    while i < len(tokens):
        if tokens[i].type == "LSQB":
            i = _matching(tokens, i, {"LSQB"}, "RSQB") + 1
            continue
        if _is_class_start(tokens, i):
            names.append(_unescape(str(tokens[i + 1])))
            i += 2
            continue
        i += 1
    return names


# ---------------------------------------------------------------------------
# Selector parsing
# ---------------------------------------------------------------------------


def _attach(selectors: list[_Selector], current: list[int], state: str) -> None:
    for idx in current:
        if state not in selectors[idx].pseudo_states:
            selectors[idx].pseudo_states.append(state)


def _parse_pseudo(
    tokens: list[Token], i: int, selectors: list[_Selector], current: list[int]
) -> int:
    """Consume a pseudo-class/element starting at the colon at *i*."""
    j = i + 1
    prefix = ":"
    if j < len(tokens) and tokens[j].type == "COLON":
        prefix = "::"
        j += 1
    if j >= len(tokens):
        return j

    tok = tokens[j]
    if tok.type == "IDENT":
        _attach(selectors, current, prefix + str(tok).lower())
        return j + 1

    if tok.type == "FUNCTION":
        name = str(tok)[:-1].lower()
        end = _matching(tokens, j, set(_OPENERS), "RPAR")
        inner = tokens[j + 1 : end]
        if prefix == ":" and name in SELECTOR_LIST_FUNCTIONS:
            for class_name in _classes_in(inner):
                selectors.append(_Selector(class_name, declares=False))
        else:
            _attach(selectors, current, f"{prefix}{name}({_join(inner)})")
        return end + 1

    return j


def _parse_selectors(
    tokens: list[Token], parent: _SelectorGroup | None = None
) -> list[_Selector]:
    """Extract class selectors (with their pseudo tags) from a selector list.

    ``current`` holds the indices of the selectors that the next pseudo-class
    attaches to: the most recently opened class, or every parent class after
    a nesting ``&``. A comma starts a new branch with nothing open.
    """
    selectors: list[_Selector] = []
    current: list[int] = []
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        kind = tok.type

        if _is_class_start(tokens, i):
            selectors.append(_Selector(_unescape(str(tokens[i + 1]))))
            current = [len(selectors) - 1]
            i += 2
            continue

        if kind == "DELIM" and tok == "&" and parent is not None:
            current = []
            for sel in parent.declaring:
                selectors.append(_Selector(sel.class_name, list(sel.pseudo_states)))
                current.append(len(selectors) - 1)
            i += 1
            continue

        if kind == "COLON":
            i = _parse_pseudo(tokens, i, selectors, current)
            continue

        if kind == "LSQB":
            i = _matching(tokens, i, {"LSQB"}, "RSQB") + 1
            continue

        if kind in _OPENERS:
            i = _matching(tokens, i, set(_OPENERS), "RPAR") + 1
            continue

        if kind == "COMMA":
            current = []
        i += 1
    return selectors


def _layer_names(tokens: list[Token]) -> list[str]:
    """Names in an ``@layer`` prelude: ``a, b.c`` -> ``["a", "b.c"]``."""
    names: list[str] = []
    buf: list[str] = []
    for tok in tokens:
        if tok.type == "COMMA":
            if buf:
                names.append("".join(buf))
            buf = []
        elif tok.type == "IDENT" or (tok.type == "DELIM" and tok == "."):
            buf.append(str(tok))
    if buf:
        names.append("".join(buf))
    return names


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class _StylesheetParser:
    def __init__(self, source: str, filename: str, layer_hint: str) -> None:
        self._stream = TokenStream(source)
        self._filename = filename
        self._layer_hint = layer_hint
        self._layers: list[str] = []
        self._depth = 0
        self._last_line = 1
        self._last_column: int | None = None
        self.records: dict[str, ClassRecord] = {}
        self.declared_layers: list[str] = []

    # ---- token access ----

    def _next(self) -> Token | None:
        tok = self._stream.next()
        if tok is not None:
            self._last_line = tok.line or self._last_line
            self._last_column = tok.column
        return tok

    def _eof(self, what: str) -> ParseError:
        return ParseError(
            f"unexpected end of input {what}", line=self._last_line, column=self._last_column
        )

    @property
    def _current_layer(self) -> str:
        return self._layers[-1] if self._layers else ""

    # ---- rule lists ----

    def parse(self) -> None:
        self._parse_rule_list(nested=False)

    def _parse_rule_list(self, nested: bool) -> None:
        """Parse rules until the closing brace (nested) or end of input."""
        prelude: list[Token] = []
        paren = 0
        while True:
            tok = self._next()
            if tok is None:
                if nested:
                    raise self._eof(f"inside block (depth {self._depth})")
                if _strip(prelude):
                    raise self._eof("after selector")
                return

            kind = tok.type
            if kind in _OPENERS:
                paren += 1
            elif kind == "RPAR":
                paren = max(0, paren - 1)
            elif paren == 0 and kind == "RBRACE":
                if nested:
                    return
                logger.debug("%s:%d: ignoring unmatched '}'", self._filename, tok.line)
                prelude = []
                continue
            elif paren == 0 and kind == "SEMICOLON":
                self._statement(_strip(prelude))
                prelude = []
                continue
            elif paren == 0 and kind == "LBRACE":
                self._block(_strip(prelude))
                prelude = []
                continue
            prelude.append(tok)

    def _statement(self, prelude: list[Token]) -> None:
        """Handle a ``;``-terminated at-rule such as ``@layer a, b;``."""
        if prelude and prelude[0].type == "AT_KEYWORD" and prelude[0].lower() == "@layer":
            for name in _layer_names(prelude[1:]):
                full = self._qualify_layer(name)
                if full not in self.declared_layers:
                    self.declared_layers.append(full)

    def _qualify_layer(self, name: str) -> str:
        if not name:
            return self._current_layer
        if self._current_layer:
            return f"{self._current_layer}.{name}"
        return name

    def _block(self, prelude: list[Token]) -> None:
        if prelude and prelude[0].type == "AT_KEYWORD":
            self._at_block(prelude)
            return
        group = self._group(prelude, parent=None)
        rule = self._parse_rule_body(group)
        self._commit(rule)

    def _at_block(self, prelude: list[Token]) -> None:
        """Enter an at-rule block; ``@layer`` opens a new layer scope."""
        is_layer = prelude[0].lower() == "@layer"
        if is_layer:
            names = _layer_names(prelude[1:])
            layer = self._qualify_layer(names[0] if names else "")
            if layer and layer not in self.declared_layers:
                self.declared_layers.append(layer)
            self._layers.append(layer)
        self._depth += 1
        try:
            self._parse_rule_list(nested=True)
        finally:
            self._depth -= 1
            if is_layer:
                self._layers.pop()

    # ---- qualified rules ----

    def _group(self, prelude: list[Token], parent: _SelectorGroup | None) -> _SelectorGroup:
        line = prelude[0].line if prelude else self._last_line
        return _SelectorGroup(
            selectors=_parse_selectors(prelude, parent),
            line=line or 0,
            layer=self._current_layer,
        )

    def _parse_rule_body(self, group: _SelectorGroup) -> _Rule:
        """Read declarations (and nested rules) up to the matching ``}``."""
        properties: dict[str, str] = {}
        nested: list[_Rule] = []
        pending: list[Token] = []
        paren = 0
        self._depth += 1
        try:
            while True:
                tok = self._next()
                if tok is None:
                    raise self._eof(f"in declaration block opened on line {group.line}")

                kind = tok.type
                if kind in _OPENERS:
                    paren += 1
                elif kind == "RPAR":
                    paren = max(0, paren - 1)
                elif paren == 0 and kind in ("SEMICOLON", "RBRACE"):
                    _add_declaration(pending, properties)
                    pending = []
                    if kind == "RBRACE":
                        return _Rule(group, properties, nested)
                    continue
                elif paren == 0 and kind == "LBRACE":
                    nested.append(self._nested_rule(_strip(pending), group))
                    pending = []
                    continue
                pending.append(tok)
        finally:
            self._depth -= 1

    def _nested_rule(self, prelude: list[Token], parent: _SelectorGroup) -> _Rule:
        if prelude and prelude[0].type == "AT_KEYWORD":
            # @media/@supports inside a rule apply to the enclosing selectors.
            group = _SelectorGroup(
                selectors=[
                    _Selector(s.class_name, list(s.pseudo_states)) for s in parent.declaring
                ],
                line=parent.line,
                layer=parent.layer,
            )
        else:
            group = self._group(prelude, parent)
        return self._parse_rule_body(group)

    # ---- records ----

    def _record(self, name: str, group: _SelectorGroup) -> ClassRecord:
        record = self.records.get(name)
        if record is None:
            record = ClassRecord(
                name=name,
                layer=group.layer or self._layer_hint,
                source_file=self._filename,
                line=group.line,
            )
            self.records[name] = record
        return record

    def _commit(self, rule: _Rule) -> None:
        """Apply a fully parsed rule (and then its nested rules) to the records."""
        for sel in rule.group.selectors:
            record = self._record(sel.class_name, rule.group)
            if not sel.declares:
                continue
            if sel.pseudo_states:
                for state in sel.pseudo_states:
                    delta = {
                        prop: value
                        for prop, value in rule.properties.items()
                        if record.properties.get(prop) != value
                    }
                    record.merge_delta(state, delta)
                    record.add_pseudo_state(state)
            else:
                record.properties.update(rule.properties)
        for child in rule.nested:
            self._commit(child)


def _add_declaration(tokens: list[Token], properties: dict[str, str]) -> None:
    """Parse ``name: value`` from *tokens* into *properties* (last one wins)."""
    tokens = _strip(tokens)
    if not tokens or tokens[0].type != "IDENT":
        return
    rest = _strip(tokens[1:])
    if not rest or rest[0].type != "COLON":
        return
    value = _join(rest[1:])
    if value:
        properties[str(tokens[0])] = value


def parse_stylesheet(
    source: str,
    filename: str = "<string>",
    layer_hint: str = "",
    *,
    extract_intents: bool = True,
) -> ParseResult:
    """Parse stylesheet *source* into class records.

    *layer_hint* is used for classes declared outside any ``@layer`` block.
    Malformed input never raises: parsing stops, the classes committed so far
    are kept, and a warning naming the file is returned.
    """
    parser = _StylesheetParser(source, filename, layer_hint)
    result = ParseResult(filename=filename)
    try:
        parser.parse()
    except ParseError as exc:
        message = f"Failed to parse {filename}: {exc}"
        logger.warning(message)
        result.warnings.append(message)

    result.records = list(parser.records.values())
    result.declared_layers = list(parser.declared_layers)

    if extract_intents:
        lines = source.splitlines()
        for record in result.records:
            record.intent = extract_intent(lines, record.line)
    return result
