"""Lark-backed tokenizer for stylesheet text."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Iterator

from lark import Lark, Token
from lark.exceptions import LarkError

from cssgen.errors import ParseError

__all__ = ["Token", "TokenStream", "tokenize"]

GRAMMAR_PATH = Path(__file__).parent / "css.lark"


@lru_cache(maxsize=1)
def _lark() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        lexer="basic",
        start="start",
    )


def tokenize(source: str) -> Iterator[Token]:
    """Yield tokens for *source*, comments dropped.

    Lexer failures surface as :class:`ParseError` at the point they occur,
    so a consumer keeps whatever it built from the tokens before it.
    """
    try:
        yield from _lark().lex(source)
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise ParseError(str(e), line=line, column=column) from e


class TokenStream:
    """Token iterator that returns None once input is exhausted."""

    def __init__(self, source: str) -> None:
        self._tokens = tokenize(source)
        self._exhausted = False

    def next(self) -> Token | None:
        """Return the next token, or None at end of input."""
        if self._exhausted:
            return None
        try:
            return next(self._tokens)
        except StopIteration:
            self._exhausted = True
            return None
