"""Stylesheet parsing: tokenizer, selector parser, intents and layer hints."""

from cssgen.stylesheet.intent import extract_intent
from cssgen.stylesheet.layers import infer_layer
from cssgen.stylesheet.lexer import tokenize
from cssgen.stylesheet.parser import ParseResult, parse_stylesheet

__all__ = [
    "ParseResult",
    "extract_intent",
    "infer_layer",
    "parse_stylesheet",
    "tokenize",
]
