"""Exception types raised by cssgen.

Only environmental failures are raised to callers. Data-quality problems
(typos, merge conflicts, unparseable stylesheets) are returned as findings or
warnings alongside the primary result.
"""

from __future__ import annotations


class CssgenError(Exception):
    """Base class for all cssgen errors."""


class ParseError(CssgenError):
    """Raised when stylesheet source cannot be tokenized or parsed."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.line is not None and self.column is not None:
            return f"{message} (line {self.line}, column {self.column})"
        if self.line is not None:
            return f"{message} (line {self.line})"
        return message


class RegistryError(CssgenError):
    """Raised when the generated registry module cannot be read."""


class DiscoveryError(CssgenError):
    """Raised when a file discovery pattern is invalid."""
