"""Finding model: structured lint messages about class usage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a finding."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Finding:
    """A single lint finding.

    Attributes:
        linter: Name of the linter that produced the finding.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        file: Path of the file the finding refers to.
        line: 1-based line number.
        column: 1-based column of the offending text.
        source_line: The raw source line, if available.
    """

    linter: str
    severity: Severity
    message: str
    file: str
    line: int
    column: int
    source_line: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def sort_key(self) -> tuple[str, int, int]:
        return (self.file, self.line, self.column)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}: {self.message} ({self.linter})"
