"""Line-based scanning of source files for class references."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from cssgen.model.reference import ClassReference, SourceLocation
from cssgen.scanner.matchers import PrecedenceTable, build_matchers

__all__ = ["ScanResult", "scan_file", "scan_files", "scan_text"]

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    references: list[ClassReference] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def scan_text(
    text: str, filename: str, table: PrecedenceTable | None = None
) -> list[ClassReference]:
    """Extract every class reference from *text*, in line order."""
    table = table or build_matchers()
    references: list[ClassReference] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        for match in table.match_line(line):
            location = SourceLocation(
                file=filename, line=lineno, column=match.column, source_line=line
            )
            references.append(
                ClassReference(
                    location=location,
                    is_registry_ref=match.is_registry_ref,
                    identifier=match.identifier,
                    class_string=match.class_string,
                )
            )
    return references


def scan_file(
    path: Path, table: PrecedenceTable | None = None, display_name: str | None = None
) -> list[ClassReference]:
    """Scan one file. I/O and decoding errors propagate."""
    text = path.read_text(encoding="utf-8")
    return scan_text(text, display_name or path.as_posix(), table)


def scan_files(
    paths: Iterable[Path], table: PrecedenceTable | None = None, root: Path | None = None
) -> ScanResult:
    """Scan *paths* in order; unreadable files are skipped with a warning.

    File names in references are relative to *root* when given.
    """
    table = table or build_matchers()
    result = ScanResult()
    for path in paths:
        name = path.as_posix()
        if root is not None:
            try:
                name = path.relative_to(root).as_posix()
            except ValueError:
                pass
        try:
            refs = scan_file(path, table, display_name=name)
        except (OSError, UnicodeDecodeError) as e:
            message = f"Skipping {name}: {e}"
            logger.warning(message)
            result.warnings.append(message)
            continue
        logger.debug("Scanned %s: %d references", name, len(refs))
        result.references.extend(refs)
    return result
