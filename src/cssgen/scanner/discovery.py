"""Glob-based file discovery with exclude globs and .gitignore filtering."""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path, PurePosixPath
from typing import Iterable

import pathspec

from cssgen.config import REGISTRY_FILENAME
from cssgen.errors import DiscoveryError

__all__ = ["GENERATED_PATTERNS", "discover_files", "is_excluded", "load_gitignore"]

logger = logging.getLogger(__name__)

# Generated files are never scanned for references.
GENERATED_PATTERNS = (REGISTRY_FILENAME, "*_templ.go", "*.templ.go")

GITIGNORE = ".gitignore"


def is_excluded(relative: str, patterns: Iterable[str]) -> bool:
    """Whether the posix *relative* path matches one of the exclude globs.

    A leading ``**/`` also matches at the top level.
    """
    for pattern in patterns:
        if fnmatch.fnmatchcase(relative, pattern):
            return True
        if pattern.startswith("**/") and fnmatch.fnmatchcase(relative, pattern[3:]):
            return True
    return False


def load_gitignore(root: Path) -> pathspec.GitIgnoreSpec | None:
    """Compile ``<root>/.gitignore``, or None when it is missing or unreadable."""
    path = root / GITIGNORE
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable %s: %s", path, e)
        return None
    return pathspec.GitIgnoreSpec.from_lines(lines)


def _glob(root: Path, pattern: str) -> list[Path]:
    if not pattern:
        raise DiscoveryError("empty glob pattern")
    base = root
    path = Path(pattern)
    if path.is_absolute():
        base = Path(path.anchor)
        pattern = str(path.relative_to(path.anchor))
    try:
        return list(base.glob(pattern))
    except (ValueError, NotImplementedError) as e:
        raise DiscoveryError(f"invalid glob pattern {pattern!r}: {e}") from e


def discover_files(
    root: Path,
    patterns: Iterable[str],
    exclude: Iterable[str] = (),
    skip_generated: bool = True,
    use_gitignore: bool = True,
) -> list[Path]:
    """Expand *patterns* under *root* into a sorted, de-duplicated file list.

    Files matched by ``<root>/.gitignore`` are dropped when *use_gitignore*
    is set. Paths outside *root* are never checked against it.
    """
    exclude = tuple(exclude)
    ignored = load_gitignore(root) if use_gitignore else None
    found: dict[str, Path] = {}
    skipped = 0
    for pattern in patterns:
        for path in _glob(root, pattern):
            if not path.is_file():
                continue
            inside = True
            try:
                relative = path.relative_to(root).as_posix()
            except ValueError:
                relative = path.as_posix()
                inside = False
            if relative in found:
                continue
            name = PurePosixPath(relative).name
            if skip_generated and any(fnmatch.fnmatchcase(name, g) for g in GENERATED_PATTERNS):
                skipped += 1
                continue
            if inside and ignored is not None and ignored.match_file(relative):
                skipped += 1
                continue
            if is_excluded(relative, exclude):
                skipped += 1
                continue
            found[relative] = path

    if skipped:
        logger.debug("Skipped %d generated, ignored or excluded files", skipped)
    return [found[key] for key in sorted(found)]
