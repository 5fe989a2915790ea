"""Read a generated registry module back without importing it."""

from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path

from cssgen.errors import RegistryError

__all__ = ["Registry", "load_registry", "parse_registry"]

KNOWN_CLASSES_NAME = "ALL_CSS_CLASSES"


@dataclass(frozen=True)
class Registry:
    """Identifier constants and the complete known-class set."""

    constants: dict[str, str]
    known_classes: frozenset[str]


def _string_set(node: ast.expr, path: str) -> frozenset[str]:
    # frozenset({...}) or a bare set/list/tuple literal
    if isinstance(node, ast.Call) and node.args:
        node = node.args[0]
    try:
        values = ast.literal_eval(node)
    except (ValueError, TypeError) as e:
        raise RegistryError(f"{path}: {KNOWN_CLASSES_NAME} is not a literal") from e
    if not isinstance(values, (set, list, tuple, dict)) or not all(
        isinstance(v, str) for v in values
    ):
        raise RegistryError(f"{path}: {KNOWN_CLASSES_NAME} must only contain strings")
    return frozenset(values)


def parse_registry(source: str, path: str = "<registry>") -> Registry:
    """Extract ``Name = "class"`` constants and ``ALL_CSS_CLASSES`` from *source*."""
    try:
        tree = ast.parse(source, filename=path)
    except SyntaxError as e:
        raise RegistryError(f"{path}: cannot parse registry: {e.msg} (line {e.lineno})") from e

    constants: dict[str, str] = {}
    known: frozenset[str] | None = None
    for node in tree.body:
        if not isinstance(node, ast.Assign) or len(node.targets) != 1:
            continue
        target = node.targets[0]
        if not isinstance(target, ast.Name):
            continue
        if target.id == KNOWN_CLASSES_NAME:
            known = _string_set(node.value, path)
        elif isinstance(node.value, ast.Constant) and isinstance(node.value.value, str):
            constants[target.id] = node.value.value

    if known is None:
        known = frozenset(constants.values())
    return Registry(constants=constants, known_classes=known)


def load_registry(path: Path) -> Registry:
    """Load the registry at *path*; any failure is fatal."""
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RegistryError(f"cannot read registry {path}: {e.strerror or e}") from e
    return parse_registry(source, str(path))
