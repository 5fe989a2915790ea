"""Property categories used to group declarations in registry comments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PropertyCategory(Enum):
    VISUAL = "Visual"
    LAYOUT = "Layout"
    TYPOGRAPHY = "Typography"
    EFFECTS = "Effects"
    INTERNAL = "Internal"


CATEGORY_ORDER = (
    PropertyCategory.VISUAL,
    PropertyCategory.LAYOUT,
    PropertyCategory.TYPOGRAPHY,
    PropertyCategory.EFFECTS,
    PropertyCategory.INTERNAL,
)

VENDOR_PREFIXES = ("-webkit-", "-moz-", "-ms-", "-o-")
TOKEN_MARKER = "var(--ui-"

_VISUAL = {
    "background", "background-color", "background-image", "background-size",
    "background-position", "background-repeat", "color", "border",
    "border-color", "border-radius", "border-width", "border-style",
    "box-shadow", "opacity", "outline", "outline-color", "outline-width",
    "outline-style", "fill", "stroke", "cursor",
}
_TYPOGRAPHY = {
    "font", "font-family", "font-size", "font-weight", "font-style",
    "font-variant", "font-variant-numeric", "line-height", "letter-spacing",
    "text-align", "text-decoration", "text-transform", "text-overflow",
    "white-space", "word-break", "word-wrap", "overflow-wrap", "hyphens",
}
_EFFECTS = {
    "transition", "transition-property", "transition-duration",
    "transition-timing-function", "transition-delay", "transform",
    "transform-origin", "animation", "animation-name", "animation-duration",
    "animation-timing-function", "animation-delay", "animation-iteration-count",
    "animation-direction", "filter", "backdrop-filter", "mix-blend-mode",
    "clip-path", "mask",
}


@dataclass(frozen=True)
class CategorizedProperty:
    name: str
    value: str
    category: PropertyCategory
    is_token: bool


def categorize_property(name: str) -> PropertyCategory:
    """Category for a property name; unknown properties count as layout."""
    if name.startswith(VENDOR_PREFIXES):
        return PropertyCategory.INTERNAL
    if name in _VISUAL or name.startswith(("border-", "outline-")):
        return PropertyCategory.VISUAL
    if name in _TYPOGRAPHY or name.startswith("font-"):
        return PropertyCategory.TYPOGRAPHY
    if name in _EFFECTS or name.startswith(("transition-", "animation-")):
        return PropertyCategory.EFFECTS
    return PropertyCategory.LAYOUT


def is_token_value(value: str) -> bool:
    """True when the value reads a design token custom property."""
    return TOKEN_MARKER in value


def categorize_properties(
    properties: dict[str, str],
) -> dict[PropertyCategory, list[CategorizedProperty]]:
    """Group *properties* by category, sorted by name within each group."""
    grouped: dict[PropertyCategory, list[CategorizedProperty]] = {}
    for name in sorted(properties):
        value = properties[name]
        category = categorize_property(name)
        grouped.setdefault(category, []).append(
            CategorizedProperty(name, value, category, is_token_value(value))
        )
    return {c: grouped[c] for c in CATEGORY_ORDER if c in grouped}
