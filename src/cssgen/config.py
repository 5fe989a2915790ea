"""Configuration values and the optional ``.cssgen.toml`` file.

Configuration is resolved in this order, highest first: command-line option,
``CSSGEN_*`` environment variable, config file, built-in default. The first
two are handled by click; this module supplies the file layer and the
defaults, and builds the frozen config values passed to the runners.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG_TOML",
    "GenerateConfig",
    "LintConfig",
    "OUTPUT_FORMATS",
    "REGISTRY_FILENAME",
    "build_generate_config",
    "build_lint_config",
    "load_config_file",
]

CONFIG_FILENAME = ".cssgen.toml"
REGISTRY_FILENAME = "styles_gen.py"

COMMENT_FORMATS = ("markdown", "compact")
OUTPUT_FORMATS = ("issues", "summary", "full", "json", "markdown")

DEFAULT_INCLUDES = ("**/*.css",)
DEFAULT_LINT_PATHS = ("**/*.html", "**/*.py", "**/*.templ", "**/*.go")


@dataclass(frozen=True)
class GenerateConfig:
    """Settings for turning stylesheets into the class registry."""

    source_dir: Path = Path(".")
    output_dir: Path = Path(".")
    includes: tuple[str, ...] = DEFAULT_INCLUDES
    package: str = "ui"
    infer_layer: bool = True
    extract_intent: bool = True
    comment_format: str = "markdown"
    property_limit: int = 5
    show_internal: bool = False

    def __post_init__(self) -> None:
        if self.comment_format not in COMMENT_FORMATS:
            raise ValueError(
                f"Config field 'generate.format' must be one of {', '.join(COMMENT_FORMATS)}."
            )
        if self.property_limit < 0:
            raise ValueError("Config field 'generate.property-limit' must be >= 0.")

    @property
    def registry_path(self) -> Path:
        return self.output_dir / REGISTRY_FILENAME


@dataclass(frozen=True)
class LintConfig:
    """Settings for checking class usage against the registry."""

    registry_path: Path = Path(REGISTRY_FILENAME)
    paths: tuple[str, ...] = DEFAULT_LINT_PATHS
    exclude: tuple[str, ...] = ()
    root: Path = Path(".")
    package: str = "ui"
    strict: bool = False
    threshold: float = 0.0
    max_issues_per_linter: int = 0
    max_same_issues: int = 0
    output_format: str = "issues"
    print_lines: bool = True
    print_linter_name: bool = True
    color: bool | None = None
    quiet: bool = False

    def __post_init__(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Config field 'lint.output-format' must be one of {', '.join(OUTPUT_FORMATS)}."
            )
        if not 0.0 <= self.threshold <= 100.0:
            raise ValueError("Config field 'lint.threshold' must be between 0 and 100.")
        if self.max_issues_per_linter < 0 or self.max_same_issues < 0:
            raise ValueError("Issue limits must be >= 0 (0 means unlimited).")


def load_config_file(path: Path) -> dict[str, Any]:
    """Load an optional TOML config file; a missing file yields ``{}``."""
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        try:
            payload = tomllib.load(handle)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"{path}: {e}") from e
    return payload


def _get_table(payload: dict[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _check(value: Any, expected: type | tuple[type, ...], name: str) -> Any:
    allowed = expected if isinstance(expected, tuple) else (expected,)
    # bool is an int subclass
    if isinstance(value, bool) and bool not in allowed:
        raise ValueError(f"Config field '{name}' has the wrong type.")
    if not isinstance(value, allowed):
        raise ValueError(f"Config field '{name}' has the wrong type.")
    return value


def _tuple_of_strings(value: Any, name: str) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"Config field '{name}' must be a list of strings.")
    return tuple(value)


# TOML key -> (dataclass field, converter)
_GENERATE_KEYS = {
    "source": ("source_dir", lambda v, n: Path(_check(v, str, n))),
    "output-dir": ("output_dir", lambda v, n: Path(_check(v, str, n))),
    "include": ("includes", _tuple_of_strings),
    "infer-layer": ("infer_layer", lambda v, n: _check(v, bool, n)),
    "extract-intent": ("extract_intent", lambda v, n: _check(v, bool, n)),
    "format": ("comment_format", lambda v, n: _check(v, str, n)),
    "property-limit": ("property_limit", lambda v, n: _check(v, int, n)),
    "show-internal": ("show_internal", lambda v, n: _check(v, bool, n)),
}

_LINT_KEYS = {
    "paths": ("paths", _tuple_of_strings),
    "exclude": ("exclude", _tuple_of_strings),
    "strict": ("strict", lambda v, n: _check(v, bool, n)),
    "threshold": ("threshold", lambda v, n: float(_check(v, (int, float), n))),
    "max-issues-per-linter": ("max_issues_per_linter", lambda v, n: _check(v, int, n)),
    "max-same-issues": ("max_same_issues", lambda v, n: _check(v, int, n)),
    "output-format": ("output_format", lambda v, n: _check(v, str, n)),
    "print-lines": ("print_lines", lambda v, n: _check(v, bool, n)),
    "print-linter-name": ("print_linter_name", lambda v, n: _check(v, bool, n)),
    "color": ("color", lambda v, n: _check(v, bool, n)),
}


def _from_table(
    payload: dict[str, Any], section: str, keys: dict[str, tuple[str, Any]]
) -> dict[str, Any]:
    table = _get_table(payload, section)
    values: dict[str, Any] = {}
    for key, raw in table.items():
        if key not in keys:
            raise ValueError(f"Unknown config field '{section}.{key}'.")
        field_name, convert = keys[key]
        values[field_name] = convert(raw, f"{section}.{key}")
    return values


def _apply(base: Any, file_values: dict[str, Any], overrides: dict[str, Any]) -> Any:
    """Layer file values then non-None overrides onto *base*."""
    known = {f.name for f in fields(base)}
    merged = dict(file_values)
    merged.update({k: v for k, v in overrides.items() if v is not None and k in known})
    return replace(base, **merged)


def _package(payload: dict[str, Any]) -> dict[str, Any]:
    if "package" not in payload:
        return {}
    return {"package": _check(payload["package"], str, "package")}


def build_generate_config(
    payload: dict[str, Any], **overrides: Any
) -> GenerateConfig:
    """Build a :class:`GenerateConfig` from a config-file payload and overrides.

    Overrides come from the command line (or environment) and win over the
    file; ``None`` means "not given".
    """
    file_values = _package(payload)
    file_values.update(_from_table(payload, "generate", _GENERATE_KEYS))
    return _apply(GenerateConfig(), file_values, overrides)


def build_lint_config(payload: dict[str, Any], **overrides: Any) -> LintConfig:
    """Build a :class:`LintConfig`; the registry path follows ``generate.output-dir``."""
    generate_values = _from_table(payload, "generate", _GENERATE_KEYS)
    file_values = _package(payload)
    if "output_dir" in generate_values:
        file_values["registry_path"] = generate_values["output_dir"] / REGISTRY_FILENAME
    file_values.update(_from_table(payload, "lint", _LINT_KEYS))
    return _apply(LintConfig(), file_values, overrides)


DEFAULT_CONFIG_TOML = """\
# cssgen configuration
#
# Precedence: command-line options > CSSGEN_* environment variables >
# this file > built-in defaults.

# Name the registry is referenced by in source code (ui.Btn).
package = "ui"

# Enable debug logging.
verbose = false

[generate]
# Directory holding the stylesheets.
source = "styles"

# Directory the registry module (styles_gen.py) is written to.
output-dir = "ui"

# Glob patterns, relative to source, selecting stylesheets.
include = ["**/*.css"]

# Infer a layer from layers/<name>/ directories or base/utilities/reset.css.
infer-layer = true

# Read "@intent" annotations from comments above a class.
extract-intent = true

# Documentation comment style: "markdown" or "compact".
format = "markdown"

# Maximum number of properties shown per category (0 = no limit).
property-limit = 5

# Show vendor-prefixed (-webkit-*) properties in comments.
show-internal = false

[lint]
# Glob patterns selecting the files to scan for class references.
paths = ["**/*.html", "**/*.py", "**/*.templ", "**/*.go"]

# Glob patterns excluded from scanning.
exclude = []

# Fail on any issue, not only on invalid classes.
strict = false

# In strict mode, minimum adoption percentage.
threshold = 0.0

# Output format: issues, summary, full, json or markdown.
output-format = "issues"

# Limits on reported issues (0 = unlimited).
max-issues-per-linter = 0
max-same-issues = 0

# Show the offending source line and the linter name.
print-lines = true
print-linter-name = true
"""
