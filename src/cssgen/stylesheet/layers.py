"""Layer hints inferred from where a stylesheet lives on disk."""

from __future__ import annotations

from pathlib import PurePosixPath

__all__ = ["infer_layer"]

_FILE_LAYERS = {
    "base.css": "base",
    "utilities.css": "utilities",
    "reset.css": "reset",
}


def infer_layer(path: str) -> str:
    """Guess the cascade layer for classes declared outside ``@layer``.

    ``styles/layers/components/button.css`` -> ``components``
    ``styles/layers/components.css``        -> ``components``
    ``styles/utilities.css``                -> ``utilities``

    Anything else yields an empty string.
    """
    parts = PurePosixPath(path.replace("\\", "/")).parts
    for i, part in enumerate(parts[:-1]):
        if part == "layers":
            return parts[i + 1].removesuffix(".css")
    if parts:
        return _FILE_LAYERS.get(parts[-1], "")
    return ""
