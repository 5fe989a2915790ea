"""``@intent`` annotations in comments preceding a class declaration.

    /* @intent Primary call to action, one per view */
    .btn--primary { ... }
"""

from __future__ import annotations

from typing import Sequence

INTENT_MARKER = "@intent"
MAX_LOOKBACK = 10

_COMMENT_PREFIXES = ("/*", "*", "//")


def extract_intent(
    lines: Sequence[str],
    line: int,
    marker: str = INTENT_MARKER,
    lookback: int = MAX_LOOKBACK,
) -> str:
    """Return the intent text annotating the declaration on 1-based *line*.

    Walks upwards through at most *lookback* lines and stops at the first
    blank or non-comment line. Returns an empty string when no marker is
    found.
    """
    index = line - 1
    stop = max(index - lookback, 0)
    for i in range(index - 1, stop - 1, -1):
        if i >= len(lines):
            continue
        text = lines[i].strip()
        if not text or not text.startswith(_COMMENT_PREFIXES):
            break
        if marker in text:
            intent = text.split(marker, 1)[1].strip()
            intent = intent.removeprefix("*").strip()
            intent = intent.removesuffix("*/")
            return intent.strip()
    return ""
