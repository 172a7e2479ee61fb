"""Whole-word trademark matching helpers."""

from __future__ import annotations

import re

EMPHASIS = "**"


def trademark_pattern(trademark: str) -> re.Pattern[str]:
    """Compile a case-insensitive, word-bounded pattern for ``trademark``.

    Regex metacharacters in the trademark are escaped, so ``"C++"`` or
    ``"A.B"`` match literally. A match may not be preceded or followed by a
    word character.
    """
    return re.compile(rf"(?<!\w)({re.escape(trademark)})(?!\w)", re.IGNORECASE)


def contains_trademark(text: str, trademark: str) -> bool:
    """Whether ``trademark`` appears verbatim (as a whole word) in ``text``."""
    return trademark_pattern(trademark).search(text) is not None


def count_occurrences(text: str, trademark: str) -> int:
    return len(trademark_pattern(trademark).findall(text))


def highlight_trademark(text: str, trademark: str) -> str:
    """Wrap every verbatim occurrence of ``trademark`` in emphasis markers."""
    return trademark_pattern(trademark).sub(rf"{EMPHASIS}\1{EMPHASIS}", text)
