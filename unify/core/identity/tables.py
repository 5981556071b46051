"""Process-wide substitution tables for identifier normalization.

Both tables are built lazily on first use, exactly once per process, and are
never mutated afterwards. Readers only take the lock while the table is still
missing.
"""

from __future__ import annotations

import logging
import re
import string
import unicodedata
from dataclasses import dataclass
from threading import Lock
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)


# Characters treated as word separators inside a path segment
SEPARATOR_CHARS = string.whitespace + "_,|;:()[]"

# Accented Latin-1 letters folded to their unaccented base letter
_LATIN1_ACCENTED = "ÀÁÂÃÄÅÇÈÉÊËÌÍÎÏÑÒÓÔÕÖÙÚÛÜÝàáâãäåçèéêëìíîïñòóôõöùúûüýÿ"


@dataclass(frozen=True)
class DiacriticTable:
    """Accented spelling -> ASCII replacement, with a longest-first matcher."""

    replacements: Mapping[str, str]
    pattern: re.Pattern[str]

    def fold(self, text: str) -> str:
        return self.pattern.sub(lambda match: self.replacements[match.group(0)], text)


_lock = Lock()
_punctuation: dict[int, str] | None = None
_diacritics: DiacriticTable | None = None


def punctuation_table() -> Mapping[int, str]:
    """Return the ``str.translate`` table mapping separators to ``-``.

    Characters missing from the table translate to themselves, so the table
    is total over every code point.
    """
    global _punctuation
    if _punctuation is None:
        with _lock:
            if _punctuation is None:
                _punctuation = str.maketrans({ch: "-" for ch in SEPARATOR_CHARS})
                logger.debug("Built punctuation table (%d entries)", len(_punctuation))
    return MappingProxyType(_punctuation)


def diacritic_table() -> DiacriticTable:
    """Return the diacritic folding table.

    Covers each accented Latin-1 letter both precomposed ("é") and decomposed
    ("e" + U+0301). Keys are tried longest first, so a decomposed sequence is
    folded as a unit instead of leaving its combining mark behind.
    """
    global _diacritics
    if _diacritics is None:
        with _lock:
            if _diacritics is None:
                _diacritics = _build_diacritic_table()
                logger.debug(
                    "Built diacritic table (%d entries)", len(_diacritics.replacements)
                )
    return _diacritics


def _build_diacritic_table() -> DiacriticTable:
    replacements: dict[str, str] = {}
    for ch in _LATIN1_ACCENTED:
        decomposed = unicodedata.normalize("NFD", ch)
        base = decomposed[0]
        replacements[ch] = base
        if decomposed != ch:
            replacements[decomposed] = base

    keys = sorted(replacements, key=lambda key: (-len(key), key))
    pattern = re.compile("|".join(re.escape(key) for key in keys))
    return DiacriticTable(replacements=MappingProxyType(replacements), pattern=pattern)


def _reset_tables() -> None:
    """Drop the cached tables (test hook)."""
    global _punctuation, _diacritics
    with _lock:
        _punctuation = None
        _diacritics = None
