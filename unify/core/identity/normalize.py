"""Identifier normalization: raw paths, URLs and IDs to a Unified ID (UID).

``normalize`` is a pure, sequential text pipeline:

1. fold accented Latin-1 letters to ASCII (optional)
2. drop the query suffix (``?...``)
3. lowercase ASCII letters
4. extract and strip inline ``#tags``
5. split on ``/`` and ``\\``, keep the last two segments
6. per segment: drop the extension, map punctuation/whitespace to ``-``
7. re-tokenize on ``-``, sort, strip one trailing ``s`` per token
8. join with ``-``

Examples:
    >>> normalize("C:\\\\data\\\\folder\\\\asset.jpg")
    'asset-folder'
    >>> normalize("mesh/Main Character")
    'character-main-mesh'
    >>> tags = []
    >>> normalize("splash #mobile/logo #win32=always.png", tags)
    'logo-splash'
    >>> tags
    ['#mobile', '#win32=always']

The transform is lossy on purpose: it never raises for text input and maps
degenerate input to the empty string.
"""

from __future__ import annotations

import re
import string

from .tables import diacritic_table, punctuation_table


TAG_MARKER = "#"
TOKEN_SEPARATOR = "-"
QUERY_MARKER = "?"
EXTENSION_MARKER = "."

_TAG_CHARS = frozenset(string.ascii_lowercase + string.digits + "-_=")
_PATH_SEPARATORS = re.compile(r"[\\/]+")
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

# Number of trailing path segments kept: folder + asset
_KEPT_SEGMENTS = 2


def normalize(
    identifier: str | bytes,
    tags: list[str] | None = None,
    *,
    fold_diacritics: bool = True,
) -> str:
    """Convert a path, URL, URI or ID into its Unified ID.

    Args:
        identifier: Raw identifier text. Bytes are decoded as UTF-8, falling
            back to Latin-1.
        tags: Optional list receiving the inline tags in scan order. It is
            appended to, never cleared.
        fold_diacritics: Fold accented Latin-1 letters to ASCII first.

    Returns:
        The UID, possibly empty.
    """
    text = _coerce_text(identifier)

    if fold_diacritics:
        text = diacritic_table().fold(text)

    text = text.partition(QUERY_MARKER)[0]
    text = text.translate(_ASCII_LOWER)
    text = _strip_tags(text, tags)

    segments = [segment for segment in _PATH_SEPARATORS.split(text) if segment]
    stems = [_clean_segment(segment) for segment in segments[-_KEPT_SEGMENTS:]]

    return _canonical_join(TOKEN_SEPARATOR.join(stems))


def extract_tags(identifier: str | bytes, *, fold_diacritics: bool = True) -> list[str]:
    """Return the inline tags ``normalize`` would record for ``identifier``."""
    tags: list[str] = []
    normalize(identifier, tags, fold_diacritics=fold_diacritics)
    return tags


def split_tag(tag: str) -> tuple[str, str | None]:
    """Split a recorded tag into key and optional value.

    Examples:
        >>> split_tag("#win32=always")
        ('win32', 'always')
        >>> split_tag("#mobile")
        ('mobile', None)
    """
    body = tag[len(TAG_MARKER):] if tag.startswith(TAG_MARKER) else tag
    key, sep, value = body.partition("=")
    return key, (value if sep else None)


def _coerce_text(identifier: str | bytes) -> str:
    if isinstance(identifier, str):
        return identifier
    if isinstance(identifier, (bytes, bytearray)):
        try:
            return bytes(identifier).decode("utf-8")
        except UnicodeDecodeError:
            return bytes(identifier).decode("latin-1")
    raise TypeError(
        f"identifier must be str or bytes, not {type(identifier).__name__}"
    )


def _strip_tags(text: str, tags: list[str] | None) -> str:
    """Remove ``#tag`` runs from ``text``, recording them into ``tags``.

    The character that ends a tag is not part of it and stays in the text.
    A tag running into end-of-string is still recorded. A bare ``#`` is
    dropped without being recorded.
    """
    kept: list[str] = []
    pos = 0
    end = len(text)

    while pos < end:
        if text[pos] != TAG_MARKER:
            kept.append(text[pos])
            pos += 1
            continue

        scan = pos + 1
        while scan < end and text[scan] in _TAG_CHARS:
            scan += 1

        if tags is not None and scan > pos + 1:
            tags.append(text[pos:scan])
        pos = scan

    return "".join(kept)


def _clean_segment(segment: str) -> str:
    stem = segment.partition(EXTENSION_MARKER)[0]
    return stem.translate(punctuation_table())


def _canonical_join(joined: str) -> str:
    tokens = sorted(token for token in joined.split(TOKEN_SEPARATOR) if token)

    singular: list[str] = []
    for token in tokens:
        # Naive English plural: "sounds" -> "sound", but also "bus" -> "bu"
        if token.endswith("s"):
            token = token[:-1]
        if token:
            singular.append(token)

    return TOKEN_SEPARATOR.join(singular)
