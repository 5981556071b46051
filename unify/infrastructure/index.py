"""In-memory index from Unified IDs back to original identifiers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from threading import Lock

from unify.core.identity import Uid, extract_tags, normalize
from unify.infrastructure.scanner import TreeScanner

logger = logging.getLogger(__name__)


class AssetIndex:
    """Maps UIDs to the identifiers they were computed from.

    Adding an identifier whose UID is already present replaces the stored
    original; the replaced originals are kept for collision reports.
    """

    def __init__(self, fold_diacritics: bool = True) -> None:
        self.fold_diacritics = fold_diacritics
        self._lock = Lock()
        self._entries: dict[str, str] = {}
        self._shadowed: dict[str, list[str]] = {}

    def add(self, original_id: str) -> Uid:
        """Store ``original_id`` under its UID and return that UID."""
        uid = Uid.from_text(original_id, fold_diacritics=self.fold_diacritics)
        with self._lock:
            previous = self._entries.get(uid.value)
            if previous is not None and previous != original_id:
                logger.debug(
                    "UID %r: %r replaces %r", uid.value, original_id, previous
                )
                self._shadowed.setdefault(uid.value, []).append(previous)
            self._entries[uid.value] = original_id
        return uid

    def add_many(self, original_ids: Iterable[str]) -> int:
        count = 0
        for original_id in original_ids:
            self.add(original_id)
            count += 1
        return count

    def add_tree(self, root: Path, scanner: TreeScanner | None = None) -> int:
        """Add every file under ``root``.

        Files are stored as ``./<root name>/<relative path>`` in POSIX form.

        Returns:
            Number of files added
        """
        scanner = scanner or TreeScanner([root])
        base = root.parent
        count = self.add_many(
            f"./{path.relative_to(base).as_posix()}" for path in scanner.iter_files()
        )
        logger.debug("Indexed %d files under %s", count, root)
        return count

    def lookup(self, key: str) -> str | None:
        """Return the original identifier for ``key`` (a UID, path, URL or ID)."""
        uid = normalize(key, fold_diacritics=self.fold_diacritics)
        with self._lock:
            return self._entries.get(uid)

    def tags_for(self, key: str) -> list[str]:
        """Return the inline tags of the original stored for ``key``."""
        original = self.lookup(key)
        if original is None:
            return []
        return extract_tags(original, fold_diacritics=self.fold_diacritics)

    def collisions(self) -> dict[str, list[str]]:
        """Return UIDs that more than one distinct original mapped to.

        Each list holds the replaced originals in insertion order followed by
        the one currently stored.
        """
        with self._lock:
            return {
                uid: [*shadowed, self._entries[uid]]
                for uid, shadowed in sorted(self._shadowed.items())
            }

    def items(self) -> list[tuple[str, str]]:
        """Return ``(uid, original)`` pairs sorted by UID."""
        with self._lock:
            return sorted(self._entries.items())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return self.lookup(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter([uid for uid, _ in self.items()])
