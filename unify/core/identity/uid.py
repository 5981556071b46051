"""Unified ID value type."""

from __future__ import annotations

from dataclasses import dataclass, field

from .normalize import normalize


@dataclass(frozen=True, order=True)
class Uid:
    """A normalized identifier.

    Construct with ``Uid.from_text``; the plain constructor assumes its value
    is already canonical. Comparison against raw text is explicit through
    ``matches`` so a ``Uid`` never silently equals an unnormalized string.
    """

    value: str
    tags: tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def from_text(cls, text: str | bytes, *, fold_diacritics: bool = True) -> Uid:
        tags: list[str] = []
        value = normalize(text, tags, fold_diacritics=fold_diacritics)
        return cls(value=value, tags=tuple(tags))

    def matches(self, text: str | bytes, *, fold_diacritics: bool = True) -> bool:
        """Return True if ``text`` normalizes to this UID."""
        return self.value == normalize(text, fold_diacritics=fold_diacritics)

    def is_empty(self) -> bool:
        return not self.value

    def __str__(self) -> str:
        return self.value
