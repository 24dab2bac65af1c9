"""Canonical storage for token text shared by every graph structure."""

from __future__ import annotations

from typing import Dict, Iterator, Optional


class Interner:
    """
    Own exactly one ``str`` object per distinct token text.

    Callers keep the returned reference instead of their own copy, so two
    occurrences of the same text anywhere in the graph are the same object.
    """

    def __init__(self) -> None:
        self._store: Dict[str, str] = {}

    def intern(self, text: str) -> str:
        """Return the canonical reference for ``text``, storing it on first sight."""

        canonical = self._store.get(text)
        if canonical is None:
            canonical = text
            self._store[canonical] = canonical
        return canonical

    def lookup(self, text: str) -> Optional[str]:
        """Return the canonical reference for ``text`` without storing it."""

        return self._store.get(text)

    def clear(self) -> None:
        self._store.clear()

    def __contains__(self, text: object) -> bool:
        return text in self._store

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[str]:
        return iter(self._store.values())


__all__ = ["Interner"]
