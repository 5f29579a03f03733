"""
Scoped View
===========

Groups related keys under a prefix and an optional category. With the
entries

    CACHE_DRIVER=redis
    CACHE_DATABASE=1
    CACHE_SCOPE=app:
    CACHE_BOOK_DATABASE=10
    CACHE_BOOK_SCOPE=app:books:

the view ``ScopedView(store, "CACHE", "BOOK")`` reads ``DATABASE`` as
``CACHE_BOOK_DATABASE`` (10) and falls back to ``CACHE_DRIVER`` for
``DRIVER`` because no ``CACHE_BOOK_DRIVER`` exists.
"""

from typing import Iterator, Tuple

from .accessor import TypedAccessor
from .store import EnvStore


def _join(*segments: str) -> str:
    return "_".join(segment for segment in segments if segment)


class ScopedView(TypedAccessor):
    """Typed accessor that rewrites keys to ``PREFIX_CATEGORY_KEY``."""

    def __init__(self, store: EnvStore, prefix: str = "", category: str = ""):
        self._store = store
        self._prefix = prefix
        self._category = category

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def category(self) -> str:
        return self._category

    @property
    def scope(self) -> str:
        """Leading text shared by every key in this view, e.g. ``CACHE_BOOK_``."""
        scope = _join(self._prefix, self._category)
        return scope + "_" if scope else ""

    def lookup(self, key: str) -> Tuple[str, bool]:
        value, found = self._store.lookup(_join(self._prefix, self._category, key))
        if found or not self._category:
            return value, found
        return self._store.lookup(_join(self._prefix, key))

    def exists(self, key: str) -> bool:
        if self._store.exists(_join(self._prefix, self._category, key)):
            return True
        if not self._category:
            return False
        return self._store.exists(_join(self._prefix, key))

    def iterate(self) -> Iterator[Tuple[str, str]]:
        scope = self.scope
        for key, value in self._store.iterate():
            if key.startswith(scope):
                yield key[len(scope):], value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(prefix={self._prefix!r}, category={self._category!r})"


__all__ = ["ScopedView"]
