"""
Key/Value Store
===============

Ordered in-memory store of environment entries.

Keys are unique and keep their first insertion position; updating a key
replaces its value in place. All reads take the shared side of a
reader/writer lock and all mutations take the exclusive side.
"""

import itertools
import threading
from typing import Dict, Iterator, List, Mapping, Tuple

from ..utils.rwlock import ReadWriteLock


class StoreCursor:
    """
    Single-pass iterator over the entries of an ``EnvStore``.

    Several threads may advance the same cursor; each entry index is handed
    out exactly once. Once the cursor reports exhaustion it stays exhausted,
    even if the store grows afterwards.
    """

    def __init__(self, store: "EnvStore"):
        self._store = store
        self._positions = itertools.count()
        self._position_lock = threading.Lock()
        self._exhausted = False

    def __iter__(self) -> "StoreCursor":
        return self

    def __next__(self) -> Tuple[str, str]:
        if self._exhausted:
            raise StopIteration
        with self._position_lock:
            index = next(self._positions)
        entry = self._store._entry_at(index)
        if entry is None:
            self._exhausted = True
            raise StopIteration
        return entry


class EnvStore:
    """Ordered association of string keys to string values."""

    def __init__(self):
        self._keys: List[str] = []
        self._values: List[str] = []
        self._index: Dict[str, int] = {}
        self._lock = ReadWriteLock()

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._keys)

    def __contains__(self, key: str) -> bool:
        return self.exists(key)

    def lookup(self, key: str) -> Tuple[str, bool]:
        """
        Return the value of ``key`` and whether it was found.

        The second element is True only when the key exists and its value is
        not empty; a present-but-empty key yields ``("", False)``.
        """
        with self._lock.read():
            i = self._index.get(key)
            if i is None:
                return "", False
            value = self._values[i]
            return value, len(value) > 0

    def exists(self, key: str) -> bool:
        """Return True if ``key`` is present, whatever its value."""
        with self._lock.read():
            return key in self._index

    def save(self, entries: Mapping[str, str]):
        """Merge ``entries`` into the store, updating existing keys in place."""
        with self._lock.write():
            for key, value in entries.items():
                i = self._index.get(key)
                if i is not None:
                    self._values[i] = value
                else:
                    self._index[key] = len(self._keys)
                    self._keys.append(key)
                    self._values.append(value)

    def clean(self):
        """Discard every entry."""
        with self._lock.write():
            self._keys = []
            self._values = []
            self._index = {}

    def iterate(self) -> StoreCursor:
        """Return a fresh cursor positioned before the first entry."""
        return StoreCursor(self)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return self.iterate()

    def _entry_at(self, index: int):
        # Bounds are checked under the lock so a concurrent clean() cannot
        # shrink the lists between the check and the read.
        with self._lock.read():
            if index >= len(self._keys):
                return None
            return self._keys[index], self._values[index]


__all__ = ["EnvStore", "StoreCursor"]
