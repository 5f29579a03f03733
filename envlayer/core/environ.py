"""
Environ
=======

An ``EnvStore`` together with the typed accessors, dotenv loading and
scoped views over the same entries.
"""

import logging
from typing import Iterator, Mapping, Optional, Tuple

from .accessor import TypedAccessor
from .dotenv_files import PathLike, read_dotenv_files
from .scoped import ScopedView
from .store import EnvStore

logger = logging.getLogger(__name__)


class Environ(TypedAccessor):
    """Cached environment entries with typed access."""

    def __init__(self, store: Optional[EnvStore] = None):
        self.store = store if store is not None else EnvStore()

    def __len__(self) -> int:
        return len(self.store)

    def lookup(self, key: str) -> Tuple[str, bool]:
        return self.store.lookup(key)

    def exists(self, key: str) -> bool:
        return self.store.exists(key)

    def iterate(self) -> Iterator[Tuple[str, str]]:
        return self.store.iterate()

    def save(self, entries: Mapping[str, str]):
        self.store.save(entries)

    def clean(self):
        self.store.clean()

    def load(self, *filenames: PathLike):
        """
        Load dotenv files into the cache.

        Every file is parsed before anything is saved, so a missing or
        malformed file leaves the cache unchanged.

        Raises:
            FileNotFoundError: one of the files does not exist
            EnvFileError: one of the files cannot be read or parsed
        """
        data = read_dotenv_files(*filenames)
        self.save(data)
        logger.debug(f"Loaded {len(data)} entries from {len(filenames)} file(s)")

    def signed(self, prefix: str, category: str = "") -> ScopedView:
        """Return a view resolving keys as ``PREFIX_CATEGORY_KEY`` then ``PREFIX_KEY``."""
        return ScopedView(self.store, prefix, category)


__all__ = ["Environ"]
