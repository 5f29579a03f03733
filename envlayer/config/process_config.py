#!/usr/bin/env python3
"""Layered process configuration.

Builds one ``Environ`` from, in increasing priority:

- the operating system environment
- ``{root}/.env``
- ``{root}/.env.local``
- ``{root}/.env.{APP_ENV}``
- ``{root}/.env.{APP_ENV}.local``

``APP_ENV`` defaults to ``prod`` and is lowercased for the file name.
Missing files are skipped. Any other failure rolls the whole configuration
back to the uninitialized state and re-raises.

Initialization is expected to run once at startup; concurrent calls to
``initialize`` must be serialized by the caller.
"""
from __future__ import annotations

import logging
import os
from typing import Iterator, List, Optional, Tuple

from ..core.accessor import TypedAccessor
from ..core.dotenv_files import PathLike
from ..core.environ import Environ
from ..core.scoped import ScopedView

logger = logging.getLogger(__name__)


class ProcessConfig(TypedAccessor):
    """Environment loaded from the OS and layered dotenv files."""

    app_env_key = "APP_ENV"
    default_app_env = "prod"
    dotenv_name = ".env"

    def __init__(self, environ: Optional[Environ] = None):
        self.environ = environ if environ is not None else Environ()
        self._root = ""
        self.loaded_files: List[str] = []

    # ------------------------------------------------------------------
    def initialize(self, directory: PathLike = ".") -> "ProcessConfig":
        """
        (Re)load the configuration rooted at ``directory``.

        Args:
            directory: Directory holding the dotenv files

        Returns:
            self

        Raises:
            EnvFileError: a dotenv file exists but cannot be read or parsed
        """
        root = os.path.abspath(os.fspath(directory))

        self._root = ""
        self.loaded_files = []
        self.environ.clean()

        try:
            self.environ.save(self._os_environ())
            self._load_layer(root, "")

            app_env = self.get_str(self.app_env_key, self.default_app_env)
            if app_env:
                self._load_layer(root, "." + app_env.lower())
        except Exception as e:
            logger.error(f"Failed to initialize configuration from {root}: {e}")
            self._root = ""
            self.loaded_files = []
            self.environ.clean()
            raise

        self._root = root
        logger.info(f"Configuration initialized from {root} ({len(self.loaded_files)} dotenv file(s))")
        return self

    @staticmethod
    def _os_environ() -> dict:
        return {key.strip(): value.strip() for key, value in os.environ.items()}

    def _load_layer(self, root: str, suffix: str):
        filename = os.path.join(root, self.dotenv_name + suffix)
        for path in (filename, filename + ".local"):
            try:
                self.environ.load(path)
            except FileNotFoundError:
                logger.debug(f"Skipping missing {path}")
                continue
            self.loaded_files.append(path)
            logger.info(f"Loaded {path}")

    # ------------------------------------------------------------------
    @property
    def root(self) -> str:
        """Absolute root of the last successful initialization, or ``""``."""
        return self._root

    @property
    def initialized(self) -> bool:
        return self._root != ""

    def path(self, *segments: PathLike) -> str:
        """Join ``segments`` onto the root directory."""
        if not segments:
            return self._root
        return os.path.join(self._root, *(os.fspath(s) for s in segments))

    def is_env(self, name: str) -> bool:
        """True when ``APP_ENV`` is exactly ``name``."""
        return self.get_str(self.app_env_key) == name

    @property
    def app_env(self) -> str:
        return self.get_str(self.app_env_key, self.default_app_env)

    # ------------------------------------------------------------------
    def load(self, *filenames: PathLike):
        self.environ.load(*filenames)

    def signed(self, prefix: str, category: str = "") -> ScopedView:
        return self.environ.signed(prefix, category)

    def clean(self):
        self.environ.clean()

    def lookup(self, key: str) -> Tuple[str, bool]:
        return self.environ.lookup(key)

    def exists(self, key: str) -> bool:
        return self.environ.exists(key)

    def iterate(self) -> Iterator[Tuple[str, str]]:
        return self.environ.iterate()

    def __len__(self) -> int:
        return len(self.environ)


__all__ = ["ProcessConfig"]
