"""
Default Configuration
=====================

A lazily created process-wide ``ProcessConfig`` and module-level
functions mirroring its accessors.

Every function takes an optional ``config`` keyword so callers that manage
their own ``ProcessConfig`` can use the same entry points.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Callable, Dict, List, Optional, Tuple, TypeVar

from ..core.dotenv_files import PathLike
from ..core.scoped import ScopedView
from .process_config import ProcessConfig

T = TypeVar("T")


@lru_cache(maxsize=1)
def default_config() -> ProcessConfig:
    """Return the cached process-wide configuration (not yet initialized)."""
    return ProcessConfig()


def reset_default_config():
    """Drop the cached configuration; the next access creates a fresh one."""
    default_config.cache_clear()


def _resolve(config: Optional[ProcessConfig]) -> ProcessConfig:
    return config if config is not None else default_config()


def init(directory: PathLike = ".", config: Optional[ProcessConfig] = None) -> ProcessConfig:
    """Load the OS environment and the dotenv files found in ``directory``."""
    return _resolve(config).initialize(directory)


def load(*filenames: PathLike, config: Optional[ProcessConfig] = None):
    _resolve(config).load(*filenames)


def lookup(key: str, config: Optional[ProcessConfig] = None) -> Tuple[str, bool]:
    return _resolve(config).lookup(key)


def exists(key: str, config: Optional[ProcessConfig] = None) -> bool:
    return _resolve(config).exists(key)


def get_str(key: str, default: str = "", config: Optional[ProcessConfig] = None) -> str:
    return _resolve(config).get_str(key, default)


def get_bytes(key: str, default: bytes = b"", config: Optional[ProcessConfig] = None) -> bytes:
    return _resolve(config).get_bytes(key, default)


def get_int(key: str, default: int = 0, config: Optional[ProcessConfig] = None) -> int:
    return _resolve(config).get_int(key, default)


def get_duration(
    key: str, default: timedelta = timedelta(0), config: Optional[ProcessConfig] = None
) -> timedelta:
    return _resolve(config).get_duration(key, default)


def get_bool(key: str, default: bool = False, config: Optional[ProcessConfig] = None) -> bool:
    return _resolve(config).get_bool(key, default)


def get_list(
    key: str, default: Optional[List[str]] = None, config: Optional[ProcessConfig] = None
) -> List[str]:
    return _resolve(config).get_list(key, default)


def get_map(prefix: str, config: Optional[ProcessConfig] = None) -> Dict[str, str]:
    return _resolve(config).map(prefix)


def where(
    predicate: Callable[[str, str], bool], config: Optional[ProcessConfig] = None
) -> Dict[str, str]:
    return _resolve(config).where(predicate)


def all_values(config: Optional[ProcessConfig] = None) -> Dict[str, str]:
    return _resolve(config).all()


def fill(instance: T, config: Optional[ProcessConfig] = None) -> T:
    return _resolve(config).fill(instance)


def path(*segments: PathLike, config: Optional[ProcessConfig] = None) -> str:
    return _resolve(config).path(*segments)


def is_env(name: str, config: Optional[ProcessConfig] = None) -> bool:
    return _resolve(config).is_env(name)


def signed(prefix: str, category: str = "", config: Optional[ProcessConfig] = None) -> ScopedView:
    return _resolve(config).signed(prefix, category)


__all__ = [
    "default_config",
    "reset_default_config",
    "init",
    "load",
    "lookup",
    "exists",
    "get_str",
    "get_bytes",
    "get_int",
    "get_duration",
    "get_bool",
    "get_list",
    "get_map",
    "where",
    "all_values",
    "fill",
    "path",
    "is_env",
    "signed",
]
