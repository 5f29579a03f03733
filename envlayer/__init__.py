"""
envlayer - Layered Environment Configuration
============================================

Loads environment variables from the operating system and from layered
``.env`` files, caches them in memory and exposes typed accessors.

Modules:
- core: store, typed accessors, conversion registry, scoped views
- config: layered ``ProcessConfig`` and the default instance
- utils: logging setup and the store lock
- cli: command line inspection tool

Typical use::

    import envlayer

    envlayer.init()
    debug = envlayer.get_bool("DEBUG")
    cache = envlayer.signed("CACHE", "BOOK")
    database = cache.get_int("DATABASE")
"""

__version__ = "1.0.0"
__author__ = "envlayer contributors"

from .core import (
    ConversionError,
    Converter,
    EnvError,
    EnvFileError,
    EnvStore,
    Environ,
    FieldConversionError,
    InvalidStructureError,
    ScopedView,
    StoreCursor,
    TypedAccessor,
    default_converter,
    env_field,
)
from .config import ProcessConfig
from .config.default import (
    all_values,
    default_config,
    exists,
    fill,
    get_bool,
    get_bytes,
    get_duration,
    get_int,
    get_list,
    get_map,
    get_str,
    init,
    is_env,
    load,
    lookup,
    path,
    reset_default_config,
    signed,
    where,
)

__all__ = [
    "ConversionError",
    "Converter",
    "EnvError",
    "EnvFileError",
    "EnvStore",
    "Environ",
    "FieldConversionError",
    "InvalidStructureError",
    "ProcessConfig",
    "ScopedView",
    "StoreCursor",
    "TypedAccessor",
    "default_converter",
    "env_field",
    "all_values",
    "default_config",
    "exists",
    "fill",
    "get_bool",
    "get_bytes",
    "get_duration",
    "get_int",
    "get_list",
    "get_map",
    "get_str",
    "init",
    "is_env",
    "load",
    "lookup",
    "path",
    "reset_default_config",
    "signed",
    "where",
]
