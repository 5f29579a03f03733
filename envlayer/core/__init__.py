"""Core store, accessors and scoped views."""
from .accessor import TypedAccessor, env_field  # noqa: F401
from .convert import Converter, default_converter  # noqa: F401
from .environ import Environ  # noqa: F401
from .errors import (  # noqa: F401
    ConversionError,
    EnvError,
    EnvFileError,
    FieldConversionError,
    InvalidStructureError,
)
from .scoped import ScopedView  # noqa: F401
from .store import EnvStore, StoreCursor  # noqa: F401
