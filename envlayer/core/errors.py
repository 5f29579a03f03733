"""
Errors
======

Exception hierarchy shared by the store, the accessors and the loaders.
"""

from typing import Optional


class EnvError(Exception):
    """Base class for envlayer errors."""


class EnvFileError(EnvError):
    """A dotenv file exists but could not be read or parsed."""

    def __init__(self, filename: str, message: str, line: Optional[int] = None):
        self.filename = filename
        self.line = line
        location = f"{filename}:{line}" if line is not None else filename
        super().__init__(f"{location}: {message}")


class ConversionError(EnvError, ValueError):
    """A raw string value cannot be converted to the requested type."""


class FieldConversionError(EnvError, TypeError):
    """A tagged dataclass field could not be filled from its key."""

    def __init__(self, field_name: str, key: str, message: str):
        self.field_name = field_name
        self.key = key
        super().__init__(f"cannot set `{field_name}` field from {key}: {message}")


class InvalidStructureError(EnvError, TypeError):
    """Fill was called on something that is not a mutable dataclass instance."""


__all__ = [
    "EnvError",
    "EnvFileError",
    "ConversionError",
    "FieldConversionError",
    "InvalidStructureError",
]
