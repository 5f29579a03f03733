"""
Typed Accessor
==============

Read-only typed views over anything that can look up, test and iterate
raw string entries. ``Environ``, ``ScopedView`` and ``ProcessConfig`` all
inherit the accessors from ``TypedAccessor``.

Scalar accessors never raise: an absent, empty or unparseable value yields
the supplied default, or the type's zero value when no default is given.
"""

from __future__ import annotations

import dataclasses
import logging
import typing
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, TypeVar

from .convert import Converter, default_converter, parse_bool, parse_duration, parse_int, split_list
from .errors import ConversionError, FieldConversionError, InvalidStructureError

logger = logging.getLogger(__name__)

ENV_METADATA_KEY = "env"

T = TypeVar("T")


def env_field(key: str, **kwargs) -> Any:
    """Declare a dataclass field bound to the configuration key ``key``."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[ENV_METADATA_KEY] = key
    return dataclasses.field(metadata=metadata, **kwargs)


class TypedAccessor(ABC):
    """Typed accessors on top of ``lookup``, ``exists`` and ``iterate``."""

    converter: Converter = default_converter

    @abstractmethod
    def lookup(self, key: str) -> Tuple[str, bool]:
        """Return ``(value, found)``; found only when present and non-empty."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True when ``key`` is present, even with an empty value."""

    @abstractmethod
    def iterate(self) -> Iterator[Tuple[str, str]]:
        """Return a single-pass iterator over ``(key, value)`` pairs."""

    def get_str(self, key: str, default: str = "") -> str:
        value, found = self.lookup(key)
        if found:
            return value
        return default

    def get_bytes(self, key: str, default: bytes = b"") -> bytes:
        value, found = self.lookup(key)
        if found:
            return value.encode("utf-8")
        return default

    def get_int(self, key: str, default: int = 0) -> int:
        value, found = self.lookup(key)
        if found:
            try:
                return parse_int(value)
            except ConversionError:
                pass
        return default

    def get_duration(self, key: str, default: timedelta = timedelta(0)) -> timedelta:
        """
        Read a duration.

        ``"5"`` is five microseconds while ``"5s"`` is five seconds; see
        ``parse_duration`` for the accepted forms.
        """
        value, found = self.lookup(key)
        if found:
            try:
                return parse_duration(value)
            except ConversionError:
                pass
        return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        value, found = self.lookup(key)
        if found:
            try:
                return parse_bool(value)
            except ConversionError:
                pass
        return default

    def get_list(self, key: str, default: Optional[List[str]] = None) -> List[str]:
        """Split the value on commas and strip every item."""
        value, found = self.lookup(key)
        if found:
            return split_list(value)
        return default if default is not None else []

    def map(self, prefix: str) -> Dict[str, str]:
        """Collect keys starting with ``prefix``, prefix removed, values stripped."""
        result = {}
        for key, value in self.iterate():
            if key.startswith(prefix):
                result[key[len(prefix):]] = value.strip()
        return result

    def where(self, predicate: Callable[[str, str], bool]) -> Dict[str, str]:
        """Collect the entries accepted by ``predicate(key, value)``."""
        return {key: value for key, value in self.iterate() if predicate(key, value)}

    def all(self) -> Dict[str, str]:
        return self.where(lambda key, value: True)

    def fill(self, instance: T) -> T:
        """
        Populate a dataclass instance from configuration.

        Fields declared with ``env_field("KEY")`` (or
        ``field(metadata={"env": "KEY"})``) receive the converted value of
        ``KEY``; absent or empty keys leave the field untouched. Untagged
        fields whose value is itself a dataclass instance are filled
        recursively, each instance at most once.

        Args:
            instance: Mutable dataclass instance

        Returns:
            The same instance

        Raises:
            InvalidStructureError: ``instance`` is not a mutable dataclass instance,
                or its field annotations cannot be resolved
            FieldConversionError: a tagged value cannot be converted to the field type
        """
        if not dataclasses.is_dataclass(instance) or isinstance(instance, type):
            raise InvalidStructureError(
                f"fill expects a dataclass instance, got {type(instance).__name__}"
            )
        self._fill_dataclass(instance, set())
        return instance

    def _fill_dataclass(self, instance: Any, visited: set):
        if id(instance) in visited:
            return
        visited.add(id(instance))

        cls = type(instance)
        if cls.__dataclass_params__.frozen:
            raise InvalidStructureError(f"cannot fill frozen dataclass {cls.__name__}")

        try:
            hints = typing.get_type_hints(cls)
        except (NameError, TypeError) as e:
            raise InvalidStructureError(
                f"cannot resolve field annotations of {cls.__name__}: {e}"
            ) from e
        for f in dataclasses.fields(instance):
            if ENV_METADATA_KEY in f.metadata:
                key = f.metadata[ENV_METADATA_KEY]
                raw = self.get_str(key)
                if raw == "":
                    continue
                target = hints.get(f.name, f.type)
                try:
                    value = self.converter.convert(raw, target)
                except ConversionError as e:
                    raise FieldConversionError(f.name, key, str(e)) from e
                setattr(instance, f.name, value)
                logger.debug(f"Filled {cls.__name__}.{f.name} from {key}")
            else:
                current = getattr(instance, f.name, None)
                if dataclasses.is_dataclass(current) and not isinstance(current, type):
                    self._fill_dataclass(current, visited)


__all__ = ["TypedAccessor", "env_field", "ENV_METADATA_KEY"]
