"""
Value Conversion
================

Type-directed parsing of raw environment strings.

A ``Converter`` maps target types to parser callables and knows how to
unwrap the generic shapes that show up in configuration dataclasses:
``Optional[X]``, ``Union[...]``, ``List[X]``, ``Tuple[X, ...]``, ``Set[X]``,
``FrozenSet[X]`` and ``Dict[K, V]``. Collections are written as
comma-separated items; dictionaries as comma-separated ``key=value`` pairs.

The scalar helpers (``parse_int``, ``parse_bool``, ``parse_duration``) are
shared with the typed accessors.
"""

import re
import types
import typing
from collections import abc
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List

from .errors import ConversionError

_INT_RE = re.compile(r"[+-]?[0-9]+")

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})

# Length of each unit in nanoseconds.
_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_DURATION_PART = r"([0-9]+\.?[0-9]*|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)"
_DURATION_RE = re.compile(rf"([+-]?)((?:{_DURATION_PART})+)")
_DURATION_PART_RE = re.compile(_DURATION_PART)

_UNION_TYPES = tuple(t for t in (typing.Union, getattr(types, "UnionType", None)) if t is not None)


def parse_int(raw: str) -> int:
    """Parse a base-10 integer with an optional sign and nothing else."""
    if not _INT_RE.fullmatch(raw):
        raise ConversionError(f"invalid integer: {raw!r}")
    try:
        return int(raw)
    except ValueError as e:
        # Exceeds the interpreter's integer string conversion limit.
        raise ConversionError(f"integer out of range: {raw[:32]!r}...") from e


def parse_bool(raw: str) -> bool:
    """Parse the conventional ``1/t/true`` and ``0/f/false`` spellings."""
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ConversionError(f"invalid boolean: {raw!r}")


def parse_duration(raw: str) -> timedelta:
    """
    Parse a duration.

    A bare integer counts microseconds, the smallest unit ``timedelta``
    stores. Anything else must be a sequence of ``<number><unit>`` groups
    such as ``300ms``, ``1.5h`` or ``2h45m``, optionally signed.
    Sub-microsecond remainders are truncated.
    """
    if _INT_RE.fullmatch(raw):
        return _microseconds(raw, parse_int(raw))
    match = _DURATION_RE.fullmatch(raw)
    if match is None:
        raise ConversionError(f"invalid duration: {raw!r}")
    nanoseconds = Decimal(0)
    for number, unit in _DURATION_PART_RE.findall(match.group(2)):
        nanoseconds += Decimal(number) * _DURATION_UNITS[unit]
    microseconds = int(nanoseconds / 1000)
    if match.group(1) == "-":
        microseconds = -microseconds
    return _microseconds(raw, microseconds)


def _microseconds(raw: str, microseconds: int) -> timedelta:
    try:
        return timedelta(microseconds=microseconds)
    except OverflowError as e:
        raise ConversionError(f"duration out of range: {raw!r}") from e


def parse_float(raw: str) -> float:
    try:
        return float(raw)
    except ValueError as e:
        raise ConversionError(f"invalid float: {raw!r}") from e


def parse_decimal(raw: str) -> Decimal:
    try:
        return Decimal(raw)
    except InvalidOperation as e:
        raise ConversionError(f"invalid decimal: {raw!r}") from e


def split_list(raw: str) -> List[str]:
    """Split on commas and strip whitespace around every item."""
    return [part.strip() for part in raw.split(",")]


class Converter:
    """Registry of parsers keyed by target type."""

    def __init__(self):
        self._parsers: Dict[type, Callable[[str], Any]] = {
            str: str,
            bytes: lambda raw: raw.encode("utf-8"),
            int: parse_int,
            float: parse_float,
            bool: parse_bool,
            timedelta: parse_duration,
            Decimal: parse_decimal,
            Path: Path,
        }

    def register(self, target: type, parser: Callable[[str], Any]):
        """Register ``parser`` for ``target``, replacing any previous one."""
        self._parsers[target] = parser

    def supports(self, target: Any) -> bool:
        try:
            self._resolve(target)
        except ConversionError:
            return False
        return True

    def convert(self, raw: str, target: Any) -> Any:
        """Convert ``raw`` to ``target``, raising ``ConversionError`` on failure."""
        return self._resolve(target)(raw)

    def _resolve(self, target: Any) -> Callable[[str], Any]:
        if target is Any:
            return str

        origin = typing.get_origin(target)
        args = typing.get_args(target)

        if origin in _UNION_TYPES:
            members = [arg for arg in args if arg is not type(None)]
            return self._union_parser(members)

        if origin is not None:
            if origin in (list, abc.Sequence, abc.MutableSequence, abc.Iterable):
                return self._collection_parser(list, args[0] if args else str)
            if origin in (set, abc.Set, abc.MutableSet):
                return self._collection_parser(set, args[0] if args else str)
            if origin is frozenset:
                return self._collection_parser(frozenset, args[0] if args else str)
            if origin is tuple:
                return self._tuple_parser(args)
            if origin in (dict, abc.Mapping, abc.MutableMapping):
                key_type, value_type = args if args else (str, str)
                return self._dict_parser(key_type, value_type)
            raise ConversionError(f"unsupported target type: {target!r}")

        if target in (list, tuple, set, frozenset):
            return self._collection_parser(target, str)
        if target is dict:
            return self._dict_parser(str, str)

        if isinstance(target, type):
            if issubclass(target, Enum):
                return self._enum_parser(target)
            for klass in target.__mro__:
                if klass in self._parsers:
                    return self._parsers[klass]

        raise ConversionError(f"unsupported target type: {target!r}")

    def _union_parser(self, members: List[Any]) -> Callable[[str], Any]:
        parsers = [self._resolve(member) for member in members]

        def parse(raw: str) -> Any:
            for parser in parsers:
                try:
                    return parser(raw)
                except ConversionError:
                    continue
            raise ConversionError(f"{raw!r} matches none of {members!r}")

        return parse

    def _collection_parser(self, kind: type, item_type: Any) -> Callable[[str], Any]:
        item = self._resolve(item_type)
        return lambda raw: kind(item(part) for part in split_list(raw))

    def _tuple_parser(self, args: tuple) -> Callable[[str], Any]:
        if not args or (len(args) == 2 and args[1] is Ellipsis):
            return self._collection_parser(tuple, args[0] if args else str)
        items = [self._resolve(arg) for arg in args]

        def parse(raw: str) -> tuple:
            parts = split_list(raw)
            if len(parts) != len(items):
                raise ConversionError(f"expected {len(items)} items, got {len(parts)}: {raw!r}")
            return tuple(item(part) for item, part in zip(items, parts))

        return parse

    def _dict_parser(self, key_type: Any, value_type: Any) -> Callable[[str], Any]:
        parse_key = self._resolve(key_type)
        parse_value = self._resolve(value_type)

        def parse(raw: str) -> dict:
            result = {}
            for pair in split_list(raw):
                if not pair:
                    continue
                key, sep, value = pair.partition("=")
                if not sep:
                    raise ConversionError(f"invalid key=value pair: {pair!r}")
                result[parse_key(key.strip())] = parse_value(value.strip())
            return result

        return parse

    @staticmethod
    def _enum_parser(target: type) -> Callable[[str], Any]:
        def parse(raw: str) -> Enum:
            if raw in target.__members__:
                return target[raw]
            for member in target:
                if str(member.value) == raw:
                    return member
            raise ConversionError(f"{raw!r} is not a valid {target.__name__}")

        return parse


default_converter = Converter()

__all__ = [
    "Converter",
    "default_converter",
    "parse_int",
    "parse_bool",
    "parse_duration",
    "parse_float",
    "parse_decimal",
    "split_list",
]
