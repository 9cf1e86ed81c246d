"""Tagged value model for tree-shaped source content.

A decoded source document (JSON, CSV, XML) is turned into one immutable
``Value`` tree before any classification or rendering happens. The tree is
a closed union of six frozen dataclasses; every consumer dispatches on the
concrete type and ends with an explicit ``TypeError`` so that a new variant
cannot slip through silently.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Union

# Integral floats inside this range print without a trailing ".0"
_INTEGRAL_FLOAT_LIMIT = 2**53


@dataclass(frozen=True)
class NullValue:
    """JSON ``null`` (or an absent value)."""


@dataclass(frozen=True)
class BoolValue:
    value: bool


@dataclass(frozen=True)
class NumberValue:
    value: Union[int, float]


@dataclass(frozen=True)
class TextValue:
    value: str


@dataclass(frozen=True)
class SequenceValue:
    """Ordered list of values."""

    items: tuple[Value, ...] = ()

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class MappingValue:
    """Ordered key → value mapping with unique keys."""

    entries: tuple[tuple[str, Value], ...] = ()
    _index: dict[str, Value] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        index: dict[str, Value] = {}
        for key, item in self.entries:
            if key in index:
                raise ValueError(f"Duplicate key in mapping: {key!r}")
            index[key] = item
        object.__setattr__(self, "_index", index)

    def get(self, key: str) -> Optional[Value]:
        """Return the value stored under *key*, or ``None`` when absent."""
        return self._index.get(key)

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __len__(self) -> int:
        return len(self.entries)


Value = Union[NullValue, BoolValue, NumberValue, TextValue, SequenceValue, MappingValue]

SCALAR_TYPES = (NullValue, BoolValue, NumberValue, TextValue)


# ---------------------------------------------------------------------------
# Conversions to / from plain Python objects
# ---------------------------------------------------------------------------


def from_python(obj: Any) -> Value:
    """Build a ``Value`` tree from decoded JSON-like Python data."""
    if obj is None:
        return NullValue()
    if isinstance(obj, bool):
        return BoolValue(obj)
    if isinstance(obj, (int, float)):
        return NumberValue(obj)
    if isinstance(obj, str):
        return TextValue(obj)
    if isinstance(obj, dict):
        return MappingValue(tuple((str(key), from_python(item)) for key, item in obj.items()))
    if isinstance(obj, (list, tuple)):
        return SequenceValue(tuple(from_python(item) for item in obj))
    raise TypeError(f"Cannot convert {type(obj).__name__} to a Value")


def to_python(value: Value) -> Any:
    """Inverse of :func:`from_python`; integral floats come back as ints."""
    if isinstance(value, NullValue):
        return None
    if isinstance(value, BoolValue):
        return value.value
    if isinstance(value, NumberValue):
        number = value.value
        if isinstance(number, float) and number.is_integer() and abs(number) < _INTEGRAL_FLOAT_LIMIT:
            return int(number)
        return number
    if isinstance(value, TextValue):
        return value.value
    if isinstance(value, SequenceValue):
        return [to_python(item) for item in value.items]
    if isinstance(value, MappingValue):
        return {key: to_python(item) for key, item in value.entries}
    raise TypeError(f"Unsupported value: {value!r}")


# ---------------------------------------------------------------------------
# Text forms
# ---------------------------------------------------------------------------


def number_text(number: Union[int, float]) -> str:
    """Stringify a number the way JavaScript does for the common cases."""
    if isinstance(number, float):
        if number.is_integer() and abs(number) < 1e21:
            return str(int(number))
        return repr(number)
    return str(number)


def compact_json(value: Value) -> str:
    """Compact textual form, e.g. ``[1,2,3]`` or ``{"a":1}``."""
    return json.dumps(to_python(value), separators=(",", ":"), ensure_ascii=False)


def scalar_text(value: Value) -> str:
    """Stringify a value for a single table cell.

    Null becomes an empty string, booleans ``true``/``false``; containers
    fall back to :func:`compact_json`.
    """
    if isinstance(value, NullValue):
        return ""
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, NumberValue):
        return number_text(value.value)
    if isinstance(value, TextValue):
        return value.value
    if isinstance(value, (SequenceValue, MappingValue)):
        return compact_json(value)
    raise TypeError(f"Unsupported value: {value!r}")


def display_text(value: Value) -> str:
    """Like :func:`scalar_text`, but null prints as ``null`` (listings, bare scalars)."""
    if isinstance(value, NullValue):
        return "null"
    return scalar_text(value)


def type_name(value: Value) -> str:
    """Name of the value's type as reported in XML ``type`` attributes."""
    if isinstance(value, SequenceValue):
        return "array"
    if isinstance(value, MappingValue):
        return "object"
    if isinstance(value, TextValue):
        return "string"
    if isinstance(value, NumberValue):
        return "number"
    if isinstance(value, BoolValue):
        return "boolean"
    if isinstance(value, NullValue):
        return "null"
    raise TypeError(f"Unsupported value: {value!r}")


def is_scalar(value: Value) -> bool:
    return isinstance(value, SCALAR_TYPES)
