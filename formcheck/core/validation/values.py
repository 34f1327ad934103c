"""Submitted Values and Explicit Coercion

ValueMap holds the raw submitted values of one form. Coercion never happens
implicitly: the numeric rules return a Result and the engine writes the typed
value back only when the rule accepted it.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping, Sized
from dataclasses import dataclass
from typing import Any, Generic, Iterator, TypeVar, Union
import math
import re

from formcheck.core.errors import AppError, Ok, Result, invalid_format, invalid_type

T = TypeVar("T")

Scalar = Union[str, int, float, bool, None]

_INT_SHAPE = re.compile(r"\s*[+-]?\d+\s*")
_FLOAT_SHAPE = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*")


def is_empty(value: Any) -> bool:
    """Shared emptiness predicate for the required gate.

    None, "", "0", False, 0, 0.0 and empty containers are empty.
    """
    if value is None or value is False or value == "0":
        return True
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def is_blank(value: Any) -> bool:
    """Nothing submitted: the numeric rules let these through untouched."""
    return value is None or value == ""


class ValueMap(MutableMapping[str, Scalar]):
    """Field name -> submitted value. Missing fields read as None."""

    __slots__ = ("_data",)

    def __init__(self, values: Mapping[str, Scalar] | None = None):
        self._data: dict[str, Scalar] = dict(values or {})

    def __getitem__(self, key: str) -> Scalar:
        return self._data.get(key)

    def __setitem__(self, key: str, value: Scalar) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ValueMap):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"ValueMap({sorted(self._data)})"

    def text(self, key: str) -> str:
        """Value as text for length checks; None reads as ''."""
        value = self._data.get(key)
        return "" if value is None else str(value)

    def to_dict(self) -> dict[str, Scalar]:
        return dict(self._data)


@dataclass(frozen=True, slots=True)
class CoercionRule(ABC, Generic[T]):
    """Converts a submitted value to a non-zero number of the target type."""

    @property
    @abstractmethod
    def target_type(self) -> type[T]:
        """Type this rule coerces to."""

    @abstractmethod
    def coerce(self, field: str, value: Any) -> Result[T, AppError]:
        """Coerce value to target type. Returns Result."""

    def __call__(self, field: str, value: Any) -> Result[T, AppError]:
        return self.coerce(field, value)


@dataclass(frozen=True, slots=True)
class StringToInt(CoercionRule[int]):
    """Integer-shaped text or a non-bool int; zero is rejected."""

    @property
    def target_type(self) -> type[int]:
        return int

    def coerce(self, field: str, value: Any) -> Result[int, AppError]:
        if isinstance(value, str):
            if not _INT_SHAPE.fullmatch(value):
                return invalid_format(field, "integer", origin="coercion.int")
            number = int(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            number = value
        else:
            return invalid_type(field, "integer", type(value), origin="coercion.int")
        # TODO: confirm with product whether 0 should be accepted for numeric fields
        if number == 0:
            return invalid_format(field, "non-zero integer", origin="coercion.int")
        return Ok(number)


@dataclass(frozen=True, slots=True)
class StringToFloat(CoercionRule[float]):
    """Decimal text or a float; zero, nan and inf text are rejected."""

    @property
    def target_type(self) -> type[float]:
        return float

    def coerce(self, field: str, value: Any) -> Result[float, AppError]:
        if isinstance(value, str):
            if not _FLOAT_SHAPE.fullmatch(value):
                return invalid_format(field, "decimal number", origin="coercion.float")
            number = float(value)
        elif isinstance(value, float):
            number = value
        else:
            return invalid_type(field, "float", type(value), origin="coercion.float")
        if not math.isfinite(number) or number == 0.0:
            return invalid_format(field, "non-zero decimal number", origin="coercion.float")
        return Ok(number)


coerce_int = StringToInt()
coerce_float = StringToFloat()
