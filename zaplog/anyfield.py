"""Choose the best field constructor for an arbitrary value."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable, Sequence

from .array import (
    array,
    bools,
    complex128s,
    durations,
    float64s,
    ints,
    strings,
    times,
    uint64s,
)
from .error import errors, named_error
from .field import (
    Field,
    binary,
    boolean,
    complex128,
    duration,
    float64,
    int_,
    nil_field,
    object_,
    reflect,
    string,
    stringer,
    time,
    uint64,
)

_MIN_INT64 = -(1 << 63)
_MAX_INT64 = (1 << 63) - 1
_MAX_UINT64 = (1 << 64) - 1


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _has_method(value: Any, name: str) -> bool:
    return callable(getattr(type(value), name, None))


def _integer(key: str, value: int) -> Field:
    if _MIN_INT64 <= value <= _MAX_INT64:
        return int_(key, value)
    if 0 <= value <= _MAX_UINT64:
        return uint64(key, value)
    return reflect(key, value)


def _integers(key: str, values: Sequence[int]) -> Field | None:
    if all(_MIN_INT64 <= v <= _MAX_INT64 for v in values):
        return ints(key, values)
    if all(0 <= v <= _MAX_UINT64 for v in values):
        return uint64s(key, values)
    return None


_HOMOGENEOUS: tuple[tuple[Callable[[Any], bool], Callable[[str, Sequence[Any]], Field | None]], ...] = (
    (lambda v: isinstance(v, bool), bools),
    (_is_int, _integers),
    (lambda v: isinstance(v, float), float64s),
    (lambda v: isinstance(v, complex), complex128s),
    (lambda v: isinstance(v, str), strings),
    (lambda v: isinstance(v, datetime), times),
    (lambda v: isinstance(v, timedelta), durations),
)


def _sequence(key: str, values: Sequence[Any]) -> Field | None:
    if not values:
        return None
    for matches, build in _HOMOGENEOUS:
        if all(matches(v) for v in values):
            return build(key, values)
    if all(v is None or isinstance(v, BaseException) for v in values) and any(
        v is not None for v in values
    ):
        return errors(key, values)
    return None


def _is_stringer(value: Any) -> bool:
    return type(value).__str__ is not object.__str__


def any_(key: str, value: Any) -> Field:
    """Build the most specific field for ``value``, falling back to ``reflect``.

    Objects with ``marshal_log_object`` or ``marshal_log_array`` are used as such;
    scalars and homogeneous lists or tuples get their typed constructor; ``None``
    encodes as null; objects with their own ``__str__`` become stringers.
    """
    if value is None:
        return nil_field(key)
    if _has_method(value, "marshal_log_object"):
        return object_(key, value)
    if _has_method(value, "marshal_log_array"):
        return array(key, value)
    if isinstance(value, bool):
        return boolean(key, value)
    if _is_int(value):
        return _integer(key, value)
    if isinstance(value, float):
        return float64(key, value)
    if isinstance(value, complex):
        return complex128(key, value)
    if isinstance(value, str):
        return string(key, value)
    if isinstance(value, (bytes, bytearray)):
        return binary(key, value)
    if isinstance(value, datetime):
        return time(key, value)
    if isinstance(value, timedelta):
        return duration(key, value)
    if isinstance(value, BaseException):
        return named_error(key, value)
    if isinstance(value, (list, tuple)):
        field = _sequence(key, value)
        return field if field is not None else reflect(key, value)
    if _is_stringer(value):
        return stringer(key, value)
    return reflect(key, value)