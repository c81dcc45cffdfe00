"""Field constructors for homogeneous sequences, marshalled lazily element by element."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Iterable

from .field import Field, FieldType


@dataclass(frozen=True)
class _TypedArray:
    """A sequence of values and the array-encoder method that appends each one."""

    values: tuple
    method: str

    def marshal_log_array(self, arr: Any) -> None:
        append = getattr(arr, self.method)
        for value in self.values:
            append(value)


def _signed(bits: int) -> Callable[[int], int]:
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1

    def check(value: int) -> int:
        if not low <= value <= high:
            raise OverflowError(f"value {value} out of range for int{bits}")
        return int(value)

    return check


def _unsigned(bits: int) -> Callable[[int], int]:
    limit = 1 << bits

    def check(value: int) -> int:
        if not 0 <= value < limit:
            raise OverflowError(f"value {value} out of range for uint{bits}")
        return int(value)

    return check


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", float(value)))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _to_complex64(value: complex) -> complex:
    c = complex(value)
    return complex(_to_float32(c.real), _to_float32(c.imag))


def _to_nanos(value: timedelta | int) -> int:
    if isinstance(value, timedelta):
        micros = (value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds
        return _signed(64)(micros * 1000)
    return _signed(64)(value)


def _identity(value: Any) -> Any:
    return value


def _typed(
    key: str,
    values: Iterable[Any] | None,
    method: str,
    convert: Callable[[Any], Any] = _identity,
) -> Field:
    items = tuple(convert(v) for v in (values or ()))
    return array(key, _TypedArray(items, method))


def array(key: str, val: Any) -> Field:
    """A field holding an object with a ``marshal_log_array(arr)`` method."""
    return Field(key=key, type=FieldType.ARRAY_MARSHALER, interface=val)


def bools(key: str, bs: Iterable[bool] | None) -> Field:
    """A sequence of booleans."""
    return _typed(key, bs, "append_bool", bool)


def byte_strings(key: str, bss: Iterable[bytes] | None) -> Field:
    """A sequence of UTF-8 texts carried as bytes."""
    return _typed(key, bss, "append_byte_string", bytes)


def complex128s(key: str, nums: Iterable[complex] | None) -> Field:
    """A sequence of double-precision complex numbers."""
    return _typed(key, nums, "append_complex128", complex)


def complex64s(key: str, nums: Iterable[complex] | None) -> Field:
    """A sequence of complex numbers rounded to single precision."""
    return _typed(key, nums, "append_complex64", _to_complex64)


def durations(key: str, ds: Iterable[timedelta | int] | None) -> Field:
    """A sequence of durations, carried as nanoseconds."""
    return _typed(key, ds, "append_duration", _to_nanos)


def float64s(key: str, nums: Iterable[float] | None) -> Field:
    """A sequence of doubles."""
    return _typed(key, nums, "append_float64", float)


def float32s(key: str, nums: Iterable[float] | None) -> Field:
    """A sequence of floats rounded to single precision."""
    return _typed(key, nums, "append_float32", _to_float32)


def ints(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of platform integers."""
    return _typed(key, nums, "append_int", _signed(64))


def int64s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of signed 64-bit integers."""
    return _typed(key, nums, "append_int64", _signed(64))


def int32s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of signed 32-bit integers."""
    return _typed(key, nums, "append_int32", _signed(32))


def int16s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of signed 16-bit integers."""
    return _typed(key, nums, "append_int16", _signed(16))


def int8s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of signed 8-bit integers."""
    return _typed(key, nums, "append_int8", _signed(8))


def strings(key: str, ss: Iterable[str] | None) -> Field:
    """A sequence of strings."""
    return _typed(key, ss, "append_string", str)


def times(key: str, ts: Iterable[datetime] | None) -> Field:
    """A sequence of points in time."""
    return _typed(key, ts, "append_time")


def uints(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of platform unsigned integers."""
    return _typed(key, nums, "append_uint", _unsigned(64))


def uint64s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of unsigned 64-bit integers."""
    return _typed(key, nums, "append_uint64", _unsigned(64))


def uint32s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of unsigned 32-bit integers."""
    return _typed(key, nums, "append_uint32", _unsigned(32))


def uint16s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of unsigned 16-bit integers."""
    return _typed(key, nums, "append_uint16", _unsigned(16))


def uint8s(key: str, nums: Iterable[int] | None) -> Field:
    """A sequence of unsigned 8-bit integers."""
    return _typed(key, nums, "append_uint8", _unsigned(8))


def uintptrs(key: str, us: Iterable[int] | None) -> Field:
    """A sequence of pointer-sized addresses."""
    return _typed(key, us, "append_uintptr", _unsigned(64))