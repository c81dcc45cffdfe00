"""Typed, lazily-encoded key/value pairs attached to log entries."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Any

_MIN_INT64 = -(1 << 63)
_MAX_INT64 = (1 << 63) - 1
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class FieldType(IntEnum):
    """How a field's value is stored and should be encoded."""

    UNKNOWN = 0
    ARRAY_MARSHALER = 1
    OBJECT_MARSHALER = 2
    BINARY = 3
    BOOL = 4
    BYTE_STRING = 5
    COMPLEX128 = 6
    COMPLEX64 = 7
    DURATION = 8
    FLOAT64 = 9
    FLOAT32 = 10
    INT64 = 11
    INT32 = 12
    INT16 = 13
    INT8 = 14
    STRING = 15
    TIME = 16
    TIME_FULL = 17
    UINT64 = 18
    UINT32 = 19
    UINT16 = 20
    UINT8 = 21
    UINTPTR = 22
    REFLECT = 23
    NAMESPACE = 24
    STRINGER = 25
    ERROR = 26
    SKIP = 27
    INLINE_MARSHALER = 28


@dataclass(frozen=True)
class Field:
    """A key, a type tag and the value stored in the slot that type uses."""

    key: str = ""
    type: FieldType = FieldType.UNKNOWN
    integer: int = 0
    string: str = ""
    interface: Any = None


def _check_signed(val: int, bits: int) -> int:
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    if not low <= val <= high:
        raise OverflowError(f"value {val} out of range for int{bits}")
    return int(val)


def _check_unsigned(val: int, bits: int) -> int:
    if not 0 <= val < (1 << bits):
        raise OverflowError(f"value {val} out of range for uint{bits}")
    return int(val)


def _as_int64(val: int) -> int:
    """Reinterpret a 64-bit unsigned value as signed."""
    return val - (1 << 64) if val > _MAX_INT64 else val


def _to_float32(f: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", f))[0]
    except OverflowError:
        return math.copysign(math.inf, f)


def _timedelta_nanos(delta: timedelta) -> int:
    return ((delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds) * 1000


def _unix_nanos(val: datetime) -> int:
    aware = val if val.utcoffset() is not None else val.replace(tzinfo=timezone.utc)
    return _timedelta_nanos(aware - _EPOCH)


def skip() -> Field:
    """A no-op field."""
    return Field(type=FieldType.SKIP)


def nil_field(key: str) -> Field:
    """A field that encodes explicitly as null."""
    return reflect(key, None)


def binary(key: str, val: bytes | bytearray | None) -> Field:
    """An opaque binary blob."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.BINARY, interface=bytes(val))


def boolean(key: str, val: bool | None) -> Field:
    """A boolean, stored as 1 or 0."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.BOOL, integer=1 if val else 0)


def byte_string(key: str, val: bytes | bytearray | None) -> Field:
    """UTF-8 text carried as bytes."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.BYTE_STRING, interface=bytes(val))


def complex128(key: str, val: complex | None) -> Field:
    """A double-precision complex number."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.COMPLEX128, interface=complex(val))


def complex64(key: str, val: complex | None) -> Field:
    """A complex number whose parts are rounded to single precision."""
    if val is None:
        return nil_field(key)
    c = complex(val)
    value = complex(_to_float32(c.real), _to_float32(c.imag))
    return Field(key=key, type=FieldType.COMPLEX64, interface=value)


def float64(key: str, val: float | None) -> Field:
    """A double, stored as its IEEE-754 bits reinterpreted as a signed integer."""
    if val is None:
        return nil_field(key)
    (bits,) = struct.unpack("<q", struct.pack("<d", float(val)))
    return Field(key=key, type=FieldType.FLOAT64, integer=bits)


def float32(key: str, val: float | None) -> Field:
    """A single-precision float, stored as its IEEE-754 bits."""
    if val is None:
        return nil_field(key)
    (bits,) = struct.unpack("<I", struct.pack("<f", _to_float32(float(val))))
    return Field(key=key, type=FieldType.FLOAT32, integer=bits)


def int_(key: str, val: int | None) -> Field:
    """A platform integer, carried as a 64-bit integer."""
    return int64(key, val)


def int64(key: str, val: int | None) -> Field:
    """A signed 64-bit integer."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.INT64, integer=_check_signed(val, 64))


def int32(key: str, val: int | None) -> Field:
    """A signed 32-bit integer."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.INT32, integer=_check_signed(val, 32))


def int16(key: str, val: int | None) -> Field:
    """A signed 16-bit integer."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.INT16, integer=_check_signed(val, 16))


def int8(key: str, val: int | None) -> Field:
    """A signed 8-bit integer."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.INT8, integer=_check_signed(val, 8))


def string(key: str, val: str | None) -> Field:
    """A string."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.STRING, string=val)


def uint(key: str, val: int | None) -> Field:
    """A platform unsigned integer, carried as an unsigned 64-bit integer."""
    return uint64(key, val)


def uint64(key: str, val: int | None) -> Field:
    """An unsigned 64-bit integer, stored with its bits reinterpreted as signed."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.UINT64, integer=_as_int64(_check_unsigned(val, 64)))


def uint32(key: str, val: int | None) -> Field:
    """An unsigned 32-bit integer."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.UINT32, integer=_check_unsigned(val, 32))


def uint16(key: str, val: int | None) -> Field:
    """An unsigned 16-bit integer."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.UINT16, integer=_check_unsigned(val, 16))


def uint8(key: str, val: int | None) -> Field:
    """An unsigned 8-bit integer."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.UINT8, integer=_check_unsigned(val, 8))


def uintptr(key: str, val: int | None) -> Field:
    """A pointer-sized address."""
    if val is None:
        return nil_field(key)
    return Field(key=key, type=FieldType.UINTPTR, integer=_as_int64(_check_unsigned(val, 64)))


def reflect(key: str, val: Any) -> Field:
    """An arbitrary object, serialised generically by the encoder."""
    return Field(key=key, type=FieldType.REFLECT, interface=val)


def namespace(key: str) -> Field:
    """Open a named scope; later fields are nested inside it."""
    return Field(key=key, type=FieldType.NAMESPACE)


def stringer(key: str, val: Any) -> Field:
    """An object whose ``str()`` is taken lazily at encoding time."""
    return Field(key=key, type=FieldType.STRINGER, interface=val)


def time(key: str, val: datetime | None) -> Field:
    """A point in time.

    Times representable as int64 nanoseconds since the epoch are stored as that
    count plus the time zone; others are stored whole. Naive datetimes are read
    as UTC and carry no time zone.
    """
    if val is None:
        return nil_field(key)
    nanos = _unix_nanos(val)
    if nanos < _MIN_INT64 or nanos > _MAX_INT64:
        return Field(key=key, type=FieldType.TIME_FULL, interface=val)
    return Field(key=key, type=FieldType.TIME, integer=nanos, interface=val.tzinfo)


def duration(key: str, val: timedelta | int | None) -> Field:
    """A duration, stored in nanoseconds; plain integers are taken as nanoseconds."""
    if val is None:
        return nil_field(key)
    nanos = _timedelta_nanos(val) if isinstance(val, timedelta) else int(val)
    return Field(key=key, type=FieldType.DURATION, integer=_check_signed(nanos, 64))


def object_(key: str, val: Any) -> Field:
    """An object that marshals itself into a nested map."""
    return Field(key=key, type=FieldType.OBJECT_MARSHALER, interface=val)


def inline(val: Any) -> Field:
    """An object whose own fields are added to the current scope."""
    return Field(type=FieldType.INLINE_MARSHALER, interface=val)