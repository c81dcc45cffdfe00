import dataclasses
from datetime import datetime, timedelta, timezone
from ipaddress import ip_address

import pytest

from zaplog import field as zf
from zaplog.field import Field, FieldType

UTC = timezone.utc
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class Username(str):
    def marshal_log_object(self, enc):
        enc.add_string("username", str(self))


ADDR = ip_address("1.2.3.4")
NAME = Username("phil")
INTS = [5, 6]


@pytest.mark.parametrize(
    "expect, got",
    [
        (Field(type=FieldType.SKIP), zf.skip()),
        (Field(key="k", type=FieldType.BINARY, interface=b"ab12"), zf.binary("k", b"ab12")),
        (Field(key="k", type=FieldType.BOOL, integer=1), zf.boolean("k", True)),
        (Field(key="k", type=FieldType.BOOL, integer=0), zf.boolean("k", False)),
        (Field(key="k", type=FieldType.BYTE_STRING, interface=b"ab12"), zf.byte_string("k", b"ab12")),
        (Field(key="k", type=FieldType.COMPLEX128, interface=1 + 2j), zf.complex128("k", 1 + 2j)),
        (Field(key="k", type=FieldType.COMPLEX64, interface=1 + 2j), zf.complex64("k", 1 + 2j)),
        (Field(key="k", type=FieldType.DURATION, integer=1), zf.duration("k", 1)),
        (Field(key="k", type=FieldType.DURATION, integer=10**9), zf.duration("k", timedelta(seconds=1))),
        (Field(key="k", type=FieldType.INT64, integer=1), zf.int_("k", 1)),
        (Field(key="k", type=FieldType.INT64, integer=1), zf.int64("k", 1)),
        (Field(key="k", type=FieldType.INT32, integer=1), zf.int32("k", 1)),
        (Field(key="k", type=FieldType.INT16, integer=1), zf.int16("k", 1)),
        (Field(key="k", type=FieldType.INT8, integer=1), zf.int8("k", 1)),
        (Field(key="k", type=FieldType.STRING, string="foo"), zf.string("k", "foo")),
        (Field(key="k", type=FieldType.UINT64, integer=1), zf.uint("k", 1)),
        (Field(key="k", type=FieldType.UINT64, integer=1), zf.uint64("k", 1)),
        (Field(key="k", type=FieldType.UINT32, integer=1), zf.uint32("k", 1)),
        (Field(key="k", type=FieldType.UINT16, integer=1), zf.uint16("k", 1)),
        (Field(key="k", type=FieldType.UINT8, integer=1), zf.uint8("k", 1)),
        (Field(key="k", type=FieldType.UINTPTR, integer=10), zf.uintptr("k", 0xA)),
        (Field(key="k", type=FieldType.REFLECT, interface=INTS), zf.reflect("k", INTS)),
        (Field(key="k", type=FieldType.REFLECT), zf.reflect("k", None)),
        (Field(key="k", type=FieldType.STRINGER, interface=ADDR), zf.stringer("k", ADDR)),
        (Field(key="k", type=FieldType.OBJECT_MARSHALER, interface=NAME), zf.object_("k", NAME)),
        (Field(type=FieldType.INLINE_MARSHALER, interface=NAME), zf.inline(NAME)),
        (Field(key="k", type=FieldType.NAMESPACE), zf.namespace("k")),
    ],
)
def test_field_constructors(expect, got):
    assert got == expect


@pytest.mark.parametrize(
    "expect, got",
    [
        (Field(key="k", type=FieldType.TIME, integer=0, interface=UTC), zf.time("k", EPOCH)),
        (
            Field(key="k", type=FieldType.TIME, integer=1000, interface=UTC),
            zf.time("k", EPOCH + timedelta(microseconds=1)),
        ),
        (
            Field(key="k", type=FieldType.TIME, integer=-9223372036854775000, interface=UTC),
            zf.time("k", EPOCH + timedelta(microseconds=-9223372036854775)),
        ),
        (
            Field(key="k", type=FieldType.TIME, integer=9223372036854775000, interface=UTC),
            zf.time("k", EPOCH + timedelta(microseconds=9223372036854775)),
        ),
        (
            Field(key="k", type=FieldType.TIME_FULL, interface=datetime(1, 1, 1, tzinfo=UTC)),
            zf.time("k", datetime(1, 1, 1, tzinfo=UTC)),
        ),
        (
            Field(key="k", type=FieldType.TIME_FULL, interface=datetime(9999, 1, 1, tzinfo=UTC)),
            zf.time("k", datetime(9999, 1, 1, tzinfo=UTC)),
        ),
    ],
)
def test_time_constructor(expect, got):
    assert got == expect


def test_time_just_past_int64_range_is_full():
    val = EPOCH + timedelta(microseconds=9223372036854776)
    assert zf.time("k", val) == Field(key="k", type=FieldType.TIME_FULL, interface=val)


def test_time_keeps_offset_zone():
    tz = timezone(timedelta(hours=1))
    f = zf.time("k", datetime(1970, 1, 1, 1, tzinfo=tz))
    assert f == Field(key="k", type=FieldType.TIME, integer=0, interface=tz)


def test_naive_time_is_read_as_utc():
    f = zf.time("k", datetime(1970, 1, 1, 0, 0, 1))
    assert f == Field(key="k", type=FieldType.TIME, integer=10**9, interface=None)


@pytest.mark.parametrize(
    "ctor",
    [
        zf.binary, zf.boolean, zf.byte_string, zf.complex128, zf.complex64,
        zf.duration, zf.float64, zf.float32, zf.int_, zf.int64, zf.int32,
        zf.int16, zf.int8, zf.string, zf.time, zf.uint, zf.uint64, zf.uint32,
        zf.uint16, zf.uint8, zf.uintptr,
    ],
)
def test_none_values_become_nil_field(ctor):
    assert ctor("k", None) == zf.nil_field("k")
    assert zf.nil_field("k") == Field(key="k", type=FieldType.REFLECT)


def test_float64_bits():
    assert zf.float64("k", 1.0) == Field(key="k", type=FieldType.FLOAT64, integer=4607182418800017408)
    assert zf.float64("k", -1.0).integer == -4616189618054758400


def test_float32_bits():
    assert zf.float32("k", 1.0) == Field(key="k", type=FieldType.FLOAT32, integer=1065353216)
    assert zf.float32("k", -1.0).integer == 3212836864


def test_float32_overflow_is_infinity():
    assert zf.float32("k", 1e300).integer == 0x7F800000


def test_uint64_max_wraps_to_negative_one():
    assert zf.uint64("k", 2**64 - 1).integer == -1


def test_complex64_rounds_parts():
    assert zf.complex64("k", 0.1 + 0j).interface.real != 0.1
    assert zf.complex64("k", 0.5 + 0.25j).interface == 0.5 + 0.25j


@pytest.mark.parametrize(
    "ctor, val",
    [
        (zf.int8, 128),
        (zf.int8, -129),
        (zf.int16, 1 << 15),
        (zf.int32, 1 << 31),
        (zf.int64, 1 << 63),
        (zf.uint8, 256),
        (zf.uint8, -1),
        (zf.uint, -1),
        (zf.uint64, 1 << 64),
        (zf.duration, 1 << 63),
    ],
)
def test_out_of_range_integers_raise(ctor, val):
    with pytest.raises(OverflowError):
        ctor("k", val)


def test_fields_are_immutable():
    f = zf.string("k", "v")
    with pytest.raises(dataclasses.FrozenInstanceError):
        f.key = "other"
    assert f.key == "k"


def test_constructors_produce_distinct_types():
    produced = [
        zf.skip().type,
        zf.binary("k", b"x").type,
        zf.boolean("k", True).type,
        zf.byte_string("k", b"x").type,
        zf.complex128("k", 1j).type,
        zf.complex64("k", 1j).type,
        zf.duration("k", 1).type,
        zf.float64("k", 1.0).type,
        zf.float32("k", 1.0).type,
        zf.int64("k", 1).type,
        zf.int32("k", 1).type,
        zf.int16("k", 1).type,
        zf.int8("k", 1).type,
        zf.string("k", "v").type,
        zf.uint64("k", 1).type,
        zf.uint32("k", 1).type,
        zf.uint16("k", 1).type,
        zf.uint8("k", 1).type,
        zf.uintptr("k", 1).type,
        zf.reflect("k", 1).type,
        zf.namespace("k").type,
        zf.stringer("k", ADDR).type,
        zf.object_("k", NAME).type,
        zf.inline(NAME).type,
    ]
    assert len(set(produced)) == len(produced)
    assert zf.inline(NAME).type == FieldType.INLINE_MARSHALER