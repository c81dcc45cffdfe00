# zaplog

Typed, structured log fields. A field is a key plus a typed value. The value is
kept in a form that an encoder can turn into output later, when a log entry is
written.

## Installation

```
pip install zaplog
```

For running the tests:

```
pip install "zaplog[test]"
```

## Fields

`zaplog.field.Field` is a frozen dataclass with the members `key`, `type` (a
`FieldType`), `integer`, `string` and `interface`. Which slot holds the value
depends on the type. The constructors live in `zaplog.field`:

```python
from zaplog import field

f = field.string("user", "alice")
n = field.int64("attempt", 3)
ok = field.boolean("cached", True)     # stored as integer 1
ns = field.namespace("request")        # later fields nest under "request"
nothing = field.skip()                 # a field that does nothing
```

- The integer constructors (`int_`, `int64`, `int32`, `int16`, `int8`, `uint`,
  `uint64`, `uint32`, `uint16`, `uint8` and `uintptr`) check the range of the
  value and raise `OverflowError` when it does not fit. Unsigned 64-bit values
  are stored with their bits read as a signed integer.
- `float64` and `float32` store the IEEE-754 bits of the value. `complex64`
  rounds both parts to single precision.
- `binary` and `byte_string` carry bytes.
- `time` takes a `datetime` and reads a naive one as UTC. If the time fits in
  int64 nanoseconds since the epoch, the field stores that count and the time
  zone. Otherwise it stores the whole datetime, with type `TIME_FULL`.
- `duration` takes a `timedelta`, or an integer that counts nanoseconds.
- Passing `None` to any of these typed constructors gives
  `field.nil_field(key)`, which encodes as an explicit null.
- For your own types there are `object_`, `inline`, `stringer` and `reflect`.

### Arrays

`zaplog.array` builds fields for sequences. Each one checks and converts its
elements up front, in the same way as the single-value constructors. `None`
counts as an empty sequence.

```python
from zaplog import array

array.ints("ids", [1, 2, 3])
array.strings("tags", ["a", "b"])
array.bools("flags", [True, False])
```

The field's `interface` has a `marshal_log_array(arr)` method. It calls the
matching `append_*` method of `arr` (such as `append_int` or `append_string`)
once for each element. `array.array(key, val)` wraps any object of your own
that has a `marshal_log_array` method.

`zaplog.objects` covers two more kinds of sequence:

- `objects` and `object_values` take objects that provide
  `marshal_log_object`. Each one is passed to `arr.append_object`. The first
  exception stops the walk and propagates.
- `stringers` takes any values and appends the `str()` of each one.

### Errors

```python
from zaplog import error

error.error(exc)                           # stored under the key "error"
error.named_error("cause", exc)            # stored under a key you choose
error.errors("failures", [e1, None, e2])   # None entries are left out
```

Passing `None` to `error` or `named_error` gives a field that does nothing.
In `errors`, each exception is appended as an object with a single `error` key
that holds `str(exc)`.

### Choosing a field automatically

`zaplog.anyfield.any_(key, value)` looks at the type of the value and picks a
constructor:

- objects with `marshal_log_object` or `marshal_log_array` are used as such;
- `None` gives a null field;
- bool, int, float, complex, str, bytes, datetime, timedelta and exceptions
  get their typed constructor;
- non-empty lists and tuples whose elements all have one of those types become
  the matching array field;
- objects that define their own `__str__` become stringers;
- anything else falls back to `reflect`.

## What this package does not do

This package only builds fields. It has no logger, no encoder (JSON or
console), no output sinks and no configuration. To produce output, you supply
an encoder that reads `Field` values and calls the `marshal_log_array` and
`marshal_log_object` methods.