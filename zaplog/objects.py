"""Field constructors for sequences of self-marshalling objects and of stringers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from .array import array
from .field import Field


@dataclass(frozen=True)
class _ObjectArray:
    """Objects that each provide ``marshal_log_object(enc)``."""

    values: tuple

    def marshal_log_array(self, arr: Any) -> None:
        # The first marshalling error stops the walk and propagates.
        for value in self.values:
            arr.append_object(value)


@dataclass(frozen=True)
class _StringerArray:
    """Objects encoded as the text of their ``str()``."""

    values: tuple

    def marshal_log_array(self, arr: Any) -> None:
        for value in self.values:
            arr.append_string(str(value))


def objects(key: str, values: Iterable[Any] | None) -> Field:
    """A sequence of objects, each marshalled with its ``marshal_log_object`` method.

    Marshalling stops at the first object that raises; the exception propagates.
    """
    return array(key, _ObjectArray(tuple(values or ())))


def object_values(key: str, values: Iterable[Any] | None) -> Field:
    """A sequence of value objects, each marshalled with ``marshal_log_object``.

    Behaves like :func:`objects`; marshalling stops at the first failure.
    """
    return array(key, _ObjectArray(tuple(values or ())))


def stringers(key: str, values: Iterable[Any] | None) -> Field:
    """A sequence of objects, each encoded as its ``str()`` at encoding time."""
    return array(key, _StringerArray(tuple(values or ())))