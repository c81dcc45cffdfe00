"""Field constructors for exceptions and sequences of exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from .array import array
from .field import Field, FieldType, skip


def error(err: BaseException | None) -> Field:
    """Shorthand for ``named_error("error", err)``."""
    return named_error("error", err)


def named_error(key: str, err: BaseException | None) -> Field:
    """A field carrying an exception; ``None`` gives a no-op field."""
    if err is None:
        return skip()
    return Field(key=key, type=FieldType.ERROR, interface=err)


@dataclass(frozen=True)
class _ErrorElement:
    err: BaseException

    def marshal_log_object(self, enc: Any) -> None:
        enc.add_string("error", str(self.err))


@dataclass(frozen=True)
class _ErrorArray:
    errs: tuple

    def marshal_log_array(self, arr: Any) -> None:
        for err in self.errs:
            if err is not None:
                arr.append_object(_ErrorElement(err))


def errors(key: str, errs: Iterable[BaseException | None] | None) -> Field:
    """A sequence of exceptions, each encoded as an object with an ``error`` key.

    ``None`` entries are left out.
    """
    return array(key, _ErrorArray(tuple(errs or ())))