from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import RootModel

from phiwire.type_checks import is_runtime_class

RawT = TypeVar("RawT")


class Value(Generic[RawT]):
    """Wrap a single scalar, validating and normalizing it on construction.

    The container treats subclasses as value wrappers: a constructor
    parameter declared as a ``Value`` subclass is built from the next
    unconsumed caller argument instead of being auto-injected empty.

    Override ``normalize`` to validate the raw input. Raise ``ValueError`` for
    rejected input.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: RawT) -> None:
        self._raw = self.normalize(raw)

    def normalize(self, raw: RawT) -> RawT:
        return raw

    @property
    def raw(self) -> RawT:
        return self._raw

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._raw == other._raw  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._raw))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._raw!r})"


VALUE_WRAPPER_BASES: tuple[type[Any], ...] = (Value, RootModel)


def is_value_wrapper_type(candidate: object) -> bool:
    """Return whether a declared type wraps a single scalar argument.

    Both ``phiwire.values.Value`` subclasses and pydantic ``RootModel``
    subclasses qualify.
    """
    if not is_runtime_class(candidate):
        return False
    try:
        return issubclass(candidate, VALUE_WRAPPER_BASES)
    except TypeError:
        return False


__all__ = ["VALUE_WRAPPER_BASES", "Value", "is_value_wrapper_type"]
