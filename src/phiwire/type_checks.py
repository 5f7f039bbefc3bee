from __future__ import annotations

import datetime
import decimal
import inspect
import pathlib
import types
import typing
import uuid
from dataclasses import dataclass
from typing import Annotated, Any, TypeGuard, Union, get_args, get_origin


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations."""
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


@dataclass(frozen=True, slots=True)
class PrimitiveTypePolicy:
    """Decide which declared types are scalars rather than injectable dependencies."""

    scalar_base_types: tuple[type[Any], ...] = (
        pathlib.PurePath,
        datetime.datetime,
        datetime.date,
        datetime.time,
        datetime.timedelta,
        uuid.UUID,
        decimal.Decimal,
    )

    def is_primitive(self, candidate: type[Any]) -> bool:
        if candidate.__module__ == "builtins":
            return True
        return issubclass(candidate, self.scalar_base_types)

    def injectable_type(self, annotation: Any) -> type[Any] | None:
        """Return the class an annotation declares, or ``None`` for scalars and untyped hints.

        ``Annotated[X, ...]`` and ``X | None`` unwrap to ``X``. Any other union,
        generic alias, ``Any`` or unresolved forward reference counts as untyped.
        """
        annotation = strip_annotated(annotation)
        annotation = strip_optional(annotation)
        if annotation is Any or not is_runtime_class(annotation):
            return None
        if self.is_primitive(annotation):
            return None
        return annotation


def strip_annotated(annotation: Any) -> Any:
    if get_origin(annotation) is Annotated:
        return get_args(annotation)[0]
    return annotation


def strip_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is not Union and origin is not types.UnionType:
        return annotation
    members = [member for member in get_args(annotation) if member is not type(None)]
    if len(members) != 1:
        return annotation
    return strip_annotated(members[0])


def is_instance_of(value: object, declared_type: type[Any]) -> bool:
    """Return whether a value conforms to a declared type.

    Protocols that are not runtime checkable never match.
    """
    try:
        return isinstance(value, declared_type)
    except TypeError:
        return False


def is_instantiable(candidate: type[Any]) -> bool:
    if inspect.isabstract(candidate):
        return False
    if getattr(candidate, "_is_protocol", False):
        return False
    return candidate is not typing.Any


DEFAULT_PRIMITIVE_POLICY = PrimitiveTypePolicy()

__all__ = [
    "DEFAULT_PRIMITIVE_POLICY",
    "PrimitiveTypePolicy",
    "is_instance_of",
    "is_instantiable",
    "is_runtime_class",
    "strip_annotated",
    "strip_optional",
]
