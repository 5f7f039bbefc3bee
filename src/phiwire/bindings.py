from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from phiwire.arguments import EMPTY_ARGUMENTS, Arguments


@dataclass(frozen=True, slots=True)
class Redirect:
    """Resolve the bound alias by making another alias instead."""

    target: str | type[Any]


@dataclass(frozen=True, slots=True)
class Factory:
    """Resolve the bound alias by calling ``factory`` with the caller's arguments."""

    factory: Callable[..., Any]


@dataclass(frozen=True, slots=True)
class Instance:
    """Resolve the bound alias to an already-built value."""

    value: Any


Binding = Redirect | Factory | Instance


@dataclass(frozen=True, slots=True)
class LazySingleton:
    """A binding realized on first resolution with the arguments stored here."""

    binding: Redirect | Factory
    arguments: Arguments = EMPTY_ARGUMENTS


def as_binding(target: Any) -> Binding:
    """Classify a raw binding target.

    Strings and classes redirect, other callables are factories, anything
    else is an instance. Wrap a callable object in ``Instance`` to bind it as a
    value.
    """
    if isinstance(target, (Redirect, Factory, Instance)):
        return target
    if isinstance(target, (str, type)):
        return Redirect(target)
    if callable(target):
        return Factory(target)
    return Instance(target)


def unwrap(binding: Binding) -> Any:
    if isinstance(binding, Redirect):
        return binding.target
    if isinstance(binding, Factory):
        return binding.factory
    return binding.value


__all__ = [
    "Binding",
    "Factory",
    "Instance",
    "LazySingleton",
    "Redirect",
    "as_binding",
    "unwrap",
]
