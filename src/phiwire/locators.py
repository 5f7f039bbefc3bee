from __future__ import annotations

import importlib
from collections.abc import Callable
from typing import Any

from phiwire.exceptions import CallableSpecError, InvalidAliasError
from phiwire.type_checks import is_instantiable, is_runtime_class


def alias_key(alias: Any) -> str:
    """Return the registry key for an alias.

    Classes are keyed by their dotted ``module.qualname`` so a class and its
    import path address the same registry entry.
    """
    if isinstance(alias, str):
        return alias
    if is_runtime_class(alias):
        return f"{alias.__module__}.{alias.__qualname__}"
    msg = f"Alias must be a string or a class, not {type(alias).__name__}"
    raise TypeError(msg)


def import_dotted(path: str) -> Any:
    """Import ``pkg.mod.Name.attr`` or ``pkg.mod:Name.attr``.

    Raises ``LookupError`` when no prefix of the path imports or an attribute
    is missing.
    """
    if ":" in path:
        module_name, _, attribute_path = path.partition(":")
        module = _import_module(module_name)
        if module is None:
            msg = f"No module named {module_name!r}"
            raise LookupError(msg)
        return _getattr_path(module, attribute_path.split("."))

    parts = path.split(".")
    for split in range(len(parts) - 1, 0, -1):
        module = _import_module(".".join(parts[:split]))
        if module is not None:
            return _getattr_path(module, parts[split:])
    msg = f"Cannot import {path!r}"
    raise LookupError(msg)


def locate_type(alias: Any) -> type[Any]:
    """Return the instantiable class an unbound alias names."""
    candidate = alias
    if isinstance(alias, str):
        try:
            candidate = import_dotted(alias)
        except LookupError as e:
            raise InvalidAliasError(alias, "does not name an importable class") from e

    if not is_runtime_class(candidate):
        raise InvalidAliasError(alias, "is not a class")
    if not is_instantiable(candidate):
        raise InvalidAliasError(alias, "is not an instantiable class")
    return candidate


def locate_callable(target: Any) -> Callable[..., Any]:
    """Turn a call target into a callable.

    Accepts a callable, an ``(owner, "method")`` pair where ``owner`` is a
    class (static dispatch) or an instance, or a dotted string naming a
    function or a method on a class.
    """
    if isinstance(target, str):
        try:
            located = import_dotted(target)
        except LookupError as e:
            raise CallableSpecError(target, "does not name an importable callable") from e
    elif isinstance(target, tuple):
        located = _locate_method(target)
    else:
        located = target

    if not callable(located):
        raise CallableSpecError(target, "is not callable")
    return located


def callable_name(callable_obj: Any) -> str:
    name = getattr(callable_obj, "__qualname__", None)
    if name is None:
        name = type(callable_obj).__qualname__
    module = getattr(callable_obj, "__module__", None)
    return f"{module}.{name}" if module else name


def _locate_method(target: tuple[Any, ...]) -> Any:
    if len(target) != 2 or not isinstance(target[1], str):  # noqa: PLR2004
        raise CallableSpecError(target, "is not an (owner, method name) pair")
    owner, name = target
    try:
        return getattr(owner, name)
    except AttributeError as e:
        raise CallableSpecError(target, f"has no attribute {name!r}") from e


def _import_module(name: str) -> Any | None:
    try:
        return importlib.import_module(name)
    except ImportError:
        return None


def _getattr_path(obj: Any, attributes: list[str]) -> Any:
    for attribute in attributes:
        try:
            obj = getattr(obj, attribute)
        except AttributeError as e:
            msg = f"{obj!r} has no attribute {attribute!r}"
            raise LookupError(msg) from e
    return obj


__all__ = [
    "alias_key",
    "callable_name",
    "import_dotted",
    "locate_callable",
    "locate_type",
]
