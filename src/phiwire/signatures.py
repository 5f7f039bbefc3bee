from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, get_type_hints

from phiwire.type_checks import DEFAULT_PRIMITIVE_POLICY, PrimitiveTypePolicy

_DESCRIBED_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """Metadata the argument builder needs about one parameter."""

    name: str
    declared_type: type[Any] | None
    is_optional: bool
    position: int
    kind: inspect._ParameterKind = inspect.Parameter.POSITIONAL_OR_KEYWORD
    default: Any = field(default=inspect.Parameter.empty, compare=False)

    @property
    def is_keyword_only(self) -> bool:
        return self.kind is inspect.Parameter.KEYWORD_ONLY

    @property
    def is_positional_only(self) -> bool:
        return self.kind is inspect.Parameter.POSITIONAL_ONLY


@dataclass(slots=True)
class SignatureInspector:
    """Describe constructors and callables as ordered parameter descriptors.

    Variadic ``*args``/``**kwargs`` parameters are left out. Declared types are
    resolved through ``typing.get_type_hints`` where possible; scalar and
    unresolvable annotations are reported as untyped.
    """

    primitive_policy: PrimitiveTypePolicy = DEFAULT_PRIMITIVE_POLICY
    _cache: dict[Any, tuple[ParameterDescriptor, ...] | None] = field(default_factory=dict)

    def describe_constructor(self, cls: type[Any]) -> tuple[ParameterDescriptor, ...] | None:
        """Describe how ``cls`` is constructed.

        Returns ``None`` when the class defines no constructor of its own
        anywhere in its MRO, meaning it is built with no arguments.
        """
        try:
            return self._cache[cls]
        except (KeyError, TypeError):
            pass

        if not self._has_constructor(cls):
            descriptors = None
        else:
            try:
                signature = inspect.signature(cls)
            except (TypeError, ValueError):
                descriptors = None
            else:
                hints = self._resolved_hints(cls.__init__)
                descriptors = self._describe(signature, hints)

        self._remember(cls, descriptors)
        return descriptors

    def describe_callable(self, callable_obj: Callable[..., Any]) -> tuple[ParameterDescriptor, ...]:
        signature = inspect.signature(callable_obj)
        target: Any = callable_obj
        if isinstance(callable_obj, type):
            target = callable_obj.__init__
        elif not inspect.isroutine(callable_obj):
            target = getattr(type(callable_obj), "__call__", callable_obj)  # noqa: B004
        return self._describe(signature, self._resolved_hints(target))

    def _describe(
        self,
        signature: inspect.Signature,
        hints: dict[str, Any],
    ) -> tuple[ParameterDescriptor, ...]:
        descriptors: list[ParameterDescriptor] = []
        for parameter in signature.parameters.values():
            if parameter.kind not in _DESCRIBED_KINDS:
                continue
            annotation = hints.get(parameter.name, parameter.annotation)
            descriptors.append(
                ParameterDescriptor(
                    name=parameter.name,
                    declared_type=self._declared_type(annotation),
                    is_optional=parameter.default is not inspect.Parameter.empty,
                    position=len(descriptors),
                    kind=parameter.kind,
                    default=parameter.default,
                ),
            )
        return tuple(descriptors)

    def _declared_type(self, annotation: Any) -> type[Any] | None:
        if annotation is inspect.Parameter.empty or isinstance(annotation, str):
            return None
        return self.primitive_policy.injectable_type(annotation)

    def _resolved_hints(self, target: Any) -> dict[str, Any]:
        try:
            return get_type_hints(target, include_extras=True)
        except (AttributeError, NameError, TypeError):
            return {}

    def _has_constructor(self, cls: type[Any]) -> bool:
        if getattr(cls, "__signature__", None) is not None:
            return True
        return cls.__init__ is not object.__init__ or cls.__new__ is not object.__new__

    def _remember(self, cls: type[Any], descriptors: tuple[ParameterDescriptor, ...] | None) -> None:
        try:
            self._cache[cls] = descriptors
        except TypeError:  # pragma: no cover - unhashable metaclass instances
            pass


__all__ = ["ParameterDescriptor", "SignatureInspector"]
