from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from contextvars import ContextVar
from typing import Any, TypeVar, overload

from phiwire.arguments import ArgumentBuilder, ArgumentKey, Arguments, InvocationArguments
from phiwire.bindings import Binding, Factory, Instance, LazySingleton, as_binding, unwrap
from phiwire.exceptions import CircularDependencyError, InstantiationError
from phiwire.lock_mode import LockMode
from phiwire.locators import alias_key, callable_name, locate_callable, locate_type
from phiwire.registry import BindingRegistry
from phiwire.resolvers import NO_OPINION, Resolver
from phiwire.signatures import SignatureInspector

T = TypeVar("T")
ArgumentsInput = Arguments | Sequence[Any] | Mapping[ArgumentKey, Any] | None

logger = logging.getLogger(__name__)


class Container:
    """Resolve aliases to fully-built values.

    An alias is a symbolic string (``"db.helper"``), a dotted import path
    naming a class, or a class object. ``make`` consults, in order, the
    registered resolvers, the lazy singletons, the direct bindings and finally
    treats the alias as a class to construct, filling constructor parameters
    from caller arguments and auto-injecting typed dependencies through
    ``make`` itself.

    Resolution is synchronous. With the default ``LockMode.THREAD`` registry
    mutation and lazy singleton realization are serialized, so a singleton is
    realized at most once even under concurrent first access.
    """

    def __init__(
        self,
        *,
        lock_mode: LockMode = LockMode.THREAD,
        bind_self: bool = True,
        signature_inspector: SignatureInspector | None = None,
    ) -> None:
        """Initialize an empty container.

        Args:
            lock_mode: Locking strategy for registry mutation and singleton
                realization.
            bind_self: Bind the ``Container`` alias to this container so
                classes depending on ``Container`` receive it.
            signature_inspector: Introspection collaborator describing
                constructors and callables.

        """
        self._registry = BindingRegistry(lock_mode)
        self._inspector = signature_inspector or SignatureInspector()
        self._arguments = ArgumentBuilder(self.make)
        # Classes under construction in the current context, outermost first.
        self._building: ContextVar[tuple[str, ...]] = ContextVar(
            f"phiwire_building_{id(self):x}",
            default=(),
        )
        if bind_self:
            self.bind(Container, Instance(self))

    def bind(self, alias: str | type[Any], binding: Any) -> None:
        """Bind an alias, replacing any previous binding.

        Args:
            alias: Symbolic name or class to bind.
            binding: A ``Redirect``/``Factory``/``Instance``, or a raw value
                classified by ``as_binding``: strings and classes redirect,
                other callables are factories, anything else is an instance.

        """
        self._registry.bind(alias_key(alias), as_binding(binding))

    def singleton(
        self,
        alias: str | type[Any],
        binding: Any,
        arguments: ArgumentsInput = None,
    ) -> None:
        """Bind an alias to a value built once, on first resolution.

        Args:
            alias: Symbolic name or class to bind.
            binding: Redirect target or factory to realize lazily. Instances
                are already realized and are bound directly.
            arguments: Arguments used for the one-time realization.

        """
        resolved = as_binding(binding)
        if isinstance(resolved, Instance):
            self.bind(alias, resolved)
            return
        self._registry.add_lazy(
            alias_key(alias),
            LazySingleton(resolved, Arguments.of(arguments)),
        )

    def resolve(self, alias: str | type[Any]) -> Any:
        """Return the target bound to an alias, or the alias itself when unbound.

        Nothing is constructed; resolvers and lazy singletons are not consulted.
        """
        binding = self._registry.get(alias_key(alias))
        if binding is None:
            return alias
        return unwrap(binding)

    def add_resolver(self, resolver: Resolver) -> None:
        """Append a resolver; earlier resolvers take precedence."""
        self._registry.add_resolver(resolver)

    def has(self, alias: str | type[Any]) -> bool:
        """Return whether an alias has a binding or a pending lazy singleton."""
        return self._registry.has(alias_key(alias))

    @property
    def bindings(self) -> Mapping[str, Binding]:
        """Read-only snapshot of the direct bindings keyed by alias key."""
        return self._registry.snapshot()

    def flush(self) -> None:
        """Drop every binding, lazy singleton and resolver."""
        self._registry.flush()

    @overload
    def make(self, alias: type[T], arguments: ArgumentsInput = None, /, **named: Any) -> T: ...

    @overload
    def make(self, alias: str, arguments: ArgumentsInput = None, /, **named: Any) -> Any: ...

    def make(self, alias: Any, arguments: ArgumentsInput = None, /, **named: Any) -> Any:
        """Build or look up the value for an alias.

        Args:
            alias: Symbolic name, dotted class path or class.
            arguments: Caller arguments: a sequence of positional values, a
                mapping mixing ``str`` (named) and ``int`` (positional) keys,
                or ``Arguments``.
            **named: Extra named arguments, appended after ``arguments``.

        Raises:
            InvalidAliasError: The unbound alias is not an instantiable class.
            InstantiationError: Building the alias or one of its dependencies
                failed; the failure chain records every alias on the way.

        """
        return self._make(alias, Arguments.of(arguments, named), use_resolvers=True)

    def call(self, target: Any, arguments: ArgumentsInput = None, /, **named: Any) -> Any:
        """Call a function or method, injecting the parameters the caller left out.

        Args:
            target: A callable, an ``(owner, "method")`` pair (a class owner
                dispatches statically) or a dotted string such as
                ``"pkg.mod.func"`` or ``"pkg.mod:Class.method"``.
            arguments: Caller arguments, as for ``make``.
            **named: Extra named arguments, appended after ``arguments``.

        Raises:
            CallableSpecError: The target cannot be located or is not callable.
            InstantiationError: A parameter could not be built. Exceptions raised
                by the callable itself propagate unchanged.

        """
        caller_arguments = Arguments.of(arguments, named)
        callable_obj = locate_callable(target)
        try:
            parameters = self._inspector.describe_callable(callable_obj)
            invocation = self._arguments.build(parameters, caller_arguments)
        except Exception as e:
            raise InstantiationError(callable_name(callable_obj), caller_arguments, e) from e
        return invocation.invoke(callable_obj)

    def _make(self, alias: Any, arguments: Arguments, *, use_resolvers: bool) -> Any:
        if use_resolvers:
            result = self._registry.resolvers.make(alias, arguments)
            if result is not NO_OPINION:
                return result

        key = alias_key(alias)
        self._registry.realize(key, lambda lazy: self._realize(key, lazy))

        binding = self._registry.get(key)
        if binding is None:
            return self._build(alias, arguments)
        if isinstance(binding, Instance):
            return binding.value
        if isinstance(binding, Factory):
            return InvocationArguments.from_caller(arguments).invoke(binding.factory)
        if alias_key(binding.target) == key:
            return self._build(binding.target, arguments)
        return self._make(binding.target, arguments, use_resolvers=use_resolvers)

    def _realize(self, key: str, lazy: LazySingleton) -> Any:
        binding = lazy.binding
        if isinstance(binding, Factory):
            return InvocationArguments.from_caller(lazy.arguments).invoke(binding.factory)
        if alias_key(binding.target) == key:
            return self._build(binding.target, lazy.arguments)
        # Registry bindings only; a resolver answer must never become the singleton.
        return self._make(binding.target, lazy.arguments, use_resolvers=False)

    def _build(self, alias: Any, arguments: Arguments) -> Any:
        cls = locate_type(alias)
        key = alias_key(cls)
        stack = self._building.get()
        if key in stack:
            raise CircularDependencyError((*stack, key))

        token = self._building.set((*stack, key))
        try:
            parameters = self._inspector.describe_constructor(cls)
            if parameters is None:
                return cls()
            logger.debug("Building %s with %d parameter(s)", key, len(parameters))
            return self._arguments.build(parameters, arguments).invoke(cls)
        except Exception as e:
            raise InstantiationError(alias, arguments, e) from e
        finally:
            self._building.reset(token)


__all__ = ["Container"]
