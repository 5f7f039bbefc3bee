from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from phiwire.arguments import Arguments


class PhiwireError(Exception):
    """Represent a base class for all phiwire-specific failures.

    Catch this type when you want to handle any phiwire error path without
    matching each concrete exception class individually.
    """


class InvalidAliasError(PhiwireError, ValueError):
    """Signal that an alias does not name an instantiable class.

    Raised by ``Container.make`` when the alias is unbound and names an
    abstract class, a protocol, something that is not a class at all, or a
    dotted path that cannot be imported.

    Typical fixes include binding the alias to a concrete class or factory,
    or registering a resolver that answers for it.
    """

    def __init__(self, alias: Any, reason: str) -> None:
        self.alias = alias
        self.reason = reason
        super().__init__(f"{alias!r} {reason}")


class CallableSpecError(InvalidAliasError):
    """Signal that a ``Container.call`` target cannot be located.

    Raised for dotted strings that do not import, ``(owner, "name")`` pairs
    whose attribute is missing, and targets that are not callable.
    """


class CircularDependencyError(PhiwireError):
    """Signal that a class needs itself, directly or transitively, to be built.

    ``stack`` lists the alias keys being constructed, outermost first, ending
    with the key that closed the cycle.
    """

    def __init__(self, stack: tuple[str, ...]) -> None:
        self.stack = stack
        super().__init__(f"Circular dependency detected: {' -> '.join(stack)}")


@dataclass(frozen=True, slots=True)
class ResolutionStep:
    """One link of a failed resolution path."""

    alias: Any
    arguments: Arguments


class InstantiationError(PhiwireError):
    """Signal a failure while building an alias or one of its dependencies.

    Each resolution level that fails wraps the inner failure in a new node, so
    a failure deep in the graph surfaces as a chain from the outermost alias to
    the innermost one. The inner failure is kept as ``__cause__``; walk the
    chain with ``chain()`` or read it as data through ``path``.
    """

    def __init__(self, alias: Any, arguments: Arguments, cause: BaseException) -> None:
        self.alias = alias
        self.arguments = arguments
        self.cause = cause
        self.__cause__ = cause

        names = [_alias_name(alias)]
        inner: BaseException = cause
        while isinstance(inner, InstantiationError):
            names.append(_alias_name(inner.alias))
            inner = inner.cause
        super().__init__(
            f"An error occurred while instantiating {' -> '.join(names)}: "
            f"{type(inner).__name__}: {inner}",
        )

    def chain(self) -> Iterator[InstantiationError]:
        """Iterate failure nodes from this one down to the innermost."""
        node: BaseException = self
        while isinstance(node, InstantiationError):
            yield node
            node = node.cause

    @property
    def path(self) -> tuple[ResolutionStep, ...]:
        return tuple(ResolutionStep(node.alias, node.arguments) for node in self.chain())

    @property
    def aliases(self) -> tuple[Any, ...]:
        return tuple(node.alias for node in self.chain())

    @property
    def root_cause(self) -> BaseException:
        """Return the terminal failure that started the chain."""
        *_, innermost = self.chain()
        return innermost.cause


def _alias_name(alias: Any) -> str:
    if isinstance(alias, type):
        return alias.__qualname__
    return getattr(alias, "__qualname__", None) or str(alias)
