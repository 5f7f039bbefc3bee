from __future__ import annotations

import enum
import logging
from collections.abc import Iterator
from typing import Any, Final, Literal, Protocol, runtime_checkable

from phiwire.arguments import Arguments

logger = logging.getLogger(__name__)


class _NoOpinion(enum.Enum):
    NO_OPINION = "NO_OPINION"

    def __repr__(self) -> str:
        return "NO_OPINION"


NO_OPINION: Final = _NoOpinion.NO_OPINION
"""Returned by a resolver that does not answer for an alias."""

NoOpinion = Literal[_NoOpinion.NO_OPINION]


@runtime_checkable
class Resolver(Protocol):
    """Protocol for a pluggable alias override.

    Resolvers are consulted in registration order on every ``Container.make``
    call, before any registry lookup. The first answer other than
    ``NO_OPINION`` is returned as-is and never cached by the container.
    """

    def make(self, alias: Any, arguments: Arguments) -> Any:
        """Return a value for ``alias`` or ``NO_OPINION`` to defer.

        Args:
            alias: Alias being made, as passed to ``Container.make``.
            arguments: Caller-supplied arguments for the alias.

        """


class ResolverChain:
    """Ordered resolvers where the first opinion wins."""

    __slots__ = ("_resolvers",)

    def __init__(self) -> None:
        self._resolvers: list[Resolver] = []

    def append(self, resolver: Resolver) -> None:
        self._resolvers.append(resolver)

    def clear(self) -> None:
        self._resolvers.clear()

    def snapshot(self) -> tuple[Resolver, ...]:
        return tuple(self._resolvers)

    def make(self, alias: Any, arguments: Arguments) -> Any:
        for resolver in self.snapshot():
            result = resolver.make(alias, arguments)
            if result is not NO_OPINION:
                logger.debug("Resolver %r answered for alias %r", resolver, alias)
                return result
        return NO_OPINION

    def __iter__(self) -> Iterator[Resolver]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._resolvers)


__all__ = ["NO_OPINION", "NoOpinion", "Resolver", "ResolverChain"]
