from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import AbstractContextManager, contextmanager, nullcontext
from types import MappingProxyType
from typing import Any

from phiwire.bindings import Binding, Instance, LazySingleton
from phiwire.lock_mode import LockMode
from phiwire.resolvers import Resolver, ResolverChain

logger = logging.getLogger(__name__)


class BindingRegistry:
    """Own the mutable container state.

    Holds direct bindings, lazy singletons waiting for their first resolution
    and the resolver chain, all keyed by canonical alias keys. With
    ``LockMode.THREAD`` every mutation runs under one re-entrant lock and each
    lazy singleton is realized under a re-entrant lock of its own key.
    """

    def __init__(self, lock_mode: LockMode = LockMode.THREAD) -> None:
        self._bindings: dict[str, Binding] = {}
        self._lazy: dict[str, LazySingleton] = {}
        self.resolvers = ResolverChain()
        self._lock_mode = lock_mode
        self._lock = threading.RLock()
        self._realization_locks: dict[str, threading.RLock] = {}

    @contextmanager
    def _guard(self) -> Iterator[None]:
        lock: AbstractContextManager[Any] = (
            self._lock if self._lock_mode is LockMode.THREAD else nullcontext()
        )
        with lock:
            yield

    @contextmanager
    def _realization_guard(self, key: str) -> Iterator[None]:
        if self._lock_mode is not LockMode.THREAD:
            yield
            return
        with self._lock:
            lock = self._realization_locks.setdefault(key, threading.RLock())
        with lock:
            yield

    def bind(self, key: str, binding: Binding) -> None:
        with self._guard():
            self._bindings[key] = binding
        logger.debug("Bound %r to %r", key, binding)

    def add_lazy(self, key: str, lazy: LazySingleton) -> None:
        with self._guard():
            self._lazy[key] = lazy
        logger.debug("Registered lazy singleton %r as %r", key, lazy.binding)

    def add_resolver(self, resolver: Resolver) -> None:
        with self._guard():
            self.resolvers.append(resolver)
        logger.debug("Added resolver %r", resolver)

    def get(self, key: str) -> Binding | None:
        return self._bindings.get(key)

    def has(self, key: str) -> bool:
        return key in self._bindings or key in self._lazy

    def realize(self, key: str, build: Callable[[LazySingleton], Any]) -> None:
        """Realize the lazy singleton for ``key``, if any, and promote it to an instance.

        Concurrent realizations of one key are serialized on a lock of their own,
        so the registry lock is not held while ``build`` runs user code. The lazy
        entry is removed only after ``build`` succeeds, so a failed realization
        leaves it in place for the next attempt.
        """
        if key not in self._lazy:
            return
        with self._realization_guard(key):
            lazy = self._lazy.get(key)
            if lazy is None:
                return
            value = build(lazy)
            with self._guard():
                self._bindings[key] = Instance(value)
                if self._lazy.get(key) is lazy:
                    del self._lazy[key]
        logger.debug("Realized singleton %r", key)

    def snapshot(self) -> Mapping[str, Binding]:
        with self._guard():
            return MappingProxyType(dict(self._bindings))

    def flush(self) -> None:
        with self._guard():
            self._bindings.clear()
            self._lazy.clear()
            self._realization_locks.clear()
            self.resolvers.clear()
        logger.debug("Flushed bindings, singletons and resolvers")


__all__ = ["BindingRegistry"]
