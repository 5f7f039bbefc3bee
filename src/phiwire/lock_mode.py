from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for registry mutation and singleton realization.

    Pass a value as ``Container(lock_mode=...)``. Lazy singletons are realized
    at most once only when the registry is guarded or access is externally
    synchronized.
    """

    THREAD = "thread"
    """Guard the registry with a re-entrant ``threading.RLock``.

    Each lazy singleton is realized under a lock of its own, so a factory may
    hand work that resolves other aliases to another thread and wait for it.
    """

    NONE = "none"
    """Disable locking; the caller owns synchronization."""
