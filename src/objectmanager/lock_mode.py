from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for object manager mutations and resolution.

    The manager guards ``bind``, ``save``, ``build`` and every resolution
    entry point with one re-entrant lock. Resolution is recursive, so the
    same thread may re-acquire it while constructing nested dependencies.
    """

    THREAD = "thread"
    """Guard the binding table and object store with ``threading.RLock``."""

    NONE = "none"
    """Disable locking; the manager must be owned by a single thread."""
