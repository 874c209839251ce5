from __future__ import annotations

import threading
from typing import Any

from objectmanager.exceptions import ObjectManagerNotSetError
from objectmanager.object_manager import ObjectManager


class ObjectManagerContext:
    """Process-wide accessor for one shared object manager.

    Prefer passing the manager explicitly from the application bootstrap.
    This accessor exists for code that cannot receive it, such as framework
    callbacks. The binding is process-global for this ``ObjectManagerContext``
    instance; it is not task-local or thread-local.
    """

    def __init__(self) -> None:
        self._manager: ObjectManager | None = None
        self._lock = threading.Lock()

    def set_current(self, manager: ObjectManager) -> None:
        """Set the shared manager.

        This method is expected to be called once during application bootstrap.
        """
        with self._lock:
            self._manager = manager

    def get_current(self) -> ObjectManager:
        """Return the shared manager or raise when not bound."""
        manager = self._manager
        if manager is None:
            msg = (
                "Object manager is not set for object_manager_context. "
                "Call object_manager_context.set_current(manager) or "
                "object_manager_context.retrieve() first."
            )
            raise ObjectManagerNotSetError(msg)
        return manager

    def retrieve(self, **options: Any) -> ObjectManager:
        """Return the shared manager, creating and binding one when missing.

        Args:
            **options: ``ObjectManager`` constructor options, only used when a
                new manager is created.

        """
        with self._lock:
            if self._manager is None:
                self._manager = ObjectManager(**options)
            return self._manager

    def peek(self) -> ObjectManager | None:
        """Return the shared manager, or ``None`` when not bound."""
        return self._manager

    def reset(self) -> None:
        """Unbind the shared manager."""
        with self._lock:
            self._manager = None


object_manager_context = ObjectManagerContext()

__all__ = ["ObjectManagerContext", "object_manager_context"]
