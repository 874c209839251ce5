"""Pytest fixtures for code built on ``objectmanager``.

Enable the plugin from the root ``conftest.py``:

.. code-block:: python

    pytest_plugins = ["objectmanager.integrations.pytest_plugin"]

"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from objectmanager.object_manager import ObjectManager
from objectmanager.object_manager_context import object_manager_context


@pytest.fixture()
def object_manager() -> ObjectManager:
    """Create a per-test object manager.

    The fixture is function-scoped, so bindings and stored objects are
    isolated between tests. Override it to return a pre-configured manager.

    Returns:
        A new ``ObjectManager`` instance.

    """
    return ObjectManager()


@pytest.fixture(autouse=True)
def _object_manager_context_isolation() -> Iterator[None]:
    """Restore the shared ``object_manager_context`` binding after every test.

    Tests may bind, replace or reset the shared manager freely; whatever was
    bound before the test (for example by a session fixture) is bound again
    afterwards.
    """
    previous = object_manager_context.peek()
    try:
        yield
    finally:
        if previous is None:
            object_manager_context.reset()
        else:
            object_manager_context.set_current(previous)
