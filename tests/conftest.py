"""Shared pytest fixtures for objectmanager tests."""

import pytest

from objectmanager import LockMode, ObjectManager
from tests.fixtures import Bob, CarInterface, Mazda, PersonInterface


@pytest.fixture()
def manager() -> ObjectManager:
    """Default manager with thread locking and cycle detection."""
    return ObjectManager()


@pytest.fixture()
def manager_unlocked() -> ObjectManager:
    """Manager with locking disabled."""
    return ObjectManager(lock_mode=LockMode.NONE)


@pytest.fixture()
def manager_strict() -> ObjectManager:
    """Manager that reports introspection failures."""
    return ObjectManager(strict_introspection=True)


@pytest.fixture()
def bound_manager(manager: ObjectManager) -> ObjectManager:
    """Manager with the person and car interfaces bound."""
    manager.bind(PersonInterface, Bob)
    manager.bind(CarInterface, Mazda)
    return manager
