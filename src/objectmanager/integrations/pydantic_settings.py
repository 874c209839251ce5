from __future__ import annotations

import functools
import importlib
import warnings
from typing import Any

from objectmanager.identifiers import is_runtime_class

# Modules that may provide a ``BaseSettings`` class, most specific first.
_SETTINGS_MODULES = ("pydantic_settings", "pydantic.v1")

_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


def _import_settings_base(module_name: str) -> type[Any] | None:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message=_PYDANTIC_V1_WARNING_PATTERN,
            category=UserWarning,
        )
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            return None
    base = getattr(module, "BaseSettings", None)
    return base if is_runtime_class(base) else None


@functools.cache
def settings_bases() -> tuple[type[Any], ...]:
    """Return the installed ``BaseSettings`` classes.

    Discovery runs on first use, so importing ``objectmanager`` never imports
    Pydantic. The result is cached for the life of the process.
    """
    found = (_import_settings_base(module_name) for module_name in _SETTINGS_MODULES)
    return tuple(dict.fromkeys(base for base in found if base is not None))


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return whether a class is a supported Pydantic settings model.

    Both ``pydantic_settings.BaseSettings`` and legacy
    ``pydantic.v1.BaseSettings`` are recognised when installed. Without
    Pydantic this function returns ``False`` for every candidate.

    The object manager uses this check to treat settings as configuration
    singletons: the first ``get`` (or type-based injection) loads the settings
    from the environment and saves the instance in the object store, so every
    consumer shares one configuration object.

    Args:
        candidate: Object to test.

    Returns:
        ``True`` when ``candidate`` is a runtime class and subclasses any
        discovered settings base; otherwise ``False``.

    """
    if not is_runtime_class(candidate):
        return False
    try:
        return any(issubclass(candidate, base) for base in settings_bases())
    except TypeError:
        return False


__all__ = [
    "is_pydantic_settings_subclass",
    "settings_bases",
]
