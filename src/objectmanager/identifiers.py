from __future__ import annotations

import enum
import importlib
import inspect
import types
from typing import Any, TypeAlias, TypeGuard

Identifier: TypeAlias = "str | type[Any]"

_MISSING = object()


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_constructible(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a class the manager may instantiate.

    Abstract base classes and ``typing.Protocol`` classes denote interfaces:
    they must be bound to a concrete class before they can be constructed.
    Enum classes are looked up by value, never built from nothing.
    """
    if not is_runtime_class(candidate):
        return False
    if issubclass(candidate, enum.Enum):
        return False
    if getattr(candidate, "_is_protocol", False):
        return False
    return not inspect.isabstract(candidate)


def has_explicit_constructor(cls: type[Any]) -> bool:
    """Return whether the class (or one of its bases) defines ``__init__`` or ``__new__``.

    ``NamedTuple`` classes, tuple subclasses and many builtin-backed types only
    customize ``__new__``.
    """
    return (
        cls.__init__ is not object.__init__  # type: ignore[misc]
        or cls.__new__ is not object.__new__
    )


def identifier_of(target: Identifier) -> str:
    """Normalize an identifier to its string form.

    Strings are returned unchanged. Classes map to ``"<module>.<qualname>"``.
    Two distinct classes sharing a module and qualname, such as classes
    defined inside the same function on different calls, map to the same
    identifier; the manager then treats them as one type.

    Args:
        target: Identifier string or class.

    Returns:
        The string identifier.

    Raises:
        TypeError: If ``target`` is neither a string nor a class.

    Examples:
        .. code-block:: python

            identifier_of(Car)  # "app.models.Car"
            identifier_of("app.models.Car")  # "app.models.Car"

    """
    if isinstance(target, str):
        return target
    if is_runtime_class(target):
        return f"{target.__module__}.{target.__qualname__}"
    msg = f"Identifier must be a string or a class, got {target!r}."
    raise TypeError(msg)


def import_path(identifier: str) -> Any | None:
    """Locate the object a dotted path points to, importing modules as needed.

    The longest importable module prefix wins; the rest of the path is walked
    as attributes, so nested classes (``pkg.module.Outer.Inner``) are found.
    Returns ``None`` when nothing matches.
    """
    parts = identifier.split(".")
    for index in range(len(parts), 0, -1):
        module_name = ".".join(parts[:index])
        try:
            target: Any = importlib.import_module(module_name)
        except (ImportError, ValueError):
            continue
        for attribute in parts[index:]:
            target = getattr(target, attribute, _MISSING)
            if target is _MISSING:
                return None
        return target
    return None


__all__ = [
    "Identifier",
    "has_explicit_constructor",
    "identifier_of",
    "import_path",
    "is_constructible",
    "is_runtime_class",
]
