from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, NamedTuple

from objectmanager.identifiers import is_runtime_class

_NO_ARGUMENTS: Mapping[str, Any] = MappingProxyType({})


class ParameterAttributeSpec(NamedTuple):
    """Declare a parameter attribute together with its constructor arguments.

    Attach to a parameter through ``typing.Annotated`` metadata. The manager
    builds a fresh attribute instance from this spec every time the parameter
    is resolved.

    Examples:
        .. code-block:: python

            def greet(name: Annotated[str, Upper.declare(source="USER")]) -> str:
                return f"Hello {name}"

    """

    attribute: Any
    """Attribute class or identifier string, resolved through the manager bindings."""

    arguments: Mapping[str, Any] = _NO_ARGUMENTS
    """Keyword arguments for the attribute constructor."""


class ParameterAttribute(ABC):
    """Compute the injected value of the parameter it is attached to.

    Subclasses implement ``get_value``. The manager instantiates the subclass
    (so its constructor can receive keyword arguments and injected
    dependencies), passes the parameter name through ``set_default_name``
    and, when ``has_value`` is true, uses ``get_value()`` as the argument.
    Attribute values take precedence over caller-supplied and type-resolved
    values.

    Examples:
        .. code-block:: python

            class Double(ParameterAttribute):
                def get_value(self) -> str:
                    return f"{self.name}{self.name}"


            def shout(word: Annotated[str, Double]) -> str:
                return word


            manager.call(shout)  # "wordword"

    """

    name: str | None = None

    @classmethod
    def declare(cls, **arguments: Any) -> ParameterAttributeSpec:
        """Return a spec that builds this attribute with ``arguments``."""
        return ParameterAttributeSpec(cls, MappingProxyType(dict(arguments)))

    def set_default_name(self, name: str) -> None:
        """Set the affected parameter name unless a name is already set."""
        if self.name is None:
            self.name = name

    def has_value(self) -> bool:
        """Return whether ``get_value`` should replace the parameter argument."""
        return True

    @abstractmethod
    def get_value(self) -> Any:
        """Return the value passed for the parameter."""


def as_attribute_spec(metadata: object) -> ParameterAttributeSpec | None:
    """Convert one ``Annotated`` metadata item to a spec, or ``None`` if unrelated."""
    if isinstance(metadata, ParameterAttributeSpec):
        return metadata
    if is_runtime_class(metadata) and issubclass(metadata, ParameterAttribute):
        return ParameterAttributeSpec(metadata)
    return None


__all__ = [
    "ParameterAttribute",
    "ParameterAttributeSpec",
    "as_attribute_spec",
]
