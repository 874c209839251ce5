from objectmanager.attributes import ParameterAttribute, ParameterAttributeSpec
from objectmanager.exceptions import (
    ObjectManagerCircularDependencyError,
    ObjectManagerError,
    ObjectManagerIntrospectionError,
    ObjectManagerMalformedArgumentsError,
    ObjectManagerNotSetError,
    ObjectManagerUnknownArgumentNameError,
    ObjectManagerUnknownIdentifierError,
    ObjectManagerUnresolvableParameterError,
)
from objectmanager.identifiers import identifier_of
from objectmanager.lock_mode import LockMode
from objectmanager.object_manager import ObjectManager
from objectmanager.object_manager_context import ObjectManagerContext, object_manager_context

__all__ = [
    "LockMode",
    "ObjectManager",
    "ObjectManagerCircularDependencyError",
    "ObjectManagerContext",
    "ObjectManagerError",
    "ObjectManagerIntrospectionError",
    "ObjectManagerMalformedArgumentsError",
    "ObjectManagerNotSetError",
    "ObjectManagerUnknownArgumentNameError",
    "ObjectManagerUnknownIdentifierError",
    "ObjectManagerUnresolvableParameterError",
    "ParameterAttribute",
    "ParameterAttributeSpec",
    "identifier_of",
    "object_manager_context",
]
