from __future__ import annotations

import builtins
import functools
import inspect
import re
import sys
import types
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, ForwardRef, Union, get_args, get_origin, get_type_hints

from objectmanager.attributes import ParameterAttributeSpec, as_attribute_spec
from objectmanager.identifiers import Identifier, is_runtime_class

_DOTTED_NAME = re.compile(r"[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*")
_UNION_PREFIXES = ("Optional[", "Union[", "typing.Optional[", "typing.Union[")
_OPTIONAL_REFERENCE = re.compile(
    r"(?:typing\.)?Optional\[\s*(?P<wrapped>[\w.]+)\s*\]"
    r"|(?P<left>[\w.]+)\s*\|\s*None"
    r"|None\s*\|\s*(?P<right>[\w.]+)",
)
_NONE_TYPE = type(None)
_MISSING = object()

_KEYWORD_KINDS = (
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)
_VARIADIC_KINDS = (
    inspect.Parameter.VAR_POSITIONAL,
    inspect.Parameter.VAR_KEYWORD,
)


class TypeKind(Enum):
    """Classify a parameter annotation for type-based resolution."""

    ABSENT = "absent"
    """No annotation, or ``Any``."""

    CLASS = "class"
    """A single non-builtin runtime class; resolved through the manager."""

    NAMED = "named"
    """A string forward reference that could not be evaluated; used as identifier."""

    UNION = "union"
    """``Union[X, Y]`` or ``X | Y``; never auto-resolved. ``Optional[X]`` classifies as ``X``."""

    BUILTIN = "builtin"
    """Builtin classes, parametrized generics and typing forms; never auto-resolved."""


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """Parameter metadata consumed by the parameter resolver."""

    name: str
    kind: inspect._ParameterKind
    annotation: Any
    type_kind: TypeKind
    dependency: Identifier | None
    is_optional: bool
    attributes: tuple[ParameterAttributeSpec, ...] = ()

    @property
    def accepts_keyword(self) -> bool:
        return self.kind in _KEYWORD_KINDS

    @property
    def accepts_any_keyword(self) -> bool:
        return self.kind is inspect.Parameter.VAR_KEYWORD

    @property
    def resolvable_by_type(self) -> bool:
        return self.accepts_keyword and self.type_kind in (TypeKind.CLASS, TypeKind.NAMED)


@dataclass(slots=True)
class CallableIntrospector:
    """Describe the parameters of classes, functions and methods.

    Classes are described by their constructor signature. Annotations are
    evaluated with ``get_type_hints(include_extras=True)`` so ``Annotated``
    attribute metadata survives; when evaluation fails the raw annotations
    are used and string forward references are looked up name by name.
    """

    def parameters_of(self, target: Callable[..., Any]) -> tuple[ParameterDescriptor, ...]:
        """Return descriptors for every parameter of ``target`` in declaration order.

        Raises:
            TypeError: If ``target`` has no introspectable signature.
            ValueError: If ``target`` has no introspectable signature.

        """
        signature = inspect.signature(target)
        namespace = self.namespace_of(target)
        hints = self.resolved_annotations(self.annotations_source(target), namespace=namespace)
        return tuple(
            self.describe(
                parameter,
                annotation=hints.get(parameter.name, parameter.annotation),
                namespace=namespace,
            )
            for parameter in signature.parameters.values()
        )

    def annotations_source(self, target: Callable[..., Any]) -> Any:
        if is_runtime_class(target):
            init = target.__init__  # type: ignore[misc]
            if init is object.__init__ and target.__new__ is not object.__new__:
                # NamedTuple and tuple subclasses are built by __new__.
                return target.__new__
            return init
        if not inspect.isroutine(target) and not isinstance(target, functools.partial):
            # Callable instances keep their annotations on __call__.
            return type(target).__call__
        return target

    def resolved_annotations(self, source: Any, *, namespace: dict[str, Any]) -> dict[str, Any]:
        """Resolve callable annotations with extras.

        When the annotations cannot be resolved together, each one is evaluated
        on its own; annotations that still fail are left out.
        """
        try:
            return get_type_hints(source, include_extras=True)
        except (AttributeError, NameError, TypeError):
            return self.evaluate_annotations(source, namespace=namespace)

    def evaluate_annotations(self, source: Any, *, namespace: dict[str, Any]) -> dict[str, Any]:
        unwrapped = inspect.unwrap(source)
        try:
            raw = getattr(unwrapped, "__annotations__", None)
        except NameError:
            return {}
        if not isinstance(raw, dict):
            return {}

        globalns = {**getattr(unwrapped, "__globals__", {}), **namespace}
        hints: dict[str, Any] = {}
        for name, annotation in raw.items():
            expression = (
                annotation.__forward_arg__ if isinstance(annotation, ForwardRef) else annotation
            )
            if not isinstance(expression, str):
                hints[name] = annotation
                continue
            try:
                hints[name] = eval(expression, globalns)  # noqa: S307
            except (AttributeError, NameError, SyntaxError, TypeError):
                continue
        return hints

    def namespace_of(self, target: Callable[..., Any]) -> dict[str, Any]:
        if is_runtime_class(target):
            module = sys.modules.get(target.__module__)
            return vars(module) if module is not None else {}
        unwrapped = inspect.unwrap(self.annotations_source(target))
        return getattr(unwrapped, "__globals__", {})

    def describe(
        self,
        parameter: inspect.Parameter,
        *,
        annotation: Any,
        namespace: dict[str, Any],
    ) -> ParameterDescriptor:
        type_kind, dependency, attributes = self.classify(annotation, namespace=namespace)
        return ParameterDescriptor(
            name=parameter.name,
            kind=parameter.kind,
            annotation=annotation,
            type_kind=type_kind,
            dependency=dependency,
            is_optional=(
                parameter.default is not inspect.Parameter.empty
                or parameter.kind in _VARIADIC_KINDS
            ),
            attributes=attributes,
        )

    def classify(
        self,
        annotation: Any,
        *,
        namespace: dict[str, Any],
    ) -> tuple[TypeKind, Identifier | None, tuple[ParameterAttributeSpec, ...]]:
        """Return the type kind, dependency and attribute specs of an annotation.

        The dependency is the annotated class, or the reference string for
        forward references that could not be evaluated.
        """
        if get_origin(annotation) is Annotated:
            base, *metadata = get_args(annotation)
            type_kind, dependency, _ = self.classify(base, namespace=namespace)
            specs = tuple(
                spec for spec in (as_attribute_spec(item) for item in metadata) if spec is not None
            )
            return type_kind, dependency, specs

        if annotation is inspect.Parameter.empty or annotation is Any:
            return TypeKind.ABSENT, None, ()
        if isinstance(annotation, ForwardRef):
            annotation = annotation.__forward_arg__
        if isinstance(annotation, str):
            return self.classify_forward_reference(annotation, namespace=namespace)
        if get_origin(annotation) is Union or isinstance(annotation, types.UnionType):
            return self.classify_union(get_args(annotation), namespace=namespace)
        if is_runtime_class(annotation) and annotation.__module__ != builtins.__name__:
            return TypeKind.CLASS, annotation, ()
        return TypeKind.BUILTIN, None, ()

    def classify_forward_reference(
        self,
        annotation: str,
        *,
        namespace: dict[str, Any],
    ) -> tuple[TypeKind, Identifier | None, tuple[ParameterAttributeSpec, ...]]:
        reference = annotation.strip()
        optional = _OPTIONAL_REFERENCE.fullmatch(reference)
        if optional is not None:
            wrapped = next(group for group in optional.groups() if group is not None)
            return self.unwrap_optional(
                self.classify_forward_reference(wrapped, namespace=namespace),
            )
        if not _DOTTED_NAME.fullmatch(reference):
            if "|" in reference or reference.startswith(_UNION_PREFIXES):
                return TypeKind.UNION, None, ()
            return TypeKind.BUILTIN, None, ()

        head, *rest = reference.split(".")
        target = namespace.get(head, getattr(builtins, head, _MISSING))
        for attribute in rest:
            if target is _MISSING:
                break
            target = getattr(target, attribute, _MISSING)

        if target is _MISSING or isinstance(target, str):
            return TypeKind.NAMED, reference, ()
        return self.classify(target, namespace=namespace)

    def classify_union(
        self,
        members: tuple[Any, ...],
        *,
        namespace: dict[str, Any],
    ) -> tuple[TypeKind, Identifier | None, tuple[ParameterAttributeSpec, ...]]:
        """Classify ``Optional[X]`` through ``X``; wider unions are never auto-resolved."""
        present = [member for member in members if member is not _NONE_TYPE]
        if len(present) != 1 or len(present) == len(members):
            return TypeKind.UNION, None, ()
        return self.unwrap_optional(self.classify(present[0], namespace=namespace))

    @staticmethod
    def unwrap_optional(
        classified: tuple[TypeKind, Identifier | None, tuple[ParameterAttributeSpec, ...]],
    ) -> tuple[TypeKind, Identifier | None, tuple[ParameterAttributeSpec, ...]]:
        type_kind, _, attributes = classified
        if type_kind in (TypeKind.CLASS, TypeKind.NAMED):
            return classified
        return TypeKind.UNION, None, attributes


__all__ = [
    "CallableIntrospector",
    "ParameterDescriptor",
    "TypeKind",
]
