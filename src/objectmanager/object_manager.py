from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from contextvars import ContextVar
from typing import Any, TypeVar, cast

from objectmanager.attributes import ParameterAttribute
from objectmanager.exceptions import (
    ObjectManagerCircularDependencyError,
    ObjectManagerError,
    ObjectManagerIntrospectionError,
    ObjectManagerMalformedArgumentsError,
    ObjectManagerUnknownArgumentNameError,
    ObjectManagerUnknownIdentifierError,
    ObjectManagerUnresolvableParameterError,
)
from objectmanager.identifiers import (
    Identifier,
    has_explicit_constructor,
    identifier_of,
    import_path,
    is_constructible,
    is_runtime_class,
)
from objectmanager.integrations.pydantic_settings import is_pydantic_settings_subclass
from objectmanager.introspection import CallableIntrospector, ParameterDescriptor
from objectmanager.lock_mode import LockMode

F = TypeVar("F", bound=Callable[..., Any])

logger = logging.getLogger(__name__)

# Identifiers currently under construction in this execution context.
_resolution_chain: ContextVar[tuple[str, ...]] = ContextVar(
    "objectmanager_resolution_chain",
    default=(),
)


class ObjectManager:
    """Inject dependencies into constructors and callables, and store objects.

    Identifiers are classes or dotted strings (``"app.models.Car"``). Each
    formal parameter of a target is filled, in declaration order, from the
    caller's keyword arguments, from a recursive ``get`` of its annotated
    class, and from ``ParameterAttribute`` metadata attached with
    ``typing.Annotated``. Attribute values always win.

    The manager also keeps an object store: ``build`` and ``save`` put
    instances in it, ``get`` returns stored instances before constructing new
    ones. The manager saves itself at creation, so parameters annotated with
    ``ObjectManager`` receive the manager.

    Only keyword arguments are accepted by the entry points; positional
    arguments raise ``ObjectManagerMalformedArgumentsError``.
    """

    def __init__(
        self,
        *,
        lock_mode: LockMode = LockMode.THREAD,
        detect_cycles: bool = True,
        strict_introspection: bool = False,
    ) -> None:
        """Initialize the manager and store it under its own class identifier.

        Args:
            lock_mode: ``LockMode.THREAD`` guards bindings, storage and
                resolution with one re-entrant lock. ``LockMode.NONE`` drops
                the lock for single-threaded owners.
            detect_cycles: Raise ``ObjectManagerCircularDependencyError`` when
                a type is requested again while it is being constructed.
            strict_introspection: Raise ``ObjectManagerIntrospectionError`` when
                a target has no introspectable signature instead of invoking
                it with the supplied keyword arguments only.

        Examples:
            .. code-block:: python

                manager = ObjectManager()

                single_threaded = ObjectManager(lock_mode=LockMode.NONE)
                strict = ObjectManager(strict_introspection=True)

        """
        self._lock_mode = lock_mode
        self._detect_cycles = detect_cycles
        self._strict_introspection = strict_introspection
        self._lock: AbstractContextManager[Any] = (
            threading.RLock() if lock_mode is LockMode.THREAD else nullcontext()
        )

        self._bindings: dict[str, str] = {}
        self._storage: dict[str, object] = {}
        self._types: dict[str, type[Any]] = {}
        self._introspector = CallableIntrospector()

        self.save(self)
        if type(self) is not ObjectManager:
            self.save(self, ObjectManager)

    # region Bindings and Storage
    def bind(self, alias: Identifier, concrete: Identifier) -> None:
        """Bind an interface or alias to a concrete identifier.

        Re-binding an alias overwrites the previous binding. Bindings are not
        chained: the bound identifier is used as-is.

        Args:
            alias: Identifier requested by consumers, usually an abstract class
                or protocol.
            concrete: Identifier constructed in its place.

        Examples:
            .. code-block:: python

                manager.bind(PersonInterface, Bob)
                manager.bind("storage", "app.storage.S3Storage")

        """
        alias_key = self._remember(alias)
        concrete_key = self._remember(concrete)
        with self._lock:
            self._bindings[alias_key] = concrete_key
        logger.debug("Bound '%s' to '%s'", alias_key, concrete_key)

    def resolve_identifier(self, identifier: Identifier) -> str:
        """Return the identifier bound to ``identifier``, or ``identifier`` itself."""
        key = self._remember(identifier)
        return self._bindings.get(key, key)

    def save(self, obj: Any, name: Identifier | None = None) -> Any:
        """Store an object and return it unchanged.

        Args:
            obj: Instance to store.
            name: Identifier to store it under. Defaults to the identifier of
                ``type(obj)``.

        Returns:
            ``obj`` itself.

        """
        key = self._remember(type(obj) if name is None else name)
        with self._lock:
            self._storage[key] = obj
        logger.debug("Saved object under '%s'", key)
        return obj

    def has(self, identifier: Identifier) -> bool:
        """Return whether ``identifier`` is stored or denotes a constructible class.

        Bindings are followed for the constructibility check. This method
        never raises.
        """
        try:
            key = self._remember(identifier)
        except TypeError:
            return False
        if key in self._storage:
            return True
        try:
            located = self._locate(self._bindings.get(key, key))
        except Exception:  # noqa: BLE001
            logger.debug("Cannot locate '%s'", key, exc_info=True)
            return False
        return is_constructible(located)

    def __contains__(self, identifier: object) -> bool:
        return self.has(cast("Identifier", identifier))

    # endregion Bindings and Storage

    # region Construction
    def new(self, identifier: Identifier, /, *args: Any, **kwargs: Any) -> Any:
        """Instantiate a new object, injecting its constructor dependencies.

        The result is not stored. Keyword arguments are passed to the
        constructor and take precedence over type-based injection.

        Args:
            identifier: Class, alias or dotted class path to instantiate.
            *args: Not accepted; present only to reject positional arguments.
            **kwargs: Constructor arguments by name.

        Returns:
            The new instance.

        Raises:
            ObjectManagerMalformedArgumentsError: If positional arguments are given.
            ObjectManagerUnknownIdentifierError: If the identifier denotes no
                constructible class.
            ObjectManagerUnresolvableParameterError: If a required parameter
                cannot be resolved.
            ObjectManagerUnknownArgumentNameError: If a keyword argument matches
                no constructor parameter.
            ObjectManagerCircularDependencyError: If the constructor graph
                requires the class again.

        """
        self._ensure_named_only(args, "Class constructor arguments must be named only.")
        with self._lock:
            return self._new(identifier, kwargs)

    def get(self, identifier: Identifier, /, *args: Any, **kwargs: Any) -> Any:
        """Return the stored object for ``identifier``, or a new unstored instance.

        Pydantic settings classes are the exception: they are built once and
        stored, so the whole object graph shares one configuration object.
        Keyword arguments are only used when a new instance is constructed.
        """
        self._ensure_named_only(args, "Class constructor arguments must be named only.")
        with self._lock:
            return self._get(identifier, kwargs)

    def build(self, identifier: Identifier, /, *args: Any, **kwargs: Any) -> Any:
        """Instantiate ``identifier`` with ``new`` and store it under ``identifier``."""
        self._ensure_named_only(args, "Class constructor arguments must be named only.")
        with self._lock:
            return self._build(identifier, kwargs)

    # endregion Construction

    # region Invocation
    def call(self, func: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
        """Call a function, injecting the parameters the caller did not supply.

        Examples:
            .. code-block:: python

                total = manager.call(
                    lambda car, first, second: first + second,
                    first=10,
                    second=20,
                )

        """
        self._ensure_named_only(args, "Arguments must be named only.")
        description = f"{getattr(func, '__qualname__', repr(func))}()"
        with self._lock:
            arguments = self._resolve_call_arguments(func, kwargs, description)
        return func(**arguments)

    def call_method(self, obj: Any, method_name: str, /, *args: Any, **kwargs: Any) -> Any:
        """Call ``obj.<method_name>``, injecting the parameters the caller did not supply."""
        self._ensure_named_only(args, "Arguments must be named only.")
        method = getattr(obj, method_name)
        description = f"{identifier_of(type(obj))}.{method_name}()"
        with self._lock:
            arguments = self._resolve_call_arguments(method, kwargs, description)
        return method(**arguments)

    def call_static_method(
        self,
        type_identifier: Identifier,
        method_name: str,
        /,
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        """Call a static or class method of a class, injecting its parameters.

        The class is located directly; bindings are not applied to
        ``type_identifier``.

        Raises:
            ObjectManagerUnknownIdentifierError: If ``type_identifier`` denotes
                no class.

        """
        self._ensure_named_only(args, "Arguments must be named only.")
        key = self._remember(type_identifier)
        cls = self._locate(key)
        if cls is None:
            msg = f"Class '{key}' does not exist."
            raise ObjectManagerUnknownIdentifierError(msg)
        method = getattr(cls, method_name)
        description = f"{key}.{method_name}()"
        with self._lock:
            arguments = self._resolve_call_arguments(method, kwargs, description)
        return method(**arguments)

    def inject(self, func: F) -> F:
        """Wrap ``func`` so every invocation goes through ``call``.

        Examples:
            .. code-block:: python

                @manager.inject
                def handler(repository: UserRepository, user_id: int) -> User:
                    return repository.find(user_id)


                handler(user_id=42)

        """

        @functools.wraps(func)
        def _injected(*args: Any, **kwargs: Any) -> Any:
            return self.call(func, *args, **kwargs)

        return cast("F", _injected)

    # endregion Invocation

    # region Resolution
    def _get(self, identifier: Identifier, kwargs: dict[str, Any]) -> Any:
        key = self._remember(identifier)
        if key in self._storage:
            return self._storage[key]
        if is_pydantic_settings_subclass(self._locate(self._bindings.get(key, key))):
            return self._build(key, kwargs)
        return self._new(key, kwargs)

    def _build(self, identifier: Identifier, kwargs: dict[str, Any]) -> Any:
        return self.save(self._new(identifier, kwargs), identifier)

    def _new(self, identifier: Identifier, kwargs: dict[str, Any]) -> Any:
        key = self.resolve_identifier(identifier)
        cls = self._locate(key)
        if not is_constructible(cls):
            msg = f"Class or binding '{key}' does not exist or is not constructible."
            raise ObjectManagerUnknownIdentifierError(msg)

        with self._resolving(key):
            if is_pydantic_settings_subclass(cls):
                # Settings load themselves from the environment and validate kwargs.
                instance = cls(**kwargs)
            elif not has_explicit_constructor(cls):
                self._reject_unknown_arguments(kwargs, f"{key}()")
                instance = cls()
            else:
                description = f"{key}.__init__()"
                try:
                    arguments = self._resolve_call_arguments(cls, kwargs, description)
                except ObjectManagerCircularDependencyError:
                    raise
                except ObjectManagerError as error:
                    msg = f"Failed to instantiate '{key}': {error}"
                    raise type(error)(msg) from error
                instance = cls(**arguments)

        logger.debug("Instantiated '%s'", key)
        return instance

    def _resolve_call_arguments(
        self,
        target: Callable[..., Any],
        kwargs: dict[str, Any],
        description: str,
    ) -> dict[str, Any]:
        try:
            parameters = self._introspector.parameters_of(target)
        except (TypeError, ValueError) as error:
            if self._strict_introspection:
                msg = f"Cannot introspect {description}: {error}"
                raise ObjectManagerIntrospectionError(msg) from error
            logger.warning(
                "Cannot introspect %s, calling it with the supplied arguments only: %s",
                description,
                error,
            )
            return dict(kwargs)
        return self._process_parameters(parameters, kwargs, description)

    def _process_parameters(
        self,
        parameters: tuple[ParameterDescriptor, ...],
        kwargs: dict[str, Any],
        description: str,
    ) -> dict[str, Any]:
        arguments = dict(kwargs)
        unused = dict.fromkeys(kwargs)
        accepts_any_keyword = False

        for parameter in parameters:
            if parameter.accepts_any_keyword:
                accepts_any_keyword = True
            if not parameter.accepts_keyword:
                continue
            unused.pop(parameter.name, None)

            if parameter.resolvable_by_type and parameter.name not in arguments:
                self._inject_by_type(parameter, arguments)

            for spec in parameter.attributes:
                attribute = self._new(spec.attribute, dict(spec.arguments))
                if not isinstance(attribute, ParameterAttribute):
                    msg = (
                        f"Attribute '{identifier_of(type(attribute))}' on parameter "
                        f"'{parameter.name}' of {description} is not a ParameterAttribute."
                    )
                    raise TypeError(msg)
                attribute.set_default_name(parameter.name)
                if attribute.has_value():
                    arguments[parameter.name] = attribute.get_value()

        if not accepts_any_keyword:
            self._reject_unknown_arguments(unused, description)
        self._reject_missing_arguments(parameters, arguments, description)
        return arguments

    def _inject_by_type(self, parameter: ParameterDescriptor, arguments: dict[str, Any]) -> None:
        dependency = cast("Identifier", parameter.dependency)
        identifier = identifier_of(dependency)
        try:
            arguments[parameter.name] = self._get(dependency, {})
        except ObjectManagerCircularDependencyError:
            raise
        except ObjectManagerError as error:
            if parameter.is_optional:
                logger.debug(
                    "Leaving optional parameter '%s' unresolved: %s",
                    parameter.name,
                    error,
                )
                return
            msg = (
                f"Failed to get object for parameter '{parameter.name}' "
                f"of type '{identifier}': {error}"
            )
            raise ObjectManagerUnresolvableParameterError(msg) from error

    @contextmanager
    def _resolving(self, key: str) -> Iterator[None]:
        if not self._detect_cycles:
            yield
            return

        chain = _resolution_chain.get()
        if key in chain:
            cycle = " -> ".join((*chain[chain.index(key) :], key))
            msg = f"Circular dependency detected: {cycle}"
            raise ObjectManagerCircularDependencyError(msg)

        token = _resolution_chain.set((*chain, key))
        try:
            yield
        finally:
            _resolution_chain.reset(token)

    # endregion Resolution

    # region Helpers
    def _remember(self, identifier: Identifier) -> str:
        key = identifier_of(identifier)
        if is_runtime_class(identifier):
            self._types[key] = identifier
        return key

    def _locate(self, key: str) -> type[Any] | None:
        known = self._types.get(key)
        if known is not None:
            return known
        located = import_path(key)
        if not is_runtime_class(located):
            return None
        self._types[key] = located
        return located

    @staticmethod
    def _ensure_named_only(args: tuple[Any, ...], msg: str) -> None:
        if args:
            raise ObjectManagerMalformedArgumentsError(msg)

    @staticmethod
    def _reject_unknown_arguments(kwargs: dict[str, Any], description: str) -> None:
        if kwargs:
            names = ", ".join(kwargs)
            msg = f"Unknown named parameter(s) for {description}: {names}"
            raise ObjectManagerUnknownArgumentNameError(msg)

    @staticmethod
    def _reject_missing_arguments(
        parameters: tuple[ParameterDescriptor, ...],
        arguments: dict[str, Any],
        description: str,
    ) -> None:
        for parameter in parameters:
            if parameter.is_optional or parameter.name in arguments:
                continue
            if parameter.accepts_keyword:
                msg = f"No value for required parameter '{parameter.name}' of {description}."
            else:
                msg = (
                    f"Positional-only parameter '{parameter.name}' of {description} "
                    "cannot be injected."
                )
            raise ObjectManagerUnresolvableParameterError(msg)

    # endregion Helpers


__all__ = ["ObjectManager"]
