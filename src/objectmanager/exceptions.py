class ObjectManagerError(Exception):
    """Represent a base class for all ObjectManager-specific failures.

    Catch this type when you want to handle any resolution error path without
    matching each concrete exception class individually.
    """


class ObjectManagerMalformedArgumentsError(ObjectManagerError):
    """Signal that positional arguments were passed to an entry point.

    Raised by ``ObjectManager.new``, ``get``, ``build``, ``call``,
    ``call_method`` and ``call_static_method`` before any resolution begins.
    Every argument forwarded to a constructor or callable must be given by
    keyword.

    Typical fix is rewriting ``manager.new(Service, 10)`` as
    ``manager.new(Service, retries=10)``.
    """


class ObjectManagerUnknownIdentifierError(ObjectManagerError):
    """Signal that an identifier denotes no constructible type.

    Raised by ``new`` (and therefore ``get``/``build``) when the identifier,
    after binding resolution, cannot be located, or locates to an abstract
    class or protocol.

    Typical fixes include binding the interface to a concrete class with
    ``manager.bind(Interface, Concrete)`` or checking the dotted path of a
    string identifier.
    """


class ObjectManagerUnresolvableParameterError(ObjectManagerError):
    """Signal that a required parameter could not be resolved by type.

    The message traces the full resolution chain: the outer target, the
    failing parameter with its declared type, and the upstream cause, which
    is also kept as ``__cause__``.

    Typical fixes include binding the parameter type, passing the value
    explicitly as a keyword argument, or giving the parameter a default.
    """


class ObjectManagerUnknownArgumentNameError(ObjectManagerError):
    """Signal keyword arguments that match no declared parameter.

    Raised after parameter resolution so misspelled argument names are not
    silently ignored. The message lists every offending name together with
    the target callable.
    """


class ObjectManagerCircularDependencyError(ObjectManagerError):
    """Signal a type that requires itself through its constructor graph.

    Raised by ``new`` when cycle detection is enabled and a type is requested
    again while it is still being constructed. The message shows the chain,
    for example ``app.A -> app.B -> app.A``.

    Typical fixes include giving one of the parameters a default value and
    wiring it later, or passing one side explicitly.
    """


class ObjectManagerIntrospectionError(ObjectManagerError):
    """Signal that a call target could not be introspected.

    Only raised when the manager is created with ``strict_introspection=True``.
    In the default lenient mode the failure is logged and the target is
    invoked with the caller-supplied keyword arguments only.
    """


class ObjectManagerNotSetError(ObjectManagerError):
    """Signal use of ``object_manager_context`` before a manager is bound.

    Raised by ``ObjectManagerContext.get_current``.

    Typical fix is calling ``object_manager_context.set_current(manager)``
    during application startup, or using ``retrieve()`` to create one on
    demand.
    """
