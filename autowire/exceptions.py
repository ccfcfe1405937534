"""
Autowire Exceptions

Custom exception hierarchy for the Autowire container
"""


class AutowireError(Exception):
    """
    Base exception for all Autowire errors.

    All Autowire-specific exceptions inherit from this class.
    You can catch this to handle any container error generically.

    Example:
        >>> try:
        ...     service = container.get("app.services.Mailer")
        ... except AutowireError as e:
        ...     print(f"DI error: {e}")
    """

    pass


class InvalidDefinitionError(AutowireError):
    """
    Raised when register() or register_singleton() receives a definition
    it cannot turn into a recipe.

    The registry is left untouched when this error is raised.

    Common causes:
        - Registering with an empty definition under a key that is not a class
        - Passing a plain override list under an alias instead of a class path
        - A ``callback`` or ``factory`` entry that is not callable-shaped
        - A ``setter`` whose first element is not a method name

    Solution:
        Either register a class path directly, or tag the definition::

            container.register("app.db.Database")
            container.register("db", {"class": "app.db.Database", "params": ["sqlite://"]})
            container.register("clock", {"factory": make_clock})
    """

    pass


class ReflectionError(AutowireError):
    """
    Raised when a class or callable cannot be introspected or located.

    This error occurs at resolution time, when the container first needs
    the parameter list of a constructor or callback.

    Common causes:
        - A ``class`` entry naming a module path that does not import
        - A ``(ClassName, "method")`` pair whose method does not exist
        - A built-in or C extension callable without an accessible signature

    Solution:
        Check the dotted path, or register the class object itself::

            container.register("db", {"class": Database})
    """

    pass


class TypeNotFoundError(ReflectionError):
    """
    Raised when get() is asked for a key that is neither registered nor
    the path of a constructible class.

    Common causes:
        - Typo in an alias or dotted class path
        - Forgetting to register an alias before resolving it
        - A Reference pointing at an alias that was removed

    Solution:
        Register the key first, or ask for an importable class path::

            container.register("mailer", {"class": "app.mail.SmtpMailer"})
            mailer = container.get("mailer")

    Note:
        The error message lists the registered keys to help spot typos.
    """

    pass


class InternalInconsistencyError(AutowireError):
    """
    Raised when a stored definition has an unexpected shape at resolution time.

    Registration validates every definition, so this signals a defect in
    the container (or a registry modified behind its back), not a usage error.
    """

    pass


class CircularDependencyError(AutowireError):
    """
    Raised when circular dependency is detected during resolution.

    This error occurs when resolving key A requires key B, and key B
    (directly or indirectly) requires key A again.

    Example of circular dependency::

        class ServiceA:
            def __init__(self, b: ServiceB): ...

        class ServiceB:
            def __init__(self, a: ServiceA): ...  # Circular!

    Solution:
        1. Refactor to remove the circular dependency
        2. Override one of the parameters at registration time
        3. Use a setter call to wire the back reference after construction::

            container.register(ServiceB, {"params": {0: None},
                                          "setter": ["attach", Reference(ServiceA)]})

    Note:
        Detection can be turned off with ``AutowireContainer(detect_cycles=False)``,
        in which case a cycle ends in ``RecursionError``.
    """

    pass


class AlreadyStartedError(AutowireError):
    """
    Raised when GlobalContainer.start() is called while already started.

    Common causes:
        - Calling ``GlobalContainer().start()`` from more than one place
        - Test teardown not calling ``GlobalContainer().stop()``

    Solution:
        Call ``stop()`` before starting again::

            GlobalContainer().stop()
            GlobalContainer().start(AutowireContainer())
    """

    pass


class NotInitializedError(AutowireError):
    """
    Raised when the process-wide container is used before it was started.

    Solution:
        Start it once at the composition root::

            GlobalContainer().start(container)
            container = GlobalContainer().get()
    """

    pass
