"""
AutowireContainer

This module provides the core resolver. It is responsible for:

- Storing registered definitions per type key
- Building instances by reflecting constructor and callback parameters
- Substituting References (deferred keys) with resolved instances
- Caching singleton and prebuilt instances
- Detecting circular dependencies

A type key is either an alias chosen by the client or the dotted path of
a class. Class objects are accepted wherever a key is expected.

Example::

    container = AutowireContainer()
    container.register("primary-db", {"class": Database, "params": ["main"]})
    container.register_singleton(UserRepository, [Reference("primary-db")])

    repo = container.get(UserRepository)
"""

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Optional, Type, Union

from .definition import (
    CallbackDefinition,
    ClassDefinition,
    Definition,
    FactoryDefinition,
    ParamOverrides,
    PrebuiltInstance,
    SetterCall,
)
from .definition_parser import DefinitionParser
from .exceptions import InternalInconsistencyError, ReflectionError, TypeNotFoundError
from .lifecycle import AutowireLifeCycle
from .naming import is_constructible, locate, qualified_name
from .reference import Reference
from .reflector import InspectReflector, Reflector, resolve_callable
from .resolution_context import ResolutionContext
from .signature import Signature, SignatureCache, slot_value

logger = logging.getLogger(__name__)

TypeKey = Union[str, Type, Reference]


class AutowireContainer:
    """Reflection driven resolver with alias, callback and singleton support.

    Attributes:
        _definitions: Type key -> registered Definition
        _lifecycles: Type key -> lifecycle chosen at registration
        _singletons: Type key -> cached instance
        _classes: Class path -> class object seen through a class key,
            a Reference or a reflected parameter type
        _signatures: Memoized dependency signatures
        _parser: Turns register() input into Definitions
        detect_cycles: Whether re-entering a key raises CircularDependencyError

    Note:
        The container performs no locking. Registration and resolution must
        be serialized by the caller when used from several threads.
    """

    def __init__(self, reflector: Optional[Reflector] = None, detect_cycles: bool = True):
        """Initialize an empty container.

        Args:
            reflector: Source of parameter metadata (defaults to InspectReflector)
            detect_cycles: Raise CircularDependencyError instead of recursing
                until RecursionError when a key depends on itself
        """
        self._definitions: Dict[str, Definition] = {}
        self._lifecycles: Dict[str, AutowireLifeCycle] = {}
        self._singletons: Dict[str, Any] = {}
        self._classes: Dict[str, Type] = {}
        self._signatures = SignatureCache(reflector or InspectReflector())
        self._parser = DefinitionParser(self._find_class, self._key_for)
        self.detect_cycles = detect_cycles

    # Registration

    def register(self, key: TypeKey, definition: Any = None) -> 'AutowireContainer':
        """Register or replace the definition of ``key``.

        A new instance is built on every get(), except for prebuilt
        instances which are always returned as-is.

        Args:
            key: Alias or class path (or class object)
            definition: See DefinitionParser for the accepted shapes

        Returns:
            The container itself, for chaining

        Raises:
            InvalidDefinitionError: When the definition cannot be parsed.
                The registry is left unchanged.

        Example::

            container.register(ConfigurableA, [233])
            container.register("special", {"class": MoreClass, "setter": ["set_extra", 3]})
        """
        return self._store(key, definition, AutowireLifeCycle.FACTORY)

    def register_singleton(self, key: TypeKey, definition: Any = None) -> 'AutowireContainer':
        """Register or replace ``key`` so that its first resolved instance is reused.

        Example::

            container.register_singleton("default-client", {"class": ClientClass})
            assert container.get("default-client") is container.get("default-client")
        """
        return self._store(key, definition, AutowireLifeCycle.SINGLETON)

    def _store(self, key: TypeKey, source: Any, lifecycle: AutowireLifeCycle) -> 'AutowireContainer':
        type_key = self._key_for(key)
        definition = self._parser.parse(type_key, source)

        self._definitions[type_key] = definition
        self._lifecycles[type_key] = lifecycle
        self._singletons.pop(type_key, None)
        logger.debug(f"Registered {type_key} as {lifecycle.value}: {definition}")
        return self

    def has(self, key: TypeKey) -> bool:
        """Check whether a definition is registered for ``key``.

        Class existence is not checked.
        """
        return self._key_for(key, remember=False) in self._definitions

    def remove(self, key: TypeKey) -> 'AutowireContainer':
        """Remove the definition and any cached instance of ``key``.

        Silently does nothing when ``key`` is not registered. The derived
        dependency signature is kept.
        """
        type_key = self._key_for(key, remember=False)
        if self._definitions.pop(type_key, None) is not None:
            logger.debug(f"Removed {type_key}")
        self._lifecycles.pop(type_key, None)
        self._singletons.pop(type_key, None)
        return self

    def get_definitions(self) -> Dict[str, Definition]:
        """Return a snapshot of the registry (type key -> Definition)."""
        return dict(self._definitions)

    # Resolution

    def get(self, key: TypeKey, params: Any = None) -> Any:
        """Build or return the instance for ``key``.

        1. A cached singleton is returned as-is (``params`` is ignored)
        2. A registered definition is resolved, with ``params`` overriding
           its stored overrides position by position
        3. Otherwise ``key`` must be the path of a constructible class

        Args:
            key: Alias, class path, class object or Reference
            params: Positional overrides, as a list (dense) or a dict
                mapping positions to values (sparse)

        Returns:
            The resolved instance

        Raises:
            TypeNotFoundError: When ``key`` is neither registered nor a class path
            ReflectionError: When a class or callback cannot be introspected
            CircularDependencyError: When ``key`` depends on itself
            InvalidDefinitionError: When ``params`` uses invalid positions

        Example::

            container.get("app.models.ConfigurableA", [233]).data  # 233
            container.get(ClientClass, {1: ConfigurableB("BB")})
        """
        type_key = self._key_for(key)
        if type_key in self._singletons:
            return self._singletons[type_key]

        overrides = DefinitionParser.parse_params(params)
        if not self.detect_cycles:
            return self._resolve(type_key, overrides)
        with ResolutionContext.enter(self, type_key):
            return self._resolve(type_key, overrides)

    def _resolve(self, type_key: str, overrides: ParamOverrides) -> Any:
        definition = self._definitions.get(type_key)
        if definition is None:
            return self._new_instance(type_key, overrides, registered=False)

        if isinstance(definition, PrebuiltInstance):
            # Prebuilt values are always shared, whatever the registration method
            self._singletons[type_key] = definition.value
            return definition.value

        if not isinstance(definition, (ClassDefinition, CallbackDefinition, FactoryDefinition)):
            raise InternalInconsistencyError(
                f"Definition of {type_key} has an unexpected shape: {definition!r}"
            )

        merged = _merge(definition.params, overrides)
        if isinstance(definition, ClassDefinition):
            if definition.class_name == type_key:
                instance = self._new_instance(type_key, merged)
            else:
                instance = self.get(definition.class_name, merged)
        elif isinstance(definition, CallbackDefinition):
            instance = self._normalized_callback(type_key, definition, merged)
        else:
            instance = self._standard_callback(type_key, definition, merged)

        if definition.setter is not None:
            self._call_setter(instance, definition.setter)

        if self._lifecycles.get(type_key) == AutowireLifeCycle.SINGLETON:
            self._singletons[type_key] = instance
            logger.debug(f"Cached singleton {type_key}")
        return instance

    def _new_instance(self, class_name: str, overrides: ParamOverrides, registered: bool = True) -> Any:
        """Construct ``class_name`` with reflected arguments and ``overrides``."""
        cls = self._find_class(class_name)
        if cls is None:
            if not registered:
                raise self._type_not_found(class_name)
            raise ReflectionError(
                f"Class '{class_name}' does not exist or is not a constructible class."
            )

        signature = self._signatures.get_or_derive(("class", cls), lambda: cls)
        return cls(*self._arguments(signature, overrides))

    def _normalized_callback(
        self,
        type_key: str,
        definition: CallbackDefinition,
        overrides: ParamOverrides
    ) -> Any:
        """Invoke ``callback(container, args)``; args are passed as one list."""
        callback = resolve_callable(definition.callback)
        signature = self._signatures.get_or_derive(("callback", type_key), lambda: callback)
        return callback(self, self._arguments(signature, overrides))

    def _standard_callback(
        self,
        type_key: str,
        definition: FactoryDefinition,
        overrides: ParamOverrides
    ) -> Any:
        """Invoke ``callback(*args)``."""
        callback = resolve_callable(definition.callback)
        signature = self._signatures.get_or_derive(("callback", type_key), lambda: callback)
        return callback(*self._arguments(signature, overrides))

    def _call_setter(self, instance: Any, setter: SetterCall) -> None:
        method = getattr(instance, setter.method, None)
        if not callable(method):
            raise ReflectionError(
                f"{type(instance).__name__} has no method '{setter.method}' for setter injection."
            )
        method(*self._fill_references(list(setter.args)))

    def _arguments(self, signature: Signature, overrides: ParamOverrides) -> List[Any]:
        """Lay overrides over the signature slots and resolve References."""
        size = max([len(signature)] + [index + 1 for index in overrides])
        arguments = []
        for index in range(size):
            if index in overrides:
                arguments.append(overrides[index])
            elif index < len(signature):
                arguments.append(slot_value(signature[index]))
            else:
                arguments.append(None)
        return self._fill_references(arguments)

    def _fill_references(self, arguments: List[Any]) -> List[Any]:
        return [
            argument.actual(self) if isinstance(argument, Reference) else argument
            for argument in arguments
        ]

    # Keys and classes

    def _key_for(self, key: TypeKey, remember: bool = True) -> str:
        """Normalize a key and remember class objects seen along the way.

        The latest class object passed for a path replaces an earlier one,
        so a class redefined under the same name (module reload) wins.
        """
        if isinstance(key, Reference):
            if remember and key.cls is not None:
                self._classes[key.target] = key.cls
            return key.target
        if isinstance(key, type):
            type_key = qualified_name(key)
            if remember:
                self._classes[type_key] = key
            return type_key
        if isinstance(key, str) and key:
            return key
        raise TypeError(f"Type key must be a non-empty string, a class or a Reference, got {key!r}")

    def _find_class(self, class_name: str) -> Optional[Type]:
        cls = self._classes.get(class_name)
        if cls is None:
            located = locate(class_name)
            if not is_constructible(located):
                return None
            cls = self._classes[class_name] = located
        return cls

    def _type_not_found(self, type_key: str) -> TypeNotFoundError:
        registered = ", ".join(self._definitions) or "None"
        return TypeNotFoundError(
            f"{type_key} is not registered and is not a class path.\n"
            f"Registered types: {registered}\n"
            f"Hint: container.register('{type_key}', {{'class': 'package.module.ClassName'}})"
        )

    # Python protocol sugar

    def __contains__(self, key: TypeKey) -> bool:
        return self.has(key)

    def __getitem__(self, key: TypeKey) -> Callable[[], Any]:
        """Support subscript syntax: container[key]().

        Example::

            # These are equivalent:
            service = container[MyService]()
            service = container.get(MyService)
        """

        def getter() -> Any:
            return self.get(key)

        return getter


def _merge(stored: ParamOverrides, overrides: ParamOverrides) -> ParamOverrides:
    """Call-time overrides win, position by position."""
    if not stored:
        return overrides
    if not overrides:
        return stored
    merged: Dict[int, Any] = dict(stored)
    merged.update(overrides)
    return MappingProxyType(merged)
