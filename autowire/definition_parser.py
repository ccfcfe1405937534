"""
DefinitionParser

This module turns the loosely shaped values accepted by register() into
one of the immutable Definition variants. It runs once per registration;
the resolver never inspects raw definition data afterwards.

Accepted sources:
- empty (None, "", {}, [], ()): the key itself must be a class path
- a string: the class path to construct
- a class object or a Reference: construct that class / resolve that key
- a dict tagged with "class", "factory" or "callback"
- an untagged dict, list or tuple: parameter overrides for the key's class
- any other object: a prebuilt instance
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Type

from .definition import (
    CFG_PARAMS,
    CFG_SETTER,
    DEF_CALLBACK,
    DEF_CLASS,
    DEF_FACTORY,
    EMPTY_PARAMS,
    CallbackDefinition,
    ClassDefinition,
    Definition,
    FactoryDefinition,
    ParamOverrides,
    PrebuiltInstance,
    SetterCall,
)
from .exceptions import InvalidDefinitionError
from .naming import qualified_name
from .reference import Reference


class DefinitionParser:
    """Parse definition sources for a container.

    Attributes:
        find_class: Callable returning the constructible class registered
            under or importable by a key, or None. Supplied by the container
            so that parsing sees the same class lookup as resolution.
        key_for: Callable turning a class or Reference into its key
    """

    def __init__(
        self,
        find_class: Callable[[str], Optional[Type]],
        key_for: Optional[Callable[[Any], str]] = None
    ):
        self.find_class = find_class
        self.key_for = key_for or _default_key_for

    def parse(self, key: str, source: Any) -> Definition:
        """Build the Definition for ``key`` from ``source``.

        Args:
            key: The key being registered
            source: The raw definition passed to register()

        Returns:
            A new immutable Definition

        Raises:
            InvalidDefinitionError: When the source cannot be interpreted
        """
        if _is_empty(source):
            if self.find_class(key) is None:
                raise InvalidDefinitionError(
                    f"Type '{key}' is expected to be a class path when definition is empty."
                )
            return ClassDefinition(class_name=key)

        if isinstance(source, str):
            return ClassDefinition(class_name=source)
        if isinstance(source, (type, Reference)):
            return ClassDefinition(class_name=self._class_target(source))

        if isinstance(source, Mapping):
            return self._parse_mapping(key, source)
        if isinstance(source, (list, tuple)):
            return self._params_for_key(key, self.parse_params(source))

        return PrebuiltInstance(value=source)

    def _parse_mapping(self, key: str, source: Mapping) -> Definition:
        params = self.parse_params(source.get(CFG_PARAMS))
        setter = self.parse_setter(source.get(CFG_SETTER))

        if DEF_CLASS in source:
            return ClassDefinition(
                class_name=self._class_target(source[DEF_CLASS]),
                params=params,
                setter=setter,
            )
        for tag, kind in ((DEF_FACTORY, FactoryDefinition), (DEF_CALLBACK, CallbackDefinition)):
            if tag not in source:
                continue
            if not _is_callable_shaped(source[tag]):
                raise InvalidDefinitionError(
                    f"'{tag}' for '{key}' must be a callable, a dotted path or a "
                    f"(class_or_object, 'method') pair, got {source[tag]!r}"
                )
            return kind(callback=source[tag], params=params, setter=setter)

        if CFG_PARAMS in source or CFG_SETTER in source:
            return self._params_for_key(key, params, setter)
        return self._params_for_key(key, self.parse_params(source))

    def _params_for_key(
        self,
        key: str,
        params: ParamOverrides,
        setter: Optional[SetterCall] = None
    ) -> ClassDefinition:
        """Normalize bare overrides into a ClassDefinition of the key itself."""
        if self.find_class(key) is None:
            raise InvalidDefinitionError(
                f"Definition for '{key}' does not contain a class, factory or callback, "
                f"and '{key}' is not a class path.\n"
                f"Hint: container.register('{key}', {{'class': 'package.module.ClassName', "
                f"'params': [...]}})"
            )
        return ClassDefinition(class_name=key, params=params, setter=setter)

    def _class_target(self, target: Any) -> str:
        if isinstance(target, (type, Reference)):
            return self.key_for(target)
        if isinstance(target, str) and target:
            return target
        raise InvalidDefinitionError(
            f"'{DEF_CLASS}' must be a class path, a class or a Reference, got {target!r}"
        )

    @staticmethod
    def parse_params(raw: Any) -> ParamOverrides:
        """Normalize positional overrides into a read-only index mapping.

        A list or tuple is dense from index 0, a mapping may skip indices,
        and any other single value becomes the override for index 0.

        Example::

            parse_params(['A', 'B'])      # {0: 'A', 1: 'B'}
            parse_params({1: 'B'})        # {1: 'B'}, index 0 keeps its default
            parse_params('closure')       # {0: 'closure'}
        """
        if raw is None:
            return EMPTY_PARAMS
        if isinstance(raw, Mapping):
            items = raw.items()
        elif isinstance(raw, (list, tuple)):
            items = enumerate(raw)
        else:
            items = [(0, raw)]

        params: Dict[int, Any] = {}
        for index, value in items:
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise InvalidDefinitionError(
                    f"Parameter overrides must use non-negative integer positions, got {index!r}"
                )
            params[index] = value
        return MappingProxyType(params) if params else EMPTY_PARAMS

    @staticmethod
    def parse_setter(raw: Any) -> Optional[SetterCall]:
        """Parse ``[method_name, arg0, arg1, ...]`` into a SetterCall."""
        if raw is None:
            return None
        if not isinstance(raw, (list, tuple)):
            raise InvalidDefinitionError(
                f"'{CFG_SETTER}' must be a list of a method name and its arguments, got {raw!r}"
            )
        if not raw:
            return None
        method, *args = raw
        if not isinstance(method, str) or not method:
            raise InvalidDefinitionError(
                f"'{CFG_SETTER}' must start with a method name, got {method!r}"
            )
        return SetterCall(method=method, args=tuple(args))


def _default_key_for(target: Any) -> str:
    if isinstance(target, Reference):
        return target.target
    return qualified_name(target)


def _is_empty(source: Any) -> bool:
    if source is None:
        return True
    if isinstance(source, (str, list, tuple, Mapping)):
        return len(source) == 0
    return False


def _is_callable_shaped(candidate: Any) -> bool:
    """Syntactic check only, the target is looked up on first resolution."""
    if isinstance(candidate, str):
        return bool(candidate)
    if isinstance(candidate, tuple) and len(candidate) == 2:
        return isinstance(candidate[1], str)
    return callable(candidate)
