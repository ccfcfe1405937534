"""
Reflector

This module isolates the container from how parameter metadata is obtained.
The container only needs, for a class or a callable, the ordered list of
positional parameters with their default values and declared class types.

- Reflector: abstract capability consumed by the container
- InspectReflector: default implementation based on ``inspect`` and ``typing``
- resolve_callable: turns a registered callback spec into a real callable
"""

import inspect
import sys
import typing
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from .exceptions import ReflectionError
from .naming import is_constructible, locate

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True)
class ParameterInfo:
    """Metadata of one positional parameter"""
    name: str
    has_default: bool = False
    default: Any = None
    declared_type: Optional[Type] = None  # Only set for constructible classes


class Reflector(ABC):
    """Capability returning the ordered parameter list of a class or callable.

    Implementations may use runtime introspection, generated descriptors or
    an explicit table; the container does not care.
    """

    @abstractmethod
    def parameters(self, target: Any) -> List[ParameterInfo]:
        """Describe the positional parameters of ``target``.

        Args:
            target: A class (its constructor is described) or a callable

        Returns:
            Parameters in declaration order

        Raises:
            ReflectionError: When ``target`` cannot be introspected
        """
        pass


class InspectReflector(Reflector):
    """Reflector built on ``inspect.signature`` and ``typing.get_type_hints``.

    ``*args``, ``**kwargs`` and keyword-only parameters are not reported:
    the container passes arguments positionally, so those keep their own
    defaults.

    Example::

        class UserRepository:
            def __init__(self, db: Database, table: str = "users"):
                ...

        InspectReflector().parameters(UserRepository)
        # [ParameterInfo('db', False, None, Database),
        #  ParameterInfo('table', True, 'users', None)]
    """

    def parameters(self, target: Any) -> List[ParameterInfo]:
        try:
            sig = inspect.signature(target)
        except ValueError as e:
            raise ReflectionError(
                f"Cannot inspect {_describe(target)}: {e}. "
                f"This may occur with built-in types or C extension callables."
            ) from e
        except TypeError as e:
            raise ReflectionError(
                f"Cannot get signature for {_describe(target)}: {e}. "
                f"Ensure it is a class or a callable."
            ) from e

        hint_source = _hint_source(target)
        hints = self._resolve_type_hints(hint_source)

        parameters = []
        for name, param in sig.parameters.items():
            if param.kind not in _POSITIONAL_KINDS:
                continue

            if param.default is not inspect.Parameter.empty:
                parameters.append(ParameterInfo(name, has_default=True, default=param.default))
                continue

            annotation = hints.get(name, param.annotation)
            if annotation is inspect.Parameter.empty:
                parameters.append(ParameterInfo(name))
                continue
            if isinstance(annotation, str):
                annotation = self._resolve_string_annotation(hint_source, annotation)

            declared = annotation if is_constructible(annotation) else None
            parameters.append(ParameterInfo(name, declared_type=declared))

        return parameters

    @staticmethod
    def _resolve_type_hints(source: Any) -> Dict[str, Any]:
        """Resolve annotations of ``source``, or return {} when that fails.

        Failure is common for local classes and partial objects; the raw
        annotations from the signature are used instead.
        """
        try:
            return typing.get_type_hints(source)
        except NameError:
            # Type not found in scope
            return {}
        except RecursionError:
            return {}
        except Exception:
            return {}

    @staticmethod
    def _resolve_string_annotation(source: Any, annotation: str) -> Any:
        """Evaluate a forward reference in the namespace of its module.

        Returns None when the name cannot be found: an unknown annotation
        simply does not make the parameter a dependency.
        """
        module = sys.modules.get(getattr(source, '__module__', None) or '')
        if module is None:
            return None
        try:
            return eval(annotation, dict(vars(module)))
        except Exception:
            return None


def resolve_callable(spec: Any) -> Callable[..., Any]:
    """Turn a registered callback spec into something that can be called.

    Supported shapes:
    - any callable (function, lambda, bound method, object with ``__call__``)
    - ``"package.module.function"`` or ``"package.module.Class.static_method"``
    - ``(ClassOrObject, "method_name")``

    Raises:
        ReflectionError: When the spec does not point at a callable
    """
    if isinstance(spec, str):
        target = locate(spec)
        if target is None:
            raise ReflectionError(f"Callback '{spec}' cannot be imported.")
    elif isinstance(spec, tuple) and len(spec) == 2 and isinstance(spec[1], str):
        owner, method = spec
        if isinstance(owner, str):
            resolved_owner = locate(owner)
            if resolved_owner is None:
                raise ReflectionError(
                    f"Invalid callback pair, '{owner}' cannot be imported."
                )
            owner = resolved_owner
        try:
            target = getattr(owner, method)
        except AttributeError as e:
            raise ReflectionError(
                f"Invalid callback pair, {_describe(owner)} has no method '{method}'."
            ) from e
    else:
        target = spec

    if not callable(target):
        raise ReflectionError(
            f"Callback {_describe(target)} is not callable. "
            f"Functions, methods or objects defining __call__ are expected."
        )
    return target


def _hint_source(target: Any) -> Any:
    if isinstance(target, type):
        return target.__init__
    if inspect.isroutine(target):
        return target
    return getattr(type(target), '__call__', target)


def _describe(target: Any) -> str:
    return getattr(target, '__qualname__', None) or repr(target)
