"""
Definition

Data classes representing registered recipes. Exactly one of the four
definition kinds is stored per key, built once by the definition parser.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple, Union

# Tags recognized in a dict definition
DEF_CLASS = 'class'
DEF_CALLBACK = 'callback'
DEF_FACTORY = 'factory'
# Optional entries of a dict definition
CFG_PARAMS = 'params'
CFG_SETTER = 'setter'

# Positional index -> value, possibly with gaps
ParamOverrides = Mapping[int, Any]

# A callable, a dotted path to a function, or a (class_or_object, "method") pair
CallbackSpec = Union[Callable[..., Any], str, Tuple[Any, str]]

EMPTY_PARAMS: ParamOverrides = MappingProxyType({})


def _no_params() -> ParamOverrides:
    return EMPTY_PARAMS


@dataclass(frozen=True)
class SetterCall:
    """Method invoked once on the fresh instance, right after construction."""
    method: str
    args: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class ClassDefinition:
    """Construct ``class_name`` through its constructor.

    Overrides take part in equality but not in the hash, as a mapping
    proxy cannot be hashed.
    """
    class_name: str
    params: ParamOverrides = field(default_factory=_no_params, hash=False)
    setter: Optional[SetterCall] = None


@dataclass(frozen=True)
class CallbackDefinition:
    """Call ``callback(container, args)`` with the resolved argument list"""
    callback: CallbackSpec
    params: ParamOverrides = field(default_factory=_no_params, hash=False)
    setter: Optional[SetterCall] = None


@dataclass(frozen=True)
class FactoryDefinition:
    """Call ``callback(*args)`` with the resolved argument list"""
    callback: CallbackSpec
    params: ParamOverrides = field(default_factory=_no_params, hash=False)
    setter: Optional[SetterCall] = None


@dataclass(frozen=True)
class PrebuiltInstance:
    """An already constructed value, returned as-is"""
    value: Any


Definition = Union[ClassDefinition, CallbackDefinition, FactoryDefinition, PrebuiltInstance]
