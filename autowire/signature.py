"""
Dependency signatures

A dependency signature is the ordered list of parameter slots of a class
constructor or of a callback. It is derived once from the Reflector and
memoized for the lifetime of the container.

Slot kinds:
- LiteralDefault: the parameter has a default value
- Deferred: the parameter is typed with a class, resolved through the container
- Unresolved: nothing known, must come from overrides (else None is passed)
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple, Union

from .reference import Reference
from .reflector import ParameterInfo, Reflector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LiteralDefault:
    value: Any


@dataclass(frozen=True)
class Deferred:
    reference: Reference


class _Unresolved:
    """Singleton marker for a parameter without default or class type"""

    _instance: Optional['_Unresolved'] = None

    def __new__(cls) -> '_Unresolved':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNRESOLVED"


UNRESOLVED = _Unresolved()

ParameterSlot = Union[LiteralDefault, Deferred, _Unresolved]
Signature = Tuple[ParameterSlot, ...]


def derive_slots(parameters: List[ParameterInfo]) -> Signature:
    """Map reflected parameters to slots, in declaration order.

    A default value wins over a declared class type, so
    ``def __init__(self, cache: Cache = None)`` stays None unless overridden.
    """
    slots: List[ParameterSlot] = []
    for parameter in parameters:
        if parameter.has_default:
            slots.append(LiteralDefault(parameter.default))
        elif parameter.declared_type is not None:
            slots.append(Deferred(Reference(parameter.declared_type)))
        else:
            slots.append(UNRESOLVED)
    return tuple(slots)


def slot_value(slot: ParameterSlot) -> Any:
    """The placeholder value a slot contributes to an argument list."""
    if isinstance(slot, LiteralDefault):
        return slot.value
    if isinstance(slot, Deferred):
        return slot.reference
    return None


class SignatureCache:
    """Memoized dependency signatures, keyed by class object or by type key.

    Constructor and callback entries live in separate namespaces, so an
    alias that names a class path may also own a callback signature.

    Entries are never recomputed or evicted: replacing or removing a
    definition keeps the signature that was derived for it first.

    Attributes:
        reflector: The capability used to describe classes and callables
        _signatures: Cache key -> derived signature
    """

    def __init__(self, reflector: Reflector):
        self.reflector = reflector
        self._signatures: Dict[Hashable, Signature] = {}

    def get_or_derive(self, cache_key: Hashable, target: Callable[[], Any]) -> Signature:
        """Return the cached signature for ``cache_key``.

        Args:
            cache_key: ("class", class object) for constructors,
                ("callback", type key) for callbacks and factories
            target: Zero-argument callable returning the class or callable
                to reflect, only invoked on a cache miss

        Raises:
            ReflectionError: When the target cannot be located or introspected
        """
        signature = self._signatures.get(cache_key)
        if signature is None:
            signature = derive_slots(self.reflector.parameters(target()))
            self._signatures[cache_key] = signature
            logger.debug(f"Derived signature for {cache_key}: {signature}")
        return signature

    def __contains__(self, cache_key: Hashable) -> bool:
        return cache_key in self._signatures

    def __len__(self) -> int:
        return len(self._signatures)
