# Public API
from .container import AutowireContainer
from .definition import (
    CallbackDefinition,
    ClassDefinition,
    Definition,
    FactoryDefinition,
    PrebuiltInstance,
    SetterCall,
)
from .exceptions import (
    AlreadyStartedError,
    AutowireError,
    CircularDependencyError,
    InternalInconsistencyError,
    InvalidDefinitionError,
    NotInitializedError,
    ReflectionError,
    TypeNotFoundError,
)
from .global_context import GlobalContainer
from .lifecycle import AutowireLifeCycle
from .reference import Reference
from .reflector import InspectReflector, ParameterInfo, Reflector

__all__ = [
    "AutowireContainer",
    "GlobalContainer",
    "AutowireLifeCycle",
    "Reference",
    # Definitions
    "Definition",
    "ClassDefinition",
    "CallbackDefinition",
    "FactoryDefinition",
    "PrebuiltInstance",
    "SetterCall",
    # Reflection
    "Reflector",
    "InspectReflector",
    "ParameterInfo",
    # Exceptions
    "AutowireError",
    "InvalidDefinitionError",
    "ReflectionError",
    "TypeNotFoundError",
    "InternalInconsistencyError",
    "CircularDependencyError",
    "AlreadyStartedError",
    "NotInitializedError",
]

# Version will be dynamically set at build time
try:
    from ._version import __version__
except ImportError:
    # Fallback for development
    __version__ = '0.0.0'
