"""
ResolutionContext

This module provides the context management for dependency resolution.
The ResolutionContext tracks:

- Keys currently being resolved (for circular dependency detection)
- The container performing the resolution

The context is stored in a ContextVar and is automatically managed
during resolution, including nested resolutions triggered by
References and by callbacks calling back into the container.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, List, Optional, TYPE_CHECKING

from .exceptions import CircularDependencyError

if TYPE_CHECKING:
    from .container import AutowireContainer


class ResolutionContext:
    """Chain of keys under construction for one container.

    Attributes:
        container: The container performing the resolution
        resolving: Keys in the order they were entered

    Note:
        This class is used internally by AutowireContainer.
        Users should not need to interact with it directly.

    Example (internal usage)::

        with ResolutionContext.enter(container, "app.Service"):
            with ResolutionContext.enter(container, "app.Repository"):
                ...  # chain is ["app.Service", "app.Repository"]
    """

    def __init__(self, container: 'AutowireContainer', resolving: Optional[List[str]] = None):
        self.container = container
        self.resolving: List[str] = resolving or []

    @classmethod
    @contextmanager
    def enter(cls, container: 'AutowireContainer', key: str) -> Iterator['ResolutionContext']:
        """Push ``key`` on the chain for the duration of the block.

        Raises:
            CircularDependencyError: When ``key`` is already on the chain
                of the same container
        """
        parent = _resolution_context.get()
        chain: List[str] = []
        if parent is not None and parent.container is container:
            if key in parent.resolving:
                cycle = " -> ".join(parent.resolving[parent.resolving.index(key):] + [key])
                raise CircularDependencyError(f"Circular dependency detected: {cycle}")
            chain = list(parent.resolving)

        ctx = cls(container, chain + [key])
        token = _resolution_context.set(ctx)
        try:
            yield ctx
        finally:
            _resolution_context.reset(token)

    @staticmethod
    def current() -> Optional['ResolutionContext']:
        return _resolution_context.get()


# Resolution chain of the resolution running in the current context
_resolution_context: ContextVar[Optional[ResolutionContext]] = ContextVar(
    '_AUTOWIRE_RESOLUTION_CONTEXT',
    default=None
)
