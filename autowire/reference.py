"""
Reference

A deferred pointer to another key in the container.

A Reference can appear anywhere a constructor, callback or setter argument
is expected. Just before the call the container replaces it with
``container.get(reference.target)``.

Example::

    container.register("primary-db", {"class": Database, "params": ["main"]})
    container.register(Repository, {"params": [Reference("primary-db")]})
"""

from typing import Any, Optional, Type, Union, TYPE_CHECKING

from .naming import qualified_name

if TYPE_CHECKING:
    from .container import AutowireContainer


class Reference:
    """Placeholder meaning "resolve this other key when it is needed".

    Attributes:
        target: The key to resolve
        cls: The class object the reference was created from, if any.
            Kept so that classes which cannot be imported by path
            (test modules, nested classes) remain resolvable.
    """

    __slots__ = ('_target', '_cls')

    def __init__(self, target: Union[str, Type]):
        cls: Optional[Type] = None
        if isinstance(target, type):
            cls, target = target, qualified_name(target)
        elif not isinstance(target, str) or not target:
            raise TypeError(
                f"Reference target must be a non-empty key or a class, got {target!r}"
            )
        object.__setattr__(self, "_target", target)
        object.__setattr__(self, "_cls", cls)

    @property
    def target(self) -> str:
        return self._target

    @property
    def cls(self) -> Optional[Type]:
        return self._cls

    def actual(self, container: 'AutowireContainer') -> Any:
        """Resolve the referenced key against ``container`` with no overrides."""
        return container.get(self)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Reference is immutable")

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Reference)
            and other._target == self._target
            and other._cls is self._cls
        )

    def __hash__(self) -> int:
        return hash((Reference, self._target, self._cls))

    def __repr__(self) -> str:
        return f"Reference({self._target!r})"
