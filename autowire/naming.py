"""
Naming helpers

Conversion between class objects and the dotted paths used as keys.
"""

import builtins
import pkgutil
from typing import Any, Optional, Type


def qualified_name(cls: Type) -> str:
    """Return the dotted path of ``cls``, e.g. ``app.db.Database``."""
    return f"{cls.__module__}.{cls.__qualname__}"


def is_constructible(obj: Any) -> bool:
    """Check whether ``obj`` is a class the container may instantiate.

    Builtin types such as ``int`` or ``dict`` are classes in Python, but a
    parameter annotated with them carries configuration, not a dependency.
    """
    if not isinstance(obj, type) or obj is Any:
        return False
    return getattr(builtins, obj.__name__, None) is not obj


def locate(path: str) -> Optional[Any]:
    """Import the object named by a dotted path, or return None.

    Accepts both ``pkg.mod.Name`` and ``pkg.mod:Name`` forms.
    """
    if not path or path.startswith('.') or path.endswith('.'):
        return None
    try:
        return pkgutil.resolve_name(path)
    except (ImportError, AttributeError, ValueError):
        return None
