"""
AutowireLifeCycle Enum

Defines how long a resolved instance lives
"""

from enum import Enum


class AutowireLifeCycle(Enum):
    """Lifecycle of registered keys"""
    SINGLETON = "SINGLETON"
    FACTORY = "FACTORY"
