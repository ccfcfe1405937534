"""
GlobalContainer

Process-wide holder for one AutowireContainer, meant to be touched only
at the application's composition root. Library and business code should
receive the container (or its products) explicitly instead.

Example::

    from autowire import AutowireContainer, GlobalContainer

    # main.py
    container = AutowireContainer()
    container.register_singleton("db", {"class": Database})
    GlobalContainer().start(container)

    # elsewhere in the composition root
    db = GlobalContainer().get().get("db")
"""

import logging
from typing import Optional

from .container import AutowireContainer
from .exceptions import AlreadyStartedError, NotInitializedError

logger = logging.getLogger(__name__)


class GlobalContainer:
    """Singleton holding the process-wide container.

    A container is installed once with start() (or lazily with instance())
    and stays installed until stop(). Starting twice is an error rather
    than a silent replacement.

    Attributes:
        _container: The installed container (None if not started)
    """

    _instance: Optional['GlobalContainer'] = None
    _container: Optional[AutowireContainer]

    def __new__(cls) -> 'GlobalContainer':
        """Ensure singleton instance.

        Returns:
            The single GlobalContainer instance
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._container = None
        return cls._instance

    def get(self) -> AutowireContainer:
        """Get the installed container.

        Raises:
            NotInitializedError: If no container was started
        """
        if self._container is None:
            raise NotInitializedError(
                "No global container is started. Call GlobalContainer().start() first."
            )
        return self._container

    def get_or_null(self) -> Optional[AutowireContainer]:
        return self._container

    def start(self, container: Optional[AutowireContainer] = None) -> AutowireContainer:
        """Install ``container`` (or a new empty one) as the global container.

        Raises:
            AlreadyStartedError: If a container is already installed
        """
        if self._container is not None:
            raise AlreadyStartedError(
                "The global container is already started. "
                "Call GlobalContainer().stop() before starting again."
            )
        self._container = container if container is not None else AutowireContainer()
        logger.debug("Global container started")
        return self._container

    def stop(self) -> None:
        """Forget the installed container.

        This method is idempotent - calling it multiple times has no effect.
        """
        if self._container is not None:
            self._container = None
            logger.debug("Global container stopped")

    @classmethod
    def instance(cls) -> AutowireContainer:
        """Return the global container, starting an empty one on first use."""
        holder = cls()
        return holder.get_or_null() or holder.start()
