"""
Test Configuration and Utilities

Common base classes and helper functions for Autowire tests
"""

import unittest

from autowire import AutowireContainer, GlobalContainer


class AutowireTestCase(unittest.TestCase):
    """
    Base test case class for Autowire tests.

    Provides a fresh container per test and resets the global
    container before and after each test.
    """

    def setUp(self):
        """Fresh container, no global container"""
        GlobalContainer().stop()
        self.container = AutowireContainer()

    def tearDown(self):
        """Reset global container after each test"""
        GlobalContainer().stop()


def class_path(cls: type) -> str:
    """
    Dotted key of a fixture class, as the container computes it.

    Example:
        >>> class_path(ConfigurableA)
        'fixtures.ConfigurableA'
    """
    return f"{cls.__module__}.{cls.__qualname__}"
