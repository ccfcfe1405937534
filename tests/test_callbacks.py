"""
Callback and Factory Tests

Tests for "factory" definitions (arguments spread) and "callback"
definitions (called with the container and the argument list).
"""

import sys
import os
import unittest

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from autowire import Reference

from conftest import AutowireTestCase, class_path
from fixtures import ClientClass, ConfigurableA, ConfigurableB, FactoryC


class TestFactory(AutowireTestCase):
    """Test factory definitions in every supported callable shape."""

    def setUp(self):
        super().setUp()
        self.factory = FactoryC()

    def test_static_method_path(self):
        """A dotted path to a static method."""
        path = class_path(ConfigurableA) + '.special'
        client = self.container.register('static-method-version', {'factory': path}).get('static-method-version')

        self.assertEqual(client.data, ConfigurableA.SPECIAL)

    def test_class_method_pair(self):
        """A (class, 'method') pair."""
        client = self.container.register(
            'static-method-version2', {'factory': (ConfigurableA, 'special')}
        ).get('static-method-version2')

        self.assertEqual(client.data, ConfigurableA.SPECIAL)

    def test_class_path_method_pair(self):
        """A ('package.Class', 'method') pair."""
        client = self.container.register(
            'static-method-version3', {'factory': (class_path(ConfigurableA), 'special')}
        ).get('static-method-version3')

        self.assertEqual(client.data, ConfigurableA.SPECIAL)

    def test_function_path(self):
        """A dotted path to a module level function."""
        client = self.container.register(
            'function-version', {'factory': 'fixtures.sample_a', 'params': ['func']}
        ).get('function-version')

        self.assertEqual(client.data, 'func')

    def test_closure(self):
        """A lambda with a scalar params entry."""
        client = self.container.register(
            'closure-version', {'factory': lambda a: ConfigurableA(a), 'params': 'closure'}
        ).get('closure-version')

        self.assertEqual(client.data, 'closure')

    def test_bound_method_pair(self):
        """An (object, 'method') pair."""
        client = self.container.register(
            'object-version', {'factory': (self.factory, 'get_instance'), 'params': [FactoryC.METHOD]}
        ).get('object-version')

        self.assertIsInstance(client, ConfigurableA)
        self.assertEqual(client.data, FactoryC.METHOD)

    def test_default_values_with_sparse_params(self):
        """Skipped positions keep the callable's default value."""
        client = self.container.register(
            'default-test', {'factory': (self.factory, 'default_value_test'), 'params': {1: 'BB'}}
        ).get('default-test')

        self.assertIsInstance(client, ClientClass)
        self.assertEqual(client.a.data, 'a')
        self.assertEqual(client.b.data, 'BB')

    def test_invokable_object(self):
        """An object defining __call__."""
        client = self.container.register(
            'invoke-version', {'factory': self.factory, 'params': [FactoryC.INVOKE]}
        ).get('invoke-version')

        self.assertIsInstance(client, ConfigurableB)
        self.assertEqual(client.data, FactoryC.INVOKE)

    def test_references_in_params(self):
        """References among the params are resolved before the call."""
        self.container.register('MyA', {'class': ConfigurableA, 'params': ['A0']})
        self.container.register('MyB', {'class': ConfigurableB, 'params': ['B0']})
        client = self.container.register('instance-test', {
            'factory': (self.factory, 'object_test'),
            'params': [Reference('MyA'), Reference('MyB')],
        }).get('instance-test')

        self.assertIsInstance(client, ClientClass)
        self.assertEqual(client.a.data, 'A0')
        self.assertEqual(client.b.data, 'B0')

    def test_typed_parameters_are_injected(self):
        """Class-typed factory parameters are resolved from the container."""
        self.container.register(ConfigurableA, ['injected'])
        client = self.container.register(
            'typed', {'factory': (self.factory, 'object_test')}
        ).get('typed')

        self.assertEqual(client.a.data, 'injected')
        self.assertEqual(client.b.data, 'B')

    def test_extra_params_are_passed_positionally(self):
        """Overrides beyond the signature are appended."""
        received = []

        def collect(*args):
            received.append(args)
            return args

        self.container.register('varargs', {'factory': collect, 'params': {2: 'c'}})
        self.container.get('varargs')

        self.assertEqual(received, [(None, None, 'c')])


class TestNormalizedCallback(AutowireTestCase):
    """Test callback definitions."""

    def test_normalized_callback(self):
        """The callback receives the container and the params list."""
        client = self.container.register(
            'normalized', {'callback': (ClientClass, 'normalized'), 'params': ['AA']}
        ).get('normalized')

        self.assertEqual(client.a.data, 'AA')
        self.assertEqual(client.b.data, 'B')

    def test_calling_convention_ignores_declared_parameters(self):
        """Exactly (container, args) is passed whatever the callback declares."""
        received = []

        def callback(*args):
            received.append(args)
            return object()

        self.container.register('cb', {'callback': callback, 'params': [1, 2, 3]})
        self.container.get('cb')

        self.assertEqual(len(received), 1)
        container, args = received[0]
        self.assertIs(container, self.container)
        self.assertEqual(args, [1, 2, 3])

    def test_args_list_follows_callback_signature(self):
        """Defaults of the callback's own parameters fill the args list."""
        received = []

        def callback(container, args, flag='default'):
            received.append(args)
            return args

        self.container.register('cb', {'callback': callback, 'params': {1: 'second'}})
        self.container.get('cb')

        self.assertEqual(received, [[None, 'second', 'default']])

    def test_callback_can_resolve_through_container(self):
        """The callback may call back into the container."""
        self.container.register('MyA', {'class': ConfigurableA, 'params': ['from-callback']})

        def callback(container, args):
            return ClientClass(container.get('MyA'), ConfigurableB())

        client = self.container.register('client', {'callback': callback}).get('client')

        self.assertEqual(client.a.data, 'from-callback')


class TestSignatureCaching(AutowireTestCase):
    """Test that callback signatures are derived once per key."""

    def test_replaced_callback_keeps_first_signature(self):
        """The signature derived for a key survives re-registration."""
        self.container.register('cb', {'factory': lambda a='first': a})
        self.assertEqual(self.container.get('cb'), 'first')

        self.container.register('cb', {'factory': lambda a='second', b='extra': (a, b)})

        self.assertEqual(self.container.get('cb'), ('first', 'extra'))

    def test_callback_key_and_class_path_do_not_share_signatures(self):
        """A class path registered with a factory keeps its constructor signature apart."""
        self.container.register(ConfigurableB, {'factory': lambda: ConfigurableB('made')})
        self.assertEqual(self.container.get(ConfigurableB).data, 'made')

        self.container.register('plain-b', {'class': ConfigurableB})
        self.assertEqual(self.container.get('plain-b').data, 'made')

        self.container.remove(ConfigurableB)
        self.assertEqual(self.container.get('plain-b').data, 'B')


if __name__ == '__main__':
    unittest.main()
