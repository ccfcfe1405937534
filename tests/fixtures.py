"""
Test Fixtures

Common test classes used across test modules
"""


class ConfigurableA:
    """Class with one untyped parameter"""

    SPECIAL = 'special'

    def __init__(self, config):
        self.data = config

    @staticmethod
    def special():
        return ConfigurableA(ConfigurableA.SPECIAL)


class ConfigurableB:
    """Class with one parameter having a default value"""

    def __init__(self, config='B'):
        self.data = config


class ClientClass:
    """Client depending on both configurable classes"""

    def __init__(self, a: ConfigurableA, b: ConfigurableB):
        self.a = a
        self.b = b
        self.extra = None

    @classmethod
    def normalized(cls, container, params):
        container.remove(cls)
        config = params[0] if params and params[0] is not None else 'A'
        return cls(ConfigurableA(config), ConfigurableB())


class MoreClass(ClientClass):
    """Client with a setter"""

    def set_extra(self, extra):
        self.extra = extra


def sample_a(a):
    return ConfigurableA(a)


class FactoryC:
    """Factory object exposing methods and __call__"""

    METHOD = 'sample-method'
    INVOKE = 'sample-invoke'

    def get_instance(self, a):
        return ConfigurableA(a)

    def default_value_test(self, a='a', b='b'):
        return ClientClass(ConfigurableA(a), ConfigurableB(b))

    def object_test(self, a: ConfigurableA, b: ConfigurableB):
        return ClientClass(a, b)

    def __call__(self, b):
        return ConfigurableB(b)


class CounterService:
    """Service with mutable state for testing singleton behavior"""

    def __init__(self):
        self.counter = 0

    def increment(self):
        self.counter += 1
        return self.counter


class SetterRecorder:
    """Records every setter call"""

    def __init__(self):
        self.calls = []

    def configure(self, *args):
        self.calls.append(args)


class CycleA:
    """First half of a constructor cycle"""

    def __init__(self, b: 'CycleB'):
        self.b = b


class CycleB:
    """Second half of a constructor cycle"""

    def __init__(self, a: CycleA):
        self.a = a


class Level1:
    """First level of nested dependencies"""
    pass


class Level2:
    """Second level of nested dependencies"""

    def __init__(self, l1: Level1):
        self.l1 = l1


class Level3:
    """Third level of nested dependencies"""

    def __init__(self, l2: Level2, name: str = "level3"):
        self.l2 = l2
        self.name = name
