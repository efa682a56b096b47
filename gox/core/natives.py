"""Native (host-provided) functions. A Registry is built once and injected into an interpreter's global scope."""

import time

from gox.core.callable import GoxCallable


class NativeFunction(GoxCallable):
    """Wraps a Python function with a fixed arity."""

    def __init__(self, name, arity, function):
        self.name = name
        self._arity = arity
        self.function = function

    def arity(self):
        return self._arity

    def call(self, interpreter, arguments):
        return self.function(*arguments)

    def __str__(self):
        return f"<native fn {self.name}>"

    def __repr__(self):
        return f"NativeFunction({self.name!r}, arity={self._arity})"


class Registry:
    """Ordered collection of NativeFunctions, keyed by name."""

    def __init__(self, natives=()):
        self.natives = {}
        for native in natives:
            self.add(native)

    def add(self, native):
        self.natives[native.name] = native

    def register(self, name, arity):
        """Decorator that registers the decorated Python function as a native named name."""

        def decorator(function):
            self.add(NativeFunction(name, arity, function))
            return function

        return decorator

    def __iter__(self):
        return iter(self.natives.values())

    def __len__(self):
        return len(self.natives)

    def __contains__(self, name):
        return name in self.natives


def default_registry(clock=time.time):
    """Returns the standard natives. clock can be replaced by any zero-argument function returning seconds."""
    registry = Registry()

    @registry.register("clock", 0)
    def _clock():
        return float(clock())

    return registry
