"""Chained variable scopes. Lookups and assignments walk the enclosing chain outward, innermost scope first."""

from gox.lang.error import GoxRuntimeError


class Environment:
    """One scope: a mapping of names to values plus an optional enclosing scope."""

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def define(self, name, value):
        """Binds name in this scope only. Redefinition simply overwrites."""
        self.values[name] = value

    def get(self, name):
        """Returns the value bound to token name in the nearest scope that defines it."""
        environment = self.resolve(name)
        return environment.values[name.lexeme]

    def assign(self, name, value):
        """Overwrites the binding of token name in the nearest scope that defines it. Never creates a new binding."""
        environment = self.resolve(name)
        environment.values[name.lexeme] = value

    def resolve(self, name):
        """Returns the innermost scope defining token name. Raises GoxRuntimeError if no scope in the chain does."""
        environment = self
        while environment is not None:
            if name.lexeme in environment.values:
                return environment
            environment = environment.enclosing

        raise GoxRuntimeError(name, f"undefined variable '{name.lexeme}'")

    def __contains__(self, name):
        return name in self.values

    def __repr__(self):
        return f"Environment(values={self.values!r}, enclosing={self.enclosing!r})"
