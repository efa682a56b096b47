"""Callable values: everything a gox call expression can invoke."""

from abc import ABC, abstractmethod

from gox.core.environment import Environment


class ReturnValue(Exception):
    """Unwinds a function body up to its call when a return statement runs. Not an error."""

    def __init__(self, value):
        super().__init__()
        self.value = value


class GoxCallable(ABC):
    """Invocation contract shared by native and user-defined functions."""

    @abstractmethod
    def arity(self):
        """Number of arguments this callable accepts."""

    @abstractmethod
    def call(self, interpreter, arguments):
        """Invokes this callable. The caller has already checked len(arguments) == self.arity()."""


class GoxFunction(GoxCallable):
    """User-defined function: its declaration plus the environment active when it was declared (its closure)."""

    def __init__(self, declaration, closure):
        self.declaration = declaration
        self.closure = closure

    def arity(self):
        return len(self.declaration.params)

    def call(self, interpreter, arguments):
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        try:
            interpreter.execute_block(self.declaration.body, environment)
        except ReturnValue as returned:
            return returned.value
        return None

    def __str__(self):
        return f"<fn {self.declaration.name.lexeme}>"

    def __repr__(self):
        return f"GoxFunction({self.declaration.name.lexeme!r}, arity={self.arity()})"
