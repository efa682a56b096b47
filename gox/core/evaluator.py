"""Tree-walking evaluator for gox.

Runtime values are plain Python objects: None (nil), bool, float (number), str and GoxCallable. Every operator checks
the types of its operands at evaluation time and raises GoxRuntimeError on a mismatch.
"""

import math
import sys

from gox.core import ast
from gox.core.callable import GoxCallable, GoxFunction, ReturnValue
from gox.core.environment import Environment
from gox.core.natives import default_registry
from gox.core.tokens import TokenType
from gox.lang.error import GoxRuntimeError


def is_truthy(value):
    """nil, false and the empty string are falsy. Everything else, including every number, is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return len(value) > 0
    return True


def is_number(value):
    return isinstance(value, float)


def divide(left, right):
    """IEEE-754 division: dividing by zero yields an infinity or NaN instead of raising."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def stringify(value):
    """Display form of a runtime value, as written by print."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        text = repr(value)
        return text[:-2] if text.endswith(".0") else text
    return str(value)


class Interpreter:
    """Evaluates statements against a chain of Environments rooted at self.globals.

    natives is the Registry of host functions defined in the global scope (default_registry() if None). out is the
    stream print statements write to (sys.stdout if None).
    """
    OPERATIONS = {
        TokenType.MINUS: lambda left, right: left - right,
        TokenType.STAR: lambda left, right: left * right,
        TokenType.SLASH: divide,
        TokenType.GREATER: lambda left, right: left > right,
        TokenType.GREATER_EQUAL: lambda left, right: left >= right,
        TokenType.LESS: lambda left, right: left < right,
        TokenType.LESS_EQUAL: lambda left, right: left <= right,
    }
    # each gox call takes about eight Python frames, so the default limit of 1000 would cap recursion near 120 calls
    RECURSION_LIMIT = 50000

    def __init__(self, natives=None, out=None):
        if sys.getrecursionlimit() < Interpreter.RECURSION_LIMIT:
            sys.setrecursionlimit(Interpreter.RECURSION_LIMIT)

        self.out = out

        self.globals = Environment()
        self.environment = self.globals

        for native in (natives if natives is not None else default_registry()):
            self.globals.define(native.name, native)

        self._evaluators = {
            ast.Literal: self._literal,
            ast.Grouping: self._grouping,
            ast.Variable: self._variable,
            ast.Assign: self._assign,
            ast.Logical: self._logical,
            ast.Unary: self._unary,
            ast.Binary: self._binary,
            ast.Call: self._call,
        }
        self._executors = {
            ast.ExpressionStmt: self._expression_stmt,
            ast.Print: self._print,
            ast.VarDecl: self._var_decl,
            ast.Block: self._block,
            ast.If: self._if,
            ast.While: self._while,
            ast.FunctionDecl: self._function_decl,
            ast.Return: self._return,
        }

    def interpret(self, statements):
        """Executes statements in order. Returns None on success, or the GoxRuntimeError that stopped execution.
        Any other exception is an internal fault and propagates to the caller.
        """
        try:
            for stmt in statements:
                self.execute(stmt)
        except GoxRuntimeError as error:
            return error
        return None

    def evaluate(self, expr):
        return self._evaluators[type(expr)](expr)

    def execute(self, stmt):
        self._executors[type(stmt)](stmt)

    def execute_block(self, statements, environment):
        """Executes statements with environment as the current scope, restoring the previous scope afterwards."""
        previous = self.environment
        self.environment = environment
        try:
            for stmt in statements:
                self.execute(stmt)
        finally:
            self.environment = previous

    # expressions

    def _literal(self, expr):
        return expr.value

    def _grouping(self, expr):
        return self.evaluate(expr.inner)

    def _variable(self, expr):
        return self.environment.get(expr.name)

    def _assign(self, expr):
        value = self.evaluate(expr.value)
        self.environment.assign(expr.name, value)
        return value

    def _logical(self, expr):
        left = self.evaluate(expr.left)

        if expr.operator.type is TokenType.OR:
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left

        return self.evaluate(expr.right)

    def _unary(self, expr):
        operand = self.evaluate(expr.operand)

        if expr.operator.type is TokenType.BANG:
            return not is_truthy(operand)

        if not is_number(operand):
            raise GoxRuntimeError(expr.operator, "operand must be number")
        return -operand

    def _binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator.type

        both_strings = isinstance(left, str) and isinstance(right, str)

        if operator in (TokenType.EQUAL_EQUAL, TokenType.BANG_EQUAL):
            if not both_strings:
                self._check_number_operands(expr.operator, left, right)
            equal = left == right
            return equal if operator is TokenType.EQUAL_EQUAL else not equal

        if operator is TokenType.PLUS:
            if both_strings:
                return left + right
            self._check_number_operands(expr.operator, left, right)
            return left + right

        self._check_number_operands(expr.operator, left, right)
        return Interpreter.OPERATIONS[operator](left, right)

    def _call(self, expr):
        callee = self.evaluate(expr.callee)
        arguments = [self.evaluate(argument) for argument in expr.arguments]

        if not isinstance(callee, GoxCallable):
            raise GoxRuntimeError(expr.paren, "non-callable element")
        if len(arguments) != callee.arity():
            raise GoxRuntimeError(expr.paren, "invalid number of arguments")

        return callee.call(self, arguments)

    @staticmethod
    def _check_number_operands(operator, left, right):
        if not (is_number(left) and is_number(right)):
            raise GoxRuntimeError(operator, "both operands must be numbers")

    # statements

    def _expression_stmt(self, stmt):
        self.evaluate(stmt.expr)

    def _print(self, stmt):
        value = self.evaluate(stmt.expr)
        print(stringify(value), file=self.out)

    def _var_decl(self, stmt):
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)
        self.environment.define(stmt.name.lexeme, value)

    def _block(self, stmt):
        self.execute_block(stmt.statements, Environment(self.environment))

    def _if(self, stmt):
        if is_truthy(self.evaluate(stmt.condition)):
            self.execute(stmt.then_branch)
        elif stmt.else_branch is not None:
            self.execute(stmt.else_branch)

    def _while(self, stmt):
        while is_truthy(self.evaluate(stmt.condition)):
            self.execute(stmt.body)

    def _function_decl(self, stmt):
        self.environment.define(stmt.name.lexeme, GoxFunction(stmt, self.environment))

    def _return(self, stmt):
        value = None
        if stmt.value is not None:
            value = self.evaluate(stmt.value)
        raise ReturnValue(value)
