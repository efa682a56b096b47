"""Abstract syntax tree for gox. The node set is closed: the evaluator and the AST printer each keep one handler per
node class, keyed by type.

Nodes are immutable once built by the parser and own their children exclusively (a strict tree). Sequences of
children are stored as tuples.
"""

from dataclasses import dataclass

from gox.core.tokens import Token


class Expr:
    """Superclass of every expression node."""


class Stmt:
    """Superclass of every statement node."""


@dataclass(frozen=True)
class Literal(Expr):
    value: object


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    operand: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Grouping(Expr):
    inner: Expr


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Logical(Expr):
    """Short-circuiting `and`/`or`."""
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Call(Expr):
    """paren is the closing parenthesis, used to locate call errors."""
    callee: Expr
    paren: Token
    arguments: tuple


@dataclass(frozen=True)
class ExpressionStmt(Stmt):
    expr: Expr


@dataclass(frozen=True)
class Print(Stmt):
    expr: Expr


@dataclass(frozen=True)
class VarDecl(Stmt):
    name: Token
    initializer: Expr = None


@dataclass(frozen=True)
class Block(Stmt):
    statements: tuple


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Stmt = None


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class FunctionDecl(Stmt):
    name: Token
    params: tuple
    body: tuple


@dataclass(frozen=True)
class Return(Stmt):
    keyword: Token
    value: Expr = None


EXPRESSIONS = (Literal, Unary, Binary, Grouping, Variable, Assign, Logical, Call)
STATEMENTS = (ExpressionStmt, Print, VarDecl, Block, If, While, FunctionDecl, Return)
