"""Debug printer: renders a syntax tree in parenthesized prefix form, e.g. `1 + 2 * 3` becomes `(+ 1 (* 2 3))`."""

from gox.core import ast
from gox.core.evaluator import stringify


class AstPrinter:
    """Renders expressions and statements. Used by the --ast flag and in tests."""

    def __init__(self):
        self._printers = {
            ast.Literal: self._literal,
            ast.Grouping: lambda expr: self.parenthesize("group", expr.inner),
            ast.Variable: lambda expr: expr.name.lexeme,
            ast.Assign: lambda expr: self.parenthesize(f"= {expr.name.lexeme}", expr.value),
            ast.Logical: lambda expr: self.parenthesize(expr.operator.lexeme, expr.left, expr.right),
            ast.Unary: lambda expr: self.parenthesize(expr.operator.lexeme, expr.operand),
            ast.Binary: lambda expr: self.parenthesize(expr.operator.lexeme, expr.left, expr.right),
            ast.Call: lambda expr: self.parenthesize("call", expr.callee, *expr.arguments),
            ast.ExpressionStmt: lambda stmt: self.parenthesize(";", stmt.expr),
            ast.Print: lambda stmt: self.parenthesize("print", stmt.expr),
            ast.VarDecl: self._var_decl,
            ast.Block: lambda stmt: self.parenthesize("block", *stmt.statements),
            ast.If: self._if,
            ast.While: lambda stmt: self.parenthesize("while", stmt.condition, stmt.body),
            ast.FunctionDecl: self._function_decl,
            ast.Return: self._return,
        }

    def print(self, node):
        """Returns node rendered as a string. A list of statements is rendered one statement per line."""
        if isinstance(node, (list, tuple)):
            return "\n".join(self.print(stmt) for stmt in node)
        return self._printers[type(node)](node)

    def parenthesize(self, name, *nodes):
        return "(" + " ".join([name] + [self.print(node) for node in nodes]) + ")"

    def _literal(self, expr):
        if isinstance(expr.value, str):
            return f'"{expr.value}"'
        return stringify(expr.value)

    def _var_decl(self, stmt):
        if stmt.initializer is None:
            return f"(var {stmt.name.lexeme})"
        return self.parenthesize(f"var {stmt.name.lexeme}", stmt.initializer)

    def _if(self, stmt):
        if stmt.else_branch is None:
            return self.parenthesize("if", stmt.condition, stmt.then_branch)
        return self.parenthesize("if-else", stmt.condition, stmt.then_branch, stmt.else_branch)

    def _function_decl(self, stmt):
        params = " ".join(param.lexeme for param in stmt.params)
        return self.parenthesize(f"fun {stmt.name.lexeme} ({params})", *stmt.body)

    def _return(self, stmt):
        if stmt.value is None:
            return "(return)"
        return self.parenthesize("return", stmt.value)
