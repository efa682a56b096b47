"""Recursive-descent parser for gox. Builds a list of statements from the scanner's tokens.

Grammar, from the top level down (each binary tier is produced by the one below it):

```
program     := declaration* EOF
declaration := "fun" function | "var" varDecl | statement
function    := IDENTIFIER "(" parameters? ")" "{" block
varDecl     := IDENTIFIER ("=" expression)? ";"
statement   := "for" forStmt | "if" ifStmt | "while" whileStmt | "print" printStmt
             | "return" returnStmt | "{" block | exprStmt
forStmt     := "(" (varDecl | exprStmt | ";") expression? ";" expression? ")" statement
expression  := assignment
assignment  := (IDENTIFIER "=" assignment) | logic_or
logic_or    := logic_and ("or" logic_and)*
logic_and   := equality ("and" equality)*
equality    := comparison (("==" | "!=") comparison)*
comparison  := term ((">" | ">=" | "<" | "<=") term)*
term        := factor (("+" | "-") factor)*
factor      := unary (("*" | "/") unary)*
unary       := (("!" | "-") unary) | call
call        := primary ("(" arguments? ")")*
primary     := NUMBER | STRING | "true" | "false" | "nil" | IDENTIFIER | "(" expression ")"
```

`for` loops are desugared here into `while` loops wrapped in a block, so the evaluator never sees them.
"""

from gox.core.ast import (Assign, Binary, Block, Call, ExpressionStmt, FunctionDecl, Grouping, If, Literal, Logical,
                          Print, Return, Unary, VarDecl, Variable, While)
from gox.core.tokens import TokenType
from gox.lang.error import ParseError


class Parser:
    """Parses one token list. Declaration-level errors are recorded in self.errors and parsing resumes at the next
    statement boundary (panic mode).

    Recovery applies to every error, including failures inside expressions, rather than ending the parse at the first
    malformed expression. Every recorded error is reported, and a token list with any error never runs.
    """
    MAX_ARGS = 255
    SEMICOLON_MSG = "expected ; after statement"

    # tokens that may start a new statement: synchronization stops in front of them
    STATEMENT_START = {
        TokenType.CLASS, TokenType.FUN, TokenType.VAR, TokenType.FOR,
        TokenType.IF, TokenType.WHILE, TokenType.PRINT, TokenType.RETURN,
    }

    def __init__(self, tokens):
        self.tokens = tokens
        self.current = 0

        self.errors = []
        self.function_depth = 0  # number of function bodies being parsed, used to validate return

    def parse(self):
        """Returns the parsed statements. Raises the first recorded ParseError once the whole input was consumed."""
        statements = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)

        if self.errors:
            raise self.errors[0]
        return statements

    # statements

    def declaration(self):
        try:
            if self.match(TokenType.FUN):
                return self.function()
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()

        except ParseError as error:
            self.errors.append(error)
            self.synchronize()
            return None

    def function(self):
        name = self.consume(TokenType.IDENTIFIER, "expected function name")
        self.consume(TokenType.LEFT_PAREN, "expected ( after function name")

        params = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= Parser.MAX_ARGS:
                    self.errors.append(ParseError(self.peek(), f"can't have more than {Parser.MAX_ARGS} parameters"))
                params.append(self.consume(TokenType.IDENTIFIER, "expected parameter name"))
                if not self.match(TokenType.COMMA):
                    break

        self.consume(TokenType.RIGHT_PAREN, "expected ) after parameters")
        self.consume(TokenType.LEFT_BRACE, "expected { before function body")

        self.function_depth += 1
        try:
            body = self.block()
        finally:
            self.function_depth -= 1

        return FunctionDecl(name, tuple(params), tuple(body))

    def var_declaration(self):
        name = self.consume(TokenType.IDENTIFIER, "expected variable name")

        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()

        self.consume(TokenType.SEMICOLON, Parser.SEMICOLON_MSG)
        return VarDecl(name, initializer)

    def statement(self):
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.RETURN):
            return self.return_statement()
        if self.match(TokenType.LEFT_BRACE):
            return Block(tuple(self.block()))
        return self.expression_statement()

    def for_statement(self):
        self.consume(TokenType.LEFT_PAREN, "expected ( after 'for'")

        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.expression()
        self.consume(TokenType.SEMICOLON, "expected ; after loop condition")

        increment = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "expected ) after for clauses")

        body = self.statement()

        if increment is not None:
            body = Block((body, ExpressionStmt(increment)))
        if condition is None:
            condition = Literal(True)
        loop = While(condition, body)

        if initializer is not None:
            return Block((initializer, loop))
        return Block((loop,))

    def if_statement(self):
        self.consume(TokenType.LEFT_PAREN, "expected ( after 'if'")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "expected ) after if condition")

        then_branch = self.statement()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.statement()

        return If(condition, then_branch, else_branch)

    def while_statement(self):
        self.consume(TokenType.LEFT_PAREN, "expected ( after 'while'")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "expected ) after condition")

        return While(condition, self.statement())

    def print_statement(self):
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "expected ; after value")
        return Print(value)

    def return_statement(self):
        keyword = self.previous()
        if self.function_depth == 0:
            self.errors.append(ParseError(keyword, "can't return from top-level code"))

        value = None
        if not self.check(TokenType.SEMICOLON):
            value = self.expression()

        self.consume(TokenType.SEMICOLON, "expected ; after return value")
        return Return(keyword, value)

    def expression_statement(self):
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, Parser.SEMICOLON_MSG)
        return ExpressionStmt(expr)

    def block(self):
        """Parses declarations up to the closing brace. The opening brace must already be consumed."""
        statements = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)

        self.consume(TokenType.RIGHT_BRACE, "expected } after block")
        return statements

    # expressions

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.logic_or()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value)

            raise ParseError(equals, "invalid assignment target")

        return expr

    def logic_or(self):
        expr = self.logic_and()

        while self.match(TokenType.OR):
            operator = self.previous()
            right = self.logic_and()
            expr = Logical(expr, operator, right)

        return expr

    def logic_and(self):
        expr = self.equality()

        while self.match(TokenType.AND):
            operator = self.previous()
            right = self.equality()
            expr = Logical(expr, operator, right)

        return expr

    def equality(self):
        return self._binary(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self):
        return self._binary(self.term, TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS,
                            TokenType.LESS_EQUAL)

    def term(self):
        return self._binary(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self):
        return self._binary(self.unary, TokenType.SLASH, TokenType.STAR)

    def _binary(self, operand, *operators):
        """Left-associative binary tier: folds operand (op operand)* into nested Binary nodes."""
        expr = operand()

        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expr = Binary(expr, operator, right)

        return expr

    def unary(self):
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            return Unary(operator, self.unary())
        return self.call()

    def call(self):
        expr = self.primary()

        while self.match(TokenType.LEFT_PAREN):
            expr = self.finish_call(expr)

        return expr

    def finish_call(self, callee):
        arguments = []

        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= Parser.MAX_ARGS:
                    self.errors.append(ParseError(self.peek(), f"can't have more than {Parser.MAX_ARGS} arguments"))
                arguments.append(self.expression())
                if not self.match(TokenType.COMMA):
                    break

        paren = self.consume(TokenType.RIGHT_PAREN, "expected ) after arguments")
        return Call(callee, paren, tuple(arguments))

    def primary(self):
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)

        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)

        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())

        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "expected ) after expression")
            return Grouping(expr)

        raise ParseError(self.peek(), "expected expression")

    # token cursor

    def consume(self, kind, message):
        if self.check(kind):
            return self.advance()
        raise ParseError(self.peek(), message)

    def match(self, *kinds):
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def check(self, kind):
        if self.is_at_end():
            return False
        return self.peek().type is kind

    def advance(self):
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self):
        return self.peek().type is TokenType.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

    def synchronize(self):
        """Discards tokens until just past a ; or just before a token that starts a statement."""
        self.advance()

        while not self.is_at_end():
            if self.previous().type is TokenType.SEMICOLON:
                return
            if self.peek().type in Parser.STATEMENT_START:
                return
            self.advance()


def parse(tokens):
    """Returns the statements parsed from tokens. Raises the first ParseError if the program is malformed."""
    return Parser(tokens).parse()
