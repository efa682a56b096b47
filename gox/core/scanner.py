"""Lexical scanner for gox. Converts raw source text into a flat list of Tokens in a single left-to-right pass.

Scanning stops at the first error: no partial token list is ever returned.
"""

from gox.core.tokens import KEYWORDS, Token, TokenType
from gox.lang.error import ScanError


class Scanner:
    """Single-use scanner over one source string."""
    SINGLE = {
        "(": TokenType.LEFT_PAREN,
        ")": TokenType.RIGHT_PAREN,
        "{": TokenType.LEFT_BRACE,
        "}": TokenType.RIGHT_BRACE,
        ",": TokenType.COMMA,
        ".": TokenType.DOT,
        "-": TokenType.MINUS,
        "+": TokenType.PLUS,
        ";": TokenType.SEMICOLON,
        "*": TokenType.STAR,
    }
    # char: (kind if followed by "=", kind otherwise)
    DOUBLE = {
        "!": (TokenType.BANG_EQUAL, TokenType.BANG),
        "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
        "<": (TokenType.LESS_EQUAL, TokenType.LESS),
        ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
    }
    WHITESPACE = " \r\t"

    def __init__(self, source):
        self.source = source
        self.tokens = []

        self.start = 0    # start of the lexeme being scanned
        self.current = 0  # character under the cursor
        self.line = 1
        self.line_start = 0  # index of the first character of the current line

    def scan_tokens(self):
        """Scans the whole source. Returns the token list, always terminated by exactly one EOF token."""
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line, self.current - self.line_start))
        return self.tokens

    def scan_token(self):
        char = self.advance()

        if char in Scanner.SINGLE:
            self.add_token(Scanner.SINGLE[char])

        elif char in Scanner.DOUBLE:
            with_equal, without_equal = Scanner.DOUBLE[char]
            self.add_token(with_equal if self.match("=") else without_equal)

        elif char == "/":
            if self.match("/"):
                while self.peek() != "\n" and not self.is_at_end():
                    self.advance()  # comments run to end of line
            else:
                self.add_token(TokenType.SLASH)

        elif char in Scanner.WHITESPACE:
            pass

        elif char == "\n":
            self.new_line()

        elif char == '"':
            self.string()

        elif Scanner.is_digit(char):
            self.number()

        elif char.isalpha():
            self.identifier()

        else:
            raise ScanError(f"unexpected character '{char}'", self.line)

    def string(self):
        while self.peek() != '"' and not self.is_at_end():
            if self.advance() == "\n":
                self.new_line()

        if self.is_at_end():
            raise ScanError("unterminated string", self.line)

        self.advance()  # closing "
        self.add_token(TokenType.STRING, self.source[self.start + 1:self.current - 1])

    def number(self):
        while Scanner.is_digit(self.peek()):
            self.advance()

        if self.peek() == "." and Scanner.is_digit(self.peek_next()):
            self.advance()
            while Scanner.is_digit(self.peek()):
                self.advance()

        lexeme = self.source[self.start:self.current]
        try:
            literal = float(lexeme)
        except ValueError:
            raise ScanError(f"invalid number '{lexeme}'", self.line)

        self.add_token(TokenType.NUMBER, literal)

    def identifier(self):
        while self.peek().isalpha() or Scanner.is_digit(self.peek()):
            self.advance()

        lexeme = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(lexeme, TokenType.IDENTIFIER))

    def add_token(self, kind, literal=None):
        column = self.start - self.line_start if self.start >= self.line_start else None
        self.tokens.append(Token(kind, self.source[self.start:self.current], literal, self.line, column))

    def new_line(self):
        self.line += 1
        self.line_start = self.current

    def advance(self):
        self.current += 1
        return self.source[self.current - 1]

    def match(self, expected):
        """Consumes the next character only if it is expected."""
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self):
        if self.is_at_end():
            return "\0"
        return self.source[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def is_at_end(self):
        return self.current >= len(self.source)

    @staticmethod
    def is_digit(char):
        return "0" <= char <= "9"


def scan(source):
    """Returns the tokens of source. Raises ScanError on the first lexical error."""
    return Scanner(source).scan_tokens()
