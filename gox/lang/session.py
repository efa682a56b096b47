"""Session control for gox. Runs source text through the scanner, parser and evaluator, either in command-line mode
(one persistent interpreter fed line by line) or file interpretation mode.
"""

from gox.core.evaluator import Interpreter
from gox.core.parser import Parser
from gox.core.printer import AstPrinter
from gox.core.scanner import Scanner
from gox.lang.error import GenericException, ParseError


class Session:
    """Governs a gox session. Global variables and functions persist across every run of the same session."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, interpreter=None):
        self.error_handler = error_handler

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.interpreter = interpreter if interpreter is not None else Interpreter()

        if self.cmd_line:
            self.error_handler.fatal = False
        elif path == Session.SH_FILE:
            raise GenericException("'<in>' is a reserved filename")

    def load(self):
        """Returns the contents of self.path."""
        try:
            with open(self.path, "r") as file:
                return file.read()
        except OSError:
            raise GenericException(f"'{self.path}' could not be opened")

    def compile(self, source):
        """Scans and parses source. Every parse error is reported; returns None if source could not be compiled."""
        self.error_handler.register_source(self.path, source)

        tokens = Scanner(source).scan_tokens()  # ScanError propagates to the error handler

        parser = Parser(tokens)
        try:
            return parser.parse()
        except ParseError:
            self.error_handler.throw(*parser.errors)
            return None

    def run(self, source):
        """Compiles and executes source. Returns whether or not it ran to completion."""
        statements = self.compile(source)
        if statements is None:
            return False

        error = self.interpreter.interpret(statements)
        if error is not None:
            raise error
        return True

    def run_file(self):
        return self.run(self.load())

    def show_ast(self, source):
        """Prints the syntax tree of source instead of running it."""
        statements = self.compile(source)
        if statements is not None:
            print(AstPrinter().print(statements))
