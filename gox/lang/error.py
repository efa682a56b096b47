"""Error handling for gox. Only GenericExceptions should be encountered while running a program: if another type of
error makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every report starts with a single line in the form `[line N] error WHERE: MESSAGE`, where WHERE is the offending lexeme
(empty for scan errors and for errors at the end of input).
"""

import sys

from termcolor import colored

from gox.core.tokens import TokenType


class GenericException(Exception):
    """Templates a gox error so that it can be reported with a source location. exit_code is used by a fatal
    ErrorHandler.
    """
    exit_code = 70

    def __init__(self, msg, line=None, where="", internal=False, column=None):
        super().__init__(msg)

        self.msg = msg
        self.line = line
        self.where = where
        self.column = column  # offset of where in its line, if known
        self.internal = internal

    def report(self):
        """Returns the one-line report of this error."""
        if self.line is None:
            return f"error: {self.msg}"
        return f"[line {self.line}] error {self.where}: {self.msg}"


class ScanError(GenericException):
    """Lexical error: unexpected character, unterminated string or invalid number."""
    exit_code = 65

    def __init__(self, msg, line):
        super().__init__(msg, line)


class TokenError(GenericException):
    """Superclass for errors that point at a specific token."""

    def __init__(self, token, msg):
        where = "" if token.type is TokenType.EOF else token.lexeme
        super().__init__(msg, token.line, where, column=token.column)
        self.token = token


class ParseError(TokenError):
    """Syntax error found while building the AST."""
    exit_code = 65


class GoxRuntimeError(TokenError):
    """Error raised while evaluating a program."""
    exit_code = 70


class ErrorHandler:
    """Context manager that reports gox errors and turns any other Python error into an internal error report."""
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}  # path: source lines of the program currently running

    def register_source(self, path, source):
        """Registers the source being run so that reports can show the offending line."""
        self.traceback = {path: source.splitlines()}

    @staticmethod
    def diagnose(error, line):
        """Returns line with the offending part of error highlighted and underlined."""
        start = -1
        if error.where:
            if error.column is not None and line.startswith(error.where, error.column):
                start = error.column
            else:
                start = line.find(error.where)
        if start == -1:
            return "  " + line

        end = start + len(error.where)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, *errors):
        """Reports every error in errors, in order. If self.fatal, exits with the first error's exit code."""
        for error in errors:
            error_msg = ""
            if error.internal:
                error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
            error_msg += colored(error.report(), ErrorHandler.ERROR, attrs=["bold"])
            print(error_msg)

            line = self._source_line(error)
            if line and not error.internal:
                print(ErrorHandler.diagnose(error, line))

        if self.fatal:
            sys.exit(errors[0].exit_code)
        self.traceback = {}  # if error occurred, reset traceback (no need if error is fatal)

    def _source_line(self, error):
        """Returns the registered source line error points at, if any."""
        if error.line is None:
            return None

        for lines in self.traceback.values():
            if 0 < error.line <= len(lines) and lines[error.line - 1].strip():
                return lines[error.line - 1]
        return None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))

        return not do_exit
