"""Handles interactive/command-line mode for the gox interpreter. Uses cmd as backend."""

import cmd

from gox.core.scanner import scan
from gox.core.tokens import TokenType
from gox.lang.error import ScanError


class Shell(cmd.Cmd):
    """gox interpreter shell."""
    intro = "gox interpreter :: Python backend\nType 'help' for more information, 'exit' to quit."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations
    COMMANDS = ("help", "exit", "EOF")  # only recognized when typed alone on a line

    def __init__(self, sess, *args, ast=False, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.ast = ast  # print syntax trees instead of running

        self._tmp_line = ""

    @staticmethod
    def is_open(source):
        """Whether or not source has unclosed braces or an unterminated string, in which case input continues on the
        next line. Braces inside strings and comments do not count.
        """
        try:
            tokens = scan(source)
        except ScanError as error:
            return error.msg == "unterminated string"

        depth = 0
        for token in tokens:
            if token.type is TokenType.LEFT_BRACE:
                depth += 1
            elif token.type is TokenType.RIGHT_BRACE:
                depth -= 1
        return depth > 0

    def onecmd(self, line):
        """Dispatches line to a do_* method only if it is exactly a command name, so that gox source starting with
        one (e.g. `help = 3;`) still runs.
        """
        if line.strip() in Shell.COMMANDS:
            return super().onecmd(line.strip())
        if not line.strip() and not self._tmp_line:
            return self.emptyline()
        return self.default(line)

    def default(self, line):
        """Executes arbitrary gox source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            source = self._tmp_line + line

            if Shell.is_open(source):
                self._tmp_line = source + "\n"
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if self.ast:
                self.sess.show_ast(source)
            else:
                self.sess.run(source)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the gox interpreter!\n\n"
              "gox is a small dynamically-typed scripting language with C-like syntax, lexical \n"
              "scoping and first-class functions. Statements end with ';' and blocks that span \n"
              "several lines are continued on a '. ' prompt until their braces are closed.\n\n"
              "Try it out by typing 'var name = \"world\";', then 'print \"hello \" + name;'.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
