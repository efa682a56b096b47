"""Runs gox source files or the interactive shell. Also uses the error handling context manager. Called from the gox
console script.
"""

import argparse

from gox.lang.error import ErrorHandler
from gox.lang.session import Session
from gox.lang.shell import Shell


def main(argv=None):
    """Runs gox interpreter. Called from gox console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="gox", description="Tree-walking interpreter for the gox language.")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--ast", action="store_true", help="print the parsed syntax tree instead of running")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            if args.ast:
                sess.show_ast(sess.load())
            else:
                sess.run_file()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True), ast=args.ast).cmdloop()
