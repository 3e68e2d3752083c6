"""
Command line front end for the MiniJava scanner and parser.

    minijava lex Factorial.java       # dump the token stream
    minijava parse Factorial.java     # parse and pretty-print the AST

Exit status is 0 when every file was processed without errors, 1 when any
file had lexical or syntax errors and 2 when a file could not be opened.
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from . import __version__
from .lexer import Lexer, DEFAULT_TAB_WIDTH
from .parser import Parser
from .visitor import pretty_print

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERRORS = 1
EXIT_UNREADABLE = 2


def _report(diagnostics) -> None:
    for diagnostic in diagnostics:
        print(str(diagnostic), end="", file=sys.stderr)


def lex_file(path: str, tab_width: int, quiet: bool) -> int:
    """Print the tokens of one file and return its error count."""
    start = time.perf_counter()
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        lexer = Lexer(f, path, tab_width)
        count = 0
        for token in lexer:
            count += 1
            if not quiet:
                print(token)

    elapsed = time.perf_counter() - start
    _report(lexer.get_diagnostics())
    print(f"{path}: {count} tokens, {len(lexer.errors)} error(s) in {elapsed:.3f}s",
          file=sys.stderr)
    return len(lexer.errors)


def parse_file(path: str, tab_width: int, quiet: bool) -> int:
    """Parse one file, print its AST and return its error count."""
    start = time.perf_counter()
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        lexer = Lexer(f, path, tab_width)
        parser = Parser(lexer)
        program = parser.parse_program()

    elapsed = time.perf_counter() - start
    if not quiet:
        print(pretty_print(program))

    _report(lexer.get_diagnostics())
    _report(parser.errors)

    errors = len(lexer.errors) + parser.error_count
    print(f"{path}: {parser.error_count} syntax error(s), {len(lexer.errors)} lexical "
          f"error(s) in {elapsed:.3f}s", file=sys.stderr)
    return errors


COMMANDS = {
    "lex": lex_file,
    "parse": parse_file,
}


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minijava",
        description="MiniJava scanner and parser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    minijava lex Factorial.java              # Print one token per line
    minijava parse --quiet programs/*.java   # Report syntax errors only
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (("lex", "Tokenize source files"),
                            ("parse", "Parse source files and pretty-print the AST")):
        command = subparsers.add_parser(name, help=help_text)
        command.add_argument("files", nargs="+", metavar="FILE",
                             help="MiniJava source file")
        command.add_argument("--tab-width", type=int, default=DEFAULT_TAB_WIDTH,
                             help=f"Columns a tab advances (default: {DEFAULT_TAB_WIDTH})")
        command.add_argument("-q", "--quiet", action="store_true",
                             help="Do not print tokens or the AST")
        command.add_argument("-v", "--verbose", action="store_true",
                             help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the minijava command"""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.tab_width < 1:
        parser.error("--tab-width must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    handler = COMMANDS[args.command]
    status = EXIT_OK
    for path in args.files:
        try:
            if handler(path, args.tab_width, args.quiet):
                status = max(status, EXIT_ERRORS)
        except OSError as e:
            logger.error("cannot open %s: %s", path, e.strerror or e)
            status = EXIT_UNREADABLE

    return status


if __name__ == "__main__":
    sys.exit(main())
