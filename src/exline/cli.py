"""Exline CLI: run .exl files or start a REPL."""

from __future__ import annotations

import logging
import os
import sys

from . import __version__, emit, parse_tokens
from .debug import dump_ast, dump_tokens
from .errors import ExlineRuntimeError
from .parse import ParseError
from .runtime import run
from .tokens import LexError, tokenize

logger = logging.getLogger(__name__)

EXIT_USAGE = 64
EXIT_SOFTWARE = 70
EXIT_IOERR = 74


USAGE: str = """\
exline [OPTIONS] [FILE]

Run an Exline (.exl) program, or start a REPL when FILE is omitted.

Options:
  --strict        Require a newline after every statement
  --emit          Print the parsed program as canonical source instead of running it
  --debug-tokens  Print the token list before parsing (also: DEBUG_TOKENS=1)
  --debug-ast     Print the syntax tree before running (also: DEBUG_AST=1)
  --verbose       Log interpreter activity to stderr
  --help          Show this help message
"""


class _Options:
    def __init__(self) -> None:
        self.strict = False
        self.emit = False
        self.debug_tokens = "DEBUG_TOKENS" in os.environ
        self.debug_ast = "DEBUG_AST" in os.environ
        self.verbose = False


def run_source(source: str, opts: _Options) -> int:
    """Tokenize, parse and run one source unit. Returns an exit code."""
    try:
        tokens = tokenize(source)
    except LexError as e:
        print("exline: lex error: " + str(e), file=sys.stderr)
        return EXIT_SOFTWARE
    if opts.debug_tokens:
        sys.stdout.write("Tokens:\n" + dump_tokens(tokens))

    try:
        program = parse_tokens(tokens, strict=opts.strict)
    except ParseError as e:
        print("exline: parse error: " + str(e), file=sys.stderr)
        return EXIT_SOFTWARE
    if opts.debug_ast:
        sys.stdout.write("AST:\n" + dump_ast(program))
    if opts.emit:
        sys.stdout.write(emit(program))
        return 0

    try:
        run(program, stdout=sys.stdout)
    except ExlineRuntimeError as e:
        print("exline: runtime error: " + str(e), file=sys.stderr)
        return EXIT_SOFTWARE
    return 0


def repl(opts: _Options) -> int:
    print(f"Exline v{__version__} REPL")
    print("Type 'exit' to quit")
    while True:
        sys.stdout.write("> ")
        sys.stdout.flush()
        line = sys.stdin.readline()
        if line == "":
            return 0
        line = line.strip()
        if line == "exit":
            return 0
        if line == "":
            continue
        # Each line is its own program with a fresh environment.
        run_source(line, opts)


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    opts = _Options()
    filepath: str = ""
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg == "--strict":
            opts.strict = True
        elif arg == "--emit":
            opts.emit = True
        elif arg == "--debug-tokens":
            opts.debug_tokens = True
        elif arg == "--debug-ast":
            opts.debug_ast = True
        elif arg == "--verbose":
            opts.verbose = True
        elif arg.startswith("-"):
            print("exline: unknown flag '" + arg + "'", file=sys.stderr)
            return EXIT_USAGE
        elif filepath == "":
            filepath = arg
        else:
            print("exline: unexpected argument '" + arg + "'", file=sys.stderr)
            return EXIT_USAGE
        i += 1

    if opts.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(name)s: %(message)s",
        )

    if filepath == "":
        return repl(opts)

    try:
        with open(filepath, "rb") as f:
            raw = f.read()
    except FileNotFoundError:
        print("exline: " + filepath + ": No such file or directory", file=sys.stderr)
        return EXIT_IOERR
    except OSError as e:
        print("exline: " + filepath + ": " + str(e), file=sys.stderr)
        return EXIT_IOERR
    try:
        source = raw.decode("utf-8")
    except ValueError:
        print("exline: " + filepath + ": invalid utf-8", file=sys.stderr)
        return EXIT_IOERR

    logger.debug("running %s", filepath)
    return run_source(source, opts)


if __name__ == "__main__":
    sys.exit(main())
