"""Exline parser and interpreter: public API."""

from __future__ import annotations

import logging
from typing import TextIO

from .ast import Program
from .emit import to_source
from .errors import ExlineError as ExlineError
from .errors import ExlineRuntimeError as ExlineRuntimeError
from .parse import ParseError as ParseError, Parser
from .runtime import Evaluator, run as run_program
from .tokens import LexError as LexError, Token, tokenize as tokenize

__version__ = "0.2.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def parse(source: str, *, strict: bool = False) -> Program:
    """Parse Exline source code into a Program AST."""
    tokens = tokenize(source)
    return Parser(tokens, strict_terminators=strict).parse_program()


def parse_tokens(tokens: list[Token], *, strict: bool = False) -> Program:
    """Parse an already tokenized source."""
    return Parser(tokens, strict_terminators=strict).parse_program()


def run(
    source: str, *, stdout: TextIO | None = None, strict: bool = False
) -> Evaluator:
    """Parse and run Exline source; returns the evaluator for inspection."""
    program = parse(source, strict=strict)
    return run_program(program, stdout=stdout)


def emit(program: Program) -> str:
    """Emit a Program AST as Exline source text."""
    return to_source(program)
