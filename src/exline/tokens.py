"""Exline tokenizer: lexes source into a flat token list."""

from __future__ import annotations

from .ast import Pos
from .errors import ExlineError


# Token type constants
TK_INTEGER = "INTEGER"
TK_STRING = "STRING"
TK_IDENT = "IDENT"
TK_OP = "OP"
TK_NEWLINE = "NEWLINE"
TK_EOF = "EOF"

KEYWORDS: set[str] = {
    "Int",
    "String",
    "def",
    "end",
    "if",
    "else",
    "class",
    "interface",
    "implements",
    "void",
}

# Multi-character operators, matched before single characters
MULTI_OPS: list[str] = [
    "->",
    "==",
    "#{",
]

SINGLE_OPS: set[str] = {
    "+",
    "-",
    "*",
    "/",
    "=",
    "(",
    ")",
    ":",
    ".",
    "}",
}

INT64_MAX = 2**63 - 1


class LexError(ExlineError):
    """Error during tokenization."""

    def __init__(self, msg: str, line: int, col: int):
        super().__init__(msg, Pos(line, col))
        self.line: int = line
        self.col: int = col


class Token:
    """A token with type, value, and position."""

    def __init__(self, type_: str, value: str, line: int, col: int):
        self.type: str = type_
        self.value: str = value
        self.line: int = line
        self.col: int = col

    def __repr__(self) -> str:
        return (
            "Token("
            + self.type
            + ", "
            + repr(self.value)
            + ", "
            + str(self.line)
            + ", "
            + str(self.col)
            + ")"
        )


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def _is_alpha(c: str) -> bool:
    return c.isalpha() or c == "_"


def _is_alnum(c: str) -> bool:
    return c.isalnum() or c == "_"


def tokenize(source: str) -> list[Token]:
    """Tokenize Exline source into a flat list ending with TK_EOF."""
    tokens: list[Token] = []
    pos = 0
    line = 1
    col = 1
    length = len(source)

    while pos < length:
        c = source[pos]

        # Whitespace (newlines are significant)
        if c == " " or c == "\t" or c == "\r":
            pos += 1
            col += 1
            continue

        if c == "\n":
            tokens.append(Token(TK_NEWLINE, "\n", line, col))
            pos += 1
            line += 1
            col = 1
            continue

        # Line comment: # (but not #{)
        if c == "#" and not (pos + 1 < length and source[pos + 1] == "{"):
            while pos < length and source[pos] != "\n":
                pos += 1
                col += 1
            continue

        start_pos = pos
        start_line = line
        start_col = col

        # Integer literal
        if _is_digit(c):
            while pos < length and _is_digit(source[pos]):
                pos += 1
                col += 1
            raw = source[start_pos:pos]
            if int(raw) > INT64_MAX:
                raise LexError("invalid number: " + raw, start_line, start_col)
            tokens.append(Token(TK_INTEGER, raw, start_line, start_col))
            continue

        # String literal: "..." (raw, may span lines)
        if c == '"':
            pos += 1
            col += 1
            while pos < length and source[pos] != '"':
                if source[pos] == "\n":
                    line += 1
                    col = 1
                else:
                    col += 1
                pos += 1
            if pos >= length:
                raise LexError("unterminated string", start_line, start_col)
            value = source[start_pos + 1 : pos]
            pos += 1  # skip closing "
            col += 1
            tokens.append(Token(TK_STRING, value, start_line, start_col))
            continue

        # Identifier or keyword
        if _is_alpha(c):
            while pos < length and _is_alnum(source[pos]):
                pos += 1
                col += 1
            word = source[start_pos:pos]
            if word in KEYWORDS:
                tokens.append(Token(word, word, start_line, start_col))
            else:
                tokens.append(Token(TK_IDENT, word, start_line, start_col))
            continue

        # Multi-character operators
        matched = False
        for op in MULTI_OPS:
            op_len = len(op)
            if pos + op_len <= length and source[pos : pos + op_len] == op:
                tokens.append(Token(TK_OP, op, start_line, start_col))
                pos += op_len
                col += op_len
                matched = True
                break
        if matched:
            continue

        # Single-character operators
        if c in SINGLE_OPS:
            tokens.append(Token(TK_OP, c, start_line, start_col))
            pos += 1
            col += 1
            continue

        raise LexError("unexpected character: " + repr(c), line, col)

    tokens.append(Token(TK_EOF, "", line, col))
    return tokens
