"""Token and AST dumps behind the CLI debug switches."""

from __future__ import annotations

from dataclasses import fields, is_dataclass

from .ast import Pos, Program, Type
from .tokens import Token


def dump_tokens(tokens: list[Token]) -> str:
    """One line per token: index, type, value and position."""
    lines: list[str] = []
    for i, tok in enumerate(tokens):
        lines.append(f"{i}: {tok.type} {tok.value!r} {tok.line}:{tok.col}")
    return "\n".join(lines) + "\n"


def dump_ast(program: Program) -> str:
    """Indented tree of AST nodes, positions shown after each node name."""
    lines: list[str] = []
    _dump_node(program, 0, "", lines)
    return "\n".join(lines) + "\n"


def _dump_node(node: object, depth: int, label: str, lines: list[str]) -> None:
    indent = "  " * depth
    prefix = indent + (label + ": " if label else "")
    if isinstance(node, Type):
        lines.append(prefix + node.display())
        return
    if isinstance(node, list):
        if not node:
            lines.append(prefix + "[]")
            return
        lines.append(prefix + "[")
        for item in node:
            _dump_node(item, depth + 1, "", lines)
        lines.append(indent + "]")
        return
    if not is_dataclass(node):
        lines.append(prefix + repr(node))
        return
    header = type(node).__name__
    pos = getattr(node, "pos", None)
    if isinstance(pos, Pos):
        header += f" @{pos.line}:{pos.col}"
    lines.append(prefix + header)
    for f in fields(node):
        if f.name == "pos":
            continue
        _dump_node(getattr(node, f.name), depth + 1, f.name, lines)
