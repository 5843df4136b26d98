"""Exline emitter: converts AST back into Exline textual syntax.

Total over the node types in `exline/ast.py`: a new node type needs a case
here too. Arguments are written space separated, the only form the grammar
accepts.
"""

from __future__ import annotations

from .ast import (
    Assignment,
    Binary,
    ClassDefinition,
    Expr,
    ExpressionStatement,
    FieldAccess,
    FunctionCall,
    FunctionDefinition,
    Identifier,
    If,
    IntegerLiteral,
    InterfaceDefinition,
    Method,
    MethodCall,
    MethodSignature,
    ObjectCreation,
    Param,
    Program,
    Stmt,
    StringInterpolation,
    StringLiteral,
    VariableDeclaration,
)


def to_source(program: Program) -> str:
    """Render a `Program` back into Exline source text."""
    return _Emitter().emit_program(program)


class _Emitter:
    _INDENT: str = "    "

    # Expression precedence (higher binds tighter)
    _PREC_EQUALITY: int = 1
    _PREC_SUM: int = 2
    _PREC_PRODUCT: int = 3
    _PREC_PRIMARY: int = 4

    _BIN_PREC: dict[str, int] = {
        "==": _PREC_EQUALITY,
        "+": _PREC_SUM,
        "-": _PREC_SUM,
        "*": _PREC_PRODUCT,
        "/": _PREC_PRODUCT,
    }

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._indent_level: int = 0

    # ── Public ──────────────────────────────────────────────

    def emit_program(self, program: Program) -> str:
        self._lines = []
        self._indent_level = 0
        for stmt in program.statements:
            self._emit_stmt(stmt)
        text = "\n".join(self._lines)
        if text == "":
            return ""
        return text + "\n"

    # ── Lines / Blocks ──────────────────────────────────────

    def _emit_line(self, line: str) -> None:
        self._lines.append(self._INDENT * self._indent_level + line)

    def _emit_stmt_block(self, stmts: list[Stmt]) -> None:
        self._indent_level += 1
        for stmt in stmts:
            self._emit_stmt(stmt)
        self._indent_level -= 1

    # ── Stmts ───────────────────────────────────────────────

    def _emit_stmt(self, stmt: Stmt) -> None:
        if isinstance(stmt, VariableDeclaration):
            self._emit_line(
                f"{stmt.typ.display()} {stmt.name} = {self._render_expr(stmt.value)}"
            )
            return
        if isinstance(stmt, Assignment):
            self._emit_line(
                f"{self._render_expr(stmt.target)} = {self._render_expr(stmt.value)}"
            )
            return
        if isinstance(stmt, ExpressionStatement):
            self._emit_line(self._render_expr(stmt.expr))
            return
        if isinstance(stmt, FunctionDefinition):
            params = self._render_params(stmt.params)
            self._emit_line(f"def {stmt.name}({params}) -> {stmt.ret.display()}")
            self._emit_stmt_block(stmt.body)
            self._emit_line("end")
            return
        if isinstance(stmt, If):
            self._emit_line("if " + self._render_expr(stmt.cond))
            self._emit_stmt_block(stmt.then_body)
            if stmt.else_body is not None:
                self._emit_line("else")
                self._emit_stmt_block(stmt.else_body)
            self._emit_line("end")
            return
        if isinstance(stmt, ClassDefinition):
            self._emit_class(stmt)
            return
        if isinstance(stmt, InterfaceDefinition):
            self._emit_line("interface " + stmt.name)
            self._indent_level += 1
            for sig in stmt.methods:
                self._emit_line(self._render_signature(sig))
            self._indent_level -= 1
            self._emit_line("end")
            return
        raise TypeError("unhandled stmt type")

    def _emit_class(self, decl: ClassDefinition) -> None:
        header = "class " + decl.name
        if decl.implements is not None:
            header += " implements " + decl.implements
        self._emit_line(header)
        self._indent_level += 1
        for field in decl.fields:
            self._emit_line(f"{field.typ.display()} {field.name}")
        for method in decl.methods:
            self._emit_method(method)
        self._indent_level -= 1
        self._emit_line("end")

    def _emit_method(self, method: Method) -> None:
        self._emit_line(self._render_signature(method))
        self._emit_stmt_block(method.body)
        self._emit_line("end")

    def _render_signature(self, sig: Method | MethodSignature) -> str:
        params = self._render_params(sig.params)
        return f"def {sig.name}({params}): {sig.ret.display()}"

    def _render_params(self, params: list[Param]) -> str:
        return " ".join(f"{p.name}: {p.typ.display()}" for p in params)

    # ── Exprs ───────────────────────────────────────────────

    def _render_args(self, args: list[Expr]) -> str:
        return " ".join(self._render_expr(a) for a in args)

    def _render_expr(self, expr: Expr, min_prec: int = 0) -> str:
        if isinstance(expr, IntegerLiteral):
            return str(expr.value)
        if isinstance(expr, StringLiteral):
            return '"' + expr.value + '"'
        if isinstance(expr, StringInterpolation):
            return '"' + expr.template + '"'
        if isinstance(expr, Identifier):
            return expr.name
        if isinstance(expr, Binary):
            prec = self._BIN_PREC[expr.op]
            left = self._render_expr(expr.left, prec)
            right = self._render_expr(expr.right, prec + 1)
            text = f"{left} {expr.op} {right}"
            if prec < min_prec:
                return "(" + text + ")"
            return text
        if isinstance(expr, FunctionCall):
            return f"{expr.name}({self._render_args(expr.args)})"
        if isinstance(expr, MethodCall):
            recv = self._render_expr(expr.receiver, self._PREC_PRIMARY)
            return f"{recv}.{expr.method}({self._render_args(expr.args)})"
        if isinstance(expr, FieldAccess):
            recv = self._render_expr(expr.receiver, self._PREC_PRIMARY)
            return f"{recv}.{expr.field}"
        if isinstance(expr, ObjectCreation):
            return f"{expr.class_name}.new({self._render_args(expr.args)})"
        raise TypeError("unhandled expr type")
