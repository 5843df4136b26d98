"""Exline AST: parse-time node definitions."""

from __future__ import annotations

from dataclasses import dataclass


# ============================================================
# POSITION
# ============================================================


@dataclass
class Pos:
    """Source position, 1-indexed."""

    line: int
    col: int


# ============================================================
# TYPES
# ============================================================


@dataclass
class Type:
    """Base for all type nodes."""

    pos: Pos

    def display(self) -> str:
        raise NotImplementedError


@dataclass
class IntType(Type):
    """Int."""

    def display(self) -> str:
        return "Int"


@dataclass
class StringType(Type):
    """String."""

    def display(self) -> str:
        return "String"


@dataclass
class VoidType(Type):
    """void."""

    def display(self) -> str:
        return "void"


@dataclass
class CustomType(Type):
    """User-defined class name."""

    name: str

    def display(self) -> str:
        return self.name


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass
class Expr:
    """Base for all expressions."""

    pos: Pos


@dataclass
class IntegerLiteral(Expr):
    """Integer literal."""

    value: int


@dataclass
class StringLiteral(Expr):
    """String literal, taken verbatim."""

    value: str


@dataclass
class StringInterpolation(Expr):
    """String literal containing a #{name} marker."""

    template: str


@dataclass
class Identifier(Expr):
    """Variable reference."""

    name: str


@dataclass
class Binary(Expr):
    """left op right, op one of + - * / ==."""

    op: str
    left: Expr
    right: Expr


@dataclass
class FunctionCall(Expr):
    """name(args)."""

    name: str
    args: list[Expr]


@dataclass
class MethodCall(Expr):
    """receiver.method(args)."""

    receiver: Expr
    method: str
    args: list[Expr]


@dataclass
class FieldAccess(Expr):
    """receiver.field."""

    receiver: Expr
    field: str


@dataclass
class ObjectCreation(Expr):
    """ClassName.new(args); args are parsed but never used."""

    class_name: str
    args: list[Expr]


# ============================================================
# DECLARATION PARTS
# ============================================================


@dataclass
class Param:
    """Parameter: name: Type."""

    pos: Pos
    name: str
    typ: Type


@dataclass
class Field:
    """Class field: Type name."""

    pos: Pos
    name: str
    typ: Type


@dataclass
class Method:
    """def name(params): RetType ... end, inside a class."""

    pos: Pos
    name: str
    params: list[Param]
    ret: Type
    body: list[Stmt]


@dataclass
class MethodSignature:
    """def name(params): RetType, inside an interface."""

    pos: Pos
    name: str
    params: list[Param]
    ret: Type


# ============================================================
# STATEMENTS
# ============================================================


@dataclass
class Stmt:
    """Base for all statements."""

    pos: Pos


@dataclass
class VariableDeclaration(Stmt):
    """Type name = value."""

    name: str
    typ: Type
    value: Expr


@dataclass
class FunctionDefinition(Stmt):
    """def name(params) -> RetType ... end."""

    name: str
    params: list[Param]
    ret: Type
    body: list[Stmt]


@dataclass
class If(Stmt):
    """if cond ... else ... end."""

    cond: Expr
    then_body: list[Stmt]
    else_body: list[Stmt] | None


@dataclass
class ClassDefinition(Stmt):
    """class Name implements Iface ... end."""

    name: str
    implements: str | None
    fields: list[Field]
    methods: list[Method]


@dataclass
class InterfaceDefinition(Stmt):
    """interface Name ... end."""

    name: str
    methods: list[MethodSignature]


@dataclass
class Assignment(Stmt):
    """target = value."""

    target: Expr
    value: Expr


@dataclass
class ExpressionStatement(Stmt):
    """Bare expression as statement."""

    expr: Expr


@dataclass
class Program:
    """Top-level program, ordered statements."""

    statements: list[Stmt]
