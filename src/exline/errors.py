"""Exline diagnostics: one flat taxonomy for every stage."""

from __future__ import annotations

from .ast import Pos


class ExlineError(Exception):
    """Base error for Exline tokenizing, parsing and evaluation."""

    def __init__(self, msg: str, pos: Pos | None = None):
        if pos is None:
            super().__init__(msg)
        else:
            super().__init__(f"{msg} at line {pos.line} col {pos.col}")
        self.msg = msg
        self.pos = pos


# ============================================================
# Runtime errors
# ============================================================


class ExlineRuntimeError(ExlineError):
    """Raised while evaluating; aborts the whole program."""


class TypeMismatch(ExlineRuntimeError):
    """A value's kind does not fit the declared type or operator."""


class ArityError(ExlineRuntimeError):
    """Wrong number of arguments to a function or method."""


class UndefinedVariable(ExlineRuntimeError):
    pass


class UndefinedFunction(ExlineRuntimeError):
    pass


class ClassNotFound(ExlineRuntimeError):
    pass


class MethodNotFound(ExlineRuntimeError):
    pass


class FieldNotFound(ExlineRuntimeError):
    pass


class UnsupportedAssignmentTarget(ExlineRuntimeError):
    """Only bare identifiers can be assigned."""


class DivisionByZero(ExlineRuntimeError):
    pass


class NotAnObject(ExlineRuntimeError):
    """Method call or field access on a non-object value."""
