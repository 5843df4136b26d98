"""Exline runtime: tree-walking evaluation of a parsed program.

There is no return statement. Executing a statement may yield a carried
value (every expression statement does); the first one inside a block stops
that block and becomes its result. Function and method bodies therefore
return the value of their first expression statement, or the zero value of
the declared return type when none runs.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

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
    MethodCall,
    ObjectCreation,
    Param,
    Program,
    Stmt,
    StringInterpolation,
    StringLiteral,
    Type,
    VariableDeclaration,
)
from .env import Environment
from .errors import (
    ArityError,
    ClassNotFound,
    DivisionByZero,
    ExlineRuntimeError,
    FieldNotFound,
    MethodNotFound,
    NotAnObject,
    TypeMismatch,
    UndefinedFunction,
    UndefinedVariable,
    UnsupportedAssignmentTarget,
)
from .values import (
    Value,
    VFunc,
    VInt,
    VObject,
    VString,
    describe,
    is_compatible,
    zero_value,
)

logger = logging.getLogger(__name__)

_OP_VERBS: dict[str, str] = {
    "+": "add",
    "-": "subtract",
    "*": "multiply",
    "/": "divide",
}


def interpolate(template: str, env: Environment) -> str:
    """Replace the first #{name} marker with the current value of name.

    An unknown name leaves the text untouched; later markers are never
    looked at.
    """
    start = template.find("#{")
    if start == -1:
        return template
    end = template.find("}", start + 2)
    if end == -1:
        return template
    value = env.get_variable(template[start + 2 : end])
    if value is None:
        return template
    return template[:start] + value.to_string() + template[end + 1 :]


def _int_div_trunc(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q


class Evaluator:
    """Tree-walking interpreter over one Environment; print goes to stdout."""

    def __init__(
        self, env: Environment | None = None, *, stdout: TextIO | None = None
    ):
        self.env = env if env is not None else Environment()
        self._stdout = stdout

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    # ---- Running -----------------------------------------------------------

    def interpret(self, program: Program) -> None:
        """Run top-level statements in order; the first error aborts."""
        for st in program.statements:
            self.execute(st)

    def _execute_block(self, stmts: list[Stmt]) -> Value | None:
        for st in stmts:
            carried = self.execute(st)
            if carried is not None:
                return carried
        return None

    # ---- Statements --------------------------------------------------------

    def execute(self, st: Stmt) -> Value | None:
        """Execute one statement, returning its carried value if any."""
        if isinstance(st, VariableDeclaration):
            val = self.evaluate(st.value)
            if not is_compatible(st.typ, val):
                raise TypeMismatch(
                    f"type mismatch: expected {st.typ.display()}, got {describe(val)}",
                    st.pos,
                )
            self.env.define_variable(st.name, val)
            return None

        if isinstance(st, ExpressionStatement):
            return self.evaluate(st.expr)

        if isinstance(st, If):
            cond = self.evaluate(st.cond)
            if cond.is_truthy():
                return self._execute_block(st.then_body)
            if st.else_body is not None:
                return self._execute_block(st.else_body)
            return None

        if isinstance(st, Assignment):
            val = self.evaluate(st.value)
            if not isinstance(st.target, Identifier):
                raise UnsupportedAssignmentTarget(
                    "only simple variable assignments are supported", st.pos
                )
            self.env.define_variable(st.target.name, val)
            return None

        if isinstance(st, FunctionDefinition):
            logger.debug("define function %s", st.name)
            self.env.define_function(st.name, VFunc(st.params, st.ret, st.body))
            return None

        if isinstance(st, ClassDefinition):
            logger.debug("define class %s", st.name)
            self.env.define_class(st.name, st)
            return None

        if isinstance(st, InterfaceDefinition):
            logger.debug("define interface %s", st.name)
            self.env.define_interface(st.name, st)
            return None

        raise ExlineRuntimeError("unsupported statement", st.pos)

    # ---- Expressions -------------------------------------------------------

    def evaluate(self, expr: Expr) -> Value:
        if isinstance(expr, IntegerLiteral):
            return VInt(expr.value)

        if isinstance(expr, StringLiteral):
            return VString(expr.value)

        if isinstance(expr, StringInterpolation):
            return VString(interpolate(expr.template, self.env))

        if isinstance(expr, Identifier):
            val = self.env.get_variable(expr.name)
            if val is None:
                raise UndefinedVariable(f"undefined variable: {expr.name}", expr.pos)
            return val

        if isinstance(expr, Binary):
            left = self.evaluate(expr.left)
            right = self.evaluate(expr.right)
            return self._eval_binary(expr, left, right)

        if isinstance(expr, FunctionCall):
            return self._call_function(expr)

        if isinstance(expr, MethodCall):
            return self._call_method(expr)

        if isinstance(expr, FieldAccess):
            obj = self.evaluate(expr.receiver)
            if not isinstance(obj, VObject):
                raise NotAnObject("cannot access field on non-object value", expr.pos)
            if expr.field not in obj.fields:
                raise FieldNotFound(f"field {expr.field} not found", expr.pos)
            return obj.fields[expr.field]

        if isinstance(expr, ObjectCreation):
            decl = self.env.get_class(expr.class_name)
            if decl is None:
                raise ClassNotFound(f"class {expr.class_name} not found", expr.pos)
            # Constructor arguments are accepted by the grammar but not used.
            fields = {f.name: zero_value(f.typ) for f in decl.fields}
            return VObject(expr.class_name, fields)

        raise ExlineRuntimeError("unsupported expression", expr.pos)

    def _eval_binary(self, expr: Binary, left: Value, right: Value) -> Value:
        """Operands of the wrong kind for + - * / raise TypeMismatch."""
        op = expr.op
        if op == "==":
            if isinstance(left, VInt) and isinstance(right, VInt):
                return VInt(1 if left.value == right.value else 0)
            if isinstance(left, VString) and isinstance(right, VString):
                return VInt(1 if left.value == right.value else 0)
            return VInt(0)

        if op == "+" and isinstance(left, VString) and isinstance(right, VString):
            return VString(left.value + right.value)

        if not (isinstance(left, VInt) and isinstance(right, VInt)):
            raise TypeMismatch(
                f"cannot {_OP_VERBS.get(op, op)} {describe(left)} and {describe(right)}",
                expr.pos,
            )
        a = left.value
        b = right.value
        if op == "+":
            return VInt(a + b)
        if op == "-":
            return VInt(a - b)
        if op == "*":
            return VInt(a * b)
        if op == "/":
            if b == 0:
                raise DivisionByZero("division by zero", expr.pos)
            return VInt(_int_div_trunc(a, b))
        raise ExlineRuntimeError(f"unsupported operator '{op}'", expr.pos)

    # ---- Calls -------------------------------------------------------------

    def _print(self, expr: FunctionCall) -> Value:
        if len(expr.args) != 1:
            raise ArityError("print() takes exactly one argument", expr.pos)
        value = self.evaluate(expr.args[0])
        self.stdout.write(value.to_string() + "\n")
        return VString("")

    def _call_function(self, expr: FunctionCall) -> Value:
        if expr.name == "print":
            return self._print(expr)
        fn = self.env.get_function(expr.name)
        if fn is None:
            raise UndefinedFunction(f"undefined function: {expr.name}", expr.pos)
        if len(expr.args) != len(fn.params):
            raise ArityError(
                f"function {expr.name} expects {len(fn.params)} arguments, "
                f"got {len(expr.args)}",
                expr.pos,
            )
        logger.debug("call %s at depth %d", expr.name, self.env.depth)
        return self._invoke(
            fn.params, expr.args, fn.ret, fn.body, this=None, check_args=True
        )

    def _call_method(self, expr: MethodCall) -> Value:
        receiver = self.evaluate(expr.receiver)
        if not isinstance(receiver, VObject):
            raise NotAnObject("cannot call method on non-object value", expr.pos)
        decl = self.env.get_class(receiver.class_name)
        if decl is None:
            raise ClassNotFound(f"class {receiver.class_name} not found", expr.pos)
        method = next((m for m in decl.methods if m.name == expr.method), None)
        if method is None:
            raise MethodNotFound(
                f"method {expr.method} not found in class {receiver.class_name}",
                expr.pos,
            )
        if len(expr.args) != len(method.params):
            raise ArityError(
                f"method {expr.method} expects {len(method.params)} arguments, "
                f"got {len(expr.args)}",
                expr.pos,
            )
        logger.debug(
            "call %s.%s at depth %d", receiver.class_name, expr.method, self.env.depth
        )
        return self._invoke(
            method.params,
            expr.args,
            method.ret,
            method.body,
            this=receiver.copy(),
            check_args=False,
        )

    def _invoke(
        self,
        params: list[Param],
        args: list[Expr],
        ret: Type,
        body: list[Stmt],
        *,
        this: VObject | None,
        check_args: bool,
    ) -> Value:
        """Run a body in a new frame.

        Arguments are evaluated inside the frame, one at a time, right before
        their parameter is bound: a later argument sees `this` and the
        parameters bound so far.
        """
        self.env.push_frame()
        try:
            if this is not None:
                self.env.define_variable("this", this)
            for param, arg in zip(params, args):
                val = self.evaluate(arg)
                if check_args and not is_compatible(param.typ, val):
                    raise TypeMismatch(
                        f"argument type mismatch for parameter {param.name}: "
                        f"expected {param.typ.display()}, got {describe(val)}",
                        arg.pos,
                    )
                self.env.define_variable(param.name, val)
            result = self._execute_block(body)
        finally:
            self.env.pop_frame()
        if result is None:
            return zero_value(ret)
        return result


def run(program: Program, *, stdout: TextIO | None = None) -> Evaluator:
    """Interpret a parsed program with a fresh environment."""
    evaluator = Evaluator(stdout=stdout)
    evaluator.interpret(program)
    return evaluator
