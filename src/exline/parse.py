"""Exline parser: recursive descent, one method per grammar production."""

from __future__ import annotations

from .ast import (
    Assignment,
    Binary,
    ClassDefinition,
    CustomType,
    Expr,
    ExpressionStatement,
    Field,
    FieldAccess,
    FunctionCall,
    FunctionDefinition,
    Identifier,
    If,
    IntegerLiteral,
    InterfaceDefinition,
    IntType,
    Method,
    MethodCall,
    MethodSignature,
    ObjectCreation,
    Param,
    Pos,
    Program,
    Stmt,
    StringInterpolation,
    StringLiteral,
    StringType,
    Type,
    VariableDeclaration,
    VoidType,
)
from .errors import ExlineError
from .tokens import (
    TK_EOF,
    TK_IDENT,
    TK_INTEGER,
    TK_NEWLINE,
    TK_OP,
    TK_STRING,
    Token,
)

TYPE_KEYWORDS: set[str] = {"Int", "String", "void"}

RETURN_SEPARATORS: set[str] = {"->", ":"}


class ParseError(ExlineError):
    """Parse error with location info."""

    def __init__(self, msg: str, line: int, col: int):
        super().__init__(msg, Pos(line, col))
        self.line: int = line
        self.col: int = col


class Parser:
    """Recursive descent parser for Exline.

    Statement terminators are lenient unless strict_terminators is set: a
    statement, block header or 'end' not followed by a newline or the end of
    input is accepted as is.
    """

    def __init__(self, tokens: list[Token], *, strict_terminators: bool = False):
        self.tokens: list[Token] = tokens
        self.pos: int = 0
        self.strict_terminators: bool = strict_terminators

    # ── Helpers ──────────────────────────────────────────────

    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int) -> Token:
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return self.tokens[len(self.tokens) - 1]
        return self.tokens[idx]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.type != TK_EOF:
            self.pos += 1
        return tok

    def at(self, value: str) -> bool:
        tok = self.current()
        return tok.value == value and tok.type not in (TK_STRING, TK_IDENT)

    def at_type(self, type_: str) -> bool:
        return self.current().type == type_

    def at_ident(self) -> bool:
        return self.current().type == TK_IDENT

    def at_end(self) -> bool:
        return self.current().type == TK_EOF

    def expect(self, value: str) -> Token:
        if not self.at(value):
            raise self.error("expected '" + value + "', got " + self._describe())
        return self.advance()

    def expect_ident(self, what: str) -> Token:
        if not self.at_ident():
            raise self.error("expected " + what + ", got " + self._describe())
        return self.advance()

    def error(self, msg: str) -> ParseError:
        tok = self.current()
        return ParseError(msg, tok.line, tok.col)

    def _describe(self) -> str:
        tok = self.current()
        if tok.type == TK_EOF:
            return "end of input"
        if tok.type == TK_NEWLINE:
            return "newline"
        if tok.type == TK_STRING:
            return '"' + tok.value + '"'
        return "'" + tok.value + "'"

    def _pos(self) -> Pos:
        tok = self.current()
        return Pos(tok.line, tok.col)

    def skip_newlines(self) -> None:
        while self.at_type(TK_NEWLINE):
            self.advance()

    def expect_terminator(self) -> None:
        """Newline or end of input; tolerated when missing unless strict."""
        if self.at_type(TK_NEWLINE):
            self.advance()
            return
        if self.at_end():
            return
        if self.strict_terminators:
            raise self.error("expected newline, got " + self._describe())

    # ── Top Level ────────────────────────────────────────────

    def parse_program(self) -> Program:
        statements: list[Stmt] = []
        self.skip_newlines()
        while not self.at_end():
            statements.append(self.parse_stmt())
            self.skip_newlines()
        return Program(statements)

    def parse_block(self, *stops: str) -> list[Stmt]:
        """Statements up to (not including) one of the stop keywords."""
        body: list[Stmt] = []
        self.skip_newlines()
        while not self.at_end() and not any(self.at(s) for s in stops):
            body.append(self.parse_stmt())
            self.skip_newlines()
        return body

    def parse_end(self) -> None:
        self.expect("end")
        self.expect_terminator()

    # ── Statements ───────────────────────────────────────────

    def parse_stmt(self) -> Stmt:
        tok = self.current()
        if tok.type in TYPE_KEYWORDS or self._at_custom_declaration():
            return self.parse_declaration()
        if tok.type == "def":
            return self.parse_function_definition()
        if tok.type == "if":
            return self.parse_if()
        if tok.type == "class":
            return self.parse_class_definition()
        if tok.type == "interface":
            return self.parse_interface_definition()
        return self.parse_expr_stmt()

    def _at_custom_declaration(self) -> bool:
        """Capitalized identifier followed by another identifier: 'Person p = ...'."""
        tok = self.current()
        return (
            tok.type == TK_IDENT
            and tok.value[:1].isupper()
            and self.peek(1).type == TK_IDENT
        )

    def parse_declaration(self) -> VariableDeclaration:
        pos = self._pos()
        typ = self.parse_type()
        name_tok = self.expect_ident("variable name")
        if not self.at("="):
            raise self.error("expected '=', got " + self._describe())
        self.advance()
        value = self.parse_expr()
        self.expect_terminator()
        return VariableDeclaration(pos, name_tok.value, typ, value)

    def parse_function_definition(self) -> FunctionDefinition:
        pos = self._pos()
        self.expect("def")
        name_tok = self.expect_ident("function name")
        params = self.parse_param_list()
        ret = self.parse_return_type()
        self.expect_terminator()
        body = self.parse_block("end")
        self.parse_end()
        return FunctionDefinition(pos, name_tok.value, params, ret, body)

    def parse_param_list(self) -> list[Param]:
        """'(' ( name ':' Type )* ')'; anything between params is skipped."""
        self.expect("(")
        params: list[Param] = []
        if self.at(")"):
            self.advance()
            return params
        while True:
            pos = self._pos()
            name_tok = self.expect_ident("parameter name")
            if not self.at(":"):
                raise self.error("expected ':' after parameter name")
            self.advance()
            typ = self.parse_type()
            params.append(Param(pos, name_tok.value, typ))
            if self.at(")"):
                break
            while not self.at_ident() and not self.at(")") and not self.at_end():
                self.advance()
            if self.at(")"):
                break
        self.expect(")")
        return params

    def parse_return_type(self) -> Type:
        tok = self.current()
        if tok.type != TK_OP or tok.value not in RETURN_SEPARATORS:
            raise self.error("expected '->' or ':' before return type")
        self.advance()
        return self.parse_type()

    def parse_if(self) -> If:
        pos = self._pos()
        self.expect("if")
        cond = self.parse_expr()
        self.expect_terminator()
        then_body = self.parse_block("else", "end")
        else_body: list[Stmt] | None = None
        if self.at("else"):
            self.advance()
            self.expect_terminator()
            else_body = self.parse_block("end")
        self.parse_end()
        return If(pos, cond, then_body, else_body)

    def parse_class_definition(self) -> ClassDefinition:
        pos = self._pos()
        self.expect("class")
        name_tok = self.expect_ident("class name")
        implements: str | None = None
        if self.at("implements"):
            self.advance()
            implements = self.expect_ident("interface name after 'implements'").value
        self.expect_terminator()
        fields: list[Field] = []
        methods: list[Method] = []
        self.skip_newlines()
        while not self.at("end") and not self.at_end():
            if self.at("def"):
                methods.append(self.parse_method())
            else:
                fields.append(self.parse_field())
            self.skip_newlines()
        self.parse_end()
        return ClassDefinition(pos, name_tok.value, implements, fields, methods)

    def parse_field(self) -> Field:
        pos = self._pos()
        typ = self.parse_type()
        name_tok = self.expect_ident("field name")
        self.expect_terminator()
        return Field(pos, name_tok.value, typ)

    def parse_method(self) -> Method:
        pos = self._pos()
        self.expect("def")
        name_tok = self.expect_ident("method name")
        params = self.parse_param_list()
        ret = self.parse_return_type()
        self.expect_terminator()
        body = self.parse_block("end")
        self.parse_end()
        return Method(pos, name_tok.value, params, ret, body)

    def parse_interface_definition(self) -> InterfaceDefinition:
        pos = self._pos()
        self.expect("interface")
        name_tok = self.expect_ident("interface name")
        self.expect_terminator()
        methods: list[MethodSignature] = []
        self.skip_newlines()
        while not self.at("end") and not self.at_end():
            methods.append(self.parse_method_signature())
            self.skip_newlines()
        self.parse_end()
        return InterfaceDefinition(pos, name_tok.value, methods)

    def parse_method_signature(self) -> MethodSignature:
        pos = self._pos()
        self.expect("def")
        name_tok = self.expect_ident("method name")
        params = self.parse_param_list()
        ret = self.parse_return_type()
        self.expect_terminator()
        return MethodSignature(pos, name_tok.value, params, ret)

    def parse_expr_stmt(self) -> Stmt:
        """ExprStmt = Expr ( '=' Expr )?"""
        pos = self._pos()
        expr = self.parse_expr()
        if self.at("="):
            self.advance()
            value = self.parse_expr()
            self.expect_terminator()
            return Assignment(pos, expr, value)
        self.expect_terminator()
        return ExpressionStatement(pos, expr)

    # ── Types ────────────────────────────────────────────────

    def parse_type(self) -> Type:
        pos = self._pos()
        tok = self.current()
        if tok.type == "Int":
            self.advance()
            return IntType(pos)
        if tok.type == "String":
            self.advance()
            return StringType(pos)
        if tok.type == "void":
            self.advance()
            return VoidType(pos)
        if tok.type == TK_IDENT:
            self.advance()
            return CustomType(pos, tok.value)
        raise self.error("expected type, got " + self._describe())

    # ── Expressions ──────────────────────────────────────────

    def parse_expr(self) -> Expr:
        return self.parse_equality()

    def parse_equality(self) -> Expr:
        """Equality = Addition ( '==' Addition )*"""
        left = self.parse_addition()
        while self.at("=="):
            self.advance()
            right = self.parse_addition()
            left = Binary(left.pos, "==", left, right)
        return left

    def parse_addition(self) -> Expr:
        """Addition = Multiplication ( ( '+' | '-' ) Multiplication )*"""
        left = self.parse_multiplication()
        while self.at("+") or self.at("-"):
            op = self.advance().value
            right = self.parse_multiplication()
            left = Binary(left.pos, op, left, right)
        return left

    def parse_multiplication(self) -> Expr:
        """Multiplication = Primary ( ( '*' | '/' ) Primary )*"""
        left = self.parse_primary()
        while self.at("*") or self.at("/"):
            op = self.advance().value
            right = self.parse_primary()
            left = Binary(left.pos, op, left, right)
        return left

    def parse_primary(self) -> Expr:
        """Primary = Atom ( '.' IDENT ( '(' Args ')' )? )*"""
        expr = self.parse_atom()
        while self.at("."):
            self.advance()
            name_tok = self.expect_ident("identifier after '.'")
            if not self.at("("):
                expr = FieldAccess(expr.pos, expr, name_tok.value)
                continue
            args = self.parse_arg_list()
            if name_tok.value == "new":
                if not isinstance(expr, Identifier):
                    raise ParseError(
                        "'new' can only be called on class names",
                        name_tok.line,
                        name_tok.col,
                    )
                expr = ObjectCreation(expr.pos, expr.name, args)
            else:
                expr = MethodCall(expr.pos, expr, name_tok.value, args)
        return expr

    def parse_arg_list(self) -> list[Expr]:
        """'(' Expr* ')'; no separator, arguments end where an expression does."""
        self.expect("(")
        args: list[Expr] = []
        while not self.at(")"):
            args.append(self.parse_expr())
        self.expect(")")
        return args

    def parse_atom(self) -> Expr:
        tok = self.current()
        pos = self._pos()

        if tok.type == TK_INTEGER:
            self.advance()
            return IntegerLiteral(pos, int(tok.value))
        if tok.type == TK_STRING:
            self.advance()
            if "#{" in tok.value:
                return StringInterpolation(pos, tok.value)
            return StringLiteral(pos, tok.value)

        if tok.type == TK_IDENT:
            self.advance()
            if self.at("("):
                args = self.parse_arg_list()
                return FunctionCall(pos, tok.value, args)
            return Identifier(pos, tok.value)

        if self.at("("):
            self.advance()
            inner = self.parse_expr()
            self.expect(")")
            return inner

        raise self.error("expected expression, got " + self._describe())
