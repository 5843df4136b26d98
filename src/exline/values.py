"""Exline runtime values, zero values and the type compatibility rule."""

from __future__ import annotations

from dataclasses import dataclass, field

from .ast import CustomType, IntType, Param, Stmt, StringType, Type, VoidType


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def wrap_int64(n: int) -> int:
    """Reduce n to a signed 64-bit integer, two's-complement wraparound."""
    n &= 0xFFFFFFFFFFFFFFFF
    if n > INT64_MAX:
        n -= 2**64
    return n


class Value:
    """A runtime value; the subclass is its kind."""

    kind: str = ""

    def to_string(self) -> str:
        raise NotImplementedError

    def is_truthy(self) -> bool:
        raise NotImplementedError


@dataclass
class VInt(Value):
    value: int

    kind = "Int"

    def __post_init__(self) -> None:
        self.value = wrap_int64(self.value)

    def to_string(self) -> str:
        return str(self.value)

    def is_truthy(self) -> bool:
        return self.value != 0


@dataclass
class VString(Value):
    value: str

    kind = "String"

    def to_string(self) -> str:
        return self.value

    def is_truthy(self) -> bool:
        return self.value != ""


@dataclass
class VFunc(Value):
    """A function definition; no captured environment."""

    params: list[Param]
    ret: Type
    body: list[Stmt]
    builtin: bool = False

    kind = "Function"

    def to_string(self) -> str:
        return "<function>"

    def is_truthy(self) -> bool:
        return True


@dataclass
class VObject(Value):
    class_name: str
    fields: dict[str, Value] = field(default_factory=dict)

    kind = "Object"

    def to_string(self) -> str:
        return f"<{self.class_name} object>"

    def is_truthy(self) -> bool:
        return True

    def copy(self) -> VObject:
        """Deep copy: nested objects are copied too."""
        fields: dict[str, Value] = {}
        for name, v in self.fields.items():
            fields[name] = v.copy() if isinstance(v, VObject) else v
        return VObject(self.class_name, fields)


@dataclass
class VVoid(Value):
    kind = "Void"

    def to_string(self) -> str:
        return "void"

    def is_truthy(self) -> bool:
        return False


def zero_value(typ: Type) -> Value:
    """Kind-appropriate default: 0, "", or void (also for class types)."""
    if isinstance(typ, IntType):
        return VInt(0)
    if isinstance(typ, StringType):
        return VString("")
    if isinstance(typ, (VoidType, CustomType)):
        return VVoid()
    raise TypeError("unhandled type node")


def is_compatible(typ: Type, value: Value) -> bool:
    """Whether value may be bound to a slot declared with typ.

    Class types match only objects of exactly that class.
    """
    if isinstance(typ, IntType):
        return isinstance(value, VInt)
    if isinstance(typ, StringType):
        return isinstance(value, VString)
    if isinstance(typ, VoidType):
        return isinstance(value, VVoid)
    if isinstance(typ, CustomType):
        return isinstance(value, VObject) and value.class_name == typ.name
    raise TypeError("unhandled type node")


def describe(value: Value) -> str:
    """Kind name for messages; objects report their class."""
    if isinstance(value, VObject):
        return value.class_name
    return value.kind
