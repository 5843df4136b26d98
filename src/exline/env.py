"""Exline environment: global name tables and call frames.

There is no lexical scope stack. Variables, functions, classes and interfaces
each live in one flat table where the last definition wins. A call saves a
snapshot of the whole variables table with push_frame() and puts it back
with pop_frame(), so a callee sees every variable visible at its call site and
nothing it binds survives the call.
"""

from __future__ import annotations

import logging

from .ast import ClassDefinition, InterfaceDefinition, Param, Pos, StringType
from .values import Value, VFunc

logger = logging.getLogger(__name__)

_BUILTIN_POS = Pos(0, 0)


def _builtin_print() -> VFunc:
    param = Param(_BUILTIN_POS, "value", StringType(_BUILTIN_POS))
    return VFunc([param], StringType(_BUILTIN_POS), [], builtin=True)


class Environment:
    def __init__(self) -> None:
        self.variables: dict[str, Value] = {}
        self.functions: dict[str, VFunc] = {"print": _builtin_print()}
        self.classes: dict[str, ClassDefinition] = {}
        self.interfaces: dict[str, InterfaceDefinition] = {}
        self._frames: list[dict[str, Value]] = []

    # ---- Tables ------------------------------------------------------------

    def define_variable(self, name: str, value: Value) -> None:
        self.variables[name] = value

    def get_variable(self, name: str) -> Value | None:
        return self.variables.get(name)

    def define_function(self, name: str, fn: VFunc) -> None:
        self.functions[name] = fn

    def get_function(self, name: str) -> VFunc | None:
        return self.functions.get(name)

    def define_class(self, name: str, decl: ClassDefinition) -> None:
        self.classes[name] = decl

    def get_class(self, name: str) -> ClassDefinition | None:
        return self.classes.get(name)

    def define_interface(self, name: str, decl: InterfaceDefinition) -> None:
        self.interfaces[name] = decl

    def get_interface(self, name: str) -> InterfaceDefinition | None:
        return self.interfaces.get(name)

    # ---- Call frames -------------------------------------------------------

    @property
    def depth(self) -> int:
        return len(self._frames)

    def push_frame(self) -> None:
        self._frames.append(dict(self.variables))
        logger.debug("push frame %d (%d variables)", self.depth, len(self.variables))

    def pop_frame(self) -> None:
        if not self._frames:
            raise RuntimeError("no frame")
        logger.debug("pop frame %d", self.depth)
        self.variables = self._frames.pop()
