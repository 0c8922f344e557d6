"""Runtime values for the Monkey interpreter.

The set of value kinds is closed: integers, booleans, strings, null,
functions and builtins are user-visible; `ReturnValue` and `Error` are
internal carriers. `ReturnValue` threads a `return` up through nested
blocks until a function boundary unwraps it, and `Error` short-circuits
every surrounding evaluation step until it reaches the top of the
program.

`TRUE`, `FALSE` and `NULL` are the only instances of their kinds that
the interpreter ever creates. Equality between operands that are not
both integers or both strings is decided by identity, which is only
correct because of this.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, List

if TYPE_CHECKING:
    from .ast import BlockStatement, Identifier
    from .environment import Environment

INTEGER_OBJ = 'INTEGER'
BOOLEAN_OBJ = 'BOOLEAN'
STRING_OBJ = 'STRING'
NULL_OBJ = 'NULL'
RETURN_VALUE_OBJ = 'RETURN_VALUE'
ERROR_OBJ = 'ERROR'
FUNCTION_OBJ = 'FUNCTION'
BUILTIN_OBJ = 'BUILTIN'


class Object:
    """Base class for all runtime values."""
    type_name: ClassVar[str] = ''

    def inspect(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Integer(Object):
    type_name: ClassVar[str] = INTEGER_OBJ
    value: int

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True, eq=False)
class Boolean(Object):
    type_name: ClassVar[str] = BOOLEAN_OBJ
    value: bool

    def inspect(self) -> str:
        return 'true' if self.value else 'false'


@dataclass(frozen=True)
class String(Object):
    type_name: ClassVar[str] = STRING_OBJ
    value: str

    def inspect(self) -> str:
        return self.value


class Null(Object):
    type_name: ClassVar[str] = NULL_OBJ

    def inspect(self) -> str:
        return 'null'

    def __repr__(self) -> str:
        return 'NULL'


@dataclass(frozen=True)
class ReturnValue(Object):
    type_name: ClassVar[str] = RETURN_VALUE_OBJ
    value: Object

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(frozen=True)
class Error(Object):
    type_name: ClassVar[str] = ERROR_OBJ
    message: str

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


@dataclass(eq=False)
class Function(Object):
    """A user-defined function.

    `env` is the environment that was active when the function literal
    was evaluated. Calls run in a fresh frame enclosed by it, which is
    what makes the function a closure.
    """
    type_name: ClassVar[str] = FUNCTION_OBJ
    parameters: List[Identifier]
    body: BlockStatement
    env: Environment

    def inspect(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"

    def __repr__(self) -> str:
        return f"<function fn({', '.join(str(p) for p in self.parameters)})>"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_error(value: Object) -> bool:
    return isinstance(value, Error)


def is_truthy(value: Object) -> bool:
    """NULL and FALSE are falsy; every other value, 0 and "" included, is truthy."""
    if value is NULL or value is FALSE:
        return False
    return True
