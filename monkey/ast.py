"""Abstract Syntax Tree (AST) definitions for the Monkey language.

The AST classes defined in this module represent the syntactic structure
of parsed Monkey programs. They are produced by `monkey.parser` and
evaluated by `monkey.interpreter`. Every node keeps the token it was
parsed from; tokens are ignored when comparing trees, so two parses that
differ only in layout or redundant parentheses compare equal.

`str(node)` re-serializes a node to source text in which every prefix
and infix expression is fully parenthesized. The text parses back into
an equal tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .token import Token


@dataclass
class Node:
    """Base class for all AST nodes."""

    def token_literal(self) -> str:
        token = getattr(self, 'token', None)
        return token.literal if token is not None else ''


class Statement(Node):
    pass


class Expression(Node):
    pass


def _token_field():
    return field(compare=False, repr=False)


def join_statements(statements: List[Statement]) -> str:
    # Expression statements need an explicit terminator when followed by
    # another statement, otherwise `f (x)` would read back as a call.
    parts = []
    for i, stmt in enumerate(statements):
        text = str(stmt)
        if isinstance(stmt, ExpressionStatement) and i < len(statements) - 1:
            text += ';'
        parts.append(text)
    return ' '.join(parts)


@dataclass
class Program(Node):
    statements: List[Statement]

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ''

    def __str__(self) -> str:
        return join_statements(self.statements)


@dataclass
class Identifier(Expression):
    token: Token = _token_field()
    value: str = ''

    def __str__(self) -> str:
        return self.value


@dataclass
class LetStatement(Statement):
    token: Token = _token_field()
    name: Optional[Identifier] = None
    value: Optional[Expression] = None

    def __str__(self) -> str:
        return f"let {self.name} = {self.value if self.value is not None else ''};"


@dataclass
class ReturnStatement(Statement):
    token: Token = _token_field()
    value: Optional[Expression] = None

    def __str__(self) -> str:
        return f"return {self.value if self.value is not None else ''};"


@dataclass
class ExpressionStatement(Statement):
    token: Token = _token_field()
    expression: Optional[Expression] = None

    def __str__(self) -> str:
        return str(self.expression) if self.expression is not None else ''


@dataclass
class BlockStatement(Statement):
    token: Token = _token_field()
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        if not self.statements:
            return '{ }'
        return '{ ' + join_statements(self.statements) + ' }'


@dataclass
class IntegerLiteral(Expression):
    token: Token = _token_field()
    value: int = 0

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class BooleanLiteral(Expression):
    token: Token = _token_field()
    value: bool = False

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclass
class StringLiteral(Expression):
    token: Token = _token_field()
    value: str = ''

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass
class PrefixExpression(Expression):
    token: Token = _token_field()
    operator: str = ''
    right: Optional[Expression] = None

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    token: Token = _token_field()
    left: Optional[Expression] = None
    operator: str = ''
    right: Optional[Expression] = None

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Expression):
    token: Token = _token_field()
    condition: Optional[Expression] = None
    consequence: Optional[BlockStatement] = None
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass
class FunctionLiteral(Expression):
    token: Token = _token_field()
    parameters: List[Identifier] = field(default_factory=list)
    body: Optional[BlockStatement] = None

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass
class CallExpression(Expression):
    token: Token = _token_field()  # the '(' token
    function: Optional[Expression] = None
    arguments: List[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        args = ', '.join(str(a) for a in self.arguments)
        return f"{self.function}({args})"
