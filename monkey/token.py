"""Token definitions for the Monkey language.

Tokens are the units the parser consumes. Each token carries its kind
(a `TokenType`) and the literal text it was produced from; the literal is
kept on every AST node for diagnostics and re-serialization.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class TokenType(Enum):
    ILLEGAL = 'ILLEGAL'
    EOF = 'EOF'

    # Identifiers and literals
    IDENT = 'IDENT'
    INT = 'INT'
    STRING = 'STRING'

    # Operators
    ASSIGN = '='
    PLUS = '+'
    MINUS = '-'
    BANG = '!'
    ASTERISK = '*'
    SLASH = '/'
    LT = '<'
    GT = '>'
    EQ = '=='
    NOT_EQ = '!='

    # Delimiters
    COMMA = ','
    SEMICOLON = ';'
    LPAREN = '('
    RPAREN = ')'
    LBRACE = '{'
    RBRACE = '}'

    # Keywords
    FUNCTION = 'FUNCTION'
    LET = 'LET'
    TRUE = 'TRUE'
    FALSE = 'FALSE'
    IF = 'IF'
    ELSE = 'ELSE'
    RETURN = 'RETURN'

    def __str__(self) -> str:
        return self.value


KEYWORDS: Dict[str, TokenType] = {
    'fn': TokenType.FUNCTION,
    'let': TokenType.LET,
    'true': TokenType.TRUE,
    'false': TokenType.FALSE,
    'if': TokenType.IF,
    'else': TokenType.ELSE,
    'return': TokenType.RETURN,
}


def lookup_ident(ident: str) -> TokenType:
    """Return the keyword kind for `ident`, or IDENT if it is not reserved."""
    return KEYWORDS.get(ident, TokenType.IDENT)


@dataclass(frozen=True)
class Token:
    type: TokenType
    literal: str

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.literal!r})"
