"""Tokenizer for the Monkey language.

The token stream is produced by a Lark basic lexer built
from the terminal definitions below; no Lark parse tree is ever built. Lark
orders terminals by width, so two-character operators win over their
one-character prefixes, and string literals win over the `ILLEGAL` catch-all
that would otherwise claim an opening quote.

Keywords are lexed as identifiers and re-typed with `lookup_ident`.
"""

from __future__ import annotations

from typing import Iterator, List

from lark import Lark

from .token import Token, TokenType, lookup_ident


MONKEY_TOKENS = r"""
    start: _token*

    _token: IDENT | INT | STRING
          | EQ | NOT_EQ | ASSIGN | PLUS | MINUS | BANG | ASTERISK | SLASH | LT | GT
          | COMMA | SEMICOLON | LPAREN | RPAREN | LBRACE | RBRACE
          | ILLEGAL

    IDENT: /[A-Za-z_]+/
    INT: /[0-9]+/
    STRING: /"[^"]*"/

    EQ: "=="
    NOT_EQ: "!="
    ASSIGN: "="
    PLUS: "+"
    MINUS: "-"
    BANG: "!"
    ASTERISK: "*"
    SLASH: "/"
    LT: "<"
    GT: ">"

    COMMA: ","
    SEMICOLON: ";"
    LPAREN: "("
    RPAREN: ")"
    LBRACE: "{"
    RBRACE: "}"

    // any single character no other terminal can start with
    ILLEGAL: /[^\sA-Za-z0-9_=!+\-*\/<>,;(){}]/

    WS: /\s+/
    %ignore WS
"""


MONKEY_LEXER = Lark(MONKEY_TOKENS, parser='lalr', lexer='basic')


def iter_tokens(source: str) -> Iterator[Token]:
    """Yield the tokens of `source`, finishing with a single EOF token."""
    for raw in MONKEY_LEXER.lex(source):
        if raw.type == 'IDENT':
            yield Token(lookup_ident(raw.value), raw.value)
        elif raw.type == 'STRING':
            yield Token(TokenType.STRING, raw.value[1:-1])
        else:
            yield Token(TokenType[raw.type], raw.value)
    yield Token(TokenType.EOF, '')


def tokenize(source: str) -> List[Token]:
    """Convert source text into a list of tokens ending with EOF."""
    return list(iter_tokens(source))
