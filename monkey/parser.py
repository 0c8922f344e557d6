"""Parser for the Monkey language.

This module implements a precedence-climbing (Pratt) parser. Every token
kind that can start an expression has a prefix parse function, and every
token kind that can continue one has an infix parse function together
with an entry in `PRECEDENCES`, which is the single source of truth for
binding strength and associativity.

The parser never raises on malformed input. Problems are recorded as
human readable diagnostics in `Parser.errors` and parsing resumes at the
next statement boundary, so one pass can report several independent
problems. A program is only safe to evaluate when the list is empty.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .ast import (
    Program, Statement, Expression, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral,
    BooleanLiteral, StringLiteral, PrefixExpression, InfixExpression,
    IfExpression, FunctionLiteral, CallExpression,
)
from .lexer import tokenize
from .token import Token, TokenType

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # ==
    LESSGREATER = 3  # > or <
    SUM = 4          # +
    PRODUCT = 5      # *
    PREFIX = 6       # -x or !x
    CALL = 7         # f(x)


PRECEDENCES: Dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}

PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Expression], Optional[Expression]]


class Parser:
    def __init__(self, tokens: Iterable[Token]):
        self.tokens = iter(tokens)
        self.errors: List[str] = []
        self.cur_token = Token(TokenType.EOF, '')
        self.peek_token = Token(TokenType.EOF, '')

        self.prefix_parse_fns: Dict[TokenType, PrefixParseFn] = {
            TokenType.IDENT: self.parse_identifier,
            TokenType.INT: self.parse_integer_literal,
            TokenType.STRING: self.parse_string_literal,
            TokenType.TRUE: self.parse_boolean,
            TokenType.FALSE: self.parse_boolean,
            TokenType.BANG: self.parse_prefix_expression,
            TokenType.MINUS: self.parse_prefix_expression,
            TokenType.LPAREN: self.parse_grouped_expression,
            TokenType.IF: self.parse_if_expression,
            TokenType.FUNCTION: self.parse_function_literal,
        }
        self.infix_parse_fns: Dict[TokenType, InfixParseFn] = {
            token_type: self.parse_infix_expression
            for token_type in PRECEDENCES
            if token_type is not TokenType.LPAREN
        }
        self.infix_parse_fns[TokenType.LPAREN] = self.parse_call_expression

        # Read two tokens so cur_token and peek_token are both set
        self.next_token()
        self.next_token()

    # Token handling

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        # An exhausted stream keeps reporting EOF
        self.peek_token = next(self.tokens, Token(TokenType.EOF, ''))

    def cur_token_is(self, token_type: TokenType) -> bool:
        return self.cur_token.type is token_type

    def peek_token_is(self, token_type: TokenType) -> bool:
        return self.peek_token.type is token_type

    def expect_peek(self, token_type: TokenType) -> bool:
        """Advance if the next token has the given kind, else record a diagnostic."""
        if self.peek_token_is(token_type):
            self.next_token()
            return True
        self.peek_error(token_type)
        return False

    def peek_error(self, token_type: TokenType) -> None:
        self.errors.append(
            f"expected next token to be {token_type.value}, got {self.peek_token.type.value} instead"
        )

    def no_prefix_parse_fn_error(self, token_type: TokenType) -> None:
        self.errors.append(f"no prefix parse function for {token_type.value} found")

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    def synchronize(self, *stop: TokenType) -> None:
        """Skip the rest of a malformed statement.

        Stops on a semicolon, on any of the `stop` kinds, or at the end of
        input, whichever comes first.
        """
        while not self.cur_token_is(TokenType.SEMICOLON) and not self.cur_token_is(TokenType.EOF):
            if self.cur_token.type in stop:
                return
            self.next_token()

    # Statements

    def parse_program(self) -> Program:
        statements: List[Statement] = []
        while not self.cur_token_is(TokenType.EOF):
            error_count = len(self.errors)
            stmt = self.parse_statement()
            if len(self.errors) > error_count:
                self.synchronize()
            elif stmt is not None:
                statements.append(stmt)
            self.next_token()
        return Program(statements)

    def parse_statement(self) -> Optional[Statement]:
        if self.cur_token_is(TokenType.LET):
            return self.parse_let_statement()
        if self.cur_token_is(TokenType.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        token = self.cur_token
        if not self.expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)
        if not self.expect_peek(TokenType.ASSIGN):
            return None
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return LetStatement(token, name, value)

    def parse_return_statement(self) -> ReturnStatement:
        token = self.cur_token
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ReturnStatement(token, value)

    def parse_expression_statement(self) -> ExpressionStatement:
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        # the terminator is optional for expression statements
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ExpressionStatement(token, expression)

    def parse_block_statement(self) -> BlockStatement:
        token = self.cur_token
        statements: List[Statement] = []
        self.next_token()
        while not self.cur_token_is(TokenType.RBRACE):
            if self.cur_token_is(TokenType.EOF):
                self.errors.append(
                    f"expected next token to be {TokenType.RBRACE.value}, got {TokenType.EOF.value} instead"
                )
                break
            error_count = len(self.errors)
            stmt = self.parse_statement()
            if len(self.errors) > error_count:
                self.synchronize(TokenType.RBRACE)
                if self.cur_token_is(TokenType.RBRACE):
                    break
            elif stmt is not None:
                statements.append(stmt)
            self.next_token()
        return BlockStatement(token, statements)

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None
        left = prefix()

        while not self.peek_token_is(TokenType.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)
        return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Optional[Expression]:
        literal = self.cur_token.literal
        try:
            value = int(literal, 10)
        except ValueError:
            value = None
        if value is None or not INT64_MIN <= value <= INT64_MAX:
            self.errors.append(f'could not parse "{literal}" as int')
            return None
        return IntegerLiteral(self.cur_token, value)

    def parse_string_literal(self) -> Expression:
        return StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self) -> Expression:
        return BooleanLiteral(self.cur_token, self.cur_token_is(TokenType.TRUE))

    def parse_prefix_expression(self) -> Expression:
        token = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left: Expression) -> Expression:
        token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self) -> Optional[Expression]:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Optional[Expression]:
        token = self.cur_token
        if not self.expect_peek(TokenType.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenType.RPAREN):
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            if not self.expect_peek(TokenType.LBRACE):
                return None
            alternative = self.parse_block_statement()
        return IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self) -> Optional[Expression]:
        token = self.cur_token
        if not self.expect_peek(TokenType.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        body = self.parse_block_statement()
        return FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self) -> Optional[List[Identifier]]:
        identifiers: List[Identifier] = []
        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(TokenType.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function: Expression) -> Optional[Expression]:
        token = self.cur_token
        arguments = self.parse_call_arguments()
        if arguments is None:
            return None
        return CallExpression(token, function, arguments)

    def parse_call_arguments(self) -> Optional[List[Expression]]:
        args: List[Expression] = []
        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return args

        self.next_token()
        args.append(self.parse_expression(Precedence.LOWEST))
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            args.append(self.parse_expression(Precedence.LOWEST))

        if not self.expect_peek(TokenType.RPAREN):
            return None
        return args


def parse(tokens: Iterable[Token]) -> Tuple[Program, List[str]]:
    """Parse a token stream into a Program and its diagnostics."""
    parser = Parser(tokens)
    try:
        program = parser.parse_program()
    except RecursionError:
        parser.errors.append('expression nested too deeply')
        program = Program([])
    return program, parser.errors


def parse_program(source: str) -> Tuple[Program, List[str]]:
    """Tokenize and parse Monkey source code.

    Returns the Program together with the list of parse diagnostics. An
    empty list means the program is structurally sound.
    """
    return parse(tokenize(source))
