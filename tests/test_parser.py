import pytest

from monkey.ast import (
    BlockStatement, BooleanLiteral, CallExpression, ExpressionStatement, FunctionLiteral,
    Identifier, IfExpression, InfixExpression, IntegerLiteral, LetStatement, PrefixExpression,
    ReturnStatement, StringLiteral,
)
from monkey.parser import Parser, Precedence, PRECEDENCES, parse, parse_program
from monkey.lexer import tokenize
from monkey.token import TokenType


def parse_ok(source):
    program, errors = parse_program(source)
    assert errors == [], errors
    return program


def single_expression(source):
    program = parse_ok(source)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert isinstance(stmt, ExpressionStatement)
    return stmt.expression


def test_let_statements():
    program = parse_ok('let x = 5; let y = true; let foobar = y;')
    assert len(program.statements) == 3
    expected = [('x', '5'), ('y', 'true'), ('foobar', 'y')]
    for stmt, (name, value) in zip(program.statements, expected):
        assert isinstance(stmt, LetStatement)
        assert stmt.token_literal() == 'let'
        assert stmt.name.value == name
        assert stmt.name.token_literal() == name
        assert str(stmt.value) == value


def test_return_statements():
    program = parse_ok('return 5; return 10; return add(15);')
    assert len(program.statements) == 3
    for stmt in program.statements:
        assert isinstance(stmt, ReturnStatement)
        assert stmt.token_literal() == 'return'
    assert str(program.statements[2].value) == 'add(15)'


def test_terminators_are_optional():
    program = parse_ok('let x = 5\nreturn x')
    assert isinstance(program.statements[0], LetStatement)
    assert isinstance(program.statements[1], ReturnStatement)


def test_literal_expressions():
    ident = single_expression('foobar;')
    assert isinstance(ident, Identifier) and ident.value == 'foobar'

    integer = single_expression('5;')
    assert isinstance(integer, IntegerLiteral) and integer.value == 5
    assert integer.token_literal() == '5'

    boolean = single_expression('false')
    assert isinstance(boolean, BooleanLiteral) and boolean.value is False

    string = single_expression('"hello world"')
    assert isinstance(string, StringLiteral) and string.value == 'hello world'


@pytest.mark.parametrize('source, operator, value', [
    ('!5;', '!', 5),
    ('-15;', '-', 15),
])
def test_prefix_expressions(source, operator, value):
    expr = single_expression(source)
    assert isinstance(expr, PrefixExpression)
    assert expr.operator == operator
    assert expr.right.value == value


@pytest.mark.parametrize('operator', ['+', '-', '*', '/', '>', '<', '==', '!='])
def test_infix_expressions(operator):
    expr = single_expression(f'5 {operator} 6;')
    assert isinstance(expr, InfixExpression)
    assert expr.left.value == 5
    assert expr.operator == operator
    assert expr.right.value == 6


@pytest.mark.parametrize('source, expected', [
    ('-a * b', '((-a) * b)'),
    ('!-a', '(!(-a))'),
    ('a + b + c', '((a + b) + c)'),
    ('a + b - c', '((a + b) - c)'),
    ('a * b * c', '((a * b) * c)'),
    ('a * b / c', '((a * b) / c)'),
    ('a + b * c', '(a + (b * c))'),
    ('a + b / c', '(a + (b / c))'),
    ('a + b * c + d / e - f', '(((a + (b * c)) + (d / e)) - f)'),
    ('3 + 4; -5 * 5', '(3 + 4); ((-5) * 5)'),
    ('5 > 4 == 3 < 4', '((5 > 4) == (3 < 4))'),
    ('5 < 4 != 3 > 4', '((5 < 4) != (3 > 4))'),
    ('3 + 4 * 5 == 3 * 1 + 4 * 5', '((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))'),
    ('true', 'true'),
    ('3 > 5 == false', '((3 > 5) == false)'),
    ('1 + (2 + 3) + 4', '((1 + (2 + 3)) + 4)'),
    ('(5 + 5) * 2', '((5 + 5) * 2)'),
    ('2 / (5 + 5)', '(2 / (5 + 5))'),
    ('-(5 + 5)', '(-(5 + 5))'),
    ('!(true == true)', '(!(true == true))'),
    ('a + add(b * c) + d', '((a + add((b * c))) + d)'),
    ('add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))', 'add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))'),
    ('add(a + b + c * d / f + g)', 'add((((a + b) + ((c * d) / f)) + g))'),
])
def test_operator_precedence(source, expected):
    assert str(parse_ok(source)) == expected


def test_every_infix_token_has_a_precedence_and_handler():
    parser = Parser(tokenize(''))
    assert set(parser.infix_parse_fns) == set(PRECEDENCES)
    assert PRECEDENCES[TokenType.LPAREN] is Precedence.CALL


def test_if_expression():
    expr = single_expression('if (x < y) { x }')
    assert isinstance(expr, IfExpression)
    assert str(expr.condition) == '(x < y)'
    assert isinstance(expr.consequence, BlockStatement)
    assert len(expr.consequence.statements) == 1
    assert str(expr.consequence.statements[0]) == 'x'
    assert expr.alternative is None


def test_if_else_expression():
    expr = single_expression('if (x < y) { x } else { y }')
    assert str(expr.alternative.statements[0]) == 'y'


def test_function_literal():
    expr = single_expression('fn(x, y) { x + y; }')
    assert isinstance(expr, FunctionLiteral)
    assert [p.value for p in expr.parameters] == ['x', 'y']
    assert len(expr.body.statements) == 1
    assert str(expr.body.statements[0]) == '(x + y)'


@pytest.mark.parametrize('source, params', [
    ('fn() {};', []),
    ('fn(x) {};', ['x']),
    ('fn(x, y, z) {};', ['x', 'y', 'z']),
])
def test_function_parameters(source, params):
    expr = single_expression(source)
    assert [p.value for p in expr.parameters] == params


def test_call_expression():
    expr = single_expression('add(1, 2 * 3, 4 + 5);')
    assert isinstance(expr, CallExpression)
    assert str(expr.function) == 'add'
    assert [str(a) for a in expr.arguments] == ['1', '(2 * 3)', '(4 + 5)']


def test_call_on_function_literal():
    expr = single_expression('fn(x) { x }(5)')
    assert isinstance(expr, CallExpression)
    assert isinstance(expr.function, FunctionLiteral)


def test_empty_program():
    program = parse_ok('')
    assert program.statements == []
    assert program.token_literal() == ''


@pytest.mark.parametrize('source, expected', [
    ('let = 5;', ['expected next token to be IDENT, got = instead']),
    ('let x 5;', ['expected next token to be =, got INT instead']),
    ('let x = ;', ['no prefix parse function for ; found']),
    ('(1 + 2', ['expected next token to be ), got EOF instead']),
    ('if (x) { x', ['expected next token to be }, got EOF instead']),
    ('if x { x }', ['expected next token to be (, got IDENT instead']),
    ('fn(x y) { x }', ['expected next token to be ), got IDENT instead']),
    ('@', ['no prefix parse function for ILLEGAL found']),
    ('9223372036854775808', ['could not parse "9223372036854775808" as int']),
])
def test_diagnostics(source, expected):
    _, errors = parse_program(source)
    assert errors == expected


def test_largest_int64_literal_parses():
    assert single_expression('9223372036854775807').value == 2 ** 63 - 1


def test_parsing_resumes_at_next_statement():
    program, errors = parse_program('let = 5; let x 5; let y = 3;')
    assert errors == [
        'expected next token to be IDENT, got = instead',
        'expected next token to be =, got INT instead',
    ]
    assert [str(s) for s in program.statements] == ['let y = 3;']


def test_recovery_without_terminator_stops_at_end_of_input():
    program, errors = parse_program('let = 5 6 7 8')
    assert errors == ['expected next token to be IDENT, got = instead']
    assert program.statements == []


def test_recovery_inside_block():
    _, errors = parse_program('fn(x) { let = 1; x }')
    assert errors == ['expected next token to be IDENT, got = instead']


def test_parse_accepts_token_stream():
    program, errors = parse(iter(tokenize('1 + 2')))
    assert errors == []
    assert str(program) == '(1 + 2)'


def test_deep_nesting_is_a_diagnostic():
    source = '(' * 5000 + '1' + ')' * 5000
    program, errors = parse_program(source)
    assert errors == ['expression nested too deeply']
    assert program.statements == []
