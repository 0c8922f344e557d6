from pathlib import Path

from monkey.interpreter import Interpreter
from monkey.parser import parse_program
from monkey.types import Error, Integer

EXAMPLES = Path(__file__).parent.parent / 'examples'


def load(name):
    source = (EXAMPLES / name).read_text(encoding='utf-8')
    program, errors = parse_program(source)
    return program, errors


def test_program_closures(capsys):
    program, errors = load('closures.monkey')
    assert errors == []
    result = Interpreter().run(program)
    assert result == Integer(5)
    assert capsys.readouterr().out == ''


def test_program_fibonacci(capsys):
    program, errors = load('fibonacci.monkey')
    assert errors == []
    result = Interpreter().run(program)
    assert result == Integer(610)
    assert capsys.readouterr().out.strip() == '55'


def test_program_strings(capsys):
    program, errors = load('strings.monkey')
    assert errors == []
    result = Interpreter().run(program)
    assert result == Integer(2)
    assert capsys.readouterr().out.splitlines() == ['Hello, World!', '13']


def test_program_type_error_stops_the_program(capsys):
    program, errors = load('type_error.monkey')
    assert errors == []
    result = Interpreter().run(program)
    assert result == Error('type mismatch: INTEGER + BOOLEAN')
    assert capsys.readouterr().out == ''


def test_program_broken_reports_every_bad_statement():
    program, errors = load('broken.monkey')
    assert errors == [
        'expected next token to be IDENT, got = instead',
        'expected next token to be =, got INT instead',
    ]
    # the well-formed statement after the broken ones is still parsed
    assert str(program) == 'let z = 15;'
