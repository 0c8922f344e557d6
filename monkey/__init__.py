# Monkey language package
# This package provides a parser and tree-walking interpreter for the Monkey language.
from .errors import MonkeyError, ParseFailure
from .environment import Environment
from .interpreter import Interpreter, evaluate, run_program
from .parser import parse, parse_program

__all__ = [
    'Environment',
    'Interpreter',
    'MonkeyError',
    'ParseFailure',
    'evaluate',
    'parse',
    'parse_program',
    'run_program',
]
