"""Tree-walking evaluator for the Monkey language.

`Interpreter.evaluate` is a single recursive function that dispatches on
the kind of AST node and always returns a runtime value. Failures are
never raised: they are `Error` values, and every step that consumes the
result of another step checks for one and hands it straight back. The
same check lets a `ReturnValue` climb out of nested blocks until the
enclosing function call (or the program) unwraps it.
"""

from __future__ import annotations

import operator
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, TextIO, Union

from .ast import (
    Node, Program, LetStatement, ReturnStatement, ExpressionStatement,
    BlockStatement, Identifier, IntegerLiteral, BooleanLiteral,
    StringLiteral, PrefixExpression, InfixExpression, IfExpression,
    FunctionLiteral, CallExpression, Statement,
)
from .builtin_function import BuiltinFunction
from .environment import Environment
from .errors import ParseFailure
from .parser import parse_program
from .std import populate_builtins
from .types import (
    Object, Integer, String, Error, ReturnValue, Function, NULL, TRUE, FALSE,
    native_bool_to_boolean, is_error, is_truthy,
)


def wrap_int64(value: int) -> int:
    """Reduce `value` to a signed 64-bit integer, wrapping like two's complement."""
    return ((value + 2 ** 63) % 2 ** 64) - 2 ** 63


def truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


INTEGER_OPERATIONS: Dict[str, Callable[[int, int], int]] = {
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
    '/': truncating_div,
}

INTEGER_COMPARISONS: Dict[str, Callable[[int, int], bool]] = {
    '<': operator.lt,
    '>': operator.gt,
    '==': operator.eq,
    '!=': operator.ne,
}

STRING_COMPARISONS: Dict[str, Callable[[str, str], bool]] = {
    '==': operator.eq,
    '!=': operator.ne,
}


def is_signal(value: Object) -> bool:
    """True for values that must stop the current evaluation step."""
    return isinstance(value, (Error, ReturnValue))


def unwrap_return_value(value: Object) -> Object:
    if isinstance(value, ReturnValue):
        return value.value
    return value


class Interpreter:
    """Core interpreter that evaluates Monkey ASTs."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt',
                 out: Optional[TextIO] = None):
        self.global_env = Environment()
        self.builtins: Dict[str, BuiltinFunction] = populate_builtins(out)
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Object:
        """Evaluate a whole program, by default in the global environment.

        Running out of host stack on a deeply nested program is reported as
        an Error value like any other evaluation failure.
        """
        if env is None:
            env = self.global_env
        try:
            result = self.evaluate(program, env)
        except RecursionError:
            result = Error('maximum recursion depth exceeded')
        if self.debug_level >= 1:
            self.debug(f"result {result.type_name}: {result.inspect()}")
        return result

    def evaluate(self, node: Node, env: Environment) -> Object:
        # Statements
        if isinstance(node, Program):
            return self.eval_program(node.statements, env)
        if isinstance(node, ExpressionStatement):
            return self.evaluate(node.expression, env)
        if isinstance(node, BlockStatement):
            return self.eval_block_statement(node.statements, env)
        if isinstance(node, ReturnStatement):
            value = self.evaluate(node.value, env)
            if is_signal(value):
                return value
            return ReturnValue(value)
        if isinstance(node, LetStatement):
            value = self.evaluate(node.value, env)
            if is_signal(value):
                return value
            env.set(node.name.value, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name.value} = {value.inspect()}")
            return NULL

        # Expressions
        if isinstance(node, Identifier):
            return self.eval_identifier(node, env)
        if isinstance(node, IntegerLiteral):
            return Integer(node.value)
        if isinstance(node, BooleanLiteral):
            return native_bool_to_boolean(node.value)
        if isinstance(node, StringLiteral):
            return String(node.value)
        if isinstance(node, PrefixExpression):
            right = self.evaluate(node.right, env)
            if is_signal(right):
                return right
            return self.eval_prefix_expression(node.operator, right)
        if isinstance(node, InfixExpression):
            left = self.evaluate(node.left, env)
            if is_signal(left):
                return left
            right = self.evaluate(node.right, env)
            if is_signal(right):
                return right
            return self.eval_infix_expression(node.operator, left, right)
        if isinstance(node, IfExpression):
            return self.eval_if_expression(node, env)
        if isinstance(node, FunctionLiteral):
            return Function(node.parameters, node.body, env)
        if isinstance(node, CallExpression):
            function = self.evaluate(node.function, env)
            if is_signal(function):
                return function
            args: List[Object] = []
            for expr in node.arguments:
                value = self.evaluate(expr, env)
                if is_signal(value):
                    return value
                args.append(value)
            return self.apply_function(function, args)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node).__name__}")

    def eval_program(self, statements: List[Statement], env: Environment) -> Object:
        result: Object = NULL
        for stmt in statements:
            result = self.evaluate(stmt, env)
            # a top-level return ends the program
            if isinstance(result, ReturnValue):
                return result.value
            if is_error(result):
                return result
        return result

    def eval_block_statement(self, statements: List[Statement], env: Environment) -> Object:
        result: Object = NULL
        for stmt in statements:
            result = self.evaluate(stmt, env)
            # leave ReturnValue wrapped; only a call boundary unwraps it
            if is_signal(result):
                return result
        return result

    def eval_identifier(self, node: Identifier, env: Environment) -> Object:
        value = env.get(node.value)
        if value is not None:
            return value
        builtin = self.builtins.get(node.value)
        if builtin is not None:
            return builtin
        return Error(f"identifier not found: {node.value}")

    def eval_prefix_expression(self, op: str, right: Object) -> Object:
        if op == '!':
            return self.eval_bang_operator_expression(right)
        if op == '-':
            return self.eval_minus_prefix_operator_expression(right)
        return Error(f"unknown operator: {op}{right.type_name}")

    def eval_bang_operator_expression(self, right: Object) -> Object:
        if right is TRUE:
            return FALSE
        if right is FALSE or right is NULL:
            return TRUE
        return FALSE

    def eval_minus_prefix_operator_expression(self, right: Object) -> Object:
        if not isinstance(right, Integer):
            return Error(f"unknown operator: -{right.type_name}")
        return Integer(wrap_int64(-right.value))

    def eval_infix_expression(self, op: str, left: Object, right: Object) -> Object:
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self.eval_integer_infix_expression(op, left, right)
        if isinstance(left, String) and isinstance(right, String):
            return self.eval_string_infix_expression(op, left, right)
        # TRUE, FALSE and NULL are singletons, so identity is equality here
        if op == '==':
            return native_bool_to_boolean(left is right)
        if op == '!=':
            return native_bool_to_boolean(left is not right)
        if left.type_name != right.type_name:
            return Error(f"type mismatch: {left.type_name} {op} {right.type_name}")
        return Error(f"unknown operator: {left.type_name} {op} {right.type_name}")

    def eval_integer_infix_expression(self, op: str, left: Integer, right: Integer) -> Object:
        if op in INTEGER_OPERATIONS:
            if op == '/' and right.value == 0:
                return Error('division by zero')
            return Integer(wrap_int64(INTEGER_OPERATIONS[op](left.value, right.value)))
        if op in INTEGER_COMPARISONS:
            return native_bool_to_boolean(INTEGER_COMPARISONS[op](left.value, right.value))
        return Error(f"unknown operator: {left.type_name} {op} {right.type_name}")

    def eval_string_infix_expression(self, op: str, left: String, right: String) -> Object:
        if op == '+':
            return String(left.value + right.value)
        if op in STRING_COMPARISONS:
            return native_bool_to_boolean(STRING_COMPARISONS[op](left.value, right.value))
        return Error(f"unknown operator: {left.type_name} {op} {right.type_name}")

    def eval_if_expression(self, node: IfExpression, env: Environment) -> Object:
        condition = self.evaluate(node.condition, env)
        if is_signal(condition):
            return condition
        truthy = is_truthy(condition)
        if self.debug_level >= 3:
            self.debug(f"if condition {condition.inspect()} -> {truthy}")
        if truthy:
            return self.evaluate(node.consequence, env)
        if node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return NULL

    def apply_function(self, function: Object, args: List[Object]) -> Object:
        if isinstance(function, Function):
            if len(args) != len(function.parameters):
                return Error(
                    f"wrong number of arguments. got={len(args)}, want={len(function.parameters)}"
                )
            # the new frame encloses the defining scope, not the caller's
            call_env = function.env.enclosed()
            for param, arg in zip(function.parameters, args):
                call_env.set(param.value, arg)
            if self.debug_level >= 2:
                self.debug(f"call {function!r} with ({', '.join(a.inspect() for a in args)})")
            return unwrap_return_value(self.evaluate(function.body, call_env))
        if isinstance(function, BuiltinFunction):
            if self.debug_level >= 2:
                self.debug(f"call {function!r} with ({', '.join(a.inspect() for a in args)})")
            return function(args)
        return Error(f"not a function: {function.type_name}")


def evaluate(node: Node, env: Environment) -> Object:
    """Evaluate `node` in `env` with the default builtins."""
    return Interpreter().evaluate(node, env)


def run_program(source: str, env: Optional[Environment] = None, debug_level: int = 0) -> Object:
    """Parse and evaluate Monkey source code.

    Raises ParseFailure if the source has parse diagnostics; evaluation
    failures come back as Error values.
    """
    program, errors = parse_program(source)
    if errors:
        raise ParseFailure(errors)
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run(program, env)
    finally:
        interpreter.close()


def compile_file(file_path: Union[str, Path]) -> Program:
    """Read and parse a Monkey source file, raising ParseFailure on diagnostics."""
    source = Path(file_path).read_text(encoding='utf-8')
    program, errors = parse_program(source)
    if errors:
        raise ParseFailure(errors)
    return program
