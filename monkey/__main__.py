"""CLI entry point for the Monkey interpreter.

Usage:
    python -m monkey [-v|-vv|-vvv]                start an interactive session
    python -m monkey [-v...] <program_file>      run a program file
    python -m monkey --emit-ast <program_file>   write the program's AST as JSON
    python -m monkey [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given program file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. A program's final value is printed unless
it is null; an evaluation error is printed to stderr and the exit status
is 1.
"""

import argparse
import json
import sys
from pathlib import Path

from . import repl
from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .errors import MonkeyError, ParseFailure
from .interpreter import Interpreter, compile_file
from .types import NULL, Error


def execute(program: Program, debug_level: int) -> None:
    interpreter = Interpreter(debug_level=debug_level)
    try:
        result = interpreter.run(program)
    finally:
        interpreter.close()
    if isinstance(result, Error):
        print(result.inspect(), file=sys.stderr)
        sys.exit(1)
    if result is not NULL:
        print(result.inspect())


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='monkey', description="Monkey language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given program file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Monkey program file to execute; omit for interactive mode')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        if not program_file.exists():
            print(f"Error: file {program_file} not found", file=sys.stderr)
            sys.exit(1)
        try:
            program = compile_file(program_file)
        except ParseFailure as e:
            print(e, file=sys.stderr)
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        try:
            with open(ast_path, 'r', encoding='utf-8') as f:
                program = ast_from_obj(json.load(f))
        except (json.JSONDecodeError, MonkeyError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        if not isinstance(program, Program):
            print(f"Error: {ast_path} does not hold a program", file=sys.stderr)
            sys.exit(1)
        execute(program, args.v)
        return

    # No program: interactive mode
    if not args.program:
        repl.start(debug_level=args.v)
        return

    program_file = Path(args.program)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    try:
        program = compile_file(program_file)
    except ParseFailure as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    execute(program, args.v)


if __name__ == '__main__':
    main()
