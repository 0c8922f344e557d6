"""Interactive mode for the Monkey interpreter. Uses cmd as backend.

Every line is parsed on its own and, if it parsed cleanly, evaluated
against one environment that lives for the whole session, so bindings
made on earlier lines stay visible to later ones.

`exit` and `help` only act as shell commands when they stand alone and
the session has not bound the name; anything else is Monkey source.
"""

import cmd
from typing import List, Optional, TextIO

from termcolor import colored

from .environment import Environment
from .interpreter import Interpreter
from .parser import parse_program
from .types import NULL, is_error

MONKEY_FACE = r'''
     w  c(..)o   (
      \__(-)    __)
          /\   (
         /(_)___)
         w /|
          | \
         m  m
'''

ERROR = 'red'

SHELL_COMMANDS = ('exit', 'help', 'EOF')


class LineReader:
    """Line source for the shell that remembers reaching the end of input.

    cmd reports end of input as the line 'EOF', which a user can also type;
    `exhausted` tells the two apart.
    """
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.exhausted = False

    def readline(self) -> str:
        if self.stream is None:
            # interactive terminal
            try:
                line = input() + '\n'
            except EOFError:
                line = ''
        else:
            line = self.stream.readline()
        if not line:
            self.exhausted = True
        return line


class Shell(cmd.Cmd):
    """Monkey interpreter shell."""
    intro = "Hello! This is the Monkey programming language!\nType in commands, 'exit' to leave."
    prompt = '>> '

    def __init__(self, interpreter: Optional[Interpreter] = None, env: Optional[Environment] = None,
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.reader = LineReader(stdin)
        super().__init__(stdin=self.reader, stdout=stdout)
        self.use_rawinput = False

        self.interpreter = interpreter if interpreter is not None else Interpreter(out=self.stdout)
        self.env = env if env is not None else self.interpreter.global_env

    def parseline(self, line):
        command, arg, line = super().parseline(line)
        if command in SHELL_COMMANDS and not self.is_command(command, arg):
            # no command: onecmd hands the whole line to default()
            return None, None, line
        return command, arg, line

    def is_command(self, name: str, arg: str) -> bool:
        if name == 'EOF':
            return self.reader.exhausted
        return not arg.strip() and name not in self.env

    def default(self, line):
        """Parses and evaluates one line of Monkey source."""
        program, errors = parse_program(line)
        if errors:
            self.print_parser_errors(errors)
            return

        result = self.interpreter.run(program, self.env)
        if result is NULL:
            return
        text = result.inspect()
        if is_error(result):
            text = colored(text, ERROR, attrs=['bold'])
        print(text, file=self.stdout)

    def print_parser_errors(self, errors: List[str]):
        self.stdout.write(MONKEY_FACE)
        self.stdout.write('Looks like we ran into some monkey business here...\n')
        self.stdout.write(colored('parser errors:', ERROR, attrs=['bold']) + '\n')
        for msg in errors:
            self.stdout.write(f"\t{msg}\n")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_help(self, arg):
        """Prints a short introduction to the language."""
        self.stdout.write(
            "Monkey is a small expression language with first-class functions.\n\n"
            "  let add = fn(a, b) { a + b };   bind a name\n"
            "  add(2, 3)                        call a function\n"
            "  if (5 > 3) { 10 } else { 20 }    conditionals are expressions\n\n"
            "Builtins: len(s), count(s, sub), puts(x, ...). Type 'exit' to leave.\n"
        )

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write('\n')
        return True

    def do_exit(self, arg):
        """Exits interpreter."""
        return True


def start(stdin=None, stdout=None, debug_level: int = 0) -> None:
    """Runs an interactive session until `exit`, end of input or Ctrl-C."""
    interpreter = Interpreter(debug_level=debug_level, out=stdout)
    shell = Shell(interpreter, stdin=stdin, stdout=stdout)
    try:
        shell.cmdloop()
    except KeyboardInterrupt:
        shell.stdout.write('\n')
    finally:
        interpreter.close()
