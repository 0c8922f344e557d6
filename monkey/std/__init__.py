from typing import Dict, Optional, TextIO

from monkey.builtin_function import BuiltinFunction

from .basic_io import BasicIO
from .strings import std_count, std_len


def populate_builtins(out: Optional[TextIO] = None) -> Dict[str, BuiltinFunction]:
    """Build the table of builtin functions, keyed by name.

    `out` is where `puts` writes; it defaults to the current sys.stdout.
    """
    basic_io = BasicIO(out)
    builtins = [
        BuiltinFunction('len', 1, std_len),
        BuiltinFunction('count', 2, std_count),
        BuiltinFunction('puts', None, basic_io.puts),
    ]
    return {b.name: b for b in builtins}
