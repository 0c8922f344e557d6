import sys
from typing import List, Optional, TextIO

from monkey.types import NULL, Object


class BasicIO:
    """Console output for Monkey programs."""
    def __init__(self, out: Optional[TextIO] = None):
        self._out = out

    @property
    def out(self) -> TextIO:
        # resolved lazily so redirected stdout (e.g. under test capture) is honoured
        return self._out if self._out is not None else sys.stdout

    def puts(self, args: List[Object]) -> Object:
        for arg in args:
            print(arg.inspect(), file=self.out)
        return NULL
