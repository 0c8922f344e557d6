from typing import List


class MonkeyError(Exception):
    """Base class for host-level failures at the interpreter's outer surfaces.

    Evaluation failures are never raised; they are `monkey.types.Error`
    values. These exceptions only report problems that prevent evaluation
    from starting.
    """


class ParseFailure(MonkeyError):
    """Raised when source text produced parse diagnostics."""
    def __init__(self, errors: List[str]):
        super().__init__('parser errors:\n' + '\n'.join(f"\t{msg}" for msg in errors))
        self.errors = errors


class AstFormatError(MonkeyError):
    """Raised when an AST JSON document cannot be turned back into nodes."""
