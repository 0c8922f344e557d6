from dataclasses import dataclass
from typing import Callable, ClassVar, List, Optional

from monkey.types import BUILTIN_OBJ, Error, Object


@dataclass(eq=False)
class BuiltinFunction(Object):
    type_name: ClassVar[str] = BUILTIN_OBJ
    name: str
    arity: Optional[int]
    fn: Callable[[List[Object]], Object]

    def __call__(self, args: List[Object]) -> Object:
        if self.arity is not None and len(args) != self.arity:
            return Error(f"wrong number of arguments. got={len(args)}, want={self.arity}")
        return self.fn(args)

    def inspect(self) -> str:
        return 'builtin function'

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
