from typing import Dict, Optional

from monkey.types import Error, Object, ReturnValue


class Environment:
    """A lexical scope frame mapping names to values.

    Frames only point outwards, so a chain never forms a cycle. Any number
    of closures and call frames may share the same outer frame.
    """
    def __init__(self, outer: Optional['Environment'] = None):
        self.outer = outer
        self.values: Dict[str, Object] = {}

    def get(self, name: str) -> Optional[Object]:
        """Resolve `name` innermost-first; None means it is bound nowhere."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.outer
        return None

    def set(self, name: str, value: Object) -> Object:
        """Bind `name` in this frame, shadowing any outer binding."""
        if isinstance(value, (ReturnValue, Error)):
            raise TypeError(f"cannot bind internal {value.type_name} value to {name}")
        self.values[name] = value
        return value

    def enclosed(self) -> 'Environment':
        return Environment(outer=self)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None
