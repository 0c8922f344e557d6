from typing import List

from monkey.types import Error, Integer, Object, String


def std_len(args: List[Object]) -> Object:
    arg = args[0]
    if isinstance(arg, String):
        return Integer(len(arg.value))
    return Error(f"argument to `len` not supported, got {arg.type_name}")


def std_count(args: List[Object]) -> Object:
    """Count the non-overlapping occurrences of args[1] in args[0]."""
    haystack, needle = args
    if not isinstance(haystack, String):
        return Error(f"argument 0 to `count` not supported, got {haystack.type_name}")
    if not isinstance(needle, String):
        return Error(f"argument 1 to `count` not supported, got {needle.type_name}")
    return Integer(haystack.value.count(needle.value))
