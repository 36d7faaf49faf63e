from typing import Any, List

from kwento.callables import NativeFunction
from kwento.environment import Environment
from kwento.errors import TypeMismatch
from kwento.types import ArrayVal, to_string, type_name

from .console import Console


def populate_std_environment(env: Environment, console: Console) -> Environment:
    """Define the native functions every program starts with."""

    def std_clock(args: List[Any]) -> Any:
        return console.clock()

    def std_input(args: List[Any]) -> Any:
        return console.read_line()

    def std_len(args: List[Any]) -> Any:
        value = args[0]
        if isinstance(value, str):
            return float(len(value))
        if isinstance(value, ArrayVal):
            return float(len(value.items))
        raise TypeMismatch(None, f"len expects a string or array, got {type_name(value)}.")

    def std_concat(args: List[Any]) -> Any:
        return to_string(args[0]) + to_string(args[1])

    def std_push(args: List[Any]) -> Any:
        array, value = args
        if not isinstance(array, ArrayVal):
            raise TypeMismatch(None, f"push expects an array, got {type_name(array)}.")
        array.items.append(value)
        return array

    env.define('clock', NativeFunction('clock', 0, std_clock))
    env.define('input', NativeFunction('input', 0, std_input))
    env.define('len', NativeFunction('len', 1, std_len))
    env.define('concat', NativeFunction('concat', 2, std_concat))
    env.define('push', NativeFunction('push', 2, std_push))
    return env


__all__ = ['Console', 'populate_std_environment']
