from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, List

from .environment import Environment
from .errors import ReturnSignal

if TYPE_CHECKING:
    from .ast import Function
    from .interpreter import Interpreter


class KwentoCallable(ABC):
    """Anything a Kwento call expression can invoke.

    The interpreter checks the argument count against `arity()` before
    calling, so implementations can rely on receiving exactly that many
    arguments.
    """

    @abstractmethod
    def arity(self) -> int:
        ...

    @abstractmethod
    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        ...


@dataclass(eq=False)
class NativeFunction(KwentoCallable):
    name: str
    param_count: int
    fn: Callable[[List[Any]], Any]

    def arity(self) -> int:
        return self.param_count

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        return self.fn(arguments)

    def __str__(self) -> str:
        return f"<native fn {self.name}>"


class KwentoFunction(KwentoCallable):
    """A user-defined function together with the scope it was declared in."""

    def __init__(self, declaration: 'Function', closure: 'Environment'):
        self.declaration = declaration
        self.closure = closure

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    def arity(self) -> int:
        return len(self.declaration.params)

    def call(self, interpreter: 'Interpreter', arguments: List[Any]) -> Any:
        env = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            env.define(param.lexeme, argument)
        result = interpreter.execute_block(self.declaration.body, env)
        if isinstance(result, ReturnSignal):
            return result.value
        return None

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    def __repr__(self) -> str:
        return f"<fn {self.name}/{self.arity()}>"
