from typing import Any, Dict, Optional

from .errors import UndefinedVariable
from .tokens import Token


class Environment:
    """A scope mapping names to values, linked to its enclosing scope.

    Children hold a reference to their parent rather than a copy, so a
    closure that captured an outer scope sees later changes to it.
    """

    def __init__(self, enclosing: Optional['Environment'] = None):
        self.enclosing = enclosing
        self.values: Dict[str, Any] = {}

    def define(self, name: str, value: Any):
        # always the current scope; shadowing an outer binding is allowed
        self.values[name] = value

    def get(self, name: Token) -> Any:
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        if self.enclosing is not None:
            return self.enclosing.get(name)
        raise UndefinedVariable(name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name: Token, value: Any):
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
            return
        if self.enclosing is not None:
            self.enclosing.assign(name, value)
            return
        raise UndefinedVariable(name, f"Undefined variable '{name.lexeme}'.")

    def __contains__(self, name: str) -> bool:
        if name in self.values:
            return True
        return self.enclosing is not None and name in self.enclosing
