from typing import Optional


class ConfigError(Exception):
    """A game-config file that does not compile."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(str(self))

    def __str__(self):
        if self.line is None:
            return self.message
        if self.column is None:
            return f"[line {self.line}] {self.message}"
        return f"[line {self.line}, column {self.column}] {self.message}"
