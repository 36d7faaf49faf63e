"""Errors, diagnostics and control signals for Kwento.

Compile-time problems (bad characters, malformed statements) are reported
to a `Diagnostics` collector and never stop the scanner or parser. Runtime
problems are raised as `KwentoError` subclasses and caught once, at the top
of `Interpreter.interpret`.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, List, Optional, TextIO

from .tokens import Token, TokenType

logger = logging.getLogger(__name__)


@dataclass
class Diagnostic:
    line: int
    message: str
    kind: str = 'syntax'  # 'syntax' or 'runtime'
    name: Optional[str] = None
    where: str = ''

    def __str__(self) -> str:
        if self.kind == 'runtime':
            return f"[line {self.line}] Runtime error ({self.name}): {self.message}"
        return f"[line {self.line}] Error{self.where}: {self.message}"


class Diagnostics:
    """Ordered stream of diagnostics.

    Every report is kept in `items` and echoed to `stream` (stderr unless
    another text stream is given) as soon as it happens, so the order of
    the stream matches the order in which problems were found.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.items: List[Diagnostic] = []
        self.had_error = False
        self.had_runtime_error = False

    def _emit(self, diagnostic: Diagnostic):
        self.items.append(diagnostic)
        logger.debug("diagnostic: %s", diagnostic)
        stream = self.stream if self.stream is not None else sys.stderr
        print(str(diagnostic), file=stream)

    def error(self, line: int, message: str):
        self.had_error = True
        self._emit(Diagnostic(line, message))

    def error_at(self, token: Token, message: str):
        if token.type == TokenType.EOF:
            where = ' at end'
        else:
            where = f" at '{token.lexeme}'"
        self.had_error = True
        self._emit(Diagnostic(token.line, message, where=where))

    def runtime_error(self, err: 'KwentoError'):
        self.had_runtime_error = True
        self._emit(Diagnostic(err.line, err.message, kind='runtime', name=err.name))

    @property
    def messages(self) -> List[str]:
        return [str(d) for d in self.items]

    def reset(self):
        self.items.clear()
        self.had_error = False
        self.had_runtime_error = False


class ParseError(Exception):
    """Raised inside the parser to unwind to the nearest statement boundary."""


class KwentoError(Exception):
    """Base class of all Kwento runtime errors."""

    name = 'RuntimeError'

    def __init__(self, token: Optional[Token], message: str):
        super().__init__(message)
        self.token = token
        self.message = message

    @property
    def line(self) -> int:
        return self.token.line if self.token is not None else 0

    def __str__(self) -> str:
        return f"{self.name}: {self.message}"


class TypeMismatch(KwentoError):
    name = 'TypeMismatch'


class DivisionByZero(KwentoError):
    name = 'DivisionByZero'


class UndefinedVariable(KwentoError):
    name = 'UndefinedVariable'


class ArityMismatch(KwentoError):
    name = 'ArityMismatch'


class NotCallable(KwentoError):
    name = 'NotCallable'


class IndexOutOfBounds(KwentoError):
    name = 'IndexOutOfBounds'

    def __init__(self, token: Optional[Token], index: int, length: int):
        super().__init__(token, f"index {index} out of bounds for length {length}")
        self.index = index
        self.length = length


class ReturnOutsideFunction(KwentoError):
    name = 'ReturnOutsideFunction'


class StackOverflow(KwentoError):
    name = 'StackOverflow'


@dataclass(frozen=True)
class ReturnSignal:
    """Result of executing a `return` statement.

    Statement execution yields either None (completed normally) or one of
    these. Blocks, loops and conditionals hand it upward untouched until a
    function call turns it into the call's value.
    """
    value: Any
    keyword: Optional[Token] = field(default=None, compare=False)
