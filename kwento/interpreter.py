"""Interpreter for the Kwento language.

The interpreter walks the AST directly. `evaluate` turns an expression
into a value; `execute` runs a statement for its effect and returns either
None or a `ReturnSignal` when a `return` statement ran. Blocks, loops and
conditionals pass that signal straight up, and the function call that
started the body turns it into the call's result.

Runtime errors are raised as `KwentoError` subclasses and caught only in
`interpret`, which reports them and abandons the rest of that call.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, List, Optional, TextIO, Tuple

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Logical, Variable, Assign,
    Call, ArrayLiteral, IndexGet, IndexSet,
    Expression, Print, Var, Block, If, While, Function, Return,
)
from .callables import KwentoCallable, KwentoFunction
from .environment import Environment
from .errors import (
    Diagnostics, KwentoError, ReturnSignal, TypeMismatch, DivisionByZero,
    ArityMismatch, NotCallable, IndexOutOfBounds, ReturnOutsideFunction,
    StackOverflow,
)
from .parser import parse_program
from .std import Console, populate_std_environment
from .tokens import Token, TokenType
from .types import ArrayVal, is_number, is_truthy, to_string, type_name, values_equal

logger = logging.getLogger(__name__)

# Rebinds a value back into the place it was read from (see `_place`).
Setter = Optional[Callable[[Any], None]]


class Interpreter:
    def __init__(
        self,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        stdin: Optional[TextIO] = None,
        debug_level: int = 0,
    ):
        self.out = out if out is not None else sys.stdout
        self.diagnostics = Diagnostics(err)
        self.debug_level = debug_level
        self.console = Console(stdin)
        self.globals = Environment()
        populate_std_environment(self.globals, self.console)

    def debug(self, msg: str, level: int = 1):
        if self.debug_level >= level:
            logger.debug(msg)

    def interpret(self, statements: List[Stmt]) -> bool:
        """Run top-level statements; report and stop at the first runtime error."""
        self.debug(f"interpret {len(statements)} statements")
        try:
            for statement in statements:
                result = self.execute(statement, self.globals)
                if isinstance(result, ReturnSignal):
                    raise ReturnOutsideFunction(result.keyword, "Can't return from top-level code.")
        except RecursionError:
            # nesting too deep to evaluate, outside any call
            self.diagnostics.runtime_error(StackOverflow(None, "Expression nesting too deep."))
            return False
        except KwentoError as e:
            self.debug(f"runtime error: {e}")
            self.diagnostics.runtime_error(e)
            return False
        return True

    def run(self, source: str) -> bool:
        """Parse and run source text; nothing runs if it has syntax errors."""
        reported = len(self.diagnostics.items)
        statements = parse_program(source, self.diagnostics)
        if any(d.kind == 'syntax' for d in self.diagnostics.items[reported:]):
            return False
        return self.interpret(statements)

    # Statements

    def execute_block(self, statements: List[Stmt], env: Environment) -> Optional[ReturnSignal]:
        for statement in statements:
            result = self.execute(statement, env)
            if result is not None:
                return result
        return None

    def execute(self, stmt: Stmt, env: Environment) -> Optional[ReturnSignal]:
        if isinstance(stmt, Expression):
            self.evaluate(stmt.expression, env)
            return None
        if isinstance(stmt, Print):
            value = self.evaluate(stmt.expression, env)
            print(self.stringify(value), file=self.out)
            return None
        if isinstance(stmt, Var):
            value = None
            if stmt.initializer is not None:
                value = self.evaluate(stmt.initializer, env)
            env.define(stmt.name.lexeme, value)
            self.debug(f"declare {stmt.name.lexeme} = {self.stringify(value)}", 2)
            return None
        if isinstance(stmt, Block):
            return self.execute_block(stmt.statements, Environment(env))
        if isinstance(stmt, If):
            condition = self.evaluate(stmt.condition, env)
            self.debug(f"if condition {self.stringify(condition)}", 3)
            if is_truthy(condition):
                return self.execute(stmt.then_branch, env)
            if stmt.else_branch is not None:
                return self.execute(stmt.else_branch, env)
            return None
        if isinstance(stmt, While):
            while True:
                condition = self.evaluate(stmt.condition, env)
                self.debug(f"while condition {self.stringify(condition)}", 3)
                if not is_truthy(condition):
                    return None
                result = self.execute(stmt.body, env)
                if result is not None:
                    return result
        if isinstance(stmt, Function):
            env.define(stmt.name.lexeme, KwentoFunction(stmt, env))
            self.debug(f"define function {stmt.name.lexeme}", 2)
            return None
        if isinstance(stmt, Return):
            value = None
            if stmt.value is not None:
                value = self.evaluate(stmt.value, env)
            return ReturnSignal(value, stmt.keyword)
        raise TypeError(f"unknown statement type: {type(stmt).__name__}")

    # Expressions

    def evaluate(self, expr: Expr, env: Environment) -> Any:
        value = self._evaluate(expr, env)
        if self.debug_level >= 4:
            self.debug(f"{type(expr).__name__} -> {self.stringify(value)}", 4)
        return value

    def _evaluate(self, expr: Expr, env: Environment) -> Any:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Grouping):
            return self.evaluate(expr.expression, env)
        if isinstance(expr, Variable):
            return env.get(expr.name)
        if isinstance(expr, Assign):
            value = self.evaluate(expr.value, env)
            env.assign(expr.name, value)
            return value
        if isinstance(expr, Unary):
            return self.apply_unary_op(expr.operator, self.evaluate(expr.right, env))
        if isinstance(expr, Binary):
            left = self.evaluate(expr.left, env)
            right = self.evaluate(expr.right, env)
            return self.apply_binary_op(expr.operator, left, right)
        if isinstance(expr, Logical):
            left = self.evaluate(expr.left, env)
            if expr.operator.type == TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(expr.right, env)
        if isinstance(expr, Call):
            callee = self.evaluate(expr.callee, env)
            arguments = [self.evaluate(argument, env) for argument in expr.arguments]
            return self.call_function(callee, arguments, expr.paren)
        if isinstance(expr, ArrayLiteral):
            return ArrayVal([self.evaluate(element, env) for element in expr.elements])
        if isinstance(expr, IndexGet):
            container = self.evaluate(expr.target, env)
            index = self.evaluate(expr.index, env)
            return self.index_value(container, index, expr.bracket)
        if isinstance(expr, IndexSet):
            container, setter = self._place(expr.target, env)
            index = self.evaluate(expr.index, env)
            value = self.evaluate(expr.value, env)
            self.store_index(container, index, value, expr.bracket, setter)
            return value
        raise TypeError(f"unknown expression type: {type(expr).__name__}")

    def call_function(self, callee: Any, arguments: List[Any], paren: Token) -> Any:
        if not isinstance(callee, KwentoCallable):
            raise NotCallable(paren, f"Can only call functions, not {type_name(callee)}.")
        if len(arguments) != callee.arity():
            raise ArityMismatch(
                paren, f"Expected {callee.arity()} arguments but got {len(arguments)}."
            )
        self.debug(f"call {callee} with {len(arguments)} arguments", 2)
        try:
            return callee.call(self, arguments)
        except KwentoError as e:
            # natives raise without a token; blame the call site
            if e.token is None:
                e.token = paren
            raise
        except RecursionError:
            # the host stack ran out; unwind as a Kwento error from this call
            raise StackOverflow(paren, "Stack overflow.") from None

    def apply_unary_op(self, operator: Token, operand: Any) -> Any:
        if operator.type == TokenType.BANG:
            return not is_truthy(operand)
        if operator.type == TokenType.MINUS:
            if not is_number(operand):
                raise TypeMismatch(
                    operator, f"Operand of '-' must be a number, got {type_name(operand)}."
                )
            return -operand
        raise TypeError(f"unknown unary operator {operator.lexeme}")

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        op = operator.type
        if op == TokenType.EQUAL_EQUAL:
            return values_equal(a, b)
        if op == TokenType.BANG_EQUAL:
            return not values_equal(a, b)
        if op == TokenType.PLUS:
            return self.add(operator, a, b)

        if not (is_number(a) and is_number(b)):
            raise TypeMismatch(
                operator,
                f"Operands of '{operator.lexeme}' must be numbers, "
                f"got {type_name(a)} and {type_name(b)}.",
            )
        if op == TokenType.MINUS:
            return a - b
        if op == TokenType.STAR:
            return a * b
        if op == TokenType.SLASH:
            if b == 0.0:
                raise DivisionByZero(operator, "Division by zero.")
            return a / b
        if op == TokenType.PERCENT:
            if b == 0.0:
                raise DivisionByZero(operator, "Modulo by zero.")
            return a % b
        if op == TokenType.GREATER:
            return a > b
        if op == TokenType.GREATER_EQUAL:
            return a >= b
        if op == TokenType.LESS:
            return a < b
        if op == TokenType.LESS_EQUAL:
            return a <= b
        raise TypeError(f"unknown binary operator {operator.lexeme}")

    def add(self, operator: Token, a: Any, b: Any) -> Any:
        """`+` adds numbers and joins strings.

        When exactly one operand is a string the other one is stringified
        and appended to it, whichever side it was on: `"a" + 1` and
        `1 + "a"` both give "a1".
        """
        if is_number(a) and is_number(b):
            return a + b
        if isinstance(a, str) and isinstance(b, str):
            return a + b
        if isinstance(a, str):
            return a + self.stringify(b)
        if isinstance(b, str):
            return b + self.stringify(a)
        raise TypeMismatch(
            operator,
            f"Operands of '+' must be numbers or include a string, "
            f"got {type_name(a)} and {type_name(b)}.",
        )

    # Indexing

    def check_index(self, index: Any, length: int, bracket: Token) -> int:
        if not is_number(index) or not index.is_integer():
            raise TypeMismatch(bracket, f"Index must be an integer, got {to_string(index)}.")
        position = int(index)
        if position < 0 or position >= length:
            raise IndexOutOfBounds(bracket, position, length)
        return position

    def index_value(self, container: Any, index: Any, bracket: Token) -> Any:
        if isinstance(container, ArrayVal):
            return container.items[self.check_index(index, len(container.items), bracket)]
        if isinstance(container, str):
            return container[self.check_index(index, len(container), bracket)]
        raise TypeMismatch(bracket, f"Only arrays and strings can be indexed, not {type_name(container)}.")

    def store_index(self, container: Any, index: Any, value: Any, bracket: Token, setter: Setter):
        if isinstance(container, ArrayVal):
            container.items[self.check_index(index, len(container.items), bracket)] = value
            return
        if isinstance(container, str):
            position = self.check_index(index, len(container), bracket)
            if not isinstance(value, str):
                raise TypeMismatch(bracket, f"Can only store a string into a string, not {type_name(value)}.")
            if setter is None:
                raise TypeMismatch(bracket, "Strings are immutable; index assignment needs a variable or array slot.")
            # strings are values: build a new one and rebind the place it came from
            setter(container[:position] + value + container[position + 1:])
            return
        raise TypeMismatch(bracket, f"Only arrays and strings can be indexed, not {type_name(container)}.")

    def _place(self, expr: Expr, env: Environment) -> Tuple[Any, Setter]:
        """Evaluate `expr` once, returning its value and a way to rebind it.

        Variables rebind through the environment; an indexed element rebinds
        through its own container. Anything else has no place to write to.
        """
        if isinstance(expr, Variable):
            name = expr.name
            return env.get(name), lambda new_value: env.assign(name, new_value)
        if isinstance(expr, IndexGet):
            container, outer_setter = self._place(expr.target, env)
            index = self.evaluate(expr.index, env)
            value = self.index_value(container, index, expr.bracket)

            def setter(new_value: Any):
                self.store_index(container, index, new_value, expr.bracket, outer_setter)
            return value, setter
        if isinstance(expr, Grouping):
            return self._place(expr.expression, env)
        return self.evaluate(expr, env), None

    def stringify(self, value: Any) -> str:
        return to_string(value)


def run_program(source: str, debug_level: int = 0) -> Interpreter:
    """Parse and execute a Kwento program, returning the interpreter."""
    interpreter = Interpreter(debug_level=debug_level)
    interpreter.run(source)
    return interpreter
