"""Parenthesized prefix rendering of Kwento syntax trees, for debugging.

The expression `1 + 2 * 3` prints as `(+ 1 (* 2 3))`, which makes the
grouping the parser chose visible at a glance.
"""

from __future__ import annotations

from typing import Any, List

from .ast import (
    Literal, Grouping, Unary, Binary, Logical, Variable, Assign,
    Call, ArrayLiteral, IndexGet, IndexSet,
    Expression, Print, Var, Block, If, While, Function, Return,
)
from .types import format_number


class AstPrinter:
    def print(self, node: Any) -> str:
        if isinstance(node, Literal):
            return self.literal(node.value)
        if isinstance(node, Grouping):
            return self.parenthesize('group', node.expression)
        if isinstance(node, Unary):
            return self.parenthesize(node.operator.lexeme, node.right)
        if isinstance(node, (Binary, Logical)):
            return self.parenthesize(node.operator.lexeme, node.left, node.right)
        if isinstance(node, Variable):
            return node.name.lexeme
        if isinstance(node, Assign):
            return self.parenthesize('=', node.name.lexeme, node.value)
        if isinstance(node, Call):
            return self.parenthesize('call', node.callee, *node.arguments)
        if isinstance(node, ArrayLiteral):
            return self.parenthesize('array', *node.elements)
        if isinstance(node, IndexGet):
            return self.parenthesize('index', node.target, node.index)
        if isinstance(node, IndexSet):
            return self.parenthesize('index=', node.target, node.index, node.value)

        if isinstance(node, Expression):
            return self.parenthesize(';', node.expression)
        if isinstance(node, Print):
            return self.parenthesize('print', node.expression)
        if isinstance(node, Var):
            if node.initializer is None:
                return self.parenthesize('var', node.name.lexeme)
            return self.parenthesize('var', node.name.lexeme, node.initializer)
        if isinstance(node, Block):
            return self.parenthesize('block', *node.statements)
        if isinstance(node, If):
            if node.else_branch is None:
                return self.parenthesize('if', node.condition, node.then_branch)
            return self.parenthesize('if-else', node.condition, node.then_branch, node.else_branch)
        if isinstance(node, While):
            return self.parenthesize('while', node.condition, node.body)
        if isinstance(node, Function):
            params = '(' + ' '.join(p.lexeme for p in node.params) + ')'
            return self.parenthesize('fun', node.name.lexeme, params, *node.body)
        if isinstance(node, Return):
            if node.value is None:
                return '(return)'
            return self.parenthesize('return', node.value)
        raise TypeError(f"cannot print {type(node).__name__}")

    def print_program(self, statements: List[Any]) -> str:
        return '\n'.join(self.print(stmt) for stmt in statements)

    def literal(self, value: Any) -> str:
        if value is None:
            return 'nil'
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if isinstance(value, float):
            return format_number(value)
        return repr(value)

    def parenthesize(self, name: str, *parts: Any) -> str:
        pieces = [name]
        for part in parts:
            pieces.append(part if isinstance(part, str) else self.print(part))
        return '(' + ' '.join(pieces) + ')'
