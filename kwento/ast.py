"""Abstract Syntax Tree (AST) definitions for the Kwento language.

The parser builds these nodes and the interpreter walks them. Expressions
evaluate to values; statements are executed for their effect. Nodes keep
the tokens they were built from so runtime errors can report a line.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from .tokens import Token


@dataclass
class Expr:
    """Base class for expression nodes."""
    pass


@dataclass
class Stmt:
    """Base class for statement nodes."""
    pass


# Expressions

@dataclass
class Literal(Expr):
    value: Any


@dataclass
class Grouping(Expr):
    expression: Expr


@dataclass
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass
class Logical(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass
class Variable(Expr):
    name: Token


@dataclass
class Assign(Expr):
    name: Token
    value: Expr


@dataclass
class Call(Expr):
    callee: Expr
    paren: Token
    arguments: List[Expr]


@dataclass
class ArrayLiteral(Expr):
    bracket: Token
    elements: List[Expr]


@dataclass
class IndexGet(Expr):
    target: Expr
    bracket: Token
    index: Expr


@dataclass
class IndexSet(Expr):
    target: Expr
    bracket: Token
    index: Expr
    value: Expr


# Statements

@dataclass
class Expression(Stmt):
    expression: Expr


@dataclass
class Print(Stmt):
    expression: Expr


@dataclass
class Var(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass
class Block(Stmt):
    statements: List[Stmt]


@dataclass
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass
class Function(Stmt):
    name: Token
    params: List[Token]
    body: List[Stmt]


@dataclass
class Return(Stmt):
    keyword: Token
    value: Optional[Expr]
