"""JSON serialization/deserialization for the Kwento AST.

This module converts between Kwento AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Tokens are stored with
their kind, lexeme, literal and line so that a program loaded back from
JSON reports runtime errors on the same lines as the source did.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Literal, Grouping, Unary, Binary, Logical, Variable, Assign,
    Call, ArrayLiteral, IndexGet, IndexSet,
    Expression, Print, Var, Block, If, While, Function, Return,
)
from .tokens import Token, TokenType


def token_to_obj(token: Token) -> Dict[str, Any]:
    return {
        "kind": token.type.name,
        "lexeme": token.lexeme,
        "literal": token.literal,
        "line": token.line,
    }


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(TokenType[o["kind"]], o["lexeme"], o.get("literal"), o["line"])


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None
    if isinstance(node, list):
        return [ast_to_obj(n) for n in node]

    # Expressions
    if isinstance(node, Literal):
        return {"type": "Literal", "value": node.value}
    if isinstance(node, Grouping):
        return {"type": "Grouping", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Unary):
        return {"type": "Unary", "operator": token_to_obj(node.operator), "right": ast_to_obj(node.right)}
    if isinstance(node, (Binary, Logical)):
        return {
            "type": type(node).__name__,
            "left": ast_to_obj(node.left),
            "operator": token_to_obj(node.operator),
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, Variable):
        return {"type": "Variable", "name": token_to_obj(node.name)}
    if isinstance(node, Assign):
        return {"type": "Assign", "name": token_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, Call):
        return {
            "type": "Call",
            "callee": ast_to_obj(node.callee),
            "paren": token_to_obj(node.paren),
            "arguments": ast_to_obj(node.arguments),
        }
    if isinstance(node, ArrayLiteral):
        return {"type": "ArrayLiteral", "bracket": token_to_obj(node.bracket), "elements": ast_to_obj(node.elements)}
    if isinstance(node, IndexGet):
        return {
            "type": "IndexGet",
            "target": ast_to_obj(node.target),
            "bracket": token_to_obj(node.bracket),
            "index": ast_to_obj(node.index),
        }
    if isinstance(node, IndexSet):
        return {
            "type": "IndexSet",
            "target": ast_to_obj(node.target),
            "bracket": token_to_obj(node.bracket),
            "index": ast_to_obj(node.index),
            "value": ast_to_obj(node.value),
        }

    # Statements
    if isinstance(node, Expression):
        return {"type": "Expression", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Print):
        return {"type": "Print", "expression": ast_to_obj(node.expression)}
    if isinstance(node, Var):
        return {"type": "Var", "name": token_to_obj(node.name), "initializer": ast_to_obj(node.initializer)}
    if isinstance(node, Block):
        return {"type": "Block", "statements": ast_to_obj(node.statements)}
    if isinstance(node, If):
        return {
            "type": "If",
            "condition": ast_to_obj(node.condition),
            "then_branch": ast_to_obj(node.then_branch),
            "else_branch": ast_to_obj(node.else_branch),
        }
    if isinstance(node, While):
        return {"type": "While", "condition": ast_to_obj(node.condition), "body": ast_to_obj(node.body)}
    if isinstance(node, Function):
        return {
            "type": "Function",
            "name": token_to_obj(node.name),
            "params": [token_to_obj(p) for p in node.params],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, Return):
        return {"type": "Return", "keyword": token_to_obj(node.keyword), "value": ast_to_obj(node.value)}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, list):
        return [ast_from_obj(o) for o in obj]
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")

    if t == "Literal":
        value = obj["value"]
        # JSON has no float/int distinction; Kwento numbers are floats
        if isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        return Literal(value)
    if t == "Grouping":
        return Grouping(ast_from_obj(obj["expression"]))
    if t == "Unary":
        return Unary(token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Binary":
        return Binary(ast_from_obj(obj["left"]), token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Logical":
        return Logical(ast_from_obj(obj["left"]), token_from_obj(obj["operator"]), ast_from_obj(obj["right"]))
    if t == "Variable":
        return Variable(token_from_obj(obj["name"]))
    if t == "Assign":
        return Assign(token_from_obj(obj["name"]), ast_from_obj(obj["value"]))
    if t == "Call":
        return Call(ast_from_obj(obj["callee"]), token_from_obj(obj["paren"]), ast_from_obj(obj["arguments"]))
    if t == "ArrayLiteral":
        return ArrayLiteral(token_from_obj(obj["bracket"]), ast_from_obj(obj["elements"]))
    if t == "IndexGet":
        return IndexGet(ast_from_obj(obj["target"]), token_from_obj(obj["bracket"]), ast_from_obj(obj["index"]))
    if t == "IndexSet":
        return IndexSet(
            ast_from_obj(obj["target"]),
            token_from_obj(obj["bracket"]),
            ast_from_obj(obj["index"]),
            ast_from_obj(obj["value"]),
        )

    if t == "Expression":
        return Expression(ast_from_obj(obj["expression"]))
    if t == "Print":
        return Print(ast_from_obj(obj["expression"]))
    if t == "Var":
        return Var(token_from_obj(obj["name"]), ast_from_obj(obj.get("initializer")))
    if t == "Block":
        return Block(ast_from_obj(obj["statements"]))
    if t == "If":
        return If(
            ast_from_obj(obj["condition"]),
            ast_from_obj(obj["then_branch"]),
            ast_from_obj(obj.get("else_branch")),
        )
    if t == "While":
        return While(ast_from_obj(obj["condition"]), ast_from_obj(obj["body"]))
    if t == "Function":
        return Function(
            token_from_obj(obj["name"]),
            [token_from_obj(p) for p in obj["params"]],
            ast_from_obj(obj["body"]),
        )
    if t == "Return":
        return Return(token_from_obj(obj["keyword"]), ast_from_obj(obj.get("value")))

    raise ValueError(f"Unknown AST node type: {t}")


def program_to_obj(statements: List[Any]) -> Dict[str, Any]:
    return {"type": "Program", "statements": ast_to_obj(statements)}


def program_from_obj(obj: Dict[str, Any]) -> List[Any]:
    if obj.get("type") != "Program":
        raise ValueError("AST JSON must hold a Program object")
    return ast_from_obj(obj["statements"])
