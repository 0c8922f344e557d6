"""JSON serialization/deserialization for the Monkey AST.

This module converts between Monkey AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node keeps its
originating token, so a tree read back from JSON is indistinguishable
from the one the parser produced.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .ast import (
    Program,
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    BlockStatement,
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    StringLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
)
from .errors import AstFormatError
from .token import Token, TokenType


def token_to_obj(token: Token) -> Dict[str, str]:
    return {"type": token.type.value, "literal": token.literal}


def token_from_obj(o: Dict[str, str]) -> Token:
    return Token(TokenType(o["type"]), o["literal"])


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {"type": "Program", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, LetStatement):
        return {
            "type": "LetStatement",
            "token": token_to_obj(node.token),
            "name": ast_to_obj(node.name),
            "value": ast_to_obj(node.value),
        }
    if isinstance(node, ReturnStatement):
        return {"type": "ReturnStatement", "token": token_to_obj(node.token), "value": ast_to_obj(node.value)}
    if isinstance(node, ExpressionStatement):
        return {
            "type": "ExpressionStatement",
            "token": token_to_obj(node.token),
            "expression": ast_to_obj(node.expression),
        }
    if isinstance(node, BlockStatement):
        return {
            "type": "BlockStatement",
            "token": token_to_obj(node.token),
            "statements": [ast_to_obj(s) for s in node.statements],
        }
    if isinstance(node, Identifier):
        return {"type": "Identifier", "token": token_to_obj(node.token), "value": node.value}
    if isinstance(node, IntegerLiteral):
        return {"type": "IntegerLiteral", "token": token_to_obj(node.token), "value": node.value}
    if isinstance(node, BooleanLiteral):
        return {"type": "BooleanLiteral", "token": token_to_obj(node.token), "value": node.value}
    if isinstance(node, StringLiteral):
        return {"type": "StringLiteral", "token": token_to_obj(node.token), "value": node.value}
    if isinstance(node, PrefixExpression):
        return {
            "type": "PrefixExpression",
            "token": token_to_obj(node.token),
            "operator": node.operator,
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, InfixExpression):
        return {
            "type": "InfixExpression",
            "token": token_to_obj(node.token),
            "left": ast_to_obj(node.left),
            "operator": node.operator,
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, IfExpression):
        return {
            "type": "IfExpression",
            "token": token_to_obj(node.token),
            "condition": ast_to_obj(node.condition),
            "consequence": ast_to_obj(node.consequence),
            "alternative": ast_to_obj(node.alternative),
        }
    if isinstance(node, FunctionLiteral):
        return {
            "type": "FunctionLiteral",
            "token": token_to_obj(node.token),
            "parameters": [ast_to_obj(p) for p in node.parameters],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, CallExpression):
        return {
            "type": "CallExpression",
            "token": token_to_obj(node.token),
            "function": ast_to_obj(node.function),
            "arguments": [ast_to_obj(a) for a in node.arguments],
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def _node_from_obj(obj: Optional[Dict[str, Any]]) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise AstFormatError(f"invalid AST object: {obj!r}")
    t = obj.get("type")
    if t == "Program":
        return Program([_node_from_obj(s) for s in obj["statements"]])

    token = token_from_obj(obj["token"])
    if t == "LetStatement":
        return LetStatement(token, _node_from_obj(obj["name"]), _node_from_obj(obj.get("value")))
    if t == "ReturnStatement":
        return ReturnStatement(token, _node_from_obj(obj.get("value")))
    if t == "ExpressionStatement":
        return ExpressionStatement(token, _node_from_obj(obj.get("expression")))
    if t == "BlockStatement":
        return BlockStatement(token, [_node_from_obj(s) for s in obj["statements"]])
    if t == "Identifier":
        return Identifier(token, obj["value"])
    if t == "IntegerLiteral":
        return IntegerLiteral(token, int(obj["value"]))
    if t == "BooleanLiteral":
        return BooleanLiteral(token, bool(obj["value"]))
    if t == "StringLiteral":
        return StringLiteral(token, obj["value"])
    if t == "PrefixExpression":
        return PrefixExpression(token, obj["operator"], _node_from_obj(obj["right"]))
    if t == "InfixExpression":
        return InfixExpression(
            token, _node_from_obj(obj["left"]), obj["operator"], _node_from_obj(obj["right"])
        )
    if t == "IfExpression":
        return IfExpression(
            token,
            _node_from_obj(obj["condition"]),
            _node_from_obj(obj["consequence"]),
            _node_from_obj(obj.get("alternative")),
        )
    if t == "FunctionLiteral":
        return FunctionLiteral(
            token, [_node_from_obj(p) for p in obj["parameters"]], _node_from_obj(obj["body"])
        )
    if t == "CallExpression":
        return CallExpression(
            token, _node_from_obj(obj["function"]), [_node_from_obj(a) for a in obj["arguments"]]
        )

    raise AstFormatError(f"unknown AST node type: {t}")


def ast_from_obj(obj: Any) -> Any:
    """Rebuild an AST from the output of `ast_to_obj`.

    Raises AstFormatError when the object is not a well-formed AST.
    """
    try:
        return _node_from_obj(obj)
    except (KeyError, ValueError, TypeError) as e:
        raise AstFormatError(f"malformed AST object: {e}") from e
