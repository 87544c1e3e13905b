"""Canonical structured form of the AST.

Every node serializes as ``{"type": <node code>, "data": {...}}`` and every
embedded token as ``{"type": <token code>, "value", "line", "column"}``.
Absent optional fields are written as ``null``. Implementations in other
languages emit the same shape, so outputs for the same input can be diffed
directly.

Both directions dispatch on the node kind with one writer and one reader per
variant. Expression chains nest one level per operand, so they are walked
with a loop rather than by recursion.
"""

import json
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from ast_benchmark.errors import OutputError
from ast_benchmark.models import (
    ASTNode,
    AssignmentStatement,
    Condition,
    Expression,
    IfStatement,
    NodeKind,
    Program,
    StatementBlock,
    Token,
    VariableStatement,
    WhileStatement,
)


# ---------- WRITING ----------

def _token_data(token: Token) -> dict[str, Any]:
    return token.model_dump(mode="json", by_alias=True)


def _tagged(kind: NodeKind, data: dict[str, Any]) -> dict[str, Any]:
    return {"type": int(kind), "data": data}


def _expression_data(node: Expression) -> dict[str, Any]:
    chain = []
    while node is not None:
        chain.append(node)
        node = node.right

    # Build from the innermost operand outwards
    serialized = None
    for expression in reversed(chain):
        serialized = _tagged(NodeKind.EXPRESSION, {
            "leftToken": _token_data(expression.left_token),
            "operator": expression.operator,
            "right": serialized,
        })
    return serialized["data"]


def _condition_data(node: Condition) -> dict[str, Any]:
    return {
        "left": serialize(node.left),
        "operator": node.operator,
        "right": serialize(node.right),
    }


def _if_data(node: IfStatement) -> dict[str, Any]:
    return {
        "condition": serialize(node.condition),
        "block": serialize(node.block),
        "elseBlock": None if node.else_block is None else serialize(node.else_block),
    }


_WRITERS: dict[NodeKind, Callable[[Any], dict[str, Any]]] = {
    NodeKind.PROGRAM: lambda node: {"block": serialize(node.block)},
    NodeKind.STATEMENT_BLOCK: lambda node: {
        "statements": [serialize(statement) for statement in node.statements]
    },
    NodeKind.VARIABLE_STATEMENT: lambda node: {"identifier": node.identifier},
    NodeKind.IF_STATEMENT: _if_data,
    NodeKind.WHILE_STATEMENT: lambda node: {
        "condition": serialize(node.condition),
        "block": serialize(node.block),
    },
    NodeKind.ASSIGNMENT_STATEMENT: lambda node: {
        "identifier": node.identifier,
        "value": serialize(node.value),
    },
    NodeKind.CONDITION: _condition_data,
    NodeKind.EXPRESSION: _expression_data,
}


def serialize(node: ASTNode) -> dict[str, Any]:
    """Convert a node and its subtree to plain JSON-compatible data."""
    return _tagged(node.kind, _WRITERS[node.kind](node))


def to_json(node: ASTNode, indent: int | None = 2) -> str:
    """Render a node as JSON text.

    Args:
        node: Root of the subtree to render.
        indent: Indentation width, or None for compact output.

    Raises:
        OutputError: If the tree nests deeper than the JSON encoder can follow.
    """
    data = serialize(node)
    try:
        return json.dumps(data, indent=indent, ensure_ascii=False)
    except RecursionError as e:
        raise OutputError(f"{node.kind.name} tree is nested too deeply to render as JSON") from e


# ---------- READING ----------

def _payload(data: Any, kind: NodeKind | None = None) -> tuple[NodeKind, dict[str, Any]]:
    """Split a tagged node into its kind and payload, checking the kind if given."""
    try:
        found = NodeKind(data["type"])
        payload = data["data"]
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Not a serialized AST node: {e}") from e
    if not isinstance(payload, dict):
        raise ValueError(f"{found.name} payload must be an object, got {type(payload).__name__}")
    if kind is not None and found != kind:
        raise ValueError(f"expected a {kind.name} node, got {found.name}")
    return found, payload


def _read_expression(payload: dict[str, Any]) -> Expression:
    chain = [payload]
    while payload.get("right") is not None:
        _, payload = _payload(payload["right"], NodeKind.EXPRESSION)
        chain.append(payload)

    # Build from the innermost operand outwards
    expression = None
    for fields in reversed(chain):
        expression = Expression.model_validate({**fields, "right": expression})
    return expression


def _read_child(data: Any, kind: NodeKind) -> ASTNode:
    _, payload = _payload(data, kind)
    return _READERS[kind](payload)


def _read_condition(payload: dict[str, Any]) -> Condition:
    return Condition.model_validate({
        **payload,
        "left": _read_child(payload.get("left"), NodeKind.EXPRESSION),
        "right": _read_child(payload.get("right"), NodeKind.EXPRESSION),
    })


def _read_if(payload: dict[str, Any]) -> IfStatement:
    else_block = payload.get("elseBlock")
    return IfStatement.model_validate({
        "condition": _read_child(payload.get("condition"), NodeKind.CONDITION),
        "block": _read_child(payload.get("block"), NodeKind.STATEMENT_BLOCK),
        "elseBlock": None if else_block is None else _read_child(else_block, NodeKind.STATEMENT_BLOCK),
    })


def _read_statements(payload: dict[str, Any]) -> StatementBlock:
    statements = payload.get("statements")
    if not isinstance(statements, list):
        raise ValueError("STATEMENT_BLOCK payload needs a list of statements")
    return StatementBlock(statements=[_read(statement) for statement in statements])


_READERS: dict[NodeKind, Callable[[dict[str, Any]], ASTNode]] = {
    NodeKind.PROGRAM: lambda payload: Program(block=_read_child(payload.get("block"), NodeKind.STATEMENT_BLOCK)),
    NodeKind.STATEMENT_BLOCK: _read_statements,
    NodeKind.VARIABLE_STATEMENT: VariableStatement.model_validate,
    NodeKind.IF_STATEMENT: _read_if,
    NodeKind.WHILE_STATEMENT: lambda payload: WhileStatement(
        condition=_read_child(payload.get("condition"), NodeKind.CONDITION),
        block=_read_child(payload.get("block"), NodeKind.STATEMENT_BLOCK),
    ),
    NodeKind.ASSIGNMENT_STATEMENT: lambda payload: AssignmentStatement.model_validate({
        **payload,
        "value": _read_child(payload.get("value"), NodeKind.EXPRESSION),
    }),
    NodeKind.CONDITION: _read_condition,
    NodeKind.EXPRESSION: _read_expression,
}


def _read(data: Any) -> ASTNode:
    kind, payload = _payload(data)
    return _READERS[kind](payload)


def deserialize(data: dict[str, Any]) -> ASTNode:
    """Rebuild a node from its structured form.

    Args:
        data: A ``{"type": ..., "data": ...}`` mapping, e.g. loaded from
            another implementation's output.

    Returns:
        The node variant named by ``type``.

    Raises:
        ValueError: If a type code is unknown or a payload does not
            match its variant.
    """
    try:
        return _read(data)
    except ValidationError as e:
        raise ValueError(f"Invalid AST payload: {e}") from e


def from_json(text: str) -> ASTNode:
    """Parse JSON text produced by :func:`to_json`."""
    return deserialize(json.loads(text))
