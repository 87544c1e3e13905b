"""Data models for tokens and AST nodes.

This module provides Pydantic-validated models for:
- Token / TokenKind: lexical units and their fixed codes
- ASTNode and its variants: the typed syntax tree
"""

from .tokens import Token, TokenKind, KEYWORDS
from .ast_nodes import (
    ASTNode,
    AssignmentStatement,
    Condition,
    Expression,
    IfStatement,
    NodeKind,
    Program,
    Statement,
    StatementBlock,
    VariableStatement,
    WhileStatement,
)

__all__ = [
    "Token",
    "TokenKind",
    "KEYWORDS",
    "ASTNode",
    "AssignmentStatement",
    "Condition",
    "Expression",
    "IfStatement",
    "NodeKind",
    "Program",
    "Statement",
    "StatementBlock",
    "VariableStatement",
    "WhileStatement",
]
