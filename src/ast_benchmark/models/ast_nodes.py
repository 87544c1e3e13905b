"""AST node models.

The tree is a sum type: one frozen model per node kind, each holding exactly
the fields of its variant. Serialized, every node is ``{"type": <code>,
"data": <fields>}`` with the camel-case field names ``elseBlock`` and
``leftToken`` used by every implementation of the benchmark; the
per-variant writers live in :mod:`ast_benchmark.serializer`.
"""

from enum import IntEnum
from typing import Annotated, Any, ClassVar, Literal, Self, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    model_validator,
)

from ast_benchmark.models.tokens import Token


class NodeKind(IntEnum):
    """AST node kinds with their fixed output codes."""
    PROGRAM = 0
    STATEMENT_BLOCK = 1
    VARIABLE_STATEMENT = 2
    IF_STATEMENT = 3
    WHILE_STATEMENT = 4
    ASSIGNMENT_STATEMENT = 5
    CONDITION = 6
    EXPRESSION = 7


class ASTNode(BaseModel):
    """Base for all node variants.

    Subclasses set ``kind``. The wrapping validator accepts the tagged
    ``{"type", "data"}`` form, so a shallow serialized node can also be
    loaded with ``model_validate``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: ClassVar[NodeKind]

    @model_validator(mode="before")
    @classmethod
    def unwrap_tagged(cls, data: Any) -> Any:
        """Accept ``{"type": code, "data": {...}}`` for the matching kind."""
        if isinstance(data, dict) and "type" in data and "data" in data:
            if data["type"] != cls.kind:
                raise ValueError(
                    f"node type {data['type']!r} does not match {cls.__name__}"
                )
            return data["data"]
        return data


class Expression(ASTNode):
    """``leftToken (operator right)?``, right-associative."""
    kind: ClassVar[NodeKind] = NodeKind.EXPRESSION

    left_token: Token = Field(..., alias="leftToken")
    operator: Literal["+", "-", "*", "/"] | None = None
    right: "Expression | None" = None

    @model_validator(mode="after")
    def check_operator_pairing(self) -> Self:
        if (self.operator is None) != (self.right is None):
            raise ValueError("operator and right operand must be given together")
        return self


class Condition(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.CONDITION

    left: Expression
    operator: Literal[">", "<", "="]
    right: Expression


class VariableStatement(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.VARIABLE_STATEMENT

    identifier: str


class AssignmentStatement(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.ASSIGNMENT_STATEMENT

    identifier: str
    value: Expression


class IfStatement(ASTNode):
    """``if (condition) { block } else { elseBlock }``; ``else_block`` is None without an else."""
    kind: ClassVar[NodeKind] = NodeKind.IF_STATEMENT

    condition: Condition
    block: "StatementBlock"
    else_block: "StatementBlock | None" = Field(default=None, alias="elseBlock")


class WhileStatement(ASTNode):
    kind: ClassVar[NodeKind] = NodeKind.WHILE_STATEMENT

    condition: Condition
    block: "StatementBlock"


def statement_tag(value: Any) -> str | None:
    """Pick the statement variant from a node's kind or a payload's type code."""
    if isinstance(value, dict):
        code = value.get("type")
        return None if code is None else str(code)
    kind = getattr(value, "kind", None)
    return None if kind is None else str(int(kind))


Statement = Annotated[
    Union[
        Annotated[VariableStatement, Tag(str(int(NodeKind.VARIABLE_STATEMENT)))],
        Annotated[IfStatement, Tag(str(int(NodeKind.IF_STATEMENT)))],
        Annotated[WhileStatement, Tag(str(int(NodeKind.WHILE_STATEMENT)))],
        Annotated[AssignmentStatement, Tag(str(int(NodeKind.ASSIGNMENT_STATEMENT)))],
    ],
    Discriminator(statement_tag),
]


class StatementBlock(ASTNode):
    """A non-empty, ordered run of statements."""
    kind: ClassVar[NodeKind] = NodeKind.STATEMENT_BLOCK

    statements: tuple[Statement, ...] = Field(..., min_length=1)


class Program(ASTNode):
    """Root of every parse."""
    kind: ClassVar[NodeKind] = NodeKind.PROGRAM

    block: StatementBlock


Expression.model_rebuild()
Condition.model_rebuild()
IfStatement.model_rebuild()
WhileStatement.model_rebuild()
StatementBlock.model_rebuild()
Program.model_rebuild()

