"""Token model and the fixed token-kind codes.

The integer codes are part of the cross-implementation output contract and
must never be renumbered.
"""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class TokenKind(IntEnum):
    """Lexical token kinds."""
    EOF = 0
    # Keywords
    VAR = 1
    IF = 2
    ELSE = 3
    WHILE = 4
    # Separators
    LPAREN = 5
    RPAREN = 6
    LBRACE = 7
    RBRACE = 8
    SEMICOLON = 9
    # Operators
    PLUS = 10
    MINUS = 11
    MULTIPLY = 12
    DIVIDE = 13
    GREATER = 14
    LESS = 15
    EQUAL = 16
    # Literals
    NUMBER = 17
    STRING = 18
    IDENTIFIER = 19


KEYWORDS: dict[str, TokenKind] = {
    "var": TokenKind.VAR,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "while": TokenKind.WHILE,
}

SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    ";": TokenKind.SEMICOLON,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULTIPLY,
    "/": TokenKind.DIVIDE,
    ">": TokenKind.GREATER,
    "<": TokenKind.LESS,
    "=": TokenKind.EQUAL,
}


class Token(BaseModel):
    """A single classified lexical unit.

    Serialized with the field names shared by every implementation of the
    benchmark: ``type``, ``value``, ``line`` and ``column``.

    Example:
        >>> Token(kind=TokenKind.IDENTIFIER, text="x", line=1, column=5).model_dump(by_alias=True, mode="json")
        {'type': 19, 'value': 'x', 'line': 1, 'column': 5}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: TokenKind = Field(..., alias="type")
    text: str = Field(..., alias="value")
    line: int = Field(..., ge=1)
    column: int = Field(..., ge=1)

    def __repr__(self) -> str:
        if self.text:
            return f"{self.kind.name}({self.text!r})@{self.line}:{self.column}"
        return f"{self.kind.name}@{self.line}:{self.column}"
