"""Exception hierarchy for tokenizing, parsing and benchmarking.

Every parse failure is fatal: the tokenizer and parser raise at the first
malformed input and never return a partial result.
"""

from ast_benchmark.models.tokens import TokenKind


class AstBenchmarkError(Exception):
    """Base class for all errors raised by this package."""


class ParseError(AstBenchmarkError):
    """A malformed source program.

    Attributes:
        line: 1-based line of the offending character or token.
        column: 1-based column of the offending character or token.
    """

    def __init__(self, message: str, line: int, column: int):
        super().__init__(message)
        self.line = line
        self.column = column


class TokenizeError(ParseError):
    """Raised by the tokenizer."""


class UnexpectedCharacter(TokenizeError):
    """A character outside every accepted character class."""

    def __init__(self, character: str, line: int, column: int):
        super().__init__(
            f"{line}:{column}: unexpected character {character!r}", line, column
        )
        self.character = character


class UnterminatedString(TokenizeError):
    """A string literal whose closing quote never appears."""

    def __init__(self, line: int, column: int):
        super().__init__(f"{line}:{column}: unterminated string literal", line, column)


class SourceSyntaxError(ParseError):
    """No grammar production matches the current token.

    Attributes:
        context: Production being parsed ("statement", "expression", ...).
        found: Kind of the token that could not be matched.
    """

    def __init__(self, context: str, found: TokenKind, line: int, column: int):
        super().__init__(
            f"{context} ({line}:{column}): unexpected symbol {found.name}", line, column
        )
        self.context = context
        self.found = found


class UnexpectedToken(SourceSyntaxError):
    """``expect`` saw a token other than the required one."""

    def __init__(self, expected: TokenKind, found: TokenKind, line: int, column: int):
        super().__init__(f"expected {expected.name}", found, line, column)
        self.expected = expected


class BenchmarkInputError(AstBenchmarkError):
    """A benchmark input or reference file could not be read, or two inputs
    would write the same output file."""


class OutputError(AstBenchmarkError):
    """A parsed tree could not be rendered as output."""
