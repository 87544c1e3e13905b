"""State machine tokenizer for the toy language."""

import string
from dataclasses import dataclass, field
from enum import Enum, auto

from ast_benchmark.errors import UnexpectedCharacter, UnterminatedString
from ast_benchmark.models import KEYWORDS, Token, TokenKind
from ast_benchmark.models.tokens import SINGLE_CHAR_TOKENS
from ast_benchmark.position import Cursor

WHITESPACE = frozenset(" \t\n")
DIGITS = frozenset(string.digits)
IDENTIFIER_CHARS = frozenset(string.ascii_letters + "_")
QUOTE = '"'


class ScannerState(Enum):
    """Tokenizer states."""
    SEARCHING = auto()   # Between tokens
    IDENTIFIER = auto()  # Accumulating letters/underscore
    NUMBER = auto()      # Accumulating digits
    STRING = auto()      # Inside "..."


@dataclass
class ScannerContext:
    """Maintains scanner state and accumulated tokens."""
    state: ScannerState = ScannerState.SEARCHING
    position: int = 0
    cursor: Cursor = field(default_factory=Cursor)
    start: int = 0
    start_line: int = 1
    start_column: int = 1
    tokens: list[Token] = field(default_factory=list)


class Tokenizer:
    """Finite-state scanner producing tokens left to right.

    Multi-character tokens (identifiers, numbers, strings) are accumulated in
    their own state and end at the first character that cannot extend them.
    That terminator is not consumed: the scanner switches back to SEARCHING
    and handles it on the next step. Strings are the exception, their closing
    quote is consumed.

    The position cursor advances on every consumed character in every state,
    so a token's line/column is always that of its first character.
    """

    def tokenize(self, source: str) -> list[Token]:
        """Scan source text into tokens.

        Args:
            source: Program text.

        Returns:
            Tokens in source order, terminated by a single EOF token.

        Raises:
            UnexpectedCharacter: On a character no token can start with.
            UnterminatedString: If input ends inside a string literal.
        """
        ctx = ScannerContext()
        self._run_state_machine(source, ctx)
        self._finish(source, ctx)

        line, column = ctx.cursor.snapshot()
        ctx.tokens.append(Token(kind=TokenKind.EOF, text="", line=line, column=column))
        return ctx.tokens

    def _run_state_machine(self, source: str, ctx: ScannerContext) -> None:
        """Execute the state machine on the whole input."""
        while ctx.position < len(source):
            if ctx.state == ScannerState.SEARCHING:
                self._state_searching(source, ctx)
            elif ctx.state == ScannerState.IDENTIFIER:
                self._state_identifier(source, ctx)
            elif ctx.state == ScannerState.NUMBER:
                self._state_number(source, ctx)
            elif ctx.state == ScannerState.STRING:
                self._state_string(source, ctx)

    def _consume(self, source: str, ctx: ScannerContext) -> None:
        ctx.cursor.advance(source[ctx.position])
        ctx.position += 1

    def _begin(self, ctx: ScannerContext, state: ScannerState, start: int) -> None:
        """Enter a multi-character state, remembering where the token began."""
        ctx.state = state
        ctx.start = start
        ctx.start_line, ctx.start_column = ctx.cursor.snapshot()

    def _emit(self, ctx: ScannerContext, kind: TokenKind, text: str) -> None:
        ctx.tokens.append(
            Token(kind=kind, text=text, line=ctx.start_line, column=ctx.start_column)
        )
        ctx.state = ScannerState.SEARCHING

    def _state_searching(self, source: str, ctx: ScannerContext) -> None:
        """Classify the next character and start a token."""
        ch = source[ctx.position]

        kind = SINGLE_CHAR_TOKENS.get(ch)
        if kind is not None:
            line, column = ctx.cursor.snapshot()
            ctx.tokens.append(Token(kind=kind, text=ch, line=line, column=column))
        elif ch == QUOTE:
            # Text starts after the opening quote, position is the quote itself
            self._begin(ctx, ScannerState.STRING, ctx.position + 1)
        elif ch in DIGITS:
            self._begin(ctx, ScannerState.NUMBER, ctx.position)
        elif ch in IDENTIFIER_CHARS:
            self._begin(ctx, ScannerState.IDENTIFIER, ctx.position)
        elif ch not in WHITESPACE:
            line, column = ctx.cursor.snapshot()
            raise UnexpectedCharacter(ch, line, column)

        self._consume(source, ctx)

    def _state_identifier(self, source: str, ctx: ScannerContext) -> None:
        if source[ctx.position] in IDENTIFIER_CHARS:
            self._consume(source, ctx)
            return
        self._emit_word(source[ctx.start:ctx.position], ctx)

    def _state_number(self, source: str, ctx: ScannerContext) -> None:
        if source[ctx.position] in DIGITS:
            self._consume(source, ctx)
            return
        self._emit(ctx, TokenKind.NUMBER, source[ctx.start:ctx.position])

    def _state_string(self, source: str, ctx: ScannerContext) -> None:
        if source[ctx.position] == QUOTE:
            self._emit(ctx, TokenKind.STRING, source[ctx.start:ctx.position])
        self._consume(source, ctx)

    def _emit_word(self, word: str, ctx: ScannerContext) -> None:
        """Emit an identifier, or a keyword if the word is reserved."""
        self._emit(ctx, KEYWORDS.get(word, TokenKind.IDENTIFIER), word)

    def _finish(self, source: str, ctx: ScannerContext) -> None:
        """Flush a token still open at end of input."""
        if ctx.state == ScannerState.IDENTIFIER:
            self._emit_word(source[ctx.start:], ctx)
        elif ctx.state == ScannerState.NUMBER:
            self._emit(ctx, TokenKind.NUMBER, source[ctx.start:])
        elif ctx.state == ScannerState.STRING:
            raise UnterminatedString(ctx.start_line, ctx.start_column)


def tokenize(source: str) -> list[Token]:
    """Tokenize source text with a fresh :class:`Tokenizer`."""
    return Tokenizer().tokenize(source)
