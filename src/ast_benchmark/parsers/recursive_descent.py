"""Recursive-descent parser for the toy language.

Grammar::

    Program        := StatementBlock EOF
    StatementBlock := Statement (SEMICOLON Statement)*
    Statement      := VAR IDENTIFIER
                    | IF LPAREN Condition RPAREN LBRACE StatementBlock RBRACE
                      (ELSE LBRACE StatementBlock RBRACE)?
                    | WHILE LPAREN Condition RPAREN LBRACE StatementBlock RBRACE
                    | IDENTIFIER EQUAL Expression
    Condition      := Expression (GREATER | LESS | EQUAL) Expression
    Expression     := (NUMBER | STRING | IDENTIFIER)
                      ((PLUS | MINUS | MULTIPLY | DIVIDE) Expression)?

Expressions have a single precedence level and group to the right:
``a+b*c`` is ``a+(b*c)`` and ``a-b-c`` is ``a-(b-c)``.
"""

from collections.abc import Sequence

from ast_benchmark.errors import SourceSyntaxError, UnexpectedToken
from ast_benchmark.models import (
    AssignmentStatement,
    Condition,
    Expression,
    IfStatement,
    Program,
    StatementBlock,
    Token,
    TokenKind,
    VariableStatement,
    WhileStatement,
)
from ast_benchmark.models.ast_nodes import Statement
from ast_benchmark.parsers.tokenizer import tokenize

OPERAND_KINDS = (TokenKind.NUMBER, TokenKind.STRING, TokenKind.IDENTIFIER)

ARITHMETIC_OPERATORS = {
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.MULTIPLY: "*",
    TokenKind.DIVIDE: "/",
}

RELATIONAL_OPERATORS = {
    TokenKind.GREATER: ">",
    TokenKind.LESS: "<",
    TokenKind.EQUAL: "=",
}


class Parser:
    """Consumes an EOF-terminated token sequence with one token of lookahead.

    The token sequence is never modified; parsing only moves an index.
    Any grammar violation raises immediately, no partial tree is returned.
    """

    def __init__(self, tokens: Sequence[Token]):
        if not tokens:
            raise SourceSyntaxError("token sequence", TokenKind.EOF, 1, 1)
        last = tokens[-1]
        if last.kind != TokenKind.EOF:
            raise UnexpectedToken(TokenKind.EOF, last.kind, last.line, last.column)
        self.tokens = tokens
        self.index = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def peek(self, kind: TokenKind) -> bool:
        return self.current.kind == kind

    def accept(self, kind: TokenKind) -> bool:
        """Consume the current token if it is of the given kind."""
        if not self.peek(kind):
            return False
        # EOF is never consumed, so the cursor cannot run off the end
        if kind != TokenKind.EOF:
            self.index += 1
        return True

    def expect(self, kind: TokenKind) -> None:
        if not self.accept(kind):
            tok = self.current
            raise UnexpectedToken(kind, tok.kind, tok.line, tok.column)

    def _fail(self, context: str) -> SourceSyntaxError:
        tok = self.current
        return SourceSyntaxError(context, tok.kind, tok.line, tok.column)

    # ---------- TOP LEVEL ----------
    def parse_program(self) -> Program:
        block = self.parse_statement_block()
        if not self.peek(TokenKind.EOF):
            raise self._fail("program")
        return Program(block=block)

    def parse_statement_block(self) -> StatementBlock:
        statements = [self.parse_statement()]
        while self.accept(TokenKind.SEMICOLON):
            # A separator right before "}" or end of input closes the block
            if self.peek(TokenKind.RBRACE) or self.peek(TokenKind.EOF):
                break
            statements.append(self.parse_statement())
        return StatementBlock(statements=statements)

    # ---------- STATEMENTS ----------
    def parse_statement(self) -> Statement:
        if self.accept(TokenKind.VAR):
            identifier = self.current.text
            self.expect(TokenKind.IDENTIFIER)
            return VariableStatement(identifier=identifier)

        if self.accept(TokenKind.IF):
            condition, block = self._parse_guarded_block()
            else_block = None
            if self.accept(TokenKind.ELSE):
                else_block = self._parse_braced_block()
            return IfStatement(condition=condition, block=block, else_block=else_block)

        if self.accept(TokenKind.WHILE):
            condition, block = self._parse_guarded_block()
            return WhileStatement(condition=condition, block=block)

        if self.peek(TokenKind.IDENTIFIER):
            identifier = self.current.text
            self.accept(TokenKind.IDENTIFIER)
            self.expect(TokenKind.EQUAL)
            return AssignmentStatement(identifier=identifier, value=self.parse_expression())

        raise self._fail("statement")

    def _parse_guarded_block(self) -> tuple[Condition, StatementBlock]:
        """Parse ``( Condition ) { StatementBlock }`` after if/while."""
        self.expect(TokenKind.LPAREN)
        condition = self.parse_condition()
        self.expect(TokenKind.RPAREN)
        return condition, self._parse_braced_block()

    def _parse_braced_block(self) -> StatementBlock:
        self.expect(TokenKind.LBRACE)
        block = self.parse_statement_block()
        self.expect(TokenKind.RBRACE)
        return block

    # ---------- EXPRESSIONS ----------
    def parse_condition(self) -> Condition:
        left = self.parse_expression()
        for kind, operator in RELATIONAL_OPERATORS.items():
            if self.accept(kind):
                return Condition(left=left, operator=operator, right=self.parse_expression())
        raise self._fail("condition")

    def parse_expression(self) -> Expression:
        operands = [self._parse_operand()]
        operators = []
        operator = self._accept_arithmetic()
        while operator is not None:
            operators.append(operator)
            operands.append(self._parse_operand())
            operator = self._accept_arithmetic()

        # Fold from the right: a-b-c is a-(b-c)
        expression = Expression(left_token=operands.pop())
        while operators:
            expression = Expression(
                left_token=operands.pop(), operator=operators.pop(), right=expression
            )
        return expression

    def _parse_operand(self) -> Token:
        token = self.current
        if not any(self.accept(kind) for kind in OPERAND_KINDS):
            raise self._fail("expression")
        return token

    def _accept_arithmetic(self) -> str | None:
        for kind, operator in ARITHMETIC_OPERATORS.items():
            if self.accept(kind):
                return operator
        return None


def parse(tokens: Sequence[Token]) -> Program:
    """Parse a complete program from an EOF-terminated token sequence.

    Blocks nest by recursion, so a program nested deeper than the
    interpreter stack allows is rejected at the token where the stack ran
    out.

    Raises:
        UnexpectedToken: If a required token is missing.
        SourceSyntaxError: If no production matches the current token, or
            blocks nest too deeply.
    """
    parser = Parser(tokens)
    try:
        return parser.parse_program()
    except RecursionError:
        raise parser._fail("nesting too deep") from None


def parse_source(source: str) -> Program:
    """Tokenize and parse source text in one step."""
    return parse(tokenize(source))


def parse_expression(tokens: Sequence[Token]) -> Expression:
    """Parse a standalone expression that must span the whole token sequence."""
    parser = Parser(tokens)
    expression = parser.parse_expression()
    if not parser.peek(TokenKind.EOF):
        raise parser._fail("expression")
    return expression


