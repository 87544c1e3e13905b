"""Tokenizer, recursive-descent parser and AST serializer for the toy
benchmark language, plus the driver that times them."""

from .errors import (
    AstBenchmarkError,
    OutputError,
    ParseError,
    SourceSyntaxError,
    TokenizeError,
    UnexpectedCharacter,
    UnexpectedToken,
    UnterminatedString,
)
from .parsers import parse, parse_source, tokenize
from .serializer import deserialize, serialize, to_json

__version__ = "0.1.0"

__all__ = [
    "AstBenchmarkError",
    "OutputError",
    "ParseError",
    "SourceSyntaxError",
    "TokenizeError",
    "UnexpectedCharacter",
    "UnexpectedToken",
    "UnterminatedString",
    "parse",
    "parse_source",
    "tokenize",
    "deserialize",
    "serialize",
    "to_json",
]
