"""Tokenizer and parser implementations."""

from .tokenizer import Tokenizer, tokenize
from .recursive_descent import Parser, parse, parse_expression, parse_source

__all__ = [
    "Tokenizer",
    "tokenize",
    "Parser",
    "parse",
    "parse_expression",
    "parse_source",
]
