"""
Parsing of Zod-style schema source text into schema node trees.

Source text is tokenized and parsed, never executed.
"""
from .lexer import Token, TokenType, tokenize
from .parser import SchemaParser, parse_schema

__all__ = [
    "SchemaParser",
    "Token",
    "TokenType",
    "parse_schema",
    "tokenize",
]
