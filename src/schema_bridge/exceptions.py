"""
Custom exceptions for schema-bridge.
"""
from typing import Optional


class SchemaBridgeError(Exception):
    """Base class for all schema-bridge errors."""
    pass


class SchemaConstructionError(SchemaBridgeError):
    """Raised when schema source text cannot be turned into a schema node tree.

    Construction failures are recoverable: the caller may retry with corrected source.
    """
    pass


class SchemaSyntaxError(SchemaConstructionError):
    """Raised for lexing/parsing failures, including methods that the schema
    variant they are applied to does not support."""
    def __init__(self, message: str, line: int, column: int):
        super().__init__(f"{message} (line {line}, column {column})")
        self.reason = message
        self.line = line
        self.column = column


class SchemaTooDeepError(SchemaConstructionError):
    """Raised when schema nesting exceeds the configured maximum depth,
    either while parsing source text or while translating a node tree."""
    def __init__(self, max_depth: int, line: Optional[int] = None, column: Optional[int] = None):
        message = f"Schema nesting exceeds the maximum depth of {max_depth}"
        if line is not None and column is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)
        self.max_depth = max_depth
        self.line = line
        self.column = column
