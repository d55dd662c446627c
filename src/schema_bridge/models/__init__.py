"""
Pydantic models for schema-bridge.
"""
from .common import BasePydanticModel, ValidationIssue, ValidationSeverity
from .descriptor import Descriptor
from .nodes import (
    ArrayNode,
    DateNode,
    DefaultNode,
    EnumNode,
    NumberCheck,
    NumberNode,
    ObjectNode,
    OptionalNode,
    SchemaNode,
    StringCheck,
    StringNode,
    UnsupportedNode,
)

__all__ = [
    "ArrayNode",
    "BasePydanticModel",
    "DateNode",
    "DefaultNode",
    "Descriptor",
    "EnumNode",
    "NumberCheck",
    "NumberNode",
    "ObjectNode",
    "OptionalNode",
    "SchemaNode",
    "StringCheck",
    "StringNode",
    "UnsupportedNode",
    "ValidationIssue",
    "ValidationSeverity",
]
