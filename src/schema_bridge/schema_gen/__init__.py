"""
Schema generation module for schema-bridge.

Translates schema node trees into JSON-Schema-like descriptors and wraps the
parse -> translate -> render pipeline in a service.
"""
from .schema_converter_service import ConversionServiceResult, SchemaConverterService
from .translator import DEFAULT_MAX_DEPTH, find_fallbacks, translate

__all__ = [
    "ConversionServiceResult",
    "DEFAULT_MAX_DEPTH",
    "SchemaConverterService",
    "find_fallbacks",
    "translate",
]
