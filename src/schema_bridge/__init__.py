"""schema-bridge - translates Zod-style validation schemas into JSON-Schema-like descriptors.

Schema source text is parsed (never executed) into a tree of schema nodes,
which a pure recursive translator maps onto descriptors.
"""

__version__ = "0.1.0"

from .config import Config
from .exceptions import SchemaBridgeError, SchemaConstructionError, SchemaSyntaxError, SchemaTooDeepError
from .models import Descriptor, SchemaNode
from .parser import parse_schema
from .schema_gen import SchemaConverterService, translate

__all__ = [
    "Config",
    "Descriptor",
    "SchemaBridgeError",
    "SchemaConstructionError",
    "SchemaConverterService",
    "SchemaNode",
    "SchemaSyntaxError",
    "SchemaTooDeepError",
    "parse_schema",
    "translate",
]
