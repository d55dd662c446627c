"""
Schema node models: the input side of a translation.

The variant set is closed. Anything that is not one of the classes below is
treated as an unrecognized node by the translator and degrades to the generic
fallback descriptor.
"""
from collections.abc import Callable
from typing import Any, ClassVar, Optional

from pydantic import Field

from .common import BasePydanticModel

# Deepest nesting of schema nodes the parser and the translator accept
DEFAULT_MAX_DEPTH = 64


class SchemaNode(BasePydanticModel):
    """Base class for every schema node variant."""
    label: ClassVar[str] = "schema"

    model_config = {
        "extra": "forbid",
        "frozen": True, # Nodes are only read by the translator, never mutated
        "arbitrary_types_allowed": True,
    }


class StringCheck(BasePydanticModel):
    kind: str # e.g. "email", "url", "min", "regex"
    value: Any = None


class NumberCheck(BasePydanticModel):
    kind: str # e.g. "min", "max", "int", "multipleOf"
    value: Optional[int | float] = None
    inclusive: bool = True


class StringNode(SchemaNode):
    label: ClassVar[str] = "string"
    checks: list[StringCheck] = Field(default_factory=list)


class NumberNode(SchemaNode):
    label: ClassVar[str] = "number"
    checks: list[NumberCheck] = Field(default_factory=list)


class DateNode(SchemaNode):
    label: ClassVar[str] = "date"


class EnumNode(SchemaNode):
    label: ClassVar[str] = "enum"
    values: list[str]


class OptionalNode(SchemaNode):
    label: ClassVar[str] = "optional"
    inner: SchemaNode


class DefaultNode(SchemaNode):
    """Wraps a node and supplies the value used when the field is absent.

    ``default_value`` is a zero-argument producer; the translator calls it
    exactly once per node it visits.
    """
    label: ClassVar[str] = "default"
    inner: SchemaNode
    default_value: Callable[[], Any]


class ObjectNode(SchemaNode):
    label: ClassVar[str] = "object"
    shape: dict[str, SchemaNode] = Field(default_factory=dict) # Insertion order is kept for deterministic output


class ArrayNode(SchemaNode):
    label: ClassVar[str] = "array"
    element_type: SchemaNode


class UnsupportedNode(SchemaNode):
    """A construct the parser recognizes but the translator has no precise mapping for
    (unions, tuples, records, booleans, ...)."""
    label: ClassVar[str] = "unsupported"
    construct_name: str # Source-level name, e.g. "z.union(...)" or ".nullable()"
