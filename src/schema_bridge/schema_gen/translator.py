"""
Translation of schema node trees into JSON-Schema-like descriptors.

``translate`` is pure: it reads the input tree, builds fresh descriptors and
performs no I/O. The only foreign code it runs is a ``DefaultNode``'s default
value producer, called exactly once per node visited.
"""
from typing import Any

from ..exceptions import SchemaTooDeepError
from ..models.descriptor import Descriptor
from ..models.nodes import (
    ArrayNode,
    DEFAULT_MAX_DEPTH,
    DateNode,
    DefaultNode,
    EnumNode,
    NumberNode,
    ObjectNode,
    OptionalNode,
    StringNode,
)

FALLBACK_TYPE = "any"

_STRING_FORMATS = {
    "email": "email",
    "url": "uri",
}


def translate(node: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Descriptor:
    """Translate one schema node (and its children) into a Descriptor.

    Unrecognized nodes yield ``{"type": "any"}`` rather than an error.
    Raises SchemaTooDeepError when the tree is nested deeper than ``max_depth``.
    """
    return _translate(node, 0, max_depth)


def _translate(node: Any, depth: int, max_depth: int) -> Descriptor:
    if depth > max_depth:
        raise SchemaTooDeepError(max_depth)

    match node:
        case StringNode(checks=checks):
            fields: dict[str, Any] = {"type": "string"}
            for check in checks:
                if check.kind in _STRING_FORMATS:
                    fields["format"] = _STRING_FORMATS[check.kind] # Last matching check wins
            return Descriptor(**fields)

        case NumberNode(checks=checks):
            fields = {"type": "number"}
            for check in checks:
                if check.kind == "min":
                    fields["minimum"] = check.value
                elif check.kind == "max":
                    fields["maximum"] = check.value
            return Descriptor(**fields)

        case DateNode():
            # No native date type in the target format
            return Descriptor(type="string", format="date-time")

        case EnumNode(values=values):
            return Descriptor(type="string", enum=list(values))

        case OptionalNode(inner=inner):
            # Optionality only shows up in the parent object's `required` list
            return _translate(inner, depth + 1, max_depth)

        case DefaultNode(inner=inner, default_value=produce_default):
            inner_descriptor = _translate(inner, depth + 1, max_depth)
            return inner_descriptor.model_copy(update={"default": produce_default()})

        case ObjectNode(shape=shape):
            properties: dict[str, Descriptor] = {}
            required: list[str] = []
            for field_name, field_node in shape.items():
                properties[field_name] = _translate(field_node, depth + 1, max_depth)
                if not isinstance(field_node, OptionalNode):
                    required.append(field_name)
            if required:
                return Descriptor(type="object", properties=properties, required=required)
            return Descriptor(type="object", properties=properties)

        case ArrayNode(element_type=element_type):
            return Descriptor(type="array", items=_translate(element_type, depth + 1, max_depth))

        case _:
            return Descriptor(type=FALLBACK_TYPE)


def find_fallbacks(descriptor: Descriptor) -> list[str]:
    """Return JSON-pointer style paths ("#", "#/properties/a", "#/items", ...)
    of every fallback descriptor in the tree, in depth-first visit order."""
    paths: list[str] = []
    _collect_fallbacks(descriptor, "#", paths)
    return paths


def _collect_fallbacks(descriptor: Descriptor, path: str, paths: list[str]) -> None:
    if descriptor.is_fallback:
        paths.append(path)
    if descriptor.properties:
        for name, child in descriptor.properties.items():
            _collect_fallbacks(child, f"{path}/properties/{_escape_pointer(name)}", paths)
    if descriptor.items is not None:
        _collect_fallbacks(descriptor.items, f"{path}/items", paths)


def _escape_pointer(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")
