"""
Unit tests for Pydantic models in src/schema_bridge/models/
"""
import pytest
from pydantic import ValidationError

from schema_bridge.models.common import ValidationIssue, ValidationSeverity
from schema_bridge.models.descriptor import Descriptor
from schema_bridge.models.nodes import (
    ArrayNode,
    DefaultNode,
    EnumNode,
    NumberCheck,
    ObjectNode,
    OptionalNode,
    StringNode,
)


# --- Descriptor ---

def test_descriptor_to_dict_omits_unset_fields():
    descriptor = Descriptor(type="string", format="email")
    assert descriptor.to_dict() == {"type": "string", "format": "email"}


def test_descriptor_keeps_explicit_null_default():
    assert Descriptor(type="string", default=None).to_dict() == {"type": "string", "default": None}


def test_descriptor_nested_to_dict():
    descriptor = Descriptor(
        type="object",
        properties={"tags": Descriptor(type="array", items=Descriptor(type="string", enum=["a"]))},
        required=["tags"],
    )
    assert descriptor.to_dict() == {
        "type": "object",
        "properties": {"tags": {"type": "array", "items": {"type": "string", "enum": ["a"]}}},
        "required": ["tags"],
    }


def test_descriptor_is_fallback():
    assert Descriptor(type="any").is_fallback
    assert not Descriptor(type="string").is_fallback


def test_descriptor_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        Descriptor(type="string", pattern="^a$")


def test_descriptor_bounds_keep_numeric_type():
    descriptor = Descriptor(type="number", minimum=0, maximum=2.5)
    assert isinstance(descriptor.minimum, int)
    assert isinstance(descriptor.maximum, float)


# --- Schema nodes ---

def test_nodes_are_frozen():
    node = StringNode()
    with pytest.raises(ValidationError):
        node.checks = []


def test_node_labels():
    assert StringNode.label == "string"
    assert OptionalNode(inner=StringNode()).label == "optional"
    assert ObjectNode().label == "object"


def test_object_node_preserves_shape_order():
    node = ObjectNode(shape={"z": StringNode(), "a": StringNode(), "m": StringNode()})
    assert list(node.shape) == ["z", "a", "m"]


def test_wrappers_require_schema_nodes():
    with pytest.raises(ValidationError):
        OptionalNode(inner="z.string()")
    with pytest.raises(ValidationError):
        ArrayNode(element_type={"type": "string"})


def test_default_node_requires_callable():
    with pytest.raises(ValidationError):
        DefaultNode(inner=StringNode(), default_value="not callable")


def test_enum_node_requires_strings():
    with pytest.raises(ValidationError):
        EnumNode(values=[1, 2])


def test_number_check_defaults():
    check = NumberCheck(kind="int")
    assert check.value is None
    assert check.inclusive is True


# --- Issues ---

def test_validation_issue_uses_enum_values():
    issue = ValidationIssue(severity=ValidationSeverity.WARNING, message="fallback", path="#/items")
    assert issue.severity == "warning"
    assert issue.model_dump(exclude_none=True) == {"severity": "warning", "message": "fallback", "path": "#/items"}
