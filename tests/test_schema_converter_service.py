"""
Unit tests for SchemaConverterService.
"""
import json

import pytest

from schema_bridge.config import Config
from schema_bridge.models.common import ValidationSeverity
from schema_bridge.models.nodes import DefaultNode, ObjectNode, StringNode, UnsupportedNode
from schema_bridge.schema_gen.schema_converter_service import (
    FALLBACK_WARNING,
    ConversionServiceResult,
    SchemaConverterService,
)


@pytest.fixture
def app_config() -> Config:
    return Config()

@pytest.fixture
def converter_service(app_config: Config) -> SchemaConverterService:
    return SchemaConverterService(app_config=app_config)

@pytest.fixture
def sample_source() -> str:
    return """
    z.object({
      id: z.string(),
      email: z.string().email(),
      active: z.boolean(),
      tags: z.array(z.union([z.string(), z.number()])).optional(),
    })
    """


def test_convert_source_success(converter_service: SchemaConverterService, sample_source: str) -> None:
    result: ConversionServiceResult = converter_service.convert_source(sample_source)

    assert result.error_message is None
    assert not result.has_errors
    assert result.descriptor is not None
    assert result.descriptor.to_dict() == {
        "type": "object",
        "properties": {
            "id": {"type": "string"},
            "email": {"type": "string", "format": "email"},
            "active": {"type": "any"},
            "tags": {"type": "array", "items": {"type": "any"}},
        },
        "required": ["id", "email", "active"],
    }
    assert json.loads(result.output) == result.descriptor.to_dict()


def test_fallbacks_reported_as_warnings(converter_service: SchemaConverterService, sample_source: str) -> None:
    result = converter_service.convert_source(sample_source)

    assert result.has_warnings
    assert [issue.path for issue in result.issues] == ["#/properties/active", "#/properties/tags/items"]
    assert all(issue.severity == ValidationSeverity.WARNING for issue in result.issues)
    assert all(issue.message == FALLBACK_WARNING for issue in result.issues)


def test_no_warnings_for_fully_mapped_schema(converter_service: SchemaConverterService) -> None:
    result = converter_service.convert_source("z.array(z.number().min(0).max(10))")
    assert result.issues == []
    assert not result.has_warnings
    assert json.loads(result.output) == {"type": "array", "items": {"type": "number", "minimum": 0, "maximum": 10}}


@pytest.mark.parametrize("source", [
    "z.strng()",
    "z.object({ a: z.string() ",
    "eval('process.exit()')",
    "z.number().min(" + "9" * 5000 + ")",
    'z.string().default("\\uD83D")',
    "",
])
def test_construction_failure_is_reported_not_raised(converter_service: SchemaConverterService, source: str) -> None:
    result = converter_service.convert_source(source)

    assert result.has_errors
    assert result.error_message
    assert result.descriptor is None
    assert result.output is None


def test_too_deep_source_is_reported(app_config: Config) -> None:
    app_config.translator.max_depth = 3
    service = SchemaConverterService(app_config=app_config)
    result = service.convert_source("z.array(z.array(z.array(z.array(z.string()))))")
    assert result.error_message is not None
    assert "maximum depth of 3" in result.error_message


def test_too_deep_node_tree_is_reported(app_config: Config) -> None:
    app_config.translator.max_depth = 1
    service = SchemaConverterService(app_config=app_config)
    node = ObjectNode(shape={"a": ObjectNode(shape={"b": StringNode()})})
    result = service.convert_node(node)
    assert result.error_message == "Schema nesting exceeds the maximum depth of 1"


def test_convert_node_directly(converter_service: SchemaConverterService) -> None:
    node = DefaultNode(inner=StringNode(), default_value=lambda: "fallback")
    result = converter_service.convert_node(node)
    assert result.descriptor is not None
    assert result.descriptor.to_dict() == {"type": "string", "default": "fallback"}


def test_failing_default_producer_is_reported(converter_service: SchemaConverterService) -> None:
    def broken() -> str:
        raise RuntimeError("boom")

    result = converter_service.convert_node(ObjectNode(shape={"a": DefaultNode(inner=StringNode(), default_value=broken)}))
    assert result.error_message == "Conversion failed: boom"
    assert result.descriptor is None


def test_unrecognized_root_node(converter_service: SchemaConverterService) -> None:
    result = converter_service.convert_node(UnsupportedNode(construct_name="z.never()"))
    assert result.descriptor is not None
    assert result.descriptor.to_dict() == {"type": "any"}
    assert [issue.path for issue in result.issues] == ["#"]


def test_render_respects_indent(app_config: Config) -> None:
    service = SchemaConverterService(app_config=app_config)
    descriptor = service.convert_source("z.object({ a: z.string() })").descriptor
    assert descriptor is not None

    assert service.render(descriptor).splitlines()[1] == '  "type": "object",'

    app_config.output.indent = 0
    assert service.render(descriptor) == '{"type": "object", "properties": {"a": {"type": "string"}}, "required": ["a"]}'


def test_render_keeps_non_ascii(converter_service: SchemaConverterService) -> None:
    result = converter_service.convert_source('z.enum(["café", "naïve"])')
    assert "café" in result.output


def test_escaped_surrogate_pair_renders_as_one_character(converter_service: SchemaConverterService) -> None:
    result = converter_service.convert_source(r'z.string().default("\uD83D\uDE00")')
    assert result.error_message is None
    assert result.descriptor.default == "\U0001F600"
    assert "\U0001F600" in result.output
