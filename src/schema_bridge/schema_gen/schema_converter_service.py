"""
Service responsible for turning schema source text (or an already-built schema
node tree) into a rendered JSON-Schema-like descriptor, reporting unsupported
constructs as warnings and construction failures as error messages.
"""
import json
from typing import Any, List, Optional

import structlog
from pydantic import BaseModel, Field

from ..config import Config
from ..exceptions import SchemaBridgeError
from ..models.common import ValidationIssue, ValidationSeverity
from ..models.descriptor import Descriptor
from ..parser import parse_schema
from .translator import find_fallbacks, translate

logger = structlog.get_logger(__name__)

FALLBACK_WARNING = "No precise mapping for this schema construct; emitted the generic fallback descriptor."


class ConversionServiceResult(BaseModel):
    descriptor: Optional[Descriptor] = None
    output: Optional[str] = None # Rendered descriptor text
    issues: List[ValidationIssue] = Field(default_factory=list)
    error_message: Optional[str] = None # For construction failures preventing conversion

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == ValidationSeverity.ERROR for issue in self.issues) or self.error_message is not None

    @property
    def has_warnings(self) -> bool:
        return any(issue.severity == ValidationSeverity.WARNING for issue in self.issues)


class SchemaConverterService:
    """
    Runs the parse -> translate -> render pipeline with the limits and
    rendering options from the application config.
    """

    def __init__(self, app_config: Config):
        self.app_config = app_config
        self.logger = logger.bind(service="SchemaConverterService")

    @property
    def max_depth(self) -> int:
        return self.app_config.translator.max_depth

    def convert_source(self, source: str) -> ConversionServiceResult:
        """Parse and convert schema source text. Never raises for bad source."""
        log = self.logger.bind(source_length=len(source))
        try:
            node = parse_schema(source, max_depth=self.max_depth)
        except SchemaBridgeError as e:
            log.warning("Schema source could not be parsed.", error=str(e))
            return ConversionServiceResult(error_message=str(e))
        return self.convert_node(node)

    def convert_node(self, node: Any) -> ConversionServiceResult:
        """Convert an already-constructed schema node tree."""
        log = self.logger.bind(root=getattr(node, "label", type(node).__name__))
        log.debug("Starting schema translation.")
        try:
            descriptor = translate(node, max_depth=self.max_depth)
            output = self.render(descriptor)
        except SchemaBridgeError as e:
            log.warning("Schema translation rejected the node tree.", error=str(e))
            return ConversionServiceResult(error_message=str(e))
        except Exception as e:
            # Default value producers of hand-built nodes run arbitrary code and may return unserializable values
            log.exception("Error during schema translation.", error=str(e))
            return ConversionServiceResult(error_message=f"Conversion failed: {e}")

        issues = [
            ValidationIssue(severity=ValidationSeverity.WARNING, message=FALLBACK_WARNING, path=path)
            for path in find_fallbacks(descriptor)
        ]
        log.info("Schema converted successfully.", descriptor_type=descriptor.type, fallback_count=len(issues))
        return ConversionServiceResult(descriptor=descriptor, output=output, issues=issues)

    def render(self, descriptor: Descriptor) -> str:
        """Render a descriptor as JSON text using the configured indentation."""
        indent = self.app_config.output.indent
        return json.dumps(
            descriptor.to_dict(),
            indent=indent if indent > 0 else None,
            ensure_ascii=self.app_config.output.ensure_ascii,
        )
