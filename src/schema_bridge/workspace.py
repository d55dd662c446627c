"""
Editing-session state for interactive conversion: the source being edited,
the last successfully rendered output and the current error, if any.

A failed conversion sets ``error`` and leaves ``output`` as it was, so the
last good result stays visible until the source converts again.
"""
from typing import List, Optional

import structlog

from .models.common import ValidationIssue
from .schema_gen.schema_converter_service import ConversionServiceResult, SchemaConverterService

logger = structlog.get_logger(__name__)

DEFAULT_SCHEMA_SOURCE = """z.object({
  id: z.string(),
  email: z.string().email(),
  displayName: z.string().optional(),
  photoURL: z.string().url().optional(),
  createdAt: z.date(),
  updatedAt: z.date(),
  preferences: z.object({
    theme: z.enum(["light", "dark", "system"]).default("system"),
    language: z.enum(["en", "tr"]).default("en"),
  }).optional(),
})"""


class ConversionWorkspace:
    def __init__(self, service: SchemaConverterService, source: str = DEFAULT_SCHEMA_SOURCE):
        self.service = service
        self.source = source
        self.output = ""
        self.error: Optional[str] = None
        self.issues: List[ValidationIssue] = []
        self.logger = logger.bind(workspace_id=id(self))

    def edit(self, source: str) -> None:
        """Replace the source text. Does not convert."""
        self.source = source

    def convert(self) -> ConversionServiceResult:
        self.error = None
        result = self.service.convert_source(self.source)
        if result.error_message is not None:
            self.error = result.error_message
            self.logger.info("Conversion failed; keeping previous output.", error=result.error_message)
        else:
            self.output = result.output or ""
            self.issues = result.issues
        return result
