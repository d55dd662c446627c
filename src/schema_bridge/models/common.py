from enum import Enum
from typing import Any

from pydantic import BaseModel


class BasePydanticModel(BaseModel):
    model_config = {
        "extra": "forbid",
        "populate_by_name": True,
        "use_enum_values": True,
    }

class ValidationSeverity(str, Enum):
    """Conversion issue severity levels."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

class ValidationIssue(BasePydanticModel):
    """Represents an issue found while converting a schema."""
    severity: ValidationSeverity
    message: str
    path: str | None = None # JSON-pointer style location within the descriptor, e.g. "#/properties/flag"
    details: dict[str, Any] | None = None
