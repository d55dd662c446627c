"""Descriptor model: the JSON-Schema-like output of a translation."""
from typing import Any, Optional

from .common import BasePydanticModel


class Descriptor(BasePydanticModel):
    """One node of the output descriptor tree.

    Only fields that were explicitly set are emitted by ``to_dict``, so an
    explicit ``default=None`` survives while unset fields disappear.
    """
    type: str
    format: Optional[str] = None
    minimum: Optional[int | float] = None
    maximum: Optional[int | float] = None
    enum: Optional[list[str]] = None
    default: Any = None
    properties: Optional[dict[str, "Descriptor"]] = None
    required: Optional[list[str]] = None
    items: Optional["Descriptor"] = None

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible dict with unset fields omitted."""
        return self.model_dump(mode="json", exclude_unset=True)

    @property
    def is_fallback(self) -> bool:
        return self.type == "any"


Descriptor.model_rebuild()
