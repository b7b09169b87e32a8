"""Schema field definitions."""

from typing import Any

from pydantic import BaseModel, Field


def ref_name(ref: str | None) -> str | None:
    """Definition name a reference path points to (text after the last ``/``)."""
    if not ref:
        return None
    return ref.rsplit("/", 1)[-1]


class SchemaField(BaseModel):
    """A typed, annotated member of a definition.

    A field is either a primitive scalar (``type`` set), a direct reference to
    another definition (``ref`` set) or an array whose ``items`` describe either
    a reference or a primitive.
    """

    name: str = Field(..., description="Field name, unique within its definition")
    type: str | None = Field(None, description="Declared value kind (string, integer, array, ...)")
    format: str | None = Field(None, description="Value format refinement (int64, date-time, ...)")
    ref: str | None = Field(None, description="Full reference path of the referenced definition")
    items: "SchemaField | None" = Field(None, description="Item descriptor for array fields")
    annotations: dict[str, Any] = Field(default_factory=dict, description="x-* annotation map")

    @property
    def is_reference(self) -> bool:
        return self.ref is not None

    @property
    def is_array(self) -> bool:
        return self.type == "array"

    @property
    def is_array_of_reference(self) -> bool:
        return self.is_array and self.items is not None and self.items.ref is not None

    @property
    def target_ref(self) -> str | None:
        """Reference path this field links to, directly or through its items."""
        if self.ref:
            return self.ref
        if self.is_array and self.items is not None:
            return self.items.ref
        return None

    @property
    def target_name(self) -> str | None:
        return ref_name(self.target_ref)
