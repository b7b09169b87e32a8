"""Record definitions."""

from typing import Any

from pydantic import BaseModel, Field

from entitygen.core.field import SchemaField


class CompositionBranch(BaseModel):
    """One ``allOf`` member of a composite definition.

    Either a pure reference branch (``ref`` set) or an inline structural branch
    carrying its own fields.
    """

    ref: str | None = Field(None, description="Reference path for pure reference branches")
    fields: dict[str, SchemaField] | None = Field(None, description="Inline fields")
    required: list[str] = Field(default_factory=list, description="Required field names")
    annotations: dict[str, Any] = Field(default_factory=dict, description="x-* annotation map")
    all_of: list["CompositionBranch"] | None = Field(None, description="Nested composition (unsupported)")

    @property
    def is_inline(self) -> bool:
        return self.ref is None and self.fields is not None


class Definition(BaseModel):
    """A named schema record describing one generated entity or value type."""

    name: str = Field(..., description="Unique definition name")
    fields: dict[str, SchemaField] = Field(default_factory=dict, description="Fields in declared order")
    all_of: list[CompositionBranch] | None = Field(None, description="Composition branches")
    required: list[str] = Field(default_factory=list, description="Required field names")
    annotations: dict[str, Any] = Field(default_factory=dict, description="x-* annotation map")

    def __hash__(self) -> int:
        return hash(self.name)

    @property
    def is_composite(self) -> bool:
        return not self.fields and bool(self.all_of)

    @property
    def required_set(self) -> set[str]:
        return set(self.required)

    def get_field(self, name: str) -> SchemaField | None:
        """Get field by name."""
        return self.fields.get(name)
