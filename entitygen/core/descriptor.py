"""Entity descriptors: the resolved, renderer-ready shape of a definition."""

from pydantic import BaseModel, ConfigDict, Field

from entitygen.core import annotations as ann
from entitygen.core.composition import flatten_definition
from entitygen.core.definition import Definition
from entitygen.core.field import SchemaField
from entitygen.core.relations import InferenceReport
from entitygen.core.types import resolve_type

NOT_NULLABLE = "not nullable"
UNIQUE = "unique"

BASE_IMPORTS = [
    "jakarta.persistence.*",
    "java.util.*",
    "java.time.*",
    "java.math.*",
    "lombok.*",
]

# JPA @Column attributes for the fixed clauses; name overrides render as-is
_JPA_ATTRIBUTES = {
    NOT_NULLABLE: "nullable = false",
    UNIQUE: "unique = true",
}


class ColumnConstraints(BaseModel):
    """Ordered, de-duplicated column constraint clauses.

    Clauses keep insertion order and adding an existing clause is a no-op.
    """

    model_config = ConfigDict(frozen=True)

    clauses: tuple[str, ...] = ()

    def add(self, clause: str) -> "ColumnConstraints":
        """Return constraints with the clause appended, unless already present."""
        if clause in self.clauses:
            return self
        return ColumnConstraints(clauses=self.clauses + (clause,))

    @property
    def summary(self) -> str:
        """Clause labels joined for display (``"not nullable, unique"``)."""
        return ", ".join(self.clauses)

    @property
    def fragment(self) -> str:
        """JPA ``@Column`` attribute fragment (``"nullable = false, unique = true"``)."""
        return ", ".join(_JPA_ATTRIBUTES.get(clause, clause) for clause in self.clauses)

    def __bool__(self) -> bool:
        return bool(self.clauses)

    def __str__(self) -> str:
        return self.summary


def column_name_clause(name: str) -> str:
    return f'name = "{name}"'


class FieldDescriptor(BaseModel):
    """One resolved field of an entity descriptor."""

    model_config = ConfigDict(frozen=True)

    name: str
    required: bool = False
    type: str
    relation: str | None = None
    constraints: ColumnConstraints = Field(default_factory=ColumnConstraints)
    collection: bool = False
    mapped_by: str | None = None

    @property
    def column_data(self) -> str:
        return self.constraints.fragment


class EntityDescriptor(BaseModel):
    """Renderer-ready representation of one persistable definition."""

    model_config = ConfigDict(frozen=True)

    class_name: str
    package_name: str
    persistence_kind: str = ann.ENTITY
    superclass: str | None = None
    superclass_import: str | None = None
    table_name: str | None = None
    unique_constraints: list[list[str]] = Field(default_factory=list)
    fields: list[FieldDescriptor] = Field(default_factory=list)

    @property
    def imports(self) -> list[str]:
        imports = list(BASE_IMPORTS)
        if self.superclass_import:
            imports.append(self.superclass_import)
        return imports

    def get_field(self, name: str) -> FieldDescriptor | None:
        """Get field descriptor by name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None


def column_constraints(prop: SchemaField, required: bool) -> ColumnConstraints:
    """Derive column constraints: nullability, then uniqueness, then name override."""
    constraints = ColumnConstraints()
    if required:
        constraints = constraints.add(NOT_NULLABLE)
    if ann.is_unique(prop.annotations):
        constraints = constraints.add(UNIQUE)
    override = ann.column_name(prop.annotations)
    if override:
        constraints = constraints.add(column_name_clause(override))
    return constraints


def relation_for(prop: SchemaField, embeddables: dict[str, str]) -> str | None:
    """Relation label: embedded for references to embeddables, else ``x-rel``."""
    if prop.ref is not None and prop.ref in embeddables:
        return ann.RelationKind.EMBEDDED.value
    return ann.relation_kind(prop.annotations)


def build_field_descriptor(
    definition: Definition,
    prop: SchemaField,
    embeddables: dict[str, str],
    report: InferenceReport | None = None,
) -> FieldDescriptor:
    required = prop.name in definition.required_set
    relation = relation_for(prop, embeddables)
    mapped = None
    if relation == ann.RelationKind.ONE_TO_MANY.value:
        # mappedBy must name a real field on the target; gaps leave it unset
        mapped = ann.mapped_by(prop.annotations)
        if mapped is None and report is not None:
            mapped = report.back_reference(definition.name, prop.name)

    return FieldDescriptor(
        name=prop.name,
        required=required,
        type=resolve_type(prop),
        relation=relation,
        constraints=column_constraints(prop, required),
        collection=prop.is_array,
        mapped_by=mapped,
    )


def build_entity_descriptor(
    definition: Definition,
    embeddables: dict[str, str],
    package_name: str,
    report: InferenceReport | None = None,
) -> EntityDescriptor | None:
    """Assemble the entity descriptor of a definition.

    Args:
        definition: Definition to describe (composite definitions are flattened)
        embeddables: Reference path to name lookup from ``classify_embeddables``
        package_name: Target package of the generated class
        report: Inference report naming the back-reference of each one-to-many
            field; without it only ``x-mapped-by`` sets ``mappedBy``

    Returns:
        Entity descriptor, or None when the definition has no ``x-persist``

    Raises:
        SchemaError: If the definition's composition is malformed
    """
    resolved = flatten_definition(definition)
    kind = ann.persistence_kind(resolved.annotations)
    if kind is None:
        return None

    fields = [
        build_field_descriptor(resolved, prop, embeddables, report)
        for prop in resolved.fields.values()
        if not ann.is_ignored(prop.annotations)
    ]

    extends = ann.extends_target(resolved.annotations)
    superclass = extends.rsplit(".", 1)[-1] if extends else None
    superclass_import = extends if extends and "." in extends else None

    return EntityDescriptor(
        class_name=definition.name,
        package_name=package_name,
        persistence_kind=kind.strip() or ann.ENTITY,
        superclass=superclass,
        superclass_import=superclass_import,
        table_name=ann.table_name(resolved.annotations),
        unique_constraints=ann.unique_groups(resolved.annotations),
        fields=fields,
    )
