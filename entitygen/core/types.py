"""Mapping from schema value kinds to Java type names."""

from entitygen.core.field import SchemaField, ref_name

FALLBACK_TYPE = "Object"

SCALAR_TYPES = {
    "string": "String",
    "integer": "Integer",
    "number": "BigDecimal",
    "boolean": "Boolean",
    "date-time": "LocalDateTime",
}

# Format refinements applied on top of the declared kind
FORMAT_TYPES = {
    ("string", "date-time"): "LocalDateTime",
    ("string", "date"): "LocalDate",
    ("integer", "int64"): "Long",
}


def scalar_type(prop: SchemaField) -> str:
    """Map a primitive field to its Java type, falling back to ``Object``."""
    refined = FORMAT_TYPES.get((prop.type, prop.format))
    if refined:
        return refined
    return SCALAR_TYPES.get(prop.type or "", FALLBACK_TYPE)


def resolve_type(prop: SchemaField) -> str:
    """Resolve the Java type name of a field.

    Arrays resolve to their item's referenced definition name, direct
    references to the referenced definition name, everything else to the
    scalar mapping.
    """
    if prop.is_array:
        return ref_name(prop.items.ref if prop.items else None) or FALLBACK_TYPE
    if prop.is_reference:
        return ref_name(prop.ref)
    return scalar_type(prop)
