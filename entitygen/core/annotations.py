"""Annotation keys and typed accessors.

Schemas carry persistence metadata as ``x-*`` extension keys. The raw map is
open-ended, so every known key is read through an accessor that degrades to a
documented default when the value has an unexpected shape.
"""

from enum import Enum
from typing import Any

AnnotationValue = str | bool | int | float | list[str] | list[list[str]] | None

# Annotation keys
PERSIST = "x-persist"
EXTENDS = "x-extends"
TABLE = "x-table"
UNIQUE = "x-unique"
COLUMN_NAME = "x-column-name"
RELATION = "x-rel"
MAPPED_BY = "x-mapped-by"
IGNORE = "x-ignore"

ENTITY = "Entity"
EMBEDDABLE = "Embeddable"


class RelationKind(str, Enum):
    """Relation labels carried by ``x-rel`` and field descriptors."""

    EMBEDDED = "embedded"
    ONE_TO_MANY = "one-to-many"
    MANY_TO_ONE = "many-to-one"


def get_str(annotations: dict[str, Any], key: str) -> str | None:
    """Return a non-empty string value, or None for anything else."""
    value = annotations.get(key)
    if isinstance(value, str) and value:
        return value
    return None


def get_bool(annotations: dict[str, Any], key: str) -> bool:
    """Return True only for a literal boolean ``True``.

    Strings such as ``"true"`` or numbers are treated as not set.
    """
    return annotations.get(key) is True


def get_flag(annotations: dict[str, Any], key: str) -> bool:
    """Return True when the key is present with any value other than False/None."""
    if key not in annotations:
        return False
    return annotations[key] is not None and annotations[key] is not False


def get_groups(annotations: dict[str, Any], key: str) -> list[list[str]]:
    """Return a list-of-lists value, dropping malformed members.

    Non-list members are skipped, None items inside a group are skipped and
    the remaining items are stringified.

    Examples:
        >>> get_groups({"x-unique": [["a", "b"], "c", [1, None]]}, "x-unique")
        [['a', 'b'], ['1']]
    """
    raw = annotations.get(key)
    if not isinstance(raw, list):
        return []

    groups = []
    for group in raw:
        if isinstance(group, list):
            groups.append([str(item) for item in group if item is not None])
    return groups


def persistence_kind(annotations: dict[str, Any]) -> str | None:
    """Persistence kind (``Entity``, ``Embeddable``, ...) or None when absent.

    An empty string is preserved so callers can tell "declared but blank"
    from "not declared".
    """
    value = annotations.get(PERSIST)
    return value if isinstance(value, str) else None


def is_embeddable(annotations: dict[str, Any]) -> bool:
    return persistence_kind(annotations) == EMBEDDABLE


def relation_kind(annotations: dict[str, Any]) -> str | None:
    return get_str(annotations, RELATION)


def mapped_by(annotations: dict[str, Any]) -> str | None:
    return get_str(annotations, MAPPED_BY)


def is_ignored(annotations: dict[str, Any]) -> bool:
    return get_bool(annotations, IGNORE)


def is_unique(annotations: dict[str, Any]) -> bool:
    return get_flag(annotations, UNIQUE)


def column_name(annotations: dict[str, Any]) -> str | None:
    return get_str(annotations, COLUMN_NAME)


def table_name(annotations: dict[str, Any]) -> str | None:
    return get_str(annotations, TABLE)


def extends_target(annotations: dict[str, Any]) -> str | None:
    value = annotations.get(EXTENDS)
    if isinstance(value, str) and value.strip():
        return value
    return None


def unique_groups(annotations: dict[str, Any]) -> list[list[str]]:
    return get_groups(annotations, UNIQUE)


def default_back_reference_name(source_name: str) -> str:
    """Default back-reference field name for a one-to-many relation.

    Lower-cases the first character of the source definition name and leaves
    the rest untouched (``OrderLine`` -> ``orderLine``). Callers may pass a
    different policy wherever a back-reference name is computed.
    """
    if not source_name:
        return source_name
    return source_name[0].lower() + source_name[1:]
