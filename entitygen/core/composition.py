"""Composition (``allOf``) flattening for definitions."""

from entitygen.core.definition import CompositionBranch, Definition
from entitygen.core.record_graph import RecordGraph
from entitygen.validation import SchemaError


def inline_branch(definition: Definition) -> CompositionBranch:
    """Return the inline structural branch of a composite definition.

    Args:
        definition: Composite definition (empty fields, non-empty ``all_of``)

    Returns:
        First branch without a reference that carries a field mapping

    Raises:
        SchemaError: If no inline branch exists or the branch is itself composite
    """
    for branch in definition.all_of or []:
        if not branch.is_inline:
            continue
        if branch.all_of:
            raise SchemaError(
                f"Definition '{definition.name}' nests composition inside its inline branch; "
                "only one level of allOf is supported",
                definition=definition.name,
            )
        return branch

    raise SchemaError(
        f"Composite definition '{definition.name}' has no inline branch with properties",
        definition=definition.name,
    )


def flatten_definition(definition: Definition) -> Definition:
    """Resolve a composite definition down to one concrete field set.

    Non-composite definitions are returned unchanged, which also makes the
    operation idempotent. The flattened definition shares the branch's field
    objects, so annotations written on them later are visible through both.
    The outer definition's annotations take precedence over the branch's.

    Args:
        definition: Definition to flatten

    Returns:
        The definition itself, or a flattened copy carrying the branch fields

    Raises:
        SchemaError: If the composition is malformed

    Examples:
        >>> branch = CompositionBranch(fields={"id": SchemaField(name="id", type="integer")})
        >>> composite = Definition(name="Book", all_of=[CompositionBranch(ref="#/components/schemas/Base"), branch])
        >>> list(flatten_definition(composite).fields)
        ['id']
    """
    if not definition.is_composite:
        return definition

    branch = inline_branch(definition)

    annotations = dict(branch.annotations)
    annotations.update(definition.annotations)

    required = list(definition.required)
    required.extend(name for name in branch.required if name not in required)

    return definition.model_copy(
        update={
            "fields": branch.fields,
            "all_of": None,
            "required": required,
            "annotations": annotations,
        }
    )


def flatten_graph(graph: RecordGraph) -> dict[str, SchemaError]:
    """Flatten every composite definition of a graph in place.

    Args:
        graph: Record graph to flatten

    Returns:
        Dictionary of definition name to the error that prevented flattening.
        Failed definitions keep their composite form.
    """
    errors = {}
    for index, definition in enumerate(graph.definitions):
        if not definition.is_composite:
            continue
        try:
            graph.replace(index, flatten_definition(definition))
        except SchemaError as e:
            errors[definition.name] = e
    return errors
