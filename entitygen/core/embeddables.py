"""Embeddable (value object) classification."""

from entitygen.core import annotations as ann
from entitygen.core.composition import flatten_definition
from entitygen.core.record_graph import RecordGraph
from entitygen.validation import SchemaError


def classify_embeddables(graph: RecordGraph) -> dict[str, str]:
    """Map the reference path of every embeddable definition to its name.

    A definition is embeddable when its ``x-persist`` annotation equals
    ``Embeddable``. Composite definitions are classified on their flattened
    annotations; ones that cannot be flattened are left out.

    Args:
        graph: Record graph (not mutated)

    Returns:
        Dictionary of full reference path to definition name
    """
    embeddables = {}
    for definition in graph:
        try:
            resolved = flatten_definition(definition)
        except SchemaError:
            continue
        if ann.is_embeddable(resolved.annotations):
            embeddables[graph.ref_path(definition.name)] = definition.name
    return embeddables
