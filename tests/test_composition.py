"""Test composition flattening."""

import pytest

from entitygen import CompositionBranch, Definition, SchemaError, SchemaField
from entitygen.core.composition import flatten_definition, flatten_graph
from tests.utils import make_graph, ref


def test_non_composite_definition_unchanged():
    """Definitions with their own fields are returned as-is."""
    definition = Definition(name="Book", fields={"title": SchemaField(name="title", type="string")})

    assert flatten_definition(definition) is definition


def test_flatten_uses_inline_branch(composite_definition):
    """The inline branch supplies the field set."""
    flattened = flatten_definition(composite_definition)

    assert flattened.name == "Ebook"
    assert list(flattened.fields) == ["url", "sizeBytes"]
    assert flattened.required == ["url"]
    assert flattened.all_of is None
    assert flattened.annotations["x-persist"] == "Entity"


def test_flatten_shares_field_objects(composite_definition):
    """Annotations written on flattened fields are visible on the branch."""
    flattened = flatten_definition(composite_definition)
    flattened.fields["url"].annotations["x-rel"] = "many-to-one"

    assert composite_definition.all_of[1].fields["url"].annotations["x-rel"] == "many-to-one"


def test_flatten_is_idempotent(composite_definition):
    """Flattening twice yields the same field set as flattening once."""
    once = flatten_definition(composite_definition)
    twice = flatten_definition(once)

    assert twice is once
    assert list(twice.fields) == list(once.fields)


def test_outer_annotations_override_branch():
    definition = Definition(
        name="Ebook",
        annotations={"x-persist": "Entity"},
        all_of=[
            CompositionBranch(
                fields={"url": SchemaField(name="url", type="string")},
                annotations={"x-persist": "Embeddable", "x-table": "ebooks"},
            )
        ],
    )

    flattened = flatten_definition(definition)

    assert flattened.annotations == {"x-persist": "Entity", "x-table": "ebooks"}


def test_first_inline_branch_wins():
    definition = Definition(
        name="Mixed",
        all_of=[
            CompositionBranch(fields={"a": SchemaField(name="a", type="string")}),
            CompositionBranch(fields={"b": SchemaField(name="b", type="string")}),
        ],
    )

    assert list(flatten_definition(definition).fields) == ["a"]


def test_reference_only_composition_raises():
    """A composite without an inline branch is malformed."""
    definition = Definition(name="Broken", all_of=[CompositionBranch(ref=ref("Base"))])

    with pytest.raises(SchemaError, match="no inline branch") as exc_info:
        flatten_definition(definition)

    assert exc_info.value.definition == "Broken"


def test_nested_composition_rejected():
    """Only one level of composition is supported."""
    definition = Definition(
        name="Deep",
        all_of=[
            CompositionBranch(
                fields={},
                all_of=[CompositionBranch(fields={"a": SchemaField(name="a", type="string")})],
            )
        ],
    )

    with pytest.raises(SchemaError, match="one level"):
        flatten_definition(definition)


def test_flatten_graph_replaces_in_place(composite_definition):
    broken = Definition(name="Broken", all_of=[CompositionBranch(ref=ref("Base"))])
    plain = Definition(name="Plain", fields={"id": SchemaField(name="id", type="integer")})
    graph = make_graph(composite_definition, broken, plain)

    errors = flatten_graph(graph)

    assert list(errors) == ["Broken"]
    assert list(graph.get("Ebook").fields) == ["url", "sizeBytes"]
    assert graph.get("Broken").is_composite
    assert graph.get("Plain") is plain
