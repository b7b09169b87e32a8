"""Test embeddable classification."""

from entitygen import CompositionBranch, Definition, SchemaField
from entitygen.core.embeddables import classify_embeddables
from tests.utils import make_graph, ref


def test_embeddables_keyed_by_reference_path(person_graph):
    assert classify_embeddables(person_graph) == {"#/components/schemas/Address": "Address"}


def test_entities_not_embeddable(library_graph):
    assert classify_embeddables(library_graph) == {}


def test_composite_embeddable_classified_on_flattened_annotations():
    money = Definition(
        name="Money",
        all_of=[
            CompositionBranch(ref=ref("Base")),
            CompositionBranch(
                fields={"amount": SchemaField(name="amount", type="number")},
                annotations={"x-persist": "Embeddable"},
            ),
        ],
    )
    broken = Definition(name="Broken", annotations={"x-persist": "Embeddable"}, all_of=[CompositionBranch(ref=ref("X"))])

    assert classify_embeddables(make_graph(money, broken)) == {ref("Money"): "Money"}


def test_classification_does_not_mutate(person_graph):
    before = [definition.model_dump() for definition in person_graph]

    classify_embeddables(person_graph)

    assert [definition.model_dump() for definition in person_graph] == before
