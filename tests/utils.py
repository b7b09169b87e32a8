"""Helpers for building record graphs in tests."""

from entitygen import Definition, RecordGraph


def ref(name: str) -> str:
    """Canonical reference path of a definition."""
    return f"#/components/schemas/{name}"


def make_graph(*definitions: Definition) -> RecordGraph:
    graph = RecordGraph()
    for definition in definitions:
        graph.add_definition(definition)
    return graph
