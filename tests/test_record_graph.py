"""Test the record graph arena."""

import pytest

from entitygen import Definition, RecordGraph, SchemaField
from entitygen.writer import GeneratedFile, write_files


def test_add_and_get():
    graph = RecordGraph()
    index = graph.add_definition(Definition(name="Book"))

    assert index == 0
    assert graph.get("Book").name == "Book"
    assert graph.get("Missing") is None
    assert "Book" in graph
    assert len(graph) == 1


def test_duplicate_definition_rejected():
    graph = RecordGraph()
    graph.add_definition(Definition(name="Book"))

    with pytest.raises(ValueError, match="already exists"):
        graph.add_definition(Definition(name="Book"))


def test_replace_keeps_slot():
    graph = RecordGraph()
    graph.add_definition(Definition(name="Author"))
    graph.add_definition(Definition(name="Book"))

    replacement = Definition(name="Book", fields={"id": SchemaField(name="id", type="integer")})
    graph.replace(1, replacement)

    assert graph.get("Book") is replacement
    assert [definition.name for definition in graph] == ["Author", "Book"]

    with pytest.raises(ValueError, match="differently named"):
        graph.replace(0, replacement)


def test_ref_path_prefix():
    assert RecordGraph().ref_path("Book") == "#/components/schemas/Book"
    assert RecordGraph(ref_prefix="#/definitions/").ref_path("Book") == "#/definitions/Book"


def test_field_target_helpers():
    direct = SchemaField(name="author", ref="#/components/schemas/Author")
    array = SchemaField(name="books", type="array", items=SchemaField(name="items", ref="#/components/schemas/Book"))
    scalar = SchemaField(name="title", type="string")

    assert direct.target_name == "Author"
    assert array.target_name == "Book"
    assert array.is_array_of_reference
    assert not direct.is_array_of_reference
    assert scalar.target_ref is None


def test_write_files(tmp_path):
    written = write_files([GeneratedFile(path="com/example/Book.java", content="class Book {}")], tmp_path / "out")

    assert written == [(tmp_path / "out" / "com" / "example" / "Book.java").resolve()]
    assert written[0].read_text() == "class Book {}"
