"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from entitygen import CompositionBranch, Definition, SchemaField
from tests.utils import make_graph, ref

FIXTURES = Path(__file__).parent / "fixtures" / "openapi"


@pytest.fixture
def library_graph():
    """Author/Book graph: Author.books is one-to-many, Book.author has no relation annotation."""
    author = Definition(
        name="Author",
        required=["name"],
        annotations={"x-persist": "Entity", "x-table": "authors"},
        fields={
            "id": SchemaField(name="id", type="integer", format="int64"),
            "name": SchemaField(name="name", type="string"),
            "books": SchemaField(
                name="books",
                type="array",
                items=SchemaField(name="items", ref=ref("Book")),
                annotations={"x-rel": "one-to-many"},
            ),
        },
    )
    book = Definition(
        name="Book",
        required=["title", "isbn"],
        annotations={"x-persist": "Entity"},
        fields={
            "id": SchemaField(name="id", type="integer", format="int64"),
            "title": SchemaField(name="title", type="string"),
            "isbn": SchemaField(name="isbn", type="string", annotations={"x-unique": True}),
            "author": SchemaField(name="author", ref=ref("Author")),
        },
    )
    return make_graph(author, book)


@pytest.fixture
def person_graph():
    """Person with an embedded Address value object."""
    address = Definition(
        name="Address",
        annotations={"x-persist": "Embeddable"},
        fields={
            "street": SchemaField(name="street", type="string"),
            "city": SchemaField(name="city", type="string"),
        },
    )
    person = Definition(
        name="Person",
        required=["email"],
        annotations={"x-persist": "Entity"},
        fields={
            "email": SchemaField(name="email", type="string", annotations={"x-unique": True}),
            "address": SchemaField(name="address", ref=ref("Address")),
        },
    )
    return make_graph(address, person)


@pytest.fixture
def composite_definition():
    """Definition built from a reference branch and one inline branch."""
    return Definition(
        name="Ebook",
        annotations={"x-persist": "Entity"},
        all_of=[
            CompositionBranch(ref=ref("Book")),
            CompositionBranch(
                required=["url"],
                fields={
                    "url": SchemaField(name="url", type="string"),
                    "sizeBytes": SchemaField(name="sizeBytes", type="integer", format="int64"),
                },
            ),
        ],
    )


@pytest.fixture
def library_spec():
    return FIXTURES / "library.yaml"
