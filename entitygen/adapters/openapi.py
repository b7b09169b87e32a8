"""OpenAPI document adapter."""

import json
from pathlib import Path
from typing import Any

import yaml

from entitygen.adapters.base import BaseAdapter
from entitygen.core.definition import CompositionBranch, Definition
from entitygen.core.field import SchemaField, ref_name
from entitygen.core.record_graph import RecordGraph


def load_document(source: str | Path) -> dict:
    """Load an OpenAPI document from YAML or JSON.

    Args:
        source: Path to ``.yaml``, ``.yml`` or ``.json`` file

    Returns:
        Parsed document (empty dict for an empty file)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the suffix is unsupported or the document is not a mapping
    """
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Schema document not found: {path}")

    suffix = path.suffix.lower()
    with open(path, encoding="utf-8") as f:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported schema format: {suffix}. Use .yaml, .yml, or .json")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Schema document {path} must contain a mapping at the top level")
    return data


def schema_object(value: Any, location: str) -> dict:
    """Coerce a schema value to a mapping.

    Boolean schemas (OpenAPI 3.1) and null carry no properties and read as an
    empty schema.

    Raises:
        ValueError: If the value is neither a mapping, a boolean nor null
    """
    if isinstance(value, dict):
        return value
    if value is None or isinstance(value, bool):
        return {}
    raise ValueError(f"Schema {location} must be a mapping, got {type(value).__name__}")


def extract_annotations(schema: dict) -> dict[str, Any]:
    """Collect ``x-*`` extension keys of a schema object."""
    return {key: value for key, value in schema.items() if isinstance(key, str) and key.startswith("x-")}


class OpenAPIAdapter(BaseAdapter):
    """Adapter for OpenAPI 3 documents (and Swagger 2 ``definitions``).

    Every entry under ``components.schemas`` becomes one definition:

    ```yaml
    components:
      schemas:
        Author:
          x-persist: Entity
          x-table: authors
          required: [name]
          properties:
            name:
              type: string
              x-unique: true
            books:
              type: array
              x-rel: one-to-many
              items:
                $ref: '#/components/schemas/Book'
    ```

    References are normalized to the graph's canonical reference path, so
    ``#/definitions/Book`` and ``#/components/schemas/Book`` resolve alike.
    """

    def parse(self, source: str | Path) -> RecordGraph:
        """Parse an OpenAPI document into a record graph.

        Args:
            source: Path to YAML or JSON document

        Returns:
            Record graph (empty when the document declares no schemas)
        """
        return self.parse_document(load_document(source))

    def parse_document(self, document: dict) -> RecordGraph:
        """Build a record graph from an already loaded document."""
        graph = RecordGraph()
        schemas = (document.get("components") or {}).get("schemas") or document.get("definitions") or {}

        for name, schema in schemas.items():
            graph.add_definition(self._parse_definition(str(name), schema_object(schema, str(name)), graph))

        return graph

    def _parse_definition(self, name: str, schema: dict, graph: RecordGraph) -> Definition:
        all_of = None
        if schema.get("allOf") is not None:
            all_of = [self._parse_branch(schema_object(branch, f"{name}.allOf"), graph) for branch in schema["allOf"]]

        return Definition(
            name=name,
            fields=self._parse_properties(schema.get("properties"), graph) or {},
            all_of=all_of,
            required=list(schema.get("required") or []),
            annotations=extract_annotations(schema),
        )

    def _parse_branch(self, schema: dict, graph: RecordGraph) -> CompositionBranch:
        nested = None
        if schema.get("allOf") is not None:
            nested = [self._parse_branch(schema_object(branch, "allOf"), graph) for branch in schema["allOf"]]

        return CompositionBranch(
            ref=self._normalize_ref(schema.get("$ref"), graph),
            fields=self._parse_properties(schema.get("properties"), graph),
            required=list(schema.get("required") or []),
            annotations=extract_annotations(schema),
            all_of=nested,
        )

    def _parse_properties(self, properties: dict | None, graph: RecordGraph) -> dict[str, SchemaField] | None:
        if properties is None:
            return None
        return {
            str(name): self._parse_field(str(name), schema_object(prop, str(name)), graph)
            for name, prop in properties.items()
        }

    def _parse_field(self, name: str, schema: dict, graph: RecordGraph) -> SchemaField:
        annotations = extract_annotations(schema)
        ref = schema.get("$ref")

        # A lone allOf wrapper is how OpenAPI 3.0 attaches siblings to a $ref
        wrapped = schema.get("allOf")
        if ref is None and isinstance(wrapped, list) and len(wrapped) == 1 and isinstance(wrapped[0], dict):
            ref = wrapped[0].get("$ref")

        items = None
        if isinstance(schema.get("items"), dict):
            items = self._parse_field("items", schema["items"], graph)

        return SchemaField(
            name=name,
            type=self._declared_type(schema.get("type")),
            format=schema.get("format"),
            ref=self._normalize_ref(ref, graph),
            items=items,
            annotations=annotations,
        )

    def _declared_type(self, value: Any) -> str | None:
        # OpenAPI 3.1 allows type lists such as [string, "null"]
        if isinstance(value, list):
            return next((item for item in value if item != "null"), None)
        return value

    def _normalize_ref(self, ref: str | None, graph: RecordGraph) -> str | None:
        if not ref:
            return None
        return graph.ref_path(ref_name(ref))
