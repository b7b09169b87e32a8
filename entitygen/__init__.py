"""entitygen: OpenAPI schema to JPA entity generator."""

__version__ = "0.1.0"

from entitygen.core.definition import CompositionBranch, Definition
from entitygen.core.descriptor import ColumnConstraints, EntityDescriptor, FieldDescriptor
from entitygen.core.field import SchemaField
from entitygen.core.generator import EntityGenerator, GenerationResult
from entitygen.core.record_graph import RecordGraph
from entitygen.validation import SchemaError

__all__ = [
    "ColumnConstraints",
    "CompositionBranch",
    "Definition",
    "EntityDescriptor",
    "EntityGenerator",
    "FieldDescriptor",
    "GenerationResult",
    "RecordGraph",
    "SchemaError",
    "SchemaField",
]
