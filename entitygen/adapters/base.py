"""Base adapter interface for importing schema documents."""

from abc import ABC, abstractmethod
from pathlib import Path

from entitygen.core.record_graph import RecordGraph


class BaseAdapter(ABC):
    """Base adapter for importing record definitions from external formats."""

    @abstractmethod
    def parse(self, source: str | Path) -> RecordGraph:
        """Parse external format into a record graph.

        Args:
            source: Path to the schema document

        Returns:
            Record graph with one definition per named schema
        """
        raise NotImplementedError

    def validate(self, graph: RecordGraph) -> list[str]:
        """Validate imported record graph.

        Args:
            graph: Record graph to validate

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        for definition in graph:
            if not definition.fields and not definition.all_of:
                errors.append(f"Definition {definition.name} has neither properties nor allOf")

            for name in definition.required:
                if definition.fields and name not in definition.fields:
                    errors.append(f"Definition {definition.name} requires unknown property {name}")

        return errors
