"""Record graph owning every schema definition of one generation run."""

from collections.abc import Iterator

from entitygen.core.definition import Definition

REF_PREFIX = "#/components/schemas/"


class RecordGraph:
    """Arena of definitions indexed by name.

    Definitions are stored in declaration order and addressed by index, so the
    resolution passes can replace a definition (e.g. with its flattened form)
    or mutate field annotations through the graph rather than through loose
    references.
    """

    def __init__(self, ref_prefix: str = REF_PREFIX):
        self.ref_prefix = ref_prefix
        self.definitions: list[Definition] = []
        self._index: dict[str, int] = {}

    def add_definition(self, definition: Definition) -> int:
        """Add a definition to the graph.

        Args:
            definition: Definition to add

        Returns:
            Arena index of the new definition

        Raises:
            ValueError: If a definition with the same name already exists
        """
        if definition.name in self._index:
            raise ValueError(f"Definition {definition.name} already exists")

        self.definitions.append(definition)
        self._index[definition.name] = len(self.definitions) - 1
        return self._index[definition.name]

    def replace(self, index: int, definition: Definition) -> None:
        """Replace the definition stored at an index, keeping its name slot."""
        current = self.definitions[index]
        if current.name != definition.name:
            raise ValueError(f"Cannot replace {current.name} with differently named {definition.name}")
        self.definitions[index] = definition

    def get(self, name: str) -> Definition | None:
        """Get definition by name, or None if absent."""
        index = self._index.get(name)
        if index is None:
            return None
        return self.definitions[index]

    def ref_path(self, name: str) -> str:
        """Full reference path of a definition (``#/components/schemas/Name``)."""
        return f"{self.ref_prefix}{name}"

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[Definition]:
        return iter(list(self.definitions))

    def __len__(self) -> int:
        return len(self.definitions)
