"""Entity generation pipeline."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from entitygen.core import annotations as ann
from entitygen.core.composition import flatten_graph
from entitygen.core.descriptor import EntityDescriptor, build_entity_descriptor
from entitygen.core.embeddables import classify_embeddables
from entitygen.core.record_graph import RecordGraph
from entitygen.core.relations import InferenceReport, infer_relations
from entitygen.core.template import EntityRenderer
from entitygen.validation import SchemaError
from entitygen.writer import GeneratedFile, write_files

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of one generation run."""

    descriptors: list[EntityDescriptor] = field(default_factory=list)
    errors: dict[str, SchemaError] = field(default_factory=dict)
    report: InferenceReport = field(default_factory=InferenceReport)
    embeddables: dict[str, str] = field(default_factory=dict)
    files: list[GeneratedFile] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)

    def get_descriptor(self, class_name: str) -> EntityDescriptor | None:
        for descriptor in self.descriptors:
            if descriptor.class_name == class_name:
                return descriptor
        return None


class EntityGenerator:
    """Turns a record graph into persistence entity sources.

    Stages run strictly in order because each one reads annotations written by
    the previous one: flatten compositions, infer inverse relations, classify
    embeddables, build descriptors, then render and write.
    """

    def __init__(
        self,
        package_name: str,
        output_dir: str | Path | None = None,
        renderer: EntityRenderer | None = None,
        back_reference_name: Callable[[str], str] = ann.default_back_reference_name,
    ):
        """Initialize generator.

        Args:
            package_name: Java package of generated classes
            output_dir: Root directory for generated files (None disables writing)
            renderer: Entity renderer (defaults to the bundled JPA template)
            back_reference_name: Naming policy for back-references without ``x-mapped-by``
        """
        self.package_name = package_name
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.renderer = renderer or EntityRenderer()
        self.back_reference_name = back_reference_name

    def resolve(self, graph: RecordGraph) -> GenerationResult:
        """Resolve a record graph into entity descriptors.

        The graph is mutated (flattened definitions, inferred relation
        annotations) and must not be shared with another run.

        Args:
            graph: Record graph of one schema document

        Returns:
            Generation result with descriptors, per-definition errors and diagnostics
        """
        result = GenerationResult()
        result.errors = flatten_graph(graph)
        result.report = infer_relations(graph, self.back_reference_name)
        result.embeddables = classify_embeddables(graph)

        for definition in graph:
            if definition.name in result.errors:
                continue
            try:
                descriptor = build_entity_descriptor(definition, result.embeddables, self.package_name, result.report)
            except SchemaError as e:
                result.errors[definition.name] = e
                continue
            if descriptor is not None:
                result.descriptors.append(descriptor)

        for name, error in result.errors.items():
            logger.warning("Skipping %s: %s", name, error)
        for gap in result.report.unmatched:
            logger.warning("No back-reference for one-to-many relation %s", gap)

        return result

    def render(self, result: GenerationResult) -> list[GeneratedFile]:
        """Render every descriptor of a result into a source file."""
        result.files = [
            GeneratedFile(path=self.renderer.file_path(descriptor), content=self.renderer.render(descriptor))
            for descriptor in result.descriptors
        ]
        return result.files

    def generate(self, graph: RecordGraph) -> GenerationResult:
        """Resolve, render and (when an output directory is set) write entities.

        Args:
            graph: Record graph of one schema document

        Returns:
            Generation result including rendered and written files
        """
        result = self.resolve(graph)
        self.render(result)

        if self.output_dir is not None and result.files:
            result.written = write_files(result.files, self.output_dir)
            for path in result.written:
                logger.info("Generated entity: %s", path)

        return result

    def generate_from_file(self, spec_file: str | Path) -> GenerationResult:
        """Parse an OpenAPI document and generate its entities.

        Args:
            spec_file: Path to YAML or JSON OpenAPI document

        Returns:
            Generation result (empty when the document has no schemas)
        """
        from entitygen.adapters.openapi import OpenAPIAdapter

        logger.info("Generating entities from: %s", spec_file)
        graph = OpenAPIAdapter().parse(spec_file)
        if len(graph) == 0:
            logger.warning("No schemas found in spec.")
            return GenerationResult()

        return self.generate(graph)
