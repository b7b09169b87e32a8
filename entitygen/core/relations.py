"""Inverse relation inference between definitions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from entitygen.core import annotations as ann
from entitygen.core.composition import flatten_definition
from entitygen.core.definition import Definition
from entitygen.core.field import SchemaField
from entitygen.core.record_graph import RecordGraph
from entitygen.validation import SchemaError

logger = logging.getLogger(__name__)


@dataclass
class InferredRelation:
    """A many-to-one annotation written onto a target field."""

    source: str
    field: str
    target: str
    target_field: str
    mapped_by: str


@dataclass
class RelationGap:
    """A declared one-to-many relation left one-sided."""

    source: str
    field: str
    target: str
    mapped_by: str | None = None

    def __str__(self) -> str:
        return f"{self.source}.{self.field} -> {self.target}"


@dataclass
class InferenceReport:
    """Outcome of one relation inference pass."""

    inferred: list[InferredRelation] = field(default_factory=list)
    missing_targets: list[RelationGap] = field(default_factory=list)
    unmatched: list[RelationGap] = field(default_factory=list)

    @property
    def inferred_count(self) -> int:
        return len(self.inferred)

    @property
    def missing_target_count(self) -> int:
        return len(self.missing_targets)

    @property
    def unmatched_count(self) -> int:
        return len(self.unmatched)

    def back_reference(self, source: str, field_name: str) -> str | None:
        """Name of the field that received the inverse of ``source.field_name``, if any."""
        for relation in self.inferred:
            if relation.source == source and relation.field == field_name:
                return relation.target_field
        return None


def is_one_to_many(prop: SchemaField) -> bool:
    """Check if a field declares a one-to-many relation over referenced items."""
    return prop.is_array_of_reference and ann.relation_kind(prop.annotations) == ann.RelationKind.ONE_TO_MANY.value


def back_reference_for(
    source: Definition,
    prop: SchemaField,
    back_reference_name: Callable[[str], str] = ann.default_back_reference_name,
) -> str:
    """Back-reference field name for a one-to-many field.

    ``x-mapped-by`` wins; otherwise the naming policy is applied to the source
    definition name.
    """
    return ann.mapped_by(prop.annotations) or back_reference_name(source.name)


def _resolved(definition: Definition) -> Definition | None:
    try:
        return flatten_definition(definition)
    except SchemaError:
        # Reported by the flattening pass.
        return None


def infer_relations(
    graph: RecordGraph,
    back_reference_name: Callable[[str], str] = ann.default_back_reference_name,
) -> InferenceReport:
    """Back-propagate many-to-one annotations for declared one-to-many fields.

    For every field marked ``x-rel: one-to-many`` whose items reference a target
    definition, the first field on the target whose reference equals the
    source's full reference path is annotated ``x-rel: many-to-one``. Only the
    annotation map is mutated. Absent targets and targets without a matching
    back-reference field are skipped and recorded in the report.

    Args:
        graph: Record graph; field annotations are mutated in place
        back_reference_name: Naming policy for back-references without ``x-mapped-by``

    Returns:
        Report of inferred relations and tolerated gaps
    """
    report = InferenceReport()

    for source in graph:
        resolved_source = _resolved(source)
        if resolved_source is None:
            continue

        source_ref = graph.ref_path(source.name)

        for prop in resolved_source.fields.values():
            if not is_one_to_many(prop):
                continue

            target_name = prop.target_name
            target = graph.get(target_name)
            mapped = back_reference_for(source, prop, back_reference_name)
            if target is None:
                logger.debug("Relation target %s of %s.%s not found", target_name, source.name, prop.name)
                report.missing_targets.append(RelationGap(source.name, prop.name, target_name, mapped))
                continue

            resolved_target = _resolved(target)
            if resolved_target is None:
                continue

            back_ref = next(
                (candidate for candidate in resolved_target.fields.values() if candidate.ref == source_ref),
                None,
            )
            if back_ref is None:
                logger.debug("No back-reference to %s found on %s", source.name, target_name)
                report.unmatched.append(RelationGap(source.name, prop.name, target_name, mapped))
                continue

            back_ref.annotations[ann.RELATION] = ann.RelationKind.MANY_TO_ONE.value
            report.inferred.append(InferredRelation(source.name, prop.name, target_name, back_ref.name, mapped))

    return report
