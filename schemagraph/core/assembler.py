# schemagraph/core/assembler.py
import logging
from typing import Iterable, List, Set, Tuple

from schemagraph.core.resolver import resolve_schema
from schemagraph.models.graph import Edge, GraphEdge, GraphNode, NodeField, StructuredGraph
from schemagraph.models.schema import ParsedSchema, SchemaField, SchemaType

logger = logging.getLogger(__name__)

UNNAMED_FIELD = "unnamed"


def field_type_label(field: SchemaField) -> str:
    if field.kind == "array" and field.item_kinds:
        return f"Array<{' | '.join(field_type_label(item) for item in field.item_kinds)}>"
    if field.kind == "reference" and field.targets:
        return f"Ref<{' | '.join(field.targets)}>"
    return field.kind


def build_node(schema: ParsedSchema, schema_type: SchemaType) -> GraphNode:
    return GraphNode(
        id=schema_type.name,
        category=schema_type.category,
        is_document=schema.is_document(schema_type.name),
        fields=[
            NodeField(name=f.name or UNNAMED_FIELD, type_label=field_type_label(f))
            for f in schema_type.visible_fields
        ],
    )


class EdgeAccumulator:
    """
    Dedup state for one assembly pass. Keys are (source, target, display label);
    the first edge seen for a key is kept.
    """

    def __init__(self):
        self._seen: Set[Tuple[str, str, str]] = set()
        self.edges: List[GraphEdge] = []
        self.discarded = 0

    def add(self, edge: Edge) -> bool:
        key = edge.dedup_key
        if key in self._seen:
            self.discarded += 1
            return False
        self._seen.add(key)
        self.edges.append(
            GraphEdge(
                source=edge.source_type,
                target=edge.target_type,
                display_label=edge.display_label,
                kind=edge.kind,
                source_anchor=edge.source_anchor,
            )
        )
        return True

    def extend(self, edges: Iterable[Edge]) -> "EdgeAccumulator":
        for edge in edges:
            self.add(edge)
        return self


def build_graph(schema: ParsedSchema) -> StructuredGraph:
    nodes = [build_node(schema, t) for t in schema.graph_types]
    accumulator = EdgeAccumulator().extend(resolve_schema(schema))
    if accumulator.discarded:
        logger.debug("Discarded %d duplicate edges", accumulator.discarded)
    return StructuredGraph(nodes=nodes, edges=accumulator.edges)
