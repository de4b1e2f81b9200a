import logging
from typing import Any, Dict, Optional

from schemagraph.core.assembler import build_graph
from schemagraph.core.env import get_settings
from schemagraph.core.normalizers import Dialect, parse_dialect, normalize
from schemagraph.models.graph import StructuredGraph
from schemagraph.models.schema import ParsedSchema
from schemagraph.services.dot_export import render_dot
from schemagraph.utils.loader import load_schema_value

logger = logging.getLogger(__name__)


def normalize_input(
    source: Optional[str] = None,
    value: Any = None,
    dialect: Optional[str] = None,
) -> ParsedSchema:
    """
    Text or value tree -> ParsedSchema. Raises NormalizeError subclasses;
    nothing downstream runs without a valid registry.
    """
    settings = get_settings()
    resolved = parse_dialect(dialect or settings.default_dialect)
    raw = load_schema_value(source=source, value=value)
    options = {}
    if resolved in (Dialect.SCHEMA_CLUB, Dialect.SANITY):
        options["infer_plurals"] = settings.infer_plurals
    schema = normalize(raw, resolved, **options)
    logger.info(
        "Found %d schema types (%d documents, %d other) using %s format",
        len(schema.types),
        len(schema.document_type_names),
        len(schema.types) - len(schema.document_type_names),
        resolved.value,
    )
    return schema


def graph_stats(schema: ParsedSchema, graph: StructuredGraph) -> Dict[str, int]:
    return {
        "types": len(schema.types),
        "documents": len(schema.document_type_names),
        "objects": sum(1 for t in schema.types if t.category == "object"),
        "nodes": len(graph.nodes),
        "edges": len(graph.edges),
    }


def convert(
    source: Optional[str] = None,
    value: Any = None,
    dialect: Optional[str] = None,
    output: str = "graph",
) -> Dict[str, Any]:
    """
    Returns:
    {
      "graph": StructuredGraph (output="graph") or "dot": str (output="dot"),
      "warnings": [ {code, type_name, message}, ... ],
      "stats": {types, documents, objects, nodes, edges}
    }
    """
    schema = normalize_input(source=source, value=value, dialect=dialect)
    graph = build_graph(schema)
    result: Dict[str, Any] = {
        "warnings": [w.model_dump() for w in schema.warnings],
        "stats": graph_stats(schema, graph),
    }
    if output == "dot":
        result["dot"] = render_dot(graph, name=get_settings().graph_name)
    else:
        result["graph"] = graph
    logger.info("Generated graph with %d nodes and %d edges", len(graph.nodes), len(graph.edges))
    return result
