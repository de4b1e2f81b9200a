"""
Visual styling for the DOT output. Data only: the core emits relationship kinds,
this table maps them to Graphviz attributes.
"""
from schemagraph.models.graph import RelationshipKind

COLORS = {
    "document_header": "#1E293B",
    "object_header": "#64748B",
    "object_node_bg": "#FFFFFF",
    "field_bg": "#FFFFFF",
    "default_edge": "#66666680",
}

FONTS = {
    "primary": "Arial",
    "title_size": 14,
    "field_name_size": 10,
    "field_type_size": 9,
    "edge_label_size": 8,
}

TABLE_CELLPADDING = 2

ICONS = {
    "document": "\U0001F4C4",
    "object": "\U0001F3D7\uFE0F",
}

GRAPH_ATTRIBUTES = {
    "rankdir": "TB",
    "splines": "curved",
    "nodesep": 0.8,
    "ranksep": 1.5,
    "concentrate": "true",
    "overlap": "scale",
    "pack": "true",
    "ordering": "out",
    "bgcolor": "white",
    "pad": 0.5,
}

NODE_DEFAULTS = {
    "shape": "plaintext",
    "style": "filled",
    "fillcolor": COLORS["object_node_bg"],
    "color": COLORS["object_header"],
    "fontname": FONTS["primary"],
    "fontsize": 9,
}

EDGE_DEFAULTS = {
    "fontname": FONTS["primary"],
    "fontsize": FONTS["edge_label_size"],
    "penwidth": 1.2,
    "color": COLORS["default_edge"],
    "arrowsize": 0.7,
    "arrowhead": "normal",
}


def _relationship(color: str, penwidth: float, style: str, arrowsize: float) -> dict:
    return {
        "color": color,
        "penwidth": penwidth,
        "style": style,
        "arrowhead": "normal",
        "arrowtail": "box",
        "arrowsize": arrowsize,
        "dir": "both",
    }


RELATIONSHIP_STYLES = {
    RelationshipKind.DIRECT_REFERENCE: _relationship("#2563EB", 2.5, "solid", 0.7),
    RelationshipKind.INFERRED_REFERENCE: _relationship("#059669", 2.0, "dashed", 0.6),
    RelationshipKind.ARRAY_REFERENCE: _relationship("#DC2626", 2.8, "bold", 0.7),
    RelationshipKind.INFERRED_ARRAY_REFERENCE: _relationship("#F59E0B", 2.3, "dashed", 0.6),
    RelationshipKind.OBJECT_COMPOSITION: _relationship("#0D9488", 2.6, "bold", 0.8),
    RelationshipKind.ARRAY_COMPOSITION: _relationship("#0D9488", 2.5, "bold", 0.8),
}
