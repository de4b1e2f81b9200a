import html
from typing import Any, Dict, List, Optional

from schemagraph.core import theme
from schemagraph.models.graph import GraphEdge, GraphNode, StructuredGraph


def _quote(s: str) -> str:
    return '"' + s.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _attr_value(v: Any) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, (int, float)):
        return str(v)
    return _quote(str(v))


def _attr_list(attrs: Dict[str, Any]) -> str:
    return ", ".join(f"{k}={_attr_value(v)}" for k, v in attrs.items())


def _esc(s: str) -> str:
    return html.escape(s, quote=True)


def node_label(node: GraphNode) -> str:
    """HTML-like table: a title row (port "title") and one row per field with left/right ports."""
    header_color = theme.COLORS["document_header"] if node.is_document else theme.COLORS["object_header"]
    icon = theme.ICONS["document"] if node.is_document else theme.ICONS["object"]
    colspan = ' COLSPAN="2"' if node.fields else ""
    rows = [
        f'<TABLE BORDER="0" CELLBORDER="1" CELLSPACING="0" CELLPADDING="{theme.TABLE_CELLPADDING}">',
        f'<TR><TD{colspan} BGCOLOR="{header_color}" PORT="title">'
        f'<FONT COLOR="white" POINT-SIZE="{theme.FONTS["title_size"]}"><B>{icon} {_esc(node.id)}</B></FONT></TD></TR>',
    ]
    for f in node.fields:
        name = _esc(f.name)
        rows.append(
            f'<TR><TD ALIGN="LEFT" BGCOLOR="{theme.COLORS["field_bg"]}" PORT="{name}_left">'
            f'<FONT POINT-SIZE="{theme.FONTS["field_name_size"]}"><B>{name}</B></FONT></TD>'
            f'<TD ALIGN="LEFT" BGCOLOR="{theme.COLORS["field_bg"]}" PORT="{name}_right">'
            f'<FONT POINT-SIZE="{theme.FONTS["field_type_size"]}"><I>{_esc(f.type_label)}</I></FONT></TD></TR>'
        )
    rows.append("</TABLE>")
    return "<" + "".join(rows) + ">"


def _endpoint(node_id: str, anchor: str) -> str:
    port, sep, compass = anchor.rpartition(":")
    if not sep:
        port, compass = anchor, ""
    endpoint = f"{_quote(node_id)}:{_quote(port)}"
    return f"{endpoint}:{compass}" if compass else endpoint


def edge_line(edge: GraphEdge, styles: Optional[Dict] = None) -> str:
    style = dict((styles or theme.RELATIONSHIP_STYLES).get(edge.kind, {}))
    style["xlabel"] = edge.display_label
    return (
        f"  {_endpoint(edge.source, edge.source_anchor)} -> {_endpoint(edge.target, 'title')}"
        f" [{_attr_list(style)}];"
    )


def render_dot(graph: StructuredGraph, name: str = "SchemaGraph", styles: Optional[Dict] = None) -> str:
    """
    Serialize a StructuredGraph into Graphviz DOT text. Layout is left to Graphviz.
    """
    lines: List[str] = [f"digraph {_quote(name)} {{"]
    lines.append(f"  graph [{_attr_list(theme.GRAPH_ATTRIBUTES)}];")
    lines.append(f"  node [{_attr_list(theme.NODE_DEFAULTS)}];")
    lines.append(f"  edge [{_attr_list(theme.EDGE_DEFAULTS)}];")
    for node in graph.nodes:
        # HTML labels are delimited by <...>, never quoted
        lines.append(f"  {_quote(node.id)} [label={node_label(node)}, penwidth=1.8];")
    for edge in graph.edges:
        lines.append(edge_line(edge, styles))
    lines.append("}")
    return "\n".join(lines) + "\n"
