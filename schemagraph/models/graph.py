from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Any, List, Optional


class RelationshipKind(str, Enum):
    DIRECT_REFERENCE = "direct-reference"
    INFERRED_REFERENCE = "inferred-reference"
    ARRAY_REFERENCE = "array-reference"
    INFERRED_ARRAY_REFERENCE = "inferred-array-reference"
    OBJECT_COMPOSITION = "object-composition"
    ARRAY_COMPOSITION = "array-composition"


LABEL_SUFFIXES = {
    RelationshipKind.DIRECT_REFERENCE: "",
    RelationshipKind.INFERRED_REFERENCE: "?",
    RelationshipKind.ARRAY_REFERENCE: "[]",
    RelationshipKind.INFERRED_ARRAY_REFERENCE: "[]?",
    RelationshipKind.OBJECT_COMPOSITION: "",
    RelationshipKind.ARRAY_COMPOSITION: "[]",
}


def display_label(field_name: str, kind: RelationshipKind) -> str:
    return f"{field_name}{LABEL_SUFFIXES[kind]}"


def field_anchor(field_name: str) -> str:
    # west side of the field's name cell
    return f"{field_name}_left:w"


class Edge(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_type: str
    target_type: str
    source_field: str
    kind: RelationshipKind

    @property
    def display_label(self) -> str:
        return display_label(self.source_field, self.kind)

    @property
    def dedup_key(self):
        return (self.source_type, self.target_type, self.display_label)

    @property
    def source_anchor(self) -> str:
        return field_anchor(self.source_field)


class NodeField(BaseModel):
    name: str
    type_label: str


class GraphNode(BaseModel):
    id: str
    category: str
    is_document: bool
    fields: List[NodeField] = Field(default_factory=list)


class GraphEdge(BaseModel):
    source: str
    target: str
    display_label: str
    kind: RelationshipKind
    source_anchor: str


class StructuredGraph(BaseModel):
    nodes: List[GraphNode] = Field(default_factory=list)
    edges: List[GraphEdge] = Field(default_factory=list)

    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]


class ConversionRequest(BaseModel):
    """
    Either raw schema text (source) or an already-parsed value tree (schema).
    """
    model_config = ConfigDict(populate_by_name=True)

    dialect: Optional[str] = None
    source: Optional[str] = None
    schema_value: Optional[Any] = Field(default=None, alias="schema")

    @model_validator(mode="after")
    def exactly_one_input(self) -> "ConversionRequest":
        if (self.source is None) == (self.schema_value is None):
            raise ValueError("Provide exactly one of 'source' or 'schema'")
        return self
