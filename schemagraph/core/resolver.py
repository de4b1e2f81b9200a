# schemagraph/core/resolver.py
import re
from typing import Iterator, List, Optional

from schemagraph.models.graph import Edge, RelationshipKind
from schemagraph.models.schema import ParsedSchema, SchemaField, SchemaType

"""
Decides which fields imply an edge to another type.

Rules per field, in fixed order:
  1. reference with explicit targets  -> direct-reference per valid target
  2. reference without targets        -> inferred-reference per inferred target
  3. object named like an object type -> object-composition
  4. array                            -> every item resolved as 1-3 with array kinds

A target is valid only when it names a known document/object type. Anything else
yields no edge: resolution never raises.
"""

_ID_SUFFIX_RE = re.compile(r"ref$|id$|_ref$|_id$", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")

_PLAIN_KINDS = {
    "direct": RelationshipKind.DIRECT_REFERENCE,
    "inferred": RelationshipKind.INFERRED_REFERENCE,
    "composition": RelationshipKind.OBJECT_COMPOSITION,
}
_ARRAY_KINDS = {
    "direct": RelationshipKind.ARRAY_REFERENCE,
    "inferred": RelationshipKind.INFERRED_ARRAY_REFERENCE,
    "composition": RelationshipKind.ARRAY_COMPOSITION,
}


def strip_id_suffix(name: str) -> str:
    return _ID_SUFFIX_RE.sub("", name, count=1)


def candidate_names(field_name: Optional[str], field_title: Optional[str] = None, strip_plural: bool = False) -> List[str]:
    """
    Unvalidated candidates in precedence order: exact name, squashed title,
    suffix-stripped name and (optionally) the singular form of the name.
    """
    candidates = []
    if field_name:
        candidates.append(field_name)
    if field_title:
        candidates.append(_WHITESPACE_RE.sub("", field_title.lower()))
    if field_name:
        clean = strip_id_suffix(field_name)
        if clean and clean != field_name:
            candidates.append(clean)
        if strip_plural and len(field_name) > 1 and field_name.endswith("s"):
            candidates.append(field_name[:-1])
    return candidates


def find_possible_reference_targets(
    schema: ParsedSchema,
    field_name: Optional[str],
    field_title: Optional[str] = None,
    strip_plural: bool = False,
) -> List[str]:
    """
    Ordered, deduplicated list of type names a reference field probably points to.
    `schema` only needs an is_graph_type(name) method.
    """
    targets: List[str] = []
    for name in candidate_names(field_name, field_title, strip_plural):
        if name in targets:
            continue
        if schema.is_graph_type(name):
            targets.append(name)
    return targets


def _valid_targets(schema: ParsedSchema, targets) -> Iterator[str]:
    for target in targets:
        if schema.has_type(target) and schema.is_graph_type(target):
            yield target


def _resolve_descriptor(schema: ParsedSchema, type_name: str, field_name: str, descriptor: SchemaField, kinds) -> Iterator[Edge]:
    if descriptor.kind == "reference":
        if descriptor.targets:
            targets = list(_valid_targets(schema, descriptor.targets))
            kind = kinds["direct"]
        else:
            targets = find_possible_reference_targets(schema, field_name, descriptor.title)
            kind = kinds["inferred"]
        for target in targets:
            yield Edge(source_type=type_name, target_type=target, source_field=field_name, kind=kind)
        return

    # compositions match on the descriptor's own name (array items carry theirs)
    if descriptor.kind == "object" and descriptor.name and schema.is_object_type(descriptor.name):
        yield Edge(
            source_type=type_name,
            target_type=descriptor.name,
            source_field=field_name,
            kind=kinds["composition"],
        )


def resolve_field(schema: ParsedSchema, type_name: str, field: SchemaField) -> Iterator[Edge]:
    if not field.name:
        return
    if field.kind == "array":
        for item in field.item_kinds:
            yield from _resolve_descriptor(schema, type_name, field.name, item, _ARRAY_KINDS)
        return
    yield from _resolve_descriptor(schema, type_name, field.name, field, _PLAIN_KINDS)


def resolve_type(schema: ParsedSchema, schema_type: SchemaType) -> Iterator[Edge]:
    for field in schema_type.visible_fields:
        yield from resolve_field(schema, schema_type.name, field)


def resolve_schema(schema: ParsedSchema) -> Iterator[Edge]:
    """Candidate edges in type order, then field order. May contain duplicates."""
    for schema_type in schema.graph_types:
        yield from resolve_type(schema, schema_type)
