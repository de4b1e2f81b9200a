# schemagraph/core/normalizers.py
import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from schemagraph.core.errors import DialectNotImplemented, UnrecognizedFormat, UnsupportedDialect
from schemagraph.core.registry import build_parsed_schema, is_document_category
from schemagraph.core.resolver import find_possible_reference_targets
from schemagraph.models.schema import GRAPH_CATEGORIES, INTERNAL_MARKER, ParsedSchema, SchemaField, SchemaType

logger = logging.getLogger(__name__)

"""
Dialect normalizers: raw value tree (already parsed from text) -> ParsedSchema.

schema.club (legacy):
[
  {"name": "product", "type": "document", "fields": [
      {"name": "category", "type": "reference", "to": [{"type": "category"}]},
      {"name": "tags", "type": "array", "of": [{"type": "reference", "to": [{"type": "tag"}]}]}
  ]},
  {"name": "category", "type": "document"}
]

sanity (schema extract):
[
  {"name": "product", "type": "document", "attributes": {
      "_id": {...},
      "category": {"type": "objectAttribute", "value": {"type": "object", "dereferencesTo": "category"}},
      "modules": {"type": "objectAttribute", "value": {"type": "array", "of": {"type": "union", "of": [...]}}}
  }},
  {"name": "seo", "type": "type", "value": {"type": "object", "attributes": {...}}}
]
"""


class Dialect(str, Enum):
    SCHEMA_CLUB = "schema.club"
    SANITY = "sanity"
    SANITY_STUDIO = "sanity.studio"


IMPLEMENTED_DIALECTS = (Dialect.SCHEMA_CLUB, Dialect.SANITY)


def _require_list(value: Any, label: str) -> List[Any]:
    if not isinstance(value, list):
        raise UnrecognizedFormat(f"{label} format expects an array of schema types")
    return value


def _named_entries(entries: List[Any], marker: Callable[[Dict[str, Any]], Any]) -> Iterator[Dict[str, Any]]:
    for idx, entry in enumerate(entries):
        if isinstance(entry, dict) and _text(entry.get("name")) and marker(entry):
            yield entry
        else:
            logger.debug("Skipping schema entry #%d: missing name or type marker", idx)


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value.strip() else None


def _explicit_targets(to: Any) -> Tuple[str, ...]:
    # [{"type": "x"}, ...], a single {"type": "x"}, or bare names
    if to is None:
        return ()
    items = to if isinstance(to, list) else [to]
    targets = []
    for item in items:
        name = item.get("type") if isinstance(item, dict) else item
        if _text(name) and name not in targets:
            targets.append(name)
    return tuple(targets)


# ---------------------
# schema.club (legacy) dialect
# ---------------------
class _CategoryIndex:
    """First-seen name -> category of the raw entries, used before the registry exists."""

    def __init__(self, entries: Iterable[Dict[str, Any]]):
        self._categories: Dict[str, str] = {}
        for entry in entries:
            self._categories.setdefault(entry["name"], entry["type"])

    def is_graph_type(self, name: Optional[str]) -> bool:
        return self._categories.get(name) in GRAPH_CATEGORIES


def _simple_field(
    raw: Any,
    index: _CategoryIndex,
    infer_plurals: bool,
    parent_name: Optional[str] = None,
) -> Optional[SchemaField]:
    if not isinstance(raw, dict):
        return None
    name = _text(raw.get("name"))
    kind = _text(raw.get("type"))
    if not kind or (not name and parent_name is None):
        return None
    if name and name.startswith(INTERNAL_MARKER):
        return None
    title = _text(raw.get("title"))

    targets = _explicit_targets(raw.get("to"))
    if kind == "reference" and not targets:
        targets = tuple(find_possible_reference_targets(index, name or parent_name, title, strip_plural=infer_plurals))

    item_kinds = ()
    if kind == "array" and raw.get("of"):
        of = raw["of"] if isinstance(raw["of"], list) else [raw["of"]]
        item_kinds = tuple(f for f in (_simple_field(i, index, infer_plurals, parent_name=name or "") for i in of) if f)

    children = ()
    if isinstance(raw.get("fields"), list):
        children = tuple(f for f in (_simple_field(sub, index, infer_plurals) for sub in raw["fields"]) if f)

    return SchemaField(name=name, kind=kind, title=title, children=children, item_kinds=item_kinds, targets=targets)


def _simple_types(entries: List[Any], infer_plurals: bool) -> List[SchemaType]:
    named = list(_named_entries(entries, lambda e: _text(e.get("type"))))
    index = _CategoryIndex(named)
    types = []
    for entry in named:
        raw_fields = entry.get("fields") if isinstance(entry.get("fields"), list) else []
        types.append(
            SchemaType(
                name=entry["name"],
                category=entry["type"],
                title=_text(entry.get("title")),
                fields=tuple(f for f in (_simple_field(raw, index, infer_plurals) for raw in raw_fields) if f),
            )
        )
    return types


def normalize_schema_club(value: Any, infer_plurals: bool = True) -> ParsedSchema:
    entries = _require_list(value, "Schema.club")
    types = _simple_types(entries, infer_plurals)
    return build_parsed_schema(types, is_document_category, source=Dialect.SCHEMA_CLUB.value)


# ---------------------
# sanity dialect
# ---------------------
def _type_string(value: Any) -> str:
    if isinstance(value, dict) and _text(value.get("type")):
        return value["type"]
    return "unknown"


def _is_extract_format(entries: List[Any]) -> bool:
    has_fields = any(isinstance(e, dict) and isinstance(e.get("fields"), list) for e in entries)
    has_attributes = any(
        isinstance(e, dict) and (isinstance(e.get("attributes"), dict) or isinstance(e.get("value"), dict))
        for e in entries
    )
    return has_attributes and not has_fields


def _has_sanity_marker(entry: Dict[str, Any]) -> bool:
    marker = entry.get("type")
    return bool(_text(marker)) or isinstance(marker, dict)


def _sanity_category(entry: Dict[str, Any]) -> str:
    marker = entry.get("type")
    category = "object"
    if _text(marker):
        category = marker
    elif isinstance(marker, dict) and _text(marker.get("value")):
        category = marker["value"]
    # named type aliases keep their real kind one level deeper
    value = entry.get("value")
    if category == "type" and isinstance(value, dict) and _text(value.get("type")):
        category = value["type"]
    return category


def _walk_references(nodes: Iterable[Any], found: List[str]) -> None:
    for node in nodes:
        if not isinstance(node, dict):
            continue
        deref = _text(node.get("dereferencesTo"))
        if deref:
            found.append(deref)
        if node.get("type") == "inline" and _text(node.get("name")):
            found.append(node["name"])
        for key in ("value", "rest"):
            if isinstance(node.get(key), dict):
                _walk_references([node[key]], found)
        of = node.get("of")
        if isinstance(of, list):
            _walk_references(of, found)
        elif isinstance(of, dict):
            _walk_references([of], found)
        attributes = node.get("attributes")
        if isinstance(attributes, dict):
            _walk_references(
                (attr for key, attr in attributes.items() if not key.startswith(INTERNAL_MARKER)), found
            )


def collect_references(nodes: Iterable[Any]) -> Tuple[str, ...]:
    """Every reference target reachable from nodes, deduplicated in discovery order."""
    found: List[str] = []
    _walk_references(nodes, found)
    return tuple(dict.fromkeys(found))


def _sanity_array_item(item: Any) -> Optional[SchemaField]:
    if not isinstance(item, dict):
        return None
    deref = _text(item.get("dereferencesTo"))
    if deref:
        return SchemaField(kind="reference", targets=(deref,))

    item_type = _text(item.get("type"))
    if item_type in ("union", "object", "inline"):
        refs = collect_references([item])
        if refs:
            return SchemaField(kind="reference", targets=refs)
    if item_type:
        return SchemaField(kind=item_type)
    if isinstance(item.get("value"), dict):
        return SchemaField(kind=_type_string(item["value"]))
    return None


def _sanity_array_items(of: Any) -> Tuple[SchemaField, ...]:
    items = of if isinstance(of, list) else [of]
    return tuple(f for f in (_sanity_array_item(item) for item in items) if f)


def _sanity_field(name: str, definition: Any) -> Optional[SchemaField]:
    if not isinstance(definition, dict) or not isinstance(definition.get("value"), dict):
        return None
    value = definition["value"]

    deref = _text(definition.get("dereferencesTo")) or _text(value.get("dereferencesTo"))
    if deref:
        return SchemaField(name=name, kind="reference", targets=(deref,))

    value_type = _type_string(value)
    if value_type == "array" and value.get("of"):
        return SchemaField(name=name, kind="array", item_kinds=_sanity_array_items(value["of"]))
    if value_type == "object" and isinstance(value.get("attributes"), dict):
        return SchemaField(name=name, kind="object", children=_sanity_fields(value["attributes"]))

    refs = collect_references([definition])
    if refs:
        return SchemaField(name=name, kind="reference", targets=refs)
    return SchemaField(name=name, kind=value_type)


def _sanity_fields(attributes: Dict[str, Any]) -> Tuple[SchemaField, ...]:
    fields = []
    for field_name, definition in attributes.items():
        if not _text(field_name) or field_name.startswith(INTERNAL_MARKER):
            continue
        field = _sanity_field(field_name, definition)
        if field:
            fields.append(field)
    return tuple(fields)


def _sanity_type(entry: Dict[str, Any]) -> SchemaType:
    attributes = entry.get("attributes")
    if not isinstance(attributes, dict):
        value = entry.get("value")
        attributes = value.get("attributes") if isinstance(value, dict) else None
    return SchemaType(
        name=entry["name"],
        category=_sanity_category(entry),
        title=_text(entry.get("title")),
        fields=_sanity_fields(attributes) if isinstance(attributes, dict) else (),
    )


def normalize_sanity(value: Any, infer_plurals: bool = True) -> ParsedSchema:
    entries = _require_list(value, "Sanity")
    if _is_extract_format(entries):
        logger.debug("Sanity input detected as schema extract format")
        types = [_sanity_type(e) for e in _named_entries(entries, _has_sanity_marker)]
    else:
        logger.debug("Sanity input detected as simple field-list format")
        types = _simple_types(entries, infer_plurals)
    return build_parsed_schema(types, is_document_category, source=Dialect.SANITY.value)


def normalize_sanity_studio(value: Any, infer_plurals: bool = True) -> ParsedSchema:
    raise DialectNotImplemented(Dialect.SANITY_STUDIO.value)


# ---------------------
# Factory
# ---------------------
_NORMALIZERS: Dict[Dialect, Callable[..., ParsedSchema]] = {
    Dialect.SCHEMA_CLUB: normalize_schema_club,
    Dialect.SANITY: normalize_sanity,
    Dialect.SANITY_STUDIO: normalize_sanity_studio,
}


def parse_dialect(dialect: Any) -> Dialect:
    try:
        return Dialect(dialect)
    except ValueError:
        raise UnsupportedDialect(str(dialect), [d.value for d in IMPLEMENTED_DIALECTS]) from None


def get_normalizer(dialect: Any) -> Callable[..., ParsedSchema]:
    return _NORMALIZERS[parse_dialect(dialect)]


def normalize(value: Any, dialect: Any = Dialect.SANITY, **options) -> ParsedSchema:
    return get_normalizer(dialect)(value, **options)
