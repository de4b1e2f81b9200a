from pydantic import BaseModel, ConfigDict, PrivateAttr, field_serializer, field_validator, model_validator
from typing import Any, Dict, FrozenSet, Optional, Tuple


INTERNAL_MARKER = "_"
GRAPH_CATEGORIES = ("document", "object")


class SchemaField(BaseModel):
    """
    Canonical field descriptor produced by every dialect normalizer.
    name is None for anonymous array-item descriptors.
    """
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    kind: str
    title: Optional[str] = None
    children: Tuple["SchemaField", ...] = ()
    item_kinds: Tuple["SchemaField", ...] = ()
    targets: Tuple[str, ...] = ()

    @field_validator("kind")
    @classmethod
    def kind_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Field kind is required")
        return v

    @property
    def is_internal(self) -> bool:
        return bool(self.name) and self.name.startswith(INTERNAL_MARKER)


class SchemaType(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    category: str
    title: Optional[str] = None
    fields: Tuple[SchemaField, ...] = ()

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Type name is required")
        return v

    @property
    def is_graph_type(self) -> bool:
        return self.category in GRAPH_CATEGORIES

    @property
    def visible_fields(self) -> Tuple[SchemaField, ...]:
        return tuple(f for f in self.fields if not f.is_internal)


class RegistryWarning(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    type_name: str
    message: str


def _raw_attr(raw: Any, key: str) -> Any:
    if isinstance(raw, SchemaType):
        return getattr(raw, key)
    return raw.get(key) if isinstance(raw, dict) else None


def _type_names(raw_types, category: Optional[str] = None):
    for raw in raw_types:
        name = _raw_attr(raw, "name")
        if isinstance(name, str) and (category is None or _raw_attr(raw, "category") == category):
            yield name


class ParsedSchema(BaseModel):
    """
    Type registry state. Built once by build_parsed_schema(), read-only afterwards.
    all_type_names and the name lookup always follow types; document_type_names
    defaults to the "document" category when not given.
    """
    model_config = ConfigDict(frozen=True)

    types: Tuple[SchemaType, ...] = ()
    document_type_names: FrozenSet[str] = frozenset()
    all_type_names: FrozenSet[str] = frozenset()
    warnings: Tuple[RegistryWarning, ...] = ()
    source: Optional[str] = None

    _positions: Dict[str, int] = PrivateAttr(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def derive_names(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not isinstance(data.get("types", ()), (list, tuple)):
            return data
        raw_types = data.get("types", ())
        data = dict(data)
        data["all_type_names"] = frozenset(_type_names(raw_types))
        if data.get("document_type_names") is None:
            data["document_type_names"] = frozenset(_type_names(raw_types, category="document"))
        return data

    def model_post_init(self, __context: Any) -> None:
        for idx, t in enumerate(self.types):
            self._positions.setdefault(t.name, idx)

    @field_serializer("document_type_names", "all_type_names")
    def serialize_names(self, names: FrozenSet[str]):
        return sorted(names)

    def has_type(self, name: Optional[str]) -> bool:
        return name in self.all_type_names

    def get_type(self, name: Optional[str]) -> Optional[SchemaType]:
        idx = self._positions.get(name)
        return self.types[idx] if idx is not None else None

    def is_document(self, name: Optional[str]) -> bool:
        return name in self.document_type_names

    def is_graph_type(self, name: Optional[str]) -> bool:
        schema_type = self.get_type(name)
        return schema_type is not None and schema_type.is_graph_type

    def is_object_type(self, name: Optional[str]) -> bool:
        schema_type = self.get_type(name)
        return schema_type is not None and schema_type.category == "object"

    def fields_of(self, name: str) -> Tuple[SchemaField, ...]:
        schema_type = self.get_type(name)
        return schema_type.fields if schema_type else ()

    @property
    def graph_types(self) -> Tuple[SchemaType, ...]:
        return tuple(t for t in self.types if t.is_graph_type)
