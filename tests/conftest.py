import pytest

from schemagraph.core.registry import build_parsed_schema
from schemagraph.models.schema import SchemaField, SchemaType


@pytest.fixture
def make_schema():
    """Build a ParsedSchema straight from canonical types."""
    def _make(*types):
        return build_parsed_schema(list(types))
    return _make


@pytest.fixture
def product_category_schema(make_schema):
    return make_schema(
        SchemaType(
            name="product",
            category="document",
            fields=(SchemaField(name="category", kind="reference", targets=("category",)),),
        ),
        SchemaType(name="category", category="document"),
    )


@pytest.fixture
def schema_club_document():
    return [
        {
            "name": "product",
            "type": "document",
            "title": "Product",
            "fields": [
                {"name": "title", "type": "string"},
                {"name": "_internal", "type": "string"},
                {"name": "category", "type": "reference", "to": [{"type": "category"}]},
                {"name": "brandRef", "type": "reference"},
                {"name": "tags", "type": "array", "of": [{"type": "reference", "to": [{"type": "tag"}]}]},
                {"name": "seo", "type": "object", "fields": [{"name": "metaTitle", "type": "string"}]},
            ],
        },
        {"name": "category", "type": "document", "fields": [{"name": "title", "type": "string"}]},
        {"name": "brand", "type": "document"},
        {"name": "tag", "type": "object", "fields": [{"name": "label", "type": "string"}]},
        {"name": "seo", "type": "object", "fields": [{"name": "metaTitle", "type": "string"}]},
        {"name": "slug", "type": "string"},
        {"title": "entry without a name", "type": "document"},
    ]


@pytest.fixture
def sanity_extract_document():
    return [
        {
            "name": "product",
            "type": "document",
            "attributes": {
                "_id": {"type": "objectAttribute", "value": {"type": "string"}},
                "title": {"type": "objectAttribute", "value": {"type": "string"}},
                "category": {
                    "type": "objectAttribute",
                    "value": {
                        "type": "object",
                        "attributes": {
                            "_ref": {"type": "objectAttribute", "value": {"type": "string"}},
                        },
                        "dereferencesTo": "category",
                    },
                },
                "modules": {
                    "type": "objectAttribute",
                    "value": {
                        "type": "array",
                        "of": {
                            "type": "union",
                            "of": [
                                {
                                    "type": "object",
                                    "attributes": {
                                        "_key": {"type": "objectAttribute", "value": {"type": "string"}},
                                    },
                                    "rest": {"type": "inline", "name": "hero"},
                                },
                                {
                                    "type": "object",
                                    "attributes": {
                                        "product": {
                                            "type": "objectAttribute",
                                            "value": {"type": "object", "dereferencesTo": "product"},
                                        },
                                    },
                                },
                            ],
                        },
                    },
                },
                "gallery": {
                    "type": "objectAttribute",
                    "value": {"type": "array", "of": {"type": "string"}},
                },
                "dimensions": {
                    "type": "objectAttribute",
                    "value": {
                        "type": "object",
                        "attributes": {
                            "_type": {"type": "objectAttribute", "value": {"type": "string", "value": "dimensions"}},
                            "width": {"type": "objectAttribute", "value": {"type": "number"}},
                        },
                    },
                },
                "seo": {
                    "type": "objectAttribute",
                    "value": {"type": "inline", "name": "seo"},
                },
            },
        },
        {
            "name": "category",
            "type": "document",
            "attributes": {"title": {"type": "objectAttribute", "value": {"type": "string"}}},
        },
        {
            "name": "hero",
            "type": "type",
            "value": {
                "type": "object",
                "attributes": {"headline": {"type": "objectAttribute", "value": {"type": "string"}}},
            },
        },
        {
            "name": "seo",
            "type": "type",
            "value": {"type": "object", "attributes": {}},
        },
        {"name": "color", "type": "type", "value": {"type": "string"}},
    ]
