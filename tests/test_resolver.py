"""
Reference & composition resolver tests.

Covers the fixed rule order (explicit reference, inferred reference, object
composition, array recursion), the inference heuristic precedence, and the
tolerance policy: unresolvable fields yield no edges and never raise.
"""

import pytest

from schemagraph.core.resolver import (
    candidate_names,
    find_possible_reference_targets,
    resolve_field,
    resolve_schema,
    strip_id_suffix,
)
from schemagraph.models.graph import RelationshipKind
from schemagraph.models.schema import SchemaField, SchemaType


@pytest.fixture
def catalog(make_schema):
    return make_schema(
        SchemaType(name="product", category="document"),
        SchemaType(name="category", category="document"),
        SchemaType(name="tag", category="object"),
        SchemaType(name="seo", category="object"),
        SchemaType(name="slug", category="string"),
    )


class TestInferenceHeuristic:

    @pytest.mark.parametrize("name, expected", [
        ("categoryRef", "category"),
        ("categoryId", "category"),
        ("category_ref", "category"),
        ("category_id", "category"),
        ("CATEGORYREF", "CATEGORY"),
        ("category", "category"),
    ])
    def test_strip_id_suffix(self, name, expected):
        assert strip_id_suffix(name) == expected

    def test_candidate_order(self):
        assert candidate_names("tagsRef", "Product Tag") == ["tagsRef", "producttag", "tags"]
        assert candidate_names("tags", None, strip_plural=True) == ["tags", "tag"]

    def test_exact_name_first(self, catalog):
        assert find_possible_reference_targets(catalog, "category", "Tag") == ["category", "tag"]

    def test_title_is_lowercased_without_whitespace(self, make_schema):
        schema = make_schema(SchemaType(name="blogpost", category="document"))
        assert find_possible_reference_targets(schema, "entry", "Blog Post") == ["blogpost"]

    def test_suffix_stripped(self, catalog):
        assert find_possible_reference_targets(catalog, "categoryRef") == ["category"]

    def test_results_are_deduplicated(self, catalog):
        assert find_possible_reference_targets(catalog, "tag", "Tag") == ["tag"]

    def test_non_graph_categories_are_dropped(self, catalog):
        assert find_possible_reference_targets(catalog, "slugId", "Slug") == []

    def test_unknown_names_are_dropped(self, catalog):
        assert find_possible_reference_targets(catalog, "author", "Writer") == []

    def test_plural_rule_is_off_by_default(self, catalog):
        assert find_possible_reference_targets(catalog, "tags") == []
        assert find_possible_reference_targets(catalog, "tags", strip_plural=True) == ["tag"]


class TestResolveField:

    def test_explicit_reference(self, catalog):
        field = SchemaField(name="category", kind="reference", targets=("category",))
        edges = list(resolve_field(catalog, "product", field))
        assert [(e.target_type, e.kind, e.display_label) for e in edges] == [
            ("category", RelationshipKind.DIRECT_REFERENCE, "category"),
        ]

    def test_explicit_reference_skips_invalid_targets(self, catalog):
        field = SchemaField(name="link", kind="reference", targets=("missing", "slug", "tag"))
        edges = list(resolve_field(catalog, "product", field))
        assert [e.target_type for e in edges] == ["tag"]

    def test_explicit_targets_disable_inference(self, catalog):
        field = SchemaField(name="category", kind="reference", targets=("missing",))
        assert list(resolve_field(catalog, "product", field)) == []

    def test_inferred_reference(self, catalog):
        field = SchemaField(name="categoryRef", kind="reference")
        [edge] = resolve_field(catalog, "product", field)
        assert edge.kind == RelationshipKind.INFERRED_REFERENCE
        assert edge.display_label == "categoryRef?"
        assert edge.target_type == "category"

    def test_object_composition(self, catalog):
        field = SchemaField(name="seo", kind="object")
        [edge] = resolve_field(catalog, "product", field)
        assert edge.kind == RelationshipKind.OBJECT_COMPOSITION
        assert edge.display_label == "seo"

    def test_object_composition_needs_object_category(self, catalog):
        field = SchemaField(name="category", kind="object")
        assert list(resolve_field(catalog, "product", field)) == []

    def test_array_of_references(self, catalog):
        field = SchemaField(
            name="tags",
            kind="array",
            item_kinds=(SchemaField(kind="reference", targets=("tag",)),),
        )
        [edge] = resolve_field(catalog, "product", field)
        assert edge.kind == RelationshipKind.ARRAY_REFERENCE
        assert edge.display_label == "tags[]"

    def test_array_inference_uses_parent_name_and_item_title(self, catalog):
        field = SchemaField(
            name="categoryIds",
            kind="array",
            item_kinds=(SchemaField(kind="reference", title="Tag"),),
        )
        [edge] = resolve_field(catalog, "product", field)
        assert edge.kind == RelationshipKind.INFERRED_ARRAY_REFERENCE
        assert edge.target_type == "tag"
        assert edge.display_label == "categoryIds[]?"

    def test_array_of_named_objects(self, catalog):
        field = SchemaField(
            name="blocks",
            kind="array",
            item_kinds=(SchemaField(name="seo", kind="object"), SchemaField(kind="string")),
        )
        [edge] = resolve_field(catalog, "product", field)
        assert edge.kind == RelationshipKind.ARRAY_COMPOSITION
        assert edge.display_label == "blocks[]"

    def test_union_items_yield_multiple_edges(self, catalog):
        field = SchemaField(
            name="related",
            kind="array",
            item_kinds=(SchemaField(kind="reference", targets=("product", "category")),),
        )
        edges = list(resolve_field(catalog, "product", field))
        assert [e.target_type for e in edges] == ["product", "category"]

    def test_unnamed_field_yields_nothing(self, catalog):
        field = SchemaField(kind="reference", targets=("category",))
        assert list(resolve_field(catalog, "product", field)) == []

    def test_primitive_yields_nothing(self, catalog):
        assert list(resolve_field(catalog, "product", SchemaField(name="tag", kind="string"))) == []


class TestResolveSchema:

    def test_only_graph_types_are_walked(self, make_schema):
        schema = make_schema(
            SchemaType(
                name="alias",
                category="string",
                fields=(SchemaField(name="post", kind="reference", targets=("post",)),),
            ),
            SchemaType(name="post", category="document"),
        )
        assert list(resolve_schema(schema)) == []

    def test_internal_fields_are_ignored(self, make_schema):
        schema = make_schema(
            SchemaType(
                name="post",
                category="document",
                fields=(SchemaField(name="_parent", kind="reference", targets=("post",)),),
            ),
        )
        assert list(resolve_schema(schema)) == []
