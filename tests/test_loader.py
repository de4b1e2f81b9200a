import pytest

from schemagraph.core.errors import ParseFailure
from schemagraph.utils.loader import load_schema_value, parse_schema_text


def test_strict_json():
    assert parse_schema_text('[{"name": "post", "type": "document"}]') == [{"name": "post", "type": "document"}]


def test_lenient_array_literal():
    text = """
    [
      // exported by hand
      {name: 'post', type: 'document', fields: [{name: 'title', type: 'string'},],},
    ]
    """
    assert parse_schema_text(text) == [
        {"name": "post", "type": "document", "fields": [{"name": "title", "type": "string"}]},
    ]


def test_non_array_text_is_not_retried():
    with pytest.raises(ParseFailure) as exc_info:
        parse_schema_text("{name: 'post'}")
    assert exc_info.value.detail
    assert str(exc_info.value).startswith("Failed to parse schema file: ")


def test_broken_array_literal():
    with pytest.raises(ParseFailure):
        parse_schema_text("[{name: 'post',, }")


def test_code_is_never_evaluated():
    with pytest.raises(ParseFailure):
        parse_schema_text("[__import__('os').getcwd()]")


def test_load_schema_value_prefers_text():
    assert load_schema_value(source="[1, 2]") == [1, 2]
    assert load_schema_value(value=[{"name": "x"}]) == [{"name": "x"}]
