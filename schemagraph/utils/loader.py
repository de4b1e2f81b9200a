# Tools to turn raw schema text into a generic value tree
import json
from typing import Any, Optional

import json5

from schemagraph.core.errors import ParseFailure


def _is_array_literal(text: str) -> bool:
    stripped = text.strip()
    return stripped.startswith("[") and stripped.endswith("]")


def parse_schema_text(text: str) -> Any:
    """
    Strict JSON first. Array-shaped text that is not valid JSON gets a second,
    literal-only pass (unquoted keys, single quotes, trailing commas, comments).
    The reported message is always the strict parser's.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as json_error:
        if _is_array_literal(text):
            try:
                return json5.loads(text)
            except ValueError:
                pass
        raise ParseFailure(str(json_error)) from json_error


def load_schema_value(source: Optional[str] = None, value: Any = None) -> Any:
    """
    Accepts raw text (source) or an already-parsed value tree (value).
    """
    if source is not None:
        return parse_schema_text(source)
    return value
