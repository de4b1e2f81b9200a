import logging
from typing import Callable, Iterable, List, Optional

from schemagraph.models.schema import ParsedSchema, RegistryWarning, SchemaType

logger = logging.getLogger(__name__)

DUPLICATE_TYPE_NAME = "duplicate-type-name"


def is_document_category(schema_type: SchemaType) -> bool:
    return schema_type.category == "document"


def build_parsed_schema(
    types: Iterable[SchemaType],
    document_predicate: Callable[[SchemaType], bool] = is_document_category,
    source: Optional[str] = None,
) -> ParsedSchema:
    """
    Single pass over the normalized types:
    - first occurrence of a name wins, later duplicates are dropped and reported
    - documentTypeNames = names accepted by document_predicate
    - allTypeNames = every retained name
    """
    kept: List[SchemaType] = []
    seen = set()
    warnings: List[RegistryWarning] = []
    for t in types:
        if t.name in seen:
            message = f"Duplicate type name '{t.name}' dropped (first definition kept)"
            logger.warning(message)
            warnings.append(RegistryWarning(code=DUPLICATE_TYPE_NAME, type_name=t.name, message=message))
            continue
        seen.add(t.name)
        kept.append(t)

    return ParsedSchema(
        types=tuple(kept),
        document_type_names=frozenset(t.name for t in kept if document_predicate(t)),
        warnings=tuple(warnings),
        source=source,
    )
