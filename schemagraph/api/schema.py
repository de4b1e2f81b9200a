from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from schemagraph.core.errors import DialectNotImplemented, NormalizeError
from schemagraph.models.graph import ConversionRequest
from schemagraph.services.conversion_service import normalize_input

router = APIRouter()


@router.post("/normalize")
def normalize_schema(payload: dict):
    # payload: same shape as /graph/, returns the canonical model only
    try:
        req = ConversionRequest.model_validate(payload)
    except ValidationError as ve:
        raise HTTPException(status_code=422, detail=ve.errors(include_url=False, include_context=False))
    try:
        schema = normalize_input(source=req.source, value=req.schema_value, dialect=req.dialect)
    except DialectNotImplemented as e:
        raise HTTPException(status_code=501, detail=str(e))
    except NormalizeError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {
        "schema": schema.model_dump(mode="json"),
        "warnings": [w.model_dump() for w in schema.warnings],
    }
