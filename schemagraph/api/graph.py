from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from schemagraph.core.env import get_settings
from schemagraph.core.errors import DialectNotImplemented, NormalizeError
from schemagraph.core.normalizers import IMPLEMENTED_DIALECTS, Dialect
from schemagraph.models.graph import ConversionRequest
from schemagraph.services.conversion_service import convert

router = APIRouter()


def _parse_request(payload: dict) -> ConversionRequest:
    try:
        return ConversionRequest.model_validate(payload)
    except ValidationError as ve:
        raise HTTPException(status_code=422, detail=ve.errors(include_url=False, include_context=False))


def _run(req: ConversionRequest, output: str) -> dict:
    try:
        return convert(source=req.source, value=req.schema_value, dialect=req.dialect, output=output)
    except DialectNotImplemented as e:
        raise HTTPException(status_code=501, detail=str(e))
    except NormalizeError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/dialects")
def list_dialects():
    return {
        "default": get_settings().default_dialect,
        "supported": [d.value for d in IMPLEMENTED_DIALECTS],
        "unimplemented": [d.value for d in Dialect if d not in IMPLEMENTED_DIALECTS],
    }


@router.post("/")
def build_schema_graph(payload: dict):
    # payload: { "dialect": "sanity", "schema": [...] } or { "source": "<text>" }
    req = _parse_request(payload)
    return _run(req, output="graph")


@router.post("/dot")
def build_schema_dot(payload: dict):
    req = _parse_request(payload)
    result = _run(req, output="dot")
    return {"dot": result["dot"], "warnings": result["warnings"], "stats": result["stats"]}
