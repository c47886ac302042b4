# roadmap_render/api.py
# HTTP surface (glue around the validator + in-memory store).
#
# Endpoints:
# - POST /roadmap/validate - validate raw roadmap JSON
# - POST /roadmap          - validate + save {name?, data}
# - GET  /roadmaps         - list saved roadmaps
# - GET  /roadmap/{id}     - fetch one saved roadmap
#
# Run:
#   python -m roadmap_render --serve --port 5000

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from .io_json import document_to_dict
from .logger import get_logger
from .storage import MemStorage
from .validate import RoadmapValidationError, parse_document

MAX_LOG_LINE = 80


# =============================================================================
# Request/Response Models
# =============================================================================

class SaveRoadmapRequest(BaseModel):
    """Request to save a roadmap; data is validated against the roadmap schema."""
    name: Optional[str] = None
    data: Any = None


class ValidationIssueModel(BaseModel):
    path: str
    message: str


class ValidateResponse(BaseModel):
    valid: bool
    data: Optional[Dict[str, Any]] = None
    errors: Optional[List[ValidationIssueModel]] = None


router = APIRouter(tags=["roadmap"])


def _store(request: Request) -> MemStorage:
    return request.app.state.store


def _issues_payload(e: RoadmapValidationError) -> List[Dict[str, str]]:
    return [i.to_dict() for i in e.issues]


# =============================================================================
# REST Endpoints
# =============================================================================

@router.post("/roadmap/validate", response_model=ValidateResponse)
def validate_roadmap(payload: Any = Body(None)):
    """Validate raw roadmap JSON; 400 with {path, message} issues if invalid."""
    try:
        doc = parse_document(payload)
    except RoadmapValidationError as e:
        return JSONResponse(status_code=400, content={"valid": False, "errors": _issues_payload(e)})
    return ValidateResponse(valid=True, data=document_to_dict(doc))


@router.post("/roadmap")
def save_roadmap(body: SaveRoadmapRequest, request: Request):
    try:
        doc = parse_document(body.data)
    except RoadmapValidationError as e:
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid roadmap data", "errors": _issues_payload(e)},
        )

    name = body.name or f"Roadmap {int(time.time() * 1000)}"
    try:
        record = _store(request).create(name, doc)
    except Exception as e:
        get_logger("api").error(f"Failed to save roadmap: {e}")
        return JSONResponse(status_code=500, content={"message": "Failed to save roadmap"})
    return record.to_dict()


@router.get("/roadmaps")
def list_roadmaps(request: Request):
    try:
        records = _store(request).list()
    except Exception as e:
        get_logger("api").error(f"Failed to fetch roadmaps: {e}")
        return JSONResponse(status_code=500, content={"message": "Failed to fetch roadmaps"})
    return [r.to_dict() for r in records]


@router.get("/roadmap/{roadmap_id}")
def get_roadmap(roadmap_id: int, request: Request):
    try:
        record = _store(request).get(roadmap_id)
    except Exception as e:
        get_logger("api").error(f"Failed to fetch roadmap {roadmap_id}: {e}")
        return JSONResponse(status_code=500, content={"message": "Failed to fetch roadmap"})
    if record is None:
        return JSONResponse(status_code=404, content={"message": "Roadmap not found"})
    return record.to_dict()


# =============================================================================
# App factory
# =============================================================================

async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        return JSONResponse(status_code=400, content={"message": "Invalid JSON body"})
    return JSONResponse(
        status_code=400,
        content={
            "message": "Invalid request",
            "errors": [
                {"path": ".".join(str(p) for p in err.get("loc", ())), "message": str(err.get("msg", ""))}
                for err in errors
            ],
        },
    )


def create_app(store: Optional[MemStorage] = None) -> FastAPI:
    app = FastAPI(
        title="Roadmap Render API",
        description="Validate and store roadmap documents for the staircase renderer",
    )
    app.state.store = store if store is not None else MemStorage()
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = int((time.perf_counter() - start) * 1000)
        line = f"{request.method} {request.url.path} {response.status_code} in {duration_ms}ms"
        if response.headers.get("content-type", "").startswith("application/json"):
            # the body iterator can only be consumed once; rebuild the response around it
            body = b"".join([chunk async for chunk in response.body_iterator])
            line += f" :: {body.decode('utf-8', errors='replace')}"
            response = Response(
                content=body,
                status_code=response.status_code,
                headers=dict(response.headers),
                media_type=response.media_type,
            )
        if len(line) > MAX_LOG_LINE:
            line = line[: MAX_LOG_LINE - 1] + "…"
        get_logger("api").info(line)
        return response

    app.include_router(router)
    return app


def serve(host: str = "127.0.0.1", port: int = 5000) -> None:
    import uvicorn

    get_logger("api").info(f"Server listening on {host}:{port}")
    uvicorn.run(create_app(), host=host, port=port)
