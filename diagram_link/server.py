"""REST API server."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from diagram_link.errors import DiagramError, DiagramRequestError
from diagram_link.schemas import DiagramResponse, ErrorResponse
from diagram_link.services.diagram_service import create_diagram
from diagram_link.utils.config import settings


logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Diagram Link API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _error_response(DiagramRequestError("Request body is not valid JSON", details=str(exc.errors())))


@app.get("/health")
async def health():
    return {"status": "ok"}


def _error_response(exc: DiagramError) -> JSONResponse:
    status_code = 400 if isinstance(exc, DiagramRequestError) else 500
    body = ErrorResponse(error=exc.category, details=exc.details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.post(
    "/api/diagram",
    response_model=DiagramResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def diagram_endpoint(payload: Any = Body(default=None)):
    try:
        return create_diagram(payload if payload is not None else {})
    except DiagramRequestError as exc:
        logger.warning("Rejected diagram request: %s", exc.details)
        return _error_response(exc)
    except DiagramError as exc:
        return _error_response(exc)
