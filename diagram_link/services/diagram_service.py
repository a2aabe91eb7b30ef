"""Turn a diagram request payload into Mermaid markup and a shareable link."""
from __future__ import annotations

import logging
import re
import time
from typing import Any, Callable, Dict

from pydantic import ValidationError

from diagram_link.errors import DiagramGenerationError, DiagramRequestError
from diagram_link.generators.mermaid import generate_mermaid
from diagram_link.ir.identifiers import IdentifierMap
from diagram_link.models.diagram_request import DiagramRequest
from diagram_link.schemas import DiagramResponse
from diagram_link.tools.url_shortener import shorten_url
from diagram_link.utils.mermaid_encode import build_viewer_url


logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^https?://")


def parse_request(payload: Dict[str, Any] | DiagramRequest) -> DiagramRequest:
    if isinstance(payload, DiagramRequest):
        return payload
    try:
        return DiagramRequest.model_validate(payload)
    except ValidationError as exc:
        errors = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise DiagramRequestError("Diagram request is not valid", details=errors) from exc


def make_diagram_id(clock: Callable[[], float] = time.time) -> str:
    """Short id a voice assistant can read out: the last six digits of epoch millis."""
    millis = str(int(clock() * 1000))
    return f"diagram-{millis[-6:]}"


def spoken_message(request: DiagramRequest, diagram_id: str, url: str) -> str:
    kind = request.diagram_type or "flowchart"
    title = request.title or "Untitled"
    return (
        f'I\'ve created a {kind} diagram for "{title}". '
        f"The diagram ID is {diagram_id}. You can access it at {url}"
    )


def spoken_instructions(url: str) -> str:
    return f"To view the diagram, go to {_SCHEME_RE.sub('', url)}"


def create_diagram(
    payload: Dict[str, Any] | DiagramRequest,
    *,
    shorten: bool = True,
    clock: Callable[[], float] = time.time,
) -> DiagramResponse:
    """Generate markup for `payload` and package it for a voice response.

    Raises DiagramRequestError for payloads that do not describe a diagram and
    DiagramGenerationError for anything that goes wrong while rendering.
    """
    request = parse_request(payload)
    try:
        id_map = IdentifierMap.build(request.components)
        mermaid_code = generate_mermaid(request, id_map)
        diagram_url = build_viewer_url(mermaid_code)
    except Exception as exc:
        logger.exception(
            "Diagram generation failed",
            extra={"diagram_type": request.diagram_type},
        )
        raise DiagramGenerationError("Diagram generation failed", details=str(exc)) from exc

    short_url = shorten_url(diagram_url) if shorten else diagram_url
    diagram_id = make_diagram_id(clock)
    logger.info(
        "Generated %s diagram %s (%d components, %d relationships)",
        request.diagram_type or "flowchart",
        diagram_id,
        len(request.components),
        len(request.relationships),
    )
    return DiagramResponse(
        message=spoken_message(request, diagram_id, short_url),
        diagram_url=diagram_url,
        short_url=short_url,
        diagram_id=diagram_id,
        mermaid_code=mermaid_code,
        components_count=len(request.components),
        relationships_count=len(request.relationships),
        spoken_instructions=spoken_instructions(short_url),
    )
