"""Pydantic schemas for API."""
from __future__ import annotations

from pydantic import BaseModel


class DiagramResponse(BaseModel):
    success: bool = True
    message: str
    diagram_url: str
    short_url: str
    diagram_id: str
    mermaid_code: str
    components_count: int
    relationships_count: int
    spoken_instructions: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: str
