"""Errors raised while turning a request into a diagram."""
from __future__ import annotations


class DiagramError(Exception):
    """Base error carrying the category reported back to callers."""

    category = "Failed to generate diagram"

    def __init__(self, message: str, *, details: str | None = None):
        super().__init__(message)
        self.details = details or message


class DiagramRequestError(DiagramError, ValueError):
    """Raised when the payload cannot be read as a diagram request."""

    category = "Invalid diagram request"


class DiagramGenerationError(DiagramError, RuntimeError):
    """Raised when markup generation fails unexpectedly."""
