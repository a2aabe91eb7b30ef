"""Mermaid Live Editor state encoding for viewer URLs.

The state is JSON, base64 encoded with the URL-safe alphabet (`-` and `_`)
and no `=` padding. The editor accepts this form after its `base64:` prefix.
"""
from __future__ import annotations

import base64
import json
from typing import Any, Dict

from diagram_link.utils.config import settings


_STATE_PREFIX = "base64:"


def build_viewer_state(code: str, theme: str | None = None) -> Dict[str, Any]:
    return {
        "code": code,
        "mermaid": {"theme": theme or settings.mermaid_theme},
        "updateEditor": False,
        "autoSync": True,
        "updateDiagram": True,
    }


def encode_viewer_state(state: Dict[str, Any]) -> str:
    """Serialize the editor state to the URL-safe, unpadded base64 form."""
    raw = json.dumps(state, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_viewer_state(encoded: str) -> Dict[str, Any]:
    """Inverse of `encode_viewer_state`.

    Accepts a bare payload, a `base64:`-prefixed fragment or a full viewer URL.
    """
    payload = encoded.split("#", 1)[-1]
    if payload.startswith(_STATE_PREFIX):
        payload = payload[len(_STATE_PREFIX):]
    padded = payload + "=" * (-len(payload) % 4)
    return json.loads(base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8"))


def build_viewer_url(code: str) -> str:
    """Full viewer address embedding `code`."""
    return f"{settings.viewer_base_url}{encode_viewer_state(build_viewer_state(code))}"
