import base64
import json

from diagram_link.utils import config
from diagram_link.utils.mermaid_encode import (
    build_viewer_state,
    build_viewer_url,
    decode_viewer_state,
    encode_viewer_state,
)


CODE = 'graph TD\n    A["Ünïcode ✓ >>> ???"] --> B\n'


def test_viewer_state_shape():
    assert build_viewer_state("graph TD\n") == {
        "code": "graph TD\n",
        "mermaid": {"theme": "default"},
        "updateEditor": False,
        "autoSync": True,
        "updateDiagram": True,
    }


def test_encoded_state_is_url_safe_and_unpadded():
    encoded = encode_viewer_state(build_viewer_state(CODE * 5))
    assert "+" not in encoded
    assert "/" not in encoded
    assert "=" not in encoded


def test_encoding_matches_compact_json_base64():
    state = build_viewer_state("graph TD\n")
    expected = base64.urlsafe_b64encode(
        json.dumps(state, separators=(",", ":")).encode("utf-8")
    ).decode("ascii").rstrip("=")
    assert encode_viewer_state(state) == expected


def test_viewer_url_round_trip_reproduces_markup():
    url = build_viewer_url(CODE)
    assert url.startswith("https://mermaid.live/edit#base64:")
    assert decode_viewer_state(url)["code"] == CODE


def test_decode_accepts_bare_payload():
    state = build_viewer_state("sequenceDiagram\n")
    assert decode_viewer_state(encode_viewer_state(state)) == state


def test_viewer_url_uses_configured_base(monkeypatch):
    monkeypatch.setattr(config.settings, "viewer_base_url", "https://viewer.example/#base64:")
    assert build_viewer_url("graph TD\n").startswith("https://viewer.example/#base64:")
