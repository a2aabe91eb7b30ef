from unittest.mock import Mock

import pytest
import requests

from diagram_link.errors import DiagramGenerationError, DiagramRequestError
from diagram_link.services import diagram_service
from diagram_link.services.diagram_service import create_diagram, make_diagram_id
from diagram_link.utils.mermaid_encode import decode_viewer_state


CHECKOUT = {
    "diagram_type": "architecture",
    "title": "Checkout",
    "components": [{"name": "API", "type": "api"}, {"name": "DB", "type": "database"}],
    "relationships": [{"from": "API", "to": "DB", "label": "writes"}],
}


@pytest.fixture
def tinyurl(monkeypatch):
    response = Mock()
    response.status_code = 200
    response.ok = True
    response.text = "https://tinyurl.com/chk42"
    monkeypatch.setattr(requests, "get", lambda *a, **k: response)
    return response


def test_create_diagram_builds_spoken_response(tinyurl):
    result = create_diagram(CHECKOUT, clock=lambda: 1700000123.5)
    assert result.success is True
    assert result.diagram_id == "diagram-123500"
    assert result.short_url == "https://tinyurl.com/chk42"
    assert result.components_count == 2
    assert result.relationships_count == 1
    assert result.message == (
        'I\'ve created a architecture diagram for "Checkout". '
        "The diagram ID is diagram-123500. You can access it at https://tinyurl.com/chk42"
    )
    assert result.spoken_instructions == "To view the diagram, go to tinyurl.com/chk42"
    assert decode_viewer_state(result.diagram_url)["code"] == result.mermaid_code
    assert 'subgraph "Checkout"' in result.mermaid_code


def test_create_diagram_falls_back_when_shortener_times_out(monkeypatch):
    def mock_get(*args, **kwargs):
        raise requests.Timeout("slow")

    monkeypatch.setattr(requests, "get", mock_get)
    result = create_diagram(CHECKOUT)
    assert result.success is True
    assert result.short_url == result.diagram_url
    assert result.diagram_url.startswith("https://mermaid.live/edit#base64:")
    assert result.spoken_instructions.startswith("To view the diagram, go to mermaid.live/edit#base64:")


def test_create_diagram_without_shortening_skips_network(monkeypatch):
    def mock_get(*args, **kwargs):
        raise AssertionError("shortener should not be called")

    monkeypatch.setattr(requests, "get", mock_get)
    result = create_diagram({"components": []}, shorten=False)
    assert result.short_url == result.diagram_url
    assert result.message.startswith('I\'ve created a flowchart diagram for "Untitled".')


def test_create_diagram_rejects_relationship_without_endpoints():
    with pytest.raises(DiagramRequestError) as excinfo:
        create_diagram({"relationships": [{"label": "orphan"}]}, shorten=False)
    assert excinfo.value.category == "Invalid diagram request"
    assert "relationships.0.from" in excinfo.value.details


def test_create_diagram_wraps_unexpected_failures(monkeypatch):
    def boom(*args, **kwargs):
        raise KeyError("missing")

    monkeypatch.setattr(diagram_service, "generate_mermaid", boom)
    with pytest.raises(DiagramGenerationError) as excinfo:
        create_diagram(CHECKOUT, shorten=False)
    assert excinfo.value.category == "Failed to generate diagram"
    assert "missing" in excinfo.value.details


def test_make_diagram_id_uses_last_six_millisecond_digits():
    assert make_diagram_id(lambda: 1.5) == "diagram-1500"
    assert make_diagram_id(lambda: 1712345678.25) == "diagram-678250"
