import json

from typer.testing import CliRunner

from diagram_link.cli import app
from diagram_link.utils.mermaid_encode import build_viewer_url


runner = CliRunner()


def test_generate_from_file(tmp_path):
    request_path = tmp_path / "request.json"
    request_path.write_text(
        json.dumps({"diagram_type": "dataflow", "components": ["A", "B"], "relationships": [{"from": "A", "to": "B"}]}),
        encoding="utf-8",
    )
    result = runner.invoke(app, ["generate", "--file", str(request_path), "--no-shorten"])
    assert result.exit_code == 0
    body = json.loads(result.output)
    assert body["mermaid_code"] == 'flowchart LR\n    A["A"]\n    B["B"]\n    A --> B\n'
    assert body["short_url"] == body["diagram_url"]


def test_generate_reports_invalid_request():
    result = runner.invoke(app, ["generate", "--text", '{"relationships": [{}]}', "--no-shorten"])
    assert result.exit_code == 1
    assert json.loads(result.output)["error"] == "Invalid diagram request"


def test_generate_requires_input():
    result = runner.invoke(app, ["generate"])
    assert result.exit_code != 0


def test_decode_prints_markup():
    url = build_viewer_url("graph TD\n    Start --> End\n")
    result = runner.invoke(app, ["decode", url])
    assert result.exit_code == 0
    assert result.output == "graph TD\n    Start --> End\n"


def test_generate_rejects_missing_file(tmp_path):
    result = runner.invoke(app, ["generate", "--file", str(tmp_path / "absent.json"), "--no-shorten"])
    assert result.exit_code == 2
    assert not isinstance(result.exception, FileNotFoundError)


def test_decode_rejects_malformed_fragment():
    result = runner.invoke(app, ["decode", "https://mermaid.live/edit#base64:!!not-base64!!"])
    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)


def test_decode_rejects_state_without_code():
    result = runner.invoke(app, ["decode", "base64:e30"])
    assert result.exit_code == 2
