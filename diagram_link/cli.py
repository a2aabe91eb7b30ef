"""CLI interface."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from diagram_link.errors import DiagramError
from diagram_link.schemas import ErrorResponse
from diagram_link.services.diagram_service import create_diagram
from diagram_link.utils.mermaid_encode import decode_viewer_state

app = typer.Typer(add_completion=False)


@app.command()
def generate(
    file: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="Path to a JSON diagram request.",
        show_default=False,
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    text: Optional[str] = typer.Option(None, "--text", "-t", help="Diagram request as a JSON string."),
    shorten: bool = typer.Option(True, "--shorten/--no-shorten", help="Ask the URL shortener for a short link."),
):
    """Generate Mermaid markup and a viewer link from a diagram request."""
    if not file and not text:
        raise typer.BadParameter("Provide --file or --text")
    raw = file.read_text(encoding="utf-8") if file else text
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Request is not valid JSON: {exc}")
    try:
        result = create_diagram(payload, shorten=shorten)
    except DiagramError as exc:
        error = ErrorResponse(error=exc.category, details=exc.details)
        typer.echo(json.dumps(error.model_dump(), indent=2))
        raise typer.Exit(code=1)
    typer.echo(json.dumps(result.model_dump(), indent=2))


@app.command()
def decode(url: str = typer.Argument(..., help="Viewer URL or its base64 fragment.")):
    """Print the Mermaid markup embedded in a viewer URL."""
    try:
        state = decode_viewer_state(url)
    except ValueError as exc:
        # binascii.Error, JSONDecodeError and Unicode errors are all ValueErrors
        raise typer.BadParameter(f"Not a viewer URL or fragment: {exc}")
    if not isinstance(state, dict) or not isinstance(state.get("code"), str):
        raise typer.BadParameter("Viewer state has no diagram code")
    typer.echo(state["code"], nl=False)


if __name__ == "__main__":
    app()
