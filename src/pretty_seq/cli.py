"""Command-line interface."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from . import render_sequence
from .diagram import parse_diagram
from .errors import DiagramError
from .fonts import EstimatedTextMeasurer, FontTextMeasurer, TextMeasurer
from .types import RenderOptions

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Render plain-text sequence diagrams to SVG.")

EXAMPLE = """\
:theme default
:title Example Sequence Diagram
:author Mr. Sequence Diagram
:date

# diagram
Client -> Server: Request
Server -> Server: Parses request
Server ->> Service: Query
Service -->> Server: Data
Server --> Client: Response
Left -> Right
"""


def _read_source(input_path: Optional[str], example: bool) -> str:
    if example:
        if input_path not in (None, "-"):
            raise typer.BadParameter("--example cannot be combined with an input file")
        return EXAMPLE
    if input_path in (None, "-"):
        return sys.stdin.read()
    path = Path(input_path)
    if not path.is_file():
        raise typer.BadParameter(f"No such file: {input_path}")
    return path.read_text(encoding="utf-8")


def _measurer(font_path: Optional[str]) -> TextMeasurer:
    return FontTextMeasurer(font_path) if font_path else EstimatedTextMeasurer()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def render(
    input_path: Optional[str] = typer.Argument(None, help="Diagram file, or '-' for stdin."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="SVG file to write (default: stdout)."),
    example: bool = typer.Option(False, "--example", "-e", help="Render the built-in example."),
    theme: Optional[str] = typer.Option(None, "--theme", help="Colour palette name."),
    font_path: Optional[str] = typer.Option(None, "--font", help="TrueType font used to measure labels."),
    transparent: bool = typer.Option(False, "--transparent", help="No background fill."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Render a diagram to SVG."""
    _configure_logging(verbose)
    text = _read_source(input_path, example)
    try:
        svg = render_sequence(
            text,
            RenderOptions(theme=theme, transparent=transparent),
            measurer=_measurer(font_path),
        )
    except DiagramError as err:
        typer.echo(f"error: {err}", err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(svg)
    else:
        output.write_text(svg, encoding="utf-8")
        logger.info("Wrote %s", output)


@app.command()
def check(
    input_path: Optional[str] = typer.Argument(None, help="Diagram file, or '-' for stdin."),
    example: bool = typer.Option(False, "--example", "-e", help="Check the built-in example."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Parse a diagram and report lines that were ignored."""
    _configure_logging(verbose)
    text = _read_source(input_path, example)
    try:
        diagram = parse_diagram(text)
    except DiagramError as err:
        typer.echo(f"error: {err}", err=True)
        raise typer.Exit(code=1)

    for line in diagram.issues:
        typer.echo(f"line {line.line_number}: {line.raw_text.strip()}")
    typer.echo(
        f"{len(diagram.participants)} participants, "
        f"{len(diagram.interactions)} interactions, "
        f"{len(diagram.issues)} issues"
    )
    if diagram.issues:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
