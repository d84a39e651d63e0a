"""pretty-seq — Turn a plain-text sequence diagram into a positioned model and SVG."""

from __future__ import annotations

from .types import (
    Diagram,
    Header,
    Interaction,
    LayoutOptions,
    Line,
    Metadata,
    Participant,
    RenderOptions,
)
from .errors import DiagramError, MissingParticipantError, TextMeasurementError
from .fonts import EstimatedTextMeasurer, FontTextMeasurer, TextMeasurer
from .theme import DiagramColors, THEMES, DEFAULTS, resolve_colors
from .classifier import classify, classify_lines, is_interaction
from .participants import resolve_participants
from .interactions import resolve_interactions
from .sizer import size
from .diagram import parse_diagram, build_diagram
from .renderer import render_svg

__all__ = [
    "render_sequence",
    "parse_diagram",
    "build_diagram",
    "classify",
    "classify_lines",
    "is_interaction",
    "resolve_participants",
    "resolve_interactions",
    "size",
    "render_svg",
    "resolve_colors",
    "Diagram",
    "Header",
    "Interaction",
    "LayoutOptions",
    "Line",
    "Metadata",
    "Participant",
    "RenderOptions",
    "DiagramColors",
    "THEMES",
    "DEFAULTS",
    "TextMeasurer",
    "EstimatedTextMeasurer",
    "FontTextMeasurer",
    "DiagramError",
    "MissingParticipantError",
    "TextMeasurementError",
]


def render_sequence(
    text: str,
    options: RenderOptions | None = None,
    measurer: TextMeasurer | None = None,
    layout: LayoutOptions | None = None,
) -> str:
    """Render sequence diagram text to an SVG string."""
    if options is None:
        options = RenderOptions()

    diagram = parse_diagram(text, measurer, layout)
    colors = resolve_colors(options, diagram.header)
    return render_svg(
        diagram,
        colors,
        font=options.font or "Inter",
        transparent=options.transparent or False,
    )
