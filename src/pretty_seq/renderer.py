from __future__ import annotations

from .types import Diagram, Interaction, Participant
from .theme import DiagramColors, svg_open_tag, build_style_block
from .styles import (
    DRAW,
    FONT_WEIGHTS,
    STROKE_WIDTHS,
    ARROW_HEAD,
    TEXT_BASELINE_SHIFT,
    estimate_text_height,
    estimate_text_width,
)

# ============================================================================
# Sequence diagram SVG renderer
#
# Draws a resolved Diagram. All geometry comes from the diagram; the only
# thing derived here is each interaction's y, which sits in the middle of
# its row band (Diagram.interaction_y .. + vertical_gap).
# All colors use CSS custom properties (var(--_xxx)) from the theme system.
#
# Render order (back to front):
#   1. Header (title, author/date) in a band above the diagram
#   2. Lifelines (dashed vertical lines)
#   3. Activation boxes (one per participant, over its activation span)
#   4. Interactions (arrows with message labels)
#   5. Participant boxes (at top)
# ============================================================================


def render_svg(
    diagram: Diagram,
    colors: DiagramColors,
    font: str = "Inter",
    transparent: bool = False,
) -> str:
    """Render a resolved diagram as an SVG string.

    Args:
        colors: DiagramColors with bg/fg and optional enrichment variables.
        transparent: If true, renders with transparent background.
    """
    header_lines = _header_lines(diagram)
    header_height = _header_height(diagram, header_lines)

    parts: list[str] = []
    parts.append(
        svg_open_tag(
            _content_width(diagram),
            diagram.canvas_height + header_height,
            colors,
            transparent,
        )
    )
    parts.append(build_style_block(font))
    parts.append("<defs>")
    parts.append(_arrow_marker_defs())
    parts.append("</defs>")

    # 1. Header band
    if header_lines:
        parts.append(_render_header(diagram, header_lines))

    parts.append(f'<g transform="translate(0,{header_height})">')

    # 2. Lifelines
    for p in diagram.participants:
        parts.append(_render_lifeline(diagram, p))

    # 3. Activation boxes
    for p in diagram.participants:
        parts.append(_render_activation(diagram, p))

    # 4. Interactions
    for interaction in diagram.interactions:
        parts.append(_render_interaction(diagram, interaction))

    # 5. Participant boxes (rendered last so they're on top)
    for p in diagram.participants:
        parts.append(_render_participant(diagram, p))

    parts.append("</g>")
    parts.append("</svg>")
    return "\n".join(parts)


# ============================================================================
# Geometry helpers
# ============================================================================


def box_width(diagram: Diagram, p: Participant) -> float:
    return p.label_width + 2 * diagram.options.label_padding


def lifeline_x(diagram: Diagram, p: Participant) -> float:
    return p.x_position + box_width(diagram, p) / 2


def arrow_y(diagram: Diagram, sequence_index: int) -> float:
    return diagram.interaction_y(sequence_index) + diagram.options.vertical_gap / 2


def _content_width(diagram: Diagram) -> float:
    """Canvas width, widened when a self-reference label runs past the right edge."""
    width = diagram.canvas_width
    for interaction in diagram.interactions:
        if interaction.direction != "SelfRef":
            continue
        right = (
            lifeline_x(diagram, interaction.from_participant)
            + DRAW["self_loop_width"]
            + DRAW["label_offset"]
            + estimate_text_width(
                interaction.message or "",
                diagram.options.message_font_size,
                FONT_WEIGHTS["message_label"],
            )
        )
        width = max(width, right + diagram.options.inset)
    return width


def _header_lines(diagram: Diagram) -> list[tuple[str, str]]:
    """(role, text) pairs for the header band, top to bottom."""
    lines: list[tuple[str, str]] = []
    header = diagram.header
    if header.title:
        lines.append(("title", header.title))
    byline = " · ".join(v for v in (header.author, header.date) if v)
    if byline:
        lines.append(("byline", byline))
    return lines


def _header_height(diagram: Diagram, lines: list[tuple[str, str]]) -> float:
    if not lines:
        return 0
    opts = diagram.options
    height = opts.padding
    for role, _ in lines:
        size = opts.title_font_size if role == "title" else opts.message_font_size
        height += estimate_text_height(size)
    return height


# ============================================================================
# Arrow marker definitions
# ============================================================================


def _arrow_marker_defs() -> str:
    w = ARROW_HEAD["width"]
    h = ARROW_HEAD["height"]
    return (
        f'  <marker id="seq-arrow" markerWidth="{w}" markerHeight="{h}" '
        f'refX="{w}" refY="{h / 2}" orient="auto-start-reverse">\n'
        f'    <polygon points="0 0, {w} {h / 2}, 0 {h}" fill="var(--_arrow)" />\n'
        f"  </marker>"
    )


# ============================================================================
# Component renderers
# ============================================================================


def _render_header(diagram: Diagram, lines: list[tuple[str, str]]) -> str:
    opts = diagram.options
    parts: list[str] = []
    y = opts.padding
    for role, text in lines:
        if role == "title":
            size, weight, fill = opts.title_font_size, FONT_WEIGHTS["title"], "var(--_text)"
        else:
            size, weight, fill = (
                opts.message_font_size, FONT_WEIGHTS["message_label"], "var(--_text-muted)"
            )
        line_height = estimate_text_height(size)
        parts.append(
            f'<text x="{opts.inset}" y="{y + line_height / 2}" dy="{TEXT_BASELINE_SHIFT}" '
            f'font-size="{size}" font-weight="{weight}" '
            f'fill="{fill}">{_escape_xml(text)}</text>'
        )
        y += line_height
    return "\n".join(parts)


def _render_participant(diagram: Diagram, p: Participant) -> str:
    """Render a participant box with its label centered."""
    opts = diagram.options
    x = p.x_position
    y = opts.inset
    width = box_width(diagram, p)
    height = diagram.row_height
    return (
        f'<rect x="{x}" y="{y}" width="{width}" height="{height}" rx="4" ry="4" '
        f'fill="var(--_box-fill)" stroke="var(--_box-stroke)" '
        f'stroke-width="{STROKE_WIDTHS["outer_box"]}" />\n'
        f'<text x="{x + width / 2}" y="{y + height / 2}" text-anchor="middle" '
        f'dy="{TEXT_BASELINE_SHIFT}" '
        f'font-size="{opts.participant_font_size}" '
        f'font-weight="{FONT_WEIGHTS["participant_label"]}" '
        f'fill="var(--_text)">{_escape_xml(p.name)}</text>'
    )


def _render_lifeline(diagram: Diagram, p: Participant) -> str:
    """Render a lifeline (dashed vertical line from the box to the bottom inset)."""
    x = lifeline_x(diagram, p)
    top_y = diagram.options.inset + diagram.row_height
    bottom_y = diagram.canvas_height - diagram.options.inset
    return (
        f'<line x1="{x}" y1="{top_y}" x2="{x}" y2="{bottom_y}" '
        f'stroke="var(--_line)" stroke-width="0.75" stroke-dasharray="6 4" />'
    )


def _render_activation(diagram: Diagram, p: Participant) -> str:
    """Render the activation box covering the participant's activation span."""
    width = DRAW["activation_width"]
    x = lifeline_x(diagram, p) - width / 2
    top_y = arrow_y(diagram, p.active_from) - width / 2
    bottom_y = arrow_y(diagram, p.active_to) + width / 2
    return (
        f'<rect x="{x}" y="{top_y}" width="{width}" height="{bottom_y - top_y}" '
        f'fill="var(--_activation)" stroke="var(--_box-stroke)" '
        f'stroke-width="{STROKE_WIDTHS["inner_box"]}" />'
    )


def _render_interaction(diagram: Diagram, interaction: Interaction) -> str:
    """Render an interaction arrow with its optional message label."""
    opts = diagram.options
    parts: list[str] = []
    x1 = lifeline_x(diagram, interaction.from_participant)
    x2 = lifeline_x(diagram, interaction.to_participant)
    y = arrow_y(diagram, interaction.sequence_index)
    label = interaction.message

    if interaction.direction == "SelfRef":
        # Self-reference: loop going right and back to the same lifeline
        loop_w = DRAW["self_loop_width"]
        loop_h = DRAW["self_loop_height"]
        parts.append(
            f'<polyline points="{x1},{y} {x1 + loop_w},{y} '
            f'{x1 + loop_w},{y + loop_h} {x2},{y + loop_h}" '
            f'fill="none" stroke="var(--_line)" '
            f'stroke-width="{STROKE_WIDTHS["connector"]}" '
            f'marker-end="url(#seq-arrow)" />'
        )
        if label:
            parts.append(
                f'<text x="{x1 + loop_w + DRAW["label_offset"]}" y="{y + loop_h / 2}" '
                f'dy="{TEXT_BASELINE_SHIFT}" '
                f'font-size="{opts.message_font_size}" '
                f'font-weight="{FONT_WEIGHTS["message_label"]}" '
                f'fill="var(--_text-muted)">{_escape_xml(label)}</text>'
            )
    else:
        parts.append(
            f'<line x1="{x1}" y1="{y}" x2="{x2}" y2="{y}" '
            f'stroke="var(--_line)" '
            f'stroke-width="{STROKE_WIDTHS["connector"]}" '
            f'marker-end="url(#seq-arrow)" />'
        )
        # Label above the arrow, centered
        if label:
            parts.append(
                f'<text x="{(x1 + x2) / 2}" y="{y - DRAW["label_offset"]}" '
                f'text-anchor="middle" '
                f'font-size="{opts.message_font_size}" '
                f'font-weight="{FONT_WEIGHTS["message_label"]}" '
                f'fill="var(--_text-muted)">{_escape_xml(label)}</text>'
            )

    return "\n".join(parts)


# ============================================================================
# Utilities
# ============================================================================


def _escape_xml(text: str) -> str:
    """Escape special XML characters in text content."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )
