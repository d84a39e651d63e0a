from __future__ import annotations

import logging
from typing import Sequence

from .classifier import classify_lines, split_lines
from .fonts import EstimatedTextMeasurer, TextMeasurer
from .interactions import resolve_interactions
from .participants import resolve_participants
from .sizer import row_height, size
from .types import Diagram, Header, LayoutOptions, Line

logger = logging.getLogger(__name__)

# ============================================================================
# Diagram pipeline
#
#   classify -> resolve participants -> resolve interactions -> size
#
# Each stage consumes the complete output of the previous one. Every call
# builds a new Diagram; nothing is shared between calls except the measurer.
# ============================================================================


def parse_diagram(
    source: str | Sequence[str],
    measurer: TextMeasurer | None = None,
    options: LayoutOptions | None = None,
) -> Diagram:
    """Parse sequence diagram text (or pre-split lines) into a resolved Diagram."""
    raw_lines = split_lines(source) if isinstance(source, str) else list(source)
    return build_diagram(classify_lines(raw_lines), measurer, options)


def build_diagram(
    lines: Sequence[Line],
    measurer: TextMeasurer | None = None,
    options: LayoutOptions | None = None,
) -> Diagram:
    """Run the resolvers and the sizer over already classified lines."""
    if measurer is None:
        measurer = EstimatedTextMeasurer()
    if options is None:
        options = LayoutOptions()

    issues = tuple(line for line in lines if line.is_issue)
    for line in issues:
        logger.warning("Ignoring line %d: %r", line.line_number, line.raw_text.strip())

    participants = resolve_participants(lines, measurer, options)
    interactions = resolve_interactions(lines, participants)
    width, height = size(participants, interactions, options)
    logger.debug("Canvas size %sx%s", width, height)

    return Diagram(
        participants=participants,
        interactions=interactions,
        canvas_width=width,
        canvas_height=height,
        row_height=row_height(participants, options),
        header=collect_header(lines),
        issues=issues,
        options=options,
    )


def collect_header(lines: Sequence[Line]) -> Header:
    """Gather recognised metadata; a later directive of the same kind wins."""
    values: dict[str, str] = {}
    for line in lines:
        if line.kind != "metadata" or line.metadata is None:
            continue
        if line.metadata.kind == "invalid":
            continue
        values[line.metadata.kind] = line.metadata.value

    return Header(
        title=values.get("title") or None,
        author=values.get("author") or None,
        date=values.get("date") or None,
        theme=values.get("theme") or None,
    )
