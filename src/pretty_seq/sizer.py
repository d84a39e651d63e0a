from __future__ import annotations

from typing import Sequence

from .types import Interaction, LayoutOptions, Participant

# ============================================================================
# Diagram sizer
#
# Canvas size is pure arithmetic over the resolved model:
#
#   width  = 2*padding + 2*margin + sum(label widths)
#            + (n - 1)*horizontal_gap + n*2*label_padding
#   height = 2*padding + 2*margin + row_height
#            + interaction_count*vertical_gap
# ============================================================================


def row_height(participants: Sequence[Participant], options: LayoutOptions) -> float:
    """Participant box height: tallest label plus padding above and below."""
    if not participants:
        return 0
    return max(p.label_height for p in participants) + 2 * options.label_padding


def size(
    participants: Sequence[Participant],
    interactions: Sequence[Interaction],
    options: LayoutOptions | None = None,
) -> tuple[float, float]:
    """Return the (width, height) of the canvas."""
    if options is None:
        options = LayoutOptions()

    count = len(participants)
    width = (
        2 * options.padding
        + 2 * options.margin
        + sum(p.label_width for p in participants)
        + max(count - 1, 0) * options.horizontal_gap
        + count * 2 * options.label_padding
    )
    height = (
        2 * options.padding
        + 2 * options.margin
        + row_height(participants, options)
        + len(interactions) * options.vertical_gap
    )
    return width, height
