from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .classifier import is_interaction
from .fonts import EstimatedTextMeasurer, TextMeasurer
from .types import LayoutOptions, Line, Participant

logger = logging.getLogger(__name__)

# ============================================================================
# Participant resolver
#
# Single forward pass over the interaction lines:
#   1. Give each new name the next appearance index ("from" before "to")
#   2. Measure its label and place it at the running x cursor
#   3. Track the first and last interaction index that mentions it
#   4. Equalise label heights so every box shares one row height
# ============================================================================


@dataclass(slots=True)
class _Seen:
    """Running state for one participant while the pass is in progress."""
    appearance_index: int
    active_from: int
    active_to: int
    x_position: float
    label_width: float
    label_height: float


def resolve_participants(
    lines: Sequence[Line],
    measurer: TextMeasurer | None = None,
    options: LayoutOptions | None = None,
) -> tuple[Participant, ...]:
    """Discover participants from interaction lines, in first-mention order."""
    if measurer is None:
        measurer = EstimatedTextMeasurer()
    if options is None:
        options = LayoutOptions()

    # Keyed by name for lookups; output order comes from appearance_index
    seen: dict[str, _Seen] = {}
    interaction_index = 0
    x = options.inset

    for line in lines:
        if not is_interaction(line):
            continue

        for name in (line.from_name, line.to_name):
            assert name is not None
            state = seen.get(name)
            if state is None:
                width, height = measurer.measure(name, options.participant_font_size)
                seen[name] = _Seen(
                    appearance_index=len(seen),
                    active_from=interaction_index,
                    active_to=interaction_index,
                    x_position=x,
                    label_width=width,
                    label_height=height,
                )
                x += width + options.participant_gap
            else:
                state.active_to = interaction_index

        interaction_index += 1

    if not seen:
        return ()

    row_label_height = max(s.label_height for s in seen.values())
    participants = tuple(
        Participant(
            name=name,
            appearance_index=s.appearance_index,
            active_from=s.active_from,
            active_to=s.active_to,
            x_position=s.x_position,
            label_width=s.label_width,
            label_height=row_label_height,
        )
        for name, s in sorted(seen.items(), key=lambda item: item[1].appearance_index)
    )

    logger.debug(
        "Resolved %d participants over %d interactions", len(participants), interaction_index
    )
    return participants
