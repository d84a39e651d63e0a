from __future__ import annotations

import logging
from typing import Mapping, Sequence

from .classifier import is_interaction
from .errors import MissingParticipantError
from .types import Direction, Interaction, Line, Participant

logger = logging.getLogger(__name__)

# ============================================================================
# Interaction resolver
#
# Second pass over the same interaction lines the participant resolver saw.
# Binds both endpoints to resolved participants, numbers the interactions
# and classifies their direction.
# ============================================================================


def resolve_interactions(
    lines: Sequence[Line],
    participants: Sequence[Participant],
) -> tuple[Interaction, ...]:
    """Bind interaction lines to resolved participants, in document order.

    Raises MissingParticipantError if a line names a participant that is not
    in ``participants``.
    """
    by_name = {p.name: p for p in participants}
    interactions: list[Interaction] = []

    for line in lines:
        if not is_interaction(line):
            continue

        from_p = _lookup(by_name, line, line.from_name)
        to_p = _lookup(by_name, line, line.to_name)

        interactions.append(
            Interaction(
                sequence_index=len(interactions),
                from_participant=from_p,
                to_participant=to_p,
                direction=interaction_direction(from_p, to_p),
                message=line.message if line.kind == "interaction_with_message" else None,
                line_number=line.line_number,
            )
        )

    logger.debug("Resolved %d interactions", len(interactions))
    return tuple(interactions)


def interaction_direction(from_p: Participant, to_p: Participant) -> Direction:
    if from_p.appearance_index < to_p.appearance_index:
        return "L2R"
    if from_p.appearance_index > to_p.appearance_index:
        return "R2L"
    return "SelfRef"


def _lookup(by_name: Mapping[str, Participant], line: Line, name: str | None) -> Participant:
    participant = by_name.get(name) if name is not None else None
    if participant is None:
        raise MissingParticipantError(line.line_number, name or "", line.raw_text)
    return participant
