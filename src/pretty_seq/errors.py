from __future__ import annotations

# ============================================================================
# Errors
#
# Per-line problems (malformed lines, unknown metadata) are not exceptions:
# they are collected on Diagram.issues. Everything here aborts the parse.
# ============================================================================


class DiagramError(Exception):
    """Base class for errors that abort building a diagram."""


class MissingParticipantError(DiagramError):
    """An interaction names a participant that the participant pass never resolved.

    This is an internal consistency failure between the two resolver passes,
    not a problem with the input text.
    """

    def __init__(self, line_number: int, participant: str, raw_text: str = "") -> None:
        self.line_number = line_number
        self.participant = participant
        self.raw_text = raw_text
        super().__init__(
            f"Line {line_number}: participant {participant!r} was not resolved"
            + (f" (in {raw_text.strip()!r})" if raw_text.strip() else "")
        )


class TextMeasurementError(DiagramError):
    """The text-measurement collaborator could not measure a label."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Could not measure {text!r}: {reason}")
