from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .styles import SEQ

# ============================================================================
# Sequence diagram types
#
# Models the classified source lines and the resolved, positioned diagram.
# Everything here is immutable once built: later passes only read what the
# earlier ones produced.
# ============================================================================

# ============================================================================
# Classified lines -- one record per physical source line
# ============================================================================

LineKind = Literal[
    "empty",
    "comment",
    "metadata",
    "interaction",
    "interaction_with_message",
    "invalid",
]

MetadataKind = Literal["theme", "title", "author", "date", "invalid"]

Direction = Literal["L2R", "R2L", "SelfRef"]


@dataclass(frozen=True, slots=True)
class Metadata:
    kind: MetadataKind
    # Text after the directive, trimmed (may be empty, e.g. ":date")
    value: str = ""
    # Directive token as written, e.g. ":title"
    directive: str = ""


@dataclass(frozen=True, slots=True)
class Line:
    line_number: int
    raw_text: str
    kind: LineKind
    # Set for "interaction" and "interaction_with_message"
    from_name: str | None = None
    to_name: str | None = None
    # Set for "interaction_with_message" only
    message: str | None = None
    # Set for "metadata" only
    metadata: Metadata | None = None

    @property
    def is_issue(self) -> bool:
        """True for lines that are reported but otherwise ignored."""
        if self.kind == "invalid":
            return True
        return (
            self.kind == "metadata"
            and self.metadata is not None
            and self.metadata.kind == "invalid"
        )


# ============================================================================
# Layout configuration
# ============================================================================


@dataclass(frozen=True, slots=True)
class LayoutOptions:
    """Geometry and font-size constants used by the resolvers and the sizer.

    Defaults come from ``styles.SEQ``.
    """
    # Outer whitespace around the whole diagram
    padding: float = SEQ["padding"]
    # Inset between the padding and the first participant box
    margin: float = SEQ["margin"]
    # Gap between neighbouring participant boxes
    horizontal_gap: float = SEQ["horizontal_gap"]
    # Vertical distance between consecutive interaction rows
    vertical_gap: float = SEQ["vertical_gap"]
    # Padding between a participant label and its box edge
    label_padding: float = SEQ["label_padding"]
    participant_font_size: float = SEQ["participant_font_size"]
    message_font_size: float = SEQ["message_font_size"]
    title_font_size: float = SEQ["title_font_size"]

    @property
    def inset(self) -> float:
        """Distance from the canvas edge to the first participant box."""
        return self.padding + self.margin

    @property
    def participant_gap(self) -> float:
        """Cursor advance after a participant, on top of its label width."""
        return 2 * self.label_padding + self.horizontal_gap


# ============================================================================
# Resolved diagram -- ready for a drawing backend
# ============================================================================


@dataclass(frozen=True, slots=True)
class Participant:
    name: str
    # First-mention order across the document, 0-based
    appearance_index: int
    # First and last interaction-sequence index that mentions this participant
    active_from: int
    active_to: int
    # Left edge of the participant box
    x_position: float
    label_width: float
    # Uniform across all participants (tallest label wins)
    label_height: float


@dataclass(frozen=True, slots=True)
class Interaction:
    sequence_index: int
    # Same instances as Diagram.participants, never copies
    from_participant: Participant
    to_participant: Participant
    direction: Direction
    message: str | None = None
    # Source line this interaction was read from
    line_number: int = 0


@dataclass(frozen=True, slots=True)
class Header:
    title: str | None = None
    author: str | None = None
    date: str | None = None
    theme: str | None = None


@dataclass(frozen=True, slots=True)
class Diagram:
    """Fully resolved sequence diagram.

    Participants are ordered by appearance, interactions by sequence index.
    """
    participants: tuple[Participant, ...] = ()
    interactions: tuple[Interaction, ...] = ()
    canvas_width: float = 0
    canvas_height: float = 0
    # Participant box height; interaction rows are laid out below it
    row_height: float = 0
    header: Header = field(default_factory=Header)
    # Invalid lines and unrecognised metadata, in document order
    issues: tuple[Line, ...] = ()
    options: LayoutOptions = field(default_factory=LayoutOptions)

    def participant(self, name: str) -> Participant | None:
        for p in self.participants:
            if p.name == name:
                return p
        return None

    def interaction_y(self, sequence_index: int) -> float:
        """Vertical position of an interaction row, measured from the canvas top."""
        return self.options.inset + self.row_height + sequence_index * self.options.vertical_gap


# ============================================================================
# Render options -- user-facing configuration for the SVG drawing stage
# ============================================================================


@dataclass(slots=True)
class RenderOptions:
    bg: str | None = None
    fg: str | None = None
    line: str | None = None
    accent: str | None = None
    muted: str | None = None
    surface: str | None = None
    border: str | None = None
    font: str | None = None
    # Named palette from theme.THEMES; overrides the diagram's :theme line
    theme: str | None = None
    transparent: bool | None = None
