from __future__ import annotations

import re
from typing import Iterable

from .types import Line, Metadata, MetadataKind

# ============================================================================
# Line classifier
#
# Turns each physical source line into a tagged Line record. Classification
# depends on nothing but the line's own text.
#
# Supported syntax:
#   # comment
#   :title Example Sequence Diagram
#   :author Mr. Sequence Diagram
#   :theme nord
#   :date 2021-06-01
#   Client -> Server: Request
#   Server ->> Service: Query
#   Service -->> Server
#   Server -> Server: Parses request
# ============================================================================

# Compiled regex patterns
# (before arrow) (first arrow run) (after arrow, up to a colon) (: message)
_INTERACTION_RE = re.compile(r"^(.*?)(-+>+)([^:]*)(?::(.*))?$")
_WHITESPACE_RE = re.compile(r"\s+")

_METADATA_KINDS: dict[str, MetadataKind] = {
    ":theme": "theme",
    ":title": "title",
    ":author": "author",
    ":date": "date",
}


def split_lines(text: str) -> list[str]:
    """Split source text on line boundaries, keeping blank lines."""
    return text.splitlines()


def classify(raw_line: str, line_number: int = 0) -> Line:
    """Classify a single source line. Never raises."""
    text = raw_line.strip()

    # --- Blank ---
    if not text:
        return Line(line_number=line_number, raw_text=raw_line, kind="empty")

    # --- Comment ---
    if text.startswith("#"):
        return Line(line_number=line_number, raw_text=raw_line, kind="comment")

    # --- Metadata: ":title Some title" ---
    # Always metadata, even when the directive is unknown
    if text.startswith(":"):
        return Line(
            line_number=line_number,
            raw_text=raw_line,
            kind="metadata",
            metadata=_parse_metadata(text),
        )

    # --- Interaction: "From -> To" or "From -> To: Message" ---
    match = _INTERACTION_RE.match(text)
    if match:
        from_name = match.group(1).strip()
        to_name = match.group(3).strip()
        # A fragment like "-> Server: Response" has no left-hand side
        if not from_name or not to_name:
            return Line(line_number=line_number, raw_text=raw_line, kind="invalid")

        message = (match.group(4) or "").strip()
        if message:
            return Line(
                line_number=line_number,
                raw_text=raw_line,
                kind="interaction_with_message",
                from_name=from_name,
                to_name=to_name,
                message=message,
            )
        return Line(
            line_number=line_number,
            raw_text=raw_line,
            kind="interaction",
            from_name=from_name,
            to_name=to_name,
        )

    return Line(line_number=line_number, raw_text=raw_line, kind="invalid")


def classify_lines(lines: Iterable[str]) -> list[Line]:
    """Classify every line, numbering them from 0 in input order."""
    return [classify(raw, i) for i, raw in enumerate(lines)]


def is_interaction(line: Line) -> bool:
    """Whether a line takes part in participant and interaction resolution.

    Both resolver passes filter with this predicate so they agree on which
    lines count and in what order.
    """
    return line.kind in ("interaction", "interaction_with_message")


def _parse_metadata(text: str) -> Metadata:
    """Parse a trimmed line starting with ':' into a Metadata record."""
    parts = _WHITESPACE_RE.split(text, maxsplit=1)
    directive = parts[0]
    value = parts[1].strip() if len(parts) > 1 else ""
    kind = _METADATA_KINDS.get(directive, "invalid")
    return Metadata(kind=kind, value=value, directive=directive)
