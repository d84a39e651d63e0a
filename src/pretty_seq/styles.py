from __future__ import annotations

# ============================================================================
# Font metrics — character width estimates for proportional fonts.
# ============================================================================


def estimate_text_width(text: str, font_size: float, font_weight: int = 400) -> float:
    """Average character width in px at the given font size and weight (proportional font)."""
    if font_weight >= 600:
        width_ratio = 0.58
    elif font_weight >= 500:
        width_ratio = 0.55
    else:
        width_ratio = 0.52
    return len(text) * font_size * width_ratio


def estimate_text_height(font_size: float) -> float:
    """Line box height in px for a single line of text (ascent + descent)."""
    return font_size * LINE_HEIGHT_RATIO


# Ratio of a line box to the nominal font size
LINE_HEIGHT_RATIO = 1.2

# Font weights per element type
FONT_WEIGHTS = {
    "participant_label": 500,
    "message_label": 400,
    "title": 600,
}

# ============================================================================
# Spacing & sizing constants
# ============================================================================

# Layout defaults for sequence diagrams (see types.LayoutOptions)
SEQ = {
    # Outer whitespace around the whole diagram
    "padding": 10,
    # Inset between the padding and the participant boxes
    "margin": 15,
    # Gap between neighbouring participant boxes
    "horizontal_gap": 25,
    # Vertical space per interaction row
    "vertical_gap": 50,
    # Padding inside participant boxes around the label
    "label_padding": 10,
    "participant_font_size": 18,
    "message_font_size": 16,
    "title_font_size": 30,
}

# Drawing-only geometry for the SVG stage
DRAW = {
    # Activation box width (narrow rectangle on lifeline)
    "activation_width": 10,
    # Self-reference loop size
    "self_loop_width": 30,
    "self_loop_height": 20,
    # Gap between the message label baseline and its arrow
    "label_offset": 6,
}

STROKE_WIDTHS = {
    "outer_box": 1,
    "inner_box": 0.75,
    "connector": 0.75,
}

TEXT_BASELINE_SHIFT = "0.35em"

ARROW_HEAD = {
    "width": 8,
    "height": 4.8,
}
