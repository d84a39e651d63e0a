from __future__ import annotations

import logging
from typing import Protocol

from PIL import ImageFont

from .errors import TextMeasurementError
from .styles import FONT_WEIGHTS, estimate_text_height, estimate_text_width

logger = logging.getLogger(__name__)

# ============================================================================
# Text measurement collaborators
#
# The participant resolver asks a measurer for the footprint of each newly
# seen participant label. Measurers must be deterministic for a given
# configuration and safe to reuse across parses.
# ============================================================================


class TextMeasurer(Protocol):
    def measure(self, text: str, font_size: float) -> tuple[float, float]:
        """Return the (width, height) of ``text`` rendered at ``font_size``."""
        ...


class EstimatedTextMeasurer:
    """Character-width heuristic. No font files, no I/O."""

    def __init__(self, font_weight: int = FONT_WEIGHTS["participant_label"]) -> None:
        self.font_weight = font_weight

    def measure(self, text: str, font_size: float) -> tuple[float, float]:
        return (
            estimate_text_width(text, font_size, self.font_weight),
            estimate_text_height(font_size),
        )


class FontTextMeasurer:
    """Measures text with a real font through Pillow.

    Uses the TrueType/OpenType file at ``font_path`` when given, otherwise
    Pillow's bundled default font. Fonts are loaded lazily, once per size.
    """

    def __init__(self, font_path: str | None = None) -> None:
        self.font_path = font_path
        self._font_cache: dict[int, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

    def font(self, font_size: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        key_size = max(1, int(round(font_size)))
        cached = self._font_cache.get(key_size)
        if cached is not None:
            return cached

        try:
            if self.font_path:
                font = ImageFont.truetype(self.font_path, key_size)
            else:
                font = ImageFont.load_default(size=key_size)
        except OSError as err:
            raise TextMeasurementError(
                self.font_path or "<default font>", f"font could not be loaded ({err})"
            ) from err

        logger.debug("Loaded font %s at %dpx", self.font_path or "<default>", key_size)
        self._font_cache[key_size] = font
        return font

    def measure(self, text: str, font_size: float) -> tuple[float, float]:
        font = self.font(font_size)
        try:
            left, _top, right, _bottom = font.getbbox(text)
            ascent, descent = font.getmetrics()
        except (OSError, ValueError, UnicodeError) as err:
            raise TextMeasurementError(text, str(err)) from err
        return float(right - left), float(ascent + descent)
