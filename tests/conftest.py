from __future__ import annotations

import pytest


class FixedMeasurer:
    """10px per character, 20px tall; keeps expected coordinates exact."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, float]] = []

    def measure(self, text: str, font_size: float) -> tuple[float, float]:
        self.calls.append((text, font_size))
        return 10.0 * len(text), 20.0


@pytest.fixture
def measurer() -> FixedMeasurer:
    return FixedMeasurer()
