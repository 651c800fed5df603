"""Colour palette and size constants shared by the whole application."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Color:
    """An 8-bit RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"colour component {name}={value!r} is not in 0..255")

    def __iter__(self) -> Iterator[int]:
        yield from (self.r, self.g, self.b, self.a)

    def with_alpha(self, alpha: int) -> Color:
        """Return the same colour with a different alpha."""
        return Color(self.r, self.g, self.b, alpha)

    def lerp(self, other: Color, t: float) -> Color:
        """Blend towards ``other`` by ``t`` in [0, 1], truncating each channel."""
        t = min(max(t, 0.0), 1.0)

        def mix(start: int, end: int) -> int:
            return int(start + (end - start) * t)

        return Color(
            mix(self.r, other.r),
            mix(self.g, other.g),
            mix(self.b, other.b),
            mix(self.a, other.a),
        )


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
TRANSPARENT = Color(0, 0, 0, 0)

BACKGROUND = Color(34, 40, 49)
NODE_FILL = Color(238, 238, 238)
NODE_OUTLINE = Color(0, 173, 181)
NODE_SELECTED = Color(252, 92, 101)

EDGE_COLOR = Color(150, 150, 150, 255)
EDGE_HIGHLIGHT = Color(50, 255, 50, 255)
EDGE_CONSIDERING = Color(255, 215, 0, 255)
EDGE_DISABLED = Color(100, 100, 100, 128)

TEXT_PRIMARY = Color(238, 238, 238)
TEXT_SECONDARY = Color(0, 173, 181)
PANEL_BACKGROUND = Color(47, 54, 64)

NODE_NEW = Color(150, 150, 255)
NODE_PROCESSING = Color(255, 200, 100)
NODE_COMPLETED = Color(100, 255, 100)
NODE_HIGHLIGHT = Color(255, 255, 0)

NODE_RADIUS = 35.0
NODE_OUTLINE_THICKNESS = 3.0
EDGE_THICKNESS = 3.0
EDGE_GLOW_THICKNESS = 6.0
ANIMATION_DURATION = 0.3

# Node colours used while a spanning-tree algorithm runs.
MST_UNVISITED = Color(150, 150, 255)
MST_PROCESSING = Color(255, 200, 100)
MST_CURRENT = Color(255, 165, 0)
MST_IN_MST = Color(100, 255, 100)
MST_REJECTED = Color(255, 100, 100)
MST_CONSIDERING = Color(255, 255, 100)