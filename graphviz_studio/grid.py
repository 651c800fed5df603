"""A background grid of minor and major lines that adapts to zoom."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

import pygame

from graphviz_studio import theme
from graphviz_studio.theme import Color
from graphviz_studio.viewport import ViewportManager

Point = tuple[float, float]


@dataclass(frozen=True)
class GridLine:
    """One grid line as a thin world-space rectangle."""

    x: float
    y: float
    width: float
    height: float
    color: Color
    vertical: bool


def _steps(start: float, end: float, step: float) -> Iterator[float]:
    value = start
    while value <= end:
        yield value
        value += step


def _alpha(value: float) -> int:
    return int(min(max(value, 0.0), 255.0))


class BackgroundGrid:
    """A drifting grid whose spacing stays readable at any zoom level."""

    BASE_GRID_SIZE = 50.0
    MAJOR_EVERY = 5
    DRIFT_SPEED = 20.0
    DRIFT_WRAP = 50.0

    def __init__(self, window_size: tuple[float, float]) -> None:
        self.window_size: Point = (float(window_size[0]), float(window_size[1]))
        self.grid_size = self.BASE_GRID_SIZE
        self.opacity = 0.1
        self.offset = 0.0
        self.animated = True

    def update(self, delta_time: float) -> None:
        """Drift the grid while animation is on."""
        if not self.animated:
            return
        self.offset += delta_time * self.DRIFT_SPEED
        if self.offset > self.DRIFT_WRAP:
            self.offset = 0.0

    def toggle_animation(self) -> None:
        """Switch drifting on or off; switching off snaps back to the origin."""
        self.animated = not self.animated
        if not self.animated:
            self.offset = 0.0

    def grid_lines(self, view_center: Point, view_size: Point) -> list[GridLine]:
        """The minor then major lines covering the given view."""
        cx, cy = view_center
        vw, vh = view_size
        left = cx - vw / 2.0
        top = cy - vh / 2.0

        zoom = vw / self.window_size[0]
        size = self.BASE_GRID_SIZE * max(1.0, zoom)
        while size < 30.0:
            size *= 2
        while size > 100.0:
            size /= 2
        self.grid_size = size

        end_x = left + vw + size
        end_y = top + vh + size

        minor = theme.WHITE.with_alpha(_alpha(255.0 * self.opacity / zoom))
        lines = self._lines(left, top, vw, vh, size, end_x, end_y, 1.0, minor)

        major_size = size * self.MAJOR_EVERY
        major_opacity = min(1.0, self.opacity * 2.0 / zoom)
        major = theme.WHITE.with_alpha(_alpha(255.0 * major_opacity))
        lines += self._lines(left, top, vw, vh, major_size, end_x, end_y, 2.0, major)
        return lines

    def _lines(
        self,
        left: float,
        top: float,
        width: float,
        height: float,
        spacing: float,
        end_x: float,
        end_y: float,
        thickness: float,
        color: Color,
    ) -> list[GridLine]:
        shift = math.fmod(self.offset, spacing)
        if shift < 0:
            shift += spacing
        start_x = math.floor((left - shift) / spacing) * spacing + shift
        start_y = math.floor((top - shift) / spacing) * spacing + shift
        vertical = [
            GridLine(x, top, thickness, height, color, True)
            for x in _steps(start_x, end_x, spacing)
        ]
        horizontal = [
            GridLine(left, y, width, thickness, color, False)
            for y in _steps(start_y, end_y, spacing)
        ]
        return vertical + horizontal

    def draw(self, surface: pygame.Surface, viewport: ViewportManager) -> None:
        """Render the lines visible through ``viewport``."""
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        for line in self.grid_lines(viewport.view_center, viewport.view_size):
            x0, y0 = viewport.world_to_screen((line.x, line.y))
            x1, y1 = viewport.world_to_screen((line.x + line.width, line.y + line.height))
            rect = pygame.Rect(
                round(x0), round(y0), max(1, round(x1 - x0)), max(1, round(y1 - y0))
            )
            pygame.draw.rect(overlay, tuple(line.color), rect)
        surface.blit(overlay, (0, 0))