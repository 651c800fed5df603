"""A graph vertex with selection and colour animations."""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Callable

import pygame

from graphviz_studio import theme
from graphviz_studio.animation import Animation
from graphviz_studio.theme import Color

Point = tuple[float, float]
ToScreen = Callable[[Point], Point]

FONT_PATH = "resources/Roboto-Medium.ttf"
SELECTED_SCALE = 1.1
GLOW_GROWTH = 5.0
GLOW_THICKNESS = 8.0
GLOW_ALPHA = 100


@lru_cache(maxsize=64)
def _font(size: int, bold: bool = False) -> pygame.font.Font | None:
    try:
        if not pygame.font.get_init():
            pygame.font.init()
        try:
            font = pygame.font.Font(FONT_PATH, size)
        except (OSError, pygame.error):
            font = pygame.font.Font(None, size)
    except pygame.error:
        return None
    font.set_bold(bold)
    return font


def _screen_scale(to_screen: ToScreen) -> float:
    x0, y0 = to_screen((0.0, 0.0))
    x1, y1 = to_screen((1.0, 0.0))
    return math.hypot(x1 - x0, y1 - y0) or 1.0


def _draw_circle(
    surface: pygame.Surface, color: Color, center: Point, radius: float, width: int = 0
) -> None:
    if color.a == 0:
        return
    if color.a == 255:
        pygame.draw.circle(surface, tuple(color), center, radius, width)
        return
    size = int(radius * 2) + 4
    overlay = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.circle(overlay, tuple(color), (size / 2, size / 2), radius, width)
    surface.blit(overlay, (center[0] - size / 2, center[1] - size / 2))


class Node:
    """A circular vertex that animates selection and fill colour changes."""

    def __init__(self, x: float, y: float, node_id: int) -> None:
        self.id = node_id
        self.position: Point = (float(x), float(y))
        self.radius = theme.NODE_RADIUS
        self.fill_color = theme.NODE_FILL
        self.outline_color = theme.NODE_OUTLINE
        self.highlighted = False
        self.status_label = ""
        self.scale = 1.0
        self._color = theme.NODE_FILL
        self._selected = False
        self._selection_animation: Animation | None = None
        self._color_animation: Animation | None = None

    @property
    def color(self) -> Color:
        """The colour the node is showing or animating towards."""
        return self._color

    @property
    def selected(self) -> bool:
        return self._selected

    @selected.setter
    def selected(self, value: bool) -> None:
        value = bool(value)
        if value != self._selected:
            self._selected = value
            self._start_selection_animation()

    def contains(self, point: Point) -> bool:
        """Whether ``point`` lies inside the scaled circle."""
        dx = point[0] - self.position[0]
        dy = point[1] - self.position[1]
        scaled = self.radius * self.scale
        return dx * dx + dy * dy <= scaled * scaled

    def set_color(self, color: Color) -> None:
        """Fade the fill towards ``color`` if it differs from the current one."""
        if self._color != color:
            self._start_color_animation(color)
            self._color = color

    def set_state_color(self, color: Color) -> None:
        """Record ``color``; apply it at once unless a fade is running."""
        self._color = color
        if self._color_animation is None:
            self.fill_color = color

    def update(self, delta_time: float) -> None:
        """Advance running animations."""
        if self._selection_animation is not None:
            self._selection_animation.update(delta_time)
            if self._selection_animation.finished:
                self._selection_animation = None
        if self._color_animation is not None:
            self._color_animation.update(delta_time)
            if self._color_animation.finished:
                self._color_animation = None

    def _start_selection_animation(self) -> None:
        start = self.scale
        target = SELECTED_SCALE if self._selected else 1.0

        def apply(progress: float) -> None:
            self.scale = start + (target - start) * progress
            if self._selected:
                self.outline_color = theme.NODE_SELECTED
            else:
                self.outline_color = theme.NODE_OUTLINE.with_alpha(
                    int(255 * (1.0 - progress))
                )

        self._selection_animation = Animation(theme.ANIMATION_DURATION, apply)

    def _start_color_animation(self, target: Color) -> None:
        start = self.fill_color

        def apply(progress: float) -> None:
            self.fill_color = start.lerp(target, progress)

        self._color_animation = Animation(theme.ANIMATION_DURATION, apply)

    def draw(self, surface: pygame.Surface, to_screen: ToScreen) -> None:
        """Render onto ``surface``; ``to_screen`` maps world to pixel positions."""
        zoom = _screen_scale(to_screen)
        center = to_screen(self.position)
        radius = self.radius * self.scale * zoom
        glow_radius = (self.radius + GLOW_GROWTH) * self.scale * zoom
        glow_width = max(1, round(GLOW_THICKNESS * zoom))

        if self.highlighted:
            _draw_circle(
                surface, Color(255, 255, 0, GLOW_ALPHA), center,
                glow_radius + glow_width, glow_width,
            )
        if self._selected:
            _draw_circle(
                surface, theme.NODE_SELECTED.with_alpha(GLOW_ALPHA), center,
                glow_radius + glow_width, glow_width,
            )

        outline = theme.NODE_OUTLINE_THICKNESS * self.scale * zoom
        _draw_circle(surface, self.outline_color, center, radius + outline)
        _draw_circle(surface, self.fill_color, center, radius)

        label_font = _font(max(1, round(24 * self.scale * zoom)), True)
        if label_font is not None:
            text = label_font.render(str(self.id), True, tuple(theme.BLACK))
            surface.blit(text, text.get_rect(center=(round(center[0]), round(center[1]))))

        if self.status_label:
            self._draw_status(surface, center, radius, zoom)

    def _draw_status(
        self, surface: pygame.Surface, center: Point, radius: float, zoom: float
    ) -> None:
        font = _font(max(1, round(14 * self.scale * zoom)))
        if font is None:
            return
        text = font.render(self.status_label, True, tuple(theme.WHITE))
        bottom = center[1] - radius - 15 * zoom
        rect = text.get_rect(midbottom=(round(center[0]), round(bottom)))
        background = pygame.Surface((rect.width + 10, rect.height + 10), pygame.SRCALPHA)
        background.fill((0, 0, 0, 150))
        surface.blit(background, (rect.x - 5, rect.y - 5))
        surface.blit(text, rect)