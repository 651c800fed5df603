"""A clickable rectangular button with a hover fade."""

from __future__ import annotations

import logging
from typing import Callable

import pygame

from graphviz_studio import theme
from graphviz_studio.animation import Animation
from graphviz_studio.theme import Color
from graphviz_studio.viewport import Rect

log = logging.getLogger(__name__)

Point = tuple[float, float]

FONT_PATHS = (
    "resources/Roboto-Medium.ttf",
    "../resources/Roboto-Medium.ttf",
    "Roboto-Medium.ttf",
)
FONT_SIZE = 16
OUTLINE_THICKNESS = 1.0

_shared_font: pygame.font.Font | None = None
_font_tried = False


def _button_font() -> pygame.font.Font | None:
    global _shared_font, _font_tried
    if _font_tried:
        return _shared_font
    _font_tried = True
    try:
        if not pygame.font.get_init():
            pygame.font.init()
    except pygame.error:
        return None
    for path in FONT_PATHS:
        try:
            _shared_font = pygame.font.Font(path, FONT_SIZE)
        except (OSError, pygame.error):
            continue
        log.info("loaded font from %s", path)
        return _shared_font
    log.warning("could not load font, using the default font")
    try:
        _shared_font = pygame.font.Font(None, FONT_SIZE)
    except pygame.error:
        _shared_font = None
    return _shared_font


class Button:
    """A labelled rectangle that runs a callback when clicked."""

    def __init__(
        self,
        text: str,
        position: Point,
        size: Point,
        callback: Callable[[], None] | None,
    ) -> None:
        self.text = text
        self.position: Point = (float(position[0]), float(position[1]))
        self.size: Point = (float(size[0]), float(size[1]))
        self.fill_color: Color = theme.PANEL_BACKGROUND
        self.outline_color: Color = theme.NODE_OUTLINE
        self.on_click = callback
        self._hovered = False
        self._hover_animation: Animation | None = None

    @property
    def bounds(self) -> Rect:
        """The area covered by the button including its outline."""
        x, y = self.position
        w, h = self.size
        return Rect(
            x - OUTLINE_THICKNESS,
            y - OUTLINE_THICKNESS,
            w + 2 * OUTLINE_THICKNESS,
            h + 2 * OUTLINE_THICKNESS,
        )

    @property
    def hovered(self) -> bool:
        return self._hovered

    @hovered.setter
    def hovered(self, value: bool) -> None:
        value = bool(value)
        if value == self._hovered:
            return
        self._hovered = value

        def apply(progress: float) -> None:
            self.fill_color = self.fill_color.with_alpha(int(255 * (0.8 + 0.2 * progress)))

        self._hover_animation = Animation(theme.ANIMATION_DURATION, apply)

    def contains(self, point: Point) -> bool:
        """Whether ``point`` lies on the button."""
        return self.bounds.contains(point)

    def handle_click(self) -> None:
        """Run the callback, if there is one."""
        if self.on_click is not None:
            self.on_click()

    def update(self, delta_time: float) -> None:
        """Advance the hover fade."""
        if self._hover_animation is None:
            return
        self._hover_animation.update(delta_time)
        if self._hover_animation.finished:
            self._hover_animation = None

    def draw(self, surface: pygame.Surface) -> None:
        """Render the button and its centred label."""
        x, y = self.position
        w, h = self.size
        border = round(OUTLINE_THICKNESS)
        overlay = pygame.Surface(
            (round(w) + 2 * border, round(h) + 2 * border), pygame.SRCALPHA
        )
        overlay.fill(tuple(self.outline_color))
        overlay.fill(tuple(self.fill_color), pygame.Rect(border, border, round(w), round(h)))
        surface.blit(overlay, (round(x) - border, round(y) - border))

        font = _button_font()
        if font is None or not self.text:
            return
        label = font.render(self.text, True, tuple(theme.TEXT_PRIMARY))
        surface.blit(label, label.get_rect(center=(round(x + w / 2), round(y + h / 2))))