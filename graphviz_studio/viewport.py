"""Pan and zoom state mapping between window pixels and world coordinates."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pygame

Point = tuple[float, float]

log = logging.getLogger(__name__)

MIDDLE_BUTTON = 2


@dataclass
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    left: float
    top: float
    width: float
    height: float

    def contains(self, point: Point) -> bool:
        """Whether ``point`` lies inside; the right and bottom edges are excluded."""
        x, y = point
        min_x = min(self.left, self.left + self.width)
        max_x = max(self.left, self.left + self.width)
        min_y = min(self.top, self.top + self.height)
        max_y = max(self.top, self.top + self.height)
        return min_x <= x < max_x and min_y <= y < max_y


class ViewportManager:
    """A movable, zoomable view over the world, kept inside a bounding area."""

    MIN_ZOOM = 0.1
    MAX_ZOOM = 10.0
    ZOOM_IN_FACTOR = 0.9
    ZOOM_OUT_FACTOR = 1.1

    def __init__(self, window_size: tuple[float, float], drag_sensitivity: float = 1.0) -> None:
        width, height = window_size
        self.window_size: Point = (float(width), float(height))
        self.zoom_level = 1.0
        self.view_center: Point = (width / 2.0, height / 2.0)
        self.view_size: Point = (float(width), float(height))
        self.dragging = False
        self.drag_sensitivity = drag_sensitivity
        self._last_mouse: Point = (0.0, 0.0)
        self._bounds = Rect(0.0, 0.0, float(width), float(height))
        log.info("viewport initialised with screen size %gx%g", width, height)

    @property
    def bounds(self) -> Rect:
        """The area the view centre is kept within."""
        return self._bounds

    @bounds.setter
    def bounds(self, new_bounds: Rect) -> None:
        self._bounds = new_bounds
        self._constrain_view()
        log.debug(
            "viewport bounds set to %g,%g,%g,%g",
            new_bounds.left, new_bounds.top, new_bounds.width, new_bounds.height,
        )

    def handle_event(self, event: pygame.event.Event) -> None:
        """React to wheel zoom and middle-button panning."""
        if event.type == pygame.MOUSEWHEEL:
            delta = getattr(event, "y", 0)
            if delta:
                x, y = self._event_position(event)
                self.zoom_at(x, y, delta)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == MIDDLE_BUTTON:
            self.begin_drag(*event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == MIDDLE_BUTTON:
            self.end_drag()
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            self.drag_to(*event.pos)

    @staticmethod
    def _event_position(event: pygame.event.Event) -> Point:
        pos = getattr(event, "pos", None)
        if pos is None:
            pos = pygame.mouse.get_pos()
        return (float(pos[0]), float(pos[1]))

    def screen_to_world(self, screen_pos: Point) -> Point:
        """The world point shown at pixel ``screen_pos``."""
        sx, sy = screen_pos
        ww, wh = self.window_size
        cx, cy = self.view_center
        vw, vh = self.view_size
        return (cx + (sx / ww - 0.5) * vw, cy + (sy / wh - 0.5) * vh)

    def world_to_screen(self, world_pos: Point) -> Point:
        """The pixel position at which ``world_pos`` is shown."""
        wx, wy = world_pos
        ww, wh = self.window_size
        cx, cy = self.view_center
        vw, vh = self.view_size
        return (((wx - cx) / vw + 0.5) * ww, ((wy - cy) / vh + 0.5) * wh)

    def zoom_at(self, mouse_x: float, mouse_y: float, delta: float) -> None:
        """Zoom in (``delta`` > 0) or out, keeping the point under the mouse fixed."""
        before = self.screen_to_world((mouse_x, mouse_y))
        factor = self.ZOOM_IN_FACTOR if delta > 0 else self.ZOOM_OUT_FACTOR
        new_zoom = self.zoom_level * factor
        if not self.MIN_ZOOM <= new_zoom <= self.MAX_ZOOM:
            return
        self.zoom_level = new_zoom
        ww, wh = self.window_size
        self.view_size = (ww * new_zoom, wh * new_zoom)
        after = self.screen_to_world((mouse_x, mouse_y))
        cx, cy = self.view_center
        self.view_center = (cx + before[0] - after[0], cy + before[1] - after[1])
        self._constrain_view()

    def begin_drag(self, x: float, y: float) -> None:
        """Start panning from pixel ``(x, y)``."""
        self.dragging = True
        self._last_mouse = (float(x), float(y))

    def drag_to(self, x: float, y: float) -> None:
        """Pan so the world follows the mouse to pixel ``(x, y)``."""
        lx, ly = self._last_mouse
        scale = self.zoom_level * self.drag_sensitivity
        cx, cy = self.view_center
        self.view_center = (cx + (lx - x) * scale, cy + (ly - y) * scale)
        self._constrain_view()
        self._last_mouse = (float(x), float(y))

    def end_drag(self) -> None:
        """Stop panning."""
        self.dragging = False

    def reset(self) -> None:
        """Return to the unzoomed view centred on the window."""
        self.zoom_level = 1.0
        ww, wh = self.window_size
        self.view_size = (ww, wh)
        self.view_center = (ww / 2.0, wh / 2.0)
        log.info("viewport reset to default view")

    def _constrain_view(self) -> None:
        b = self._bounds
        vw, vh = self.view_size
        cx, cy = self.view_center

        min_x = b.left + vw / 2.0
        max_x = b.left + b.width - vw / 2.0
        min_y = b.top + vh / 2.0
        max_y = b.top + b.height - vh / 2.0

        if max_x < min_x:
            min_x = max_x = b.left + b.width / 2.0
        if max_y < min_y:
            min_y = max_y = b.top + b.height / 2.0

        self.view_center = (max(min_x, min(cx, max_x)), max(min_y, min(cy, max_y)))