"""A connection between two nodes, drawn as a glowing band."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import pygame

from graphviz_studio import theme
from graphviz_studio.node import Node
from graphviz_studio.theme import Color

Point = tuple[float, float]
ToScreen = Callable[[Point], Point]

FONT_PATH = "resources/Roboto-Medium.ttf"


@dataclass(frozen=True)
class EdgeGeometry:
    """Everything needed to draw an edge, in world coordinates."""

    line: tuple[Point, Point, Point, Point]
    glow: tuple[Point, Point, Point, Point]
    color: Color
    glow_color: Color
    arrow: tuple[Point, Point, Point] | None
    label: str | None
    label_position: Point | None


def _quad(start: Point, end: Point, normal: Point, thickness: float):
    ox = normal[0] * thickness / 2.0
    oy = normal[1] * thickness / 2.0
    return (
        (start[0] - ox, start[1] - oy),
        (end[0] - ox, end[1] - oy),
        (end[0] + ox, end[1] + oy),
        (start[0] + ox, start[1] + oy),
    )


def _arrow_head(tip: Point, direction: Point):
    dx, dy = direction
    nx, ny = -dy, dx
    size = theme.NODE_RADIUS * 0.8
    return (
        tip,
        (tip[0] + (dx + nx * 0.5) * size, tip[1] + (dy + ny * 0.5) * size),
        (tip[0] + (dx - nx * 0.5) * size, tip[1] + (dy - ny * 0.5) * size),
    )


def _draw_polygon(surface: pygame.Surface, color: Color, points) -> None:
    if color.a == 0:
        return
    if color.a == 255:
        pygame.draw.polygon(surface, tuple(color), points)
        return
    left = math.floor(min(p[0] for p in points))
    top = math.floor(min(p[1] for p in points))
    width = math.ceil(max(p[0] for p in points)) - left + 1
    height = math.ceil(max(p[1] for p in points)) - top + 1
    overlay = pygame.Surface((width, height), pygame.SRCALPHA)
    pygame.draw.polygon(overlay, tuple(color), [(x - left, y - top) for x, y in points])
    surface.blit(overlay, (left, top))


def _weight_font() -> pygame.font.Font | None:
    try:
        if not pygame.font.get_init():
            pygame.font.init()
        try:
            return pygame.font.Font(FONT_PATH, 14)
        except (OSError, pygame.error):
            return pygame.font.Font(None, 14)
    except pygame.error:
        return None


class Edge:
    """An optionally directed, optionally weighted edge between two nodes."""

    LINE_THICKNESS = 3.0
    GLOW_THICKNESS = 6.0
    ARROW_SIZE = 15.0
    LABEL_OFFSET = 20.0

    _font: pygame.font.Font | None = None

    def __init__(
        self,
        start: Node,
        end: Node,
        directed: bool = False,
        weight: float | None = None,
    ) -> None:
        self.start_node = start
        self.end_node = end
        self._directed = directed
        self._show_arrow = directed
        self._highlighted = False
        self._weight = None if weight is None else float(weight)
        self._geometry = self.geometry()

    @property
    def directed(self) -> bool:
        return self._directed

    @directed.setter
    def directed(self, value: bool) -> None:
        self._directed = value
        self._show_arrow = value
        self.update()

    @property
    def show_arrow(self) -> bool:
        return self._show_arrow

    @show_arrow.setter
    def show_arrow(self, value: bool) -> None:
        self._show_arrow = value
        self.update()

    @property
    def highlighted(self) -> bool:
        return self._highlighted

    @highlighted.setter
    def highlighted(self, value: bool) -> None:
        self._highlighted = value
        self.update()

    @property
    def weight(self) -> float | None:
        return self._weight

    @weight.setter
    def weight(self, value: float) -> None:
        self._weight = float(value)
        self.update()

    def is_connected_to(self, node: Node) -> bool:
        """Whether ``node`` is one of the two endpoints."""
        return self.start_node is node or self.end_node is node

    def update(self) -> None:
        """Recompute the drawn shape from the current node positions."""
        self._geometry = self.geometry()

    def geometry(self) -> EdgeGeometry:
        """The shape of the edge for the current node positions."""
        sx, sy = self.start_node.position
        ex, ey = self.end_node.position
        dx, dy = ex - sx, ey - sy
        length = math.hypot(dx, dy)
        ux, uy = (dx / length, dy / length) if length > 0 else (0.0, 0.0)

        radius = self.start_node.radius
        gap = radius + (self.ARROW_SIZE if self._show_arrow else 0.0)
        start = (sx + ux * radius, sy + uy * radius)
        end = (ex - ux * gap, ey - uy * gap)
        normal = (-uy, ux)

        if self._highlighted:
            color = theme.EDGE_HIGHLIGHT
            glow_color = theme.EDGE_HIGHLIGHT.with_alpha(100)
        else:
            color = theme.EDGE_COLOR
            glow_color = theme.EDGE_COLOR.with_alpha(40)

        label = None
        label_position = None
        if self._weight is not None:
            label = f"{self._weight:.1f}"
            label_position = (
                (sx + ex) / 2.0 + normal[0] * self.LABEL_OFFSET,
                (sy + ey) / 2.0 + normal[1] * self.LABEL_OFFSET,
            )

        return EdgeGeometry(
            line=_quad(start, end, normal, self.LINE_THICKNESS),
            glow=_quad(start, end, normal, self.GLOW_THICKNESS),
            color=color,
            glow_color=glow_color,
            arrow=_arrow_head(end, (-ux, -uy)) if self._show_arrow else None,
            label=label,
            label_position=label_position,
        )

    def draw(self, surface: pygame.Surface, to_screen: ToScreen) -> None:
        """Render onto ``surface``; ``to_screen`` maps world to pixel positions."""
        shape = self._geometry
        _draw_polygon(surface, shape.glow_color, [to_screen(p) for p in shape.glow])
        _draw_polygon(surface, shape.color, [to_screen(p) for p in shape.line])
        if shape.arrow is not None:
            _draw_polygon(surface, shape.color, [to_screen(p) for p in shape.arrow])
        if shape.label is None or shape.label_position is None:
            return
        if Edge._font is None:
            Edge._font = _weight_font()
        font = Edge._font
        if font is None:
            return
        x, y = to_screen(shape.label_position)
        center = (round(x), round(y))
        outline = font.render(shape.label, True, tuple(theme.BLACK))
        for ox, oy in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            rect = outline.get_rect(center=(center[0] + ox, center[1] + oy))
            surface.blit(outline, rect)
        text = font.render(shape.label, True, tuple(theme.WHITE))
        surface.blit(text, text.get_rect(center=center))