"""A side panel that steps a spanning-tree algorithm over the current graph."""

from __future__ import annotations

from typing import Callable

import pygame

from graphviz_studio import theme
from graphviz_studio.button import Button
from graphviz_studio.graph import Graph
from graphviz_studio.mst import BoruvkaMST, KruskalMST, MSTAlgorithm
from graphviz_studio.viewport import Rect

Point = tuple[float, float]

FONT_PATH = "resources/Roboto-Medium.ttf"
FONT_SIZE = 14
BUTTON_SPACING = 50.0
BUTTON_HEIGHT = 40.0
MARGIN = 10.0

ALGORITHMS: dict[str, Callable[[], MSTAlgorithm]] = {
    "Kruskal": KruskalMST,
    "Boruvka": BoruvkaMST,
}


def _is_finished(algorithm: MSTAlgorithm) -> bool:
    check = getattr(algorithm, "is_finished", None)
    if callable(check):
        return bool(check())
    return bool(getattr(algorithm, "finished", False))


def _font() -> pygame.font.Font | None:
    try:
        if not pygame.font.get_init():
            pygame.font.init()
        try:
            return pygame.font.Font(FONT_PATH, FONT_SIZE)
        except (OSError, pygame.error):
            return pygame.font.Font(None, FONT_SIZE)
    except pygame.error:
        return None


class MSTPanel:
    """Buttons to pick Kruskal or Boruvka, step through it and start over."""

    def __init__(self, x: float, y: float, width: float, height: float) -> None:
        self.bounds = Rect(float(x), float(y), float(width), float(height))
        self.graph: Graph | None = None
        self.algorithm: MSTAlgorithm | None = None
        self.status = ""
        self.buttons: list[Button] = []
        self._font: pygame.font.Font | None = None

        actions: list[tuple[str, Callable[[], None]]] = [
            ("Step", self._on_step),
            ("Reset", self._on_reset),
            ("Kruskal", lambda: self.select_algorithm("Kruskal")),
            ("Boruvka", lambda: self.select_algorithm("Boruvka")),
        ]
        button_y = y + MARGIN
        for index, (label, action) in enumerate(actions):
            if index:
                button_y += BUTTON_SPACING
            self.buttons.append(
                Button(label, (x + MARGIN, button_y), (width - 2 * MARGIN, BUTTON_HEIGHT), action)
            )
        self._status_position: Point = (x + MARGIN, button_y + BUTTON_SPACING)

    def _on_step(self) -> None:
        if self.algorithm is not None:
            self.step()

    def _on_reset(self) -> None:
        if self.algorithm is not None:
            self.reset()

    def set_graph(self, graph: Graph | None) -> None:
        """Attach ``graph``; a chosen algorithm starts over on it."""
        self.graph = graph
        if self.algorithm is not None:
            self.reset()

    def contains(self, point: Point) -> bool:
        """Whether ``point`` lies on the panel."""
        return self.bounds.contains(point)

    def handle_event(self, event: pygame.event.Event) -> None:
        """Click the button under the mouse or update hover states."""
        if event.type == pygame.MOUSEBUTTONDOWN:
            for button in self.buttons:
                if button.contains(event.pos):
                    button.handle_click()
                    break
        elif event.type == pygame.MOUSEMOTION:
            for button in self.buttons:
                button.hovered = button.contains(event.pos)

    def select_algorithm(self, name: str) -> None:
        """Switch to the named algorithm and prepare it on the graph."""
        if self.graph is None:
            return
        factory = ALGORITHMS.get(name)
        if factory is not None:
            self.algorithm = factory()
        if self.algorithm is not None:
            self._prepare()

    def _prepare(self) -> None:
        if self.algorithm is None or self.graph is None:
            return
        self.algorithm.reset()
        for edge in self.graph.edges:
            if edge.weight is not None:
                self.algorithm.add_edge(edge.start_node.id, edge.end_node.id, edge.weight)
        self.algorithm.execute(self.graph.nodes)
        self._update_highlights()
        self.status = "Algorithm initialized"

    def step(self) -> None:
        """Advance the algorithm once and show the tree found so far."""
        if self.algorithm is None or self.graph is None:
            return
        if _is_finished(self.algorithm):
            return
        if self.algorithm.step():
            self.status = "Step completed"
            self._update_highlights()
        else:
            self.status = "Algorithm finished!"

    def reset(self) -> None:
        """Clear highlights and run the algorithm again from the start."""
        if self.algorithm is None or self.graph is None:
            return
        for edge in self.graph.edges:
            edge.highlighted = False
        self._prepare()
        self.status = "Algorithm reset"

    def _update_highlights(self) -> None:
        if self.algorithm is None or self.graph is None:
            return
        for edge in self.graph.edges:
            edge.highlighted = False
        for tree_edge in self.algorithm.mst_edges:
            for edge in self.graph.edges:
                if edge.start_node.id == tree_edge.src and edge.end_node.id == tree_edge.dest:
                    edge.highlighted = True
                    break

    def update(self, delta_time: float) -> None:
        """Advance the button animations."""
        for button in self.buttons:
            button.update(delta_time)

    def draw(self, surface: pygame.Surface) -> None:
        """Render the panel, its buttons and the status line."""
        b = self.bounds
        pygame.draw.rect(
            surface,
            tuple(theme.PANEL_BACKGROUND),
            pygame.Rect(round(b.left), round(b.top), round(b.width), round(b.height)),
        )
        for button in self.buttons:
            button.draw(surface)
        if not self.status:
            return
        if self._font is None:
            self._font = _font()
        if self._font is None:
            return
        x, y = self._status_position
        for line in self.status.split("\n"):
            text = self._font.render(line, True, tuple(theme.TEXT_PRIMARY))
            surface.blit(text, (round(x), round(y)))
            y += self._font.get_linesize()