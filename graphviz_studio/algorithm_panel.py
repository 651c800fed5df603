"""A panel that loads a sample graph and animates a spanning-tree algorithm on it."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pygame

from graphviz_studio import graph_io, theme
from graphviz_studio.button import Button
from graphviz_studio.graph import Graph
from graphviz_studio.mst import BoruvkaMST, KruskalMST, MSTAlgorithm
from graphviz_studio.viewport import Rect

log = logging.getLogger(__name__)

Point = tuple[float, float]

FONT_PATH = "resources/Roboto-Medium.ttf"
FONT_SIZE = 14
BUTTON_SPACING = 50.0
BUTTON_HEIGHT = 40.0
MARGIN = 10.0
ANIMATION_STEP_DURATION = 1.0
TRANSITION_DURATION = 0.5
APPROX_CHAR_WIDTH = 7.0

ALGORITHMS: dict[str, Callable[[], MSTAlgorithm]] = {
    "Kruskal": KruskalMST,
    "Boruvka": BoruvkaMST,
}


def wrap_text(text: str, max_width: float, measure: Callable[[str], float]) -> str:
    """Break ``text`` into lines no wider than ``max_width``.

    Each word is followed by a space; a word that would overflow the current
    line starts a new one.
    """
    wrapped = []
    line_width = 0.0
    for word in text.split():
        word_width = measure(word + " ")
        if line_width + word_width > max_width:
            wrapped.append("\n" + word + " ")
            line_width = word_width
        else:
            wrapped.append(word + " ")
            line_width += word_width
    return "".join(wrapped)


def _is_finished(algorithm: MSTAlgorithm) -> bool:
    check = getattr(algorithm, "is_finished", None)
    if callable(check):
        return bool(check())
    return bool(getattr(algorithm, "finished", False))


def _state_highlighted(state) -> bool:
    value = getattr(state, "highlighted", None)
    if value is None:
        value = getattr(state, "is_highlighted", False)
    return bool(value)


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


class AlgorithmPanel:
    """Loads ``<Name>_input.txt`` and steps or animates the chosen algorithm."""

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        cwd: str | Path | None = None,
    ) -> None:
        self.bounds = Rect(float(x), float(y), float(width), float(height))
        self.cwd = cwd
        self.graph: Graph | None = None
        self.algorithm: MSTAlgorithm | None = None
        self.status = ""
        self.description = ""
        self.animating = False
        self.transitioning = False
        self.buttons: list[Button] = []
        self._animation_timer = 0.0
        self._transition_timer = 0.0
        self._font: pygame.font.Font | None = None

        actions: list[tuple[str, Callable[[], None]]] = [
            ("Step", self._on_step),
            ("Reset", self._on_reset),
            ("Run Animation", self._on_animate),
            ("Kruskal's Algorithm", lambda: self.select_algorithm("Kruskal")),
            ("Boruvka's Algorithm", lambda: self.select_algorithm("Boruvka")),
        ]
        button_y = y + MARGIN
        for index, (label, action) in enumerate(actions):
            if index:
                button_y += BUTTON_SPACING
            self.buttons.append(
                Button(label, (x + MARGIN, button_y), (width - 2 * MARGIN, BUTTON_HEIGHT), action)
            )
        self._status_position: Point = (x + MARGIN, button_y + BUTTON_SPACING)
        self._description_position: Point = (x + MARGIN, button_y + 2 * BUTTON_SPACING)

    def _on_step(self) -> None:
        if self.algorithm is not None and not self.animating:
            self.step()

    def _on_reset(self) -> None:
        if self.algorithm is not None:
            self.reset()

    def _on_animate(self) -> None:
        if self.algorithm is not None and not _is_finished(self.algorithm):
            self.toggle_animation()

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
        """Stop any animation, load the algorithm's sample graph and prepare it."""
        if self.graph is None:
            return
        self.stop_animation()
        self._load_algorithm_graph(name)

    def _load_algorithm_graph(self, name: str) -> None:
        graph = self.graph
        if graph is None:
            return
        graph.clear()
        graph.algorithm_mode = False
        filename = f"{name}_input.txt"
        log.info("loading algorithm input file %s", filename)
        try:
            graph_io.load_from_file(graph, filename, self.cwd)
        except (OSError, ValueError) as exc:
            log.error("error loading algorithm graph: %s", exc)
            return
        factory = ALGORITHMS.get(name)
        if factory is not None:
            self.algorithm = factory()
        if self.algorithm is not None:
            graph.algorithm_mode = True
            self._prepare()

    def _prepare(self) -> None:
        if self.algorithm is None or self.graph is None:
            return
        self.algorithm.reset()
        for edge in self.graph.edges:
            if edge.weight is not None:
                self.algorithm.add_edge(edge.start_node.id, edge.end_node.id, edge.weight)
        self.algorithm.execute(self.graph.nodes)
        self.transitioning = True
        self._transition_timer = 0.0
        self._update_visualization()
        self.status = "Algorithm initialized"
        self.description = self.algorithm.description

    def toggle_animation(self) -> None:
        """Start or pause automatic stepping."""
        self.animating = not self.animating
        self._animation_timer = 0.0
        self._update_animation_button()

    def stop_animation(self) -> None:
        """Pause automatic stepping."""
        self.animating = False
        self._animation_timer = 0.0
        self._update_animation_button()

    def _update_animation_button(self) -> None:
        for button in self.buttons:
            if "Animation" in button.text:
                button.text = "Pause Animation" if self.animating else "Run Animation"
                break

    def step(self) -> None:
        """Advance the algorithm once and start a colour transition."""
        if self.algorithm is None or self.graph is None:
            return
        if _is_finished(self.algorithm):
            return
        if self.algorithm.step():
            self.transitioning = True
            self._transition_timer = 0.0
            self._update_visualization()
        else:
            self.status = "Algorithm finished!"
            self.stop_animation()

    def reset(self) -> None:
        """Restore the graph's look and run the algorithm again from the start."""
        if self.algorithm is None or self.graph is None:
            return
        self.stop_animation()
        for node in self.graph.nodes:
            node.set_color(theme.NODE_FILL)
            node.status_label = ""
            node.highlighted = False
            node.scale = 1.0
        for edge in self.graph.edges:
            edge.highlighted = False
        self.graph.algorithm_mode = False
        self._prepare()
        self.status = "Algorithm reset"

    def _measure(self, text: str) -> float:
        if self._font is None:
            self._font = _font()
        if self._font is None:
            return len(text) * APPROX_CHAR_WIDTH
        return float(self._font.size(text)[0])

    def _update_visualization(self) -> None:
        if self.algorithm is None or self.graph is None:
            return
        for node in self.graph.nodes:
            state = self.algorithm.get_node_state(node.id)
            if self.transitioning:
                progress = self._transition_timer / TRANSITION_DURATION
                node.set_color(node.color.lerp(state.color.with_alpha(255), progress))
            else:
                node.set_color(state.color)
            node.status_label = state.component_label
            node.highlighted = _state_highlighted(state)
            if state.pulse_effect > 0:
                node.scale = 1.0 + 0.2 * state.pulse_effect

        self._update_highlights()

        description = self.algorithm.current_step_description()
        if description:
            self.status = wrap_text(description, self.bounds.width - 2 * MARGIN, self._measure)

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
        """Advance buttons, colour transitions and the step animation."""
        for button in self.buttons:
            button.update(delta_time)

        if self.transitioning:
            self._transition_timer += delta_time
            if self._transition_timer >= TRANSITION_DURATION:
                self.transitioning = False
                self._transition_timer = 0.0
            self._update_visualization()

        if self.animating and self.algorithm is not None and not _is_finished(self.algorithm):
            self._animation_timer += delta_time
            if self._animation_timer >= ANIMATION_STEP_DURATION:
                self._animation_timer = 0.0
                self.step()
                self._update_animation_button()
                if _is_finished(self.algorithm):
                    self.stop_animation()

    def draw(self, surface: pygame.Surface) -> None:
        """Render the panel, its buttons, the status and the description."""
        b = self.bounds
        pygame.draw.rect(
            surface,
            tuple(theme.PANEL_BACKGROUND),
            pygame.Rect(round(b.left), round(b.top), round(b.width), round(b.height)),
        )
        for button in self.buttons:
            button.draw(surface)
        if self._font is None:
            self._font = _font()
        if self._font is None:
            return
        for content, (x, y) in (
            (self.status, self._status_position),
            (self.description, self._description_position),
        ):
            if not content:
                continue
            for line in content.split("\n"):
                text = self._font.render(line, True, tuple(theme.TEXT_PRIMARY))
                surface.blit(text, (round(x), round(y)))
                y += self._font.get_linesize()