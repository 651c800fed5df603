"""The interactive graph editor: window, input handling and main loop."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pygame

from graphviz_studio import graph_io, theme
from graphviz_studio.algorithm_panel import AlgorithmPanel
from graphviz_studio.graph import Graph
from graphviz_studio.grid import BackgroundGrid
from graphviz_studio.node import Node
from graphviz_studio.ui_panel import UIPanel
from graphviz_studio.viewport import Rect, ViewportManager

log = logging.getLogger(__name__)

Point = tuple[float, float]

PANEL_WIDTH = 300.0
INITIAL_PADDING = 500.0
GROW_PADDING = 200.0
FRAME_RATE = 60
LEFT_BUTTON = 1
INPUT_FILE = "input.txt"
OUTPUT_FILE = "output.txt"


class Application:
    """Owns the graph, the panels and the view, and reacts to user input."""

    def __init__(
        self,
        window_size: tuple[int, int] = (1920, 1080),
        cwd: str | Path | None = None,
        fullscreen: bool = False,
    ) -> None:
        width, height = window_size
        self.window_size: tuple[int, int] = (int(width), int(height))
        self.cwd = cwd
        self.fullscreen = fullscreen
        self.running = True
        self.graph = Graph()
        self.selected_node: Node | None = None
        self.dragged_node: Node | None = None
        self.dragging = False
        self.show_algorithm_panel = False

        self.ui_panel = UIPanel(PANEL_WIDTH, float(height), float(width))
        self.grid = BackgroundGrid(self.window_size)
        self.algorithm_panel = AlgorithmPanel(
            width - PANEL_WIDTH - 10, 10, PANEL_WIDTH, float(height), cwd=cwd
        )
        self.viewport = ViewportManager(self.window_size)
        self.viewport.bounds = self._default_bounds()

        self.graph.viewport_manager = self.viewport
        self.ui_panel.set_graph(self.graph)
        self.algorithm_panel.set_graph(self.graph)
        self._load_initial_graph()

    def _default_bounds(self) -> Rect:
        width, height = self.window_size
        return Rect(
            -INITIAL_PADDING,
            -INITIAL_PADDING,
            width + 2 * INITIAL_PADDING,
            height + 2 * INITIAL_PADDING,
        )

    def _load_initial_graph(self) -> None:
        try:
            graph_io.load_from_file(self.graph, INPUT_FILE, self.cwd)
        except (OSError, ValueError) as exc:
            log.warning("could not load initial graph: %s", exc)
            return
        self.reset_viewport_to_fit_graph()

    def run(self) -> None:
        """Open the window and process frames until it is closed."""
        pygame.init()
        flags = pygame.FULLSCREEN if self.fullscreen else 0
        screen = pygame.display.set_mode(self.window_size, flags)
        pygame.display.set_caption("Graph Visualizer")
        clock = pygame.time.Clock()
        try:
            while self.running:
                delta_time = clock.tick(FRAME_RATE) / 1000.0
                for event in pygame.event.get():
                    self._dispatch(event)
                self.update(delta_time)
                self._render(screen)
        finally:
            pygame.quit()

    def _dispatch(self, event: pygame.event.Event) -> None:
        self.viewport.handle_event(event)
        self.ui_panel.handle_event(event)
        if self.show_algorithm_panel:
            self.algorithm_panel.handle_event(event)

        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            self.handle_key(event.key, bool(event.mod & pygame.KMOD_CTRL))
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == LEFT_BUTTON:
            self.handle_mouse_press(*event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == LEFT_BUTTON:
            self.handle_mouse_release()
        elif event.type == pygame.MOUSEMOTION:
            self.handle_mouse_move(*event.pos)

    def _render(self, screen: pygame.Surface) -> None:
        screen.fill(tuple(theme.BACKGROUND))
        self.grid.draw(screen, self.viewport)
        self.graph.draw(screen, self.viewport.world_to_screen)
        self.ui_panel.draw(screen)
        if self.show_algorithm_panel:
            self.algorithm_panel.draw(screen)
        pygame.display.flip()

    def handle_key(self, key: int, ctrl: bool = False) -> None:
        """React to a key press; ``ctrl`` tells whether Control was held."""
        if key == pygame.K_ESCAPE:
            self.running = False
            return
        if key == pygame.K_r:
            self.reset_viewport_to_fit_graph()
            return
        if key == pygame.K_g:
            self.grid.toggle_animation()
            return

        if ctrl:
            if key == pygame.K_s:
                self.save_graph(OUTPUT_FILE)
            elif key == pygame.K_l:
                self.load_graph(INPUT_FILE)
            elif key == pygame.K_a:
                self.toggle_algorithm_panel()

        if key == pygame.K_DELETE and self.selected_node is not None:
            self.graph.delete_node(self.selected_node)
            self.selected_node = None
            self.dragged_node = None
            self.ui_panel.set_selected_node(None)
            self.reset_viewport_to_fit_graph()

    def _deselect(self) -> None:
        if self.selected_node is not None:
            self.selected_node.selected = False
            self.selected_node = None
            self.ui_panel.set_selected_node(None)

    def handle_mouse_press(self, x: float, y: float) -> None:
        """Select, connect or create nodes with the left button at pixel ``(x, y)``."""
        point = (float(x), float(y))
        if self.ui_panel.contains(point) or (
            self.show_algorithm_panel and self.algorithm_panel.contains(point)
        ):
            return

        world = self.viewport.screen_to_world(point)
        clicked = self.graph.find_node_at(world)

        if clicked is not None:
            if self.selected_node is not None and self.selected_node is not clicked:
                self.graph.add_edge(self.selected_node, clicked)
                self._deselect()
            else:
                if self.selected_node is not None:
                    self.selected_node.selected = False
                self.selected_node = clicked
                clicked.selected = True
                self.dragged_node = clicked
                self.dragging = True
                self.ui_panel.set_selected_node(clicked)
        elif not self.dragging:
            self.graph.add_node(world[0], world[1])
            self.update_viewport_bounds(world)
            self._deselect()

    def handle_mouse_release(self) -> None:
        """Finish dragging a node."""
        if self.dragging and self.dragged_node is not None:
            self.update_viewport_bounds(self.dragged_node.position)
        self.dragging = False
        self.dragged_node = None

    def handle_mouse_move(self, x: float, y: float) -> None:
        """Move the dragged node to follow the mouse."""
        if not self.dragging or self.dragged_node is None:
            return
        world = self.viewport.screen_to_world((float(x), float(y)))
        self.dragged_node.position = world
        self.update_viewport_bounds(world)

    def update(self, delta_time: float) -> None:
        """Advance the graph, the panels and the grid by ``delta_time`` seconds."""
        self.graph.update(delta_time)
        self.ui_panel.update(delta_time)
        if self.show_algorithm_panel:
            self.algorithm_panel.update(delta_time)
        self.grid.update(delta_time)

    def save_graph(self, filename: str) -> None:
        """Write the graph into the resources directory, logging any failure."""
        try:
            graph_io.save_to_file(self.graph, filename, self.cwd)
        except OSError as exc:
            log.error("could not save graph: %s", exc)
            return
        log.info("graph saved to %s", filename)

    def load_graph(self, filename: str) -> None:
        """Replace the graph with ``filename``, logging any failure."""
        try:
            graph_io.load_from_file(self.graph, filename, self.cwd)
        except (OSError, ValueError) as exc:
            log.error("could not load graph: %s", exc)
            return
        self.selected_node = None
        self.dragged_node = None
        self.ui_panel.set_selected_node(None)
        self.reset_viewport_to_fit_graph()

    def toggle_algorithm_panel(self) -> None:
        """Show or hide the algorithm panel."""
        self.show_algorithm_panel = not self.show_algorithm_panel
        if self.show_algorithm_panel:
            self.algorithm_panel.set_graph(self.graph)

    def update_viewport_bounds(self, point: Point) -> None:
        """Grow the viewport bounds so ``point`` stays well inside them."""
        b = self.viewport.bounds
        left, top, width, height = b.left, b.top, b.width, b.height
        x, y = point
        changed = False

        if x < left + GROW_PADDING:
            width += left - (x - GROW_PADDING)
            left = x - GROW_PADDING
            changed = True
        if x > left + width - GROW_PADDING:
            width = x - left + GROW_PADDING
            changed = True
        if y < top + GROW_PADDING:
            height += top - (y - GROW_PADDING)
            top = y - GROW_PADDING
            changed = True
        if y > top + height - GROW_PADDING:
            height = y - top + GROW_PADDING
            changed = True

        if changed:
            self.viewport.bounds = Rect(left, top, width, height)

    def reset_viewport_to_fit_graph(self) -> None:
        """Fit the bounds around every node and return to the default view."""
        if not self.graph.nodes:
            self.viewport.bounds = self._default_bounds()
            return
        xs = [node.position[0] for node in self.graph.nodes]
        ys = [node.position[1] for node in self.graph.nodes]
        min_x, min_y = min(xs), min(ys)
        self.viewport.bounds = Rect(
            min_x - INITIAL_PADDING,
            min_y - INITIAL_PADDING,
            max(xs) - min_x + 2 * INITIAL_PADDING,
            max(ys) - min_y + 2 * INITIAL_PADDING,
        )
        self.viewport.reset()


def _size(text: str) -> tuple[int, int]:
    try:
        width, height = (int(part) for part in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}") from None
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"size must be positive, got {text!r}")
    return (width, height)


def main(argv: list[str] | None = None) -> int:
    """Start the editor; returns the process exit status."""
    parser = argparse.ArgumentParser(description="Interactive graph editor.")
    parser.add_argument("--windowed", action="store_true", help="do not use full screen")
    parser.add_argument("--size", type=_size, help="window size as WIDTHxHEIGHT")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        pygame.init()
        size = args.size
        if size is None:
            info = pygame.display.Info()
            size = (info.current_w, info.current_h)
        Application(size, fullscreen=not args.windowed).run()
    except Exception as exc:  # noqa: BLE001 - report anything fatal and exit non-zero
        log.critical("fatal error: %s", exc)
        return 1
    return 0