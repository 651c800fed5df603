"""A sliding side panel that lists the connections of the selected node."""

from __future__ import annotations

import logging

import pygame

from graphviz_studio import theme
from graphviz_studio.animation import Animation
from graphviz_studio.button import Button
from graphviz_studio.graph import Graph
from graphviz_studio.node import Node
from graphviz_studio.viewport import Rect

log = logging.getLogger(__name__)

Point = tuple[float, float]

FONT_PATH = "resources/Roboto-Medium.ttf"
TITLE_SIZE = 20
ITEM_SIZE = 16
ITEM_HEIGHT = 30.0
SCROLL_STEP = 30.0
LEFT_BUTTON = 1

BUTTON_X = 10.0
BUTTON_Y = 10.0
BUTTON_SPACING = 50.0
BUTTON_SIZE = (180.0, 40.0)


def _load_font(size: int) -> pygame.font.Font | None:
    try:
        if not pygame.font.get_init():
            pygame.font.init()
        try:
            return pygame.font.Font(FONT_PATH, size)
        except (OSError, pygame.error):
            log.warning("could not load font %s, using the default font", FONT_PATH)
            return pygame.font.Font(None, size)
    except pygame.error:
        return None


class UIPanel:
    """Mode buttons plus a panel that slides in to show a node's neighbours."""

    def __init__(self, width: float, height: float, screen_width: float = 1920.0) -> None:
        self.width = float(width)
        self.height = float(height)
        self.screen_width = float(screen_width)
        self.panel_target_x = self.screen_width - self.width
        self.panel_current_x = self.panel_target_x
        self.graph: Graph | None = None
        self.selected_node: Node | None = None
        self.scroll_offset = 0.0
        self.ordered = False
        self.buttons: list[Button] = [
            Button("Directed Mode", (BUTTON_X, BUTTON_Y), BUTTON_SIZE, self.toggle_directed),
            Button(
                "Unordered Graph",
                (BUTTON_X, BUTTON_Y + BUTTON_SPACING),
                BUTTON_SIZE,
                self.toggle_order,
            ),
        ]
        self._slide: Animation | None = None
        self._title_font: pygame.font.Font | None = None
        self._item_font: pygame.font.Font | None = None
        self._fonts_tried = False

    @property
    def bounds(self) -> Rect:
        """The panel's current area on screen."""
        return Rect(self.panel_current_x, 0.0, self.width, self.height)

    @property
    def scroll_view(self) -> Rect:
        """The area in which the connection list is shown."""
        return Rect(self.panel_current_x + 10.0, 60.0, self.width - 20.0, self.height - 100.0)

    @property
    def title(self) -> str:
        """The heading for the selected node, or an empty string."""
        if self.selected_node is None or self.graph is None:
            return ""
        text = f"Node {self.selected_node.id}"
        if self.graph.directed:
            return text + " Connections (Directed)"
        return text + " Connections" + (" (Ordered)" if self.ordered else "")

    def set_graph(self, graph: Graph | None) -> None:
        """Attach ``graph`` and refresh the mode button."""
        self.graph = graph
        self._update_button_text()

    def set_selected_node(self, node: Node | None) -> None:
        """Show ``node``'s connections, or slide the panel away for ``None``."""
        self.selected_node = node
        self.scroll_offset = 0.0
        start = self.panel_current_x
        end = self.panel_target_x if node is not None else self.screen_width

        def slide(progress: float) -> None:
            self.panel_current_x = start + (end - start) * progress

        self._slide = Animation(theme.ANIMATION_DURATION, slide)

    def toggle_order(self) -> None:
        """Switch between ordered and unordered listing."""
        self.ordered = not self.ordered
        if self.graph is not None:
            self.graph.ordered = self.ordered
        for button in self.buttons:
            if "Graph" in button.text:
                button.text = "Ordered Graph" if self.ordered else "Unordered Graph"
                break

    def toggle_directed(self) -> None:
        """Switch the graph between directed and undirected."""
        if self.graph is None:
            return
        self.graph.directed = not self.graph.directed
        self._update_button_text()

    def _update_button_text(self) -> None:
        if self.graph is None:
            return
        for button in self.buttons:
            if "Mode" in button.text:
                button.text = "Undirected Mode" if self.graph.directed else "Directed Mode"
                break

    def connection_lines(self) -> list[str]:
        """The text lines listing the selected node's connections."""
        node, graph = self.selected_node, self.graph
        if node is None or graph is None:
            return []
        if not graph.directed:
            neighbors = graph.neighbors(node)
            if self.ordered:
                neighbors = sorted(neighbors, key=lambda n: n.id)
            return ["Connected to: " + ", ".join(str(n.id) for n in neighbors)]

        connections: dict[int, tuple[Node, str]] = {}
        for other in graph.outgoing_neighbors(node):
            connections[id(other)] = (other, "->")
        for other in graph.incoming_neighbors(node):
            existing = connections.get(id(other))
            kind = "<->" if existing is not None and existing[1] == "->" else "<-"
            connections[id(other)] = (other, kind)
        entries = list(connections.values())
        if self.ordered:
            entries.sort(key=lambda entry: entry[0].id)
        return [f"{node.id} {kind} {other.id}" for other, kind in entries]

    def max_scroll(self) -> float:
        """How far the connection list can be scrolled."""
        node, graph = self.selected_node, self.graph
        if node is None or graph is None:
            return 0.0
        if graph.directed:
            unique = {id(n) for n in graph.outgoing_neighbors(node)}
            unique.update(id(n) for n in graph.incoming_neighbors(node))
            content = len(unique) * ITEM_HEIGHT
        else:
            content = 2 * ITEM_HEIGHT
        return max(0.0, content - self.scroll_view.height)

    def contains(self, point: Point) -> bool:
        """Whether ``point`` lies on the panel."""
        return self.bounds.contains(point)

    def handle_event(self, event: pygame.event.Event) -> None:
        """Scroll the list, update hover states and click buttons."""
        if event.type == pygame.MOUSEWHEEL and self.selected_node is not None:
            delta = getattr(event, "y", 0)
            self.scroll_offset = max(
                0.0, min(self.scroll_offset - delta * SCROLL_STEP, self.max_scroll())
            )
        if event.type == pygame.MOUSEMOTION:
            for button in self.buttons:
                button.hovered = button.contains(event.pos)
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == LEFT_BUTTON:
            for button in self.buttons:
                if button.contains(event.pos):
                    button.handle_click()
                    break

    def update(self, delta_time: float) -> None:
        """Advance the slide animation."""
        if self._slide is None:
            return
        self._slide.update(delta_time)
        if self._slide.finished:
            self._slide = None

    def _fonts(self) -> tuple[pygame.font.Font | None, pygame.font.Font | None]:
        if not self._fonts_tried:
            self._fonts_tried = True
            self._title_font = _load_font(TITLE_SIZE)
            self._item_font = _load_font(ITEM_SIZE)
        return self._title_font, self._item_font

    def draw(self, surface: pygame.Surface) -> None:
        """Render the buttons, the panel and the selected node's connections."""
        for button in self.buttons:
            button.draw(surface)

        b = self.bounds
        pygame.draw.rect(
            surface,
            tuple(theme.PANEL_BACKGROUND),
            pygame.Rect(round(b.left), round(b.top), round(b.width), round(b.height)),
        )
        if self.selected_node is None or self.graph is None:
            return
        title_font, item_font = self._fonts()
        if title_font is None or item_font is None:
            return

        title = title_font.render(self.title, True, tuple(theme.TEXT_PRIMARY))
        surface.blit(title, (round(self.panel_current_x + 10), 20))

        view = self.scroll_view
        pygame.draw.rect(
            surface,
            tuple(theme.NODE_OUTLINE),
            pygame.Rect(round(view.left), round(view.top), round(view.width), round(view.height)),
            1,
        )

        y = view.top - self.scroll_offset
        for line in self.connection_lines():
            visible = y + ITEM_HEIGHT >= view.top and y <= view.top + view.height
            if visible or not self.graph.directed:
                text = item_font.render(line, True, tuple(theme.TEXT_PRIMARY))
                surface.blit(text, (round(view.left + 20), round(y + 5)))
            y += ITEM_HEIGHT