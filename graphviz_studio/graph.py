"""A graph of nodes and edges with a force-directed layout."""

from __future__ import annotations

import math
from itertools import combinations
from typing import Callable

import pygame

from graphviz_studio import theme
from graphviz_studio.edge import Edge
from graphviz_studio.node import Node
from graphviz_studio.viewport import ViewportManager

Point = tuple[float, float]
ToScreen = Callable[[Point], Point]

SPRING_CONSTANT = 50.0
DAMPING = 0.8


class Graph:
    """Nodes and edges, with direction and ordering flags shared by all edges."""

    def __init__(self) -> None:
        self.nodes: list[Node] = []
        self.edges: list[Edge] = []
        self.node_map: dict[int, Node] = {}
        self.algorithm_mode = False
        self.viewport_manager: ViewportManager | None = None
        self._directed = False
        self._ordered = False

    @property
    def directed(self) -> bool:
        return self._directed

    @directed.setter
    def directed(self, value: bool) -> None:
        self._directed = value
        for edge in self.edges:
            edge.directed = value
            edge.show_arrow = self._ordered or value

    @property
    def ordered(self) -> bool:
        return self._ordered

    @ordered.setter
    def ordered(self, value: bool) -> None:
        self._ordered = value
        for edge in self.edges:
            edge.show_arrow = value or self._directed

    def add_node(self, x: float, y: float, node_id: int | None = None) -> Node:
        """Add a node; without an id it takes the current node count."""
        if node_id is None:
            node_id = len(self.nodes)
        node = Node(x, y, node_id)
        self.nodes.append(node)
        self.node_map[node_id] = node
        return node

    def add_edge(self, start: Node | None, end: Node | None, weight: float | None = None) -> None:
        """Connect two distinct nodes unless that exact edge already exists."""
        if start is None or end is None or start is end:
            return
        if any(e.start_node is start and e.end_node is end for e in self.edges):
            return
        edge = Edge(start, end, self._directed, weight)
        edge.show_arrow = self._ordered or self._directed
        self.edges.append(edge)

    def add_edge_by_id(self, start_id: int, end_id: int, weight: float | None = None) -> None:
        """Connect the nodes with these ids if both exist."""
        start = self.node_map.get(start_id)
        end = self.node_map.get(end_id)
        if start is not None and end is not None:
            self.add_edge(start, end, weight)

    def find_node_at(self, world_pos: Point) -> Node | None:
        """The first node within the zoom-scaled radius of ``world_pos``."""
        if self.viewport_manager is None:
            return None
        radius = theme.NODE_RADIUS * self.viewport_manager.zoom_level
        for node in self.nodes:
            dx = world_pos[0] - node.position[0]
            dy = world_pos[1] - node.position[1]
            if dx * dx + dy * dy <= radius * radius:
                return node
        return None

    def update(self, delta_time: float) -> None:
        """Advance animations and move nodes by one layout step."""
        for node in self.nodes:
            node.update(delta_time)
        for edge in self.edges:
            edge.update()
        self._apply_force_directed_layout(delta_time)

    def draw(self, surface: pygame.Surface, to_screen: ToScreen) -> None:
        """Render edges, then nodes on top."""
        for edge in self.edges:
            edge.draw(surface, to_screen)
        for node in self.nodes:
            node.draw(surface, to_screen)

    def delete_node(self, node: Node | None) -> None:
        """Remove ``node`` and every edge touching it."""
        if node is None:
            return
        self.edges = [e for e in self.edges if not e.is_connected_to(node)]
        self.nodes = [n for n in self.nodes if n is not node]
        self.node_map = {k: v for k, v in self.node_map.items() if v is not node}

    def neighbors(self, node: Node) -> list[Node]:
        """Adjacent nodes; incoming edges count only when undirected."""
        result = []
        for edge in self.edges:
            if edge.start_node is node:
                result.append(edge.end_node)
            elif not self._directed and edge.end_node is node:
                result.append(edge.start_node)
        return result

    def outgoing_neighbors(self, node: Node) -> list[Node]:
        """Nodes reached by edges starting at ``node``."""
        return [e.end_node for e in self.edges if e.start_node is node]

    def incoming_neighbors(self, node: Node) -> list[Node]:
        """Nodes with edges ending at ``node``."""
        return [e.start_node for e in self.edges if e.end_node is node]

    def clear(self) -> None:
        """Remove all nodes and edges."""
        self.nodes.clear()
        self.edges.clear()
        self.node_map.clear()

    def _apply_force_directed_layout(self, delta_time: float) -> None:
        if not self.nodes:
            return

        first_radius = self.nodes[0].radius
        base_repulsion = (
            1_000_000.0 * (first_radius * 5.0) if self.algorithm_mode else 100_000.0
        )
        forces = [[0.0, 0.0] for _ in self.nodes]

        for (i, a), (j, b) in combinations(enumerate(self.nodes), 2):
            dx = a.position[0] - b.position[0]
            dy = a.position[1] - b.position[1]
            distance = math.hypot(dx, dy)
            if distance <= 0:
                continue
            radius = a.radius
            if distance < radius:
                factor = 2.0
            elif distance < 2.0 * radius:
                t = (distance - radius) / radius
                factor = 2.0 * (1.0 - t * t)
            else:
                factor = 0.0
            if factor <= 0:
                continue
            magnitude = base_repulsion * factor / (distance * distance)
            if distance < radius:
                magnitude *= 2.0
            fx = dx / distance * magnitude
            fy = dy / distance * magnitude
            forces[i][0] += fx
            forces[i][1] += fy
            forces[j][0] -= fx
            forces[j][1] -= fy

        index = {id(node): i for i, node in enumerate(self.nodes)}
        for edge in self.edges:
            si = index.get(id(edge.start_node))
            ei = index.get(id(edge.end_node))
            if si is None or ei is None:
                continue
            dx = edge.start_node.position[0] - edge.end_node.position[0]
            dy = edge.start_node.position[1] - edge.end_node.position[1]
            distance = math.hypot(dx, dy)
            if distance <= 0:
                continue
            ideal = first_radius * (8.0 if self.algorithm_mode else 4.0)
            if edge.weight is not None:
                ideal *= 1.0 + edge.weight * 0.1
            stretch = (distance - ideal) / distance * SPRING_CONSTANT * delta_time
            forces[si][0] -= dx * stretch
            forces[si][1] -= dy * stretch
            forces[ei][0] += dx * stretch
            forces[ei][1] += dy * stretch

        for node, (fx, fy) in zip(self.nodes, forces):
            max_force = node.radius * 5.0
            magnitude = math.hypot(fx, fy)
            if magnitude > max_force:
                fx *= max_force / magnitude
                fy *= max_force / magnitude
            x, y = node.position
            node.position = (x + fx * DAMPING * delta_time, y + fy * DAMPING * delta_time)