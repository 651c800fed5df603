import math

import pygame
import pytest

from graphviz_studio import theme
from graphviz_studio.graph import Graph
from graphviz_studio.viewport import ViewportManager


def distance(a, b):
    return math.hypot(a.position[0] - b.position[0], a.position[1] - b.position[1])


def test_add_node_assigns_sequential_ids():
    g = Graph()
    a = g.add_node(1, 2)
    b = g.add_node(3, 4)
    assert (a.id, b.id) == (0, 1)
    assert g.node_map[1] is b
    assert a.position == (1.0, 2.0)


def test_add_node_with_explicit_id():
    g = Graph()
    node = g.add_node(0, 0, 42)
    assert node.id == 42
    assert g.node_map[42] is node


def test_add_edge_rejects_duplicates_and_self_loops():
    g = Graph()
    a, b = g.add_node(0, 0), g.add_node(100, 0)
    g.add_edge(a, b)
    g.add_edge(a, b)
    g.add_edge(a, a)
    g.add_edge(None, b)
    assert len(g.edges) == 1
    g.add_edge(b, a)
    assert len(g.edges) == 2


def test_add_edge_by_id_with_weight_and_unknown_ids():
    g = Graph()
    g.add_node(0, 0)
    g.add_node(100, 0)
    g.add_edge_by_id(0, 1, 2.5)
    g.add_edge_by_id(0, 7)
    assert len(g.edges) == 1
    assert g.edges[0].weight == 2.5


def test_directed_flag_reaches_edges():
    g = Graph()
    a, b = g.add_node(0, 0), g.add_node(100, 0)
    g.add_edge(a, b)
    g.directed = True
    assert g.edges[0].directed
    assert g.edges[0].show_arrow
    g.add_edge(b, a)
    assert g.edges[1].directed
    g.directed = False
    assert not any(e.show_arrow for e in g.edges)


def test_ordered_flag_shows_arrows():
    g = Graph()
    a, b = g.add_node(0, 0), g.add_node(100, 0)
    g.add_edge(a, b)
    g.ordered = True
    assert g.edges[0].show_arrow
    assert not g.edges[0].directed
    g.ordered = False
    assert not g.edges[0].show_arrow


def test_neighbors_undirected_and_directed():
    g = Graph()
    a, b, c = g.add_node(0, 0), g.add_node(100, 0), g.add_node(0, 100)
    g.add_edge(a, b)
    g.add_edge(c, a)
    assert g.neighbors(a) == [b, c]
    assert g.outgoing_neighbors(a) == [b]
    assert g.incoming_neighbors(a) == [c]
    g.directed = True
    assert g.neighbors(a) == [b]


def test_delete_node_removes_edges_and_id():
    g = Graph()
    a, b, c = g.add_node(0, 0), g.add_node(100, 0), g.add_node(0, 100)
    g.add_edge(a, b)
    g.add_edge(b, c)
    g.add_edge(a, c)
    g.delete_node(b)
    assert g.nodes == [a, c]
    assert all(not e.is_connected_to(b) for e in g.edges)
    assert len(g.edges) == 1
    assert 1 not in g.node_map
    g.add_edge_by_id(1, 0)
    assert len(g.edges) == 1


def test_find_node_at_needs_viewport():
    g = Graph()
    g.add_node(0, 0)
    assert g.find_node_at((0, 0)) is None


def test_find_node_at_uses_zoom():
    g = Graph()
    node = g.add_node(0, 0)
    vm = ViewportManager((800, 600))
    g.viewport_manager = vm
    assert g.find_node_at((10, 10)) is node
    assert g.find_node_at((theme.NODE_RADIUS + 2, 0)) is None
    vm.zoom_at(400, 300, -1)
    assert g.find_node_at((theme.NODE_RADIUS + 2, 0)) is node


def test_spring_pulls_connected_nodes_together():
    g = Graph()
    a, b = g.add_node(0, 0), g.add_node(1000, 0)
    g.add_edge(a, b)
    before = distance(a, b)
    g.update(0.1)
    assert distance(a, b) < before
    assert a.position[1] == pytest.approx(0.0)


def test_overlapping_nodes_are_pushed_apart():
    g = Graph()
    a, b = g.add_node(0, 0), g.add_node(10, 0)
    g.update(0.1)
    assert a.position[0] < 0
    assert b.position[0] > 10


def test_layout_step_is_bounded():
    g = Graph()
    a, b = g.add_node(0, 0), g.add_node(1, 0)
    dt = 0.5
    g.update(dt)
    limit = a.radius * 5.0 * 0.8 * dt
    assert math.hypot(a.position[0], a.position[1]) <= limit + 1e-6
    assert math.hypot(b.position[0] - 1, b.position[1]) <= limit + 1e-6


def test_distant_unconnected_nodes_stay_still():
    g = Graph()
    a, b = g.add_node(0, 0), g.add_node(500, 500)
    g.update(0.1)
    assert a.position == (0.0, 0.0)
    assert b.position == (500.0, 500.0)


def test_clear():
    g = Graph()
    a, b = g.add_node(0, 0), g.add_node(100, 0)
    g.add_edge(a, b)
    g.clear()
    assert (g.nodes, g.edges, g.node_map) == ([], [], {})


def test_draw_paints_node_fill():
    g = Graph()
    g.add_node(100, 100)
    surface = pygame.Surface((200, 200))
    surface.fill((0, 0, 0))
    g.draw(surface, lambda p: p)
    assert tuple(surface.get_at((125, 100)))[:3] == tuple(theme.NODE_FILL)[:3]