import random

import pytest

from graphviz_studio.graph import Graph
from graphviz_studio.graph_io import (
    find_resources_dir,
    load_from_file,
    read_graph,
    save_to_file,
    write_graph,
)


def edge_list(graph):
    return [(e.start_node.id, e.end_node.id, e.weight) for e in graph.edges]


def test_read_graph_nodes_and_edges():
    graph = Graph()
    read_graph(graph, ["3\n", "0 1:2.5 2\n", "1 2:4\n", "2\n"], random.Random(1))
    assert [n.id for n in graph.nodes] == [0, 1, 2]
    assert edge_list(graph) == [(0, 1, 2.5), (0, 2, None), (1, 2, 4.0)]


def test_read_graph_positions_in_range():
    graph = Graph()
    read_graph(graph, ["20"], random.Random(7))
    assert len(graph.nodes) == 20
    for node in graph.nodes:
        x, y = node.position
        assert 200.0 <= x <= 800.0
        assert 200.0 <= y <= 600.0


def test_read_graph_replaces_existing_content():
    graph = Graph()
    graph.add_node(0, 0, 42)
    read_graph(graph, ["1"], random.Random(0))
    assert [n.id for n in graph.nodes] == [0]
    assert 42 not in graph.node_map


def test_read_graph_ignores_blank_lines_and_unknown_ids():
    graph = Graph()
    read_graph(graph, ["2", "", "   ", "0 1 5", "9 0"], random.Random(0))
    assert edge_list(graph) == [(0, 1, None)]


def test_read_graph_bad_target_raises():
    graph = Graph()
    with pytest.raises(ValueError):
        read_graph(graph, ["2", "0 x"], random.Random(0))


def test_read_graph_empty_input_gives_empty_graph():
    graph = Graph()
    graph.add_node(1, 1)
    read_graph(graph, [], random.Random(0))
    assert graph.nodes == []


def test_write_graph_format():
    graph = Graph()
    graph.add_node(0, 0, 0)
    graph.add_node(100, 0, 1)
    graph.add_edge_by_id(0, 1, 2.5)
    assert write_graph(graph) == "2\n0 1:2.5\n1\n"


def test_write_then_read_round_trip():
    graph = Graph()
    for i in range(4):
        graph.add_node(i * 100, 0, i)
    graph.add_edge_by_id(0, 1, 1.5)
    graph.add_edge_by_id(0, 3)
    graph.add_edge_by_id(2, 1, 7)
    text = write_graph(graph)

    copy = Graph()
    read_graph(copy, text.splitlines(keepends=True), random.Random(3))
    assert sorted(edge_list(copy), key=str) == sorted(edge_list(graph), key=str)
    assert write_graph(copy) == text


def test_find_resources_dir_in_start(tmp_path):
    (tmp_path / "resources").mkdir()
    assert find_resources_dir(tmp_path) == tmp_path / "resources"


def test_find_resources_dir_in_parent(tmp_path):
    (tmp_path / "resources").mkdir()
    child = tmp_path / "build"
    child.mkdir()
    assert find_resources_dir(child) == child.parent / "resources"


def test_find_resources_dir_missing(tmp_path):
    start = tmp_path / "a" / "b"
    start.mkdir(parents=True)
    with pytest.raises(FileNotFoundError):
        find_resources_dir(start)


def test_load_missing_file_raises(tmp_path):
    (tmp_path / "resources").mkdir()
    with pytest.raises(FileNotFoundError):
        load_from_file(Graph(), "input.txt", tmp_path)


def test_load_from_file(tmp_path):
    resources = tmp_path / "resources"
    resources.mkdir()
    (resources / "input.txt").write_text("2\n0 1:3.5\n1\n", encoding="utf-8")
    graph = Graph()
    path = load_from_file(graph, "input.txt", tmp_path)
    assert path == resources / "input.txt"
    assert edge_list(graph) == [(0, 1, 3.5)]


def test_save_and_load_round_trip(tmp_path):
    (tmp_path / "resources").mkdir()
    graph = Graph()
    for i in range(3):
        graph.add_node(i * 100, 50, i)
    graph.add_edge_by_id(1, 2, 0.5)
    graph.add_edge_by_id(2, 0)
    save_to_file(graph, "output.txt", tmp_path)

    loaded = Graph()
    load_from_file(loaded, "output.txt", tmp_path)
    assert edge_list(loaded) == edge_list(graph)
    assert len(loaded.nodes) == 3


def test_save_without_resources_dir_raises(tmp_path):
    with pytest.raises(OSError):
        save_to_file(Graph(), "output.txt", tmp_path)