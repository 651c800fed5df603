import pytest

from graphviz_studio.graph_algorithm import (
    Dijkstra,
    GraphAlgorithm,
    MinimumSpanningTree,
    PathFindingAlgorithm,
)


def test_mst_name_and_description():
    algorithm = MinimumSpanningTree()
    assert algorithm.name == "Minimum Spanning Tree"
    assert algorithm.description == "Finds the minimum spanning tree using Kruskal's algorithm"


def test_step_before_execute_never_finishes():
    algorithm = MinimumSpanningTree()
    assert [algorithm.step() for _ in range(3)] == [True, True, True]
    assert algorithm.is_finished() is False


def test_run_over_three_nodes():
    algorithm = MinimumSpanningTree()
    algorithm.execute(["a", "b", "c"])
    assert [algorithm.step() for _ in range(4)] == [True, True, True, False]
    assert algorithm.is_finished() is True
    assert algorithm.current_edge == 2
    assert algorithm.step() is False


def test_initialization_marks_nodes_unvisited():
    algorithm = MinimumSpanningTree()
    algorithm.execute(["a", "b"])
    algorithm.step()
    assert algorithm.visited == [False, False]


def test_empty_node_list_never_finishes():
    algorithm = MinimumSpanningTree()
    algorithm.execute([])
    assert all(algorithm.step() for _ in range(5))
    assert algorithm.is_finished() is False


def test_reset_starts_over():
    algorithm = MinimumSpanningTree()
    algorithm.execute(["a", "b"])
    while algorithm.step():
        pass
    assert algorithm.is_finished() is True
    algorithm.reset()
    assert algorithm.is_finished() is False
    assert algorithm.current_edge == 0
    assert algorithm.visited == []


def test_execute_again_clears_previous_run():
    algorithm = MinimumSpanningTree()
    algorithm.execute(["a", "b"])
    while algorithm.step():
        pass
    algorithm.execute(["a", "b", "c", "d"])
    assert algorithm.is_finished() is False
    steps = 0
    while algorithm.step():
        steps += 1
    assert steps == 4


def test_dijkstra_is_always_finished():
    search = Dijkstra()
    search.reset()
    assert search.step() is True
    assert search.is_finished() is True


@pytest.mark.parametrize("cls", [GraphAlgorithm, PathFindingAlgorithm])
def test_interfaces_are_abstract(cls):
    with pytest.raises(TypeError):
        cls()