"""Generic step-wise graph algorithm interfaces and simple implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence


class GraphAlgorithm(ABC):
    """An algorithm over a list of nodes that advances one step at a time."""

    name = ""
    description = ""

    @abstractmethod
    def execute(self, nodes: Sequence[Any]) -> None:
        """Bind the algorithm to ``nodes`` and prepare a fresh run."""

    @abstractmethod
    def reset(self) -> None:
        """Return to the state right after :meth:`execute`."""

    @abstractmethod
    def is_finished(self) -> bool:
        """Whether the run has reached its end."""

    @abstractmethod
    def step(self) -> bool:
        """Advance once; return whether more work was done."""


class MinimumSpanningTree(GraphAlgorithm):
    """Counts through the ``n - 1`` edges a spanning tree of ``n`` nodes has."""

    name = "Minimum Spanning Tree"
    description = "Finds the minimum spanning tree using Kruskal's algorithm"

    def __init__(self) -> None:
        self.nodes: Sequence[Any] | None = None
        self.mst_edges: list[tuple[Any, Any]] = []
        self.visited: list[bool] = []
        self.current_edge = 0
        self._initialized = False
        self._finished = False

    def _clear(self) -> None:
        self.mst_edges.clear()
        self.visited.clear()
        self._initialized = False
        self._finished = False
        self.current_edge = 0

    def execute(self, nodes: Sequence[Any]) -> None:
        self.nodes = nodes
        self._clear()

    def reset(self) -> None:
        if self.nodes is not None:
            self._clear()

    def is_finished(self) -> bool:
        return self._finished

    def step(self) -> bool:
        if not self._initialized:
            self._initialize()
            return True
        if self._finished:
            return False
        return self._advance()

    def _initialize(self) -> None:
        if not self.nodes:
            return
        self.visited = [False] * len(self.nodes)
        self._initialized = True

    def _advance(self) -> bool:
        if self.current_edge >= len(self.nodes) - 1:
            self._finished = True
            return False
        self.current_edge += 1
        return True


class PathFindingAlgorithm(ABC):
    """A step-wise path-finding algorithm."""

    @abstractmethod
    def reset(self) -> None:
        """Start over."""

    @abstractmethod
    def step(self) -> bool:
        """Advance once; return whether the step succeeded."""

    @abstractmethod
    def is_finished(self) -> bool:
        """Whether the search has ended."""


class Dijkstra(PathFindingAlgorithm):
    """Shortest-path search with no search space: it is always done."""

    def __init__(self) -> None:
        self.steps_taken = 0

    def reset(self) -> None:
        self.steps_taken = 0

    def step(self) -> bool:
        self.steps_taken += 1
        return True

    def is_finished(self) -> bool:
        return True