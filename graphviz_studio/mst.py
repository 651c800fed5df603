"""Step-by-step minimum spanning tree algorithms with visual node state."""

from __future__ import annotations

import heapq
import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Sized

from graphviz_studio import theme
from graphviz_studio.theme import Color


def format_weight(weight: float) -> str:
    return f"{weight:.1f}"


@dataclass(frozen=True)
class WeightedEdge:
    """A weighted edge between two node ids."""

    src: int
    dest: int
    weight: float
    description: str = ""

    def __lt__(self, other: WeightedEdge) -> bool:
        return self.weight < other.weight

    def __gt__(self, other: WeightedEdge) -> bool:
        return self.weight > other.weight


@dataclass
class NodeState:
    """How an algorithm wants a node to be shown."""

    color: Color = theme.MST_UNVISITED
    label: str = ""
    is_highlighted: bool = False
    component_label: str = ""
    pulse_effect: float = 0.0
    scale: float = 1.0


class MSTVisualization:
    """Per-node display state and a numbered log of algorithm steps."""

    def __init__(self) -> None:
        self.node_states: dict[int, NodeState] = {}
        self.algorithm_steps: list[str] = []
        self.current_step = 0

    def get_node_state(self, node_id: int) -> NodeState:
        """The state recorded for ``node_id``, or a default state."""
        state = self.node_states.get(node_id)
        return state if state is not None else NodeState()

    def current_step_description(self) -> str:
        """The step at the current position, or an empty string past the end."""
        if self.current_step < len(self.algorithm_steps):
            return self.algorithm_steps[self.current_step]
        return ""

    def _state(self, node_id: int) -> NodeState:
        return self.node_states.setdefault(node_id, NodeState())

    def _set_node_color(self, node_id: int, color: Color) -> None:
        self._state(node_id).color = color

    def _set_node_label(self, node_id: int, label: str) -> None:
        self._state(node_id).label = label

    def _set_node_highlight(self, node_id: int, highlighted: bool) -> None:
        self._state(node_id).is_highlighted = highlighted

    def _set_component_label(self, node_id: int, label: str) -> None:
        self._state(node_id).component_label = label

    def _set_pulse_effect(self, node_id: int, value: float) -> None:
        self._state(node_id).pulse_effect = value

    def _set_node_scale(self, node_id: int, scale: float) -> None:
        self._state(node_id).scale = scale

    def _add_algorithm_step(self, description: str) -> None:
        self.algorithm_steps.append(f"Step {self.current_step + 1}: {description}")
        self.current_step += 1


class MSTAlgorithm(MSTVisualization, ABC):
    """Base for spanning-tree algorithms built on a union-find structure."""

    name = ""
    description = ""

    def __init__(self) -> None:
        super().__init__()
        self.edges: list[WeightedEdge] = []
        self.mst_edges: list[WeightedEdge] = []
        self.parent: list[int] = []
        self.rank: list[int] = []
        self.finished = False

    def reset(self) -> None:
        """Forget all edges, results and recorded state."""
        self.edges.clear()
        self.mst_edges.clear()
        self.parent.clear()
        self.rank.clear()
        self.node_states.clear()
        self.algorithm_steps.clear()
        self.current_step = 0
        self.finished = False

    def add_edge(self, src: int, dest: int, weight: float) -> None:
        """Register an input edge."""
        weight = float(weight)
        description = f"{src} -> {dest} (weight: {format_weight(weight)})"
        self.edges.append(WeightedEdge(src, dest, weight, description))

    @abstractmethod
    def execute(self, nodes: Sized) -> None:
        """Prepare a run over ``len(nodes)`` nodes numbered from zero."""

    @abstractmethod
    def step(self) -> bool:
        """Advance one step; return whether the algorithm can go on."""

    def _make_set(self, v: int) -> None:
        self.parent[v] = v
        self.rank[v] = 0
        self._set_node_color(v, theme.MST_UNVISITED)
        self._set_component_label(v, f"Component {v}")

    def _find_set(self, v: int) -> int:
        root = v
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[v] != root:
            self.parent[v], v = root, self.parent[v]
        return root

    def _union_sets(self, a: int, b: int) -> None:
        a = self._find_set(a)
        b = self._find_set(b)
        if a == b:
            return
        if self.rank[a] < self.rank[b]:
            a, b = b, a
        self.parent[b] = a
        if self.rank[a] == self.rank[b]:
            self.rank[a] += 1
        for i in range(len(self.parent)):
            if self._find_set(i) == a:
                self._set_component_label(i, f"Component {a}")

    def _init_sets(self, count: int) -> None:
        self.parent = [0] * count
        self.rank = [0] * count


class _KruskalPhase(Enum):
    INIT = auto()
    SORTING = auto()
    PROCESSING = auto()
    FINALIZING = auto()
    COMPLETE = auto()


class KruskalMST(MSTAlgorithm):
    """Kruskal's algorithm: take the lightest edge that closes no cycle."""

    name = "Kruskal's MST"
    description = (
        "Finds MST by repeatedly selecting the minimum weight edge that doesn't create a cycle"
    )

    def __init__(self) -> None:
        super().__init__()
        self._queue: list[tuple[float, int, WeightedEdge]] = []
        self._counter = itertools.count()
        self._all_edges: list[WeightedEdge] = []
        self._current_edge: WeightedEdge | None = None
        self._initialized = False
        self.total_weight = 0.0
        self.summary = ""
        self._phase = _KruskalPhase.INIT

    def _fill_queue(self, edges: list[WeightedEdge]) -> None:
        self._queue = []
        for edge in edges:
            heapq.heappush(self._queue, (edge.weight, next(self._counter), edge))

    def execute(self, nodes: Sized) -> None:
        count = len(nodes)
        self._init_sets(count)
        self.mst_edges.clear()
        self.node_states.clear()
        self.algorithm_steps.clear()
        self.current_step = 0
        self._current_edge = None
        self.total_weight = 0.0
        self.summary = ""

        for i in range(count):
            self._make_set(i)
            self._set_node_color(i, theme.MST_UNVISITED)
            self._set_node_highlight(i, False)
            self._set_pulse_effect(i, 0.0)

        self._all_edges = list(self.edges)
        self._fill_queue(self._all_edges)

        self._phase = _KruskalPhase.INIT
        self._initialized = False
        self.finished = False
        self._add_algorithm_step(
            f"Initialized with {count} nodes and {len(self.edges)} edges"
        )

    def step(self) -> bool:
        if self.finished:
            self._reset_for_next_iteration()
            return True

        handlers = {
            _KruskalPhase.INIT: self._handle_init,
            _KruskalPhase.SORTING: self._handle_sorting,
            _KruskalPhase.PROCESSING: self._handle_processing,
            _KruskalPhase.FINALIZING: self._handle_finalizing,
            _KruskalPhase.COMPLETE: self._handle_complete,
        }
        handlers[self._phase]()
        return True

    def reset(self) -> None:
        super().reset()
        self._queue = []
        self._all_edges = []
        self._current_edge = None
        self.total_weight = 0.0
        self.summary = ""
        self._phase = _KruskalPhase.INIT
        self._initialized = False
        self.finished = False

    def _handle_init(self) -> None:
        if not self._initialized:
            self._initialized = True
            self._phase = _KruskalPhase.SORTING
            self._add_algorithm_step("Sorting edges by weight...")

    def _handle_sorting(self) -> None:
        if not self._queue:
            self._phase = _KruskalPhase.FINALIZING
            return
        if self._current_edge is not None:
            self._update_node_colors(self._current_edge, False)
        _, _, edge = heapq.heappop(self._queue)
        self._current_edge = edge
        self._update_node_colors(edge, True)
        self._add_algorithm_step(f"Considering edge {edge.description}")
        self._phase = _KruskalPhase.PROCESSING

    def _handle_processing(self) -> None:
        edge = self._current_edge
        if edge is None:
            return
        set1 = self._find_set(edge.src)
        set2 = self._find_set(edge.dest)
        if set1 != set2:
            self._union_sets(set1, set2)
            self.mst_edges.append(edge)
            self.total_weight += edge.weight
            for node_id in (edge.src, edge.dest):
                self._set_node_color(node_id, theme.MST_IN_MST)
                self._set_pulse_effect(node_id, 1.0)
            self._add_algorithm_step(f"Added {self._format_edge_info(edge)}")
        else:
            self._set_node_color(edge.src, theme.MST_REJECTED)
            self._set_node_color(edge.dest, theme.MST_REJECTED)
            self._add_algorithm_step(
                f"Skipped edge {edge.description} (would create cycle)"
            )
        self._current_edge = None
        self._phase = _KruskalPhase.SORTING

    def _handle_finalizing(self) -> None:
        for edge in self.mst_edges:
            for node_id in (edge.src, edge.dest):
                self._set_node_color(node_id, theme.MST_IN_MST)
                self._set_pulse_effect(node_id, 0.0)

        # The line breaks are kept as literal backslash-n sequences.
        parts = [f"MST Path ({len(self.mst_edges)} edges):\\n"]
        parts.extend(f"{self._format_edge_info(edge)}\\n" for edge in self.mst_edges)
        parts.append(f"Total weight: {format_weight(self.total_weight)}")
        self.summary = "".join(parts)

        self._add_algorithm_step(self.summary)
        self._phase = _KruskalPhase.COMPLETE

    def _handle_complete(self) -> None:
        self.finished = True

    @staticmethod
    def _format_edge_info(edge: WeightedEdge) -> str:
        return (
            f"Edge {edge.src} -> {edge.dest} (weight: {format_weight(edge.weight)})"
        )

    def _update_node_colors(self, edge: WeightedEdge, highlight: bool) -> None:
        if highlight:
            for node_id in (edge.src, edge.dest):
                self._set_node_color(node_id, theme.MST_CONSIDERING)
                self._set_node_highlight(node_id, True)
            return
        src_in = self._is_node_in_mst(edge.src)
        dest_in = self._is_node_in_mst(edge.dest)
        self._set_node_color(edge.src, theme.MST_IN_MST if src_in else theme.MST_UNVISITED)
        self._set_node_color(edge.dest, theme.MST_IN_MST if dest_in else theme.MST_UNVISITED)
        self._set_node_highlight(edge.src, False)
        self._set_node_highlight(edge.dest, False)
        if src_in or dest_in:
            self._set_pulse_effect(edge.src, 1.0)
            self._set_pulse_effect(edge.dest, 1.0)

    def _is_node_in_mst(self, node_id: int) -> bool:
        return any(e.src == node_id or e.dest == node_id for e in self.mst_edges)

    def _reset_for_next_iteration(self) -> None:
        for i in range(len(self.parent)):
            self._make_set(i)
            self._set_node_color(i, theme.MST_UNVISITED)
            self._set_node_highlight(i, False)
            self._set_pulse_effect(i, 0.0)

        self.mst_edges.clear()
        self._fill_queue(self._all_edges)
        self._current_edge = None
        self.total_weight = 0.0
        self.summary = ""
        self._phase = _KruskalPhase.INIT
        self._initialized = False
        self.finished = False
        self._add_algorithm_step("Starting new iteration")


class _BoruvkaPhase(Enum):
    INIT = auto()
    FINDING_EDGES = auto()
    MERGING_COMPONENTS = auto()
    PHASE_COMPLETE = auto()


class BoruvkaMST(MSTAlgorithm):
    """Boruvka's algorithm: every component grows along its cheapest edge."""

    name = "Boruvka's MST"
    description = (
        "Finds MST by simultaneously growing all components using their cheapest edges"
    )

    def __init__(self) -> None:
        super().__init__()
        self.cheapest: list[WeightedEdge | None] = []
        self.remaining_components = 0
        self.current_phase = 0
        self._component_index = 0
        self._phase = _BoruvkaPhase.INIT

    def execute(self, nodes: Sized) -> None:
        count = len(nodes)
        self._init_sets(count)
        self.mst_edges.clear()
        self.node_states.clear()
        self.algorithm_steps.clear()
        self.current_step = 0

        for i in range(count):
            self._make_set(i)
            self._set_node_color(i, theme.MST_UNVISITED)
            self._set_component_label(i, f"Component {i}")

        self.cheapest = [None] * count
        self.remaining_components = count
        self.current_phase = 1
        self._component_index = 0
        self._phase = _BoruvkaPhase.INIT
        self.finished = False

        self._add_algorithm_step(
            f"Phase {self.current_phase} initialized with "
            f"{self.remaining_components} components"
        )

    def step(self) -> bool:
        if self.finished:
            return False
        handlers = {
            _BoruvkaPhase.INIT: self._initialize_phase,
            _BoruvkaPhase.FINDING_EDGES: self._find_cheapest_edges,
            _BoruvkaPhase.MERGING_COMPONENTS: self._merge_components,
            _BoruvkaPhase.PHASE_COMPLETE: self._complete_phase,
        }
        handlers[self._phase]()
        return not self.finished

    def _initialize_phase(self) -> None:
        self.cheapest = [None] * len(self.cheapest)
        for node_id, state in self.node_states.items():
            state.is_highlighted = False
            self._set_node_color(node_id, theme.MST_PROCESSING)
        self._phase = _BoruvkaPhase.FINDING_EDGES
        self._component_index = 0
        self._add_algorithm_step("Finding cheapest edges for each component...")

    def _find_cheapest_edges(self) -> None:
        if self._component_index >= len(self.parent):
            self._phase = _BoruvkaPhase.MERGING_COMPONENTS
            self._component_index = 0
            return

        current_set = self._find_set(self._component_index)
        for i in range(len(self.parent)):
            if self._find_set(i) == current_set:
                self._set_node_color(i, theme.MST_CURRENT)
                self._set_node_highlight(i, True)

        best: WeightedEdge | None = None
        for edge in self.edges:
            if (
                self._find_set(edge.src) == current_set
                and self._find_set(edge.dest) != current_set
                and (best is None or edge.weight < best.weight)
            ):
                best = edge

        if best is not None:
            self.cheapest[current_set] = best
            self._set_node_color(best.dest, theme.MST_CONSIDERING)
            self._add_algorithm_step(
                f"Found cheapest edge for component {current_set}: {best.description}"
            )

        self._component_index += 1

    def _merge_components(self) -> None:
        for edge in self.cheapest:
            if edge is None:
                continue
            set1 = self._find_set(edge.src)
            set2 = self._find_set(edge.dest)
            if set1 == set2:
                continue
            self._union_sets(set1, set2)
            self.mst_edges.append(edge)
            self.remaining_components -= 1

            new_set = self._find_set(set1)
            for j in range(len(self.parent)):
                if self._find_set(j) == new_set:
                    self._set_node_color(j, theme.MST_IN_MST)
                    self._set_component_label(j, f"Component {new_set}")
                    self._set_pulse_effect(j, 1.0)

            self._add_algorithm_step(
                f"Merged components {set1} and {set2} using edge {edge.description}"
            )

        self._phase = _BoruvkaPhase.PHASE_COMPLETE

    def _complete_phase(self) -> None:
        if self.remaining_components <= 1 or not self._has_unconnected_components():
            self.finished = True
            self._add_algorithm_step(
                f"Algorithm completed! Final MST has {len(self.mst_edges)} edges in "
                f"{self.remaining_components} component(s)"
            )
        else:
            self.current_phase += 1
            self._phase = _BoruvkaPhase.INIT
            self._add_algorithm_step(
                f"Starting Phase {self.current_phase} with "
                f"{self.remaining_components} components remaining"
            )

    def _has_unconnected_components(self) -> bool:
        if not self.parent:
            return False
        first = self._find_set(0)
        return any(self._find_set(i) != first for i in range(1, len(self.parent)))