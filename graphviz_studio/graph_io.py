"""Reading and writing graphs in the adjacency-list text format.

The format is a node count on the first line, then one line per node:
the node id followed by its targets, each optionally suffixed with
``:weight``.
"""

from __future__ import annotations

import logging
import random
import re
from pathlib import Path
from typing import Iterable

from graphviz_studio.graph import Graph

log = logging.getLogger(__name__)

RESOURCES_DIR = "resources"
X_RANGE = (200.0, 800.0)
Y_RANGE = (200.0, 600.0)

_LEADING_INT = re.compile(r"\s*[+-]?\d+")
_LEADING_FLOAT = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    return int(match.group())


def _leading_float(text: str) -> float:
    match = _LEADING_FLOAT.match(text)
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    return float(match.group())


def find_resources_dir(start: str | Path | None = None) -> Path:
    """The ``resources`` directory in ``start`` or, failing that, its parent."""
    base = Path(start) if start is not None else Path.cwd()
    candidate = base / RESOURCES_DIR
    log.debug("looking for resources directory at %s", candidate)
    if candidate.exists():
        return candidate
    log.warning("resources directory not found at %s", candidate)
    candidate = base.parent / RESOURCES_DIR
    log.debug("trying parent directory resources: %s", candidate)
    if candidate.exists():
        return candidate
    raise FileNotFoundError("Resources directory not found")


def read_graph(
    graph: Graph, lines: Iterable[str], rng: random.Random | None = None
) -> None:
    """Replace the contents of ``graph`` with the graph described by ``lines``.

    Nodes are placed at random positions drawn from ``rng``.
    """
    rng = rng if rng is not None else random.Random()
    graph.clear()

    rows = iter(lines)
    count = 0
    for line in rows:
        tokens = line.split()
        if tokens:
            count = _leading_int(tokens[0])
            break
    log.info("loading graph with %d nodes", count)

    for node_id in range(count):
        x = rng.uniform(*X_RANGE)
        y = rng.uniform(*Y_RANGE)
        graph.add_node(x, y, node_id)

    for line in rows:
        tokens = line.split()
        if not tokens:
            continue
        try:
            source = _leading_int(tokens[0])
        except ValueError:
            continue
        for token in tokens[1:]:
            target_text, separator, weight_text = token.partition(":")
            target = _leading_int(target_text)
            weight = _leading_float(weight_text) if separator else None
            graph.add_edge_by_id(source, target, weight)
            log.debug("added edge %d -> %d with weight %s", source, target, weight)


def write_graph(graph: Graph) -> str:
    """The text form of ``graph``."""
    rows = [f"{len(graph.nodes)}\n"]
    for node in graph.nodes:
        parts = [str(node.id)]
        for edge in graph.edges:
            if edge.start_node is node:
                target = str(edge.end_node.id)
                if edge.weight is not None:
                    target += f":{edge.weight:g}"
                parts.append(target)
        rows.append(" ".join(parts) + "\n")
    return "".join(rows)


def load_from_file(
    graph: Graph, filename: str, cwd: str | Path | None = None
) -> Path:
    """Load ``filename`` from the resources directory into ``graph``."""
    path = find_resources_dir(cwd) / filename
    log.debug("looking for file at %s", path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    try:
        with path.open(encoding="utf-8") as handle:
            read_graph(graph, handle)
    except OSError as exc:
        raise OSError(f"Could not open file: {path}") from exc
    log.info("successfully loaded graph from %s", path)
    return path


def save_to_file(graph: Graph, filename: str, cwd: str | Path | None = None) -> Path:
    """Write ``graph`` to ``filename`` in the ``resources`` directory of ``cwd``."""
    base = Path(cwd) if cwd is not None else Path.cwd()
    path = base / RESOURCES_DIR / filename
    log.info("saving to file at %s", path)
    try:
        path.write_text(write_graph(graph), encoding="utf-8")
    except OSError as exc:
        raise OSError(f"Could not open file for writing: {path}") from exc
    return path