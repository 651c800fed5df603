"""Loading road maps stored as XML node and arc lists."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from graphviz_studio.graph import Graph
from graphviz_studio.node import Node

log = logging.getLogger(__name__)

PADDING = 50.0


@dataclass(frozen=True)
class MapNode:
    """A map location."""

    id: int
    latitude: float
    longitude: float


@dataclass(frozen=True)
class MapArc:
    """A road between two map locations."""

    source: int
    target: int
    length: int


def to_screen(
    lat: float,
    lon: float,
    min_lat: float,
    min_lon: float,
    lat_range: float,
    lon_range: float,
    width: float,
    height: float,
) -> tuple[float, float]:
    """Place a coordinate in a padded window with north at the top."""
    if lat_range == 0 or lon_range == 0:
        raise ValueError("coordinate range is zero")
    usable_width = width - 2 * PADDING
    usable_height = height - 2 * PADDING
    x = PADDING + (lon - min_lon) / lon_range * usable_width
    y = PADDING + (1.0 - (lat - min_lat) / lat_range) * usable_height
    return (x, y)


def _attribute(element: ET.Element, name: str) -> str:
    value = element.get(name)
    if value is None:
        raise ValueError(f"<{element.tag}> is missing attribute {name!r}")
    return value


def parse_map(path: str | Path) -> tuple[list[MapNode], list[MapArc]]:
    """Read the nodes and arcs of a ``<map>`` document."""
    root = ET.parse(path).getroot()
    if root.tag != "map":
        raise ValueError(f"expected a <map> root element, found <{root.tag}>")
    nodes = [
        MapNode(
            int(_attribute(el, "id")),
            float(_attribute(el, "latitude")),
            float(_attribute(el, "longitude")),
        )
        for el in root.findall("node")
    ]
    arcs = [
        MapArc(
            int(_attribute(el, "from")),
            int(_attribute(el, "to")),
            int(_attribute(el, "length")),
        )
        for el in root.findall("arc")
    ]
    return nodes, arcs


def _candidate_paths(filename: str) -> list[Path]:
    return [
        Path(filename),
        Path("resources") / filename,
        Path("../resources") / filename,
        Path.cwd() / "resources" / filename,
    ]


def load_from_xml(
    graph: Graph, filename: str, window_size: tuple[float, float]
) -> Path:
    """Replace ``graph`` with the map in ``filename``, scaled to ``window_size``."""
    parsed = None
    for path in _candidate_paths(filename):
        log.debug("trying to load map from %s", path)
        try:
            parsed = parse_map(path)
        except (OSError, ET.ParseError):
            continue
        log.info("successfully loaded map from %s", path)
        break
    else:
        raise OSError("Failed to load XML file from any path")

    nodes, arcs = parsed
    if not nodes:
        raise ValueError("map has no nodes")

    latitudes = [node.latitude for node in nodes]
    longitudes = [node.longitude for node in nodes]
    min_lat, min_lon = min(latitudes), min(longitudes)
    lat_range = max(latitudes) - min_lat
    lon_range = max(longitudes) - min_lon
    width, height = window_size

    graph.clear()
    placed: dict[int, Node] = {}
    for node in nodes:
        x, y = to_screen(
            node.latitude, node.longitude, min_lat, min_lon,
            lat_range, lon_range, width, height,
        )
        placed[node.id] = graph.add_node(x, y, node.id)

    for arc in arcs:
        if arc.source in placed and arc.target in placed:
            graph.add_edge(placed[arc.source], placed[arc.target], float(arc.length))
    return path