"""Geographic coordinates and helpers for placing map nodes on screen."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable

SCREEN_PADDING = 50.0


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair in degrees."""

    latitude: float = 0.0
    longitude: float = 0.0

    def to_screen_position(
        self,
        window_size: tuple[float, float],
        min_bounds: Coordinates,
        max_bounds: Coordinates,
    ) -> tuple[float, float]:
        """Map into a window, keeping a fixed padding and putting north at the top."""
        lon_range = max_bounds.longitude - min_bounds.longitude
        lat_range = max_bounds.latitude - min_bounds.latitude
        if lon_range == 0 or lat_range == 0:
            raise ValueError("coordinate bounds have zero extent")
        x = (self.longitude - min_bounds.longitude) / lon_range
        y = (self.latitude - min_bounds.latitude) / lat_range
        width, height = window_size
        screen_x = SCREEN_PADDING + x * (width - 2 * SCREEN_PADDING)
        screen_y = SCREEN_PADDING + (1 - y) * (height - 2 * SCREEN_PADDING)
        return (screen_x, screen_y)

    def distance_to(self, other: Coordinates) -> float:
        """Planar distance in degrees, treating the pair as flat x/y."""
        dx = self.longitude - other.longitude
        dy = self.latitude - other.latitude
        return math.sqrt(dx * dx + dy * dy)


@dataclass(frozen=True)
class NodeData:
    """A map node identifier with its position."""

    id: int
    coords: Coordinates = field(default_factory=Coordinates)


def parse_node_file(filename: str) -> list[NodeData]:
    """Return the built-in sample nodes; the file name is not read."""
    del filename
    return [
        NodeData(1, Coordinates(51.5074, -0.1278)),
        NodeData(2, Coordinates(48.8566, 2.3522)),
        NodeData(3, Coordinates(52.5200, 13.4050)),
    ]


def find_bounds(nodes: Iterable[NodeData]) -> tuple[Coordinates, Coordinates]:
    """The south-west and north-east corners enclosing all ``nodes``."""
    nodes = list(nodes)
    if not nodes:
        return (Coordinates(), Coordinates())
    latitudes = [node.coords.latitude for node in nodes]
    longitudes = [node.coords.longitude for node in nodes]
    return (
        Coordinates(min(latitudes), min(longitudes)),
        Coordinates(max(latitudes), max(longitudes)),
    )