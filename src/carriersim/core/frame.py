"""
Frame snapshots handed to renderers once per tick.

Everything here is derived from the live state and stores nothing back:
brightness from hop counts, depth fades from z coordinates, carrier sizes
from progress.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from carriersim.core.graph import GraphStore
    from carriersim.core.pool import CarrierPool


def node_fade(z: float, window_size: float) -> float:
    """Depth fade of a node at height z."""
    return 0.5 + (z - window_size / 2.0) / window_size


@dataclass
class EdgeVisual:
    """Render attributes of one edge."""

    src: int
    dest: int
    hop_count: int
    is_synthetic: bool
    brightness: float  # hop_count / break_threshold
    fade_src: float
    fade_dest: float

    @property
    def fade(self) -> float:
        return (self.fade_src + self.fade_dest) / 2.0

    @property
    def rgba(self) -> tuple[float, float, float, float]:
        """Grey-teal when idle, shifting to red as the edge congests."""
        b = self.brightness
        return b, 0.75 - b, 0.75 - b, self.fade


@dataclass
class CarrierVisual:
    """Render attributes of one carrier."""

    position: np.ndarray
    size: float
    color: tuple[float, float, float]
    fade: float


@dataclass
class FrameSnapshot:
    """Everything a renderer needs for one frame."""

    tick: int
    node_positions: np.ndarray  # [n, 3], copy
    edges: list[EdgeVisual]
    carriers: list[CarrierVisual]


def build_snapshot(
    tick: int,
    graph: "GraphStore",
    pool: "CarrierPool",
    break_threshold: int,
    window_size: float,
    sphere_size: float,
) -> FrameSnapshot:
    """
    Derive render attributes from the current state.

    Args:
        tick: Tick number this frame belongs to
        graph: Graph to read nodes and edges from
        pool: Carriers to read positions and progress from
        break_threshold: Hop count at which edges break (brightness = 1)
        window_size: Depth scale for node fades
        sphere_size: Depth scale for carrier fades
    """
    positions = graph.positions.copy()
    fades = [node_fade(z, window_size) for z in positions[:, 2]]

    edges = [
        EdgeVisual(
            src=src,
            dest=dest,
            hop_count=edge.hop_count,
            is_synthetic=edge.is_synthetic,
            brightness=edge.hop_count / break_threshold,
            fade_src=fades[src],
            fade_dest=fades[dest],
        )
        for (src, dest), edge in graph.edges.items()
    ]

    carriers = [
        CarrierVisual(
            position=c.position.copy(),
            size=c.size(),
            color=c.color,
            fade=c.fade(sphere_size),
        )
        for c in pool
    ]

    return FrameSnapshot(tick=tick, node_positions=positions, edges=edges, carriers=carriers)
