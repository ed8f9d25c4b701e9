"""
Carrier: a single agent hopping from node to node.

A carrier travels from its source toward a randomly chosen neighbor.
Each tick it moves by progress-weighted extrapolation from where it is:

    pos += progress * (dest_pos - pos)

so its apparent speed grows until it hops. There is no separate
"arrived" state: once progress reaches the hop threshold, arrival and
the next departure happen in a single hop.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from carriersim.core.graph import GraphStore


class RandomSource(Protocol):
    """
    Source of uniform integer draws.

    numpy's Generator satisfies this; tests pass a scripted sequence.
    """

    def integers(self, low: int, high: int | None = None) -> int:
        """Draw from [0, low) when high is None, else from [low, high)."""
        ...


@dataclass
class CarrierConfig:
    """Configuration shared by all carriers."""

    speed: float = 0.01  # Progress added per tick
    hop_threshold: float = 0.5  # Progress at which a hop triggers
    color: tuple[float, float, float] = (1.0, 0.1, 0.1)

    def __post_init__(self):
        if self.speed <= 0:
            raise ValueError("speed must be positive")


class Carrier:
    """
    One traveling agent.

    Owns its interpolation state only. Rotation of `position` and
    `dest_position` is done from outside by the clock.
    """

    def __init__(
        self,
        source: int,
        dest: int,
        position: np.ndarray,
        dest_position: np.ndarray,
        config: CarrierConfig | None = None,
    ):
        self.config = config if config is not None else CarrierConfig()
        self.source = source
        self.dest = dest
        self.position = np.array(position, dtype=np.float64)
        self.dest_position = np.array(dest_position, dtype=np.float64)
        self.progress: float = 0.0
        self.color = self.config.color

    @classmethod
    def spawn_random(
        cls,
        graph: "GraphStore",
        rng: RandomSource,
        config: CarrierConfig | None = None,
    ) -> Carrier:
        """
        Place a carrier on a random connected node, heading to a random neighbor.

        Raises:
            ValueError: if no node has a neighbor
        """
        candidates = graph.connected_nodes()
        if not candidates:
            raise ValueError("cannot spawn a carrier on a graph without edges")

        source = candidates[int(rng.integers(len(candidates)))]
        options = graph.neighbors(source)
        dest = options[int(rng.integers(len(options)))]

        return cls(
            source,
            dest,
            graph.positions[source],
            graph.positions[dest],
            config=config,
        )

    @property
    def hop_ready(self) -> bool:
        return self.progress >= self.config.hop_threshold

    def step(self):
        """Advance progress and move toward the destination."""
        self.progress += self.config.speed
        self.position = self.position + self.progress * (self.dest_position - self.position)

    def hop(self, graph: "GraphStore", rng: RandomSource) -> bool:
        """
        Arrive at the destination and depart toward one of its neighbors.

        If the destination currently has no neighbors (possible after a
        rewire) nothing changes and the carrier keeps extrapolating past
        its target until a later hop succeeds.

        Returns:
            True if the hop happened
        """
        options = graph.neighbors(self.dest)
        if not options:
            return False

        self.source = self.dest
        self.position = graph.positions[self.source].copy()
        self.dest = options[int(rng.integers(len(options)))]
        self.dest_position = graph.positions[self.dest].copy()
        self.progress = 0.0
        return True

    # Visual derivations (pure)

    def size(self) -> float:
        """Marker radius: smallest a quarter of the way along a segment."""
        return 2.0 + 25.0 * abs(self.progress - 0.25)

    def fade(self, scale: float) -> float:
        """Depth fade from the z coordinate relative to a visual scale."""
        return 0.5 + (self.position[2] - scale / 2.0) / scale
