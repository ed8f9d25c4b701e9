"""
CarrierPool: the fixed-size population of carriers.

Carriers are created once and never destroyed. Each tick the pool steps
every carrier, hops the ones that reached the threshold and reports the
traversed links back to the graph so congestion can build up.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Iterator

import numpy as np

from carriersim.core.carrier import Carrier, CarrierConfig

if TYPE_CHECKING:
    from carriersim.core.carrier import RandomSource
    from carriersim.core.graph import GraphStore


class CarrierPool:
    """Owns the carriers and orchestrates stepping and hopping."""

    def __init__(self, carriers: list[Carrier]):
        self.carriers = carriers

    @classmethod
    def spawn(
        cls,
        graph: "GraphStore",
        n_carriers: int,
        rng: "RandomSource",
        config: CarrierConfig | None = None,
    ) -> CarrierPool:
        """Create n_carriers carriers at random positions on the graph."""
        carriers = [Carrier.spawn_random(graph, rng, config) for _ in range(n_carriers)]
        return cls(carriers)

    def __len__(self) -> int:
        return len(self.carriers)

    def __iter__(self) -> Iterator[Carrier]:
        return iter(self.carriers)

    def positions(self) -> np.ndarray:
        """Current carrier positions, shape [n, 3]."""
        if not self.carriers:
            return np.empty((0, 3), dtype=np.float64)
        return np.array([c.position for c in self.carriers])

    def dest_positions(self) -> np.ndarray:
        """Carrier destination positions, shape [n, 3]."""
        if not self.carriers:
            return np.empty((0, 3), dtype=np.float64)
        return np.array([c.dest_position for c in self.carriers])

    def set_positions(self, positions: np.ndarray, dest_positions: np.ndarray):
        """Write back rotated positions (rows match carrier order)."""
        for carrier, pos, dest_pos in zip(self.carriers, positions, dest_positions):
            carrier.position = pos.copy()
            carrier.dest_position = dest_pos.copy()

    def advance(self, graph: "GraphStore", rng: "RandomSource") -> int:
        """
        Step every carrier and hop those that are ready.

        After each successful hop the link the carrier is now entering is
        counted on the graph (both directions, missing keys ignored).

        Returns:
            Number of successful hops this tick
        """
        hops = 0
        for carrier in self.carriers:
            carrier.step()
            if carrier.hop_ready and carrier.hop(graph, rng):
                graph.record_traversal(carrier.source, carrier.dest)
                hops += 1
        return hops
