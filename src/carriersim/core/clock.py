"""
SimulationClock: advances the whole simulation one tick at a time.

Each tick, in this fixed order:
1. Apply queued pointer events to the view
2. Congestion sweep: rewire every edge whose hop count hit the threshold
3. Pick this tick's rotation (drag delta, or idle spin)
4. Rotate nodes, carrier positions and carrier destinations together
5. Step every carrier, hop the ready ones, count traversed links

A tick runs to completion before the next one starts or a frame is
rendered. Nothing inside the loop does I/O.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING

import numpy as np

from carriersim.core.frame import FrameSnapshot, build_snapshot
from carriersim.core.rotation import rotate_positions, rotation_from_euler

if TYPE_CHECKING:
    from carriersim.core.carrier import RandomSource
    from carriersim.core.graph import GraphStore
    from carriersim.core.pool import CarrierPool
    from carriersim.core.view import ViewState


logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Configuration for the simulation loop."""

    break_threshold: int = 5  # Hops after which an edge breaks
    n_carriers: int = 150
    window_size: int = 1200  # Depth scale for node fades
    scale: float = 0.25  # Graph radius as a fraction of the window

    def __post_init__(self):
        if self.break_threshold < 1:
            raise ValueError("break_threshold must be at least 1")
        if self.n_carriers < 0:
            raise ValueError("n_carriers must be non-negative")

    @property
    def sphere_size(self) -> float:
        """Radius the unit graph is scaled to; also the carrier fade scale."""
        return self.window_size * self.scale


@dataclass
class TickStats:
    """What happened during one tick."""

    tick: int
    rewired: int
    hops: int


@dataclass
class SimulationClock:
    """
    Explicit simulation context: graph, carriers, view and randomness.

    Constructed once from loader output and mutated only through tick().
    """

    graph: "GraphStore"
    pool: "CarrierPool"
    view: "ViewState"
    rng: "RandomSource"
    config: SimulationConfig = field(default_factory=SimulationConfig)

    current_tick: int = field(default=0, init=False)
    total_hops: int = field(default=0, init=False)
    total_rewires: int = field(default=0, init=False)
    history: list[TickStats] = field(default_factory=list, init=False)

    def tick(self) -> TickStats:
        """Run one full tick."""
        self.current_tick += 1

        self.view.apply_pending()

        rewired = self.graph.congestion_sweep(self.config.break_threshold, self.rng)
        if rewired:
            logger.debug("Tick %d: rewired %d edges", self.current_tick, len(rewired))

        self._rotate(*self.view.tick_angles())

        hops = self.pool.advance(self.graph, self.rng)

        self.total_hops += hops
        self.total_rewires += len(rewired)
        stats = TickStats(tick=self.current_tick, rewired=len(rewired), hops=hops)
        self.history.append(stats)
        return stats

    def run(self, n_ticks: int) -> dict:
        """Run n_ticks ticks and return a summary."""
        for _ in range(n_ticks):
            self.tick()

        summary = {
            "n_ticks": n_ticks,
            "current_tick": self.current_tick,
            "total_hops": self.total_hops,
            "total_rewires": self.total_rewires,
            "n_edges": self.graph.n_edges,
            "synthetic_edges": self.graph.synthetic_edge_count(),
            "mean_hop_count": self.mean_hop_count(),
        }
        logger.info(
            "Ran %d ticks: %d hops, %d rewires, %d/%d synthetic edges",
            n_ticks,
            self.total_hops,
            self.total_rewires,
            summary["synthetic_edges"],
            summary["n_edges"],
        )
        return summary

    def mean_hop_count(self) -> float:
        if not self.graph.edges:
            return 0.0
        return float(np.mean([e.hop_count for e in self.graph.edges.values()]))

    def _rotate(self, roll: float, pitch: float, yaw: float):
        """Apply one rigid rotation to every node and carrier position."""
        n_nodes = self.graph.n_nodes
        n_carriers = len(self.pool)

        stacked = np.vstack([
            self.graph.positions,
            self.pool.positions(),
            self.pool.dest_positions(),
        ])
        rotated = rotate_positions(stacked, rotation_from_euler(roll, pitch, yaw))

        self.graph.set_positions(rotated[:n_nodes])
        self.pool.set_positions(
            rotated[n_nodes:n_nodes + n_carriers],
            rotated[n_nodes + n_carriers:],
        )

    def snapshot(self) -> FrameSnapshot:
        """Render attributes for the current state."""
        return build_snapshot(
            self.current_tick,
            self.graph,
            self.pool,
            break_threshold=self.config.break_threshold,
            window_size=self.config.window_size,
            sphere_size=self.config.sphere_size,
        )
