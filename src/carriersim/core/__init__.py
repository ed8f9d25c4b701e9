"""
Core simulation engine.

This layer knows NOTHING about files or screens. It only knows:
- Nodes, directed edges and adjacency (GraphStore)
- Carriers and their hop state machine (Carrier, CarrierPool)
- Congestion: hop counters and random rewiring of failed edges
- A rigid rotation applied to all spatial state each tick
- Pointer drags queued into a per-tick rotation (ViewState)

SimulationClock ties them together one tick at a time.
"""

from carriersim.core.graph import Edge, GraphStore
from carriersim.core.carrier import Carrier, CarrierConfig, RandomSource
from carriersim.core.pool import CarrierPool
from carriersim.core.rotation import rotate_positions, rotation_from_euler
from carriersim.core.view import PointerEvent, ViewConfig, ViewState
from carriersim.core.frame import CarrierVisual, EdgeVisual, FrameSnapshot, build_snapshot
from carriersim.core.clock import SimulationClock, SimulationConfig, TickStats

__all__ = [
    "Edge",
    "GraphStore",
    "Carrier",
    "CarrierConfig",
    "RandomSource",
    "CarrierPool",
    "rotate_positions",
    "rotation_from_euler",
    "PointerEvent",
    "ViewConfig",
    "ViewState",
    "CarrierVisual",
    "EdgeVisual",
    "FrameSnapshot",
    "build_snapshot",
    "SimulationClock",
    "SimulationConfig",
    "TickStats",
]
