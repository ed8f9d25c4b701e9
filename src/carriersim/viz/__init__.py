"""
Visualization utilities.

- Static frame plots (edges by congestion, carriers by progress)
- Hop / rewire history plots
- Interactive animation with pointer-drag rotation
"""

from carriersim.viz.network import (
    edge_segments,
    plot_frame,
    plot_congestion_history,
    save_figure,
)
from carriersim.viz.animation import NetworkAnimation

__all__ = [
    "edge_segments",
    "plot_frame",
    "plot_congestion_history",
    "save_figure",
    "NetworkAnimation",
]
