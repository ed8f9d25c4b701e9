"""
Draw a frame snapshot with matplotlib.

Nodes are projected onto the x/y plane (the view looks down z).
- Original edges: lines coloured from grey-teal to red by congestion,
  faded by depth
- Synthetic edges (from rewires): hidden by default
- Carriers: dots sized by segment progress, faded by depth
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure

if TYPE_CHECKING:
    from carriersim.core.frame import FrameSnapshot


BACKGROUND = (0.0, 0.0, 0.0)
EDGE_WIDTH = 3.0


def _clip(values) -> np.ndarray:
    return np.clip(np.asarray(values, dtype=np.float64), 0.0, 1.0)


def edge_segments(frame: "FrameSnapshot", show_synthetic: bool = False):
    """
    Line segments and RGBA colours for the edges to draw.

    Returns:
        (segments [m, 2, 2], colors [m, 4])
    """
    edges = [e for e in frame.edges if show_synthetic or not e.is_synthetic]
    if not edges:
        return np.empty((0, 2, 2)), np.empty((0, 4))

    xy = frame.node_positions[:, :2]
    segments = np.array([[xy[e.src], xy[e.dest]] for e in edges])
    colors = _clip([e.rgba for e in edges])
    return segments, colors


def plot_frame(
    frame: "FrameSnapshot",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 8),
    show_synthetic: bool = False,
    extent: float | None = None,
    title: str | None = None,
) -> tuple[Figure, Axes]:
    """
    Plot one frame.

    Args:
        frame: Snapshot from SimulationClock.snapshot()
        ax: Existing axes (creates new if None)
        show_synthetic: Also draw edges created by rewires
        extent: Half-width of the visible square (auto if None)
        title: Optional plot title

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    ax.set_facecolor(BACKGROUND)

    segments, colors = edge_segments(frame, show_synthetic=show_synthetic)
    if len(segments):
        ax.add_collection(LineCollection(segments, colors=colors, linewidths=EDGE_WIDTH, zorder=1))

    if frame.carriers:
        pos = np.array([c.position for c in frame.carriers])
        rgba = _clip([(*c.color, c.fade) for c in frame.carriers])
        sizes = np.array([c.size for c in frame.carriers]) ** 2
        ax.scatter(pos[:, 0], pos[:, 1], s=sizes, c=rgba, linewidths=0, zorder=2)

    if extent is None:
        extent = float(np.abs(frame.node_positions[:, :2]).max()) * 1.1 or 1.0
    ax.set_xlim(-extent, extent)
    ax.set_ylim(-extent, extent)
    ax.set_aspect("equal")
    ax.set_xticks([])
    ax.set_yticks([])

    if title:
        ax.set_title(title)

    return fig, ax


def plot_congestion_history(
    history,
    ax: Axes | None = None,
    figsize: tuple[float, float] = (10, 4),
) -> tuple[Figure, Axes]:
    """Plot hops and rewires per tick from SimulationClock.history."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    ticks = [s.tick for s in history]
    ax.plot(ticks, [s.hops for s in history], label="Hops", color="tab:blue")
    ax.plot(ticks, [s.rewired for s in history], label="Rewires", color="tab:red")
    ax.set_xlabel("Tick")
    ax.set_ylabel("Count")
    ax.legend(loc="upper right")
    ax.grid(True, alpha=0.3)

    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
