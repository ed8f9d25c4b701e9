"""
Interactive animation: matplotlib drives the tick loop.

Pointer events from the figure are forwarded to the ViewState queue;
each animation frame runs exactly one tick and then redraws the
snapshot, so rendering always sees a fully finished tick.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from carriersim.viz.network import plot_frame

if TYPE_CHECKING:
    from carriersim.core.clock import SimulationClock


class NetworkAnimation:
    """
    Window showing a running simulation.

    Drag with any mouse button to rotate; release to return to the
    idle spin.
    """

    def __init__(
        self,
        clock: "SimulationClock",
        figsize: tuple[float, float] = (8, 8),
        interval_ms: int = 16,
        show_synthetic: bool = False,
    ):
        self.clock = clock
        self.show_synthetic = show_synthetic
        # Fixed extent: the graph rotates, it should not appear to zoom
        self.extent = clock.config.window_size / 2.0

        self.fig, self.ax = plt.subplots(figsize=figsize)
        self.fig.patch.set_facecolor("black")

        canvas = self.fig.canvas
        self._cids = [
            canvas.mpl_connect("button_press_event", self.on_press),
            canvas.mpl_connect("motion_notify_event", self.on_move),
            canvas.mpl_connect("button_release_event", self.on_release),
        ]

        self.animation = FuncAnimation(
            self.fig,
            self.update,
            interval=interval_ms,
            cache_frame_data=False,
        )

    def on_press(self, event):
        self.clock.view.pointer_down(event.x, event.y)

    def on_move(self, event):
        self.clock.view.pointer_move(event.x, event.y)

    def on_release(self, event):
        self.clock.view.pointer_up()

    def update(self, frame_index: int):
        """Advance one tick and redraw."""
        self.clock.tick()
        self.ax.clear()
        plot_frame(
            self.clock.snapshot(),
            ax=self.ax,
            show_synthetic=self.show_synthetic,
            extent=self.extent,
        )
        return []

    def disconnect(self):
        """Stop the animation and detach pointer handlers."""
        self.animation.event_source.stop()
        for cid in self._cids:
            self.fig.canvas.mpl_disconnect(cid)
        self._cids = []

    def show(self):
        plt.show()
