"""
ViewState: maps pointer drags to a per-tick rotation.

Pointer events may arrive at any time (e.g. from a GUI callback). They are
only queued here and applied at the start of the next tick, so the clock
is the single writer of all simulation state.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Literal


@dataclass
class ViewConfig:
    """Configuration for view rotation."""

    sensitivity: float = 0.01  # Radians per pixel of drag
    idle_rate: float = 0.005  # Radians per tick about y while idle


@dataclass
class PointerEvent:
    """A queued pointer event."""

    kind: Literal["down", "move", "up"]
    x: float | None = None
    y: float | None = None


class ViewState:
    """
    Current drag-rotation delta and dragging flag.

    While dragging, the last delta is reapplied every tick (even without
    further movement). While idle, a constant slow spin about y is used.
    """

    def __init__(self, config: ViewConfig | None = None):
        self.config = config if config is not None else ViewConfig()
        self.dragging: bool = False
        self.delta_angles: tuple[float, float] = (0.0, 0.0)  # (roll, pitch)
        self.last_position: tuple[float, float] = (0.0, 0.0)
        self._pending: deque[PointerEvent] = deque()

    # Event intake (queued)

    def pointer_down(self, x: float | None = None, y: float | None = None):
        self._pending.append(PointerEvent("down", x, y))

    def pointer_move(self, x: float, y: float):
        self._pending.append(PointerEvent("move", x, y))

    def pointer_up(self):
        self._pending.append(PointerEvent("up"))

    @property
    def pending_events(self) -> int:
        return len(self._pending)

    def apply_pending(self) -> int:
        """
        Apply all queued events in arrival order.

        Returns:
            Number of events applied
        """
        applied = 0
        while self._pending:
            self._apply(self._pending.popleft())
            applied += 1
        return applied

    def _apply(self, event: PointerEvent):
        if event.kind == "down":
            self.dragging = True
            if event.x is not None and event.y is not None:
                self.last_position = (event.x, event.y)

        elif event.kind == "move":
            if self.dragging:
                last_x, last_y = self.last_position
                delta_x = (event.x - last_x) * self.config.sensitivity
                # Screen y grows opposite to world y
                delta_y = -(event.y - last_y) * self.config.sensitivity
                self.delta_angles = (delta_y, delta_x)
            self.last_position = (event.x, event.y)

        else:  # up
            self.dragging = False

    def tick_angles(self) -> tuple[float, float, float]:
        """Euler angles (roll, pitch, yaw) to apply this tick."""
        if self.dragging:
            roll, pitch = self.delta_angles
            return roll, pitch, 0.0
        return 0.0, self.config.idle_rate, 0.0
