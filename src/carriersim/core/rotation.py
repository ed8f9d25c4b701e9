"""
Rigid 3D rotation of spatial state.

Rotations are pure: they take a position array and return a new one.
The clock applies one rotation to nodes and carriers together so the
graph shape and carrier placement are preserved frame to frame.
"""

from __future__ import annotations

import numpy as np
from scipy.spatial.transform import Rotation


def rotation_from_euler(roll: float, pitch: float, yaw: float = 0.0) -> Rotation:
    """
    Build a rotation from Euler angles (radians).

    Composition is Rz(yaw) · Ry(pitch) · Rx(roll): roll about x is applied
    first, then pitch about y, then yaw about z (all about fixed axes).
    """
    return Rotation.from_euler("xyz", [roll, pitch, yaw])


def rotate_positions(positions: np.ndarray, rotation: Rotation) -> np.ndarray:
    """
    Rotate a [n, 3] array of points about the origin.

    Returns a new array; the input is left untouched.
    """
    positions = np.asarray(positions, dtype=np.float64)
    if len(positions) == 0:
        return positions.reshape(0, 3).copy()
    return np.atleast_2d(rotation.apply(positions))
