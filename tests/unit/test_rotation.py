"""Unit tests for rotation helpers."""

import numpy as np
import pytest

from carriersim.core.rotation import rotate_positions, rotation_from_euler


def rx(a):
    c, s = np.cos(a), np.sin(a)
    return np.array([[1, 0, 0], [0, c, -s], [0, s, c]])


def ry(a):
    c, s = np.cos(a), np.sin(a)
    return np.array([[c, 0, s], [0, 1, 0], [-s, 0, c]])


def rz(a):
    c, s = np.cos(a), np.sin(a)
    return np.array([[c, -s, 0], [s, c, 0], [0, 0, 1]])


class TestRotationFromEuler:
    """Tests for Euler composition."""

    def test_identity(self):
        matrix = rotation_from_euler(0.0, 0.0, 0.0).as_matrix()
        np.testing.assert_allclose(matrix, np.eye(3), atol=1e-15)

    def test_single_axis_pitch(self):
        matrix = rotation_from_euler(0.0, 0.3).as_matrix()
        np.testing.assert_allclose(matrix, ry(0.3), atol=1e-12)

    def test_composition_order(self):
        roll, pitch, yaw = 0.2, -0.4, 0.7
        matrix = rotation_from_euler(roll, pitch, yaw).as_matrix()
        np.testing.assert_allclose(matrix, rz(yaw) @ ry(pitch) @ rx(roll), atol=1e-12)


class TestRotatePositions:
    """Tests for rotating point arrays."""

    def test_quarter_turn_about_y(self):
        points = np.array([[1.0, 0.0, 0.0]])
        rotated = rotate_positions(points, rotation_from_euler(0.0, np.pi / 2))
        np.testing.assert_allclose(rotated, [[0.0, 0.0, -1.0]], atol=1e-12)

    def test_input_not_mutated(self, rng):
        points = rng.normal(size=(10, 3))
        original = points.copy()

        rotated = rotate_positions(points, rotation_from_euler(0.1, 0.2, 0.3))

        np.testing.assert_array_equal(points, original)
        assert rotated is not points

    def test_preserves_distances(self, rng):
        points = rng.normal(size=(20, 3))
        rotated = rotate_positions(points, rotation_from_euler(0.5, -1.1, 2.0))

        before = np.linalg.norm(points[:, None] - points[None, :], axis=-1)
        after = np.linalg.norm(rotated[:, None] - rotated[None, :], axis=-1)
        np.testing.assert_allclose(after, before, atol=1e-12)

    @pytest.mark.parametrize("axis", [0, 1, 2])
    def test_angle_then_negative_angle_restores(self, rng, axis):
        points = rng.normal(size=(15, 3)) * 300.0
        angles = [0.0, 0.0, 0.0]
        angles[axis] = 0.37
        back = [-a for a in angles]

        rotated = rotate_positions(points, rotation_from_euler(*angles))
        restored = rotate_positions(rotated, rotation_from_euler(*back))

        np.testing.assert_allclose(restored, points, atol=1e-9)

    def test_inverse_restores(self, rng):
        points = rng.normal(size=(15, 3))
        rotation = rotation_from_euler(0.3, 0.8, -0.2)

        restored = rotate_positions(rotate_positions(points, rotation), rotation.inv())

        np.testing.assert_allclose(restored, points, atol=1e-12)

    def test_empty_array(self):
        rotated = rotate_positions(np.empty((0, 3)), rotation_from_euler(0.1, 0.2))
        assert rotated.shape == (0, 3)

    def test_single_row_stays_2d(self):
        rotated = rotate_positions(np.array([[1.0, 2.0, 3.0]]), rotation_from_euler(0.1, 0.2))
        assert rotated.shape == (1, 3)
