"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


class ScriptedRandom:
    """Random source that replays a fixed sequence of draws."""

    def __init__(self, values):
        self._values = list(values)
        self.calls = 0

    def integers(self, low, high=None):
        bound = low if high is None else high
        start = 0 if high is None else low
        value = self._values[self.calls]
        self.calls += 1
        assert start <= value < bound, f"scripted draw {value} outside [{start}, {bound})"
        return value

    @property
    def exhausted(self) -> bool:
        return self.calls == len(self._values)


@pytest.fixture
def scripted():
    """Factory for deterministic random sources: scripted([0, 2, 1])."""
    return ScriptedRandom


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def square_positions():
    """Four nodes on the corners of a square in the z=0 plane."""
    return np.array([
        [-1.0, -1.0, 0.0],
        [1.0, -1.0, 0.0],
        [1.0, 1.0, 0.0],
        [-1.0, 1.0, 0.0],
    ])


@pytest.fixture
def square_graph(square_positions):
    """Square topology 0→1→2→3→0, one directed edge per side."""
    from carriersim.core import GraphStore
    return GraphStore(square_positions, [(0, 1), (1, 2), (2, 3), (3, 0)])


@pytest.fixture
def sphere_graph():
    """A 30-node sphere graph with 3 nearest-neighbor links per node."""
    from carriersim.loader import create_sphere_graph
    return create_sphere_graph(n_nodes=30, k_neighbors=3, radius=300.0)
