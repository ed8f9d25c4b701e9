"""
Graph loading: the boundary where input is validated.

The engine never re-checks indices inside the tick loop, so everything
that could make it index out of bounds is rejected here:
- empty or malformed node files
- non-integer, negative or out-of-range edge indices
- graphs with no edges at all (no carrier could be placed)

Two sources are supported:
- CSV files with headers `x,y,z` (positions) and `src,dest` (edges)
- a generated Fibonacci sphere with k-nearest-neighbor links
"""

from __future__ import annotations
import logging
from pathlib import Path
import warnings

import numpy as np
from scipy.spatial import cKDTree

from carriersim.core.graph import GraphStore


logger = logging.getLogger(__name__)

POSITION_COLUMNS = ("x", "y", "z")
EDGE_COLUMNS = ("src", "dest")


class GraphLoadError(ValueError):
    """Raised when graph input cannot be turned into a valid GraphStore."""


def _read_columns(path: Path, columns: tuple[str, ...]) -> np.ndarray:
    """Read named CSV columns into a float array of shape [rows, len(columns)]."""
    with warnings.catch_warnings():
        # genfromtxt warns on empty input; emptiness is checked by the caller
        warnings.simplefilter("ignore", UserWarning)
        try:
            data = np.genfromtxt(
                path,
                delimiter=",",
                names=True,
                dtype=np.float64,
                encoding="utf-8",
            )
        except (OSError, ValueError) as exc:
            raise GraphLoadError(f"cannot read {path}: {exc}") from exc

    data = np.atleast_1d(data)
    names = data.dtype.names or ()
    missing = [c for c in columns if c not in names]
    if missing:
        raise GraphLoadError(f"{path} is missing columns {missing} (found {list(names)})")

    return np.column_stack([data[c] for c in columns]).reshape(-1, len(columns))


def validate_graph(positions: np.ndarray, edges: np.ndarray) -> None:
    """
    Check that positions and edges form a usable graph.

    Args:
        positions: [n, 3] node coordinates
        edges: [m, 2] directed (src, dest) index pairs

    Raises:
        GraphLoadError: describing the first problem found
    """
    if positions.ndim != 2 or positions.shape[1] != 3:
        raise GraphLoadError(f"positions must have shape (n, 3), got {positions.shape}")
    if len(positions) == 0:
        raise GraphLoadError("graph has no nodes")
    if not np.all(np.isfinite(positions)):
        raise GraphLoadError("positions contain non-numeric or non-finite values")

    if edges.ndim != 2 or edges.shape[1] != 2:
        raise GraphLoadError(f"edges must have shape (m, 2), got {edges.shape}")
    if len(edges) == 0:
        raise GraphLoadError("graph has no edges")
    if not np.all(np.isfinite(edges)) or not np.all(edges == np.round(edges)):
        raise GraphLoadError("edge indices must be integers")

    n = len(positions)
    bad = (edges < 0) | (edges >= n)
    if np.any(bad):
        row = int(np.argmax(bad.any(axis=1)))
        raise GraphLoadError(
            f"edge {row} ({int(edges[row, 0])}, {int(edges[row, 1])}) "
            f"out of range for {n} nodes"
        )


def build_graph(positions: np.ndarray, edges: np.ndarray) -> GraphStore:
    """Validate raw arrays and construct a GraphStore."""
    positions = np.asarray(positions, dtype=np.float64)
    edges = np.asarray(edges, dtype=np.float64).reshape(-1, 2)
    validate_graph(positions, edges)

    graph = GraphStore(positions, [(int(s), int(d)) for s, d in edges])

    isolated = graph.isolated_nodes()
    if isolated:
        logger.warning("%d isolated nodes will never host a carrier: %s", len(isolated), isolated)
    return graph


def load_graph(
    positions_path: str | Path,
    edges_path: str | Path,
    scale: float = 1.0,
) -> GraphStore:
    """
    Load a graph from two CSV files.

    Args:
        positions_path: CSV with header x,y,z (one node per row)
        edges_path: CSV with header src,dest (one directed edge per row)
        scale: Factor applied to every coordinate (e.g. sphere radius)

    Returns:
        GraphStore with all edges marked original

    Raises:
        GraphLoadError: if either file is unreadable or inconsistent
    """
    positions_path = Path(positions_path)
    edges_path = Path(edges_path)

    positions = _read_columns(positions_path, POSITION_COLUMNS) * scale
    edges = _read_columns(edges_path, EDGE_COLUMNS)

    graph = build_graph(positions, edges)
    logger.info(
        "Loaded %d nodes and %d edges from %s, %s",
        graph.n_nodes,
        graph.n_edges,
        positions_path.name,
        edges_path.name,
    )
    return graph


def fibonacci_sphere(n_points: int, radius: float = 1.0) -> np.ndarray:
    """Roughly evenly spaced points on a sphere, shape [n, 3]."""
    i = np.arange(n_points) + 0.5
    phi = np.arccos(1.0 - 2.0 * i / n_points)
    theta = np.pi * (1.0 + np.sqrt(5.0)) * i

    return radius * np.column_stack([
        np.cos(theta) * np.sin(phi),
        np.sin(theta) * np.sin(phi),
        np.cos(phi),
    ])


def create_sphere_graph(
    n_nodes: int = 50,
    k_neighbors: int = 3,
    radius: float = 1.0,
) -> GraphStore:
    """
    Generate a graph on a sphere, linking each node to its k nearest nodes.

    Each undirected link is emitted once as (low, high), so every node
    has at least k neighbors and none is isolated.
    """
    if n_nodes <= k_neighbors:
        raise ValueError("n_nodes must exceed k_neighbors")

    positions = fibonacci_sphere(n_nodes, radius)
    _, nearest = cKDTree(positions).query(positions, k=k_neighbors + 1)

    pairs = set()
    for i, row in enumerate(nearest):
        for j in row[1:]:
            pairs.add((min(i, int(j)), max(i, int(j))))

    return build_graph(positions, np.array(sorted(pairs), dtype=np.float64))
