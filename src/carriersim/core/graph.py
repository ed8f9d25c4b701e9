"""
GraphStore: the network the carriers travel on.

The store owns ONLY topology primitives:
- Node positions (one [n, 3] array, rotated in place by the clock)
- Directed edges keyed by (src, dest), each with a hop counter
- Adjacency lists derived from the edges (both directions)

Congestion lives here too: every carrier traversal bumps a hop counter,
and edges whose counter reaches the break threshold fail and get rewired
to random nodes.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Iterable

import numpy as np

if TYPE_CHECKING:
    from carriersim.core.carrier import RandomSource


logger = logging.getLogger(__name__)

EdgeKey = tuple[int, int]


@dataclass
class Edge:
    """A directed link between two nodes."""

    src: int
    dest: int
    hop_count: int = 0  # Traversals since creation
    is_synthetic: bool = False  # True if created by a rewire

    @property
    def key(self) -> EdgeKey:
        return self.src, self.dest


class GraphStore:
    """
    Nodes, edges and adjacency for one network.

    Adjacency is kept consistent with the edge mapping: every insertion
    appends both endpoints, every removal drops one entry from each.
    A loaded bidirectional pair therefore shows up twice in each list.
    """

    def __init__(self, positions: np.ndarray, edges: Iterable[EdgeKey]):
        positions = np.array(positions, dtype=np.float64)
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError(f"positions must have shape (n, 3), got {positions.shape}")
        if len(positions) == 0:
            raise ValueError("graph needs at least one node")

        self.positions = positions
        self.edges: dict[EdgeKey, Edge] = {}

        n = len(positions)
        for src, dest in edges:
            src, dest = int(src), int(dest)
            if not (0 <= src < n and 0 <= dest < n):
                raise ValueError(f"edge ({src}, {dest}) out of range for {n} nodes")
            self.edges[(src, dest)] = Edge(src, dest)

        self._neighbors: list[list[int]] = [[] for _ in range(n)]
        for src, dest in self.edges:
            self._neighbors[src].append(dest)
            self._neighbors[dest].append(src)

    @property
    def n_nodes(self) -> int:
        return len(self.positions)

    @property
    def n_edges(self) -> int:
        return len(self.edges)

    def neighbors(self, node: int) -> list[int]:
        """Neighbor indices of a node (live list, do not mutate)."""
        return self._neighbors[node]

    def connected_nodes(self) -> list[int]:
        """Nodes with at least one neighbor."""
        return [i for i, nbrs in enumerate(self._neighbors) if nbrs]

    def isolated_nodes(self) -> list[int]:
        """Nodes with no neighbor at all."""
        return [i for i, nbrs in enumerate(self._neighbors) if not nbrs]

    def synthetic_edge_count(self) -> int:
        return sum(1 for e in self.edges.values() if e.is_synthetic)

    def set_positions(self, positions: np.ndarray):
        """Replace node positions (used by the rotation step)."""
        self.positions = positions

    # ───────────────────────────────────────────────────────────────
    # Congestion
    # ───────────────────────────────────────────────────────────────

    def record_traversal(self, src: int, dest: int):
        """
        Count one hop across the link between src and dest.

        Both directions are incremented independently. A missing key
        (e.g. the edge was rewired away) is a no-op.
        """
        edge = self.edges.get((src, dest))
        if edge is not None:
            edge.hop_count += 1
        edge = self.edges.get((dest, src))
        if edge is not None:
            edge.hop_count += 1

    def congested_edges(self, break_threshold: int) -> list[EdgeKey]:
        """Keys of edges whose hop count reached the threshold."""
        return [key for key, e in self.edges.items() if e.hop_count >= break_threshold]

    def rewire(self, key: EdgeKey, rng: "RandomSource"):
        """
        Break an edge and reconnect both of its endpoints at random.

        Each endpoint gets a fresh synthetic edge to a node drawn uniformly
        from the whole node set. Self loops are allowed; an existing key
        hit by the draw is replaced with the fresh record. The broken key
        is removed last, so it is gone even if a draw recreated it.
        """
        src, dest = key
        for endpoint in (src, dest):
            new_dest = int(rng.integers(self.n_nodes))
            self._insert(Edge(endpoint, new_dest, is_synthetic=True))
            logger.debug("Rewired %s: new edge (%d, %d)", key, endpoint, new_dest)

        self._discard(key)

    def _insert(self, edge: Edge):
        # A replaced record gives up its adjacency entries first
        self._discard(edge.key)
        self.edges[edge.key] = edge
        self._neighbors[edge.src].append(edge.dest)
        self._neighbors[edge.dest].append(edge.src)

    def _discard(self, key: EdgeKey):
        if self.edges.pop(key, None) is None:
            return
        src, dest = key
        self._remove_adjacency(src, dest)
        self._remove_adjacency(dest, src)

    def congestion_sweep(self, break_threshold: int, rng: "RandomSource") -> list[EdgeKey]:
        """
        Rewire every congested edge.

        Keys are collected first, then rewired in order. A key that an
        earlier rewire in the same sweep replaced with a fresh edge is
        no longer congested and is left alone.

        Returns:
            Keys that were rewired
        """
        rewired = []
        for key in self.congested_edges(break_threshold):
            edge = self.edges.get(key)
            if edge is None or edge.hop_count < break_threshold:
                continue
            self.rewire(key, rng)
            rewired.append(key)
        return rewired

    def _remove_adjacency(self, node: int, neighbor: int):
        nbrs = self._neighbors[node]
        if neighbor in nbrs:
            nbrs.remove(neighbor)
