"""Unit tests for GraphStore and Edge."""

from collections import Counter

import numpy as np
import pytest

from carriersim.core.graph import Edge, GraphStore


def assert_adjacency_consistent(graph):
    """Adjacency holds exactly one entry per edge end, no more and no less."""
    expected = [Counter() for _ in range(graph.n_nodes)]
    for a, b in graph.edges:
        expected[a][b] += 1
        expected[b][a] += 1
    for node in range(graph.n_nodes):
        assert Counter(graph.neighbors(node)) == expected[node], f"adjacency of {node} out of sync"


class TestEdge:
    """Tests for Edge dataclass."""

    def test_defaults(self):
        edge = Edge(src=2, dest=5)
        assert edge.hop_count == 0
        assert edge.is_synthetic is False
        assert edge.key == (2, 5)


class TestGraphStoreCreation:
    """Tests for GraphStore construction and load-time checks."""

    def test_creation(self, square_graph):
        assert square_graph.n_nodes == 4
        assert square_graph.n_edges == 4
        assert square_graph.positions.shape == (4, 3)
        assert all(not e.is_synthetic for e in square_graph.edges.values())

    def test_adjacency_both_directions(self, square_graph):
        assert square_graph.neighbors(0) == [1, 3]
        assert square_graph.neighbors(1) == [0, 2]
        assert square_graph.neighbors(2) == [1, 3]
        assert square_graph.neighbors(3) == [2, 0]

    def test_bidirectional_pair_duplicates_adjacency(self, square_positions):
        graph = GraphStore(square_positions, [(0, 1), (1, 0)])

        assert graph.n_edges == 2
        assert graph.neighbors(0) == [1, 1]
        assert graph.neighbors(1) == [0, 0]

    def test_duplicate_input_pairs_collapse(self, square_positions):
        graph = GraphStore(square_positions, [(0, 1), (0, 1)])
        assert graph.n_edges == 1
        assert graph.neighbors(0) == [1]

    def test_isolated_and_connected_nodes(self, square_positions):
        graph = GraphStore(square_positions, [(0, 1)])
        assert graph.connected_nodes() == [0, 1]
        assert graph.isolated_nodes() == [2, 3]

    def test_empty_node_set_rejected(self):
        with pytest.raises(ValueError):
            GraphStore(np.empty((0, 3)), [])

    def test_wrong_shape_rejected(self):
        with pytest.raises(ValueError):
            GraphStore(np.zeros((4, 2)), [(0, 1)])

    def test_out_of_range_edge_rejected(self, square_positions):
        with pytest.raises(ValueError):
            GraphStore(square_positions, [(0, 4)])
        with pytest.raises(ValueError):
            GraphStore(square_positions, [(-1, 2)])


class TestTraversal:
    """Tests for hop counting."""

    def test_record_traversal_forward(self, square_graph):
        square_graph.record_traversal(0, 1)
        assert square_graph.edges[(0, 1)].hop_count == 1

    def test_record_traversal_reverse_key(self, square_graph):
        # Only (0, 1) exists; traveling 1 → 0 still counts on it
        square_graph.record_traversal(1, 0)
        assert square_graph.edges[(0, 1)].hop_count == 1

    def test_record_traversal_both_directions(self, square_positions):
        graph = GraphStore(square_positions, [(0, 1), (1, 0)])
        graph.record_traversal(0, 1)

        assert graph.edges[(0, 1)].hop_count == 1
        assert graph.edges[(1, 0)].hop_count == 1

    def test_record_traversal_missing_is_noop(self, square_graph):
        square_graph.record_traversal(0, 2)
        assert all(e.hop_count == 0 for e in square_graph.edges.values())


class TestRewire:
    """Tests for congestion detection and rewiring."""

    def test_congested_edges(self, square_graph):
        square_graph.edges[(1, 2)].hop_count = 5
        square_graph.edges[(2, 3)].hop_count = 4

        assert square_graph.congested_edges(5) == [(1, 2)]
        assert set(square_graph.congested_edges(4)) == {(1, 2), (2, 3)}

    def test_rewire_replaces_edge(self, square_graph, scripted):
        square_graph.edges[(0, 1)].hop_count = 5
        square_graph.rewire((0, 1), scripted([2, 3]))

        assert (0, 1) not in square_graph.edges
        for key in [(0, 2), (1, 3)]:
            edge = square_graph.edges[key]
            assert edge.hop_count == 0
            assert edge.is_synthetic is True

    def test_rewire_patches_adjacency(self, square_graph, scripted):
        square_graph.rewire((0, 1), scripted([2, 3]))

        assert square_graph.neighbors(0) == [3, 2]
        assert square_graph.neighbors(1) == [2, 3]
        assert square_graph.neighbors(2) == [1, 3, 0]
        assert square_graph.neighbors(3) == [2, 0, 1]
        assert_adjacency_consistent(square_graph)

    def test_rewire_allows_self_loop(self, square_graph, scripted):
        square_graph.rewire((0, 1), scripted([0, 1]))

        assert square_graph.edges[(0, 0)].is_synthetic
        assert square_graph.edges[(1, 1)].is_synthetic
        assert square_graph.neighbors(0).count(0) == 2
        assert_adjacency_consistent(square_graph)

    def test_rewire_replaces_existing_link(self, square_graph, scripted):
        # (1, 2) already exists; the fresh edge replaces its record
        square_graph.edges[(1, 2)].hop_count = 3
        square_graph.rewire((0, 1), scripted([3, 2]))

        assert square_graph.edges[(1, 2)].hop_count == 0
        assert square_graph.edges[(1, 2)].is_synthetic
        assert square_graph.neighbors(1) == [2]
        assert square_graph.neighbors(2) == [3, 1]
        assert_adjacency_consistent(square_graph)

    def test_replaced_link_leaves_no_stale_neighbor(self, square_graph, scripted):
        square_graph.rewire((0, 1), scripted([3, 2]))
        square_graph.rewire((1, 2), scripted([3, 3]))

        assert sorted(square_graph.edges) == [(0, 3), (1, 3), (2, 3), (3, 0)]
        assert square_graph.neighbors(1) == [3]
        assert 2 not in square_graph.neighbors(1)
        assert_adjacency_consistent(square_graph)

    def test_rewire_removes_key_recreated_by_draw(self, square_graph, scripted):
        # Endpoint 0 draws node 1, recreating (0, 1) before it is removed
        square_graph.edges[(0, 1)].hop_count = 5
        square_graph.rewire((0, 1), scripted([1, 2]))

        assert (0, 1) not in square_graph.edges
        assert sorted(square_graph.edges) == [(1, 2), (2, 3), (3, 0)]
        assert square_graph.neighbors(0) == [3]
        assert square_graph.neighbors(1) == [2]
        assert_adjacency_consistent(square_graph)

    def test_rewire_removes_key_recreated_by_self_draw(self, square_positions, scripted):
        graph = GraphStore(square_positions, [(2, 2), (0, 1)])
        graph.rewire((2, 2), scripted([2, 3]))

        assert (2, 2) not in graph.edges
        assert graph.edges[(2, 3)].is_synthetic
        assert graph.neighbors(2) == [3]
        assert_adjacency_consistent(graph)

    def test_rewire_does_not_move_nodes(self, square_graph, square_positions, scripted):
        square_graph.rewire((2, 3), scripted([0, 1]))
        np.testing.assert_array_equal(square_graph.positions, square_positions)

    def test_sweep_rewires_all_congested(self, square_graph, scripted):
        square_graph.edges[(0, 1)].hop_count = 5
        square_graph.edges[(2, 3)].hop_count = 7
        rng = scripted([2, 3, 0, 1])

        rewired = square_graph.congestion_sweep(5, rng)

        assert rewired == [(0, 1), (2, 3)]
        assert rng.exhausted
        assert (0, 1) not in square_graph.edges
        assert (2, 3) not in square_graph.edges
        assert square_graph.synthetic_edge_count() == 4
        assert_adjacency_consistent(square_graph)

    def test_sweep_skips_edge_replaced_earlier(self, square_graph, scripted):
        square_graph.edges[(0, 1)].hop_count = 5
        square_graph.edges[(1, 2)].hop_count = 5

        # Endpoint 1 of (0, 1) draws node 2, replacing (1, 2) with a fresh edge
        rewired = square_graph.congestion_sweep(5, scripted([3, 2]))

        assert rewired == [(0, 1)]
        assert square_graph.edges[(1, 2)].hop_count == 0

    def test_sweep_without_congestion(self, square_graph, scripted):
        rng = scripted([])
        assert square_graph.congestion_sweep(5, rng) == []
        assert square_graph.n_edges == 4

    def test_adjacency_consistent_after_many_sweeps(self, sphere_graph, rng):
        for _ in range(50):
            for edge in sphere_graph.edges.values():
                edge.hop_count += int(rng.integers(3))
            sphere_graph.congestion_sweep(4, rng)
            assert_adjacency_consistent(sphere_graph)
