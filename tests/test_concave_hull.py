"""
Tests for concave hull refinement.
"""

import numpy as np
import pytest

from zonehull.core.geometry import is_simple_polygon, point_in_polygon
from zonehull.hulls.convex import build_convex_hull
from zonehull.hulls.concave import refine_concave_hull


# Square with one interior point close to the top edge, off its midpoint
SQUARE_WITH_DENT = np.array([
    [0, 0], [10, 0], [10, 10], [0, 10], [3, 9]
], dtype=float)


def ring_with_interior(seed=3, n_ring=40, n_inner=80):
    """Noisy ring of points with a scatter of interior points."""
    rng = np.random.default_rng(seed)
    angles = rng.uniform(0, 2 * np.pi, n_ring)
    ring = np.column_stack([50 * np.cos(angles), 30 * np.sin(angles)])
    inner = rng.uniform(-1, 1, size=(n_inner, 2)) * [35.0, 18.0]
    return np.vstack([ring, inner])


CONCAVITY_GRID = [0.5, 1.0, 1.5, 2.0, 3.0, 4.0, 6.0, 8.0]

CLOUD_SEEDS = list(range(24))


def uniform_cloud(seed):
    """Uniform scatter of 6 to 60 points in a 100 x 100 square."""
    rng = np.random.default_rng(seed)
    n = int(rng.integers(6, 61))
    return rng.uniform(0, 100, size=(n, 2))


def positions_in(result, rows):
    """Index of each row in result, matched exactly."""
    positions = []
    for row in rows:
        matches = np.flatnonzero(np.all(result == row, axis=1))
        assert len(matches) == 1
        positions.append(int(matches[0]))
    return positions


class TestConvexPassthrough:
    """Cases where the convex hull comes back unchanged."""

    def test_zero_concavity_returns_hull(self):
        """concavity=0 returns exactly the hull points in hull order."""
        points = ring_with_interior()
        hull = build_convex_hull(points)

        result = refine_concave_hull(points, hull, concavity=0.0)

        np.testing.assert_array_equal(result, points[hull])

    def test_fewer_than_four_points(self):
        """Triangles are not refined."""
        points = np.array([[0, 0], [4, 0], [2, 3]], dtype=float)
        hull = build_convex_hull(points)

        result = refine_concave_hull(points, hull)

        np.testing.assert_array_equal(result, points[hull])

    def test_no_interior_points(self):
        """A hull using every point has nothing to insert."""
        angles = np.arange(32) * 2 * np.pi / 32
        points = np.column_stack([100 * np.cos(angles), 100 * np.sin(angles)])
        hull = build_convex_hull(points)

        result = refine_concave_hull(points, hull, concavity=2.0)

        np.testing.assert_array_equal(result, points[hull])

    def test_short_hull(self):
        """A hull with fewer than three vertices is returned as is."""
        points = np.array([[0, 0], [5, 5], [0, 0], [5, 5]], dtype=float)
        hull = build_convex_hull(points)

        result = refine_concave_hull(points, hull)

        assert len(result) == 2

    def test_drops_third_coordinate(self):
        """Output is 2D even for 3D input."""
        points = np.column_stack([SQUARE_WITH_DENT, np.arange(5.0)])
        result = refine_concave_hull(points, build_convex_hull(points), concavity=0.0)
        assert result.shape == (4, 2)


class TestEdgeRelaxation:
    """Tests for inward insertion of interior points."""

    def test_point_near_edge_inserted(self):
        """The dent point is pulled into the top edge."""
        hull = build_convex_hull(SQUARE_WITH_DENT)
        assert hull == [0, 1, 2, 3]

        result = refine_concave_hull(SQUARE_WITH_DENT, hull, concavity=2.0)

        expected = np.array([[0, 0], [10, 0], [10, 10], [3, 9], [0, 10]], dtype=float)
        np.testing.assert_array_equal(result, expected)

    def test_low_concavity_rejects_point(self):
        """At concavity 1 the dent is too far from both endpoints."""
        hull = build_convex_hull(SQUARE_WITH_DENT)
        result = refine_concave_hull(SQUARE_WITH_DENT, hull, concavity=1.0)
        assert len(result) == 4

    def test_vertex_count_non_decreasing_in_concavity(self):
        """Raising concavity never loses boundary vertices."""
        hull = build_convex_hull(SQUARE_WITH_DENT)
        counts = [
            len(refine_concave_hull(SQUARE_WITH_DENT, hull, concavity=c))
            for c in [0.0, 0.5, 1.0, 2.0, 4.0, 8.0]
        ]
        assert counts == [4, 4, 4, 5, 5, 5]

    def test_min_edge_length_blocks_refinement(self):
        """Edges shorter than min_edge_length are left alone."""
        hull = build_convex_hull(SQUARE_WITH_DENT)

        result = refine_concave_hull(SQUARE_WITH_DENT, hull, concavity=2.0, min_edge_length=20.0)
        assert len(result) == 4

        result = refine_concave_hull(SQUARE_WITH_DENT, hull, concavity=2.0, min_edge_length=10.0)
        assert len(result) == 5

    def test_far_interior_point_ignored(self):
        """A point at the center is too far from every edge."""
        points = np.array([[0, 0], [10, 0], [10, 10], [0, 10], [5, 5]], dtype=float)
        result = refine_concave_hull(points, build_convex_hull(points), concavity=2.0)
        assert len(result) == 4


class TestRefinementInvariants:
    """Properties that hold for any reasonable point cloud."""

    @pytest.mark.parametrize("concavity", CONCAVITY_GRID)
    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_hull_vertices_keep_cyclic_order(self, seed, concavity):
        """Every hull vertex survives, in order, starting at the first."""
        points = ring_with_interior(seed)
        hull = build_convex_hull(points)

        result = refine_concave_hull(points, hull, concavity=concavity)

        positions = positions_in(result, points[hull])
        assert positions[0] == 0
        assert positions == sorted(positions)

    @pytest.mark.parametrize("seed", CLOUD_SEEDS)
    def test_random_cloud_keeps_cyclic_order(self, seed):
        points = uniform_cloud(seed)
        hull = build_convex_hull(points)

        for concavity in CONCAVITY_GRID:
            result = refine_concave_hull(points, hull, concavity=concavity)
            positions = positions_in(result, points[hull])
            assert positions[0] == 0
            assert positions == sorted(positions)

    @pytest.mark.parametrize("concavity", CONCAVITY_GRID)
    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_no_self_intersections(self, seed, concavity):
        """The refined outline is a simple polygon."""
        points = ring_with_interior(seed)
        result = refine_concave_hull(points, build_convex_hull(points), concavity=concavity)
        assert is_simple_polygon(result)

    @pytest.mark.parametrize("seed", CLOUD_SEEDS)
    def test_random_cloud_stays_simple(self, seed):
        points = uniform_cloud(seed)
        hull = build_convex_hull(points)

        for concavity in CONCAVITY_GRID:
            assert is_simple_polygon(refine_concave_hull(points, hull, concavity=concavity))

    @pytest.mark.parametrize("seed", CLOUD_SEEDS)
    def test_raising_concavity_keeps_vertices(self, seed):
        """A larger concavity keeps every vertex a smaller one produced."""
        points = uniform_cloud(seed)
        hull = build_convex_hull(points)

        previous = refine_concave_hull(points, hull, concavity=0.0)
        for concavity in CONCAVITY_GRID:
            result = refine_concave_hull(points, hull, concavity=concavity)

            assert len(result) >= len(previous)
            kept = set(map(tuple, result))
            assert all(tuple(row) in kept for row in previous)
            previous = result

    @pytest.mark.parametrize("seed", [1, 2, 3, 5])
    def test_ring_vertex_count_non_decreasing(self, seed):
        points = ring_with_interior(seed)
        hull = build_convex_hull(points)

        counts = [
            len(refine_concave_hull(points, hull, concavity=c))
            for c in [0.0] + CONCAVITY_GRID
        ]
        assert counts == sorted(counts)

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_each_point_used_once(self, seed):
        """Output vertices are distinct input points."""
        points = ring_with_interior(seed)
        result = refine_concave_hull(points, build_convex_hull(points), concavity=3.0)

        assert len(result) <= len(points)
        assert len(np.unique(result, axis=0)) == len(result)
        for row in result:
            assert np.any(np.all(points == row, axis=1))

    def test_refined_boundary_inside_convex_hull(self):
        """Refinement only moves the outline inward."""
        points = ring_with_interior(5)
        hull = build_convex_hull(points)
        result = refine_concave_hull(points, hull, concavity=2.0)

        assert len(result) >= len(hull)
        centroid = np.mean(result, axis=0)
        for vertex in result:
            # Pull each vertex slightly toward the centroid to avoid edges
            nudged = vertex + 1e-6 * (centroid - vertex)
            assert point_in_polygon(nudged, points[hull])


class TestArgumentValidation:
    """Invalid parameters raise."""

    def test_negative_concavity(self):
        with pytest.raises(ValueError, match="concavity"):
            refine_concave_hull(SQUARE_WITH_DENT, [0, 1, 2, 3], concavity=-1.0)

    def test_negative_min_edge_length(self):
        with pytest.raises(ValueError, match="min_edge_length"):
            refine_concave_hull(SQUARE_WITH_DENT, [0, 1, 2, 3], min_edge_length=-0.5)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
