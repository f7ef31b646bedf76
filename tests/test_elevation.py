"""
Tests for recovering z of refined boundary points.
"""

import numpy as np
import pytest

from zonehull.projection.elevation import project_elevation


ORIGINALS = np.array([
    [0.0, 0.0, 5.0],
    [10.0, 0.0, 7.0],
    [0.0, 10.0, 9.0],
])


class TestToleranceMatch:
    """Points close to a source sample take its z exactly."""

    def test_exact_match(self):
        result = project_elevation([[10.0, 0.0]], ORIGINALS)
        np.testing.assert_array_equal(result, [[10.0, 0.0, 7.0]])

    def test_within_tolerance(self):
        """Offsets below the tolerance on both axes still match."""
        result = project_elevation([[0.005, -0.005]], ORIGINALS, tolerance=0.01)
        np.testing.assert_array_equal(result, [[0.005, -0.005, 5.0]])

    def test_first_match_wins(self):
        """The first sample within tolerance is used even if another is nearer."""
        originals = np.array([[0.0, 0.0, 1.0], [0.005, 0.0, 2.0]])
        result = project_elevation([[0.004, 0.0]], originals, tolerance=0.01)
        assert result[0, 2] == 1.0

    def test_tolerance_is_strict(self):
        """An offset equal to the tolerance is not a match."""
        originals = np.array([[0.0, 0.0, 1.0], [0.5, 0.0, 2.0]])
        result = project_elevation([[0.25, 0.0]], originals, tolerance=0.25)
        # No match, nearest by distance is a tie and the first sample wins
        assert result[0, 2] == 1.0


class TestNearestFallback:
    """Points without a close sample take the nearest sample's z."""

    def test_nearest_sample(self):
        result = project_elevation([[6.0, 1.0]], ORIGINALS)
        np.testing.assert_array_equal(result, [[6.0, 1.0, 7.0]])

    def test_tight_tolerance_falls_back_to_nearest(self):
        """Shrinking the tolerance turns a match into a nearest lookup."""
        originals = np.array([[0.0, 0.0, 1.0], [0.005, 0.0, 2.0]])
        result = project_elevation([[0.004, 0.0]], originals, tolerance=0.001)
        assert result[0, 2] == 2.0

    def test_equidistant_uses_first(self):
        """Ties go to the earlier sample."""
        originals = np.array([[-1.0, 0.0, 3.0], [1.0, 0.0, 4.0]])
        result = project_elevation([[0.0, 5.0]], originals)
        assert result[0, 2] == 3.0

    def test_fallback_uses_horizontal_distance(self):
        """Sample heights do not influence which one is nearest."""
        originals = np.array([[0.0, 0.0, 1000.0], [3.0, 0.0, -1.0]])
        result = project_elevation([[1.0, 0.0]], originals)
        assert result[0, 2] == 1000.0


class TestShapes:
    """Output shape and degenerate inputs."""

    def test_no_originals_gives_zero(self):
        result = project_elevation([[1.0, 2.0], [3.0, 4.0]], np.zeros((0, 3)))
        np.testing.assert_array_equal(result, [[1.0, 2.0, 0.0], [3.0, 4.0, 0.0]])

    def test_empty_input(self):
        result = project_elevation(np.zeros((0, 2)), ORIGINALS)
        assert result.shape == (0, 3)

    def test_xy_preserved(self):
        """x and y pass through untouched, one row per input."""
        points = np.array([[1.5, -2.5], [10.0, 0.0], [0.0, 9.0]])
        result = project_elevation(points, ORIGINALS)

        assert result.shape == (3, 3)
        np.testing.assert_array_equal(result[:, :2], points)
        np.testing.assert_array_equal(result[:, 2], [5.0, 7.0, 9.0])

    def test_rejects_2d_originals(self):
        with pytest.raises(ValueError):
            project_elevation([[0.0, 0.0]], np.zeros((3, 2)) + 1.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
