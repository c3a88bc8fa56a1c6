"""Unit tests for geometric operations.

Tests cover:
- Distance and center of mass
- Weiszfeld geometric median convergence and degenerate input
- Bounding extrema
"""

import math

import pytest

from strokematch.core.geometry import bounds_of, center_of_mass, distance, geometric_median
from strokematch.domain import Bounds, Point


class TestDistance:
    """Tests for Euclidean distance."""

    def test_pythagorean_triple(self):
        """3-4-5 triangle."""
        assert distance(Point(0.0, 0.0), Point(3.0, 4.0)) == 5.0

    def test_zero_distance(self):
        """A point is at distance zero from itself."""
        assert distance(Point(7.0, -2.0), Point(7.0, -2.0)) == 0.0


class TestCenterOfMass:
    """Tests for the arithmetic mean of points."""

    def test_empty_sequence_is_origin(self):
        """No points gives the origin."""
        assert center_of_mass([]) == Point(0.0, 0.0)

    def test_single_point(self):
        """One point is its own center."""
        assert center_of_mass([Point(4.0, 9.0)]) == Point(4.0, 9.0)

    def test_mean_of_points(self):
        """Mean of two points is their midpoint."""
        assert center_of_mass([Point(0.0, 0.0), Point(4.0, 2.0)]) == Point(2.0, 1.0)

    def test_duplicates_count(self):
        """Repeated points pull the center towards them."""
        points = [Point(0.0, 0.0), Point(0.0, 0.0), Point(3.0, 0.0)]
        assert center_of_mass(points) == Point(1.0, 0.0)


class TestGeometricMedian:
    """Tests for Weiszfeld's algorithm."""

    def test_fewer_than_two_points_uses_center_of_mass(self):
        """Empty and single-point sequences fall back to the mean."""
        assert geometric_median([]) == Point(0.0, 0.0)
        assert geometric_median([Point(5.0, 6.0)]) == Point(5.0, 6.0)

    def test_square_median_is_center(self):
        """Symmetric input converges to the center."""
        square = [Point(0.0, 0.0), Point(2.0, 0.0), Point(2.0, 2.0), Point(0.0, 2.0)]
        median = geometric_median(square)
        assert median.x == pytest.approx(1.0)
        assert median.y == pytest.approx(1.0)

    def test_triangle_converges_to_fermat_point(self):
        """For a triangle with all angles under 120 degrees the median is the Fermat point."""
        triangle = [Point(0.0, 0.0), Point(4.0, 0.0), Point(2.0, 3.0)]
        median = geometric_median(triangle)
        assert median.x == pytest.approx(2.0, abs=0.01)
        assert median.y == pytest.approx(2.0 / math.sqrt(3.0), abs=0.01)

    def test_coincident_points_return_that_point(self):
        """All points on one spot do not divide by zero."""
        points = [Point(5.0, 5.0), Point(5.0, 5.0), Point(5.0, 5.0)]
        assert geometric_median(points) == Point(5.0, 5.0)

    def test_median_resists_outlier(self):
        """The median stays closer to the cluster than the mean does."""
        points = [
            Point(0.0, 0.0),
            Point(1.0, 0.0),
            Point(0.0, 1.0),
            Point(1.0, 1.0),
            Point(100.0, 100.0),
        ]
        median = geometric_median(points)
        mean = center_of_mass(points)
        cluster_center = Point(0.5, 0.5)
        assert distance(median, cluster_center) < distance(mean, cluster_center)

    def test_iteration_cap(self):
        """A single iteration returns the first weighted average."""
        triangle = [Point(0.0, 0.0), Point(4.0, 0.0), Point(2.0, 3.0)]
        one_step = geometric_median(triangle, max_iterations=1)
        converged = geometric_median(triangle)
        assert one_step != converged


class TestBoundsOf:
    """Tests for bounding extrema."""

    def test_empty_sequence(self):
        """No points gives all-zero bounds."""
        assert bounds_of([]) == Bounds()

    def test_extrema(self):
        """Bounds enclose every point."""
        points = [Point(10.0, 20.0), Point(100.0, 30.0), Point(50.0, 150.0)]
        assert bounds_of(points) == Bounds(left=10.0, right=100.0, top=150.0, bottom=20.0)

    def test_single_point_has_zero_extent(self):
        """A single point has zero width and height."""
        b = bounds_of([Point(3.0, 4.0)])
        assert b.width == 0.0
        assert b.height == 0.0
        assert b.left == 3.0
        assert b.top == 4.0
