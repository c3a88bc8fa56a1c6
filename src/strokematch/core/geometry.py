"""Geometric operations over point sequences.

This module provides core mathematical utilities for:
- Euclidean distance
- Center of mass (arithmetic mean)
- Geometric median (Weiszfeld's algorithm)
- Bounding extrema

All functions are pure and stateless.
"""

import math
from collections.abc import Sequence

from strokematch.domain import Bounds, Point

# Weiszfeld stopping criteria
MEDIAN_TOLERANCE = 0.001
MEDIAN_MAX_ITERATIONS = 500


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def center_of_mass(points: Sequence[Point]) -> Point:
    """Calculate the arithmetic mean of a point sequence.

    Args:
        points: Points to average

    Returns:
        The mean point, or the origin for an empty sequence

    Examples:
        >>> center_of_mass([Point(0.0, 0.0), Point(4.0, 2.0)])
        Point(x=2.0, y=1.0)
    """
    n = len(points)
    if n == 0:
        return Point(0.0, 0.0)

    sum_x = 0.0
    sum_y = 0.0
    for p in points:
        sum_x += p.x
        sum_y += p.y

    return Point(sum_x / n, sum_y / n)


def geometric_median(
    points: Sequence[Point],
    tolerance: float = MEDIAN_TOLERANCE,
    max_iterations: int = MEDIAN_MAX_ITERATIONS,
) -> Point:
    """Approximate the geometric median using Weiszfeld's algorithm.

    The estimate starts at the center of mass and is repeatedly replaced by the
    inverse-distance weighted average of all points. Points coinciding with the
    current estimate are left out of that iteration's sum. Iteration stops when
    the estimate moves less than ``tolerance`` or after ``max_iterations``.

    Args:
        points: Points to find the median of
        tolerance: Convergence threshold on successive-estimate displacement
        max_iterations: Hard cap on the number of iterations

    Returns:
        Approximate geometric median. Sequences with fewer than 2 points
        return their center of mass.

    Examples:
        >>> square = [Point(0.0, 0.0), Point(2.0, 0.0), Point(2.0, 2.0), Point(0.0, 2.0)]
        >>> geometric_median(square)
        Point(x=1.0, y=1.0)
    """
    if len(points) < 2:
        return center_of_mass(points)

    estimate = center_of_mass(points)

    for _ in range(max_iterations):
        x_numerator = 0.0
        y_numerator = 0.0
        denominator = 0.0

        for p in points:
            d = distance(estimate, p)
            if d != 0:
                x_numerator += p.x / d
                y_numerator += p.y / d
                denominator += 1.0 / d

        # Every point sits on the estimate
        if denominator == 0:
            return estimate

        next_estimate = Point(x_numerator / denominator, y_numerator / denominator)

        if distance(estimate, next_estimate) < tolerance:
            return next_estimate

        estimate = next_estimate

    return estimate


def bounds_of(points: Sequence[Point]) -> Bounds:
    """Gather the extrema of a point sequence in a single pass.

    Args:
        points: Points to bound

    Returns:
        Bounds of the points, all zero for an empty sequence

    Examples:
        >>> bounds_of([Point(10.0, 20.0), Point(100.0, 30.0), Point(50.0, 150.0)])
        Bounds(left=10.0, right=100.0, top=150.0, bottom=20.0)
    """
    if not points:
        return Bounds()

    left = right = points[0].x
    top = bottom = points[0].y

    for p in points:
        if p.x < left:
            left = p.x
        if p.x > right:
            right = p.x
        if p.y > top:
            top = p.y
        if p.y < bottom:
            bottom = p.y

    return Bounds(left=left, right=right, top=top, bottom=bottom)
