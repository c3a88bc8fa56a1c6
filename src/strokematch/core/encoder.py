"""Shape encoding: turn a point sequence into map representations.

There are four representations, all sized by a single ``precision``:

- Grid map: the bounding box split into ``precision x precision`` equal cells.
  Each cell holds (points in cell / total points).
- Circle map: a circle around a center (center of mass or geometric median)
  whose radius reaches the furthest point, split into ``precision`` equal-width
  rings and 4 quadrants. Each ring/quadrant cell holds a density ratio.
- Flat maps (horizontal and vertical): the stroke is simplified into straight
  runs along one axis, and the axis is split into ``precision ** 2`` bins.
  Each bin counts the runs that overlap it.

Encoding is deterministic: the same points and precision always give the same
maps.
"""

import logging
from collections.abc import Sequence

from strokematch.config import EncoderConfig
from strokematch.core.geometry import bounds_of, center_of_mass, distance, geometric_median
from strokematch.domain import (
    QUADRANT_COUNT,
    Bounds,
    CircleMap,
    EncodedShape,
    FlatMap,
    GridMap,
    Point,
)
from strokematch.exceptions import InvalidPrecisionError

logger = logging.getLogger(__name__)

# Fraction of the perpendicular extent above which a jump between two
# consecutive points starts a new segment
SEGMENT_GAP_FRACTION = 1.0 / 6.0


def validate_precision(precision: int) -> int:
    """Check that precision is a positive integer.

    Raises:
        InvalidPrecisionError: If precision is not an int or is below 1
    """
    if isinstance(precision, bool) or not isinstance(precision, int) or precision < 1:
        raise InvalidPrecisionError(precision)
    return precision


def quadrant_index(point: Point, center: Point) -> int:
    """Get the quadrant of a point about a center.

    Quadrants are numbered clockwise starting from (+x, +y). A point lying on
    an axis belongs to the positive side of that axis.

    Returns:
        0 for (+, +), 1 for (+, -), 2 for (-, -), 3 for (-, +)
    """
    x_positive = point.x - center.x >= 0
    y_positive = point.y - center.y >= 0

    if x_positive:
        return 0 if y_positive else 1
    return 3 if y_positive else 2


def segment_lines(
    points: Sequence[Point],
    horizontal: bool,
    gap_threshold: float,
) -> list[tuple[float, float]]:
    """Reduce a stroke to straight runs along one axis.

    Tracks whether the stroke is moving towards increasing or decreasing
    coordinates. A run is closed at the current point, and a new one started at
    the next point with the direction flipped, when either:

    - the next two points both move against the current direction, or
    - the jump to the next point is longer than ``gap_threshold``.

    Args:
        points: The stroke, at least one point
        horizontal: Segment along x (True) or y (False)
        gap_threshold: Maximum distance between consecutive points within a run

    Returns:
        List of (start, end) coordinates along the axis, in drawing order.
        Strokes of 3 or fewer points give a single run from first to last point.

    Examples:
        >>> pts = [Point(x, 0.0) for x in (0, 1, 2, 3, 4, 3, 2, 1, 0)]
        >>> segment_lines(pts, horizontal=True, gap_threshold=100.0)
        [(0.0, 4.0), (3.0, 0.0)]
    """

    def coord(p: Point) -> float:
        return float(p.x if horizontal else p.y)

    if len(points) <= 3:
        return [(coord(points[0]), coord(points[-1]))]

    segments: list[tuple[float, float]] = []
    start = coord(points[0])
    # Look two points ahead for the initial direction
    increasing = coord(points[2]) > start

    for i in range(len(points) - 2):
        current = coord(points[i])
        following = coord(points[i + 1])
        after = coord(points[i + 2])

        if increasing:
            reversed_ = following < current and after < current
        else:
            reversed_ = following > current and after > current

        if reversed_ or distance(points[i], points[i + 1]) > gap_threshold:
            segments.append((start, current))
            start = following
            increasing = not increasing

    segments.append((start, coord(points[-1])))
    return segments


def bin_segments(
    segments: Sequence[tuple[float, float]],
    axis_start: float,
    axis_end: float,
    bin_count: int,
) -> list[int]:
    """Count the segments overlapping each equal-width bin of an axis range.

    Bins and segments are closed intervals, so a segment ending exactly on a
    bin edge counts towards both neighbouring bins.

    Args:
        segments: (start, end) pairs in either order
        axis_start: Low end of the axis range
        axis_end: High end of the axis range
        bin_count: Number of bins

    Returns:
        Segment count per bin

    Examples:
        >>> bin_segments([(0.0, 10.0), (25.0, 25.0)], 0.0, 100.0, 4)
        [2, 1, 0, 0]
    """
    bin_width = (axis_end - axis_start) / bin_count
    counts = [0] * bin_count

    for i in range(bin_count):
        bin_start = axis_start + i * bin_width
        bin_end = axis_start + (i + 1) * bin_width

        for seg_start, seg_end in segments:
            low = min(seg_start, seg_end)
            high = max(seg_start, seg_end)
            if low <= bin_end and high >= bin_start:
                counts[i] += 1

    return counts


class ShapeEncoder:
    """Encodes point sequences into EncodedShape instances.

    The encoder holds only the minimum-size constants from its config and is
    safe to share.

    Example:
        encoder = ShapeEncoder()
        shape = encoder.encode(points, precision=5)
        finer = encoder.reencode(shape, precision=8)
    """

    def __init__(self, config: EncoderConfig | None = None) -> None:
        """Initialize the encoder.

        Args:
            config: Minimum-size constants (defaults used if None)
        """
        self.config = config or EncoderConfig()

    def encode(self, points: Sequence[Point], precision: int) -> EncodedShape:
        """Encode a finalized stroke.

        Args:
            points: The stroke, possibly empty
            precision: Resolution of every map

        Returns:
            EncodedShape holding bounds and all four map representations

        Raises:
            InvalidPrecisionError: If precision is not a positive integer
        """
        validate_precision(precision)
        stored = tuple(points)
        bounds = bounds_of(stored)
        return self._build(stored, bounds, precision)

    def reencode(self, shape: EncodedShape, precision: int) -> EncodedShape:
        """Recompute every map of a shape from its stored points.

        Args:
            shape: Previously encoded shape
            precision: New resolution

        Returns:
            New EncodedShape with the same points and bounds

        Raises:
            InvalidPrecisionError: If precision is not a positive integer
        """
        validate_precision(precision)
        return self._build(shape.points, shape.bounds, precision)

    def _build(
        self, points: tuple[Point, ...], bounds: Bounds, precision: int
    ) -> EncodedShape:
        frame = self.grid_frame(bounds)
        shape = EncodedShape(
            precision=precision,
            points=points,
            bounds=bounds,
            grid_map=self.grid_map(points, frame, precision),
            circle_map_by_mass=self.circle_map(points, precision, use_median=False),
            circle_map_by_median=self.circle_map(points, precision, use_median=True),
            flat_map_horizontal=self.flat_map(points, bounds, frame, precision, horizontal=True),
            flat_map_vertical=self.flat_map(points, bounds, frame, precision, horizontal=False),
        )
        logger.debug("Encoded %d points at precision %d", len(points), precision)
        return shape

    def grid_frame(self, bounds: Bounds) -> Bounds:
        """Expand bounds to the configured minimum width and height.

        A box narrower (or shorter) than the minimum is widened symmetrically
        around its midpoint, so near-vertical and near-horizontal strokes do not
        collapse into a single column or row.

        Args:
            bounds: Raw bounds of a stroke

        Returns:
            Bounds at least ``min_width`` wide and ``min_height`` tall
        """
        left, right = bounds.left, bounds.right
        bottom, top = bounds.bottom, bounds.top

        if right - left < self.config.min_width:
            middle = (left + right) / 2
            left = middle - self.config.min_width / 2
            right = middle + self.config.min_width / 2

        if top - bottom < self.config.min_height:
            middle = (top + bottom) / 2
            bottom = middle - self.config.min_height / 2
            top = middle + self.config.min_height / 2

        return Bounds(left=left, right=right, top=top, bottom=bottom)

    def grid_map(self, points: Sequence[Point], frame: Bounds, precision: int) -> GridMap:
        """Build the grid map of a stroke.

        Args:
            points: The stroke
            frame: Minimum-size frame from ``grid_frame``
            precision: Number of rows and columns

        Returns:
            ``precision x precision`` density ratios, indexed [row][col]
        """
        cells = [[0.0] * precision for _ in range(precision)]

        if not points:
            return tuple(tuple(row) for row in cells)

        cell_width = frame.width / precision
        cell_height = frame.height / precision
        middle = precision // 2

        for p in points:
            row = int((p.y - frame.bottom) / cell_height)
            col = int((p.x - frame.left) / cell_width)

            # Points on the top/right edge land one past the last cell
            row = min(row, precision - 1)
            col = min(col, precision - 1)
            if row < 0:
                row = middle
            if col < 0:
                col = middle

            cells[row][col] += 1

        total = len(points)
        return tuple(tuple(count / total for count in row) for row in cells)

    def circle_map(
        self, points: Sequence[Point], precision: int, use_median: bool = True
    ) -> CircleMap:
        """Build a circle map of a stroke.

        Args:
            points: The stroke
            precision: Number of rings
            use_median: Center on the geometric median (True) or the
                center of mass (False)

        Returns:
            ``precision x 4`` density ratios, indexed [ring][quadrant]
        """
        cells = [[0.0] * QUADRANT_COUNT for _ in range(precision)]

        if not points:
            return tuple(tuple(ring) for ring in cells)

        center = geometric_median(points) if use_median else center_of_mass(points)

        radius = max(distance(p, center) for p in points)
        radius = max(radius, self.config.min_radius)
        ring_width = radius / precision

        for p in points:
            ring = min(int(distance(p, center) / ring_width), precision - 1)
            cells[ring][quadrant_index(p, center)] += 1

        total = len(points)
        return tuple(tuple(count / total for count in ring) for ring in cells)

    def flat_map(
        self,
        points: Sequence[Point],
        bounds: Bounds,
        frame: Bounds,
        precision: int,
        horizontal: bool = True,
    ) -> FlatMap:
        """Build a flat map of a stroke along one axis.

        Args:
            points: The stroke
            bounds: Raw bounds, whose perpendicular extent sets the gap threshold
            frame: Minimum-size frame whose extent along the axis is binned
            precision: Square root of the number of bins
            horizontal: Bin along x (True) or y (False)

        Returns:
            ``precision ** 2`` segment counts. All zero for fewer than 2 points.
        """
        bin_count = precision * precision

        if len(points) < 2:
            return (0,) * bin_count

        if horizontal:
            gap_threshold = bounds.height * SEGMENT_GAP_FRACTION
            axis_start, axis_end = frame.left, frame.right
        else:
            gap_threshold = bounds.width * SEGMENT_GAP_FRACTION
            axis_start, axis_end = frame.bottom, frame.top

        segments = segment_lines(points, horizontal, gap_threshold)
        return tuple(bin_segments(segments, axis_start, axis_end, bin_count))


_default_encoder = ShapeEncoder()


def encode(
    points: Sequence[Point], precision: int, config: EncoderConfig | None = None
) -> EncodedShape:
    """Encode a stroke at the given precision.

    Args:
        points: The stroke, possibly empty
        precision: Resolution of every map
        config: Minimum-size constants (defaults used if None)

    Returns:
        EncodedShape of the stroke
    """
    encoder = _default_encoder if config is None else ShapeEncoder(config)
    return encoder.encode(points, precision)
