"""Pairwise comparison of encoded shapes.

Every difference function follows the same contract:
- lower means more similar, 0 means identical representations
- shapes of different precision (or a missing shape) are not comparable and
  yield ``MAX_DIFFERENCE`` instead of raising

Grid and circle differences are mean squared errors over density ratios.
Flat map differences are mismatch fractions, minimised over small shifts.
"""

import logging
from collections.abc import Sequence

from strokematch.domain import EncodedShape

logger = logging.getLogger(__name__)

# Difference returned for shapes that cannot be compared
MAX_DIFFERENCE = 100.0


def _same_precision(shape: EncodedShape, reference: EncodedShape) -> bool:
    if shape.precision != reference.precision:
        logger.debug(
            "Precision mismatch: %d vs %d", shape.precision, reference.precision
        )
        return False
    return True


def _mean_squared_error(
    cells: Sequence[Sequence[float]], reference: Sequence[Sequence[float]]
) -> float:
    total_sq_error = 0.0
    count = 0
    for row, ref_row in zip(cells, reference):
        for value, ref_value in zip(row, ref_row):
            diff = value - ref_value
            total_sq_error += diff * diff
            count += 1
    return total_sq_error / count if count else 0.0


def grid_difference(shape: EncodedShape | None, reference: EncodedShape | None) -> float:
    """Mean squared error between two grid maps.

    Args:
        shape: Shape being classified
        reference: Stored reference shape

    Returns:
        MSE over all ``precision ** 2`` cells, or ``MAX_DIFFERENCE``
    """
    if shape is None or reference is None:
        return MAX_DIFFERENCE
    if not _same_precision(shape, reference):
        return MAX_DIFFERENCE
    return _mean_squared_error(shape.grid_map, reference.grid_map)


def circle_difference(
    shape: EncodedShape | None,
    reference: EncodedShape | None,
    use_median: bool = True,
) -> float:
    """Mean squared error between two circle maps.

    Args:
        shape: Shape being classified
        reference: Stored reference shape
        use_median: Compare the median-centered maps (default) or the
            mass-centered maps

    Returns:
        MSE over all ``precision x 4`` cells, or ``MAX_DIFFERENCE``
    """
    if shape is None or reference is None:
        return MAX_DIFFERENCE
    if not _same_precision(shape, reference):
        return MAX_DIFFERENCE
    return _mean_squared_error(shape.circle_map(use_median), reference.circle_map(use_median))


def flat_sequence_difference(
    values: Sequence[int], reference: Sequence[int], max_shift: int
) -> float:
    """Smallest mismatch fraction between two equal-length bin arrays.

    Without shifting, only interior bins are compared (the first and last
    bins are unreliable) and mismatches are divided by the full length. Then
    ``values`` is slid 1..max_shift bins against ``reference`` in both
    directions; each shift compares the overlapping bins and divides its
    mismatches by the overlap length.

    Args:
        values: Bins of the shape being classified
        reference: Bins of the reference shape
        max_shift: Largest shift tried in each direction

    Returns:
        Minimum mismatch fraction over all shifts, zero shift included

    Examples:
        >>> flat_sequence_difference([0, 1, 2, 0, 0], [0, 0, 1, 2, 0], 2)
        0.0
    """
    length = len(values)
    if length == 0:
        return 0.0

    lowest = 0.0
    for i in range(1, length - 1):
        if values[i] != reference[i]:
            lowest += 1.0 / length

    for shift in range(1, max_shift + 1):
        overlap = length - shift
        if overlap <= 0:
            break

        # values shifted right against reference
        diff = 0.0
        for i in range(shift, length):
            if values[i] != reference[i - shift]:
                diff += 1.0 / overlap
        lowest = min(lowest, diff)

        # values shifted left against reference
        diff = 0.0
        for i in range(overlap):
            if values[i] != reference[i + shift]:
                diff += 1.0 / overlap
        lowest = min(lowest, diff)

    return lowest


def flat_map_difference(
    shape: EncodedShape | None,
    reference: EncodedShape | None,
    horizontal: bool = True,
) -> float:
    """Shift-tolerant mismatch fraction between two flat maps.

    Shifts of up to ``precision`` bins either way are tried, which absorbs
    small offsets between otherwise identical strokes.

    Args:
        shape: Shape being classified
        reference: Stored reference shape
        horizontal: Compare horizontal (True) or vertical (False) flat maps

    Returns:
        Mismatch fraction in [0, 1], or ``MAX_DIFFERENCE``
    """
    if shape is None or reference is None:
        return MAX_DIFFERENCE
    if not _same_precision(shape, reference):
        return MAX_DIFFERENCE
    return flat_sequence_difference(
        shape.flat_map(horizontal), reference.flat_map(horizontal), shape.precision
    )


def bias_correct(grid: float, circle: float) -> tuple[float, float]:
    """Pull the larger of the grid and circle differences towards the smaller.

    Both maps describe 2D point density, so a strong match on one and a weak
    match on the other is treated as noise. The pull weakens as the gap grows:
    ``bias = 1 / (2 * (1 + gap))`` and the larger value becomes
    ``smaller + gap * bias``.

    Args:
        grid: Scaled grid difference
        circle: Scaled circle difference

    Returns:
        Corrected (grid, circle) pair

    Examples:
        >>> bias_correct(0.0, 4.0)
        (0.0, 0.4)
    """
    if circle < grid:
        gap = grid - circle
        bias = 1 / (2 * (1 + gap))
        grid = circle + gap * bias
    elif grid < circle:
        gap = circle - grid
        bias = 1 / (2 * (1 + gap))
        circle = grid + gap * bias
    return grid, circle
