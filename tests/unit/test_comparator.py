"""Unit tests for shape comparison.

Tests cover:
- Grid and circle mean squared errors
- Shift-tolerant flat map mismatch
- Incomparable shapes (precision mismatch, missing shape)
- Grid/circle bias coupling
"""

import pytest

from strokematch.core.comparator import (
    MAX_DIFFERENCE,
    bias_correct,
    circle_difference,
    flat_map_difference,
    flat_sequence_difference,
    grid_difference,
)
from strokematch.core.encoder import encode
from strokematch.domain import Point


@pytest.fixture
def zigzag():
    return encode([Point(0.0, 0.0), Point(40.0, 90.0), Point(80.0, 0.0), Point(120.0, 90.0)], 5)


@pytest.fixture
def single_point():
    return encode([Point(100.0, 100.0)], 5)


@pytest.fixture
def empty():
    return encode([], 5)


class TestIdenticalShapes:
    """A shape compared with itself differs by nothing."""

    def test_all_differences_zero(self, zigzag):
        """Every representation difference is zero."""
        assert grid_difference(zigzag, zigzag) == 0.0
        assert circle_difference(zigzag, zigzag) == 0.0
        assert circle_difference(zigzag, zigzag, use_median=False) == 0.0
        assert flat_map_difference(zigzag, zigzag) == 0.0
        assert flat_map_difference(zigzag, zigzag, horizontal=False) == 0.0


class TestIncomparableShapes:
    """Shapes that cannot be compared yield the sentinel."""

    def test_precision_mismatch(self, zigzag):
        """Different precision gives MAX_DIFFERENCE for every map."""
        other = encode(list(zigzag.points), 4)

        assert grid_difference(zigzag, other) == MAX_DIFFERENCE
        assert circle_difference(zigzag, other) == MAX_DIFFERENCE
        assert flat_map_difference(zigzag, other) == MAX_DIFFERENCE
        assert flat_map_difference(zigzag, other, horizontal=False) == MAX_DIFFERENCE

    def test_missing_shape(self, zigzag):
        """A missing shape on either side gives MAX_DIFFERENCE."""
        assert grid_difference(None, zigzag) == MAX_DIFFERENCE
        assert circle_difference(zigzag, None) == MAX_DIFFERENCE
        assert flat_map_difference(None, None) == MAX_DIFFERENCE


class TestDensityDifferences:
    """Tests for grid and circle mean squared errors."""

    def test_grid_single_point_vs_empty(self, single_point, empty):
        """One full cell out of 25 differs."""
        assert grid_difference(single_point, empty) == pytest.approx(1 / 25)

    def test_circle_single_point_vs_empty(self, single_point, empty):
        """One full cell out of 20 differs."""
        assert circle_difference(single_point, empty) == pytest.approx(1 / 20)
        assert circle_difference(single_point, empty, use_median=False) == pytest.approx(1 / 20)

    def test_symmetric(self, zigzag, single_point):
        """Swapping the arguments gives the same MSE."""
        assert grid_difference(zigzag, single_point) == grid_difference(single_point, zigzag)
        assert circle_difference(zigzag, single_point) == circle_difference(
            single_point, zigzag
        )

    def test_translation_invariant(self, zigzag):
        """Moving a stroke does not change its maps."""
        moved = encode([Point(p.x + 300.0, p.y - 50.0) for p in zigzag.points], 5)

        assert grid_difference(zigzag, moved) == pytest.approx(0.0)
        assert circle_difference(zigzag, moved) == pytest.approx(0.0)


class TestFlatSequenceDifference:
    """Tests for shift-tolerant flat map mismatch."""

    def test_identical(self):
        """Equal sequences do not differ."""
        assert flat_sequence_difference([1, 2, 3, 2, 1], [1, 2, 3, 2, 1], 2) == 0.0

    def test_edges_ignored_without_shift(self):
        """Only interior bins count at zero shift."""
        assert flat_sequence_difference([9, 1, 1, 1, 9], [0, 1, 1, 1, 0], 0) == 0.0

    def test_all_different(self):
        """Interior mismatches are divided by the full length."""
        values = [1] * 9
        reference = [2] * 9
        # Every shift mismatches fully, so the zero-shift 7/9 is lowest
        assert flat_sequence_difference(values, reference, 3) == pytest.approx(7 / 9)

    def test_shift_right_absorbs_offset(self):
        """A pattern offset by one bin matches after shifting."""
        assert flat_sequence_difference([0, 0, 1, 2, 0], [0, 1, 2, 0, 0], 2) == 0.0

    def test_shift_left_absorbs_offset(self):
        """Shifting works in both directions."""
        assert flat_sequence_difference([0, 1, 2, 0, 0], [0, 0, 1, 2, 0], 2) == 0.0

    def test_offset_beyond_max_shift(self):
        """Offsets larger than the allowed shift are not absorbed."""
        values = [1, 2, 0, 0, 0, 0]
        reference = [0, 0, 0, 0, 1, 2]
        assert flat_sequence_difference(values, reference, 1) > 0.0
        assert flat_sequence_difference(values, reference, 4) == 0.0

    def test_shift_longer_than_sequence(self):
        """Shifts beyond the sequence length are skipped."""
        assert flat_sequence_difference([1, 2], [3, 4], 10) == pytest.approx(0.0)

    def test_empty_sequences(self):
        """Empty sequences do not differ."""
        assert flat_sequence_difference([], [], 3) == 0.0

    def test_result_is_fraction(self):
        """The mismatch fraction stays within [0, 1]."""
        result = flat_sequence_difference([0, 3, 0, 3, 0, 3], [3, 0, 1, 0, 2, 0], 2)
        assert 0.0 <= result <= 1.0


class TestFlatMapDifference:
    """Tests for flat map comparison of encoded shapes."""

    def test_single_point_vs_empty(self, single_point, empty):
        """Both have all-zero flat maps."""
        assert flat_map_difference(single_point, empty) == 0.0
        assert flat_map_difference(single_point, empty, horizontal=False) == 0.0

    def test_different_strokes_differ(self, zigzag, empty):
        """A zigzag does not match the empty shape."""
        assert flat_map_difference(zigzag, empty) > 0.0


class TestBiasCorrect:
    """Tests for the grid/circle bias coupling."""

    def test_grid_pulled_towards_circle(self):
        """The larger grid value moves towards the circle value."""
        grid, circle = bias_correct(10.0, 2.0)
        assert grid == pytest.approx(2.0 + 8.0 / 18.0)
        assert circle == 2.0

    def test_circle_pulled_towards_grid(self):
        """The larger circle value moves towards the grid value."""
        grid, circle = bias_correct(0.0, 4.0)
        assert grid == 0.0
        assert circle == pytest.approx(0.4)

    def test_equal_values_unchanged(self):
        """Equal values are left alone."""
        assert bias_correct(3.0, 3.0) == (3.0, 3.0)

    def test_symmetric(self):
        """Swapping the inputs swaps the outputs."""
        grid, circle = bias_correct(7.0, 1.5)
        assert bias_correct(1.5, 7.0) == (circle, grid)

    def test_order_preserved(self):
        """The corrected larger value never drops below the smaller one."""
        for larger in (0.1, 1.0, 5.0, 50.0):
            grid, circle = bias_correct(larger, 0.0)
            assert 0.0 <= grid <= larger
            assert circle == 0.0


class TestMissingShapes:
    """Tests for comparisons with a missing shape on either side."""

    @pytest.mark.parametrize(
        "difference", [grid_difference, circle_difference, flat_map_difference]
    )
    def test_missing_either_side(self, zigzag, difference):
        """A missing shape on either side yields the maximum difference."""
        assert difference(zigzag, None) == MAX_DIFFERENCE
        assert difference(None, zigzag) == MAX_DIFFERENCE
        assert difference(None, None) == MAX_DIFFERENCE
