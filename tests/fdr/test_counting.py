"""
Tests for exceedance counting.

Validates:
    - strict comparisons
    - NaN and Inf never counted on either side
    - vectorised counts agree with the scalar primitives
    - direction-aware counting flips the operator at zero
"""

import numpy as np
import pytest

from pypropr.fdr._counting import (
    count_greater_than,
    count_less_than,
    counts_greater_than,
    counts_less_than,
    directional_counts,
)


class TestScalarCounts:

    def test_greater_than_is_strict(self):
        assert count_greater_than([1.0, 2.0, 3.0], 2.0) == 1

    def test_less_than_is_strict(self):
        assert count_less_than([1.0, 2.0, 3.0], 2.0) == 1

    def test_nan_not_counted(self):
        values = [np.nan, 0.5, np.nan]
        assert count_greater_than(values, 0.0) == 1
        assert count_less_than(values, 1.0) == 1

    def test_inf_not_counted(self):
        values = [-np.inf, 0.0, 1.0, np.nan, np.inf]
        assert count_greater_than(values, 0.5) == 1
        assert count_less_than(values, 0.5) == 1

    def test_matrix_input_flattened(self):
        assert count_greater_than(np.array([[1.0, 2.0], [3.0, 4.0]]), 2.5) == 2

    def test_returns_python_int(self):
        assert isinstance(count_less_than([1.0], 2.0), int)

    def test_empty(self):
        assert count_greater_than([], 0.0) == 0
        assert count_less_than([], 0.0) == 0


class TestVectorisedCounts:

    def test_agrees_with_scalar_with_ties(self, rng):
        values = rng.integers(-5, 6, size=200).astype(float)
        values[::17] = np.nan
        cutoffs = np.linspace(-6, 6, 25)

        expected_gt = [count_greater_than(values, c) for c in cutoffs]
        expected_lt = [count_less_than(values, c) for c in cutoffs]

        np.testing.assert_array_equal(counts_greater_than(values, cutoffs), expected_gt)
        np.testing.assert_array_equal(counts_less_than(values, cutoffs), expected_lt)

    def test_unsorted_cutoffs_keep_order(self):
        values = [0.1, 0.2, 0.3, 0.4]
        np.testing.assert_array_equal(
            counts_less_than(values, [0.35, 0.15, 0.25]), [3, 1, 2]
        )

    def test_nan_cutoff_counts_zero(self):
        values = [0.1, 0.2]
        np.testing.assert_array_equal(counts_greater_than(values, [np.nan]), [0])
        np.testing.assert_array_equal(counts_less_than(values, [np.nan]), [0])

    def test_integer_dtype(self):
        assert counts_less_than([1.0, 2.0], [1.5]).dtype == np.int64


class TestDirectionalCounts:
    """Positive cutoffs use the metric's operator, cutoffs <= 0 flip it."""

    VALUES = np.array([-0.8, -0.5, 0.2, 0.6, 0.9])
    CUTOFFS = np.array([-0.4, 0.0, 0.5])

    def test_direct_metric(self):
        # -0.4 and 0.0 count below, 0.5 counts above
        counts = directional_counts(self.VALUES, self.CUTOFFS, direct=True)
        np.testing.assert_array_equal(counts, [2, 2, 2])

    def test_inverse_metric(self):
        # -0.4 and 0.0 count above, 0.5 counts below
        counts = directional_counts(self.VALUES, self.CUTOFFS, direct=False)
        np.testing.assert_array_equal(counts, [3, 3, 3])

    def test_matches_per_sign_scalar_rule(self, rng):
        values = rng.uniform(-1, 1, size=300)
        cutoffs = np.linspace(-1, 1, 41)
        for direct in (True, False):
            expected = []
            for c in cutoffs:
                above = count_greater_than(values, c)
                below = count_less_than(values, c)
                if c > 0:
                    expected.append(above if direct else below)
                else:
                    expected.append(below if direct else above)
            np.testing.assert_array_equal(
                directional_counts(values, cutoffs, direct), expected
            )

    @pytest.mark.parametrize("direct", [True, False])
    def test_zero_cutoff_uses_flipped_operator(self, direct):
        values = [-1.0, 0.0, 1.0, 2.0]
        counts = directional_counts(values, [0.0], direct)
        expected = count_less_than(values, 0.0) if direct else count_greater_than(values, 0.0)
        assert counts[0] == expected
