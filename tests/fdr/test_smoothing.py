"""
Tests for the moving average applied to FDR curves.
"""

import numpy as np
import pytest

from pypropr.core.exceptions import AdvisoryNotice, ValidationError
from pypropr.fdr._smoothing import moving_average


class TestMovingAverage:

    def test_window_one_is_identity(self, rng):
        values = rng.uniform(size=30)
        np.testing.assert_array_equal(moving_average(values, 1), values)

    def test_odd_window_shrinks_at_ends(self):
        result = moving_average([1.0, 2.0, 3.0, 4.0, 5.0], 3)
        np.testing.assert_allclose(result, [1.5, 2.0, 3.0, 4.0, 4.5])

    def test_even_window_leans_right(self):
        # w=4 covers [i - 1, i + 2]
        result = moving_average([1.0, 2.0, 3.0, 4.0, 5.0], 4)
        np.testing.assert_allclose(result, [2.0, 2.5, 3.5, 4.0, 4.5])

    def test_window_wider_than_input(self):
        result = moving_average([1.0, 2.0, 3.0], 11)
        np.testing.assert_allclose(result, [2.0, 2.0, 2.0])

    def test_nan_kept_and_skipped_as_neighbour(self):
        with pytest.warns(AdvisoryNotice, match="non-finite"):
            result = moving_average([1.0, np.nan, 3.0, 4.0, 5.0], 3)
        assert result[0] == pytest.approx(1.0)
        assert np.isnan(result[1])
        assert result[2] == pytest.approx(3.5)
        assert result[3] == pytest.approx(4.0)
        assert result[4] == pytest.approx(4.5)

    def test_inf_kept_and_skipped_as_neighbour(self):
        with pytest.warns(AdvisoryNotice):
            result = moving_average([1.0, np.inf, 3.0], 3)
        assert result[0] == pytest.approx(1.0)
        assert result[1] == np.inf
        assert result[2] == pytest.approx(3.0)

    def test_same_length(self, rng):
        values = rng.uniform(size=17)
        assert moving_average(values, 6).shape == (17,)

    def test_input_not_modified(self):
        values = np.array([1.0, 5.0, 9.0])
        moving_average(values, 3)
        np.testing.assert_array_equal(values, [1.0, 5.0, 9.0])

    @pytest.mark.parametrize("window", [0, -1, 1.5])
    def test_invalid_window(self, window):
        with pytest.raises(ValidationError, match="window_size"):
            moving_average([1.0, 2.0], window)
