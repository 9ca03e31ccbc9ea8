"""
Moving average used to smooth noisy FDR curves before cutoff selection.
"""

from __future__ import annotations

import warnings

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pypropr.core.exceptions import AdvisoryNotice
from pypropr.core.validation import check_positive_int


def _window_bounds(i: int, n: int, window_size: int) -> tuple[int, int]:
    # Inclusive bounds, clamped to [0, n - 1]; even windows lean right.
    if window_size % 2 == 0:
        start = i - (window_size // 2 - 1)
        end = i + window_size // 2
    else:
        start = i - window_size // 2
        end = i + window_size // 2
    return max(0, start), min(n - 1, end)


def moving_average(values: ArrayLike, window_size: int = 1) -> NDArray[np.float64]:
    """
    Centered moving average that skips non-finite neighbours.

    Parameters
    ----------
    values : array-like
        1D sequence, may contain NaN or Inf.
    window_size : int
        Window width >= 1. An odd width w covers [i - w//2, i + w//2];
        an even width covers [i - (w/2 - 1), i + w/2]. Windows shrink at
        the ends of the sequence.

    Returns
    -------
    NDArray
        Same length as values. A non-finite entry is copied through
        unchanged; a finite entry becomes the mean of the finite values
        in its window.
    """
    window_size = check_positive_int(window_size, "window_size")
    arr = np.asarray(values, dtype=np.float64).ravel()
    finite = np.isfinite(arr)

    if not np.all(finite):
        warnings.warn(
            "Moving averages are calculated for a vector containing "
            "non-finite values; they are skipped inside each window.",
            AdvisoryNotice,
            stacklevel=2,
        )

    n = len(arr)
    result = arr.copy()
    for i in range(n):
        if not finite[i]:
            continue
        start, end = _window_bounds(i, n, window_size)
        window = arr[start:end + 1]
        result[i] = np.mean(window[finite[start:end + 1]])
    return result
