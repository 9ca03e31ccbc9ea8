"""
Sample quantiles matching R's default quantile() (Hyndman & Fan type 7).

Cutoff grids are defined as quantiles of the observed statistic, so the
grid must reproduce R's choice of plotting position exactly.

Reference:
    Hyndman, R.J. and Fan, Y. (1996) "Sample Quantiles in Statistical
    Packages", The American Statistician, 50(4), 361-365.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray, ArrayLike

from pypropr.core.exceptions import ValidationError


def r_quantile_type7(x: NDArray, probs: ArrayLike) -> NDArray:
    """
    Compute type-7 quantiles of a sorted sample.

    Parameters
    ----------
    x : NDArray
        1D sorted array with no NaN values.
    probs : array-like
        Probabilities in [0, 1].

    Returns
    -------
    NDArray
        Quantile values, one per probability.
    """
    probs = np.asarray(probs, dtype=np.float64)
    if probs.size and (np.any(probs < 0.0) or np.any(probs > 1.0)):
        raise ValidationError("probs: all probabilities must be in [0, 1]")

    n = len(x)
    if n == 0:
        return np.full(len(probs), np.nan)
    if n == 1:
        return np.full(len(probs), x[0], dtype=np.float64)

    # R fuzz factor: 4 * machine epsilon
    fuzz = 4.0 * np.finfo(np.float64).eps
    result = np.empty(len(probs), dtype=np.float64)

    # nppm = a + p * (n + 1 - a - b) with a = b = 1, i.e. 1 + p * (n - 1)
    for i, p in enumerate(probs):
        nppm = 1.0 + p * (n - 1.0)
        j = int(math.floor(nppm + fuzz))
        h = nppm - j

        if abs(h) < fuzz:
            h = 0.0
        elif abs(h - 1.0) < fuzz:
            h = 1.0

        # j is 1-indexed: x[j-1] and x[j] bracket the quantile
        if j < 1:
            result[i] = x[0]
        elif j >= n:
            result[i] = x[n - 1]
        elif h == 0.0:
            result[i] = x[j - 1]
        else:
            result[i] = (1.0 - h) * x[j - 1] + h * x[j]

    return result
