"""
Exceedance counting primitives.

All comparisons are strict. Non-finite values (NaN, +Inf, -Inf) are
dropped before counting, so they never count on either side of a
threshold.

The vectorised variants sort the finite values once and binary-search
every cutoff, which gives the same counts as calling the scalar
primitives in a loop.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray


def _finite(values: ArrayLike) -> NDArray:
    arr = np.asarray(values, dtype=np.float64).ravel()
    return arr[np.isfinite(arr)]


def count_greater_than(values: ArrayLike, threshold: float) -> int:
    """Number of finite values strictly greater than threshold."""
    return int(np.count_nonzero(_finite(values) > threshold))


def count_less_than(values: ArrayLike, threshold: float) -> int:
    """Number of finite values strictly less than threshold."""
    return int(np.count_nonzero(_finite(values) < threshold))


def counts_greater_than(values: ArrayLike, cutoffs: ArrayLike) -> NDArray[np.int64]:
    """count_greater_than() for every cutoff. NaN cutoffs count zero."""
    sorted_vals = np.sort(_finite(values))
    cutoffs = np.atleast_1d(np.asarray(cutoffs, dtype=np.float64))
    counts = len(sorted_vals) - np.searchsorted(sorted_vals, cutoffs, side='right')
    counts[np.isnan(cutoffs)] = 0
    return counts.astype(np.int64)


def counts_less_than(values: ArrayLike, cutoffs: ArrayLike) -> NDArray[np.int64]:
    """count_less_than() for every cutoff. NaN cutoffs count zero."""
    sorted_vals = np.sort(_finite(values))
    cutoffs = np.atleast_1d(np.asarray(cutoffs, dtype=np.float64))
    counts = np.searchsorted(sorted_vals, cutoffs, side='left')
    counts[np.isnan(cutoffs)] = 0
    return counts.astype(np.int64)


def directional_counts(
    values: ArrayLike,
    cutoffs: ArrayLike,
    direct: bool,
) -> NDArray[np.int64]:
    """
    Per-cutoff exceedance counts for a pairwise statistic.

    For a positive cutoff a direct metric counts values above it and an
    inverse metric counts values below it. For a cutoff <= 0 the
    operator is flipped, so metrics whose significant region lies on
    both sides of zero are counted towards the tail the cutoff sits in.

    Parameters
    ----------
    values : array-like
        Statistic values (any shape; flattened).
    cutoffs : array-like
        1D cutoff grid.
    direct : bool
        True when large values indicate proportionality.

    Returns
    -------
    NDArray[np.int64]
        One count per cutoff.
    """
    cutoffs = np.atleast_1d(np.asarray(cutoffs, dtype=np.float64))
    above = counts_greater_than(values, cutoffs)
    below = counts_less_than(values, cutoffs)
    positive = cutoffs > 0
    if direct:
        return np.where(positive, above, below)
    return np.where(positive, below, above)
