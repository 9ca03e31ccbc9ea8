"""
Cutoff grids for FDR curves.

A grid is either supplied by the caller (used verbatim) or derived as
nbins + 1 quantiles of the observed statistic. A single NaN is the
"skip" sentinel: update_cutoffs() then returns the target unchanged.
"""

from __future__ import annotations

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pypropr.core.compute.quantile import r_quantile_type7
from pypropr.core.exceptions import ValidationError
from pypropr.core.validation import check_array, check_1d, check_positive_int


def is_skip_sentinel(cutoffs) -> bool:
    """True for a scalar NaN or a length-1 sequence holding NaN."""
    if cutoffs is None:
        return False
    if isinstance(cutoffs, numbers.Real):
        return bool(np.isnan(cutoffs))
    arr = np.asarray(cutoffs)
    if arr.size != 1 or not np.issubdtype(arr.dtype, np.floating):
        return False
    return bool(np.isnan(arr.ravel()[0]))


def build_cutoff_grid(values: ArrayLike, nbins: int = 1000) -> NDArray[np.float64]:
    """
    Quantile grid over the finite observed values.

    Parameters
    ----------
    values : array-like
        Observed statistic values. NaN and Inf are ignored.
    nbins : int
        Number of bins; the grid has nbins + 1 points at probabilities
        0, 1/nbins, ..., 1.

    Returns
    -------
    NDArray
        Non-decreasing grid of length nbins + 1 from min to max of the
        finite values. Duplicates are kept.
    """
    nbins = check_positive_int(nbins, "nbins")
    arr = np.asarray(values, dtype=np.float64).ravel()
    finite = np.sort(arr[np.isfinite(arr)])
    if finite.size == 0:
        raise ValidationError(
            "values: no finite statistic values to derive a cutoff grid from"
        )
    probs = np.linspace(0.0, 1.0, nbins + 1)
    return r_quantile_type7(finite, probs)


def as_cutoff_grid(cutoffs: ArrayLike) -> NDArray[np.float64]:
    """Convert a caller-supplied grid to a 1D float array, unsorted."""
    arr = check_array(np.atleast_1d(cutoffs), "cutoffs")
    check_1d(arr, "cutoffs")
    if arr.size == 0:
        raise ValidationError("cutoffs: must contain at least one value")
    return arr.astype(np.float64, copy=True)
