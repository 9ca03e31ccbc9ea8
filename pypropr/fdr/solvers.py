"""
Solver dispatch for permutation FDR.

Public API:
    update_cutoffs(target, cutoffs, ...) -> target with a new FDR table
    get_cutoff_fdr(target, fdr, window_size) -> cutoff or False
    get_cutoff_fstat(target, pval, fdr_adjusted) -> cutoff or False
"""

from __future__ import annotations

import dataclasses
import warnings

import numpy as np

from pypropr.core.exceptions import (
    FdrNotComputedError,
    MissingStatisticError,
    NoResultWarning,
    ValidationError,
)
from pypropr.core.validation import check_positive_int, check_probability
from pypropr.fdr._fstat import critical_f, theta_from_fstat
from pypropr.fdr._grid import is_skip_sentinel
from pypropr.fdr._smoothing import moving_average
from pypropr.fdr.backends.cpu import CPUGroupDifferenceFdrBackend, CPUPairwiseFdrBackend
from pypropr.fdr.design import FdrDesign
from pypropr.fdr.solution import FdrSolution

_BACKENDS = {
    "pairwise": CPUPairwiseFdrBackend,
    "group_difference": CPUGroupDifferenceFdrBackend,
}


def _get_backend(target):
    kind = getattr(target, "kind", None)
    try:
        return _BACKENDS[kind]()
    except KeyError:
        raise ValidationError(
            f"target: not recognized (kind={kind!r}); expected one of "
            f"{tuple(_BACKENDS)}"
        ) from None


def update_cutoffs(
    target,
    cutoffs=None,
    *,
    nbins: int = 1000,
    n_jobs: int = 1,
    progress: bool = False,
    parallel_backend: str = "loky",
):
    """
    Estimate FDR over a grid of cutoffs by permutation.

    Parameters
    ----------
    target : PairwiseTarget or GroupDifferenceTarget
        Observed statistic with its stored permutations. The same
        permutations are used on every call, so results are repeatable.
    cutoffs : array-like, float or None
        Cutoffs to evaluate, used in the given order. None derives
        nbins + 1 quantiles of the observed statistic. A single NaN
        skips the computation and returns the target unchanged.
    nbins : int
        Number of quantile bins when cutoffs is None. Default 1000.
    n_jobs : int
        Number of workers. Pairwise targets split the permutations
        across a joblib pool; group-difference targets always run
        sequentially.
    progress : bool
        Show a progress bar for sequential runs.
    parallel_backend : str
        joblib backend used when n_jobs > 1. Default 'loky'.

    Returns
    -------
    PairwiseTarget or GroupDifferenceTarget
        A copy of the target whose ``fdr`` field holds a new
        FdrSolution, replacing any previous table.

    Raises
    ------
    PermutationDisabledError
        If the target carries no permutations.
    ModerationNotConfiguredError
        If moderated theta is active without a moderation covariate.
    """
    be = _get_backend(target)
    n_jobs = check_positive_int(n_jobs, "n_jobs")
    notes = be.preflight(target, n_jobs)

    if is_skip_sentinel(cutoffs):
        return target

    design = FdrDesign.for_target(
        target,
        cutoffs,
        nbins=nbins,
        n_jobs=n_jobs,
        progress=progress,
        parallel_backend=parallel_backend,
    )
    result = be.solve(design, notes=tuple(notes))
    return dataclasses.replace(target, fdr=FdrSolution(_result=result, _design=design))


def get_cutoff_fdr(target, fdr: float = 0.05, window_size: int = 1):
    """
    Most permissive cutoff whose estimated FDR is at most ``fdr``.

    Parameters
    ----------
    target : PairwiseTarget or GroupDifferenceTarget
        Target returned by update_cutoffs().
    fdr : float
        FDR threshold in [0, 1]. Default 0.05.
    window_size : int
        When > 1, the FDR curve is smoothed with a moving average of
        this width before selection. The stored table is not modified.

    Returns
    -------
    float or False
        For direct pairwise metrics the smallest qualifying cutoff,
        otherwise the largest. False (with NoResultWarning) if no
        finite FDR value is at or below the threshold.
    """
    table = getattr(target, "fdr", None)
    if table is None:
        raise FdrNotComputedError(
            "Please run update_cutoffs() before calling this function."
        )
    if len(table) == 0:
        raise FdrNotComputedError(
            "No FDR values found. Please run update_cutoffs() before "
            "calling this function."
        )
    fdr = check_probability(fdr, "fdr")
    window_size = check_positive_int(window_size, "window_size")

    values = table.fdr
    if window_size > 1:
        values = moving_average(values, window_size)

    index = np.isfinite(values) & (values <= fdr)
    if not np.any(index):
        warnings.warn(
            f"No significant cutoff found for the given FDR = {fdr}",
            NoResultWarning,
            stacklevel=2,
        )
        return False

    if target.direct:
        return float(np.min(table.cutoff[index]))
    return float(np.max(table.cutoff[index]))


def get_cutoff_fstat(target, pval: float = 0.05, fdr_adjusted: bool = False):
    """
    Theta cutoff from the F distribution.

    Parameters
    ----------
    target : GroupDifferenceTarget
        Target with F-statistics attached.
    pval : float
        p-value in [0, 1]. Default 0.05.
    fdr_adjusted : bool
        If False (default), return the theoretical cutoff
        (N - 2) / (Q + N - 2) with Q the upper-tail F(K - 1, N - K)
        quantile at pval. If True, return the largest theta whose
        FDR-adjusted p-value is at most pval.

    Returns
    -------
    float or False
        Theta cutoff, or False (with NoResultWarning) when no pair
        qualifies in the empirical mode.
    """
    if getattr(target, "fstat", None) is None:
        raise MissingStatisticError(
            "F-statistics not found; compute them on the target before "
            "requesting an F-based cutoff.",
            statistic="fstat",
        )
    pval = check_probability(pval, "pval")

    if fdr_adjusted:
        if target.fdr_pvalues is None:
            raise MissingStatisticError(
                "FDR-adjusted p-values not found on the target.",
                statistic="fdr_pvalues",
            )
        adjusted = target.fdr_pvalues
        index = np.isfinite(adjusted) & (adjusted <= pval)
        if not np.any(index):
            warnings.warn(
                "No significant cutoff found for the given p-value.",
                NoResultWarning,
                stacklevel=2,
            )
            return False
        return float(np.max(target.theta[index]))

    n_groups = len(np.unique(target.group))
    n = len(target.group) + target.dfz
    q = critical_f(pval, n_groups, n)
    return float(theta_from_fstat(q, n))
