"""
Conversions between theta and the F-statistic.

For K groups and N samples (plus the dfz adjustment),

    F = (N - 2) * (1 - theta) / theta
    theta = (N - 2) / (F + (N - 2))

so a critical F value maps to a theta cutoff.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats


def fstat_from_theta(theta: ArrayLike, n: float) -> NDArray[np.float64]:
    """F-statistic for theta at population size n."""
    theta = np.asarray(theta, dtype=np.float64)
    with np.errstate(divide='ignore', invalid='ignore'):
        return (n - 2.0) * (1.0 - theta) / theta


def theta_from_fstat(fstat: ArrayLike, n: float) -> NDArray[np.float64]:
    """Inverse of fstat_from_theta()."""
    fstat = np.asarray(fstat, dtype=np.float64)
    return (n - 2.0) / (fstat + (n - 2.0))


def critical_f(pval: float, n_groups: int, n: float) -> float:
    """Upper-tail F quantile with (K - 1, N - K) degrees of freedom."""
    return float(stats.f.isf(pval, n_groups - 1, n - n_groups))
