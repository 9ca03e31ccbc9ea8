"""
Common data structures and metric tables for FDR estimation.

FdrParams is the parameter payload wrapped by Result[P] and exposed
through FdrSolution. The metric tables decide which comparison counts
as an exceedance for a pairwise statistic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pypropr.core.exceptions import ValidationError

# Large values indicate proportionality
DIRECT_METRICS = frozenset({"rho", "cor", "pcor", "pcor.shrink", "pcor.bshrink"})

# Small values indicate proportionality
INVERSE_METRICS = frozenset({"vlr", "phi", "phs"})

# Asymmetric metric -> symmetric counterpart recommended for permutation FDR
SYMMETRIC_ALTERNATIVES = {"phi": "phs"}

THETA_TYPES = ("theta", "theta_d", "theta_e", "theta_f", "theta_g", "theta_mod")

MODERATED_THETA = "theta_mod"


def metric_is_direct(metric: str) -> bool:
    """
    Whether large values of a pairwise metric indicate proportionality.

    Raises:
        ValidationError: If the metric is not recognized
    """
    if metric in DIRECT_METRICS:
        return True
    if metric in INVERSE_METRICS:
        return False
    raise ValidationError(
        f"metric: not recognized ({metric!r}); pass direct=True/False "
        f"explicitly for custom metrics"
    )


@dataclass(frozen=True)
class FdrParams:
    """
    Parameter payload for a permutation FDR table.

    One entry per cutoff:
    - cutoff: candidate threshold
    - randcounts: mean exceedance count over the permutations
    - truecounts: exceedance count of the observed statistic
    - fdr: randcounts / truecounts (NaN or Inf where truecounts == 0)
    """
    cutoff: NDArray[np.floating[Any]]          # shape (m,)
    randcounts: NDArray[np.floating[Any]]      # shape (m,)
    truecounts: NDArray[np.floating[Any]]      # shape (m,)
    fdr: NDArray[np.floating[Any]]             # shape (m,)
    n_permutations: int
