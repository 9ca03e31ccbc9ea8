"""
Permutation FDR for proportionality statistics.

Estimates how many pairs called significant at a cutoff are expected
to be false discoveries, by recomputing the statistic on stored
permutations of the data, and turns the FDR curve into a cutoff.

Usage:
    from pypropr.fdr import PairwiseTarget, update_cutoffs, get_cutoff_fdr

    target = PairwiseTarget.from_matrix(rho, "rho", permutes, recompute)
    target = update_cutoffs(target, nbins=100, n_jobs=4)
    cutoff = get_cutoff_fdr(target, fdr=0.05, window_size=5)
"""

from pypropr.fdr.solvers import update_cutoffs, get_cutoff_fdr, get_cutoff_fstat
from pypropr.fdr.targets import PairwiseTarget, GroupDifferenceTarget
from pypropr.fdr.solution import FdrSolution
from pypropr.fdr._common import FdrParams, metric_is_direct
from pypropr.fdr._counting import count_greater_than, count_less_than
from pypropr.fdr._grid import build_cutoff_grid
from pypropr.fdr._smoothing import moving_average
from pypropr.fdr._fstat import fstat_from_theta, theta_from_fstat

__all__ = [
    "update_cutoffs",
    "get_cutoff_fdr",
    "get_cutoff_fstat",
    "PairwiseTarget",
    "GroupDifferenceTarget",
    "FdrSolution",
    "FdrParams",
    "metric_is_direct",
    "count_greater_than",
    "count_less_than",
    "build_cutoff_grid",
    "moving_average",
    "fstat_from_theta",
    "theta_from_fstat",
]
