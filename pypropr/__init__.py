"""
pypropr: permutation FDR for proportionality analysis.

Estimates false discovery rates for pairwise proportionality (rho,
phi, phs, ...) and differential proportionality (theta) statistics,
and selects significance cutoffs from them.

Submodules:
    fdr: FDR curves by permutation and cutoff selection
    core: results, exceptions, validation
"""

__version__ = "0.1.0"

from pypropr import fdr
from pypropr.fdr import (
    update_cutoffs,
    get_cutoff_fdr,
    get_cutoff_fstat,
    PairwiseTarget,
    GroupDifferenceTarget,
)

__all__ = [
    "__version__",
    "fdr",
    "update_cutoffs",
    "get_cutoff_fdr",
    "get_cutoff_fstat",
    "PairwiseTarget",
    "GroupDifferenceTarget",
]
