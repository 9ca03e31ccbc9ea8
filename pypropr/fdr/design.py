"""
Design class for permutation FDR curves.

FdrDesign encapsulates all inputs a backend needs to build an FDR
table for one target: the target itself, the cutoff grid, and the
execution settings. Immutable, validated at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pypropr.core.exceptions import ValidationError
from pypropr.core.validation import check_positive_int
from pypropr.fdr._grid import as_cutoff_grid, build_cutoff_grid

_KINDS = ("pairwise", "group_difference")


@dataclass(frozen=True)
class FdrDesign:
    """
    Frozen design for one update_cutoffs() run.

    Attributes:
        target: PairwiseTarget or GroupDifferenceTarget.
        cutoffs: 1D cutoff grid (caller order preserved).
        n_jobs: Worker count; 1 runs sequentially.
        progress: Show a progress bar over permutations.
        parallel_backend: joblib backend name for n_jobs > 1.
        grid_source: 'quantile' if the grid was derived, else 'user'.
    """
    target: Any
    cutoffs: NDArray[np.float64]
    n_jobs: int
    progress: bool
    parallel_backend: str
    grid_source: str

    @classmethod
    def for_target(
        cls,
        target,
        cutoffs=None,
        *,
        nbins: int = 1000,
        n_jobs: int = 1,
        progress: bool = False,
        parallel_backend: str = "loky",
    ) -> FdrDesign:
        """
        Create an FDR design with validation.

        Args:
            target: Target exposing ``kind`` and ``values``.
            cutoffs: Explicit grid, or None for nbins + 1 quantiles of
                the observed statistic.
            nbins: Number of quantile bins when cutoffs is None.
            n_jobs: Worker count, >= 1.
            progress: Progress bar toggle.
            parallel_backend: joblib backend ('loky', 'threading', ...).

        Returns:
            Validated FdrDesign.

        Raises:
            ValidationError: If the target kind or any setting is invalid.
        """
        kind = getattr(target, "kind", None)
        if kind not in _KINDS:
            raise ValidationError(
                f"target: not recognized (kind={kind!r}); expected one of {_KINDS}"
            )

        n_jobs = check_positive_int(n_jobs, "n_jobs")

        if cutoffs is None:
            grid = build_cutoff_grid(target.values, nbins)
            source = "quantile"
        else:
            grid = as_cutoff_grid(cutoffs)
            source = "user"

        return cls(
            target=target,
            cutoffs=grid,
            n_jobs=n_jobs,
            progress=bool(progress),
            parallel_backend=str(parallel_backend),
            grid_source=source,
        )

    @property
    def kind(self) -> str:
        return self.target.kind

    @property
    def n_cutoffs(self) -> int:
        return len(self.cutoffs)
