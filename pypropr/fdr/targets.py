"""
Targets for permutation FDR estimation.

A target bundles an observed proportionality statistic with the
pre-generated permutations and the callable that recomputes the
statistic on permuted data. Two kinds exist:

    PairwiseTarget          phi/rho-type scores over feature pairs
    GroupDifferenceTarget   differential proportionality (theta)

Each class carries a ``kind`` discriminant which the solvers use to
select a backend. Targets are frozen; update_cutoffs() returns a copy
with a new ``fdr`` table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Sequence, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pypropr.core.exceptions import ValidationError
from pypropr.core.validation import (
    check_array,
    check_1d,
    check_2d,
    check_square,
    check_consistent_length,
    check_index_matrix,
)
from pypropr.fdr._common import THETA_TYPES, metric_is_direct

if TYPE_CHECKING:
    from pypropr.fdr.solution import FdrSolution


def lower_triangle(matrix: NDArray) -> NDArray:
    """Strict lower triangle of a square matrix, one value per pair."""
    rows, cols = np.tril_indices(matrix.shape[0], k=-1)
    return matrix[rows, cols]


def pair_values(statistic: Any) -> NDArray[np.float64]:
    """
    Reduce a recomputed statistic to one value per feature pair.

    A square matrix is reduced to its strict lower triangle; any other
    shape is flattened.
    """
    arr = np.asarray(statistic, dtype=np.float64)
    if arr.ndim == 2 and arr.shape[0] == arr.shape[1]:
        return lower_triangle(arr)
    return arr.ravel()


@dataclass(frozen=True)
class PairwiseTarget:
    """
    Pairwise proportionality statistic with its permutations.

    Attributes:
        matrix: Observed symmetric D x D statistic matrix.
        metric: Metric name ('rho', 'phi', 'phs', 'cor', 'vlr', ...).
        direct: True when large values indicate proportionality.
        permutes: P permuted count matrices.
        recompute: fn(dataset, *, metric, ivar, alpha) -> statistic
            (matrix or pair vector). Must not permute internally.
        ivar: Reference used by the log-ratio transform, passed through.
        alpha: Box-Cox alpha, passed through (None = log transform).
        fdr: FDR table from the last update_cutoffs(), or None.
    """
    kind: ClassVar[str] = "pairwise"

    matrix: NDArray[np.floating[Any]]
    metric: str
    direct: bool
    permutes: tuple[Any, ...]
    recompute: Callable
    ivar: Any = None
    alpha: float | None = None
    fdr: 'FdrSolution | None' = None

    @classmethod
    def from_matrix(
        cls,
        matrix,
        metric: str,
        permutes: Sequence[Any] | None,
        recompute: Callable,
        *,
        ivar: Any = None,
        alpha: float | None = None,
        direct: bool | None = None,
    ) -> PairwiseTarget:
        """
        Create a pairwise target with validation.

        Args:
            matrix: Observed statistic, square matrix.
            metric: Metric name.
            permutes: Permuted datasets; None or empty disables FDR.
            recompute: Statistic engine callable.
            ivar: Passed through to recompute.
            alpha: Passed through to recompute.
            direct: Override the metric's direction. Required for
                metrics not in the built-in table.

        Returns:
            Validated PairwiseTarget.
        """
        mat = check_array(matrix, "matrix")
        check_square(mat, "matrix")

        if not callable(recompute):
            raise ValidationError("recompute: must be callable")

        if direct is None:
            direct = metric_is_direct(metric)

        return cls(
            matrix=mat.copy(),
            metric=str(metric),
            direct=bool(direct),
            permutes=tuple(permutes) if permutes is not None else (),
            recompute=recompute,
            ivar=ivar,
            alpha=alpha,
        )

    @property
    def values(self) -> NDArray[np.float64]:
        """Observed statistic, one value per pair."""
        return lower_triangle(self.matrix)

    @property
    def n_permutations(self) -> int:
        return len(self.permutes)

    def __repr__(self) -> str:
        return (
            f"PairwiseTarget(metric={self.metric!r}, "
            f"features={self.matrix.shape[0]}, "
            f"permutations={self.n_permutations}, "
            f"fdr={'yes' if self.fdr is not None else 'no'})"
        )


@dataclass(frozen=True)
class GroupDifferenceTarget:
    """
    Differential proportionality statistic with its permutations.

    Attributes:
        counts: n_samples x D count matrix.
        group: Group label per sample.
        theta: Observed values of the active theta, one per pair.
        active: Active theta type (one of THETA_TYPES).
        lrv: Log-ratio variance per pair from the unpermuted counts.
        permutes: n_samples x P matrix of 0-based row orders, or None.
        theta_fn: fn(counts, *, group, alpha, lrv, only, weighted) -> theta
        moderated_fn: fn(counts, *, group, alpha, weighted, ivar) -> theta_mod
        fivar: Moderation covariate chosen when moderated theta was
            computed, or None if moderation was never configured.
        alpha: Box-Cox alpha (None = log transform).
        weighted: Whether theta uses sample weights.
        dfz: Degrees-of-freedom adjustment added to the sample count.
        fstat: F-statistic per pair, attached by the statistic engine.
        fdr_pvalues: FDR-adjusted p-value per pair, attached with fstat.
        fdr: FDR table from the last update_cutoffs(), or None.
    """
    kind: ClassVar[str] = "group_difference"

    counts: NDArray[np.floating[Any]]
    group: NDArray
    theta: NDArray[np.floating[Any]]
    active: str
    lrv: NDArray[np.floating[Any]]
    permutes: NDArray[np.intp] | None
    theta_fn: Callable
    moderated_fn: Callable | None = None
    fivar: Any = None
    alpha: float | None = None
    weighted: bool = False
    dfz: float = 0.0
    fstat: NDArray[np.floating[Any]] | None = None
    fdr_pvalues: NDArray[np.floating[Any]] | None = None
    fdr: 'FdrSolution | None' = None

    @classmethod
    def from_counts(
        cls,
        counts,
        group,
        theta,
        lrv,
        permutes,
        theta_fn: Callable,
        *,
        active: str = "theta_d",
        moderated_fn: Callable | None = None,
        fivar: Any = None,
        alpha: float | None = None,
        weighted: bool = False,
        dfz: float = 0.0,
        fstat=None,
        fdr_pvalues=None,
    ) -> GroupDifferenceTarget:
        """
        Create a group-difference target with validation.

        Args:
            counts: n_samples x D counts.
            group: Group labels, length n_samples.
            theta: Observed active theta, one value per pair.
            lrv: Log-ratio variance, one value per pair.
            permutes: n_samples x P row-order matrix (0-based), or None
                to disable permutation testing.
            theta_fn: Statistic engine callable for non-moderated theta.
            active: Active theta type.
            moderated_fn: Statistic engine callable for theta_mod.
            fivar: Moderation covariate, None if never configured.
            alpha: Box-Cox alpha.
            weighted: Weighted theta.
            dfz: Degrees-of-freedom adjustment for F-based cutoffs.
            fstat: Optional F-statistics per pair.
            fdr_pvalues: Optional FDR-adjusted p-values per pair.

        Returns:
            Validated GroupDifferenceTarget.
        """
        counts_arr = check_array(counts, "counts")
        check_2d(counts_arr, "counts")

        group_arr = np.asarray(group)
        check_1d(group_arr, "group")
        check_consistent_length(counts_arr, group_arr, names=("counts", "group"))

        theta_arr = check_array(theta, "theta").ravel()
        lrv_arr = check_array(lrv, "lrv").ravel()
        check_consistent_length(theta_arr, lrv_arr, names=("theta", "lrv"))

        if active not in THETA_TYPES:
            raise ValidationError(
                f"active: must be one of {THETA_TYPES}, got {active!r}"
            )

        if not callable(theta_fn):
            raise ValidationError("theta_fn: must be callable")
        if moderated_fn is not None and not callable(moderated_fn):
            raise ValidationError("moderated_fn: must be callable")

        perm_arr = None
        if permutes is not None:
            perm_arr = check_index_matrix(permutes, "permutes")
            if perm_arr.shape[1] > 0 and perm_arr.shape[0] != counts_arr.shape[0]:
                raise ValidationError(
                    f"permutes: expected {counts_arr.shape[0]} rows (one per "
                    f"sample), got {perm_arr.shape[0]}"
                )
            if perm_arr.size and perm_arr.max() >= counts_arr.shape[0]:
                raise ValidationError(
                    f"permutes: row index {perm_arr.max()} out of range for "
                    f"{counts_arr.shape[0]} samples"
                )

        fstat_arr = None
        if fstat is not None:
            fstat_arr = check_array(fstat, "fstat").ravel()
            check_consistent_length(theta_arr, fstat_arr, names=("theta", "fstat"))

        fdr_p_arr = None
        if fdr_pvalues is not None:
            fdr_p_arr = check_array(fdr_pvalues, "fdr_pvalues").ravel()
            check_consistent_length(
                theta_arr, fdr_p_arr, names=("theta", "fdr_pvalues")
            )

        return cls(
            counts=counts_arr.copy(),
            group=group_arr.copy(),
            theta=theta_arr.copy(),
            active=active,
            lrv=lrv_arr.copy(),
            permutes=perm_arr,
            theta_fn=theta_fn,
            moderated_fn=moderated_fn,
            fivar=fivar,
            alpha=alpha,
            weighted=bool(weighted),
            dfz=float(dfz),
            fstat=fstat_arr,
            fdr_pvalues=fdr_p_arr,
        )

    @property
    def direct(self) -> bool:
        """Theta is always inverse: small values are significant."""
        return False

    @property
    def values(self) -> NDArray[np.float64]:
        """Observed active theta."""
        return self.theta

    @property
    def n_permutations(self) -> int:
        if self.permutes is None:
            return 0
        return self.permutes.shape[1]

    def __repr__(self) -> str:
        return (
            f"GroupDifferenceTarget(active={self.active!r}, "
            f"samples={self.counts.shape[0]}, pairs={len(self.theta)}, "
            f"permutations={self.n_permutations}, "
            f"fdr={'yes' if self.fdr is not None else 'no'})"
        )
