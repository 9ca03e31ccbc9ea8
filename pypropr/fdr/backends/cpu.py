"""
CPU backends for permutation FDR curves.

CPUPairwiseFdrBackend: recomputes a pairwise statistic on every
    permuted dataset, sequentially or on a joblib worker pool.
CPUGroupDifferenceFdrBackend: recomputes theta for every row order in
    the permutation matrix, sequentially.

Both return Result[FdrParams] with randcounts = mean permuted count,
truecounts = observed count and fdr = randcounts / truecounts.
"""

from __future__ import annotations

import warnings

import numpy as np
from joblib import Parallel, delayed
from numpy.typing import NDArray
from tqdm import tqdm

from pypropr.core.exceptions import (
    AdvisoryNotice,
    ModerationNotConfiguredError,
    PermutationDisabledError,
)
from pypropr.core.result import Result
from pypropr.core.compute.timing import Timer
from pypropr.fdr._common import FdrParams, MODERATED_THETA, SYMMETRIC_ALTERNATIVES
from pypropr.fdr._counting import counts_less_than, directional_counts
from pypropr.fdr.design import FdrDesign
from pypropr.fdr.targets import pair_values


def _fdr_ratio(randcounts: NDArray, truecounts: NDArray) -> NDArray:
    # Zero truecounts give Inf (or NaN for 0/0) and must stay that way.
    with np.errstate(divide='ignore', invalid='ignore'):
        return randcounts / truecounts


def _advise(message: str, notes: list[str]) -> None:
    notes.append(message)
    warnings.warn(message, AdvisoryNotice, stacklevel=4)


def _pairwise_chunk_counts(target, indices, cutoffs: NDArray) -> NDArray[np.int64]:
    """Summed exceedance counts for a subset of the permuted datasets."""
    total = np.zeros(len(cutoffs), dtype=np.int64)
    for k in indices:
        statistic = target.recompute(
            target.permutes[k],
            metric=target.metric,
            ivar=target.ivar,
            alpha=target.alpha,
        )
        total += directional_counts(pair_values(statistic), cutoffs, target.direct)
    return total


class CPUPairwiseFdrBackend:
    """
    CPU backend for pairwise proportionality targets.

    With n_jobs > 1 the permutations are split into disjoint contiguous
    chunks, one joblib task per chunk. Each task returns an int64 count
    vector and the vectors are summed after all tasks finish, so the
    table is identical to the sequential one.
    """

    @property
    def name(self) -> str:
        return 'cpu_pairwise_fdr'

    def preflight(self, target, n_jobs: int = 1) -> list[str]:
        """
        Check that permutations exist and collect advisory notices.

        Raises:
            PermutationDisabledError: If the target has no permutations.
        """
        notes: list[str] = []
        if n_jobs == 1:
            _advise("Try parallelizing update_cutoffs with n_jobs > 1.", notes)
        if target.metric == "rho":
            _advise(
                "Estimating FDR for largely positive proportional pairs only.",
                notes,
            )
        if target.metric in SYMMETRIC_ALTERNATIVES:
            _advise(
                f"We recommend using the symmetric "
                f"{SYMMETRIC_ALTERNATIVES[target.metric]!r} metric "
                f"instead of {target.metric!r} for FDR permutation.",
                notes,
            )
        if target.n_permutations == 0:
            raise PermutationDisabledError(
                "Permutation testing is disabled.", kind=target.kind
            )
        return notes

    def solve(self, design: FdrDesign, notes: tuple[str, ...] = ()) -> Result[FdrParams]:
        """Build the FDR table and return Result[FdrParams]."""
        timer = Timer()
        timer.start()

        target = design.target
        cutoffs = design.cutoffs
        p = target.n_permutations
        n_workers = min(design.n_jobs, p)

        with timer.section('permutations'):
            if n_workers == 1:
                indices = range(p)
                if design.progress:
                    indices = tqdm(indices, desc="update_cutoffs", leave=False)
                randcounts = _pairwise_chunk_counts(target, indices, cutoffs)
            else:
                chunks = np.array_split(np.arange(p), n_workers)
                with Parallel(n_jobs=n_workers, backend=design.parallel_backend) as parallel:
                    partials = parallel(
                        delayed(_pairwise_chunk_counts)(target, chunk, cutoffs)
                        for chunk in chunks
                    )
                randcounts = np.sum(partials, axis=0, dtype=np.int64)

        with timer.section('truecounts'):
            truecounts = directional_counts(target.values, cutoffs, target.direct)

        mean_randcounts = randcounts / p
        truecounts = truecounts.astype(np.float64)

        timer.stop()

        params = FdrParams(
            cutoff=cutoffs.copy(),
            randcounts=mean_randcounts,
            truecounts=truecounts,
            fdr=_fdr_ratio(mean_randcounts, truecounts),
            n_permutations=p,
        )

        return Result(
            params=params,
            info={
                'kind': target.kind,
                'metric': target.metric,
                'direct': target.direct,
                'n_permutations': p,
                'n_jobs': n_workers,
                'grid_source': design.grid_source,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(notes),
        )


class CPUGroupDifferenceFdrBackend:
    """
    CPU backend for differential proportionality targets.

    Each column of the permutation matrix reorders the sample rows of
    the counts while the group labels stay in place. Non-moderated theta
    is recomputed with the log-ratio variance of the unpermuted counts;
    moderated theta is rebuilt from scratch with the stored covariate.
    Sequential only.
    """

    @property
    def name(self) -> str:
        return 'cpu_group_difference_fdr'

    def preflight(self, target, n_jobs: int = 1) -> list[str]:
        """
        Check that permutations exist and collect advisory notices.

        Raises:
            PermutationDisabledError: If the target has no permutations.
        """
        notes: list[str] = []
        if n_jobs > 1:
            _advise(
                "Parallel update_cutoffs is not yet supported for "
                "group-difference targets; running sequentially.",
                notes,
            )
        if target.n_permutations == 0:
            raise PermutationDisabledError(
                "Permutation testing is disabled.", kind=target.kind
            )
        return notes

    def _permuted_theta(self, target, shuffle: NDArray) -> NDArray:
        shuffled = target.counts[shuffle, :]

        if target.active == MODERATED_THETA:
            if target.fivar is None or target.moderated_fn is None:
                raise ModerationNotConfiguredError(
                    "Moderated theta is active but no moderation covariate "
                    "is stored; re-run the F-statistic update with "
                    "moderation enabled."
                )
            theta = target.moderated_fn(
                shuffled,
                group=target.group,
                alpha=target.alpha,
                weighted=target.weighted,
                ivar=target.fivar,
            )
        else:
            theta = target.theta_fn(
                shuffled,
                group=target.group,
                alpha=target.alpha,
                lrv=target.lrv,
                only=target.active,
                weighted=target.weighted,
            )
        return np.asarray(theta, dtype=np.float64).ravel()

    def solve(self, design: FdrDesign, notes: tuple[str, ...] = ()) -> Result[FdrParams]:
        """Build the FDR table and return Result[FdrParams]."""
        timer = Timer()
        timer.start()

        target = design.target
        cutoffs = design.cutoffs
        p = target.n_permutations

        with timer.section('permutations'):
            randcounts = np.zeros(len(cutoffs), dtype=np.int64)
            columns = range(p)
            if design.progress:
                columns = tqdm(columns, desc="update_cutoffs", leave=False)
            for k in columns:
                pkt = self._permuted_theta(target, target.permutes[:, k])
                randcounts += counts_less_than(pkt, cutoffs)

        with timer.section('truecounts'):
            truecounts = counts_less_than(target.theta, cutoffs).astype(np.float64)

        mean_randcounts = randcounts / p

        timer.stop()

        params = FdrParams(
            cutoff=cutoffs.copy(),
            randcounts=mean_randcounts,
            truecounts=truecounts,
            fdr=_fdr_ratio(mean_randcounts, truecounts),
            n_permutations=p,
        )

        return Result(
            params=params,
            info={
                'kind': target.kind,
                'active': target.active,
                'n_permutations': p,
                'n_jobs': 1,
                'grid_source': design.grid_source,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(notes),
        )
