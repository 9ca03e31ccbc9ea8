"""
Solution wrapper for permutation FDR tables.

FdrSolution wraps Result[FdrParams] and provides column accessors and
an R-style printed table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pypropr.core.result import Result
from pypropr.fdr._common import FdrParams

if TYPE_CHECKING:
    from pypropr.fdr.design import FdrDesign


@dataclass
class FdrSolution:
    """
    User-facing FDR table.

    One row per cutoff with columns cutoff, randcounts, truecounts, fdr.
    Stored on a target's ``fdr`` field by update_cutoffs().
    """
    _result: Result[FdrParams]
    _design: 'FdrDesign'

    # --- Table columns ---

    @property
    def cutoff(self) -> NDArray[np.floating[Any]]:
        """Candidate cutoffs, in grid order."""
        return self._result.params.cutoff

    @property
    def randcounts(self) -> NDArray[np.floating[Any]]:
        """Mean permuted exceedance count per cutoff."""
        return self._result.params.randcounts

    @property
    def truecounts(self) -> NDArray[np.floating[Any]]:
        """Observed exceedance count per cutoff."""
        return self._result.params.truecounts

    @property
    def fdr(self) -> NDArray[np.floating[Any]]:
        """randcounts / truecounts; NaN or Inf where truecounts is 0."""
        return self._result.params.fdr

    @property
    def n_permutations(self) -> int:
        return self._result.params.n_permutations

    # --- Metadata ---

    @property
    def kind(self) -> str:
        return self._design.kind

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def __len__(self) -> int:
        return len(self.cutoff)

    # --- Display ---

    def summary(self, max_rows: int = 20) -> str:
        """
        Printed FDR table.

        Shows at most max_rows rows, evenly spaced over the grid.
        """
        n = len(self)
        lines = [
            "\nPERMUTATION FDR",
            "",
            f"Target: {self.kind}   Permutations: {self.n_permutations}   "
            f"Cutoffs: {n}",
            "",
            f"{'cutoff':>12s} {'randcounts':>12s} {'truecounts':>12s} {'FDR':>10s}",
        ]
        if n > max_rows:
            rows = np.unique(np.linspace(0, n - 1, max_rows).round().astype(int))
        else:
            rows = np.arange(n)
        for i in rows:
            lines.append(
                f"{self.cutoff[i]:12.6g} {self.randcounts[i]:12.6g} "
                f"{self.truecounts[i]:12.6g} {self.fdr[i]:10.4g}"
            )
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"FdrSolution(kind={self.kind!r}, cutoffs={len(self)}, "
            f"permutations={self.n_permutations}, "
            f"backend={self.backend_name!r})"
        )
