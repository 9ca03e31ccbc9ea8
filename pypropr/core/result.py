"""
Generic result container for all pypropr computations.

The Result class provides a standardized envelope that every backend
returns. Domain-specific payloads (FdrParams) travel inside it together
with timing and the advisory text produced while computing.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (kind, n_permutations, n_jobs)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for statistical computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific parameters (FDR table columns, etc.)
        info: Structured metadata (target kind, permutations, workers)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=FdrParams(cutoff=c, randcounts=r, truecounts=t, fdr=f),
        ...     info={'kind': 'pairwise', 'n_permutations': 100},
        ...     timing={'total_seconds': 0.5, 'permutations': 0.45},
        ...     backend_name='cpu_pairwise_fdr'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
