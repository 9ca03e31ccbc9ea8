"""
Core infrastructure for pypropr.

Shared abstractions used by the fdr submodule.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception and warning hierarchy
    validation: Input validators
    compute: Timing and R-compatible quantiles
"""

from pypropr.core.result import Result
from pypropr.core.exceptions import (
    PyproprError,
    ConfigurationError,
    ValidationError,
    DimensionError,
    PermutationDisabledError,
    ModerationNotConfiguredError,
    MissingStatisticError,
    FdrNotComputedError,
    PyproprWarning,
    NoResultWarning,
    AdvisoryNotice,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyproprError",
    "ConfigurationError",
    "ValidationError",
    "DimensionError",
    "PermutationDisabledError",
    "ModerationNotConfiguredError",
    "MissingStatisticError",
    "FdrNotComputedError",
    # Warnings
    "PyproprWarning",
    "NoResultWarning",
    "AdvisoryNotice",
]
