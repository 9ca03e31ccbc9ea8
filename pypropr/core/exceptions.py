"""
Exception and warning hierarchy for pypropr.

All exceptions inherit from PyproprError to allow catching any
library-specific error. All warnings inherit from PyproprWarning so they
can be filtered as a group with the standard warnings machinery.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Warnings never change what a function returns
"""


class PyproprError(Exception):
    """Base exception for all pypropr errors."""
    pass


class ConfigurationError(PyproprError):
    """
    A call cannot proceed with the given target or arguments.

    Base class for every fatal condition: missing permutations, missing
    upstream statistics, and out-of-range arguments.
    """
    pass


class ValidationError(ConfigurationError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class PermutationDisabledError(ConfigurationError):
    """
    The target carries no permutations, so FDR cannot be estimated.

    Attributes:
        kind: Target kind ('pairwise' or 'group_difference')
    """

    def __init__(self, message: str, kind: str | None = None):
        super().__init__(message)
        self.kind = kind


class ModerationNotConfiguredError(ConfigurationError):
    """
    Moderated theta was requested but no moderation covariate is stored.
    """
    pass


class MissingStatisticError(ConfigurationError):
    """
    An upstream statistic column required by the call is not attached.

    Attributes:
        statistic: Name of the missing column (e.g. 'fstat')
    """

    def __init__(self, message: str, statistic: str | None = None):
        super().__init__(message)
        self.statistic = statistic


class FdrNotComputedError(ConfigurationError):
    """The target has no FDR table; update_cutoffs() has not been run."""
    pass


class PyproprWarning(UserWarning):
    """Base category for all pypropr warnings."""
    pass


class NoResultWarning(PyproprWarning):
    """No cutoff satisfies the requested threshold; the call returned False."""
    pass


class AdvisoryNotice(PyproprWarning):
    """Informational notice. Has no effect on control flow or results."""
    pass
