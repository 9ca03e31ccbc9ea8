"""
Tests for the pypropr exception and warning hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyproprError,
      all fatal conditions via ConfigurationError)
    - Diagnostic attributes on PermutationDisabledError and
      MissingStatisticError
    - Warning categories filterable via PyproprWarning
"""

import warnings

import pytest

from pypropr.core.exceptions import (
    AdvisoryNotice,
    ConfigurationError,
    DimensionError,
    FdrNotComputedError,
    MissingStatisticError,
    ModerationNotConfiguredError,
    NoResultWarning,
    PermutationDisabledError,
    PyproprError,
    PyproprWarning,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyproprError."""

    @pytest.mark.parametrize("exc", [
        ValidationError,
        DimensionError,
        PermutationDisabledError,
        ModerationNotConfiguredError,
        MissingStatisticError,
        FdrNotComputedError,
    ])
    def test_fatal_errors_are_configuration_errors(self, exc):
        with pytest.raises(ConfigurationError):
            raise exc("failure")

    def test_configuration_error_is_pypropr_error(self):
        with pytest.raises(PyproprError):
            raise ConfigurationError("bad state")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_permutation_disabled_is_not_validation_error(self):
        err = PermutationDisabledError("disabled")
        assert not isinstance(err, ValidationError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestAttributes:

    def test_permutation_disabled_kind(self):
        err = PermutationDisabledError("disabled", kind="pairwise")
        assert str(err) == "disabled"
        assert err.kind == "pairwise"

    def test_permutation_disabled_default(self):
        assert PermutationDisabledError("disabled").kind is None

    def test_missing_statistic_name(self):
        with pytest.raises(MissingStatisticError) as exc_info:
            raise MissingStatisticError("no F", statistic="fstat")
        assert exc_info.value.statistic == "fstat"

    def test_missing_statistic_default(self):
        assert MissingStatisticError("no F").statistic is None


# ═══════════════════════════════════════════════════════════════════════
# Warnings
# ═══════════════════════════════════════════════════════════════════════


class TestWarnings:

    @pytest.mark.parametrize("category", [NoResultWarning, AdvisoryNotice])
    def test_are_pypropr_warnings(self, category):
        assert issubclass(category, PyproprWarning)
        assert issubclass(category, UserWarning)

    def test_advisory_can_be_silenced(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            warnings.filterwarnings("ignore", category=AdvisoryNotice)
            warnings.warn("note", AdvisoryNotice)
            warnings.warn("nothing found", NoResultWarning)
        assert [w.category for w in caught] == [NoResultWarning]
