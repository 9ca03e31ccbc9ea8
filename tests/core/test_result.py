"""
Tests for the Result[P] envelope.

Validates:
    - Generic type parameter works with arbitrary payload types
    - Frozen immutability
    - Default warnings tuple
    - has_warning() method
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pypropr.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def make_result(**overrides):
    fields = dict(
        params=FakeParams(value=1.0),
        info={},
        timing=None,
        backend_name="cpu",
    )
    fields.update(overrides)
    return Result(**fields)


class TestResultConstruction:

    def test_basic_creation(self):
        result = make_result(
            params=FakeParams(value=42.0),
            info={"kind": "pairwise"},
            timing={"total_seconds": 0.01},
        )
        assert result.params.value == 42.0
        assert result.info["kind"] == "pairwise"
        assert result.timing["total_seconds"] == 0.01
        assert result.backend_name == "cpu"

    def test_warnings_default_empty(self):
        result = make_result()
        assert result.warnings == ()
        assert isinstance(result.warnings, tuple)


class TestImmutability:

    def test_cannot_set_params(self):
        result = make_result()
        with pytest.raises(FrozenInstanceError):
            result.params = FakeParams(value=2.0)

    def test_cannot_set_warnings(self):
        result = make_result()
        with pytest.raises(FrozenInstanceError):
            result.warnings = ("new warning",)


class TestHasWarning:

    def test_no_warnings_returns_false(self):
        assert make_result().has_warning("anything") is False

    def test_substring_match(self):
        result = make_result(warnings=("Try parallelizing update_cutoffs with n_jobs > 1.",))
        assert result.has_warning("n_jobs") is True
        assert result.has_warning("threads") is False
