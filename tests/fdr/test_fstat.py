"""
Tests for get_cutoff_fstat() and the theta/F conversions.
"""

import numpy as np
import pytest
from scipy import stats

from pypropr.core.exceptions import (
    MissingStatisticError,
    NoResultWarning,
    ValidationError,
)
from pypropr.fdr import (
    GroupDifferenceTarget,
    fstat_from_theta,
    get_cutoff_fstat,
    theta_from_fstat,
)


def make_target(theta, group, *, fstat=True, fdr_pvalues=None, dfz=0.0):
    theta = np.asarray(theta, dtype=float)
    n = len(group)
    return GroupDifferenceTarget.from_counts(
        np.ones((n, 3)),
        group,
        theta,
        np.ones(len(theta)),
        None,
        lambda counts, **kwargs: theta,
        dfz=dfz,
        fstat=fstat_from_theta(theta, n) if fstat else None,
        fdr_pvalues=fdr_pvalues,
    )


GROUP_10 = ["A"] * 5 + ["B"] * 5


class TestTheoreticalCutoff:

    def test_two_groups(self):
        target = make_target([0.2, 0.5, 0.8], GROUP_10)
        q = stats.f.isf(0.05, 1, 8)
        expected = 8.0 / (q + 8.0)
        assert get_cutoff_fstat(target, pval=0.05) == pytest.approx(expected, rel=1e-12)

    def test_round_trip_reproduces_critical_value(self):
        group = ["A"] * 4 + ["B"] * 4 + ["C"] * 4
        target = make_target([0.3, 0.6, 0.9], group)
        cutoff = get_cutoff_fstat(target, pval=0.01)
        q = stats.f.isf(0.01, 2, 9)
        assert float(fstat_from_theta(cutoff, 12)) == pytest.approx(q, rel=1e-10)

    def test_dfz_adjusts_population_size(self):
        plain = get_cutoff_fstat(make_target([0.5], GROUP_10), pval=0.05)
        adjusted = get_cutoff_fstat(make_target([0.5], GROUP_10, dfz=4.0), pval=0.05)
        q = stats.f.isf(0.05, 1, 12)
        assert adjusted == pytest.approx(12.0 / (q + 12.0), rel=1e-12)
        assert adjusted != pytest.approx(plain)

    def test_cutoff_in_unit_interval(self):
        cutoff = get_cutoff_fstat(make_target([0.5], GROUP_10), pval=0.5)
        assert 0.0 < cutoff < 1.0


class TestEmpiricalCutoff:

    def test_max_theta_among_significant(self):
        target = make_target(
            [0.3, 0.1, 0.5, 0.9], GROUP_10, fdr_pvalues=[0.01, 0.2, 0.04, np.nan],
        )
        assert get_cutoff_fstat(target, pval=0.05, fdr_adjusted=True) == pytest.approx(0.5)

    def test_none_significant(self):
        target = make_target([0.3, 0.1], GROUP_10, fdr_pvalues=[0.2, np.nan])
        with pytest.warns(NoResultWarning, match="No significant cutoff"):
            assert get_cutoff_fstat(target, pval=0.05, fdr_adjusted=True) is False

    def test_requires_adjusted_pvalues(self):
        target = make_target([0.3], GROUP_10)
        with pytest.raises(MissingStatisticError) as excinfo:
            get_cutoff_fstat(target, fdr_adjusted=True)
        assert excinfo.value.statistic == "fdr_pvalues"


class TestPreconditions:

    def test_requires_fstat(self):
        target = make_target([0.3], GROUP_10, fstat=False)
        with pytest.raises(MissingStatisticError, match="F-statistics") as excinfo:
            get_cutoff_fstat(target)
        assert excinfo.value.statistic == "fstat"

    @pytest.mark.parametrize("pval", [-0.1, 1.5, "0.05"])
    def test_pval_out_of_range(self, pval):
        with pytest.raises(ValidationError, match="pval"):
            get_cutoff_fstat(make_target([0.3], GROUP_10), pval=pval)


class TestConversions:

    def test_inverse_pair(self):
        theta = np.array([0.1, 0.4, 0.75, 1.0])
        np.testing.assert_allclose(theta_from_fstat(fstat_from_theta(theta, 20), 20), theta)

    def test_theta_one_is_zero_f(self):
        assert float(fstat_from_theta(1.0, 10)) == 0.0
