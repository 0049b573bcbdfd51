"""Tests for the ready-made likelihood families."""

from __future__ import annotations

import numpy as np
import pytest
from scipy import stats

from mlekit.likelihoods import (
    FAMILIES,
    exponential_loglik,
    mvnormal_logpdf,
    normal_loglik,
    poisson_loglik,
)


class TestLogLikelihoodValues:
    def test_mvnormal_scalar_cov(self):
        ll = mvnormal_logpdf([1.0, 2.0], 9.0)
        expected = stats.multivariate_normal([1.0, 2.0], 9.0 * np.eye(2)).logpdf([0.0, 0.0])
        assert float(ll(np.zeros(2))) == pytest.approx(expected)

    def test_mvnormal_full_cov(self):
        cov = np.array([[2.0, 0.3], [0.3, 1.0]])
        ll = mvnormal_logpdf([0.0, 1.0], cov)
        expected = stats.multivariate_normal([0.0, 1.0], cov).logpdf([0.5, -0.5])
        assert float(ll(np.array([0.5, -0.5]))) == pytest.approx(expected)

    def test_mvnormal_rejects_bad_cov_shape(self):
        with pytest.raises(ValueError, match="2x2"):
            mvnormal_logpdf([0.0, 1.0], np.eye(3))

    def test_normal(self):
        x = np.array([0.2, -1.0, 3.5, 2.2])
        ll = normal_loglik(x)
        expected = stats.norm.logpdf(x, loc=1.0, scale=2.0).sum()
        assert float(ll(np.array([1.0, 2.0]))) == pytest.approx(expected)

    def test_poisson(self):
        x = np.array([0, 2, 5, 1])
        ll = poisson_loglik(x)
        expected = stats.poisson.logpmf(x, 2.5).sum()
        assert float(ll(np.array([2.5]))) == pytest.approx(expected)

    def test_exponential(self):
        x = np.array([0.5, 1.5, 0.1])
        ll = exponential_loglik(x)
        expected = stats.expon.logpdf(x, scale=1.0 / 3.0).sum()
        assert float(ll(np.array([3.0]))) == pytest.approx(expected)


class TestDataValidation:
    @pytest.mark.parametrize("builder", [normal_loglik, poisson_loglik, exponential_loglik])
    def test_empty_data(self, builder):
        with pytest.raises(ValueError, match="at least one"):
            builder([])

    def test_non_finite_data(self):
        with pytest.raises(ValueError, match="finite"):
            normal_loglik([1.0, np.nan])

    def test_negative_counts(self):
        with pytest.raises(ValueError, match="non-negative"):
            poisson_loglik([1, -2])

    def test_negative_durations(self):
        with pytest.raises(ValueError, match="non-negative"):
            exponential_loglik([1.0, -0.5])


def test_family_registry():
    assert set(FAMILIES) == {"mvnormal", "normal", "poisson", "exponential"}
    assert FAMILIES["normal"][1] == ("mu", "sigma")
    assert FAMILIES["mvnormal"][1] is None
