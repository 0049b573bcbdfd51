"""Tests for log-likelihood scale policies."""

from __future__ import annotations

import math

import numpy as np
import pytest

from mlekit.estimation import ScaleKind, ScalePolicy, resolve_scale
from mlekit.exceptions import InvalidConfigurationError


def constant(value):
    def log_likelihood(theta):
        return value

    return log_likelihood


class TestScalePolicy:
    @pytest.mark.parametrize(
        ("spec", "kind", "value"),
        [
            ("default", ScaleKind.DEFAULT, None),
            (" Default ", ScaleKind.DEFAULT, None),
            ("none", ScaleKind.NONE, None),
            (2, ScaleKind.FIXED, 2.0),
            (0.5, ScaleKind.FIXED, 0.5),
            ("1e-3", ScaleKind.FIXED, 1e-3),
        ],
    )
    def test_parse(self, spec, kind, value):
        policy = ScalePolicy.parse(spec)
        assert policy.kind is kind
        assert policy.value == value

    def test_parse_passes_policy_through(self):
        policy = ScalePolicy.fixed(3.0)
        assert ScalePolicy.parse(policy) is policy

    @pytest.mark.parametrize(
        "spec",
        ["auto", "", None, True, 0, -1.0, math.inf, math.nan, "-2", [1.0], {"scale": 1}],
    )
    def test_rejects_invalid(self, spec):
        with pytest.raises(InvalidConfigurationError):
            ScalePolicy.parse(spec)

    def test_error_names_offending_value(self):
        with pytest.raises(InvalidConfigurationError, match="'auto'"):
            ScalePolicy.parse("auto")

    def test_value_only_for_fixed(self):
        with pytest.raises(InvalidConfigurationError, match="takes no value"):
            ScalePolicy(ScaleKind.NONE, 1.0)

    def test_str(self):
        assert str(ScalePolicy.default()) == "default"
        assert str(ScalePolicy.none()) == "none"
        assert str(ScalePolicy.fixed(0.25)) == "0.25"


class TestResolveScale:
    def test_default_uses_initial_log_likelihood(self):
        assert resolve_scale("default", constant(-9.0), np.zeros(1)) == pytest.approx(0.1)

    def test_default_is_positive_for_positive_log_likelihood(self):
        assert resolve_scale("default", constant(3.0), np.zeros(1)) == pytest.approx(0.25)

    def test_none(self):
        assert resolve_scale("none", constant(-1e6), np.zeros(1)) == 1.0

    def test_fixed(self):
        assert resolve_scale(0.01, constant(-1e6), np.zeros(1)) == 0.01

    def test_none_does_not_evaluate(self):
        def never(theta):
            raise AssertionError("should not be called")

        assert resolve_scale(ScalePolicy.none(), never, np.zeros(1)) == 1.0

    def test_non_finite_initial_log_likelihood(self):
        with pytest.raises(InvalidConfigurationError, match="finite"):
            resolve_scale("default", constant(-math.inf), np.zeros(1))

    def test_invalid_policy(self):
        with pytest.raises(InvalidConfigurationError):
            resolve_scale("bogus", constant(0.0), np.zeros(1))
