"""Estimation: scale selection, mode finding, Hessian covariance and intervals."""

from mlekit.estimation.backends import (
    Differentiator,
    JaxDifferentiator,
    Optimizer,
    ScipyOptimizer,
)
from mlekit.estimation.intervals import Interval, confidence_intervals
from mlekit.estimation.mle import (
    covariance_at_mode,
    estimate_ml,
    estimate_mode,
    find_mode,
)
from mlekit.estimation.result import MLEstimate, default_varnames
from mlekit.estimation.scale import ScaleKind, ScalePolicy, resolve_scale

__all__ = [
    "Differentiator",
    "Optimizer",
    "JaxDifferentiator",
    "ScipyOptimizer",
    "Interval",
    "MLEstimate",
    "ScaleKind",
    "ScalePolicy",
    "confidence_intervals",
    "covariance_at_mode",
    "default_varnames",
    "estimate_ml",
    "estimate_mode",
    "find_mode",
    "resolve_scale",
]
