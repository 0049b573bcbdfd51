"""Univariate confidence intervals from the asymptotic covariance."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from scipy import stats

from mlekit.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from mlekit.estimation.result import MLEstimate


@dataclass(frozen=True, slots=True)
class Interval:
    """Closed interval ``[lo, hi]``."""

    lo: float
    hi: float

    @property
    def center(self) -> float:
        return 0.5 * (self.lo + self.hi)

    @property
    def width(self) -> float:
        return self.hi - self.lo

    def __contains__(self, value: float) -> bool:
        return self.lo <= value <= self.hi


def validate_tail_probability(p: float) -> float:
    """Return ``p`` as float, requiring ``0 < p < 0.5``."""
    try:
        value = float(p)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Tail probability must be a number, got {p!r}") from None
    if not math.isfinite(value) or not (0.0 < value < 0.5):
        raise InvalidArgumentError(
            f"Tail probability must satisfy 0 < p < 0.5, got {p!r}"
        )
    return value


def normal_quantile(p: float) -> float:
    """The ``1 - p`` quantile of the standard normal distribution."""
    return float(stats.norm.ppf(1.0 - validate_tail_probability(p)))


def confidence_intervals(result: MLEstimate, p: float = 0.025) -> list[Interval]:
    """Symmetric intervals ``theta_i +/- z * sigma_i`` for every parameter.

    ``sigma_i`` is the square root of the i-th diagonal entry of the
    covariance and ``z`` the ``1 - p`` standard normal quantile, so each
    interval has nominal coverage ``1 - 2p``.

    Raises:
        InvalidArgumentError: If ``p`` is not in ``(0, 0.5)``.
    """
    z = normal_quantile(p)
    sigma = np.sqrt(np.diag(result.cov))
    return [
        Interval(float(theta - z * s), float(theta + z * s))
        for theta, s in zip(result.theta, sigma, strict=True)
    ]
