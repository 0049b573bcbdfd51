"""Immutable container for maximum likelihood estimates."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import NDArray
from scipy import linalg

from mlekit.exceptions import DimensionMismatchError, NumericalError

if TYPE_CHECKING:
    from collections.abc import Sequence

    import pandas as pd

    from mlekit.estimation.intervals import Interval


def default_varnames(n: int) -> list[str]:
    """Names ``θ1 … θn`` used when the caller supplies none."""
    return [f"θ{i}" for i in range(1, n + 1)]


def _readonly(values: Any, ndim: int, label: str) -> NDArray[np.float64]:
    arr = np.array(values, dtype=np.float64)
    if arr.ndim != ndim:
        raise DimensionMismatchError(f"{label} must be {ndim}-dimensional, got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


def _check_positive_definite(cov: NDArray[np.float64]) -> None:
    if not np.all(np.isfinite(cov)):
        raise NumericalError("Covariance matrix has non-finite entries")
    if not np.allclose(cov, cov.T):
        raise NumericalError("Covariance matrix is not symmetric")
    try:
        linalg.cho_factor(cov, lower=True)
    except np.linalg.LinAlgError as exc:
        raise NumericalError("Covariance matrix is not positive definite") from exc


@dataclass(frozen=True, eq=False)
class MLEstimate:
    """Maximum likelihood estimate.

    Attributes:
        theta: Point estimate (the located mode).
        cov: Covariance matrix, the inverse of the negative Hessian of the
            log-likelihood at ``theta``.
        varnames: Parameter names, positionally aligned with ``theta``.
        optimization_result: Raw optimizer output (iterations, convergence
            flags, final objective value). The objective is the *scaled*
            negative log-likelihood.
        log_likelihood: Unscaled log-likelihood at ``theta``.
        scale: Factor applied to the log-likelihood during optimization.

    Raises:
        DimensionMismatchError: If sizes of theta, cov and varnames disagree.
        NumericalError: If cov is not symmetric positive definite.
    """

    theta: NDArray[np.float64]
    cov: NDArray[np.float64]
    varnames: tuple[str, ...]
    optimization_result: Any = None
    log_likelihood: float = math.nan
    scale: float = 1.0

    def __post_init__(self) -> None:
        theta = _readonly(self.theta, 1, "theta")
        cov = _readonly(self.cov, 2, "cov")
        varnames = tuple(str(name) for name in self.varnames)
        n = theta.shape[0]

        if cov.shape != (n, n):
            raise DimensionMismatchError(
                f"Covariance shape {cov.shape} does not match {n} parameters"
            )
        if len(varnames) != n:
            raise DimensionMismatchError(
                f"Got {len(varnames)} variable names for {n} parameters: {list(varnames)}"
            )
        _check_positive_definite(cov)

        object.__setattr__(self, "theta", theta)
        object.__setattr__(self, "cov", cov)
        object.__setattr__(self, "varnames", varnames)
        object.__setattr__(self, "log_likelihood", float(self.log_likelihood))
        object.__setattr__(self, "scale", float(self.scale))

    @property
    def n_params(self) -> int:
        return int(self.theta.shape[0])

    @property
    def std_errors(self) -> NDArray[np.float64]:
        """Marginal standard errors, ``sqrt(diag(cov))``."""
        return np.sqrt(np.diag(self.cov))

    @property
    def converged(self) -> bool:
        return bool(getattr(self.optimization_result, "success", True))

    @property
    def n_iterations(self) -> int:
        return int(getattr(self.optimization_result, "nit", 0))

    @property
    def aic(self) -> float:
        """Akaike information criterion."""
        return float(-2.0 * self.log_likelihood + 2.0 * self.n_params)

    def bic(self, n_obs: int) -> float:
        """Bayesian information criterion for ``n_obs`` observations."""
        if n_obs < 1:
            raise ValueError(f"n_obs must be >= 1, got {n_obs}")
        return float(-2.0 * self.log_likelihood + self.n_params * math.log(n_obs))

    def confidence_intervals(self, p: float = 0.025) -> list[Interval]:
        from mlekit.estimation.intervals import confidence_intervals

        return confidence_intervals(self, p)

    def summary(self, p: float = 0.025) -> str:
        """Aligned table of estimates with ``p`` and ``1 - p`` bounds."""
        from mlekit.report import summary_table

        return summary_table(self, p)

    def to_frame(self, p: float = 0.025) -> pd.DataFrame:
        """Estimates, standard errors and interval bounds as a DataFrame."""
        import pandas as pd

        intervals = self.confidence_intervals(p)
        return pd.DataFrame(
            {
                "parameter": list(self.varnames),
                "estimate": self.theta,
                "std_error": self.std_errors,
                "lo": [ci.lo for ci in intervals],
                "hi": [ci.hi for ci in intervals],
            }
        )

    def __getitem__(self, name: str) -> float:
        try:
            return float(self.theta[self.varnames.index(name)])
        except ValueError:
            raise KeyError(name) from None

    def __str__(self) -> str:
        return self.summary()


def check_varnames(varnames: Sequence[str] | None, n: int) -> list[str]:
    """Resolve variable names, generating defaults when ``varnames`` is None."""
    if varnames is None:
        return default_varnames(n)
    names = [str(v) for v in varnames]
    if len(names) != n:
        raise DimensionMismatchError(
            f"Got {len(names)} variable names for {n} parameters: {names}"
        )
    return names
