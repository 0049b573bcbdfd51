"""Estimation problem: a log-likelihood bundled with its run configuration."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import NDArray

from mlekit.estimation.mle import estimate_ml
from mlekit.estimation.result import check_varnames
from mlekit.estimation.scale import ScalePolicy

if TYPE_CHECKING:
    from mlekit.estimation.result import MLEstimate


@dataclass
class EstimationProblem:
    """Everything needed to run :func:`mlekit.estimate_ml`.

    Attributes:
        name: Problem name for display.
        log_likelihood: Log-likelihood of the parameter vector.
        initial_theta: Starting point.
        varnames: Parameter names, or None for ``θ1 … θn``.
        scale: Log-likelihood scale policy.
        method: ``scipy.optimize.minimize`` method.
        options: Optimizer options.
        family: Likelihood family name when built from a family.
        n_obs: Number of observations, when known.
    """

    name: str
    log_likelihood: Callable[[Any], Any]
    initial_theta: NDArray[np.float64]
    varnames: list[str] | None = None
    scale: ScalePolicy = field(default_factory=ScalePolicy.default)
    method: str = "BFGS"
    options: dict[str, Any] = field(default_factory=dict)
    family: str | None = None
    n_obs: int | None = None

    def __post_init__(self) -> None:
        self.initial_theta = np.array(self.initial_theta, dtype=np.float64).reshape(-1)
        self.scale = ScalePolicy.parse(self.scale)
        if self.varnames is not None:
            self.varnames = check_varnames(self.varnames, self.initial_theta.shape[0])

    @property
    def parameter_names(self) -> list[str]:
        return check_varnames(self.varnames, self.initial_theta.shape[0])

    def estimate(self, initial_theta: Any = None, **overrides: Any) -> MLEstimate:
        """Run :func:`mlekit.estimate_ml`; keyword overrides take precedence."""
        kwargs: dict[str, Any] = {
            "scale": self.scale,
            "method": self.method,
            "options": dict(self.options),
            "varnames": self.varnames,
        }
        kwargs.update(overrides)
        x0 = self.initial_theta if initial_theta is None else initial_theta
        return estimate_ml(self.log_likelihood, x0, **kwargs)

    def summary(self) -> str:
        lines = [
            f"Problem: {self.name}",
            "=" * 50,
            f"  Family:       {self.family or 'custom'}",
            f"  Observations: {self.n_obs if self.n_obs is not None else 'n/a'}",
            f"  Scale:        {self.scale}",
            f"  Method:       {self.method}",
            f"  Options:      {self.options or '{}'}",
            "",
            f"  {'Parameter':<15} {'Initial':>12}",
            f"  {'-' * 15} {'-' * 12}",
        ]
        for pname, value in zip(self.parameter_names, self.initial_theta, strict=True):
            lines.append(f"  {pname:<15} {value:12.6f}")
        return "\n".join(lines)
