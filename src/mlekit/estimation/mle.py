"""Maximum likelihood estimation for user-supplied log-likelihoods.

Uses ``scipy.optimize.minimize`` to find the mode of the (scaled)
log-likelihood, and ``jax`` to differentiate it. The covariance estimate is
the inverse of the negative Hessian at the mode (observed Fisher
information).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import linalg, optimize

from mlekit.estimation.backends import (
    Differentiator,
    JaxDifferentiator,
    Optimizer,
    ScipyOptimizer,
)
from mlekit.estimation.result import MLEstimate, check_varnames
from mlekit.estimation.scale import ScalePolicy, resolve_scale
from mlekit.exceptions import ConvergenceError, NumericalError

logger = logging.getLogger(__name__)

LogLikelihood = Callable[[Any], Any]


# ---------------------------------------------------------------------------
# Mode finding
# ---------------------------------------------------------------------------


def _as_vector(initial_theta: ArrayLike) -> NDArray[np.float64]:
    x0 = np.array(initial_theta, dtype=np.float64).reshape(-1)
    if x0.size == 0:
        raise ValueError("initial_theta must contain at least one parameter")
    return x0


def find_mode(
    log_likelihood: LogLikelihood,
    initial_theta: NDArray[np.float64],
    scale: float,
    optimizer: Optimizer,
    differentiator: Differentiator,
) -> optimize.OptimizeResult:
    """Minimize ``-scale * log_likelihood`` starting from ``initial_theta``.

    Returns the optimizer's raw result.

    Raises:
        ConvergenceError: If the optimizer does not report convergence.
    """

    def objective(theta: Any) -> Any:
        return -scale * log_likelihood(theta)

    result = optimizer.minimize(differentiator.value_and_grad(objective), initial_theta)

    if not result.success:
        message = getattr(result, "message", "")
        raise ConvergenceError(
            "Maximum likelihood did not converge. "
            f"Check concavity and initial value. (optimizer: {message})"
        )

    logger.debug(
        "optimizer converged after %s iterations, objective %g",
        getattr(result, "nit", "?"),
        float(getattr(result, "fun", np.nan)),
    )
    return result


# ---------------------------------------------------------------------------
# Covariance from the Hessian
# ---------------------------------------------------------------------------


def covariance_at_mode(
    log_likelihood: LogLikelihood,
    theta_hat: NDArray[np.float64],
    differentiator: Differentiator | None = None,
) -> NDArray[np.float64]:
    """Invert the negative Hessian of the *unscaled* log-likelihood.

    Raises:
        NumericalError: If the negative Hessian is not positive definite,
            i.e. ``theta_hat`` is not a local maximum.
    """
    differentiator = differentiator or JaxDifferentiator()
    theta = np.asarray(theta_hat, dtype=np.float64).reshape(-1)

    info = -differentiator.hessian(log_likelihood, theta)
    info = 0.5 * (info + info.T)
    logger.debug("negative Hessian at mode:\n%s", info)

    if not np.all(np.isfinite(info)):
        raise NumericalError(
            "Hessian of the log-likelihood at the mode has non-finite entries"
        )

    try:
        factor = linalg.cho_factor(info, lower=True)
    except np.linalg.LinAlgError as exc:
        raise NumericalError(
            "Negative Hessian at the mode is not positive definite; "
            "the log-likelihood is not locally concave there. "
            "Check concavity and initial value."
        ) from exc

    cov = linalg.cho_solve(factor, np.eye(theta.shape[0]))
    return 0.5 * (cov + cov.T)


# ---------------------------------------------------------------------------
# Main estimators
# ---------------------------------------------------------------------------


def _resolve_backends(
    method: str,
    options: dict | None,
    optimizer: Optimizer | None,
    differentiator: Differentiator | None,
) -> tuple[Optimizer, Differentiator]:
    if optimizer is None:
        optimizer = ScipyOptimizer(method=method, options=options)
    return optimizer, differentiator or JaxDifferentiator()


def estimate_mode(
    log_likelihood: LogLikelihood,
    initial_theta: ArrayLike,
    *,
    scale: ScalePolicy | str | float = "default",
    method: str = "BFGS",
    options: dict | None = None,
    optimizer: Optimizer | None = None,
    differentiator: Differentiator | None = None,
) -> NDArray[np.float64]:
    """Point estimate only; skips the Hessian and its inversion.

    Accepts the same configuration as :func:`estimate_ml`.
    """
    x0 = _as_vector(initial_theta)
    optimizer, differentiator = _resolve_backends(method, options, optimizer, differentiator)
    gamma = resolve_scale(scale, log_likelihood, x0)
    result = find_mode(log_likelihood, x0, gamma, optimizer, differentiator)
    return np.asarray(result.x, dtype=np.float64)


def estimate_ml(
    log_likelihood: LogLikelihood,
    initial_theta: ArrayLike,
    *,
    scale: ScalePolicy | str | float = "default",
    method: str = "BFGS",
    options: dict | None = None,
    varnames: Sequence[str] | None = None,
    optimizer: Optimizer | None = None,
    differentiator: Differentiator | None = None,
) -> MLEstimate:
    """Estimate parameters by maximum likelihood.

    ``log_likelihood`` maps a parameter vector to a scalar and must be
    traceable by ``jax`` (write it with ``jax.numpy``), since both the
    optimizer gradient and the Hessian are obtained by automatic
    differentiation.

    Args:
        log_likelihood: Log-likelihood function of the parameter vector.
        initial_theta: Starting point for the optimizer.
        scale: ``"default"`` (``1 / (1 + |log_l(initial_theta)|)``),
            ``"none"``, or a positive number multiplying the log-likelihood
            during optimization.
        method: ``scipy.optimize.minimize`` method (default BFGS).
        options: Iteration/tolerance options for the optimizer. Tolerances
            apply to the scaled objective: with BFGS the gradient of the
            unscaled log-likelihood is only bounded by ``gtol / gamma``, so a
            small fixed ``scale`` needs a proportionally smaller ``gtol``.
        varnames: Parameter names (default ``θ1 … θn``).
        optimizer: Alternative optimization backend; ``method`` and
            ``options`` are ignored when given.
        differentiator: Alternative differentiation backend.

    Returns:
        MLEstimate with the mode, covariance and optimizer diagnostics.

    Raises:
        InvalidConfigurationError: Unrecognised ``scale``.
        DimensionMismatchError: ``varnames`` has the wrong length.
        ConvergenceError: The optimizer did not converge.
        NumericalError: Negative Hessian at the mode is not positive definite.
    """
    x0 = _as_vector(initial_theta)
    names = check_varnames(varnames, x0.shape[0])
    optimizer, differentiator = _resolve_backends(method, options, optimizer, differentiator)

    gamma = resolve_scale(scale, log_likelihood, x0)
    result = find_mode(log_likelihood, x0, gamma, optimizer, differentiator)

    theta_hat = np.asarray(result.x, dtype=np.float64)
    cov = covariance_at_mode(log_likelihood, theta_hat, differentiator)
    ll_hat = float(log_likelihood(theta_hat))

    return MLEstimate(
        theta=theta_hat,
        cov=cov,
        varnames=tuple(names),
        optimization_result=result,
        log_likelihood=ll_hat,
        scale=gamma,
    )
