"""Ready-made log-likelihood builders.

Each builder returns a function of the parameter vector written with
``jax.numpy`` so it can be passed straight to :func:`mlekit.estimate_ml`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import jax.numpy as jnp
import numpy as np
from jax.scipy import stats as jstats
from jax.scipy.special import gammaln
from numpy.typing import ArrayLike

LogLikelihood = Callable[[Any], Any]


def _sample(data: ArrayLike) -> jnp.ndarray:
    x = np.asarray(data, dtype=np.float64).reshape(-1)
    if x.size == 0:
        raise ValueError("data must contain at least one observation")
    if not np.all(np.isfinite(x)):
        raise ValueError("data must be finite")
    return jnp.asarray(x)


def mvnormal_logpdf(mean: ArrayLike, cov: ArrayLike | float) -> LogLikelihood:
    """Log-density of ``N(mean, cov)`` as a function of the evaluation point.

    A scalar ``cov`` means ``cov * I``. The mode is ``mean`` and the inverse
    negative Hessian is ``cov``.
    """
    mu = np.asarray(mean, dtype=np.float64).reshape(-1)
    k = mu.shape[0]
    cov_arr = np.asarray(cov, dtype=np.float64)
    if cov_arr.ndim == 0:
        cov_arr = float(cov_arr) * np.eye(k)
    if cov_arr.shape != (k, k):
        raise ValueError(f"cov must be a scalar or a {k}x{k} matrix, got shape {cov_arr.shape}")
    mu_j = jnp.asarray(mu)
    cov_j = jnp.asarray(cov_arr)

    def log_likelihood(theta: Any) -> Any:
        return jstats.multivariate_normal.logpdf(jnp.asarray(theta), mu_j, cov_j)

    return log_likelihood


def normal_loglik(data: ArrayLike) -> LogLikelihood:
    """i.i.d. normal sample; ``theta = (mu, sigma)``."""
    x = _sample(data)

    def log_likelihood(theta: Any) -> Any:
        mu, sigma = theta[0], theta[1]
        return jnp.sum(jstats.norm.logpdf(x, loc=mu, scale=sigma))

    return log_likelihood


def poisson_loglik(data: ArrayLike) -> LogLikelihood:
    """i.i.d. Poisson counts; ``theta = (rate,)``."""
    x = _sample(data)
    if bool(jnp.any(x < 0)):
        raise ValueError("Poisson data must be non-negative counts")
    log_fact = jnp.sum(gammaln(x + 1.0))

    def log_likelihood(theta: Any) -> Any:
        rate = theta[0]
        return jnp.sum(x) * jnp.log(rate) - x.shape[0] * rate - log_fact

    return log_likelihood


def exponential_loglik(data: ArrayLike) -> LogLikelihood:
    """i.i.d. exponential sample; ``theta = (rate,)``."""
    x = _sample(data)
    if bool(jnp.any(x < 0)):
        raise ValueError("Exponential data must be non-negative")

    def log_likelihood(theta: Any) -> Any:
        rate = theta[0]
        return x.shape[0] * jnp.log(rate) - rate * jnp.sum(x)

    return log_likelihood


# family name -> (builder, parameter names)
FAMILIES: dict[str, tuple[Callable[..., LogLikelihood], tuple[str, ...] | None]] = {
    "mvnormal": (mvnormal_logpdf, None),
    "normal": (normal_loglik, ("mu", "sigma")),
    "poisson": (poisson_loglik, ("rate",)),
    "exponential": (exponential_loglik, ("rate",)),
}
