"""Optimization and automatic-differentiation backends.

Estimation talks to its numerical collaborators only through the
``Optimizer`` and ``Differentiator`` protocols. The defaults wrap
``scipy.optimize.minimize`` and ``jax``.

Importing this module (and therefore ``mlekit``) sets ``jax_enable_x64``
through ``jax.config.update``. The flag is process-wide: other ``jax`` code in
the same process also defaults to 64-bit arrays afterwards.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

import jax
import jax.numpy as jnp
import numpy as np
from numpy.typing import NDArray
from scipy import optimize

# covariance estimates need float64 Hessians
jax.config.update("jax_enable_x64", True)


class Differentiator(Protocol):
    """Derivatives of a scalar function of a parameter vector."""

    def value_and_grad(
        self, fun: Callable[[Any], Any]
    ) -> Callable[[NDArray[np.float64]], tuple[float, NDArray[np.float64]]]: ...

    def hessian(
        self, fun: Callable[[Any], Any], theta: NDArray[np.float64]
    ) -> NDArray[np.float64]: ...


class Optimizer(Protocol):
    """Minimizer returning an object with ``x`` and ``success`` attributes."""

    def minimize(
        self,
        fun: Callable[[NDArray[np.float64]], tuple[float, NDArray[np.float64]]],
        x0: NDArray[np.float64],
    ) -> optimize.OptimizeResult: ...


class JaxDifferentiator:
    """Automatic differentiation with ``jax`` in double precision."""

    def value_and_grad(
        self, fun: Callable[[Any], Any]
    ) -> Callable[[NDArray[np.float64]], tuple[float, NDArray[np.float64]]]:
        vg = jax.value_and_grad(fun)

        def evaluate(theta: NDArray[np.float64]) -> tuple[float, NDArray[np.float64]]:
            value, grad = vg(jnp.asarray(theta, dtype=jnp.float64))
            return float(value), np.asarray(grad, dtype=np.float64)

        return evaluate

    def hessian(
        self, fun: Callable[[Any], Any], theta: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        hess = jax.hessian(fun)(jnp.asarray(theta, dtype=jnp.float64))
        k = int(np.size(theta))
        return np.asarray(hess, dtype=np.float64).reshape(k, k)


class ScipyOptimizer:
    """``scipy.optimize.minimize`` with a supplied gradient.

    Args:
        method: ``scipy.optimize.minimize`` method (default BFGS).
        options: Iteration/tolerance options forwarded unchanged, e.g.
            ``{"maxiter": 200, "gtol": 1e-6}``.
    """

    def __init__(self, method: str = "BFGS", options: dict | None = None) -> None:
        self.method = method
        self.options = dict(options) if options else {}

    def minimize(
        self,
        fun: Callable[[NDArray[np.float64]], tuple[float, NDArray[np.float64]]],
        x0: NDArray[np.float64],
    ) -> optimize.OptimizeResult:
        return optimize.minimize(
            fun,
            np.asarray(x0, dtype=np.float64),
            method=self.method,
            jac=True,
            options=self.options,
        )

    def __repr__(self) -> str:
        return f"ScipyOptimizer(method={self.method!r}, options={self.options!r})"
