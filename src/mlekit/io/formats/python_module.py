"""Python problem files.

A problem module defines at least::

    import jax.numpy as jnp

    def log_likelihood(theta):
        return -0.5 * jnp.sum((theta - 1.0) ** 2)

    initial_theta = [0.0, 0.0]

and optionally ``varnames``, ``scale``, ``method``, ``options``, ``name``
and ``n_obs``.
"""

from __future__ import annotations

import importlib.util
from pathlib import Path

from mlekit.exceptions import MLEKitError, ParseError
from mlekit.io.problem import EstimationProblem


def load_python_problem(path: str | Path) -> EstimationProblem:
    """Import ``path`` as a module and build an EstimationProblem from it."""
    path = Path(path)
    spec = importlib.util.spec_from_file_location(f"mlekit_problem_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise ParseError(f"Cannot import problem module: {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    log_likelihood = getattr(module, "log_likelihood", None)
    if not callable(log_likelihood):
        raise ParseError(f"{path.name} must define a callable 'log_likelihood'")
    if not hasattr(module, "initial_theta"):
        raise ParseError(f"{path.name} must define 'initial_theta'")

    varnames = getattr(module, "varnames", None)
    try:
        return EstimationProblem(
            name=str(getattr(module, "name", path.stem)),
            log_likelihood=log_likelihood,
            initial_theta=module.initial_theta,
            varnames=list(varnames) if varnames is not None else None,
            scale=getattr(module, "scale", "default"),
            method=str(getattr(module, "method", "BFGS")),
            options=dict(getattr(module, "options", None) or {}),
            n_obs=getattr(module, "n_obs", None),
        )
    except (MLEKitError, TypeError, ValueError) as exc:
        raise ParseError(f"Invalid problem module {path.name}: {exc}") from exc
