"""mlekit: maximum likelihood estimation with Hessian-based standard errors.

Example:
    import jax.numpy as jnp
    from mlekit import estimate_ml

    def log_likelihood(theta):
        return -0.5 * jnp.sum((theta - jnp.array([1.0, 2.0])) ** 2)

    result = estimate_ml(log_likelihood, [0.0, 0.0], varnames=["a", "b"])
    print(result)
"""

from mlekit._version import __version__
from mlekit.estimation import (
    Interval,
    MLEstimate,
    ScalePolicy,
    confidence_intervals,
    estimate_ml,
    estimate_mode,
)
from mlekit.exceptions import (
    ConvergenceError,
    DimensionMismatchError,
    EstimationError,
    InvalidArgumentError,
    InvalidConfigurationError,
    MLEKitError,
    NumericalError,
    ParseError,
)
from mlekit.io import EstimationProblem, load_problem
from mlekit.report import summary_table

__all__ = [
    "__version__",
    "estimate_ml",
    "estimate_mode",
    "confidence_intervals",
    "summary_table",
    "load_problem",
    "EstimationProblem",
    "Interval",
    "MLEstimate",
    "ScalePolicy",
    "MLEKitError",
    "EstimationError",
    "ConvergenceError",
    "NumericalError",
    "DimensionMismatchError",
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "ParseError",
]
