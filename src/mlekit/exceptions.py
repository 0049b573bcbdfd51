"""Exception hierarchy for mlekit."""

from __future__ import annotations


class MLEKitError(Exception):
    """Base class for all mlekit errors."""


class InvalidConfigurationError(MLEKitError, ValueError):
    """A configuration value (e.g. the log-likelihood scale) is not recognised."""


class InvalidArgumentError(MLEKitError, ValueError):
    """An argument is outside its admissible range."""


class DimensionMismatchError(MLEKitError, ValueError):
    """Sizes of estimates, covariance and variable names disagree."""


class ParseError(MLEKitError):
    """An estimation problem definition could not be parsed."""


class EstimationError(MLEKitError):
    """Base class for failures of the estimation itself."""


class ConvergenceError(EstimationError):
    """The optimizer did not report convergence."""


class NumericalError(EstimationError):
    """The negative Hessian at the mode is not positive definite."""
