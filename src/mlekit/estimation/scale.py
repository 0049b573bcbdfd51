"""Scaling of the log-likelihood before optimization.

The optimizer minimizes ``-gamma * log_l(theta)``. Rescaling by a positive
constant leaves the location of the mode unchanged but keeps the magnitude of
the objective near unit scale, which helps step-size selection in
quasi-Newton methods.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

from mlekit.exceptions import InvalidConfigurationError

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray

logger = logging.getLogger(__name__)


class ScaleKind(Enum):
    """How the log-likelihood scale is chosen."""

    DEFAULT = auto()  # 1 / (1 + |log_l(initial)|)
    NONE = auto()
    FIXED = auto()


@dataclass(frozen=True, slots=True)
class ScalePolicy:
    """Scale selection policy.

    Use the ``default()``, ``none()`` and ``fixed(value)`` constructors or
    ``ScalePolicy.parse`` for user input such as ``"default"``, ``"none"`` or
    a positive number.
    """

    kind: ScaleKind
    value: float | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ScaleKind):
            raise InvalidConfigurationError(f"Invalid scale kind: {self.kind!r}")
        if self.kind is ScaleKind.FIXED:
            value = self.value
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidConfigurationError(
                    f"Fixed log-likelihood scale must be a number, got {value!r}"
                )
            value = float(value)
            if not math.isfinite(value) or value <= 0.0:
                raise InvalidConfigurationError(
                    f"Fixed log-likelihood scale must be finite and > 0, got {value!r}"
                )
            object.__setattr__(self, "value", value)
        elif self.value is not None:
            raise InvalidConfigurationError(
                f"Scale policy {self.kind.name.lower()} takes no value, got {self.value!r}"
            )

    @classmethod
    def default(cls) -> ScalePolicy:
        return cls(ScaleKind.DEFAULT)

    @classmethod
    def none(cls) -> ScalePolicy:
        return cls(ScaleKind.NONE)

    @classmethod
    def fixed(cls, value: float) -> ScalePolicy:
        return cls(ScaleKind.FIXED, value)

    @classmethod
    def parse(cls, spec: Any) -> ScalePolicy:
        """Build a policy from ``"default"``, ``"none"``, a number or a policy."""
        if isinstance(spec, ScalePolicy):
            return spec
        if isinstance(spec, str):
            normalized = spec.strip().lower()
            if normalized == "default":
                return cls.default()
            if normalized == "none":
                return cls.none()
            try:
                number = float(normalized)
            except ValueError:
                raise InvalidConfigurationError(
                    f"Invalid log-likelihood scale: {spec!r}. "
                    "Expected 'default', 'none' or a positive number."
                ) from None
            return cls.fixed(number)
        if isinstance(spec, (int, float)) and not isinstance(spec, bool):
            return cls.fixed(spec)
        raise InvalidConfigurationError(
            f"Invalid log-likelihood scale: {spec!r}. "
            "Expected 'default', 'none' or a positive number."
        )

    def __str__(self) -> str:
        if self.kind is ScaleKind.FIXED:
            return f"{self.value:g}"
        return self.kind.name.lower()


def resolve_scale(
    policy: ScalePolicy | str | float,
    log_likelihood: Callable[[Any], Any],
    initial_theta: NDArray[np.float64],
) -> float:
    """Return the positive factor ``gamma`` applied to the log-likelihood.

    Under the default policy the log-likelihood is evaluated once at the
    initial point; errors raised by it propagate unchanged.
    """
    policy = ScalePolicy.parse(policy)

    if policy.kind is ScaleKind.NONE:
        gamma = 1.0
    elif policy.kind is ScaleKind.FIXED:
        gamma = float(policy.value)
    else:
        ll0 = float(log_likelihood(initial_theta))
        if not math.isfinite(ll0):
            raise InvalidConfigurationError(
                f"Default log-likelihood scale needs a finite log-likelihood "
                f"at the initial value, got {ll0}"
            )
        gamma = 1.0 / (1.0 + abs(ll0))

    logger.debug("log-likelihood scale (%s): %g", policy, gamma)
    return gamma
