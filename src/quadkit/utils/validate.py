"""Validation utilities for quadkit integrators."""

from __future__ import annotations

import math
from numbers import Integral

import numpy as np

from quadkit.quadrature.errors import IntervalError, InvalidInputError

__all__ = [
    "LIMIT_TOLERANCE",
    "validate_tolerance",
    "validate_positive_int",
    "validate_threshold",
    "validate_finite_interval",
]

#: Smallest tolerance the adaptive engine accepts, a few ulps at 1.0.
LIMIT_TOLERANCE = 4.0 * float(np.finfo(float).eps)


def validate_tolerance(value: float, name: str = "tolerance") -> float:
    """Validates an absolute or relative tolerance.

    Args:
        value: Proposed tolerance.
        name: Name used in error messages.

    Returns:
        The tolerance as a float.

    Raises:
        InvalidInputError: If the tolerance is not a finite number of at
            least ``LIMIT_TOLERANCE``.
    """
    try:
        tol = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"invalid {name}: {value!r} is not a number") from None
    if not math.isfinite(tol) or tol < LIMIT_TOLERANCE:
        raise InvalidInputError(
            f"invalid {name}: {value!r} (must be finite and >= {LIMIT_TOLERANCE:.3e})"
        )
    return tol


def validate_positive_int(value: int, name: str) -> int:
    """Validates a strictly positive integer count.

    Raises:
        InvalidInputError: If ``value`` is not an integer or is below 1.
    """
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidInputError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidInputError(f"{name} must be >= 1, got {value}")
    return int(value)


def validate_threshold(value: float, name: str) -> float:
    """Validates a strictly positive, finite threshold.

    Raises:
        InvalidInputError: If ``value`` is not positive and finite.
    """
    try:
        t = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"invalid {name}: {value!r} is not a number") from None
    if not math.isfinite(t) or t <= 0.0:
        raise InvalidInputError(f"{name} must be positive and finite, got {value!r}")
    return t


def validate_finite_interval(a: float, b: float) -> tuple[float, float]:
    """Validates that both endpoints of an interval are finite numbers.

    Used by the fixed-node rules, which cannot handle unbounded domains.

    Args:
        a: Lower endpoint.
        b: Upper endpoint.

    Returns:
        Tuple ``(a, b)`` as floats.

    Raises:
        IntervalError: If either endpoint is infinite or NaN.
    """
    lo = float(a)
    hi = float(b)
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise IntervalError(f"interval endpoints must be finite, got [{a!r}, {b!r}]")
    return lo, hi
