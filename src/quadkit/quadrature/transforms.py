"""Domain classification and the reciprocal change of variables.

Unbounded tails are mapped onto finite intervals with ``u = 1/x``, which
turns ``∫ f(x) dx`` into ``∫ f(1/u) / u**2 du``. The substituted integrand
is singular at ``u = 0``; every rule used here has interior nodes only, so
``u = 0`` may be an endpoint but is never evaluated.

Tail integrals are split at ``x = ±1`` when the finite endpoint lies on the
near side of that point: the piece between the endpoint and ``±1`` is
integrated directly and only ``|x| >= 1`` is folded into ``u`` in
``[-1, 0]`` or ``[0, 1]``.

The folded tail is integrated before the direct piece, so a divergent tail
is reported before a slowly converging direct piece can use up the shared
subinterval budget.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Callable

from quadkit.quadrature.errors import IntervalError

__all__ = [
    "Domain",
    "classify_domain",
    "reciprocal_substitution",
    "integrate_upper_tail",
    "integrate_lower_tail",
    "integrate_real_line",
]

FiniteIntegrator = Callable[[Callable[[float], float], float, float], float]


class Domain(enum.Enum):
    """Shape of an integration interval."""

    FINITE = "finite"
    UPPER_TAIL = "upper-tail"
    LOWER_TAIL = "lower-tail"
    REAL_LINE = "real-line"


def classify_domain(lower: float, upper: float) -> Domain:
    """Classifies an ordered interval ``[lower, upper]``.

    Args:
        lower: Lower endpoint, possibly ``-inf``.
        upper: Upper endpoint, possibly ``+inf``; must satisfy
            ``lower <= upper``.

    Returns:
        The matching :class:`Domain`.

    Raises:
        IntervalError: If an endpoint is NaN, if both endpoints are the same
            infinity, or if the endpoints are out of order.
    """
    if math.isnan(lower) or math.isnan(upper):
        raise IntervalError(f"interval endpoints must not be NaN, got [{lower!r}, {upper!r}]")
    if lower > upper:
        raise IntervalError(f"interval endpoints out of order: [{lower!r}, {upper!r}]")

    lower_finite = math.isfinite(lower)
    upper_finite = math.isfinite(upper)
    if lower_finite and upper_finite:
        return Domain.FINITE
    if lower_finite:
        return Domain.UPPER_TAIL
    if upper_finite:
        return Domain.LOWER_TAIL
    if lower == upper:
        raise IntervalError(f"degenerate interval at infinity: [{lower!r}, {upper!r}]")
    return Domain.REAL_LINE


def reciprocal_substitution(function: Callable[[float], float]) -> Callable[[float], float]:
    """Returns ``u -> f(1/u) / u**2``, the integrand after ``x = 1/u``."""

    def substituted(u: float) -> float:
        return function(1.0 / u) / (u * u)

    return substituted


def integrate_upper_tail(
    function: Callable[[float], float],
    a: float,
    integrate_finite: FiniteIntegrator,
) -> float:
    """Computes ``∫_a^∞ f(x) dx`` with the reciprocal substitution.

    Args:
        function: Integrand in the original variable.
        a: Finite lower endpoint.
        integrate_finite: Callable ``(f, lo, hi) -> float`` for finite pieces.

    Returns:
        The sum of the finite pieces.
    """
    substituted = reciprocal_substitution(function)
    if a < 1.0:
        tail = integrate_finite(substituted, 0.0, 1.0)
        return integrate_finite(function, a, 1.0) + tail
    return integrate_finite(substituted, 0.0, 1.0 / a)


def integrate_lower_tail(
    function: Callable[[float], float],
    b: float,
    integrate_finite: FiniteIntegrator,
) -> float:
    """Computes ``∫_{-∞}^b f(x) dx``; mirror image of :func:`integrate_upper_tail`."""
    substituted = reciprocal_substitution(function)
    if b > -1.0:
        tail = integrate_finite(substituted, -1.0, 0.0)
        return integrate_finite(function, -1.0, b) + tail
    return integrate_finite(substituted, 1.0 / b, 0.0)


def integrate_real_line(
    function: Callable[[float], float],
    integrate_finite: FiniteIntegrator,
) -> float:
    """Computes ``∫_{-∞}^{∞} f(x) dx`` as two tails anchored at 0."""
    lower = integrate_lower_tail(function, 0.0, integrate_finite)
    upper = integrate_upper_tail(function, 0.0, integrate_finite)
    return lower + upper
