"""Provides the CompositeTrapezoid and CompositeSimpson classes.

Both rules sample the integrand on an equally spaced grid of ``nodes``
panels over a finite interval. They are non-adaptive: the caller chooses the
resolution.

Examples:
--------
>>> import math
>>> from quadkit.fixed.composite import CompositeSimpson, CompositeTrapezoid
>>> CompositeSimpson(lambda x: x**3, -1.0, 2.0).integrate(nodes=2)
3.75
>>> val, err = CompositeTrapezoid(math.sin, 0.0, math.pi).integrate(
...     nodes=1000, return_error=True
... )
>>> abs(val - 2.0) < 1e-5
True
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

from quadkit.utils.validate import validate_finite_interval, validate_positive_int

__all__ = [
    "CompositeTrapezoid",
    "CompositeSimpson",
    "trapezoid_sum",
    "simpson_sum",
]


def _sample(
    function: Callable[[float], float],
    a: float,
    b: float,
    nodes: int,
) -> NDArray[np.float64]:
    """Evaluates ``function`` on ``nodes + 1`` equally spaced points of ``[a, b]``."""
    grid = np.linspace(a, b, nodes + 1)
    return np.array([function(x) for x in grid.tolist()], dtype=float)


def trapezoid_sum(function: Callable[[float], float], a: float, b: float, nodes: int) -> float:
    """Returns the composite trapezoid estimate on ``nodes`` panels."""
    values = _sample(function, a, b, nodes)
    h = (b - a) / nodes
    return float(h * (np.sum(values) - 0.5 * (values[0] + values[-1])))


def simpson_sum(function: Callable[[float], float], a: float, b: float, nodes: int) -> float:
    """Returns the composite Simpson estimate on an even number of panels."""
    values = _sample(function, a, b, nodes)
    h = (b - a) / nodes
    odd = np.sum(values[1:-1:2])
    even = np.sum(values[2:-1:2])
    return float(h / 3.0 * (values[0] + values[-1] + 4.0 * odd + 2.0 * even))


class CompositeTrapezoid:
    """Composite trapezoid rule on a finite interval.

    Attributes:
        function: The integrand. Must accept a single float and return a float.
        a: Lower endpoint.
        b: Upper endpoint.
    """

    def __init__(self, function: Callable[[float], float], a: float, b: float):
        """Initialises the rule with integrand and endpoints.

        Raises:
            IntervalError: If either endpoint is not finite.
        """
        self.function = function
        self.a, self.b = validate_finite_interval(a, b)

    def integrate(
        self,
        *,
        nodes: int = 10000,
        return_error: bool = False,
    ) -> float | tuple[float, float]:
        """Computes the integral with ``nodes`` equal panels.

        Args:
            nodes: Number of panels. Default is 10000.
            return_error: If True, also return ``|T(n) - T(2n)|`` as a crude
                error estimate.

        Returns:
            The estimate, or ``(estimate, error)`` if ``return_error``.

        Raises:
            ValueError: If ``nodes`` is not a positive integer.
        """
        nodes = validate_positive_int(nodes, "nodes")

        value = trapezoid_sum(self.function, self.a, self.b, nodes)
        if not return_error:
            return value

        refined = trapezoid_sum(self.function, self.a, self.b, 2 * nodes)
        return value, abs(value - refined)


class CompositeSimpson:
    """Composite Simpson rule on a finite interval.

    Exact for cubic polynomials. The number of panels must be even.

    Attributes:
        function: The integrand. Must accept a single float and return a float.
        a: Lower endpoint.
        b: Upper endpoint.
    """

    def __init__(self, function: Callable[[float], float], a: float, b: float):
        """Initialises the rule with integrand and endpoints.

        Raises:
            IntervalError: If either endpoint is not finite.
        """
        self.function = function
        self.a, self.b = validate_finite_interval(a, b)

    def integrate(
        self,
        *,
        nodes: int = 1000,
        return_error: bool = False,
    ) -> float | tuple[float, float]:
        """Computes the integral with ``nodes`` equal panels.

        Args:
            nodes: Even number of panels. Default is 1000.
            return_error: If True, also return ``|S(n) - S(2n)|`` as a crude
                error estimate.

        Returns:
            The estimate, or ``(estimate, error)`` if ``return_error``.

        Raises:
            ValueError: If ``nodes`` is not a positive even integer.
        """
        nodes = validate_positive_int(nodes, "nodes")
        if nodes % 2:
            raise ValueError(f"nodes must be a positive even integer, got {nodes!r}")

        value = simpson_sum(self.function, self.a, self.b, nodes)
        if not return_error:
            return value

        refined = simpson_sum(self.function, self.a, self.b, 2 * nodes)
        return value, abs(value - refined)
