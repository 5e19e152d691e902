"""Romberg integration.

Trapezoid sums on ``1, 2, 4, ..., 2**(levels - 1)`` panels are built
incrementally, each level evaluating only the new midpoints. Row ``k`` of the
Romberg tableau eliminates the ``h**2, h**4, ...`` error terms of the ``k``-th
trapezoid sum:

    R[k][j] = (4**j * R[k][j-1] - R[k-1][j-1]) / (4**j - 1)

The estimate of a run is the last diagonal entry ``R[n-1][n-1]``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import numpy as np

from quadkit.utils.validate import validate_finite_interval, validate_positive_int

__all__ = [
    "Romberg",
    "romberg_diagonal",
    "trapezoid_ladder",
]


def trapezoid_ladder(
    function: Callable[[float], float],
    a: float,
    b: float,
    levels: int,
) -> list[float]:
    """Returns trapezoid sums with ``2**k`` panels for ``k = 0 .. levels-1``."""
    width = b - a
    sums = [0.5 * width * (function(a) + function(b))]
    for k in range(1, levels):
        panels = 2**k
        h = width / panels
        midpoints = a + h * np.arange(1, panels, 2)
        fresh = sum(function(x) for x in midpoints.tolist())
        sums.append(0.5 * sums[-1] + h * fresh)
    return sums


def romberg_diagonal(trapezoid_sums: Sequence[float]) -> list[float]:
    """Returns the diagonal ``R[k][k]`` of the Romberg tableau.

    Args:
        trapezoid_sums: Trapezoid sums on successively halved panels,
            coarsest first.

    Returns:
        One entry per trapezoid sum. Entry ``k`` uses the first ``k + 1``
        sums, so ``diagonal[-2]`` is the estimate without the finest level.
    """
    diagonal: list[float] = []
    row: list[float] = []
    for t in trapezoid_sums:
        current = [float(t)]
        factor = 1.0
        for j, prev in enumerate(row, start=1):
            factor *= 4.0
            current.append((factor * current[j - 1] - prev) / (factor - 1.0))
        diagonal.append(current[-1])
        row = current
    return diagonal


class Romberg:
    """Romberg integration on a finite interval.

    Attributes:
        function: The integrand. Must accept a single float and return a float.
        a: Lower endpoint.
        b: Upper endpoint.

    Example:
        >>> from quadkit.fixed.romberg import Romberg
        >>> round(Romberg(lambda x: x**4, 0.0, 1.0).integrate(levels=3), 12)
        0.2
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
        levels: int = 8,
        return_error: bool = False,
    ) -> float | tuple[float, float]:
        """Computes the Romberg estimate.

        Args:
            levels: Number of trapezoid levels (at least 2). The finest
                level uses ``2**(levels - 1)`` panels. Default is 8.
            return_error: If True, also return the difference between the
                last two diagonal entries of the tableau.

        Returns:
            The estimate, or ``(estimate, error)`` if ``return_error``.

        Raises:
            ValueError: If ``levels`` is not an integer of at least 2.
        """
        levels = validate_positive_int(levels, "levels")
        if levels < 2:
            raise ValueError(f"Romberg integration requires levels >= 2, got {levels!r}")

        diagonal = romberg_diagonal(trapezoid_ladder(self.function, self.a, self.b, levels))
        if not return_error:
            return diagonal[-1]
        return diagonal[-1], abs(diagonal[-1] - diagonal[-2])
