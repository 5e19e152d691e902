"""Provides the Quad class.

``Quad`` integrates a scalar function over a finite, semi-infinite or
bi-infinite interval with adaptive 5-point Gauss–Legendre quadrature.
Configure it with the fluent ``with_*`` setters, then call :meth:`Quad.run`
exactly once.

Examples:
--------
A finite interval:

>>> import math
>>> from quadkit.quadrature.quad import Quad
>>> res = Quad(lambda x: x**2, 0.0, 3.0).run()
>>> round(res.integral, 12)
9.0

An improper integral with a looser tolerance:

>>> res = Quad(lambda x: math.exp(-x), 0.0, math.inf).with_tolerance(1e-9).run()
>>> abs(res.integral - 1.0) < 1e-9
True

Failures are exceptions; the budget-exhausted case keeps the partial answer:

>>> from quadkit.quadrature.errors import ToleranceUnmetError
>>> try:
...     Quad(math.sqrt, 0.0, 1.0).with_subinterval_limit(3).run()
... except ToleranceUnmetError as exc:
...     exc.characteristics.subinterval_count
3
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from quadkit.logger import quadkit_logger
from quadkit.quadrature.adaptive import (
    QuadState,
    QuadStatus,
    adaptive_gauss_legendre,
)
from quadkit.quadrature.errors import (
    DivergenceError,
    NonFiniteIntegrandError,
    ToleranceUnmetError,
)
from quadkit.quadrature.transforms import (
    Domain,
    classify_domain,
    integrate_lower_tail,
    integrate_real_line,
    integrate_upper_tail,
)
from quadkit.utils.validate import (
    validate_positive_int,
    validate_threshold,
    validate_tolerance,
)

__all__ = [
    "DEFAULT_TOLERANCE",
    "DEFAULT_RELATIVE_TOLERANCE",
    "DEFAULT_SUBINTERVAL_LIMIT",
    "DEFAULT_DIVERGENCE_THRESHOLD",
    "QuadCharacteristics",
    "Quad",
]

DEFAULT_TOLERANCE = 1e-11
DEFAULT_RELATIVE_TOLERANCE = 1e-12
DEFAULT_SUBINTERVAL_LIMIT = 10000
DEFAULT_DIVERGENCE_THRESHOLD = 1.0

COMPLETED_MESSAGE = "Completed Integration"
LIMIT_MESSAGE = "Unacceptable tolerance due to reaching the subinterval limit"
RESOLUTION_MESSAGE = "Unacceptable tolerance due to reaching the floating-point resolution of the interval"
NON_FINITE_MESSAGE = "Integration stopped on non-finite integrand values"


@dataclass
class QuadCharacteristics:
    """Outcome of an adaptive integration.

    Attributes:
        message: Human-readable status.
        subinterval_count: Number of refinement calls consumed.
        error_estimate: Sum of the coarse/refined gaps of accepted
            subintervals.
        integral: The integral estimate; ``NaN`` until computed.
    """

    message: str = ""
    subinterval_count: int = 0
    error_estimate: float = 0.0
    integral: float = math.nan

    def __str__(self) -> str:
        return (
            f"{self.message}\nWith {self.subinterval_count} subintervals, "
            f"the result is {self.integral} with error {self.error_estimate:.5e}"
        )


class Quad:
    """Adaptive Gauss–Legendre quadrature of a scalar function.

    The integrand and the interval are fixed at construction; tolerances
    and limits are set with the fluent ``with_*`` methods, each of which
    validates its argument immediately and returns ``self``. A configured
    instance is consumed by :meth:`run`, so stale state can never leak into
    a second integration.

    Attributes:
        function: The integrand ``f(x) -> float``.
        a: Lower endpoint, may be ``-inf``.
        b: Upper endpoint, may be ``+inf``.
        tolerance: Absolute tolerance for each finite pass.
        relative_tolerance: Relative part of the per-subinterval acceptance
            test.
        subinterval_limit: Maximum number of refinement calls per run.
        divergence_threshold: Coarse/refined gap above which a
            non-shrinking refinement is reported as divergence.
    """

    def __init__(self, function: Callable[[float], float], a: float, b: float):
        """Initialises the integration with integrand and endpoints.

        Args:
            function: The function to integrate. Must accept a single float
                and return a float.
            a: Lower endpoint of the interval (may be ``-math.inf``).
            b: Upper endpoint of the interval (may be ``math.inf``).
        """
        self.function = function
        self.a = float(a)
        self.b = float(b)
        self.tolerance = DEFAULT_TOLERANCE
        self.relative_tolerance = DEFAULT_RELATIVE_TOLERANCE
        self.subinterval_limit = DEFAULT_SUBINTERVAL_LIMIT
        self.divergence_threshold = DEFAULT_DIVERGENCE_THRESHOLD
        self._consumed = False

    def with_tolerance(self, tol: float) -> Quad:
        """Sets the absolute tolerance.

        Raises:
            InvalidInputError: If ``tol`` is below ``4 * eps`` or not finite.
        """
        self.tolerance = validate_tolerance(tol, "tolerance")
        return self

    def with_relative_tolerance(self, rtol: float) -> Quad:
        """Sets the relative tolerance.

        Raises:
            InvalidInputError: If ``rtol`` is below ``4 * eps`` or not finite.
        """
        self.relative_tolerance = validate_tolerance(rtol, "relative tolerance")
        return self

    def with_subinterval_limit(self, limit: int) -> Quad:
        """Sets the maximum number of refinement calls.

        Raises:
            InvalidInputError: If ``limit`` is not a positive integer.
        """
        self.subinterval_limit = validate_positive_int(limit, "subinterval limit")
        return self

    def with_divergence_threshold(self, threshold: float) -> Quad:
        """Sets the gap above which a non-shrinking refinement is divergent.

        Raises:
            InvalidInputError: If ``threshold`` is not positive and finite.
        """
        self.divergence_threshold = validate_threshold(threshold, "divergence threshold")
        return self

    def run(self) -> QuadCharacteristics:
        """Runs the integration and returns its characteristics.

        Returns:
            A :class:`QuadCharacteristics` with message
            ``"Completed Integration"``.

        Raises:
            RuntimeError: If this instance has already been run.
            IntervalError: If the endpoints do not form a valid interval.
            DivergenceError: If the estimate was judged to diverge.
            ToleranceUnmetError: If the subinterval limit or the
                floating-point resolution of the interval was reached before
                the tolerance was met.
            NonFiniteIntegrandError: If the integrand produced NaN or
                infinite values.
        """
        if self._consumed:
            raise RuntimeError("Quad.run() was already called; build a new Quad to integrate again.")
        self._consumed = True

        lower, upper, sign = self.a, self.b, 1.0
        if not math.isnan(lower) and not math.isnan(upper) and lower > upper:
            lower, upper, sign = upper, lower, -1.0
        domain = classify_domain(lower, upper)

        state = QuadState()
        integrate_finite = partial(self._integrate_finite, state=state)
        quadkit_logger.debug("integrating over [%g, %g] as %s", self.a, self.b, domain.value)

        if domain is Domain.FINITE:
            solution = integrate_finite(self.function, lower, upper)
        elif domain is Domain.UPPER_TAIL:
            solution = integrate_upper_tail(self.function, lower, integrate_finite)
        elif domain is Domain.LOWER_TAIL:
            solution = integrate_lower_tail(self.function, upper, integrate_finite)
        else:
            solution = integrate_real_line(self.function, integrate_finite)

        return self._assemble(sign * solution, state)

    def integrate(
        self,
        *,
        tolerance: float | None = None,
        relative_tolerance: float | None = None,
        subinterval_limit: int | None = None,
        divergence_threshold: float | None = None,
    ) -> float:
        """Applies the given settings, runs, and returns only the integral.

        Settings left as ``None`` keep their current value. Raises the same
        exceptions as :meth:`run`.
        """
        if tolerance is not None:
            self.with_tolerance(tolerance)
        if relative_tolerance is not None:
            self.with_relative_tolerance(relative_tolerance)
        if subinterval_limit is not None:
            self.with_subinterval_limit(subinterval_limit)
        if divergence_threshold is not None:
            self.with_divergence_threshold(divergence_threshold)
        return self.run().integral

    def _integrate_finite(
        self,
        function: Callable[[float], float],
        lo: float,
        hi: float,
        *,
        state: QuadState,
    ) -> float:
        return adaptive_gauss_legendre(
            function,
            lo,
            hi,
            tolerance=self.tolerance,
            relative_tolerance=self.relative_tolerance,
            subinterval_limit=self.subinterval_limit,
            divergence_threshold=self.divergence_threshold,
            state=state,
        )

    def _assemble(self, solution: float, state: QuadState) -> QuadCharacteristics:
        """Translates the final state into a result or an exception."""
        characteristics = QuadCharacteristics(
            subinterval_count=state.calls,
            error_estimate=state.error_estimate,
            integral=solution,
        )

        if state.status is QuadStatus.DIVERGENT:
            quadkit_logger.warning(
                "divergence detected over [%g, %g] after %d subintervals",
                self.a,
                self.b,
                state.calls,
            )
            raise DivergenceError()

        if state.status is QuadStatus.SUBINTERVAL_LIMIT:
            characteristics.message = LIMIT_MESSAGE
            quadkit_logger.warning(
                "subinterval limit %d reached over [%g, %g]; partial result %r",
                self.subinterval_limit,
                self.a,
                self.b,
                solution,
            )
            raise ToleranceUnmetError(characteristics)

        if state.status is QuadStatus.RESOLUTION_LIMIT:
            characteristics.message = RESOLUTION_MESSAGE
            quadkit_logger.warning(
                "floating-point resolution reached over [%g, %g] without meeting tolerance %g; "
                "partial result %r",
                self.a,
                self.b,
                self.tolerance,
                solution,
            )
            raise ToleranceUnmetError(characteristics)

        if state.status is QuadStatus.NON_FINITE or not math.isfinite(solution):
            characteristics.message = NON_FINITE_MESSAGE
            quadkit_logger.warning(
                "non-finite integrand values over [%g, %g]", self.a, self.b
            )
            raise NonFiniteIntegrandError(characteristics)

        characteristics.message = COMPLETED_MESSAGE
        return characteristics
