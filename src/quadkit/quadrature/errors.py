"""Exceptions raised by the adaptive quadrature engine.

Every failure mode is a distinct subclass of :class:`QuadError`, so callers
can catch the whole family or single cases. The two failures that still
produce a usable partial answer (an unmet tolerance and a non-finite
integrand) carry the partial :class:`QuadCharacteristics` on the
``characteristics`` attribute.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quadkit.quadrature.quad import QuadCharacteristics

__all__ = [
    "QuadError",
    "InvalidInputError",
    "IntervalError",
    "DivergenceError",
    "ToleranceUnmetError",
    "NonFiniteIntegrandError",
]


class QuadError(Exception):
    """Base class of all quadrature errors."""


class InvalidInputError(QuadError, ValueError):
    """A configuration value (tolerance, limit, threshold) was rejected."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"The algorithm could not start due to {reason}")


class IntervalError(QuadError, ValueError):
    """The integration bounds do not describe a valid interval."""

    def __init__(self, detail: str = "The interval is not valid"):
        super().__init__(detail)


class DivergenceError(QuadError, ArithmeticError):
    """The estimate was judged to diverge; no partial value is reported."""

    def __init__(self, detail: str = "The integral is judged to diverge"):
        super().__init__(detail)


class ToleranceUnmetError(QuadError):
    """Refinement stopped before the tolerance was met.

    Raised when the subinterval budget runs out or when a subinterval cannot
    be split any further in floating point.

    Attributes:
        characteristics: Best partial result. After an exhausted budget
            ``subinterval_count`` equals the configured limit.
    """

    def __init__(self, characteristics: QuadCharacteristics):
        self.characteristics = characteristics
        super().__init__(
            "The algorithm has terminated without meeting the tolerance requirements. "
            "The integral may diverge or be irregular on some points.\n"
            f"{characteristics}"
        )


class NonFiniteIntegrandError(QuadError, ArithmeticError):
    """The integrand produced NaN or infinite values inside the interval.

    Attributes:
        characteristics: The result at the point the failure was detected.
    """

    def __init__(self, characteristics: QuadCharacteristics):
        self.characteristics = characteristics
        super().__init__(
            "The integrand produced non-finite values; the result is not usable.\n"
            f"{characteristics}"
        )
