"""Numerical utilities."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

__all__ = [
    "precision_equals",
    "precision_equals_vectors",
]


def precision_equals(x1: float, x2: float, tol: float, rtol: float) -> bool:
    """Checks whether two floats agree within an absolute plus relative tolerance.

    The test is ``|x1 - x2| <= tol + rtol * |x2|``. It is
    asymmetric: the relative part scales with the magnitude of the second
    operand only, so ``x2`` should be the reference value. The adaptive
    integrator passes the refined estimate as ``x2``.

    Args:
        x1: Value under test.
        x2: Reference value.
        tol: Absolute tolerance.
        rtol: Relative tolerance, applied to ``|x2|``.

    Returns:
        True if the values agree within tolerance. Any ``NaN`` operand gives
        False, following ordinary float comparison.
    """
    return abs(x1 - x2) <= tol + rtol * abs(x2)


def precision_equals_vectors(
    x1: ArrayLike,
    x2: ArrayLike,
    tol: float,
    rtol: float,
) -> bool:
    """Component-wise version of :func:`precision_equals` for 1D sequences.

    Args:
        x1: Values under test.
        x2: Reference values.
        tol: Absolute tolerance.
        rtol: Relative tolerance, applied to ``|x2|`` component-wise.

    Returns:
        False if the sequences differ in length, otherwise True iff every
        component pair satisfies the scalar predicate.

    Raises:
        ValueError: If either input is not 1D.
    """
    a = np.asarray(x1, dtype=float)
    b = np.asarray(x2, dtype=float)
    if a.ndim != 1 or b.ndim != 1:
        raise ValueError(
            f"precision_equals_vectors expects 1D inputs, got shapes {a.shape} and {b.shape}"
        )
    if a.shape != b.shape:
        return False
    return bool(np.all(np.abs(a - b) <= tol + rtol * np.abs(b)))
