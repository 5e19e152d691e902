"""Adaptive 5-point Gauss–Legendre integration on a finite interval.

Each visited subinterval is split at its midpoint and the rule is applied to
both halves. The sum of the halves (the refined estimate) is compared with
the rule applied to the whole subinterval (the coarse estimate handed down by
the parent). Subintervals whose estimates agree within their share of the
tolerance are accepted; the others are split again with half the tolerance,
which keeps the accumulated error within the original budget.

The traversal is depth-first with the left half first, driven by an explicit
stack so deep refinement near a singularity is bounded only by the
subinterval limit and not by the interpreter's recursion limit.

Three conditions stop a pass early and are reported through
:class:`QuadState`:

* the subinterval limit, counted across every finite pass of one
  top-level integration;
* divergence. Near a non-integrable singularity the coarse/refined gap does
  not shrink from one level to the next while the mean absolute value of the
  integrand keeps growing. A chain of subintervals is reported as divergent
  once its gap is above ``divergence_threshold``, it lies at least
  :data:`MIN_DIVERGENCE_DEPTH` levels below the pass interval, and both
  trends have held for :data:`DIVERGENCE_LEVELS` consecutive levels. A bounded
  integrand cannot sustain the growth in magnitude, so under-resolved
  oscillations are not mistaken for divergence. This is still a heuristic,
  not a proof;
* the floating-point resolution of the interval. A subinterval narrower than
  :data:`RESOLUTION_ULPS` ulps of the pass scale is not split further. Its
  refined estimate is accepted when the gap is within the pass tolerance
  (the usual outcome at an integrable endpoint singularity) and the pass
  stops otherwise.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from quadkit.logger import quadkit_logger
from quadkit.quadrature.rules import gauss_legendre_5, gauss_legendre_5_with_abs
from quadkit.utils.numerics import precision_equals

__all__ = [
    "DENSITY_GROWTH",
    "DIVERGENCE_LEVELS",
    "MIN_DIVERGENCE_DEPTH",
    "RESOLUTION_ULPS",
    "QuadStatus",
    "QuadState",
    "adaptive_gauss_legendre",
]

#: Minimum per-level growth of the mean absolute integrand that counts
#: towards divergence. ``x**-p`` grows by ``2**p`` per level.
DENSITY_GROWTH = 1.5
#: Consecutive growing levels needed before a chain is reported divergent.
DIVERGENCE_LEVELS = 2
#: Subintervals at a shallower depth are never reported divergent. A finite
#: float integrand can only mimic singular growth on coarser scales.
MIN_DIVERGENCE_DEPTH = 8
#: Width, in machine epsilons of the pass scale, below which no split is made.
RESOLUTION_ULPS = 1024


class QuadStatus(enum.Enum):
    """Process-level status of one integration."""

    OK = "ok"
    SUBINTERVAL_LIMIT = "subinterval-limit-exceeded"
    RESOLUTION_LIMIT = "resolution-limit-reached"
    DIVERGENT = "divergent"
    NON_FINITE = "non-finite"


@dataclass
class QuadState:
    """Accumulator shared by all finite passes of one integration.

    Attributes:
        calls: Number of counted refinement calls so far. Never reset
            while the integration runs.
        error_estimate: Sum of the coarse/refined gaps of every accepted
            subinterval.
        status: First irrecoverable condition met, or ``QuadStatus.OK``.
    """

    calls: int = 0
    error_estimate: float = 0.0
    status: QuadStatus = QuadStatus.OK

    @property
    def stopped(self) -> bool:
        """True once any pass has flagged a stop condition."""
        return self.status is not QuadStatus.OK


class _Segment(NamedTuple):
    lo: float
    hi: float
    approx: float
    tolerance: float
    depth: int
    parent_gap: float
    parent_density: float
    streak: int


def adaptive_gauss_legendre(
    function: Callable[[float], float],
    a: float,
    b: float,
    *,
    tolerance: float,
    relative_tolerance: float,
    subinterval_limit: int,
    divergence_threshold: float,
    state: QuadState,
) -> float:
    """Integrates ``function`` over the finite interval ``[a, b]``.

    Args:
        function: Scalar integrand.
        a: Start of the interval (finite).
        b: End of the interval (finite). ``b < a`` gives the negated integral.
        tolerance: Absolute tolerance for the whole interval. Each split
            hands half of a subinterval's tolerance to each half.
        relative_tolerance: Relative part of the acceptance test, scaled by
            the magnitude of the refined estimate.
        subinterval_limit: Maximum value of ``state.calls``.
        divergence_threshold: Gap a growing chain must exceed to be flagged
            as divergent.
        state: Accumulator updated in place.

    Returns:
        The integral estimate. If ``state`` ends up flagged, this is the
        best partial estimate available when the flag was raised.
    """
    lo = float(a)
    hi = float(b)
    calls_before = state.calls
    min_width = RESOLUTION_ULPS * float(np.finfo(float).eps) * max(abs(lo), abs(hi))

    pending = [
        _Segment(lo, hi, gauss_legendre_5(function, lo, hi), tolerance, 0, math.inf, math.inf, 0)
    ]
    accepted: list[float] = []

    while pending:
        seg = pending.pop()
        width = abs(seg.hi - seg.lo)
        mid = (seg.lo + seg.hi) / 2.0
        left, left_abs = gauss_legendre_5_with_abs(function, seg.lo, mid)
        right, right_abs = gauss_legendre_5_with_abs(function, mid, seg.hi)
        refined = left + right

        # Once something upstream has flagged, finish the remaining
        # subintervals with their current estimate and stop refining.
        if state.stopped:
            accepted.append(refined)
            continue

        state.calls += 1
        gap = abs(seg.approx - refined)
        density = (left_abs + right_abs) / width if width > 0.0 else 0.0
        growing = gap >= seg.parent_gap and density >= DENSITY_GROWTH * seg.parent_density
        streak = seg.streak + 1 if growing else 0

        if state.calls >= subinterval_limit:
            state.status = QuadStatus.SUBINTERVAL_LIMIT
            accepted.append(refined)
        elif not math.isfinite(gap):
            state.status = QuadStatus.NON_FINITE
            accepted.append(refined)
        elif precision_equals(seg.approx, refined, seg.tolerance, relative_tolerance):
            state.error_estimate += gap
            accepted.append(refined)
        elif (
            gap > divergence_threshold
            and streak >= DIVERGENCE_LEVELS
            and seg.depth >= MIN_DIVERGENCE_DEPTH
        ):
            state.status = QuadStatus.DIVERGENT
            accepted.append(refined)
        elif width <= min_width:
            if gap <= tolerance:
                state.error_estimate += gap
            else:
                state.status = QuadStatus.RESOLUTION_LIMIT
            accepted.append(refined)
        else:
            half = seg.tolerance / 2.0
            depth = seg.depth + 1
            pending.append(_Segment(mid, seg.hi, right, half, depth, gap, density, streak))
            pending.append(_Segment(seg.lo, mid, left, half, depth, gap, density, streak))

    with np.errstate(invalid="ignore", over="ignore"):
        total = float(np.sum(accepted))

    quadkit_logger.debug(
        "adaptive pass over [%g, %g]: %d subintervals, status=%s",
        lo,
        hi,
        state.calls - calls_before,
        state.status.value,
    )
    return total
