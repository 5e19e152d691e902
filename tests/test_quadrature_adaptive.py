"""Tests for the finite-interval adaptive integrator."""

import math

import pytest
from numpy.testing import assert_allclose

from quadkit.quadrature.adaptive import (
    MIN_DIVERGENCE_DEPTH,
    QuadState,
    QuadStatus,
    adaptive_gauss_legendre,
)


def run(function, a, b, state=None, **overrides):
    """Runs one finite pass with default settings and returns (value, state)."""
    settings = dict(
        tolerance=1e-11,
        relative_tolerance=1e-12,
        subinterval_limit=10000,
        divergence_threshold=1.0,
    )
    settings.update(overrides)
    state = QuadState() if state is None else state
    value = adaptive_gauss_legendre(function, a, b, state=state, **settings)
    return value, state


def test_state_defaults():
    """Tests the documented initial accumulator."""
    state = QuadState()
    assert state.calls == 0
    assert state.error_estimate == 0.0
    assert state.status is QuadStatus.OK
    assert not state.stopped


def test_polynomial_converges_on_first_call():
    """Tests that a degree-9 polynomial is accepted without subdivision."""
    value, state = run(lambda x: x**9 - 2.0 * x**3 + 1.0, -1.0, 1.0)
    assert_allclose(value, 2.0, rtol=0, atol=1e-12)
    assert state.calls == 1
    assert state.status is QuadStatus.OK


def test_smooth_function_refines_and_meets_tolerance():
    """Tests a non-polynomial integrand that needs several subdivisions."""
    value, state = run(lambda x: math.exp(x) * math.cos(3.0 * x), 0.0, 4.0)
    # antiderivative e^x (cos 3x + 3 sin 3x) / 10
    expected = (math.exp(4.0) * (math.cos(12.0) + 3.0 * math.sin(12.0)) - 1.0) / 10.0
    assert_allclose(value, expected, rtol=0, atol=1e-10)
    assert state.calls > 1
    assert state.status is QuadStatus.OK
    assert 0.0 <= state.error_estimate <= 1e-10


def test_degenerate_interval():
    """Tests that a zero-length interval gives zero after a single call."""
    value, state = run(math.sin, 3.0, 3.0)
    assert value == 0.0
    assert state.calls == 1
    assert state.status is QuadStatus.OK


def test_subinterval_limit_sets_status_and_caps_calls():
    """Tests that the call counter stops exactly at the limit."""
    value, state = run(math.sqrt, 0.0, 1.0, subinterval_limit=4)
    assert state.status is QuadStatus.SUBINTERVAL_LIMIT
    assert state.calls == 4
    assert abs(value - 2.0 / 3.0) < 1e-2


def test_growing_gap_is_flagged_divergent():
    """Tests that a non-integrable singularity trips the divergence heuristic."""
    _, state = run(lambda x: 1.0 / (x * x), 0.0, 1.0)
    assert state.status is QuadStatus.DIVERGENT
    # the left-first descent towards 0 is flagged at the minimum depth
    assert state.calls == MIN_DIVERGENCE_DEPTH + 1


@pytest.mark.parametrize(
    "function, a, b, tol, expected",
    [
        (math.sin, 0.0, 100.0, 1e-11, 1.0 - math.cos(100.0)),
        (lambda x: 1000.0 * math.sin(50.0 * x), 0.0, 10.0, 1e-8, 20.0 * (1.0 - math.cos(500.0))),
        (math.cos, 0.0, 200.0, 1e-8, math.sin(200.0)),
    ],
)
def test_under_resolved_oscillation_is_not_divergent(function, a, b, tol, expected):
    """Tests that many periods per subinterval do not look like a singularity."""
    value, state = run(function, a, b, tolerance=tol)
    assert state.status is QuadStatus.OK
    assert_allclose(value, expected, rtol=0, atol=tol)


def test_steep_exponential_is_not_divergent():
    """Tests that fast growth of a bounded integrand is not reported as divergence."""
    value, state = run(math.exp, 0.0, 100.0, tolerance=1e-6)
    assert state.status is QuadStatus.OK
    assert_allclose(value, math.expm1(100.0), rtol=1e-11)


def test_integrable_endpoint_singularity_accepted_at_resolution():
    """Tests that 1/sqrt(3 - x) on [0, 3] converges once splitting bottoms out."""
    value, state = run(lambda x: 1.0 / math.sqrt(3.0 - x), 0.0, 3.0, tolerance=1e-5)
    assert state.status is QuadStatus.OK
    assert_allclose(value, 2.0 * math.sqrt(3.0), rtol=0, atol=1e-5)


def test_resolution_limit_flags_unmet_tolerance():
    """Tests that a singular endpoint stops at the float resolution if the tolerance is too tight."""
    value, state = run(lambda x: 1.0 / math.sqrt(x), 0.0, 1.0)
    assert state.status is QuadStatus.RESOLUTION_LIMIT
    assert state.calls < 100
    assert_allclose(value, 2.0, rtol=0, atol=1e-6)


def test_divergence_threshold_is_configurable():
    """Tests that a huge threshold disables the divergence verdict."""
    _, state = run(lambda x: 1.0 / (x * x), 0.0, 1.0, divergence_threshold=1e300, subinterval_limit=30)
    assert state.status is QuadStatus.SUBINTERVAL_LIMIT


def test_non_finite_integrand_is_flagged():
    """Tests that NaN integrand values stop the pass with NON_FINITE."""
    value, state = run(lambda x: math.nan, 0.0, 1.0)
    assert state.status is QuadStatus.NON_FINITE
    assert state.calls == 1
    assert math.isnan(value)


def test_flag_from_previous_pass_short_circuits():
    """Tests that a pass sharing a flagged state does no counted work."""
    state = QuadState(calls=7, status=QuadStatus.DIVERGENT)
    value, state = run(lambda x: x * x, 0.0, 3.0, state=state)
    assert state.calls == 7
    assert_allclose(value, 9.0, rtol=1e-14)


def test_counter_is_shared_across_passes():
    """Tests that calls accumulate over several passes on one state."""
    state = QuadState()
    run(lambda x: x, 0.0, 1.0, state=state)
    run(lambda x: x, 1.0, 2.0, state=state)
    assert state.calls == 2


def test_left_half_is_refined_first():
    """Tests depth-first, left-first traversal order."""
    firsts = []

    def f(x):
        firsts.append(x)
        return math.sqrt(abs(x))

    run(f, 0.0, 1.0, subinterval_limit=3)
    # after the root estimate and the root split, the next split is inside [0, 0.5]
    third_call = firsts[15:25]
    assert max(third_call) < 0.5


@pytest.mark.parametrize("a, b", [(0.0, 1.0), (-2.0, 5.0), (10.0, 10.5)])
def test_reversed_interval_negates(a, b):
    """Tests that swapping the endpoints negates the result."""
    forward, _ = run(math.exp, a, b)
    backward, _ = run(math.exp, b, a)
    assert_allclose(backward, -forward, rtol=1e-12)
