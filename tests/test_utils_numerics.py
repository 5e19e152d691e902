"""Tests for quadkit.utils.numerics."""

import math

import numpy as np
import pytest

from quadkit.utils.numerics import precision_equals, precision_equals_vectors


@pytest.mark.parametrize(
    "x1, x2, tol, rtol, expected",
    [
        (1.0, 1.0, 0.0, 0.0, True),
        (1.0, 1.25, 0.25, 0.0, True),
        (1.0, 1.5, 0.25, 0.0, False),
        (1.5, 1.0, 0.0, 0.5, True),
        (0.0, 0.0, 1e-12, 0.0, True),
    ],
)
def test_precision_equals_basic(x1, x2, tol, rtol, expected):
    """Tests the absolute plus relative closeness predicate on simple values."""
    assert precision_equals(x1, x2, tol, rtol) is expected


def test_precision_equals_relative_part_scales_second_operand_only():
    """Tests that rtol is applied to |x2| so swapping operands can change the verdict."""
    assert precision_equals(1.0, 2.0, 0.0, 0.6)
    assert not precision_equals(2.0, 1.0, 0.0, 0.6)


@pytest.mark.parametrize("bad", [math.nan])
def test_precision_equals_nan_is_never_equal(bad):
    """Tests that NaN operands compare unequal, as float comparison does."""
    assert not precision_equals(bad, 1.0, 1.0, 1.0)
    assert not precision_equals(1.0, bad, 1.0, 1.0)


def test_precision_equals_vectors_all_within():
    """Tests that vectors close in every component are equal."""
    a = [1.0, 2.0, 3.0]
    b = np.array([1.0 + 1e-13, 2.0, 3.0 - 1e-13])
    assert precision_equals_vectors(a, b, 1e-12, 0.0)


def test_precision_equals_vectors_detects_any_component():
    """Tests that one component outside the tolerance makes the vectors unequal."""
    a = [1.0, 2.0, 3.0]
    b = [1.0, 2.0, 3.1]
    assert not precision_equals_vectors(a, b, 1e-3, 0.0)
    # first component differs, the rest match
    assert not precision_equals_vectors([5.0, 2.0, 3.0], b, 1e-3, 0.0)


def test_precision_equals_vectors_length_mismatch():
    """Tests that vectors of different lengths are never equal."""
    assert not precision_equals_vectors([1.0, 2.0], [1.0, 2.0, 3.0], 1.0, 1.0)


def test_precision_equals_vectors_rejects_non_1d():
    """Tests that 2D inputs raise ValueError."""
    with pytest.raises(ValueError):
        precision_equals_vectors(np.ones((2, 2)), np.ones((2, 2)), 1.0, 0.0)
