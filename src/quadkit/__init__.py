"""Provides all quadkit integration methods."""

from importlib.metadata import PackageNotFoundError, version

from quadkit.fixed.composite import CompositeSimpson, CompositeTrapezoid
from quadkit.fixed.romberg import Romberg
from quadkit.integration_kit import IntegrationKit, register_method
from quadkit.quadrature.errors import (
    DivergenceError,
    IntervalError,
    InvalidInputError,
    NonFiniteIntegrandError,
    QuadError,
    ToleranceUnmetError,
)
from quadkit.quadrature.quad import Quad, QuadCharacteristics
from quadkit.utils.numerics import precision_equals, precision_equals_vectors

try:
    __version__ = version("quadkit")
except PackageNotFoundError:
    pass

IntegrationKit.__module__ = "quadkit.integration_kit"

__all__ = [
    "IntegrationKit",
    "Quad",
    "QuadCharacteristics",
    "CompositeTrapezoid",
    "CompositeSimpson",
    "Romberg",
    "QuadError",
    "InvalidInputError",
    "IntervalError",
    "DivergenceError",
    "ToleranceUnmetError",
    "NonFiniteIntegrandError",
    "precision_equals",
    "precision_equals_vectors",
    "register_method",
]
