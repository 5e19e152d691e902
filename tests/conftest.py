"""Pytest configuration file with shared integrands and registry isolation."""

import math

import pytest

import quadkit.integration_kit as ik

__all__ = ["restore_method_registry"]


@pytest.fixture
def restore_method_registry(monkeypatch):
    """Give the test a private copy of the method registry and rebuild the cache after."""
    monkeypatch.setattr(ik, "_ENGINES", dict(ik._ENGINES))
    ik._lookup.cache_clear()
    yield
    ik._lookup.cache_clear()


@pytest.fixture(scope="session")
def damped_sine():
    """Integrand e^{-x} sin(x), whose integral over [0, inf) is 1/2."""
    return lambda x: math.exp(-x) * math.sin(x)
