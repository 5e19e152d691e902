"""Utility functions for quadkit package."""

from .numerics import (
    precision_equals,
    precision_equals_vectors,
)

__all__ = [
    "precision_equals",
    "precision_equals_vectors",
]
