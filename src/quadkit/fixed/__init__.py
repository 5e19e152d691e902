"""Fixed-node integration rules on finite intervals."""

from .composite import CompositeSimpson, CompositeTrapezoid
from .romberg import Romberg

__all__ = [
    "CompositeTrapezoid",
    "CompositeSimpson",
    "Romberg",
]
