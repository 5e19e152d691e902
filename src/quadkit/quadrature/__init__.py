"""Adaptive Gauss–Legendre quadrature over finite and infinite intervals."""
