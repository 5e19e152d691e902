"""Provides the IntegrationKit front end.

``IntegrationKit`` holds an integrand and an interval and dispatches
``integrate`` to one of the registered engines by name. Names are matched
ignoring case, spaces and punctuation, so ``"Gauss-Legendre"`` and ``"gl"``
both reach the adaptive engine.

Examples:
    >>> import math
    >>> from quadkit.integration_kit import IntegrationKit
    >>> ik = IntegrationKit(function=math.exp, a=0.0, b=1.0)
    >>> abs(ik.integrate() - (math.e - 1.0)) < 1e-11
    True
    >>> abs(ik.integrate(method="romb", levels=6) - (math.e - 1.0)) < 1e-11
    True

    Any class built as ``cls(function, a, b)`` with an ``integrate`` method
    can be registered:

    >>> from quadkit.integration_kit import available_methods, register_method
    >>> class Midpoint:
    ...     def __init__(self, function, a, b):
    ...         self.function, self.a, self.b = function, a, b
    ...     def integrate(self):
    ...         return (self.b - self.a) * self.function(0.5 * (self.a + self.b))
    >>> register_method("midpoint", Midpoint, aliases=("mid",))  # doctest: +SKIP
    >>> IntegrationKit(lambda x: 2.0 * x, 0.0, 3.0).integrate(method="mid")  # doctest: +SKIP
    9.0
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, Callable, Iterable, Protocol

from quadkit.fixed.composite import CompositeSimpson, CompositeTrapezoid
from quadkit.fixed.romberg import Romberg
from quadkit.quadrature.quad import Quad

__all__ = [
    "IntegrationEngine",
    "IntegrationKit",
    "available_methods",
    "register_method",
]


class IntegrationEngine(Protocol):
    """Engine built from ``(function, a, b)`` that integrates on request."""

    def __init__(self, function: Callable[[float], float], a: float, b: float): ...

    def integrate(self, **kwargs: Any) -> Any: ...


# canonical name -> (engine class, aliases)
_ENGINES: dict[str, tuple[type[IntegrationEngine], tuple[str, ...]]] = {
    "adaptive": (Quad, ("quad", "gauss-legendre", "gl")),
    "trapezoid": (CompositeTrapezoid, ("trapz", "trap")),
    "simpson": (CompositeSimpson, ("simp",)),
    "romberg": (Romberg, ("romb",)),
}


def _canonical(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", name.lower())


@lru_cache(maxsize=1)
def _lookup() -> dict[str, type[IntegrationEngine]]:
    """Maps every canonical name and alias, normalized, to its engine class."""
    table: dict[str, type[IntegrationEngine]] = {}
    for name, (cls, aliases) in _ENGINES.items():
        for spelling in (name, *aliases):
            table[_canonical(spelling)] = cls
    return table


def register_method(
    name: str,
    cls: type[IntegrationEngine],
    *,
    aliases: Iterable[str] = (),
) -> None:
    """Makes ``cls`` reachable from :meth:`IntegrationKit.integrate`.

    Args:
        name: Canonical name reported by :func:`available_methods`.
        cls: Engine class satisfying :class:`IntegrationEngine`.
        aliases: Other accepted spellings.
    """
    _ENGINES[name] = (cls, tuple(aliases))
    _lookup.cache_clear()


def available_methods() -> list[str]:
    """Returns the sorted canonical method names."""
    return sorted(_canonical(name) for name in _ENGINES)


class IntegrationKit:
    """Integrates one function over one interval with a chosen engine.

    Attributes:
        function: The integrand.
        a: Lower endpoint. May be infinite for the adaptive engine.
        b: Upper endpoint. May be infinite for the adaptive engine.
        default_method: Engine used when ``integrate`` gets no method.
    """

    def __init__(self, function: Callable[[float], float], a: float, b: float):
        self.function = function
        self.a = a
        self.b = b
        self.default_method = "adaptive"

    def integrate(self, *, method: str | None = None, **kwargs: Any) -> Any:
        """Integrates with the named engine.

        A new engine is built per call, so the kit stays reusable although
        :class:`~quadkit.quadrature.quad.Quad` is single-use.

        Args:
            method: Engine name or alias. Defaults to ``default_method``.
            **kwargs: Forwarded to the engine's ``integrate``.

        Returns:
            Whatever the engine returns.

        Raises:
            ValueError: If ``method`` names no registered engine.
        """
        chosen = method or self.default_method
        try:
            engine = _lookup()[_canonical(chosen)]
        except KeyError:
            choices = ", ".join(available_methods())
            raise ValueError(
                f"Unknown integration method '{chosen}'. Choose one of {{{choices}}}."
            ) from None
        return engine(self.function, self.a, self.b).integrate(**kwargs)
