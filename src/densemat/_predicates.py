"""
Element predicates and map functions for ``Mat.all``, ``Mat.any`` and ``Mat.map``.

Parity is defined by floating-point remainder, not integer parity:
``odd(2.5)`` is True because ``fmod(2.5, 2.0) == 0.5``.
"""

import math

__all__ = ['positive', 'negative', 'odd', 'even', 'square']


def positive(value: float) -> bool:
    return value > 0.0


def negative(value: float) -> bool:
    return value < 0.0


def _remainder(value: float) -> float:
    # fmod raises on infinities; a NaN remainder is neither zero nor equal.
    if not math.isfinite(value):
        return math.nan
    return math.fmod(value, 2.0)


def odd(value: float) -> bool:
    return _remainder(value) != 0.0


def even(value: float) -> bool:
    return _remainder(value) == 0.0


def square(value: float) -> float:
    """Map function returning ``value * value``."""
    return value * value
