"""
Uniform random source.

Draws floats in ``[0, 1)`` from a ``numpy.random.Generator``. ``Mat`` scales
and shifts these to the requested interval.
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from ._config import get_config

__all__ = ['uniform']


def uniform(n: int, rng: Optional[np.random.Generator] = None) -> List[float]:
    """
    Draw ``n`` floats in ``[0, 1)``.

    Args:
        n: Number of values
        rng: Generator to draw from (defaults to the shared one in the config)
    """
    if rng is None:
        rng = get_config().rng
    if n == 0:
        return []
    return rng.random(n).tolist()
