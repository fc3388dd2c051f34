"""
Global configuration for densemat.

Provides:
- Growth factor used for capacity reserves and buffer reallocation
- Text precision for CSV output and string rendering
- The shared, lazily created random generator
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Tuple

import numpy as np

from ._errors import InvalidArgumentError

logger = logging.getLogger("densemat.config")

SEED_ENV_VAR = "DENSEMAT_SEED"


# =============================================================================
# Global Configuration State
# =============================================================================

class _Config:
    """
    Global configuration singleton.

    Manages the growth policy, text precision and the default generator.
    """

    def __init__(self):
        # Default: double on every reallocation
        self._growth_factor = 2
        self._csv_precision = 14
        self._display_precision = 14

        # Lazily created on first use
        self._rng: Optional[np.random.Generator] = None

    @property
    def growth_factor(self) -> int:
        """Capacity multiplier for construction reserves and reallocations."""
        return self._growth_factor

    @growth_factor.setter
    def growth_factor(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InvalidArgumentError(f"growth_factor must be an integer >= 1, got {value!r}")
        self._growth_factor = value

    @property
    def csv_precision(self) -> int:
        """Digits after the decimal point in CSV output (scientific notation)."""
        return self._csv_precision

    @csv_precision.setter
    def csv_precision(self, value: int):
        self._csv_precision = _check_precision(value, "csv_precision")

    @property
    def display_precision(self) -> int:
        """Digits after the decimal point in ``str(mat)``."""
        return self._display_precision

    @display_precision.setter
    def display_precision(self, value: int):
        self._display_precision = _check_precision(value, "display_precision")

    @property
    def rng(self) -> np.random.Generator:
        """
        Shared uniform generator.

        Seeded from the ``DENSEMAT_SEED`` environment variable when it is set,
        from OS entropy otherwise.
        """
        if self._rng is None:
            self._rng = np.random.default_rng(_seed_from_env())
        return self._rng

    def seed(self, value: Optional[int]) -> None:
        """Replace the shared generator with one seeded by ``value``."""
        self._rng = np.random.default_rng(value)
        logger.debug("Default generator reseeded with %r", value)


def _check_precision(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgumentError(f"{name} must be a non-negative integer, got {value!r}")
    return value


def _seed_from_env() -> Optional[int]:
    raw = os.environ.get(SEED_ENV_VAR, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", SEED_ENV_VAR, raw)
        return None


# Global config instance
_config = _Config()


# =============================================================================
# Public API
# =============================================================================

def get_config() -> _Config:
    """Get global configuration instance."""
    return _config


def set_precision(
    csv: Optional[int] = None,
    display: Optional[int] = None,
) -> None:
    """
    Set text precision used by ``to_csv`` and ``str(mat)``.

    Args:
        csv: Digits after the decimal point for CSV values
        display: Digits after the decimal point for string rendering

    Example:
        >>> densemat.set_precision(display=3)
        >>> print(densemat.from_flat([1.0, 2.0]))
        [[1.000,	2.000]]
    """
    if csv is not None:
        _config.csv_precision = csv
    if display is not None:
        _config.display_precision = display


def get_precision() -> Tuple[int, int]:
    """
    Get current text precision.

    Returns:
        Tuple of (csv_precision, display_precision)
    """
    return (_config.csv_precision, _config.display_precision)


def set_growth_factor(factor: int) -> None:
    """Set the capacity multiplier used for reserves and reallocations."""
    _config.growth_factor = factor


def seed(value: Optional[int] = None) -> None:
    """Seed the shared random generator used by ``rand``."""
    _config.seed(value)
