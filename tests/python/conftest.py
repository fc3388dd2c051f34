"""
Pytest configuration and shared fixtures for densemat tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

import densemat
from densemat import Mat, from_flat
from densemat._config import get_config


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def restore_config():
    """Put global configuration back after every test."""
    config = get_config()
    saved = (config.growth_factor, config.csv_precision, config.display_precision)
    yield config
    config.growth_factor, config.csv_precision, config.display_precision = saved


@pytest.fixture
def small_mat():
    """Create a small 3x4 test matrix.

    Matrix:
    [[ 0,  1,  2,  3],
     [ 4,  5,  6,  7],
     [ 8,  9, 10, 11]]
    """
    return from_flat([float(i) for i in range(12)], 3, 4)


@pytest.fixture
def fib_mat():
    """4x4 matrix filled with 1, 1, 2, 3, 5, ... in row-major order."""
    values = [1.0, 1.0]
    while len(values) < 16:
        values.append(values[-1] + values[-2])
    m = Mat(4, 4)
    for i in range(4):
        for j in range(4):
            m.set(i, j, values[i * 4 + j])
    return m


@pytest.fixture
def ones_12x17():
    """12x17 matrix of ones."""
    return Mat(12, 17).set_all(1.0)


@pytest.fixture
def random_mat():
    """Reproducible 5x7 random matrix."""
    return densemat.rand(5, 7, -3.0, 3.0, rng=np.random.default_rng(42))


# =============================================================================
# Helper Functions
# =============================================================================

def assert_values_equal(mat, expected, rtol=1e-12, atol=0.0):
    """Assert a Mat's flat values approximately equal ``expected``."""
    np.testing.assert_allclose(mat.vals(), expected, rtol=rtol, atol=atol)


def reference_dot(a, b):
    """Naive i, j, k matrix product over nested lists."""
    n, inner, m = len(a), len(b), len(b[0])
    out = [[0.0] * m for _ in range(n)]
    for i in range(n):
        for j in range(m):
            for k in range(inner):
                out[i][j] += a[i][k] * b[k][j]
    return out
