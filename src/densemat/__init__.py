"""
densemat - Dense Row-Major Matrices

Two-dimensional float matrices over a single contiguous buffer with:
- Row-major storage with a growth reserve for cheap row appends
- Element-wise arithmetic and reductions (sum, avg, prd, std)
- Transpose, naive matrix multiplication, reshape, append and concat
- CSV and numpy interop

Architecture:
    ┌──────────────────────────────────────────────┐
    │                     Mat                      │
    │  rows, cols  ->  r * cols + c                │
    ├──────────────────────────────────────────────┤
    │  Buffer: aligned float64, length | capacity  │
    └──────────────────────────────────────────────┘

Example:
    >>> import densemat
    >>> m = densemat.from_nested([[1, 2, 3], [4, 5, 6]])
    >>> m.sum(0, 1)
    15.0
    >>> m.append_row([7, 8, 9]).shape
    (3, 3)
    >>> m.all(densemat.positive)
    True
"""

__version__ = '0.1.0'

from ._buffer import Buffer
from ._config import (
    get_config,
    get_precision,
    seed,
    set_growth_factor,
    set_precision,
)
from ._errors import (
    DivisionByZeroError,
    FormatError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    MatError,
    MatIOError,
    ShapeMismatchError,
)
from ._mat import (
    Mat,
    empty,
    from_csv,
    from_flat,
    from_nested,
    from_numpy,
    rand,
    square,
    with_capacity,
    zeros,
)
from ._predicates import even, negative, odd, positive, square as square_value

__all__ = [
    # Version
    '__version__',

    # Core classes
    'Mat',
    'Buffer',

    # Constructors
    'empty',
    'square',
    'zeros',
    'with_capacity',
    'from_flat',
    'from_nested',
    'from_numpy',
    'from_csv',
    'rand',

    # Predicates / map functions
    'positive',
    'negative',
    'odd',
    'even',
    'square_value',

    # Errors
    'MatError',
    'ShapeMismatchError',
    'IndexOutOfRangeError',
    'InvalidArgumentError',
    'DivisionByZeroError',
    'FormatError',
    'MatIOError',

    # Configuration
    'get_config',
    'set_precision',
    'get_precision',
    'set_growth_factor',
    'seed',
]
