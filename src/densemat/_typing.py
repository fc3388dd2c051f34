"""
densemat Type Definitions.

Type aliases and coercion helpers shared by the constructors and the
row/column mutators. Inputs may be Python sequences, numpy arrays, or a
``Mat`` (treated as its flat row-major values).
"""

from __future__ import annotations

import numbers
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence, Union

from ._errors import InvalidArgumentError, ShapeMismatchError

if TYPE_CHECKING:
    import numpy as np
    from ._mat import Mat


# =============================================================================
# Type Aliases
# =============================================================================

Scalar = Union[int, float]
VectorInput = Union[Sequence[float], "np.ndarray", "Mat"]
NestedInput = Union[Sequence[Sequence[float]], "np.ndarray"]
Operand = Union[Scalar, "Mat"]
Predicate = Callable[[float], bool]
MapFunction = Callable[[float], float]


# =============================================================================
# Type Checking
# =============================================================================

def is_numpy_array(obj: Any) -> bool:
    """Check if object is a numpy ndarray."""
    try:
        import numpy as np
        return isinstance(obj, np.ndarray)
    except ImportError:
        return False


def is_scalar(obj: Any) -> bool:
    """True for real numbers (bools excluded)."""
    if isinstance(obj, bool):
        return False
    return isinstance(obj, numbers.Real)


def is_mat(obj: Any) -> bool:
    from ._mat import Mat
    return isinstance(obj, Mat)


# =============================================================================
# Coercion
# =============================================================================

def ensure_scalar(value: Any, context: str) -> float:
    """Convert a real number to float or raise InvalidArgumentError."""
    if not is_scalar(value):
        raise InvalidArgumentError(
            f"{context}: expected a real number, got {type(value).__name__}"
        )
    return float(value)


def ensure_vector(
    vec: VectorInput,
    size: Optional[int] = None,
    context: str = "",
    error: type = ShapeMismatchError,
) -> List[float]:
    """Convert any vector input to a fresh list of floats.

    Args:
        vec: Input vector in any supported format.
        size: Expected length (for validation).
        context: Name of the calling operation, used in messages.
        error: Exception class raised on a length mismatch.

    Returns:
        New list owning the values.

    Raises:
        InvalidArgumentError: If vec is not a sequence of real numbers.
        error: If the length doesn't match ``size``.
    """
    if is_mat(vec):
        result = vec.vals()
    elif is_numpy_array(vec):
        result = [float(x) for x in vec.ravel().tolist()]
    elif isinstance(vec, (str, bytes)) or not hasattr(vec, "__iter__"):
        raise InvalidArgumentError(
            f"{context}: expected a sequence of numbers, got {type(vec).__name__}"
        )
    else:
        result = [ensure_scalar(x, context) for x in vec]

    if size is not None and len(result) != size:
        raise error(f"{context}: vector length {len(result)} != expected {size}")

    return result


def ensure_nested(values: NestedInput, context: str) -> tuple[int, int, List[float]]:
    """Flatten a non-jagged nested sequence in row-major order.

    Returns:
        Tuple of (rows, cols, flat_values).

    Raises:
        ShapeMismatchError: If the rows have differing lengths.
    """
    if is_numpy_array(values):
        if values.ndim != 2:
            raise ShapeMismatchError(f"{context}: expected 2D array, got {values.ndim}D")
        rows, cols = values.shape
        return rows, cols, [float(x) for x in values.ravel().tolist()]

    if isinstance(values, (str, bytes)) or not hasattr(values, "__iter__"):
        raise InvalidArgumentError(
            f"{context}: expected a sequence of sequences, got {type(values).__name__}"
        )

    outer = list(values)
    if not outer:
        return 0, 0, []

    flat: List[float] = []
    cols = None
    for i, row in enumerate(outer):
        row_vals = ensure_vector(row, context=context)
        if cols is None:
            cols = len(row_vals)
        elif len(row_vals) != cols:
            raise ShapeMismatchError(
                f"{context}: row {i} has {len(row_vals)} entries, row 0 has {cols}; "
                f"nested data must not be jagged"
            )
        flat.extend(row_vals)

    return len(outer), cols, flat
