"""
Error handling for densemat.

Every failure surfaces as a ``MatError`` subclass carrying an integer code.
Codes are grouped by range the same way for every kind of failure, and each
concrete class also derives from the closest builtin exception so callers
can write ordinary ``except ValueError`` / ``except IndexError`` clauses.
"""

from __future__ import annotations

from typing import Optional, Type


# =============================================================================
# Error Codes
# =============================================================================

MAT_OK = 0

# Argument errors (10-19)
MAT_ERROR_INVALID_ARGUMENT = 10
MAT_ERROR_SHAPE_MISMATCH = 11
MAT_ERROR_INDEX_OUT_OF_RANGE = 14

# Format errors (20-29)
MAT_ERROR_FORMAT_ERROR = 22

# I/O errors (30-39)
MAT_ERROR_IO_ERROR = 30

# Numerical errors (50-59)
MAT_ERROR_DIVISION_BY_ZERO = 51


_ERROR_MESSAGES = {
    MAT_OK: "Success",
    MAT_ERROR_INVALID_ARGUMENT: "Invalid argument",
    MAT_ERROR_SHAPE_MISMATCH: "Shape mismatch",
    MAT_ERROR_INDEX_OUT_OF_RANGE: "Index out of range",
    MAT_ERROR_FORMAT_ERROR: "Format error",
    MAT_ERROR_IO_ERROR: "I/O error",
    MAT_ERROR_DIVISION_BY_ZERO: "Division by zero",
}


# =============================================================================
# Exception Classes
# =============================================================================

class MatError(Exception):
    """
    Base exception for all densemat errors.

    Attributes:
        code: Integer error code (one of the ``MAT_ERROR_*`` constants)
        message: Human readable detail
    """

    code = MAT_ERROR_INVALID_ARGUMENT

    OK = MAT_OK
    ERROR_INVALID_ARGUMENT = MAT_ERROR_INVALID_ARGUMENT
    ERROR_SHAPE_MISMATCH = MAT_ERROR_SHAPE_MISMATCH
    ERROR_INDEX_OUT_OF_RANGE = MAT_ERROR_INDEX_OUT_OF_RANGE
    ERROR_FORMAT_ERROR = MAT_ERROR_FORMAT_ERROR
    ERROR_IO_ERROR = MAT_ERROR_IO_ERROR
    ERROR_DIVISION_BY_ZERO = MAT_ERROR_DIVISION_BY_ZERO

    def __init__(self, message: Optional[str] = None):
        if message is None:
            message = _ERROR_MESSAGES.get(self.code, f"Unknown error (code={self.code})")
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"Mat Error {self.code}: {self.message}"

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "MatError":
        """Create the exception matching ``code`` with optional context."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        return _CODE_TO_CLASS.get(code, MatError)(msg)


class InvalidArgumentError(MatError, ValueError, TypeError):
    """Wrong argument value, type or combination."""
    code = MAT_ERROR_INVALID_ARGUMENT


class ShapeMismatchError(MatError, ValueError):
    """Operand dimensions are incompatible."""
    code = MAT_ERROR_SHAPE_MISMATCH


class IndexOutOfRangeError(MatError, IndexError):
    """Row, column or element index outside the valid bounds."""
    code = MAT_ERROR_INDEX_OUT_OF_RANGE


class FormatError(MatError, ValueError):
    """Malformed or jagged text input."""
    code = MAT_ERROR_FORMAT_ERROR


class MatIOError(MatError, OSError):
    """Underlying file open/read/write failure."""
    code = MAT_ERROR_IO_ERROR


class DivisionByZeroError(MatError, ZeroDivisionError):
    """Element-wise division hit a zero divisor."""
    code = MAT_ERROR_DIVISION_BY_ZERO


_CODE_TO_CLASS: dict[int, Type[MatError]] = {
    MAT_ERROR_INVALID_ARGUMENT: InvalidArgumentError,
    MAT_ERROR_SHAPE_MISMATCH: ShapeMismatchError,
    MAT_ERROR_INDEX_OUT_OF_RANGE: IndexOutOfRangeError,
    MAT_ERROR_FORMAT_ERROR: FormatError,
    MAT_ERROR_IO_ERROR: MatIOError,
    MAT_ERROR_DIVISION_BY_ZERO: DivisionByZeroError,
}


# =============================================================================
# Checking Helpers
# =============================================================================

def check_index(index: int, bound: int, what: str, context: str, allow_negative: bool = False) -> int:
    """
    Validate an index against ``bound`` and return it normalized.

    Args:
        index: Index to check
        bound: Exclusive upper bound (row or column count)
        what: Name of the indexed dimension, used in the message
        context: Name of the calling operation
        allow_negative: Accept ``[-bound, 0)`` counting from the end

    Raises:
        InvalidArgumentError: If index is not an integer
        IndexOutOfRangeError: If index is outside the bounds
    """
    if isinstance(index, bool):
        raise InvalidArgumentError(f"{context}: {what} index must be an integer, got bool")
    if not isinstance(index, int):
        try:
            index = index.__index__()
        except AttributeError:
            raise InvalidArgumentError(
                f"{context}: {what} index must be an integer, got {type(index).__name__}"
            ) from None
    low = -bound if allow_negative else 0
    if index < low or index >= bound:
        raise IndexOutOfRangeError(
            f"{context}: {what} {index} is outside of bounds [{low}, {bound})"
        )
    if index < 0:
        index += bound
    return index


def check_dim(value: int, name: str, context: str) -> int:
    """Validate a non-negative integer dimension."""
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{context}: {name} must be an integer, got bool")
    if not isinstance(value, int):
        try:
            value = value.__index__()
        except AttributeError:
            raise InvalidArgumentError(
                f"{context}: {name} must be an integer, got {type(value).__name__}"
            ) from None
    if value < 0:
        raise InvalidArgumentError(f"{context}: {name} must be non-negative, got {value}")
    return value
