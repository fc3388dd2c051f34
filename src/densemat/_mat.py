"""
Dense Row-Major Matrix

``Mat`` keeps a row count, a column count and one contiguous ``Buffer`` of
doubles. Element ``(r, c)`` lives at linear index ``r * cols + c``.

Storage Layout:

    rows=2, cols=3

    logical            buffer
    [[a, b, c],   ->   [a, b, c, d, e, f | reserve ...]
     [d, e, f]]         ^ length = rows*cols   ^ capacity

Constructors reserve ``growth_factor * rows * cols`` slots (2x by default)
so that later ``append_row`` calls do not reallocate until the reserve is
used up. Matrices loaded from CSV and those built with an explicit capacity
carry no reserve.

Mutation Discipline:
    - Arithmetic (add/sub/mul/div/scale), set_all, map, reshape and the
      append/concat family mutate the receiver and return it for chaining.
    - copy, t, dot, row and col return new, independently owned matrices.
    - Every operation either completes or raises before touching the
      receiver; there is no partially mutated state.

Thread Safety:
    None. A Mat shared between threads must be guarded by the caller.

Example:
    >>> import densemat
    >>> m = densemat.from_nested([[1, 2], [3, 4]])
    >>> m.add(1).scale(2).vals()
    [4.0, 6.0, 8.0, 10.0]
    >>> m.dot(m.t()).shape
    (2, 2)
"""

from __future__ import annotations

import math
import operator
from typing import Callable, Iterator, List, Optional, Tuple

from ._buffer import Buffer
from ._config import get_config
from ._errors import (
    DivisionByZeroError,
    InvalidArgumentError,
    ShapeMismatchError,
    check_dim,
    check_index,
)
from ._io import read_csv, write_csv
from ._random import uniform
from ._typing import (
    MapFunction,
    NestedInput,
    Operand,
    Predicate,
    VectorInput,
    ensure_nested,
    ensure_scalar,
    ensure_vector,
    is_numpy_array,
    is_scalar,
)

__all__ = [
    'Mat',
    'empty',
    'square',
    'zeros',
    'with_capacity',
    'from_flat',
    'from_nested',
    'from_numpy',
    'from_csv',
    'rand',
]


def _reserve(size: int) -> int:
    return size * get_config().growth_factor


def _resolve_dims(n: int, rows: Optional[int], cols: Optional[int], context: str) -> Tuple[int, int]:
    """Validate explicit dims against ``n`` values.

    ``rows`` alone asks for a column vector, ``cols`` alone derives the row
    count, both must multiply to ``n``.
    """
    if cols is None:
        rows = check_dim(rows, "rows", context)
        if rows != n:
            raise ShapeMismatchError(
                f"{context}: rows ({rows}) is not equal to the number of values ({n})"
            )
        return rows, 1
    cols = check_dim(cols, "cols", context)
    if rows is None:
        if cols == 0 or n % cols != 0:
            if cols == 0 and n == 0:
                return 0, 0
            raise ShapeMismatchError(
                f"{context}: {n} values cannot be split into rows of {cols} columns"
            )
        return n // cols, cols
    rows = check_dim(rows, "rows", context)
    if rows * cols != n:
        raise ShapeMismatchError(
            f"{context}: rows*cols ({rows}*{cols}={rows * cols}) does not equal "
            f"the number of values ({n})"
        )
    return rows, cols


class Mat:
    """
    Dense two-dimensional matrix of floats stored row-major.

    Attributes:
        rows (int): Logical row count
        cols (int): Logical column count
        shape (tuple): ``(rows, cols)``
        size (int): ``rows * cols``
        capacity (int): Allocated slots in the backing buffer

    Construction:
        Mat()                         0x0, no storage
        Mat(rows, cols)               zero filled, 2x reserve
        Mat(rows, cols, capacity=n)   zero filled, exact capacity
        Mat.square(n)                 n x n, 2x reserve
        Mat.from_flat / from_nested / from_numpy / from_csv / rand
    """

    __slots__ = ("_rows", "_cols", "_buf")

    def __init__(self, rows: int = 0, cols: int = 0, capacity: Optional[int] = None):
        rows = check_dim(rows, "rows", "Mat()")
        cols = check_dim(cols, "cols", "Mat()")
        size = rows * cols
        if capacity is None:
            capacity = _reserve(size)
        else:
            capacity = check_dim(capacity, "capacity", "Mat()")
            if capacity < size:
                raise InvalidArgumentError(
                    f"Mat(): capacity {capacity} is smaller than rows*cols ({size})"
                )
        self._rows = rows
        self._cols = cols
        self._buf = Buffer(size, capacity)

    @classmethod
    def _wrap(cls, rows: int, cols: int, buf: Buffer) -> "Mat":
        m = cls.__new__(cls)
        m._rows = rows
        m._cols = cols
        m._buf = buf
        return m

    @classmethod
    def _from_values(cls, rows: int, cols: int, values: List[float],
                     capacity: Optional[int] = None) -> "Mat":
        if capacity is None:
            capacity = _reserve(len(values))
        return cls._wrap(rows, cols, Buffer.from_list(values, capacity))

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def empty(cls) -> "Mat":
        """0x0 matrix with no storage."""
        return cls()

    @classmethod
    def square(cls, n: int) -> "Mat":
        """Zero filled ``n x n`` matrix with the default reserve."""
        return cls(n, n)

    @classmethod
    def zeros(cls, rows: int, cols: int) -> "Mat":
        return cls(rows, cols)

    @classmethod
    def with_capacity(cls, rows: int, cols: int, capacity: int) -> "Mat":
        """Zero filled matrix with exactly ``capacity`` allocated slots.

        Use this for matrices that stay static or when memory is tight.
        """
        return cls(rows, cols, capacity=capacity)

    @classmethod
    def from_flat(cls, values: VectorInput, rows: Optional[int] = None,
                  cols: Optional[int] = None) -> "Mat":
        """
        Build a matrix from a flat sequence of values (copied).

        Args:
            values: Row-major values
            rows: Row count. Alone, it must equal ``len(values)`` and the
                result is a column vector.
            cols: Column count. Alone, it must divide ``len(values)``.

        With no dims the result is a ``1 x len(values)`` row vector.

        Raises:
            ShapeMismatchError: If the dims don't fit the number of values
        """
        flat = ensure_vector(values, context="from_flat()")
        if rows is None and cols is None:
            rows, cols = 1, len(flat)
        else:
            rows, cols = _resolve_dims(len(flat), rows, cols, "from_flat()")
        return cls._from_values(rows, cols, flat)

    @classmethod
    def from_nested(cls, values: NestedInput, rows: Optional[int] = None,
                    cols: Optional[int] = None) -> "Mat":
        """
        Build a matrix from a sequence of equally long rows (copied).

        Explicit dims reinterpret the row-major values like ``reshape``;
        they follow the same rules as in ``from_flat``.

        Raises:
            ShapeMismatchError: If the rows are jagged or the dims don't fit
        """
        r, c, flat = ensure_nested(values, "from_nested()")
        if rows is not None or cols is not None:
            r, c = _resolve_dims(len(flat), rows, cols, "from_nested()")
        return cls._from_values(r, c, flat)

    @classmethod
    def from_numpy(cls, array) -> "Mat":
        """Copy a 1-D (row vector) or 2-D numpy array."""
        if not is_numpy_array(array):
            raise InvalidArgumentError(
                f"from_numpy(): expected numpy.ndarray, got {type(array).__name__}"
            )
        if array.ndim == 1:
            return cls.from_flat(array)
        if array.ndim == 2:
            return cls.from_nested(array)
        raise ShapeMismatchError(f"from_numpy(): expected 1D or 2D array, got {array.ndim}D")

    @classmethod
    def from_csv(cls, path) -> "Mat":
        """
        Load a matrix from a CSV file, one row per line.

        The capacity equals the length: CSV data is assumed large and static.

        Raises:
            MatIOError: If the file cannot be read
            FormatError: If the file is jagged or holds non-numeric fields
        """
        rows, cols, values = read_csv(path)
        return cls._from_values(rows, cols, values, capacity=len(values))

    @classmethod
    def rand(cls, rows: int, cols: int, low: Optional[float] = None, high: float = 1.0,
             rng=None) -> "Mat":
        """
        Matrix of uniform random values in ``[low, high)``.

        ``rand(r, c)`` draws from ``[0, 1)``, ``rand(r, c, high=b)`` stores
        ``u * b`` for any real ``b`` (so a negative ``b`` gives ``(b, 0]``)
        and ``rand(r, c, a, b)`` draws from ``[a, b)``.

        Args:
            rows, cols: Dimensions
            low: Inclusive lower bound; when given it must be less than ``high``
            high: Exclusive upper bound, or the scale factor when ``low`` is omitted
            rng: ``numpy.random.Generator`` (defaults to the shared one)

        Raises:
            InvalidArgumentError: If a bound is not a real number, or both
                bounds are given and low >= high
        """
        high = ensure_scalar(high, "rand()")
        if low is None:
            low = 0.0
        else:
            low = ensure_scalar(low, "rand()")
            if not low < high:
                raise InvalidArgumentError(
                    f"rand(): the lower bound {low} is not less than the upper bound {high}"
                )
        m = cls(rows, cols)
        span = high - low
        m._buf.write(0, [u * span + low for u in uniform(m.size, rng)])
        return m

    # =========================================================================
    # Shape
    # =========================================================================

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        """Matrix dimensions (rows, cols)."""
        return (self._rows, self._cols)

    def dims(self) -> Tuple[int, int]:
        """Matrix dimensions (rows, cols)."""
        return (self._rows, self._cols)

    @property
    def size(self) -> int:
        return self._rows * self._cols

    @property
    def capacity(self) -> int:
        """Allocated slots in the backing buffer (>= size)."""
        return self._buf.capacity

    # =========================================================================
    # Element Access
    # =========================================================================

    def _offset(self, row: int, col: int, context: str) -> int:
        row = check_index(row, self._rows, "row", context)
        col = check_index(col, self._cols, "column", context)
        return row * self._cols + col

    def at(self, row: int, col: int) -> float:
        """Element at (row, col)."""
        return self._buf[self._offset(row, col, "at()")]

    get = at

    def set(self, row: int, col: int, value: float) -> "Mat":
        """Write ``value`` at (row, col) and return self."""
        value = ensure_scalar(value, "set()")
        self._buf[self._offset(row, col, "set()")] = value
        return self

    def set_all(self, value: float) -> "Mat":
        self._buf.fill(ensure_scalar(value, "set_all()"))
        return self

    def __getitem__(self, key) -> float:
        """Get element at (row, col)."""
        if not isinstance(key, tuple) or len(key) != 2:
            raise InvalidArgumentError("Index must be (row, col) tuple")
        return self.at(key[0], key[1])

    def __setitem__(self, key, value: float) -> None:
        """Set element at (row, col)."""
        if not isinstance(key, tuple) or len(key) != 2:
            raise InvalidArgumentError("Index must be (row, col) tuple")
        self.set(key[0], key[1], value)

    def vals(self) -> List[float]:
        """Copy of all values in row-major order."""
        return self._buf.tolist()

    def to_list(self) -> List[List[float]]:
        """Copy of the values as a list of rows."""
        c = self._cols
        return [self._buf.read(i * c, (i + 1) * c) for i in range(self._rows)]

    to_slice = to_list

    def to_numpy(self):
        """Copy of the values as a ``(rows, cols)`` float64 ndarray."""
        return self._buf.to_numpy().reshape(self._rows, self._cols)

    def to_csv(self, path, precision: Optional[int] = None) -> None:
        """
        Write the matrix to ``path``, one comma separated row per line.

        Raises:
            MatIOError: If the file cannot be written
        """
        write_csv(path, self._rows, self._cols, self._buf.tolist(), precision)

    def __iter__(self) -> Iterator[List[float]]:
        """Iterate over copies of the rows."""
        return iter(self.to_list())

    def __len__(self) -> int:
        return self._rows

    # =========================================================================
    # Rows and Columns
    # =========================================================================

    def col(self, index: int) -> "Mat":
        """
        Copy of column ``index`` as a ``rows x 1`` matrix.

        Negative indices count from the end, so ``col(-1)`` is the last column.

        Raises:
            IndexOutOfRangeError: If index is outside ``[-cols, cols)``
        """
        j = check_index(index, self._cols, "column", "col()", allow_negative=True)
        return Mat._from_values(self._rows, 1, self._buf.tolist()[j::self._cols])

    def row(self, index: int) -> "Mat":
        """
        Copy of row ``index`` as a ``1 x cols`` matrix.

        Raises:
            IndexOutOfRangeError: If index is outside ``[-rows, rows)``
        """
        i = check_index(index, self._rows, "row", "row()", allow_negative=True)
        c = self._cols
        return Mat._from_values(1, c, self._buf.read(i * c, (i + 1) * c))

    def _line_values(self, value, length: int, context: str) -> List[float]:
        if is_scalar(value):
            return [float(value)] * length
        return ensure_vector(value, length, context, error=InvalidArgumentError)

    def set_col(self, index: int, value) -> "Mat":
        """
        Overwrite column ``index`` with a scalar or ``rows`` values.

        Raises:
            IndexOutOfRangeError: If index is outside ``[-cols, cols)``
            InvalidArgumentError: If value has the wrong type or length
        """
        j = check_index(index, self._cols, "column", "set_col()", allow_negative=True)
        new = self._line_values(value, self._rows, "set_col()")
        data = self._buf.tolist()
        data[j::self._cols] = new
        self._buf.write(0, data)
        return self

    def set_row(self, index: int, value) -> "Mat":
        """
        Overwrite row ``index`` with a scalar or ``cols`` values.

        Raises:
            IndexOutOfRangeError: If index is outside ``[-rows, rows)``
            InvalidArgumentError: If value has the wrong type or length
        """
        i = check_index(index, self._rows, "row", "set_row()", allow_negative=True)
        new = self._line_values(value, self._cols, "set_row()")
        self._buf.write(i * self._cols, new)
        return self

    # =========================================================================
    # Element-wise Arithmetic
    # =========================================================================

    def _check_same_shape(self, other: "Mat", context: str) -> None:
        if other._rows != self._rows:
            raise ShapeMismatchError(
                f"{context}: the receiver has {self._rows} rows but the passed "
                f"mat has {other._rows}; they must match"
            )
        if other._cols != self._cols:
            raise ShapeMismatchError(
                f"{context}: the receiver has {self._cols} columns but the passed "
                f"mat has {other._cols}; they must match"
            )

    def _operand_values(self, other: Operand, context: str) -> List[float]:
        """Right-hand values aligned with this matrix's linear order."""
        if isinstance(other, Mat):
            self._check_same_shape(other, context)
            return other._buf.tolist()
        if is_scalar(other):
            return [float(other)] * self.size
        raise InvalidArgumentError(
            f"{context}: the operand must be a real number or a Mat, "
            f"got {type(other).__name__}"
        )

    def _apply(self, other: Operand, op: Callable[[float, float], float], context: str) -> "Mat":
        rhs = self._operand_values(other, context)
        lhs = self._buf.tolist()
        self._buf.write(0, [op(a, b) for a, b in zip(lhs, rhs)])
        return self

    def add(self, other: Operand) -> "Mat":
        """Add a scalar or a same-shaped Mat in place."""
        return self._apply(other, operator.add, "add()")

    def sub(self, other: Operand) -> "Mat":
        """Subtract a scalar or a same-shaped Mat in place."""
        return self._apply(other, operator.sub, "sub()")

    def mul(self, other: Operand) -> "Mat":
        """Multiply element-wise by a scalar or a same-shaped Mat in place."""
        return self._apply(other, operator.mul, "mul()")

    def div(self, other: Operand) -> "Mat":
        """
        Divide element-wise by a scalar or a same-shaped Mat in place.

        Every divisor is checked before any value is written.

        Raises:
            DivisionByZeroError: If any divisor is exactly zero
        """
        rhs = self._operand_values(other, "div()")
        if not isinstance(other, Mat):
            if other == 0:
                raise DivisionByZeroError("div(): the scalar divisor is zero")
        else:
            for k, b in enumerate(rhs):
                if b == 0.0:
                    c = self._cols
                    raise DivisionByZeroError(
                        f"div(): zero divisor at ({k // c}, {k % c})"
                    )
        lhs = self._buf.tolist()
        self._buf.write(0, [a / b for a, b in zip(lhs, rhs)])
        return self

    def scale(self, factor: float) -> "Mat":
        """Multiply every element by ``factor`` in place."""
        return self._apply(ensure_scalar(factor, "scale()"), operator.mul, "scale()")

    def tanh(self) -> "Mat":
        return self.map(math.tanh)

    def __iadd__(self, other: Operand) -> "Mat":
        return self.add(other)

    def __isub__(self, other: Operand) -> "Mat":
        return self.sub(other)

    def __imul__(self, other: Operand) -> "Mat":
        return self.mul(other)

    def __itruediv__(self, other: Operand) -> "Mat":
        return self.div(other)

    # =========================================================================
    # Reductions
    # =========================================================================

    def _select(self, axis: Optional[int], index: Optional[int], context: str) -> List[float]:
        """Values of the whole matrix, of row ``index`` (axis 0) or column ``index`` (axis 1)."""
        if axis is None and index is None:
            return self._buf.tolist()
        if axis is None or index is None:
            raise InvalidArgumentError(f"{context}: axis and index must be given together")
        if isinstance(axis, bool) or axis not in (0, 1):
            raise InvalidArgumentError(f"{context}: axis must be 0 or 1, got {axis!r}")
        if axis == 0:
            i = check_index(index, self._rows, "row", context)
            return self._buf.read(i * self._cols, (i + 1) * self._cols)
        j = check_index(index, self._cols, "column", context)
        return self._buf.tolist()[j::self._cols]

    def sum(self, axis: Optional[int] = None, index: Optional[int] = None) -> float:
        """
        Sum of the whole matrix, or of one row / column.

        Args:
            axis: 0 reduces row ``index``, 1 reduces column ``index``
            index: Row or column to reduce

        Raises:
            InvalidArgumentError: If axis is not 0 or 1, or only one argument is given
            IndexOutOfRangeError: If index is out of range
        """
        total = 0.0
        for v in self._select(axis, index, "sum()"):
            total += v
        return total

    def avg(self, axis: Optional[int] = None, index: Optional[int] = None) -> float:
        """Mean of the selection (``nan`` when it is empty)."""
        values = self._select(axis, index, "avg()")
        if not values:
            return math.nan
        total = 0.0
        for v in values:
            total += v
        return total / len(values)

    average = avg

    def prd(self, axis: Optional[int] = None, index: Optional[int] = None) -> float:
        """Product of the selection (1.0 when it is empty)."""
        product = 1.0
        for v in self._select(axis, index, "prd()"):
            product *= v
        return product

    prod = prd

    def std(self, axis: Optional[int] = None, index: Optional[int] = None) -> float:
        """
        Population standard deviation of the selection.

        Two passes: the mean first, then the mean squared deviation.
        Returns ``nan`` for an empty selection.
        """
        values = self._select(axis, index, "std()")
        n = len(values)
        if n == 0:
            return math.nan
        mean = 0.0
        for v in values:
            mean += v
        mean /= n
        acc = 0.0
        for v in values:
            acc += (mean - v) * (mean - v)
        return math.sqrt(acc / n)

    # =========================================================================
    # Transforms
    # =========================================================================

    def t(self) -> "Mat":
        """Transpose as a new ``cols x rows`` matrix."""
        data = self._buf.tolist()
        out: List[float] = []
        for j in range(self._cols):
            out.extend(data[j::self._cols])
        return Mat._from_values(self._cols, self._rows, out)

    @property
    def T(self) -> "Mat":
        return self.t()

    def copy(self) -> "Mat":
        """Deep copy with the same dims and the default reserve."""
        return Mat._wrap(self._rows, self._cols, self._buf.copy(_reserve(self.size)))

    def __copy__(self) -> "Mat":
        return self.copy()

    def __deepcopy__(self, memo) -> "Mat":
        return self.copy()

    def reshape(self, rows: int, cols: int) -> "Mat":
        """
        Reinterpret the values under new dims, in place.

        The linear order of the values never changes.

        Raises:
            ShapeMismatchError: If rows*cols differs from the current size
        """
        rows = check_dim(rows, "rows", "reshape()")
        cols = check_dim(cols, "cols", "reshape()")
        if rows * cols != self.size:
            raise ShapeMismatchError(
                f"reshape(): cannot reshape {self._rows}x{self._cols} into {rows}x{cols}; "
                f"the total number of entries must match"
            )
        self._rows = rows
        self._cols = cols
        return self

    def equals(self, other: "Mat") -> bool:
        """Exact element-wise equality with matching dims (no tolerance)."""
        if not isinstance(other, Mat):
            return False
        if self._rows != other._rows or self._cols != other._cols:
            return False
        for a, b in zip(self._buf.tolist(), other._buf.tolist()):
            if a != b:
                return False
        return True

    def __eq__(self, other) -> bool:
        if not isinstance(other, Mat):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    # =========================================================================
    # Growth
    # =========================================================================

    def append_row(self, values: VectorInput) -> "Mat":
        """
        Append a row at the bottom.

        A 0x0 matrix takes its column count from the first row, so an empty
        row turns it into a 1x0 matrix. The buffer grows by the configured
        factor when the reserve runs out.

        Raises:
            ShapeMismatchError: If len(values) != cols
        """
        new = ensure_vector(values, context="append_row()")
        if self._rows == 0 and self._cols == 0:
            self._buf.extend(new)
            self._cols = len(new)
        else:
            if len(new) != self._cols:
                raise ShapeMismatchError(
                    f"append_row(): the receiver has {self._cols} columns but the "
                    f"row has {len(new)} values; they must be equal"
                )
            self._buf.extend(new)
        self._rows += 1
        return self

    def append_col(self, values: VectorInput) -> "Mat":
        """
        Append a column on the right.

        A 0x0 matrix takes its row count from the first column, so an empty
        column turns it into a 0x1 matrix (the transpose of appending an
        empty row). Every row is re-strided, so this costs O(rows * cols).

        Raises:
            ShapeMismatchError: If len(values) != rows
        """
        new = ensure_vector(values, context="append_col()")
        if self._rows == 0 and self._cols == 0:
            self._buf.replace(new)
            self._rows = len(new)
            self._cols = 1
            return self
        if len(new) != self._rows:
            raise ShapeMismatchError(
                f"append_col(): the receiver has {self._rows} rows but the "
                f"column has {len(new)} values; they must be equal"
            )
        c = self._cols
        data = self._buf.tolist()
        out: List[float] = []
        for i in range(self._rows):
            out.extend(data[i * c:(i + 1) * c])
            out.append(new[i])
        self._buf.replace(out)
        self._cols = c + 1
        return self

    def concat(self, other: "Mat") -> "Mat":
        """
        Append the columns of ``other`` to the right of each row.

        Example:
            [[1, 2], [3, 4]].concat([[5, 6], [7, 8]]) -> [[1, 2, 5, 6], [3, 4, 7, 8]]

        Raises:
            ShapeMismatchError: If other.rows != rows
        """
        if not isinstance(other, Mat):
            raise InvalidArgumentError(f"concat(): expected a Mat, got {type(other).__name__}")
        if other._rows != self._rows:
            raise ShapeMismatchError(
                f"concat(): the receiver has {self._rows} rows but the second mat "
                f"has {other._rows}; they must be equal"
            )
        c, oc = self._cols, other._cols
        data = self._buf.tolist()
        theirs = other._buf.tolist()
        out: List[float] = []
        for i in range(self._rows):
            out.extend(data[i * c:(i + 1) * c])
            out.extend(theirs[i * oc:(i + 1) * oc])
        self._buf.replace(out)
        self._cols = c + oc
        return self

    # =========================================================================
    # Matrix Multiplication
    # =========================================================================

    def dot(self, other: "Mat") -> "Mat":
        """
        Matrix product as a new ``rows x other.cols`` matrix.

        Mathematical Definition:
            out[i, j] = sum(self[i, k] * other[k, j] for k in range(cols))

        Accumulates in i, j, k order with plain float addition.

        Raises:
            ShapeMismatchError: If cols != other.rows
        """
        if not isinstance(other, Mat):
            raise InvalidArgumentError(f"dot(): expected a Mat, got {type(other).__name__}")
        if self._cols != other._rows:
            raise ShapeMismatchError(
                f"dot(): the first mat has {self._cols} columns but the second mat "
                f"has {other._rows} rows; they must be equal"
            )
        a = self._buf.tolist()
        b = other._buf.tolist()
        inner = self._cols
        n = other._cols
        out: List[float] = []
        for i in range(self._rows):
            base = i * inner
            for j in range(n):
                acc = 0.0
                for k in range(inner):
                    acc += a[base + k] * b[k * n + j]
                out.append(acc)
        return Mat._from_values(self._rows, n, out)

    def __matmul__(self, other: "Mat") -> "Mat":
        return self.dot(other)

    # =========================================================================
    # Scans
    # =========================================================================

    def all(self, predicate: Predicate) -> bool:
        """True if ``predicate`` holds for every element (stops at the first failure)."""
        for v in self._buf.tolist():
            if not predicate(v):
                return False
        return True

    def any(self, predicate: Predicate) -> bool:
        """True if ``predicate`` holds for at least one element."""
        for v in self._buf.tolist():
            if predicate(v):
                return True
        return False

    def map(self, func: MapFunction) -> "Mat":
        """
        Replace every element with ``func(element)``, in row-major order.

        If ``func`` raises, the matrix is left unchanged.
        """
        out = [ensure_scalar(func(v), "map()") for v in self._buf.tolist()]
        self._buf.write(0, out)
        return self

    foreach = map

    # =========================================================================
    # Magic Methods
    # =========================================================================

    def __str__(self) -> str:
        if self._rows == 0 or self._cols == 0:
            return "[]"
        p = get_config().display_precision
        lines = [
            "[" + ",\t".join(f"{v:.{p}f}" for v in row) + "]"
            for row in self.to_list()
        ]
        return "[" + "\n ".join(lines) + "]"

    def __repr__(self) -> str:
        values = self._buf.tolist()
        if len(values) <= 6:
            data_str = str(values)
        else:
            data_str = str(values[:3] + ['...'] + values[-3:])
        return f"Mat(rows={self._rows}, cols={self._cols}, data={data_str})"


# =============================================================================
# Factory Functions
# =============================================================================

def empty() -> Mat:
    """Create a 0x0 matrix."""
    return Mat.empty()


def square(n: int) -> Mat:
    """Create a zero filled n x n matrix."""
    return Mat.square(n)


def zeros(rows: int, cols: int) -> Mat:
    """Create a zero filled matrix with the default reserve."""
    return Mat.zeros(rows, cols)


def with_capacity(rows: int, cols: int, capacity: int) -> Mat:
    """Create a zero filled matrix with an exact capacity."""
    return Mat.with_capacity(rows, cols, capacity)


def from_flat(values: VectorInput, rows: Optional[int] = None, cols: Optional[int] = None) -> Mat:
    """Create a matrix from flat row-major values."""
    return Mat.from_flat(values, rows, cols)


def from_nested(values: NestedInput, rows: Optional[int] = None, cols: Optional[int] = None) -> Mat:
    """Create a matrix from a sequence of rows."""
    return Mat.from_nested(values, rows, cols)


def from_numpy(array) -> Mat:
    """Create a matrix from a 1-D or 2-D numpy array."""
    return Mat.from_numpy(array)


def from_csv(path) -> Mat:
    """Load a matrix from a CSV file."""
    return Mat.from_csv(path)


def rand(rows: int, cols: int, low: Optional[float] = None, high: float = 1.0, rng=None) -> Mat:
    """Create a matrix of uniform random values in [low, high)."""
    return Mat.rand(rows, cols, low, high, rng)
