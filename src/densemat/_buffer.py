"""
Contiguous float64 storage.

Pure ctypes buffer with separate length and capacity, used as the backing
store of ``Mat``. Memory is 64-byte aligned. Appends past the capacity
reallocate by the configured growth factor so that repeated appends stay
amortized O(1).
"""

import ctypes
import logging
from typing import Iterable, List, Optional

from ._config import get_config

__all__ = ['Buffer']

logger = logging.getLogger("densemat.buffer")

_CTYPE = ctypes.c_double
_ITEMSIZE = ctypes.sizeof(_CTYPE)


def _allocate(capacity: int, align: int):
    """Allocate an aligned ctypes array of ``capacity`` doubles.

    Returns (typed_array, owner) where ``owner`` keeps the raw bytes alive.
    """
    if capacity == 0:
        return None, None
    nbytes = capacity * _ITEMSIZE
    raw = (ctypes.c_uint8 * (nbytes + align))()
    addr = ctypes.addressof(raw)
    aligned_addr = (addr + align - 1) & ~(align - 1)
    data = (_CTYPE * capacity).from_address(aligned_addr)
    ctypes.memset(aligned_addr, 0, nbytes)
    return data, raw


class Buffer:
    """
    Growable contiguous array of doubles.

    Attributes:
        size (int): Number of live elements
        capacity (int): Number of allocated elements
        nbytes (int): Bytes used by live elements

    Example:
        >>> buf = Buffer(0, capacity=4)
        >>> buf.extend([1.0, 2.0])
        >>> buf.tolist()
        [1.0, 2.0]
    """

    __slots__ = ("_size", "_capacity", "_align", "_data", "_owner")

    def __init__(self, size: int = 0, capacity: Optional[int] = None, align: int = 64):
        """
        Allocate a zero-filled buffer.

        Args:
            size: Number of live elements
            capacity: Allocated elements (defaults to ``size``)
            align: Memory alignment in bytes
        """
        if capacity is None:
            capacity = size
        if size < 0 or capacity < size:
            raise ValueError(f"Invalid buffer size {size} with capacity {capacity}")

        self._size = size
        self._capacity = capacity
        self._align = align
        self._data, self._owner = _allocate(capacity, align)

    @classmethod
    def from_list(cls, values: List[float], capacity: Optional[int] = None) -> "Buffer":
        """Create a buffer holding a copy of ``values``."""
        n = len(values)
        buf = cls(n, n if capacity is None else capacity)
        if n:
            buf._data[0:n] = values
        return buf

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def nbytes(self) -> int:
        return self._size * _ITEMSIZE

    @property
    def ptr(self) -> int:
        """C pointer address (0 for an unallocated buffer)."""
        if self._data is None:
            return 0
        return ctypes.addressof(self._data)

    def __len__(self) -> int:
        return self._size

    # -------------------------------------------------------------------------
    # Element Access
    # -------------------------------------------------------------------------

    def __getitem__(self, idx: int) -> float:
        if idx < 0 or idx >= self._size:
            raise IndexError(f"Index {idx} out of bounds [0, {self._size})")
        return self._data[idx]

    def __setitem__(self, idx: int, value: float) -> None:
        if idx < 0 or idx >= self._size:
            raise IndexError(f"Index {idx} out of bounds [0, {self._size})")
        self._data[idx] = value

    def read(self, start: int, stop: int) -> List[float]:
        """Copy ``[start, stop)`` out as a list."""
        if self._data is None:
            return []
        return self._data[start:stop]

    def write(self, start: int, values: List[float]) -> None:
        """Overwrite live elements starting at ``start``."""
        stop = start + len(values)
        if start < 0 or stop > self._size:
            raise IndexError(f"Write [{start}, {stop}) out of bounds [0, {self._size})")
        if values:
            self._data[start:stop] = values

    def tolist(self) -> List[float]:
        return self.read(0, self._size)

    def fill(self, value: float) -> None:
        if self._size:
            self._data[0:self._size] = [value] * self._size

    # -------------------------------------------------------------------------
    # Growth
    # -------------------------------------------------------------------------

    def reserve(self, capacity: int) -> None:
        """Reallocate so that at least ``capacity`` elements fit."""
        if capacity <= self._capacity:
            return
        data, owner = _allocate(capacity, self._align)
        if self._size:
            ctypes.memmove(ctypes.addressof(data), ctypes.addressof(self._data), self.nbytes)
        logger.debug("Buffer reallocated: capacity %d -> %d", self._capacity, capacity)
        self._data, self._owner = data, owner
        self._capacity = capacity

    def _grow_for(self, needed: int) -> None:
        if needed <= self._capacity:
            return
        factor = get_config().growth_factor
        new_capacity = max(self._capacity * factor, needed)
        self.reserve(new_capacity)

    def extend(self, values: Iterable[float]) -> None:
        """Append values after the last live element."""
        values = list(values)
        n = len(values)
        if n == 0:
            return
        self._grow_for(self._size + n)
        self._data[self._size:self._size + n] = values
        self._size += n

    def replace(self, values: List[float]) -> None:
        """
        Replace the whole live content with ``values``.

        The length may change; capacity grows if needed but never shrinks.
        """
        n = len(values)
        self._grow_for(n)
        if n:
            self._data[0:n] = values
        self._size = n

    # -------------------------------------------------------------------------
    # Copy / Interop
    # -------------------------------------------------------------------------

    def copy(self, capacity: Optional[int] = None) -> "Buffer":
        """Deep copy; capacity defaults to this buffer's capacity."""
        new = Buffer(self._size, self._capacity if capacity is None else capacity, self._align)
        if self._size:
            ctypes.memmove(ctypes.addressof(new._data), ctypes.addressof(self._data), self.nbytes)
        return new

    def to_numpy(self):
        """Copy live elements into a 1-D float64 numpy array."""
        import numpy as np

        if self._size == 0:
            return np.empty(0, dtype=np.float64)
        return np.ctypeslib.as_array(self._data)[:self._size].copy()

    def __repr__(self) -> str:
        return f"Buffer(size={self._size}, capacity={self._capacity})"
