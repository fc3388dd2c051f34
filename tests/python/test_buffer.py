"""
Tests for the Buffer storage class.
"""

import logging

import pytest
import numpy as np
from densemat import Buffer


class TestBufferCreation:
    """Test Buffer allocation."""

    def test_buffer_zero_filled(self):
        """Test that new buffers are zero filled."""
        buf = Buffer(5, capacity=10)
        assert buf.size == 5
        assert buf.capacity == 10
        assert buf.tolist() == [0.0] * 5

    def test_buffer_default_capacity(self):
        """Test capacity defaults to size."""
        buf = Buffer(3)
        assert buf.capacity == 3
        assert buf.nbytes == 24

    def test_buffer_empty(self):
        """Test zero-sized buffer."""
        buf = Buffer()
        assert buf.size == 0
        assert buf.capacity == 0
        assert buf.ptr == 0
        assert buf.tolist() == []

    def test_buffer_alignment(self):
        """Test 64-byte alignment."""
        buf = Buffer(7)
        assert buf.ptr % 64 == 0

    def test_buffer_invalid_capacity(self):
        """Test capacity smaller than size."""
        with pytest.raises(ValueError):
            Buffer(10, capacity=5)

    def test_buffer_from_list(self):
        """Test from_list copies values."""
        data = [1.0, 2.0, 3.0]
        buf = Buffer.from_list(data, capacity=6)
        data[0] = 99.0
        assert buf.tolist() == [1.0, 2.0, 3.0]
        assert buf.capacity == 6


class TestBufferAccess:
    """Test element access."""

    def test_getitem_setitem(self):
        buf = Buffer(4)
        buf[2] = 3.5
        assert buf[2] == 3.5

    def test_index_bounds(self):
        """Test reads past the live length fail even inside the capacity."""
        buf = Buffer(2, capacity=8)
        with pytest.raises(IndexError):
            buf[2]
        with pytest.raises(IndexError):
            buf[-1] = 1.0

    def test_read_write(self):
        buf = Buffer.from_list([0.0, 1.0, 2.0, 3.0])
        buf.write(1, [10.0, 20.0])
        assert buf.read(0, 4) == [0.0, 10.0, 20.0, 3.0]

    def test_write_out_of_bounds(self):
        buf = Buffer(2)
        with pytest.raises(IndexError):
            buf.write(1, [1.0, 2.0])

    def test_fill(self):
        buf = Buffer(3)
        buf.fill(7.0)
        assert buf.tolist() == [7.0, 7.0, 7.0]


class TestBufferGrowth:
    """Test amortized growth."""

    def test_extend_within_capacity(self):
        """Test no reallocation while the reserve lasts."""
        buf = Buffer(2, capacity=8)
        ptr = buf.ptr
        buf.extend([1.0, 2.0, 3.0])
        assert buf.size == 5
        assert buf.capacity == 8
        assert buf.ptr == ptr

    def test_extend_doubles_capacity(self):
        """Test capacity doubles on overflow."""
        buf = Buffer.from_list([1.0, 2.0, 3.0, 4.0])
        buf.extend([5.0])
        assert buf.capacity == 8
        assert buf.tolist() == [1.0, 2.0, 3.0, 4.0, 5.0]

    def test_extend_larger_than_double(self):
        """Test a large append grows to exactly what is needed."""
        buf = Buffer.from_list([1.0])
        buf.extend([0.0] * 10)
        assert buf.capacity == 11
        assert buf.size == 11

    def test_growth_factor_config(self, restore_config):
        """Test the configured growth factor is used."""
        restore_config.growth_factor = 3
        buf = Buffer.from_list([1.0, 2.0])
        buf.extend([3.0])
        assert buf.capacity == 6

    def test_replace_changes_length(self):
        buf = Buffer.from_list([1.0, 2.0], capacity=2)
        buf.replace([4.0, 5.0, 6.0])
        assert buf.tolist() == [4.0, 5.0, 6.0]
        assert buf.capacity == 4

    def test_reserve_keeps_values(self):
        buf = Buffer.from_list([1.0, 2.0])
        buf.reserve(100)
        assert buf.capacity == 100
        assert buf.tolist() == [1.0, 2.0]

    def test_reallocation_logged(self, caplog):
        buf = Buffer(0, capacity=2)
        with caplog.at_level(logging.DEBUG, logger="densemat.buffer"):
            buf.extend([1.0, 2.0, 3.0])
        assert "capacity 2 -> 4" in caplog.text


class TestBufferCopy:
    """Test copy and interop."""

    def test_copy_independent(self):
        buf = Buffer.from_list([1.0, 2.0])
        other = buf.copy()
        other[0] = 5.0
        assert buf[0] == 1.0
        assert other.capacity == buf.capacity

    def test_copy_with_capacity(self):
        buf = Buffer.from_list([1.0, 2.0])
        assert buf.copy(capacity=4).capacity == 4

    def test_to_numpy(self):
        buf = Buffer.from_list([1.0, 2.0, 3.0], capacity=10)
        arr = buf.to_numpy()
        assert arr.dtype == np.float64
        np.testing.assert_array_equal(arr, [1.0, 2.0, 3.0])
        arr[0] = 100.0
        assert buf[0] == 1.0

    def test_to_numpy_empty(self):
        assert Buffer().to_numpy().shape == (0,)
