"""
Tests for CSV reading and writing.
"""

import logging

import pytest

import densemat
from densemat import Mat, FormatError, MatIOError
from densemat._io import format_value, read_csv, write_csv


class TestCSVRoundTrip:
    """Test to_csv/from_csv."""

    def test_fibonacci_round_trip(self, fib_mat, tmp_path):
        """Test the 4x4 Fibonacci matrix survives a save/load cycle."""
        assert fib_mat.at(3, 3) == 987.0
        path = tmp_path / "fib.csv"
        fib_mat.to_csv(path)
        loaded = densemat.from_csv(path)
        assert loaded.equals(fib_mat)

    def test_loaded_capacity_is_exact(self, fib_mat, tmp_path):
        path = tmp_path / "fib.csv"
        fib_mat.to_csv(path)
        assert Mat.from_csv(str(path)).capacity == 16

    def test_output_format(self, tmp_path):
        path = tmp_path / "m.csv"
        densemat.from_nested([[1.0, -2.5], [0.0, 1e-3]]).to_csv(path)
        text = path.read_text()
        assert text == (
            "1.00000000000000e+00,-2.50000000000000e+00\n"
            "0.00000000000000e+00,1.00000000000000e-03"
        )
        assert not text.endswith("\n")

    def test_precision_override(self, tmp_path):
        path = tmp_path / "m.csv"
        densemat.from_flat([1.0, 2.0]).to_csv(path, precision=2)
        assert path.read_text() == "1.00e+00,2.00e+00"

    def test_precision_config(self, tmp_path):
        densemat.set_precision(csv=3)
        assert format_value(0.5) == "5.000e-01"

    def test_random_round_trip_is_close(self, random_mat, tmp_path):
        path = tmp_path / "r.csv"
        random_mat.to_csv(path)
        loaded = densemat.from_csv(path)
        assert loaded.shape == random_mat.shape
        for a, b in zip(loaded.vals(), random_mat.vals()):
            assert a == pytest.approx(b, rel=1e-13)

    def test_logging(self, fib_mat, tmp_path, caplog):
        path = tmp_path / "fib.csv"
        with caplog.at_level(logging.DEBUG, logger="densemat.io"):
            fib_mat.to_csv(path)
            densemat.from_csv(path)
        assert "Saved 4x4" in caplog.text
        assert "Loaded 4x4" in caplog.text


class TestCSVRead:
    """Test parsing edge cases."""

    def test_read_plain(self, tmp_path):
        path = tmp_path / "m.csv"
        path.write_text("1,2,3\n4,5,6\n")
        assert read_csv(path) == (2, 3, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

    def test_blank_lines_skipped(self, tmp_path):
        path = tmp_path / "m.csv"
        path.write_text("1,2\n\n3,4")
        assert densemat.from_csv(path).to_list() == [[1.0, 2.0], [3.0, 4.0]]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "m.csv"
        path.write_text("")
        assert densemat.from_csv(path).shape == (0, 0)

    def test_jagged(self, tmp_path):
        path = tmp_path / "m.csv"
        path.write_text("1,2,3\n4,5\n")
        with pytest.raises(FormatError, match="line 2"):
            densemat.from_csv(path)

    def test_not_a_number(self, tmp_path):
        path = tmp_path / "m.csv"
        path.write_text("1,2\n3,abc\n")
        with pytest.raises(FormatError, match="item 1 in line 2"):
            densemat.from_csv(path)

    def test_not_utf8(self, tmp_path):
        """Test undecodable bytes surface as a format error."""
        path = tmp_path / "m.csv"
        path.write_bytes(b"1.0,2.0\n\xff\xfe,3.0\n")
        with pytest.raises(FormatError, match="UTF-8"):
            densemat.from_csv(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(MatIOError):
            densemat.from_csv(tmp_path / "missing.csv")

    def test_io_error_is_oserror(self, tmp_path):
        with pytest.raises(OSError):
            densemat.from_csv(tmp_path / "missing.csv")


class TestCSVWrite:
    """Test writing edge cases."""

    def test_write_to_directory_fails(self, tmp_path):
        with pytest.raises(MatIOError):
            Mat(2, 2).to_csv(tmp_path)

    def test_write_csv_function(self, tmp_path):
        path = tmp_path / "m.csv"
        write_csv(path, 2, 1, [1.0, 2.0], precision=1)
        assert path.read_text() == "1.0e+00\n2.0e+00"
