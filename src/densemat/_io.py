"""
CSV reading and writing for ``Mat``.

One matrix row per line, comma separated. Every line must carry the same
number of fields as the first one. Values are written in scientific
notation with ``csv_precision`` digits after the decimal point, rows are
joined by newlines and the last row has no trailing newline.
"""

from __future__ import annotations

import csv
import logging
import os
from typing import List, Optional, Sequence, Tuple, Union

from ._config import get_config
from ._errors import FormatError, MatIOError

__all__ = ['read_csv', 'write_csv', 'format_value']

logger = logging.getLogger("densemat.io")

PathLike = Union[str, "os.PathLike[str]"]


def format_value(value: float, precision: Optional[int] = None) -> str:
    """Render one value the way ``write_csv`` does."""
    if precision is None:
        precision = get_config().csv_precision
    return f"{value:.{precision}e}"


def read_csv(path: PathLike) -> Tuple[int, int, List[float]]:
    """
    Parse a rectangular CSV file.

    Blank lines are skipped. An empty file yields a 0x0 result.

    Args:
        path: File to read

    Returns:
        Tuple of (rows, cols, row_major_values)

    Raises:
        MatIOError: If the file cannot be opened or read
        FormatError: If the file is not UTF-8 text, a field is not a number
            or a line has the wrong width
    """
    values: List[float] = []
    rows = 0
    cols = 0
    try:
        with open(path, newline="", encoding="utf-8") as f:
            for line_no, fields in enumerate(csv.reader(f), start=1):
                if not fields:
                    continue
                if rows == 0:
                    cols = len(fields)
                elif len(fields) != cols:
                    raise FormatError(
                        f"line {line_no} in {os.fspath(path)} has {len(fields)} entries, "
                        f"the first line has {cols}; all lines must have the same number of entries"
                    )
                for i, field in enumerate(fields):
                    try:
                        values.append(float(field))
                    except ValueError:
                        raise FormatError(
                            f"item {i} in line {line_no} of {os.fspath(path)} is {field!r}, "
                            f"which cannot be converted to a float"
                        ) from None
                rows += 1
    except UnicodeDecodeError as e:
        raise FormatError(f"{os.fspath(path)} is not valid UTF-8 text: {e}") from e
    except csv.Error as e:
        raise FormatError(f"cannot parse {os.fspath(path)}: {e}") from e
    except OSError as e:
        raise MatIOError(f"cannot read {os.fspath(path)}: {e}") from e

    logger.debug("Loaded %dx%d matrix from %s", rows, cols, os.fspath(path))
    return rows, cols, values


def write_csv(
    path: PathLike,
    rows: int,
    cols: int,
    values: Sequence[float],
    precision: Optional[int] = None,
) -> None:
    """
    Write row-major ``values`` as a ``rows`` x ``cols`` CSV file.

    Raises:
        MatIOError: If the file cannot be created or written
    """
    if precision is None:
        precision = get_config().csv_precision
    lines = []
    for i in range(rows):
        row = values[i * cols:(i + 1) * cols]
        lines.append(",".join(format_value(v, precision) for v in row))
    text = "\n".join(lines)

    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise MatIOError(f"cannot write {os.fspath(path)}: {e}") from e

    logger.debug("Saved %dx%d matrix to %s", rows, cols, os.fspath(path))
