"""
Common helpers shared by the codec, the balance table and the writers.

Potion weights are stored on disk as IEEE-754 single precision. Everything
that compares or prints a weight goes through these helpers so that a value
read from a file, a value written back and a value typed into a table all
agree bit for bit.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import Any

import numpy as np


INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
UINT32_MAX = 2 ** 32 - 1


def to_f32(value: float) -> float:
    """
    Round a float to single precision and return it as a Python float.

    Examples:
        >>> to_f32(0.75)
        0.75
        >>> to_f32(0.6) == 0.6
        False
    """
    return float(np.float32(value))


def format_f32(value: float) -> str:
    """
    Shortest decimal text that reads back to the same single-precision value.

    Examples:
        >>> format_f32(0.6000000238418579)
        '0.6'
        >>> format_f32(1.0)
        '1'
    """
    return np.format_float_positional(np.float32(value), trim="-")


def parse_int(value: Any, low: int = INT32_MIN, high: int = INT32_MAX) -> int:
    """
    Strictly parse an integer cell.

    Unlike a lenient converter this never substitutes a default: blank,
    fractional or out-of-range input raises ValueError.
    """
    if isinstance(value, bool):
        raise ValueError(f"'{value}' is not an integer")
    if isinstance(value, int):
        result = value
    else:
        text = str(value).strip() if value is not None else ""
        if not text:
            raise ValueError("empty cell")
        try:
            result = int(text)
        except ValueError:
            raise ValueError(f"'{text}' is not an integer") from None
    if not low <= result <= high:
        raise ValueError(f"{result} is outside [{low}, {high}]")
    return result


def parse_float(value: Any) -> float:
    """Strictly parse a finite float cell."""
    if isinstance(value, bool):
        raise ValueError(f"'{value}' is not a number")
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        text = str(value).strip() if value is not None else ""
        if not text:
            raise ValueError("empty cell")
        try:
            result = float(text)
        except ValueError:
            raise ValueError(f"'{text}' is not a number") from None
    if not np.isfinite(result):
        raise ValueError(f"'{value}' is not a finite number")
    return result


def parse_weight(value: Any) -> float:
    """Parse a weight cell; it must stay finite once stored as single precision."""
    result = parse_float(value)
    with np.errstate(over="ignore"):
        single = np.float32(result)
    if not np.isfinite(single):
        raise ValueError(f"'{value}' is outside the single-precision range")
    return float(single)


def _default_mode(path: Path) -> int:
    """Mode the written file should get: the current one, or 0o666 minus the umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomic(path: Path | str, data: bytes, modification_time: int | None = None) -> Path:
    """
    Write bytes to a temporary sibling, optionally stamp its mtime, then
    rename it over the destination.

    The result keeps the permissions of the file it replaces; a new file
    gets the usual umask-derived mode. A failure at any step removes the
    temporary file and leaves the destination as it was. OSError and
    OverflowError propagate to the caller.
    """
    path = Path(path)
    mode = _default_mode(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp, mode)
        if modification_time is not None:
            os.utime(tmp, (modification_time, modification_time))
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return path
