"""Basic result codes, frame constants and small value helpers."""

from __future__ import annotations

import enum

FRAME_PREAMBLE = 0xFFEE
LIDAR_2D = 0x2
DATA_FRAME = 0x1
DEFAULT_INTENSITY = 10

INVALID_TIMESTAMP = 0

DEFAULT_CONNECTION_TIMEOUT_SEC = 2
DEFAULT_CONNECTION_TIMEOUT_USEC = 800000
DEFAULT_REV_TIMEOUT_SEC = 2
DEFAULT_REV_TIMEOUT_USEC = 800000

MILLISECONDS_CONVERSION = 1000
MICROSECONDS_CONVERSION = 1000000
NANOSECONDS_CONVERSION = 1000000000

_NAME_BUFFER_SIZE = 64


class Result(enum.IntEnum):
    """Outcome of a driver operation."""

    OK = 0
    TIMEOUT = -1
    FAIL = -2


def is_ok(result: int) -> bool:
    """Return True if ``result`` means success."""
    return result == Result.OK


def is_timeout(result: int) -> bool:
    """Return True if ``result`` means the operation timed out."""
    return result == Result.TIMEOUT


def is_fail(result: int) -> bool:
    """Return True if ``result`` means the operation failed."""
    return result == Result.FAIL


def dsl(c: int, i: int) -> int:
    """Shift the low byte of ``c`` left by ``i`` bits, masking everything else."""
    if i < 0:
        raise ValueError("shift must not be negative")
    return (c << i) & (0xFF << i)


def last_name(val: str) -> str:
    """Return the last dot-separated component of ``val``.

    Only the first 64 characters are considered; if there is no non-empty
    component, ``val`` is returned unchanged.
    """
    parts = [part for part in val[:_NAME_BUFFER_SIZE].split(".") if part]
    return parts[-1] if parts else val