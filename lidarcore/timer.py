"""Millisecond delays and clock readings."""

from __future__ import annotations

import time

_UINT32_MASK = 0xFFFFFFFF


def delay(ms: int) -> None:
    """Sleep for ``ms`` milliseconds."""
    if ms < 0:
        raise ValueError("delay must not be negative")
    if ms:
        time.sleep(ms / 1000.0)


def get_ms() -> int:
    """Return a monotonic millisecond counter, wrapping at 32 bits."""
    return (time.monotonic_ns() // 1_000_000) & _UINT32_MASK


def get_time() -> int:
    """Return the wall-clock time in nanoseconds since the epoch."""
    return time.time_ns()