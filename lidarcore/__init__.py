"""Data types, wire protocol structures, sync primitives and model helpers for 2D LiDAR scanners."""

__version__ = "0.1.0"

__all__ = [
    "channel",
    "datatype",
    "definitions",
    "driver",
    "helpers",
    "locker",
    "protocol",
    "thread",
    "timer",
]