"""Device, lidar and property identifiers and the laser scan data types."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

_STRING_CAPACITY = 50
_MAX_PORTS = 8
_SERIAL_LENGTH = 16


class DeviceType(enum.IntEnum):
    """How the lidar is connected."""

    SERIAL = 0x0
    TCP = 0x1
    UDP = 0x2


class LidarType(enum.IntEnum):
    """Measuring principle of the lidar."""

    TOF = 0
    TRIANGLE = 1
    TOF_NET = 2


class LidarProperty(enum.IntEnum):
    """Index of a settable lidar parameter."""

    # string properties
    SERIAL_PORT = 0
    IGNORE_ARRAY = 1
    # int properties
    SERIAL_BAUDRATE = 10
    LIDAR_TYPE = 11
    DEVICE_TYPE = 12
    SAMPLE_RATE = 13
    ABNORMAL_CHECK_COUNT = 14
    # float properties
    MAX_RANGE = 20
    MIN_RANGE = 21
    MAX_ANGLE = 22
    MIN_ANGLE = 23
    SCAN_FREQUENCY = 24
    # bool properties
    FIXED_RESOLUTION = 30
    REVERSION = 31
    INVERTED = 32
    AUTO_RECONNECT = 33
    SINGLE_CHANNEL = 34
    INTENSITY = 35
    SUPPORT_MOTOR_DTR_CTRL = 36
    SUPPORT_HEART_BEAT = 37


class DriverError(enum.IntEnum):
    """Last error reported by a driver."""

    NO_ERROR = 0
    DEVICE_NOT_FOUND = 1
    PERMISSION = 2
    UNSUPPORTED_OPERATION = 3
    UNKNOWN = 4
    TIMEOUT = 5
    NOT_OPEN = 6
    BLOCK = 7
    NOT_BUFFER = 8
    TREMBLE = 9
    LASER_FAILURE = 10


@dataclass
class LaserPoint:
    """One measured point: angle in radians, range in metres."""

    angle: float = 0.0
    range: float = 0.0
    intensity: float = 0.0


@dataclass
class LaserConfig:
    """Scan configuration: angles in radians, times in seconds, ranges in metres."""

    min_angle: float = 0.0
    max_angle: float = 0.0
    angle_increment: float = 0.0
    time_increment: float = 0.0
    scan_time: float = 0.0
    min_range: float = 0.0
    max_range: float = 0.0


@dataclass
class LaserScan:
    """One revolution of points; ``stamp`` is when the first was measured (ns)."""

    stamp: int = 0
    points: list[LaserPoint] = field(default_factory=list)
    config: LaserConfig = field(default_factory=LaserConfig)

    def __len__(self) -> int:
        return len(self.points)

    def clear(self) -> None:
        """Drop all points and reset the stamp and configuration."""
        self.stamp = 0
        self.points = []
        self.config = LaserConfig()

    def point_stamp(self, index: int) -> int:
        """Return the time in nanoseconds at which point ``index`` was measured."""
        if not 0 <= index < len(self.points):
            raise IndexError("point index out of range")
        return int(self.stamp + index * self.config.time_increment * 1e9)


def _check_byte(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must fit in one byte, got {value}")


@dataclass
class LaserDebug:
    """Debug bytes collected from the packages of a scan."""

    cus_version: int = 0
    model_debug_ver: int = 0
    hardware_firmware_major: int = 0
    firmware_minor: int = 0
    board_hardware_month: int = 0
    output_date: int = 0
    noise_motor_sn_year: int = 0
    sn_num_high: int = 0
    sn_num_low: int = 0
    health: int = 0
    cus_hardware_software_ver: int = 0
    laser_current: int = 0
    max_debug_index: int = 0

    def __post_init__(self) -> None:
        for name, value in vars(self).items():
            _check_byte(name, value)


@dataclass
class LidarVersion:
    """Hardware and software version and serial number of a lidar."""

    hardware: int = 0
    soft_major: int = 0
    soft_minor: int = 0
    soft_patch: int = 0
    sn: bytes = bytes(_SERIAL_LENGTH)

    def __post_init__(self) -> None:
        for name in ("hardware", "soft_major", "soft_minor", "soft_patch"):
            _check_byte(name, getattr(self, name))
        self.sn = bytes(self.sn)
        if len(self.sn) != _SERIAL_LENGTH:
            raise ValueError(f"sn must be {_SERIAL_LENGTH} bytes long")


@dataclass
class LidarPort:
    """Up to eight port names, each shorter than fifty characters."""

    ports: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.ports = list(self.ports)
        if len(self.ports) > _MAX_PORTS:
            raise ValueError(f"at most {_MAX_PORTS} ports are allowed")
        for port in self.ports:
            if len(port.encode()) >= _STRING_CAPACITY:
                raise ValueError(
                    f"port name must be shorter than {_STRING_CAPACITY} bytes"
                )