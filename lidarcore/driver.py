"""Common interface of lidar drivers, lidar model codes and driver errors."""

from __future__ import annotations

import abc
import dataclasses
import enum

from lidarcore.definitions import DriverError, LidarType
from lidarcore.locker import Event, Locker, scoped_lock
from lidarcore.protocol import DeviceHealth, DeviceInfo, LidarConfig, NodeInfo
from lidarcore.thread import Thread

DEFAULT_TIMEOUT = 2000
DEFAULT_HEART_BEAT = 1000
MAX_SCAN_NODES = 7200
DEFAULT_TIMEOUT_COUNT = 1

DEFAULT_BAUDRATE = 8000


class LidarModel(enum.IntEnum):
    """Model code reported by the lidar."""

    F4 = 1
    T1 = 2
    F2 = 3
    S4 = 4
    G4 = 5
    X4 = 6
    G4PRO = 7
    F4PRO = 8
    R2 = 9
    G10 = 10
    S4B = 11
    S2 = 12
    G6 = 13
    G2A = 14
    G2B = 15
    G2C = 16
    G4B = 17
    G4C = 18
    G1 = 19
    G5 = 20
    G7 = 21
    TG15 = 100
    TG30 = 101
    TG50 = 102
    T15 = 200
    TAIL = 201


class SampleRateCode(enum.IntEnum):
    """Sampling rate code understood by the lidar."""

    RATE_4K = 0
    RATE_8K = 1
    RATE_9K = 2
    RATE_10K = 3


_ERROR_DESCRIPTIONS = {
    DriverError.NO_ERROR: "No error",
    DriverError.DEVICE_NOT_FOUND: "Device is not found",
    DriverError.PERMISSION: "Device is not permission",
    DriverError.UNSUPPORTED_OPERATION: "unsupported operation",
    DriverError.NOT_OPEN: "Device is not open",
    DriverError.TIMEOUT: "Operation timed out",
    DriverError.BLOCK: "Device Block",
    DriverError.NOT_BUFFER: "Device Failed",
    DriverError.TREMBLE: "Device Tremble",
    DriverError.LASER_FAILURE: "Laser Failure",
}


def describe_driver_error(err: int) -> str:
    """Return a human-readable description of a driver error code."""
    try:
        key = DriverError(err)
    except ValueError:
        return "Unknown error"
    return _ERROR_DESCRIPTIONS.get(key, "Unknown error")


def _default_config() -> LidarConfig:
    return LidarConfig(
        motor_rpm=1200,
        laser_scan_frequency=50,
        correction_angle=20640,
        correction_distance=6144,
    )


class DriverInterface(abc.ABC):
    """Operations every lidar driver provides.

    Operations that talk to the device raise ``TimeoutError`` when the lidar
    does not answer in time and ``ConnectionError`` or ``RuntimeError`` when
    the operation fails.
    """

    def __init__(self) -> None:
        self.single_channel: bool = False
        self.lidar_type: int = LidarType.TRIANGLE
        self.point_time: int = 0
        self.support_motor_dtr_ctrl: bool = True
        self.heart_beat: bool = False

        self._is_scanning = False
        self._is_connected = False
        self._data_event = Event()
        self._lock = Locker()
        self._thread: Thread | None = None
        self._cmd_lock = Locker()
        self._error_lock = Locker()

        self.serial_port = ""
        self.baudrate = DEFAULT_BAUDRATE
        self.intensities = False
        self.scan_node_buf: list[NodeInfo] = []
        self.scan_node_count = 0
        self.package_sample_index = 0
        self.retry_count = 0
        self.auto_reconnect = True
        self.auto_connecting = False
        self.config = _default_config()
        self._driver_errno = DriverError.NO_ERROR
        self.invalid_node_count = 0
        self.buffer_size = 0

    @property
    def driver_error(self) -> DriverError:
        """The last error the driver recorded."""
        with scoped_lock(self._error_lock):
            return self._driver_errno

    @driver_error.setter
    def driver_error(self, err: DriverError) -> None:
        with scoped_lock(self._error_lock):
            self._driver_errno = DriverError(err)

    @abc.abstractmethod
    def connect(self, port_path: str, baudrate: int = DEFAULT_BAUDRATE) -> None:
        """Connect to the lidar; call :meth:`disconnect` when done."""

    @abc.abstractmethod
    def describe_error(self, is_tcp: bool = True) -> str:
        """Describe the last error of the underlying port or socket."""

    @abc.abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the lidar."""

    @abc.abstractmethod
    def get_sdk_version(self) -> str:
        """Version of the driver library."""

    @abc.abstractmethod
    def is_scanning(self) -> bool:
        """Whether the lidar is scanning."""

    @abc.abstractmethod
    def is_connected(self) -> bool:
        """Whether the lidar is connected."""

    @abc.abstractmethod
    def set_intensities(self, enabled: bool) -> None:
        """Choose whether packages carry intensity samples."""

    @abc.abstractmethod
    def set_auto_reconnect(self, enabled: bool) -> None:
        """Choose whether the driver reconnects after the device is unplugged."""

    def get_finished_scan_cfg(self) -> LidarConfig:
        """Return a copy of the current scan configuration."""
        return dataclasses.replace(self.config)

    @abc.abstractmethod
    def get_health(self, timeout: int = DEFAULT_TIMEOUT) -> DeviceHealth:
        """Read the health status of the lidar."""

    @abc.abstractmethod
    def get_device_info(self, timeout: int = DEFAULT_TIMEOUT) -> DeviceInfo:
        """Read the model, versions and serial number of the lidar."""

    @abc.abstractmethod
    def start_scan(self, force: bool = False, timeout: int = DEFAULT_TIMEOUT) -> None:
        """Start scanning; only needs to be called once."""

    @abc.abstractmethod
    def stop(self) -> None:
        """Stop scanning."""

    @abc.abstractmethod
    def grab_scan_data(self, timeout: int = DEFAULT_TIMEOUT) -> list[NodeInfo]:
        """Return the nodes of one full revolution; scanning must be started."""

    @abc.abstractmethod
    def get_scan_frequency(self, timeout: int = DEFAULT_TIMEOUT) -> int:
        """Read the scanning frequency; only while not scanning."""

    @abc.abstractmethod
    def set_scan_frequency_add(self, timeout: int = DEFAULT_TIMEOUT) -> int:
        """Raise the scanning frequency by 1 Hz and return the new value."""

    @abc.abstractmethod
    def set_scan_frequency_dis(self, timeout: int = DEFAULT_TIMEOUT) -> int:
        """Lower the scanning frequency by 1 Hz and return the new value."""

    @abc.abstractmethod
    def set_scan_frequency_add_mic(self, timeout: int = DEFAULT_TIMEOUT) -> int:
        """Raise the scanning frequency by 0.1 Hz and return the new value."""

    @abc.abstractmethod
    def set_scan_frequency_dis_mic(self, timeout: int = DEFAULT_TIMEOUT) -> int:
        """Lower the scanning frequency by 0.1 Hz and return the new value."""

    @abc.abstractmethod
    def get_sampling_rate(self, timeout: int = DEFAULT_TIMEOUT) -> int:
        """Read the sampling rate code; only while not scanning."""

    @abc.abstractmethod
    def set_sampling_rate(self, rate: int, timeout: int = DEFAULT_TIMEOUT) -> int:
        """Set the sampling rate code and return the one now in effect."""

    @abc.abstractmethod
    def get_zero_offset_angle(self, timeout: int = DEFAULT_TIMEOUT) -> int:
        """Read the zero offset angle; only while not scanning."""

    @abc.abstractmethod
    def set_scan_heartbeat(self, enable: bool, timeout: int = DEFAULT_TIMEOUT) -> bool:
        """Enable or disable the heartbeat and return the resulting state."""