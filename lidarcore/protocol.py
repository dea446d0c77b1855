"""Wire-level commands, packet layouts and records of the lidar protocol."""

from __future__ import annotations

import enum
import math
import struct
from dataclasses import dataclass, field

M_PI = math.pi

SUNNOISEINTENSITY = 0xFF
GLASSNOISEINTENSITY = 0xFE

LIDAR_CMD_STOP = 0x65
LIDAR_CMD_SCAN = 0x60
LIDAR_CMD_FORCE_SCAN = 0x61
LIDAR_CMD_RESET = 0x80
LIDAR_CMD_FORCE_STOP = 0x00
LIDAR_CMD_GET_EAI = 0x55
LIDAR_CMD_GET_DEVICE_INFO = 0x90
LIDAR_CMD_GET_DEVICE_HEALTH = 0x92
LIDAR_ANS_TYPE_DEVINFO = 0x4
LIDAR_ANS_TYPE_DEVHEALTH = 0x6
LIDAR_CMD_SYNC_BYTE = 0xA5
LIDAR_CMDFLAG_HAS_PAYLOAD = 0x80
LIDAR_ANS_SYNC_BYTE1 = 0xA5
LIDAR_ANS_SYNC_BYTE2 = 0x5A
LIDAR_ANS_TYPE_MEASUREMENT = 0x81
LIDAR_RESP_MEASUREMENT_SYNCBIT = 0x1 << 0
LIDAR_RESP_MEASUREMENT_QUALITY_SHIFT = 2
LIDAR_RESP_MEASUREMENT_CHECKBIT = 0x1 << 0
LIDAR_RESP_MEASUREMENT_ANGLE_SHIFT = 1
LIDAR_RESP_MEASUREMENT_DISTANCE_SHIFT = 2
LIDAR_RESP_MEASUREMENT_ANGLE_SAMPLE_SHIFT = 8

LIDAR_CMD_RUN_POSITIVE = 0x06
LIDAR_CMD_RUN_INVERSION = 0x07
LIDAR_CMD_SET_AIMSPEED_ADDMIC = 0x09
LIDAR_CMD_SET_AIMSPEED_DISMIC = 0x0A
LIDAR_CMD_SET_AIMSPEED_ADD = 0x0B
LIDAR_CMD_SET_AIMSPEED_DIS = 0x0C
LIDAR_CMD_GET_AIMSPEED = 0x0D

LIDAR_CMD_SET_SAMPLING_RATE = 0xD0
LIDAR_CMD_GET_SAMPLING_RATE = 0xD1
LIDAR_STATUS_OK = 0x0
LIDAR_STATUS_WARNING = 0x1
LIDAR_STATUS_ERROR = 0x2

LIDAR_CMD_ENABLE_LOW_POWER = 0x01
LIDAR_CMD_DISABLE_LOW_POWER = 0x02
LIDAR_CMD_STATE_MODEL_MOTOR = 0x05
LIDAR_CMD_ENABLE_CONST_FREQ = 0x0E
LIDAR_CMD_DISABLE_CONST_FREQ = 0x0F

LIDAR_CMD_GET_OFFSET_ANGLE = 0x93
LIDAR_CMD_SAVE_SET_EXPOSURE = 0x94
LIDAR_CMD_SET_LOW_EXPOSURE = 0x95
LIDAR_CMD_ADD_EXPOSURE = 0x96
LIDAR_CMD_DIS_EXPOSURE = 0x97

LIDAR_CMD_SET_HEART_BEAT = 0xD9

PACKAGE_SAMPLE_MAX_LENGTH = 0x100
NODE_DEFAULT_QUALITY = 10
NODE_SYNC = 1
NODE_NOT_SYNC = 2
PACKAGE_PAID_BYTES = 10
PH = 0x55AA
TRIANGLE_PACKAGE_DATA_SIZE = 40
TOF_PACKAGE_DATA_SIZE = 80

_SERIAL_LENGTH = 16
_IP_CAPACITY = 16

_PACKAGE_HEADER = struct.Struct("<HBBHHH")
_PACKAGE_SAMPLE = struct.Struct("<BH")
_TOF_PACKAGE_SAMPLE = struct.Struct("<HH")
_DEVICE_INFO = struct.Struct("<BHB16s")
_DEVICE_HEALTH = struct.Struct("<BH")
_CMD_PACKET = struct.Struct("<BBBB")
_ANS_HEADER = struct.Struct("<BBIB")

_ANS_SIZE_BITS = 30
_ANS_SIZE_MASK = (1 << _ANS_SIZE_BITS) - 1


def _check_uint(name: str, value: int, bits: int) -> None:
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name} must fit in {bits} unsigned bits, got {value}")


def _require_length(what: str, data: bytes, size: int) -> None:
    if len(data) < size:
        raise ValueError(f"{what} needs {size} bytes, got {len(data)}")


class CT(enum.IntEnum):
    """Package type carried in the CT byte."""

    NORMAL = 0
    RING_START = 1


class ProtocolVer(enum.IntEnum):
    """Protocol version of network lidars."""

    V1 = 0
    V2 = 1


@dataclass
class NodeInfo:
    """One decoded measurement node."""

    sync_flag: int = 0
    sync_quality: int = 0
    angle_q6_checkbit: int = 0
    distance_q2: int = 0
    stamp: int = 0
    delay_time: int = 0
    scan_frequence: int = 0
    debug_info: int = 0
    index: int = 0
    error_package: int = 0


@dataclass
class PackageNode:
    """One raw sample of a package: intensity and distance."""

    quality: int = 0
    distance: int = 0


@dataclass
class NodePackage:
    """A raw sample package: ten header bytes followed by its samples."""

    package_head: int = PH
    package_ct: int = CT.NORMAL
    now_package_num: int = 0
    first_sample_angle: int = 0
    last_sample_angle: int = 0
    checksum: int = 0
    samples: list[PackageNode] = field(default_factory=list)

    @classmethod
    def from_bytes(cls, data: bytes, tof: bool = False) -> NodePackage:
        """Decode a package with intensity samples.

        Triangle samples take three bytes (8-bit intensity, 16-bit distance),
        TOF samples four (16-bit intensity, 16-bit distance).
        Raises ValueError on a wrong header or truncated data.
        """
        data = bytes(data)
        _require_length("package header", data, PACKAGE_PAID_BYTES)
        head, ct, count, first, last, checksum = _PACKAGE_HEADER.unpack_from(data)
        if head != PH:
            raise ValueError(f"bad package header 0x{head:04X}")
        sample = _TOF_PACKAGE_SAMPLE if tof else _PACKAGE_SAMPLE
        end = PACKAGE_PAID_BYTES + count * sample.size
        _require_length("package", data, end)
        samples = [
            PackageNode(quality, distance)
            for quality, distance in sample.iter_unpack(data[PACKAGE_PAID_BYTES:end])
        ]
        return cls(head, ct, count, first, last, checksum, samples)


@dataclass
class DeviceInfo:
    """Model, versions and serial number reported by the lidar."""

    model: int = 0
    firmware_version: int = 0
    hardware_version: int = 0
    serialnum: bytes = bytes(_SERIAL_LENGTH)

    def __post_init__(self) -> None:
        _check_uint("model", self.model, 8)
        _check_uint("firmware_version", self.firmware_version, 16)
        _check_uint("hardware_version", self.hardware_version, 8)
        self.serialnum = bytes(self.serialnum)
        if len(self.serialnum) != _SERIAL_LENGTH:
            raise ValueError(f"serialnum must be {_SERIAL_LENGTH} bytes long")

    @classmethod
    def from_bytes(cls, data: bytes) -> DeviceInfo:
        """Decode the 20-byte device information answer."""
        data = bytes(data)
        _require_length("device info", data, _DEVICE_INFO.size)
        return cls(*_DEVICE_INFO.unpack_from(data))

    def to_bytes(self) -> bytes:
        """Encode as the 20-byte device information answer."""
        return _DEVICE_INFO.pack(
            self.model, self.firmware_version, self.hardware_version, self.serialnum
        )


@dataclass
class DeviceHealth:
    """Health status and error code reported by the lidar."""

    status: int = LIDAR_STATUS_OK
    error_code: int = 0

    def __post_init__(self) -> None:
        _check_uint("status", self.status, 8)
        _check_uint("error_code", self.error_code, 16)

    @classmethod
    def from_bytes(cls, data: bytes) -> DeviceHealth:
        """Decode the 3-byte health answer."""
        data = bytes(data)
        _require_length("device health", data, _DEVICE_HEALTH.size)
        return cls(*_DEVICE_HEALTH.unpack_from(data))

    def to_bytes(self) -> bytes:
        """Encode as the 3-byte health answer."""
        return _DEVICE_HEALTH.pack(self.status, self.error_code)


@dataclass
class CmdPacket:
    """A request command sent to the lidar."""

    cmd_flag: int = 0
    size: int = 0
    data: int = 0
    sync_byte: int = LIDAR_CMD_SYNC_BYTE

    def __post_init__(self) -> None:
        for name in ("cmd_flag", "size", "data", "sync_byte"):
            _check_uint(name, getattr(self, name), 8)

    def to_bytes(self) -> bytes:
        """Encode as sync byte, command, size and data bytes."""
        return _CMD_PACKET.pack(self.sync_byte, self.cmd_flag, self.size, self.data)


@dataclass
class AnsHeader:
    """Header preceding every answer: 30-bit size, 2-bit sub type and type."""

    size: int = 0
    sub_type: int = 0
    type: int = 0
    sync_byte1: int = LIDAR_ANS_SYNC_BYTE1
    sync_byte2: int = LIDAR_ANS_SYNC_BYTE2

    def __post_init__(self) -> None:
        _check_uint("size", self.size, _ANS_SIZE_BITS)
        _check_uint("sub_type", self.sub_type, 2)
        for name in ("type", "sync_byte1", "sync_byte2"):
            _check_uint(name, getattr(self, name), 8)

    @classmethod
    def from_bytes(cls, data: bytes) -> AnsHeader:
        """Decode a 7-byte answer header; raises ValueError on bad sync bytes."""
        data = bytes(data)
        _require_length("answer header", data, _ANS_HEADER.size)
        sync1, sync2, packed, ans_type = _ANS_HEADER.unpack_from(data)
        if sync1 != LIDAR_ANS_SYNC_BYTE1 or sync2 != LIDAR_ANS_SYNC_BYTE2:
            raise ValueError(f"bad answer sync bytes 0x{sync1:02X} 0x{sync2:02X}")
        return cls(
            size=packed & _ANS_SIZE_MASK,
            sub_type=packed >> _ANS_SIZE_BITS,
            type=ans_type,
            sync_byte1=sync1,
            sync_byte2=sync2,
        )

    def to_bytes(self) -> bytes:
        """Encode as a 7-byte answer header."""
        packed = (self.size & _ANS_SIZE_MASK) | (self.sub_type << _ANS_SIZE_BITS)
        return _ANS_HEADER.pack(self.sync_byte1, self.sync_byte2, packed, self.type)


@dataclass
class LidarConfig:
    """Scan and network configuration of a lidar."""

    laser_en: int = 0
    motor_en: int = 0
    motor_rpm: int = 0
    fov_start: int = 0
    fov_end: int = 0
    trans_sel: int = 0
    data_recv_ip: str = ""
    data_recv_port: int = 0
    dhcp_en: int = 0
    device_ip: str = ""
    device_netmask: str = ""
    device_gateway_ip: str = ""
    laser_scan_frequency: int = 0
    correction_angle: int = 0
    correction_distance: int = 0

    def __post_init__(self) -> None:
        for name in ("data_recv_ip", "device_ip", "device_netmask", "device_gateway_ip"):
            if len(getattr(self, name).encode()) >= _IP_CAPACITY:
                raise ValueError(f"{name} must be shorter than {_IP_CAPACITY} bytes")