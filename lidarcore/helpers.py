"""Model capability queries, sample-rate conversions and debug-info parsing."""

from __future__ import annotations

import re
from collections.abc import Mapping

from lidarcore.definitions import LaserDebug, LidarType
from lidarcore.driver import LidarModel, SampleRateCode
from lidarcore.protocol import DeviceInfo, NodeInfo, ProtocolVer

_MODEL_NAMES = {
    model: model.name for model in LidarModel if model is not LidarModel.TAIL
}

_DEFAULT_SAMPLE_RATE = 4
_MODEL_SAMPLE_RATES = {
    LidarModel.G4: 9,
    LidarModel.X4: 5,
    LidarModel.G4PRO: 9,
    LidarModel.F4PRO: 4,
    LidarModel.R2: 5,
    LidarModel.G10: 10,
    LidarModel.S4B: 4,
    LidarModel.S2: 3,
    LidarModel.G6: 18,
    LidarModel.G2A: 5,
    LidarModel.G2B: 5,
    LidarModel.G2C: 4,
    LidarModel.G1: 9,
    LidarModel.G5: 9,
    LidarModel.G7: 18,
    LidarModel.TG15: 20,
    LidarModel.TG30: 20,
    LidarModel.TG50: 20,
    LidarModel.T15: 20,
}

_OCTAVE_MODELS = frozenset({LidarModel.G6, LidarModel.G7})

_SAMPLE_RATE_MODELS = frozenset({
    LidarModel.G4,
    LidarModel.G5,
    LidarModel.G4PRO,
    LidarModel.F4PRO,
    LidarModel.G6,
    LidarModel.G7,
    LidarModel.TG15,
    LidarModel.TG50,
    LidarModel.TG30,
})

_ZERO_ANGLE_MODELS = frozenset({
    LidarModel.R2,
    LidarModel.G2A,
    LidarModel.G2B,
    LidarModel.G2C,
    LidarModel.G1,
    LidarModel.TG15,
    LidarModel.TG30,
    LidarModel.TG50,
})

_FIXED_FREQUENCY_MODELS = frozenset({
    LidarModel.S4,
    LidarModel.S4B,
    LidarModel.S2,
    LidarModel.X4,
})

_INTENSITY_MODELS = frozenset({LidarModel.G2B, LidarModel.G4B, LidarModel.S4B})

_TOF_MODELS = frozenset({LidarModel.TG15, LidarModel.TG30, LidarModel.TG50})

_OCTAVE_USER_RATES = {
    10: SampleRateCode.RATE_4K,
    16: SampleRateCode.RATE_8K,
    18: SampleRateCode.RATE_9K,
    20: SampleRateCode.RATE_10K,
}
_USER_RATES = {
    4: SampleRateCode.RATE_4K,
    8: SampleRateCode.RATE_8K,
    9: SampleRateCode.RATE_9K,
}
_F4PRO_USER_RATES = {
    4: SampleRateCode.RATE_4K,
    6: SampleRateCode.RATE_8K,
}

_NUMBER_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def lidar_model_to_string(model: int) -> str:
    """Return the name of a lidar model code."""
    try:
        return _MODEL_NAMES[LidarModel(model)]
    except (ValueError, KeyError):
        return f"unkown(YD-{model})"


def lidar_model_default_sample_rate(model: int) -> int:
    """Return the default sampling rate (in K/s) of a lidar model."""
    return _MODEL_SAMPLE_RATES.get(model, _DEFAULT_SAMPLE_RATE)


def is_octave_lidar(model: int) -> bool:
    """Whether the model reports octave sampling rates."""
    return model in _OCTAVE_MODELS


def has_sample_rate(model: int) -> bool:
    """Whether the model supports more than one sampling rate."""
    return model in _SAMPLE_RATE_MODELS


def has_zero_angle(model: int) -> bool:
    """Whether the model has a zero offset angle."""
    return model in _ZERO_ANGLE_MODELS


def has_scan_frequency_ctrl(model: int) -> bool:
    """Whether the model's scanning frequency can be adjusted."""
    return model not in _FIXED_FREQUENCY_MODELS


def is_support_lidar(model: int) -> bool:
    """Whether the model is supported."""
    return not (
        model < LidarModel.F4
        or LidarModel.G7 < model < LidarModel.TG15
        or LidarModel.TG50 < model < LidarModel.T15
    )


def has_intensity(model: int) -> bool:
    """Whether the model reports intensity."""
    return model in _INTENSITY_MODELS


def is_support_motor_ctrl(model: int) -> bool:
    """Whether the motor can be enabled through the serial DTR line.

    Every model is treated as supporting it.
    """
    return True


def is_support_scan_frequency(model: int, frequency: float) -> bool:
    """Whether ``frequency`` (Hz) is a valid scanning frequency for the model."""
    if model >= LidarModel.TG15:
        if 1 <= frequency <= 18:
            return True
        return model >= LidarModel.T15 and 1 <= frequency <= 50
    return 5 <= frequency <= 16


def is_tof_lidar_by_model(model: int) -> bool:
    """Whether the model is a serial TOF lidar."""
    return LidarModel.TG15 <= model <= LidarModel.TG50


def is_net_tof_lidar_by_model(model: int) -> bool:
    """Whether the model is a network TOF lidar."""
    return model >= LidarModel.T15


def is_tof_lidar(lidar_type: int) -> bool:
    """Whether the lidar type is TOF."""
    return lidar_type == LidarType.TOF


def is_net_tof_lidar(lidar_type: int) -> bool:
    """Whether the lidar type is network TOF."""
    return lidar_type == LidarType.TOF_NET


def is_triangle_lidar(lidar_type: int) -> bool:
    """Whether the lidar type is triangulation."""
    return lidar_type == LidarType.TRIANGLE


def is_old_version_tof_lidar(model: int, major: int, minor: int) -> bool:
    """Whether a TOF lidar runs firmware speaking the old protocol."""
    return model in _TOF_MODELS and major <= 1 and minor <= 2


def lidar_zero_offset_angle_scale(model: int, major: int, minor: int) -> float:
    """Return the divisor that converts the raw zero offset angle to degrees."""
    if model == LidarModel.R2:
        if (major == 1 and minor <= 7) or major < 1:
            return 4.0
        return 100.0
    return 4.0


def is_support_heart_beat(model: int) -> bool:
    """Whether the model supports the heartbeat.

    Every model is treated as supporting it.
    """
    return True


def is_valid_sample_rate(smap: Mapping[int, int]) -> bool:
    """Whether a sampling-rate map holds exactly one rate above 2."""
    if len(smap) != 1:
        return False
    return next(iter(smap.values())) > 2


def convert_user_to_lidar_sample(model: int, sample_rate: int, default_rate: int) -> int:
    """Convert a user sampling rate (K/s) to the code the lidar understands."""
    if is_octave_lidar(model):
        return _OCTAVE_USER_RATES.get(sample_rate, default_rate)
    if model == LidarModel.F4PRO:
        return _F4PRO_USER_RATES.get(sample_rate, SampleRateCode.RATE_4K)
    return _USER_RATES.get(sample_rate, SampleRateCode.RATE_9K)


def convert_lidar_to_user_sample(model: int, rate: int) -> int:
    """Convert a lidar sampling-rate code to a user sampling rate (K/s)."""
    octave = is_octave_lidar(model)
    if rate == SampleRateCode.RATE_4K:
        return 10 if octave else 4
    if rate == SampleRateCode.RATE_8K:
        if octave:
            return 16
        return 6 if model == LidarModel.F4PRO else 8
    if rate == SampleRateCode.RATE_9K:
        return 18 if octave else 9
    if rate == SampleRateCode.RATE_10K:
        return 20 if octave else 10
    return 18 if octave else 9


def is_valid_value(value: int) -> bool:
    """Whether a debug byte is valid (its top bit is clear)."""
    return not value & 0x80


def is_version_valid(info: LaserDebug) -> bool:
    """Whether the version bytes of the debug information are valid."""
    return all(
        is_valid_value(value)
        for value in (
            info.cus_version,
            info.model_debug_ver,
            info.hardware_firmware_major,
            info.board_hardware_month,
        )
    )


def is_serial_numb_valid(info: LaserDebug) -> bool:
    """Whether the serial-number bytes of the debug information are valid."""
    return all(
        is_valid_value(value)
        for value in (
            info.output_date,
            info.noise_motor_sn_year,
            info.sn_num_high,
        )
    )


def parse_package_node(node: NodeInfo, info: LaserDebug) -> None:
    """Store the debug byte carried by ``node`` into ``info``."""
    value = node.debug_info
    index = node.index
    if index == 1:
        info.cus_version = value
    elif index == 2:
        info.model_debug_ver = value
    elif index == 3:
        info.hardware_firmware_major = value
    elif index == 4:
        info.firmware_minor = value
    elif index == 5:
        info.board_hardware_month = value
    elif index == 6:
        info.output_date = value
    elif index == 7:
        info.noise_motor_sn_year = value
    elif index == 8:
        info.sn_num_high = value
    elif index == 9:
        info.sn_num_low = value
    elif index == 10:
        info.health = value
    elif index == 11:
        info.cus_hardware_software_ver = value
        info.laser_current = value
    elif index == 12:
        info.laser_current = value

    if info.max_debug_index > index:
        info.cus_version = 0xFF
    if index > info.max_debug_index and index < 100:
        info.max_debug_index = index


def parse_laser_debug_info(info: LaserDebug) -> DeviceInfo | None:
    """Build device information from collected debug bytes.

    Returns None when the debug information is incomplete or invalid.
    """
    year = info.noise_motor_sn_year & 0x0F
    if not (is_version_valid(info) and info.max_debug_index > 0 and year):
        return None
    if not (is_serial_numb_valid(info) and info.max_debug_index > 8):
        return None

    custom_major = (info.cus_version & 0xFF) >> 4
    custom_minor = info.cus_version & 0x0F
    month = info.board_hardware_month & 0x0F
    date = info.output_date & 0x1F
    number = ((info.sn_num_high & 0xFF) << 7) | (info.sn_num_low & 0xFF)
    digits = f"{year + 2015:04d}{month:02d}{date:02d}{number:08d}"
    return DeviceInfo(
        model=(info.model_debug_ver & 0xFF) >> 3,
        firmware_version=(custom_major << 8) | custom_minor,
        hardware_version=(info.hardware_firmware_major & 0xFF) >> 4,
        serialnum=bytes(int(digit) for digit in digits[:16]),
    )


def format_version_info(info: DeviceInfo, port: str, baudrate: int) -> str | None:
    """Describe the connected lidar; None if it reported no versions."""
    if info.firmware_version == 0 and info.hardware_version == 0:
        return None
    major = (info.firmware_version >> 8) & 0xFF
    minor = info.firmware_version & 0xFF
    serial = "".join(f"{byte & 0xFF:X}" for byte in info.serialnum)
    return (
        f"[YDLIDAR] Connection established in [{port}][{baudrate}]:\n"
        f"Firmware version: {major}.{minor}\n"
        f"Hardware version: {info.hardware_version}\n"
        f"Model: {lidar_model_to_string(info.model)}\n"
        f"Serial: {serial}\n"
    )


def print_version_info(info: DeviceInfo, port: str, baudrate: int) -> bool:
    """Print the description of the connected lidar; False if it has none."""
    text = format_version_info(info, port, baudrate)
    if text is None:
        return False
    print(text, end="", flush=True)
    return True


def _parse_float_prefix(text: str) -> float:
    match = _NUMBER_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group(1))


def split(s: str, delim: str) -> list[float]:
    """Split ``s`` at ``delim`` and read the leading number of each field.

    Fields without a leading number read as 0.0; a trailing delimiter does
    not produce an extra field.
    """
    if len(delim) != 1:
        raise ValueError("delimiter must be a single character")
    fields = s.split(delim)
    if fields[-1] == "":
        fields.pop()
    return [_parse_float_prefix(part) for part in fields]


def is_v1_protocol(protocol: int) -> bool:
    """Whether the network protocol byte denotes version 1."""
    return protocol == ProtocolVer.V1