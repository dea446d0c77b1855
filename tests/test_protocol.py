import struct

import pytest

from lidarcore.protocol import (
    CT,
    LIDAR_ANS_SYNC_BYTE1,
    LIDAR_ANS_SYNC_BYTE2,
    LIDAR_ANS_TYPE_DEVINFO,
    LIDAR_CMD_SCAN,
    LIDAR_CMD_SYNC_BYTE,
    LIDAR_STATUS_ERROR,
    PACKAGE_PAID_BYTES,
    PH,
    AnsHeader,
    CmdPacket,
    DeviceHealth,
    DeviceInfo,
    LidarConfig,
    NodePackage,
    PackageNode,
)


def _header(ct, count, first=0x0101, last=0x0303, checksum=0x1111, head=PH):
    return struct.pack("<HBBHHH", head, ct, count, first, last, checksum)


def test_cmd_packet_wire_bytes():
    packet = CmdPacket(cmd_flag=LIDAR_CMD_SCAN)
    assert packet.to_bytes() == bytes([LIDAR_CMD_SYNC_BYTE, LIDAR_CMD_SCAN, 0, 0])


def test_cmd_packet_rejects_wide_value():
    with pytest.raises(ValueError):
        CmdPacket(cmd_flag=0x100)


def test_device_info_layout_and_round_trip():
    info = DeviceInfo(
        model=5, firmware_version=0x0102, hardware_version=3, serialnum=bytes(range(16))
    )
    data = info.to_bytes()
    assert len(data) == 20
    assert data[:4] == bytes([5, 0x02, 0x01, 3])
    assert data[4:] == bytes(range(16))
    assert DeviceInfo.from_bytes(data) == info


def test_device_info_too_short():
    with pytest.raises(ValueError):
        DeviceInfo.from_bytes(bytes(19))


def test_device_info_bad_serial_length():
    with pytest.raises(ValueError):
        DeviceInfo(serialnum=b"abc")


def test_device_health_wire_bytes():
    health = DeviceHealth(status=LIDAR_STATUS_ERROR, error_code=0x1234)
    assert health.to_bytes() == bytes([LIDAR_STATUS_ERROR, 0x34, 0x12])
    assert DeviceHealth.from_bytes(health.to_bytes()) == health


def test_device_health_too_short():
    with pytest.raises(ValueError):
        DeviceHealth.from_bytes(b"\x00")


def test_ans_header_wire_bytes():
    header = AnsHeader(size=20, type=LIDAR_ANS_TYPE_DEVINFO)
    assert header.to_bytes() == bytes(
        [LIDAR_ANS_SYNC_BYTE1, LIDAR_ANS_SYNC_BYTE2, 20, 0, 0, 0, LIDAR_ANS_TYPE_DEVINFO]
    )


@pytest.mark.parametrize("size,sub_type", [(0, 0), (0x3FFFFFFF, 3), (7, 1), (1, 2)])
def test_ans_header_round_trip(size, sub_type):
    header = AnsHeader(size=size, sub_type=sub_type, type=LIDAR_ANS_TYPE_DEVINFO)
    decoded = AnsHeader.from_bytes(header.to_bytes())
    assert decoded == header
    assert decoded.size == size
    assert decoded.sub_type == sub_type


def test_ans_header_bad_sync():
    data = bytearray(AnsHeader(size=3).to_bytes())
    data[1] = 0x00
    with pytest.raises(ValueError):
        AnsHeader.from_bytes(bytes(data))


def test_ans_header_size_out_of_range():
    with pytest.raises(ValueError):
        AnsHeader(size=1 << 30)
    with pytest.raises(ValueError):
        AnsHeader(sub_type=4)


def test_node_package_triangle_samples():
    data = _header(CT.RING_START, 2) + struct.pack("<BHBH", 7, 1000, 9, 2000)
    package = NodePackage.from_bytes(data)
    assert package.package_head == PH
    assert package.package_ct == CT.RING_START
    assert package.now_package_num == 2
    assert package.first_sample_angle == 0x0101
    assert package.last_sample_angle == 0x0303
    assert package.checksum == 0x1111
    assert package.samples == [PackageNode(7, 1000), PackageNode(9, 2000)]


def test_node_package_tof_samples():
    data = _header(CT.NORMAL, 2) + struct.pack("<HHHH", 300, 1500, 400, 2500)
    package = NodePackage.from_bytes(data, tof=True)
    assert package.samples == [PackageNode(300, 1500), PackageNode(400, 2500)]


def test_node_package_ignores_trailing_bytes():
    data = _header(CT.NORMAL, 1) + struct.pack("<BH", 1, 2) + b"\xff\xff"
    assert NodePackage.from_bytes(data).samples == [PackageNode(1, 2)]


def test_node_package_bad_header():
    with pytest.raises(ValueError):
        NodePackage.from_bytes(_header(CT.NORMAL, 0, head=0x1234))


def test_node_package_truncated():
    with pytest.raises(ValueError):
        NodePackage.from_bytes(_header(CT.NORMAL, 2) + struct.pack("<BH", 1, 2))
    with pytest.raises(ValueError):
        NodePackage.from_bytes(bytes(PACKAGE_PAID_BYTES - 1))


def test_lidar_config_rejects_long_ip():
    with pytest.raises(ValueError):
        LidarConfig(device_ip="192.168.100.100.1")


def test_lidar_config_keeps_values():
    config = LidarConfig(motor_rpm=1200, device_ip="192.168.0.11")
    assert config.motor_rpm == 1200
    assert config.device_ip == "192.168.0.11"
    assert config.fov_start == 0