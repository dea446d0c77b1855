# lidarcore

Building blocks for talking to 2D triangulation and time-of-flight LiDAR
scanners. It has no dependencies outside the standard library.

## What is in it

- `lidarcore.datatype`: the `Result` codes (`OK`, `TIMEOUT`, `FAIL`) with
  `is_ok`, `is_timeout` and `is_fail`, the byte shift helper `dsl`, and
  `last_name`, which returns the last dot-separated part of a name.
- `lidarcore.timer`: `delay(ms)`, a 32-bit monotonic millisecond counter
  `get_ms()` and the wall-clock time in nanoseconds `get_time()`.
- `lidarcore.locker`: `Locker`, a mutex whose `lock(timeout)` takes
  milliseconds and returns a `LockStatus`; `Event`, an optionally
  auto-resetting event whose `wait(timeout)` returns an `EventStatus`; and the
  context manager `scoped_lock`.
- `lidarcore.thread`: `Thread` and `create_thread`, a worker wrapper with
  cooperative cancellation: `terminate()` and `join()` set `cancelled`, which
  the worker is expected to check.
- `lidarcore.definitions`: the `DeviceType`, `LidarType`, `LidarProperty` and
  `DriverError` enumerations and the data classes `LaserPoint`,
  `LaserConfig`, `LaserScan` (with `clear()` and `point_stamp(index)`),
  `LaserDebug`, `LidarVersion` and `LidarPort`.
- `lidarcore.protocol`: command and status constants and the binary wire
  structures `CmdPacket`, `AnsHeader`, `DeviceInfo`, `DeviceHealth` and
  `NodePackage`, plus `NodeInfo`, `PackageNode`, `LidarConfig` and the `CT`
  and `ProtocolVer` enumerations. Decoders raise `ValueError` on truncated
  data, bad sync bytes or a bad package header.
- `lidarcore.channel`: the abstract `ChannelDevice` transport, usable as a
  context manager that opens on entry and closes on exit.
- `lidarcore.driver`: the abstract `DriverInterface`, the `LidarModel` and
  `SampleRateCode` enumerations and `describe_driver_error`.
- `lidarcore.helpers`: model capability queries (`has_sample_rate`,
  `has_zero_angle`, `is_support_scan_frequency`, ...), sample-rate
  conversions, debug-byte collection (`parse_package_node`,
  `parse_laser_debug_info`), `format_version_info` / `print_version_info` and
  `split`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

Look up what a model supports:

```python
from lidarcore.driver import LidarModel
from lidarcore.helpers import (
    convert_user_to_lidar_sample,
    has_sample_rate,
    lidar_model_to_string,
)

model = LidarModel.G4
print(lidar_model_to_string(model))               # G4
print(has_sample_rate(model))                     # True
print(convert_user_to_lidar_sample(model, 9, 2))  # SampleRateCode.RATE_9K
```

Build a command packet and decode an answer header:

```python
from lidarcore.protocol import AnsHeader, CmdPacket

packet = CmdPacket(cmd_flag=0x90).to_bytes()      # b"\xa5\x90\x00\x00"
header = AnsHeader.from_bytes(b"\xa5\x5a\x14\x00\x00\x00\x04")
print(header.size, header.type)                   # 20 4
```

Wait for an event with a timeout:

```python
from lidarcore.locker import Event, EventStatus

event = Event()
event.set()
assert event.wait(100) is EventStatus.OK
assert event.wait(10) is EventStatus.TIMEOUT      # auto-reset after the first wait
```

Split an angle list from a configuration string:

```python
from lidarcore.helpers import split

split("-90,-80,30,40", ",")   # [-90.0, -80.0, 30.0, 40.0]
```

## What it does not do

`ChannelDevice` and `DriverInterface` are abstract: the package contains no
serial-port or network implementation and no concrete driver, so it cannot
open a device or read scans by itself. It also does not install signal
handlers for stopping on Ctrl-C; use the standard `signal` module for that.
There is no command-line program.