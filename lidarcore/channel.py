"""Abstract byte channel over a serial port or a network socket."""

from __future__ import annotations

import abc

WAIT_FOREVER = 0xFFFFFFFF


class ChannelDevice(abc.ABC):
    """A serial port or network connection the driver talks through.

    Used as a context manager it opens on entry (raising ConnectionError on
    failure) and closes on exit.
    """

    bound_address: tuple[str, int] | None = None
    dtr_level: bool | None = None

    def bind_port(self, address: str, port: int) -> bool:
        """Record the local address and port to bind to; True on success."""
        self.bound_address = (address, port)
        return True

    @abc.abstractmethod
    def open(self) -> bool:
        """Open the device; True on success."""

    @abc.abstractmethod
    def is_open(self) -> bool:
        """Whether the device is open."""

    @abc.abstractmethod
    def close_port(self) -> None:
        """Close the device."""

    @abc.abstractmethod
    def available(self) -> int:
        """Number of bytes waiting in the input buffer."""

    @abc.abstractmethod
    def flush(self) -> None:
        """Flush the input and output buffers."""

    @abc.abstractmethod
    def wait_for_data(self, data_count: int, timeout: int = WAIT_FOREVER) -> int:
        """Block until at least ``data_count`` bytes are buffered.

        ``timeout`` is in milliseconds. Returns the number of bytes buffered;
        raises TimeoutError if the timeout passes first.
        """

    def read_size(self, size: int = 1) -> bytes:
        """Read up to ``size`` bytes and return them."""
        return self.read_data(size)

    @abc.abstractmethod
    def write_data(self, data: bytes) -> int:
        """Write ``data`` and return the number of bytes actually written."""

    @abc.abstractmethod
    def read_data(self, size: int) -> bytes:
        """Read up to ``size`` bytes; fewer are returned if a timeout occurs."""

    def set_dtr(self, level: bool = True) -> bool:
        """Record the DTR handshaking line level; True on success."""
        self.dtr_level = bool(level)
        return True

    def get_byte_time(self) -> int:
        """Transfer time of a single byte."""
        return 0

    def describe_error(self) -> str:
        """Human-readable description of the last error."""
        return ""

    def __enter__(self) -> ChannelDevice:
        if not self.is_open() and not self.open():
            raise ConnectionError(self.describe_error() or "failed to open channel")
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close_port()