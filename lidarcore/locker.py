"""Mutex and event primitives with millisecond timeouts."""

from __future__ import annotations

import enum
import threading
from collections.abc import Iterator
from contextlib import contextmanager

WAIT_FOREVER = 0xFFFFFFFF


class LockStatus(enum.IntEnum):
    """Outcome of :meth:`Locker.lock`."""

    OK = 0
    TIMEOUT = -1
    FAILED = -2


class EventStatus(enum.IntEnum):
    """Outcome of :meth:`Event.wait`."""

    FAILED = 0
    OK = 1
    TIMEOUT = 2


class Locker:
    """A non-recursive mutex whose lock takes a timeout in milliseconds."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def lock(self, timeout: int = WAIT_FOREVER) -> LockStatus:
        """Acquire the mutex.

        ``WAIT_FOREVER`` blocks, ``0`` tries once (``FAILED`` if busy), any
        other value waits that many milliseconds (``TIMEOUT`` if it expires).
        """
        if timeout < 0:
            raise ValueError("timeout must not be negative")
        if timeout == WAIT_FOREVER:
            return LockStatus.OK if self._lock.acquire() else LockStatus.FAILED
        if timeout == 0:
            if self._lock.acquire(blocking=False):
                return LockStatus.OK
            return LockStatus.FAILED
        if self._lock.acquire(timeout=timeout / 1000.0):
            return LockStatus.OK
        return LockStatus.TIMEOUT

    def unlock(self) -> None:
        """Release the mutex; raises RuntimeError if it is not held."""
        self._lock.release()

    @property
    def locked(self) -> bool:
        """Whether the mutex is currently held."""
        return self._lock.locked()

    def __enter__(self) -> Locker:
        self.lock()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unlock()


class Event:
    """A signalled flag that waiters can block on, optionally auto-resetting."""

    def __init__(self, auto_reset: bool = True, signalled: bool = False) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._signalled = signalled
        self._auto_reset = auto_reset

    def set(self, signal: bool = True) -> None:
        """Signal the event, or reset it when ``signal`` is False."""
        with self._cond:
            if signal:
                if not self._signalled:
                    self._signalled = True
                    self._cond.notify_all()
            else:
                self._signalled = False

    def wait(self, timeout: int = WAIT_FOREVER) -> EventStatus:
        """Block until signalled or ``timeout`` milliseconds pass."""
        if timeout < 0:
            raise ValueError("timeout must not be negative")
        with self._cond:
            if timeout == WAIT_FOREVER:
                self._cond.wait_for(lambda: self._signalled)
            elif not self._cond.wait_for(
                lambda: self._signalled, timeout / 1000.0
            ):
                return EventStatus.TIMEOUT
            if self._auto_reset:
                self._signalled = False
            return EventStatus.OK

    @property
    def is_set(self) -> bool:
        """Whether the event is currently signalled."""
        with self._cond:
            return self._signalled


@contextmanager
def scoped_lock(locker: Locker) -> Iterator[Locker]:
    """Hold ``locker`` for the duration of the ``with`` block."""
    locker.lock()
    try:
        yield locker
    finally:
        locker.unlock()