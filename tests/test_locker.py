import threading
import time

import pytest

from lidarcore.locker import Event, EventStatus, Locker, LockStatus, scoped_lock


def _from_other_thread(func):
    box = {}
    worker = threading.Thread(target=lambda: box.setdefault("value", func()))
    worker.start()
    worker.join(5)
    return box["value"]


def test_status_values_from_behaviour():
    locker = Locker()
    assert locker.lock() == 0
    assert _from_other_thread(lambda: locker.lock(0)) == -2
    assert _from_other_thread(lambda: locker.lock(20)) == -1
    locker.unlock()
    assert Event(signalled=True).wait(0) == 1
    assert Event().wait(10) == 2


def test_lock_and_unlock():
    locker = Locker()
    assert locker.lock() == LockStatus.OK
    assert locker.locked
    locker.unlock()
    assert not locker.locked


def test_try_lock_on_busy_mutex_fails():
    locker = Locker()
    locker.lock()
    assert _from_other_thread(lambda: locker.lock(0)) == LockStatus.FAILED
    locker.unlock()
    assert _from_other_thread(lambda: locker.lock(0)) == LockStatus.OK


def test_timed_lock_times_out():
    locker = Locker()
    locker.lock()
    start = time.monotonic()
    assert _from_other_thread(lambda: locker.lock(50)) == LockStatus.TIMEOUT
    assert time.monotonic() - start >= 0.04
    locker.unlock()


def test_timed_lock_succeeds_when_free():
    locker = Locker()
    assert locker.lock(100) == LockStatus.OK
    locker.unlock()


def test_unlock_without_lock_raises():
    with pytest.raises(RuntimeError):
        Locker().unlock()


def test_negative_timeout_rejected():
    with pytest.raises(ValueError):
        Locker().lock(-5)


def test_scoped_lock_releases_on_error():
    locker = Locker()
    with pytest.raises(KeyError):
        with scoped_lock(locker):
            assert locker.locked
            raise KeyError("boom")
    assert not locker.locked


def test_locker_context_manager():
    locker = Locker()
    with locker:
        assert locker.locked
    assert not locker.locked


def test_event_wait_times_out_when_unsignalled():
    event = Event()
    assert event.wait(30) == EventStatus.TIMEOUT


def test_auto_reset_event_clears_after_wait():
    event = Event()
    event.set()
    assert event.wait(30) == EventStatus.OK
    assert not event.is_set
    assert event.wait(30) == EventStatus.TIMEOUT


def test_manual_reset_event_stays_signalled():
    event = Event(auto_reset=False)
    event.set()
    assert event.wait(30) == EventStatus.OK
    assert event.wait(30) == EventStatus.OK
    event.set(False)
    assert event.wait(30) == EventStatus.TIMEOUT


def test_initially_signalled_event():
    event = Event(signalled=True)
    assert event.is_set
    assert event.wait(0) == EventStatus.OK


def test_event_wakes_waiter_when_set_from_other_thread():
    event = Event()
    setter = threading.Timer(0.05, event.set)
    setter.start()
    assert event.wait(5000) == EventStatus.OK
    setter.join(5)
    assert not event.is_set