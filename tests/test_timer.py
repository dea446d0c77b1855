import time

import pytest

from lidarcore.timer import delay, get_ms, get_time


def test_get_ms_is_non_decreasing():
    first = get_ms()
    second = get_ms()
    assert 0 <= first <= 0xFFFFFFFF
    assert second >= first


def test_delay_waits_at_least_requested_time():
    before = get_ms()
    delay(50)
    assert get_ms() - before >= 45


def test_delay_zero_returns_quickly():
    before = get_ms()
    delay(0)
    assert get_ms() - before < 500


def test_delay_advances_ms_counter():
    before = get_ms()
    delay(30)
    after = get_ms()
    assert after - before >= 25


def test_delay_rejects_negative():
    with pytest.raises(ValueError):
        delay(-1)


def test_get_time_matches_wall_clock():
    before = time.time_ns()
    value = get_time()
    after = time.time_ns()
    assert before <= value <= after