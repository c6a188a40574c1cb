"""Test the timing utilities."""

import pytest

from doublecount.utils.stopwatch import StopwatchManager, Time


def test_time_arithmetic():
    """Times add and subtract component-wise."""
    total = Time(1.0, 2.0) + Time(0.5, 0.5)
    assert total == Time(1.5, 2.5)
    assert Time(1.0, 2.0) - Time(0.5, 0.5) == Time(0.5, 1.5)
    assert not Time().set


def test_stopwatch_manager():
    """Start/stop cycles accumulate into the total."""
    watch = StopwatchManager()
    watch.initialize(["read", "check"])

    for _ in range(2):
        watch.start("read")
        assert watch.running
        watch.stop("read")

    assert not watch.running
    assert watch.time("read").wall >= 0.0
    assert watch.time_sum("read").wall >= watch.time("read").wall

    with pytest.raises(ValueError):
        watch.time("check")

    with pytest.raises(ValueError):
        watch.stop("check")

    with pytest.raises(KeyError):
        watch.start("write")

    watch.start("check")
    with pytest.raises(ValueError):
        watch.start("check")

    watch.reset()
    assert not watch.running
    assert list(watch.keys()) == ["read", "check"]
