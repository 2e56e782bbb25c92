from datetime import datetime, timedelta

import pytest

from peekstream.interval import Interval, InvalidIntervalError
from peekstream.timebin import TimeBin

START = datetime(2019, 7, 19, 6, 0, 0)


def test_even_split_bounds():
    size = timedelta(minutes=10)
    tb = TimeBin(Interval(START, START + timedelta(hours=1)), size)
    assert tb.bounds[0] == START
    assert tb.bounds[-1] == tb.interval.end
    assert len(tb.bounds) == tb.count + 1
    assert all(b - a == size for a, b in zip(tb.bounds, tb.bounds[1:]))


def test_uneven_split_count_covers_period():
    size = timedelta(minutes=10)
    interval = Interval(START, START + timedelta(minutes=65))
    tb = TimeBin(interval, size)
    assert tb.count * size >= interval.period()
    assert (tb.count - 1) * size < interval.period()
    assert tb.bounds[-1] <= interval.end < tb.bounds[-1] + size


def test_locate_each_bucket():
    size = timedelta(minutes=10)
    tb = TimeBin(Interval(START, START + timedelta(hours=1)), size)
    for k in range(tb.count):
        assert tb.locate(START + k * size + timedelta(seconds=1)) == k
    assert tb.locate(tb.interval.end) == tb.count - 1


def test_invalid_interval_raises():
    with pytest.raises(InvalidIntervalError):
        TimeBin(Interval(START, START - timedelta(hours=1)), timedelta(minutes=1))


def test_non_positive_bucket_raises():
    with pytest.raises(ValueError):
        TimeBin(Interval(START, START + timedelta(hours=1)), timedelta(0))