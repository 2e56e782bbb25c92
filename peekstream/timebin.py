"""Splitting a time interval into equally sized buckets."""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from .interval import Interval

_MICROSECOND = timedelta(microseconds=1)


class TimeBin:
    """Equal-width time buckets covering an interval."""

    def __init__(self, interval: Interval, bucket_size: timedelta) -> None:
        interval.validate()
        if bucket_size <= timedelta(0):
            raise ValueError("bucket size must be positive")
        self.interval = interval
        self.size = bucket_size
        self.count = math.ceil(interval.period() / bucket_size)
        self.bounds = list(self._bounds())

    def _bounds(self):
        ts = self.interval.beginning
        while ts <= self.interval.end:
            yield ts
            ts += self.size

    def locate(self, ts: datetime) -> int:
        """Return the zero-based bucket index that ts falls into."""
        diff = (self.interval.end - ts) // _MICROSECOND
        size = self.size // _MICROSECOND
        steps = abs(diff) // size
        if diff < 0:
            steps = -steps
        return self.count - steps - 1