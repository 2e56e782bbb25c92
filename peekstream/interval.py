"""Time intervals and range checks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


class InvalidIntervalError(ValueError):
    """An interval ends before it begins."""

    def __init__(self, interval: Interval, src: str = "") -> None:
        super().__init__(interval, src)
        self.interval = interval
        self.src = src

    def __str__(self) -> str:
        return (
            f"Invalid interval {self.src}: Beginning {self.interval.beginning}, "
            f"End {self.interval.end}"
        )


@dataclass(frozen=True)
class Interval:
    """A span of time between two instants."""

    beginning: datetime
    end: datetime

    def validate(self) -> Interval:
        """Return self, or raise InvalidIntervalError if end precedes beginning."""
        if self.end < self.beginning:
            raise InvalidIntervalError(self)
        return self

    def period(self) -> timedelta:
        return self.end - self.beginning


def interval_from_strings(start: str, stop: str, fmt: str) -> Interval:
    """Parse both ends with a strptime format and validate the result."""
    interval = Interval(datetime.strptime(start, fmt), datetime.strptime(stop, fmt))
    return interval.validate()


def interval_contains(interval: Interval, other: Interval) -> bool:
    """True if other lies strictly inside interval."""
    return (interval.beginning < other.beginning < interval.end) and (
        interval.beginning < other.end < interval.end
    )


def interval_in_range(interval: Interval, rng: Interval) -> bool:
    """True if interval overlaps rng in any way."""
    return (
        interval_fully_in_range(interval, rng)
        or interval_head_in_range(interval, rng)
        or interval_tail_in_range(interval, rng)
        or interval_contains(interval, rng)
    )


def interval_fully_in_range(interval: Interval, rng: Interval) -> bool:
    return time_fully_in_range(interval.beginning, rng) and time_fully_in_range(
        interval.end, rng
    )


def interval_tail_in_range(interval: Interval, rng: Interval) -> bool:
    return (
        interval.end > rng.beginning
        and interval.beginning < rng.end
        and interval.beginning < rng.beginning
    )


def interval_head_in_range(interval: Interval, rng: Interval) -> bool:
    return (
        interval.beginning < rng.end
        and interval.beginning > rng.beginning
        and interval.end > rng.end
    )


def time_fully_in_range(ts: datetime, rng: Interval) -> bool:
    """True if ts lies strictly between the ends of rng."""
    return rng.beginning < ts < rng.end