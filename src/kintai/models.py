"""Domain models for attendance punches and work sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Optional


class EventKind(str, Enum):
    START = "start"
    BREAK_START = "break_start"
    BREAK_END = "break_end"
    FINISH = "finish"


@dataclass(frozen=True, slots=True)
class Event:
    """A single attendance punch read from the log."""

    timestamp: datetime
    kind: EventKind
    content: Optional[str] = None


@dataclass(slots=True)
class ActiveSession:
    """Work in progress between a ``start`` and its ``finish``."""

    start: datetime
    breaks: list[tuple[datetime, datetime]] = field(default_factory=list)
    pending_break_start: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class Interval:
    """A contiguous worked range expressed as wall-clock times."""

    start: time
    end: time

    @classmethod
    def between(cls, start: datetime, end: datetime) -> "Interval":
        return cls(start=start.timetz(), end=end.timetz())

    @property
    def minutes(self) -> int:
        return _minute_of_day(self.end) - _minute_of_day(self.start)

    def __str__(self) -> str:
        return f"{self.start.strftime('%H:%M')}~{self.end.strftime('%H:%M')}"


@dataclass(frozen=True, slots=True)
class Session:
    """A completed work period with its breaks removed."""

    date: date
    intervals: tuple[Interval, ...]
    content: Optional[str] = None

    @property
    def date_label(self) -> str:
        return self.date.strftime("%Y/%m/%d")

    @property
    def month_key(self) -> str:
        return self.date_label[:7]

    @property
    def time_range(self) -> str:
        return ",".join(str(interval) for interval in self.intervals)

    @property
    def total_minutes(self) -> int:
        return sum(interval.minutes for interval in self.intervals)


def _minute_of_day(value: time) -> int:
    return value.hour * 60 + value.minute
