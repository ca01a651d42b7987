"""
Work-time breakdown of wall-clock durations.
Every calendar day (24 hours) is compressed onto one workday of a configurable length
before the duration is split into workdays, hours and minutes.
"""
from datetime import timedelta

DEFAULT_WORKDAY_HOURS = 8

_HOUR = timedelta(hours=1)
_MINUTE = timedelta(minutes=1)


class WorkTime:
    """
    A duration expressed as (days, hours, minutes) where a day is `workday_hours` long.
    Seconds are truncated.
    """

    def __init__(self, days: int, hours: int, minutes: int, workday_hours: int = DEFAULT_WORKDAY_HOURS):
        self.days = days
        self.hours = hours
        self.minutes = minutes
        self.workday_hours = workday_hours

    @classmethod
    def from_duration(cls, duration: timedelta, workday_hours: int = DEFAULT_WORKDAY_HOURS) -> "WorkTime":
        """Decompose a non-negative duration against a workday of `workday_hours` hours."""
        if not 0 < workday_hours <= 24:
            raise ValueError(f"workday_hours must be within 1..24, got {workday_hours}")
        calendar_days = duration.days
        rest = duration - timedelta(hours=24 - workday_hours) * calendar_days
        days = (rest // _HOUR) // workday_hours
        rest -= timedelta(hours=days * workday_hours)
        hours = rest // _HOUR
        rest -= timedelta(hours=hours)
        minutes = rest // _MINUTE
        return cls(days, hours, minutes, workday_hours)

    @classmethod
    def from_seconds(cls, seconds: int, workday_hours: int = DEFAULT_WORKDAY_HOURS) -> "WorkTime":
        return cls.from_duration(timedelta(seconds=seconds), workday_hours)

    def total_hours(self) -> int:
        return self.workday_hours * self.days + self.hours

    def __eq__(self, other):
        if not isinstance(other, WorkTime):
            return NotImplemented
        return (self.days, self.hours, self.minutes, self.workday_hours) == (other.days, other.hours, other.minutes, other.workday_hours)

    def __repr__(self):
        return f"WorkTime(days={self.days}, hours={self.hours}, minutes={self.minutes}, workday_hours={self.workday_hours})"

    def __str__(self):
        return f"{self.total_hours()} hours {self.minutes} minutes"
