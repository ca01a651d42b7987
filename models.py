"""
Reporting window shared by the GitLab and Jira collectors.
"""
from datetime import date, timedelta


class ReportWindow:
    """
    Half-open date range [from_date, to_date) the report covers.
    """

    def __init__(self, from_date: date, to_date: date):
        if to_date < from_date:
            raise ValueError(f"Window end {to_date} is before its start {from_date}")
        self.from_date = from_date
        self.to_date = to_date

    @classmethod
    def last_days(cls, days: int, today: date = None) -> "ReportWindow":
        """The last `days` days up to and including today."""
        today = today or date.today()
        return cls(today - timedelta(days=days), today + timedelta(days=1))

    @property
    def duration(self) -> timedelta:
        return self.to_date - self.from_date

    def __str__(self):
        return f"{self.from_date:%Y-%m-%d} to {self.to_date:%Y-%m-%d}"
