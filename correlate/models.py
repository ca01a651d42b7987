"""
Data models for per-issue weights and the resulting time allocation.
"""
from datetime import timedelta
from typing import List


class IssueAllocation:
    """
    Accumulated weight of one issue and the share of the reporting window allotted to it.
    """

    def __init__(self, issue_key: str, weight: int, duration: timedelta):
        self.issue_key = issue_key
        self.weight = weight
        self.duration = duration

    def __eq__(self, other):
        if not isinstance(other, IssueAllocation):
            return NotImplemented
        return (self.issue_key, self.weight, self.duration) == (other.issue_key, other.weight, other.duration)

    def __repr__(self):
        return f"IssueAllocation(issue_key={self.issue_key!r}, weight={self.weight}, duration={self.duration!r})"


class AllocationGrid:
    """
    Result of one allocation run: grand total weight, the window length and the per-issue entries.
    """

    def __init__(self, total_weight: int, total_duration: timedelta, items: List[IssueAllocation]):
        self.total_weight = total_weight
        self.total_duration = total_duration
        self.items = items

    def percentage(self, item: IssueAllocation) -> float:
        """Share of total weight in percent; display only."""
        if not self.total_weight:
            return 0.0
        return item.weight / self.total_weight * 100.0

    def ranked(self) -> List[IssueAllocation]:
        """Items ordered by weight (heaviest first), ties by issue key."""
        return sorted(self.items, key=lambda i: (-i.weight, i.issue_key))

    def __str__(self):
        return f"Total weight: {self.total_weight}\nTotal duration: {self.total_duration}\nIssues: {len(self.items)}"
