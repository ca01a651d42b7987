"""
Weight aggregation and proportional duration allocation.
Converts extracted activities into per-issue weights and splits the reporting window
between issues by weight share.
"""
from datetime import timedelta
from typing import Dict, Iterable, List, Tuple

from correlate.models import AllocationGrid, IssueAllocation
from normalize.models import ExtractedActivity
from .weights import activity_weight


def allocate_duration(total_duration: timedelta, weight: int, total_weight: int) -> timedelta:
    """
    Share of `total_duration` for `weight` out of `total_weight`.

    Multiplies before dividing on timedelta's integer microseconds, so the only loss is
    the final floor division (less than one microsecond per issue).
    """
    return total_duration * weight // total_weight


def accumulate_weights(activities: Iterable[ExtractedActivity]) -> Tuple[int, Dict[str, int]]:
    """Return (total_weight, {issue_key: weight}); keys keep first-seen order."""
    total_weight = 0
    per_issue: Dict[str, int] = {}
    for activity in activities:
        weight = activity_weight(activity)
        total_weight += weight
        per_issue[activity.issue_key] = per_issue.get(activity.issue_key, 0) + weight
    return total_weight, per_issue


def build_weight_grid(total_duration: timedelta, activities: Iterable[ExtractedActivity]) -> AllocationGrid:
    """
    Aggregate activity weights per issue and allocate `total_duration` proportionally.
    With no activities the grid is empty and has zero total weight.
    """
    total_weight, per_issue = accumulate_weights(activities)
    if total_weight == 0:
        return AllocationGrid(total_weight=0, total_duration=total_duration, items=[])

    items: List[IssueAllocation] = [
        IssueAllocation(issue_key=key, weight=weight, duration=allocate_duration(total_duration, weight, total_weight))
        for key, weight in per_issue.items()
    ]
    return AllocationGrid(total_weight=total_weight, total_duration=total_duration, items=items)
