"""
Unified data models for normalized users, issues and activity events.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from worktime import WorkTime


class GitAction(str, Enum):
    """
    Action kinds reported by the GitLab events API, keyed by their `action_name` label.
    Labels the API may add later resolve to UNKNOWN.
    """
    CREATED = "created"
    DELETED = "deleted"
    ACCEPTED = "accepted"
    OPENED = "opened"
    APPROVED = "approved"
    PUSHED_TO = "pushed to"
    PUSHED_NEW = "pushed new"
    COMMENTED_ON = "commented on"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


@dataclass(frozen=True)
class PushData:
    reference: str
    commit_title: Optional[str] = None


@dataclass(frozen=True)
class RawEvent:
    """
    One activity record from the source-control platform.
    """
    action: GitAction
    title: Optional[str] = None
    push_data: Optional[PushData] = None
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class ExtractedActivity:
    """
    One issue key found in a RawEvent, with the event's action and timestamp.
    """
    issue_key: str
    action: GitAction
    timestamp: Optional[datetime] = None


class GitLabUser:
    """
    Normalized GitLab user entity.
    """
    def __init__(self, user_id: int, name: str, username: str):
        self.user_id = user_id
        self.name = name
        self.username = username


class JiraIssue:
    """
    Jira issue with the time logged against it in the reporting window.
    """
    def __init__(self, key: str, summary: str, spent_time: WorkTime):
        self.key = key
        self.summary = summary
        self.spent_time = spent_time

    def __str__(self):
        return f"{self.key}: {self.summary}, spent time: {self.spent_time}"
