"""
Normalization utility helpers.
Small helpers to turn raw GitLab/Jira payloads into normalize.models entities.
"""
from datetime import datetime
from typing import Dict, Any, Optional

from ingest.errors import MalformedResponseError
from normalize.models import GitAction, PushData, RawEvent, GitLabUser, JiraIssue
from worktime import WorkTime, DEFAULT_WORKDAY_HOURS


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as returned by GitLab/Jira; `Z` and `+0000` offsets are accepted."""
    if not value:
        return None
    if not isinstance(value, str):
        raise MalformedResponseError(f"Timestamp is not a string: {value!r}")
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    elif len(text) > 5 and text[-5] in '+-' and text[-4:].isdigit() and ':' not in text[-5:]:
        # Jira style offset: 2025-01-01T10:00:00.000+0300
        text = text[:-2] + ':' + text[-2:]
    try:
        return datetime.fromisoformat(text)
    except ValueError as ex:
        raise MalformedResponseError(f"Invalid timestamp: {value!r}") from ex


def _parse_push_data(raw: Any) -> Optional[PushData]:
    if not raw:
        return None
    if not isinstance(raw, dict) or not isinstance(raw.get('ref'), str):
        raise MalformedResponseError(f"push_data without a ref: {raw!r}")
    commit_title = raw.get('commit_title')
    return PushData(reference=raw['ref'], commit_title=commit_title if isinstance(commit_title, str) else None)


def parse_event(raw: Dict[str, Any]) -> RawEvent:
    """Create a RawEvent from a GitLab events API item.
    Only `action_name` is required; unrecognized action labels become GitAction.UNKNOWN.
    """
    if not isinstance(raw, dict) or not isinstance(raw.get('action_name'), str):
        raise MalformedResponseError(f"GitLab event without action_name: {raw!r}")
    title = raw.get('target_title')
    return RawEvent(
        action=GitAction(raw['action_name']),
        title=title if isinstance(title, str) else None,
        push_data=_parse_push_data(raw.get('push_data')),
        timestamp=parse_timestamp(raw.get('created_at')),
    )


def _to_int(value: Any, what: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as ex:
        raise MalformedResponseError(f"Invalid {what}: {value!r}") from ex


def normalize_user(raw: Dict[str, Any]) -> GitLabUser:
    """Create a normalized GitLabUser from the `/user` endpoint payload."""
    if not isinstance(raw, dict) or raw.get('id') is None:
        raise MalformedResponseError(f"GitLab user without id: {raw!r}")
    return GitLabUser(user_id=_to_int(raw['id'], 'GitLab user id'), name=raw.get('name') or '', username=raw.get('username') or '')


def normalize_jira_issue(raw: Dict[str, Any], workday_hours: int = DEFAULT_WORKDAY_HOURS) -> JiraIssue:
    """Create a JiraIssue from a search result item.
    A missing `timespent` (nothing logged yet) counts as zero.
    """
    if not isinstance(raw, dict) or not raw.get('key'):
        raise MalformedResponseError(f"Jira issue without key: {raw!r}")
    fields = raw.get('fields') or {}
    if not isinstance(fields, dict):
        raise MalformedResponseError(f"Jira issue {raw['key']} has non-object fields: {fields!r}")
    timespent = fields.get('timespent') or 0
    return JiraIssue(
        key=raw['key'],
        summary=fields.get('summary') or '',
        spent_time=WorkTime.from_seconds(_to_int(timespent, f"timespent for {raw['key']}"), workday_hours),
    )
