"""
Linker heuristics to associate GitLab activity with Jira issues.
An event's title, push ref and commit title are scanned for issue keys; every key found
becomes one ExtractedActivity carrying the event's action and timestamp.
"""
import re
from typing import Iterable, List

from normalize.models import RawEvent, ExtractedActivity

ISSUE_KEY_PATTERN = re.compile(r"((?:SBINV|ITS)-\d+)")


# helper: extract textual fields from an event
def collect_text_fields(ev: RawEvent) -> List[str]:
    text_fields: List[str] = []
    if ev.title is not None:
        text_fields.append(ev.title)
    if ev.push_data is not None:
        text_fields.append(ev.push_data.reference)
        if ev.push_data.commit_title is not None:
            text_fields.append(ev.push_data.commit_title)
    return text_fields


def searchable_text(ev: RawEvent) -> str:
    # fields are joined without a separator
    return "".join(collect_text_fields(ev))


def find_issue_keys_in_text(text: str) -> List[str]:
    """Return every non-overlapping issue key in `text`, in order, duplicates included."""
    if not text:
        return []
    return [m.group(1) for m in ISSUE_KEY_PATTERN.finditer(text)]


def extract_activities(ev: RawEvent) -> List[ExtractedActivity]:
    """
    Extract the issue activities referenced by a single event.

    Parameters:
        ev: the source event.

    Returns:
        one ExtractedActivity per key occurrence, or an empty list when nothing matches.
    """
    return [ExtractedActivity(issue_key=key, action=ev.action, timestamp=ev.timestamp)
            for key in find_issue_keys_in_text(searchable_text(ev))]


def link_events_to_issues(events: Iterable[RawEvent]) -> List[ExtractedActivity]:
    """Flatten the activities of all events, preserving event order."""
    activities: List[ExtractedActivity] = []
    for ev in events:
        activities.extend(extract_activities(ev))
    return activities
