"""
GitLab ingestion client used by the CLI.
Fetches the current user and their activity events, and turns the events into a weight grid.
"""

import logging
from typing import Any, Dict, List

from correlate.linker import link_events_to_issues
from correlate.models import AllocationGrid
from models import ReportWindow
from normalize.models import GitLabUser, RawEvent
from normalize.util import normalize_user, parse_event
from scoring.allocation import build_weight_grid
from .errors import MalformedResponseError
from .http import get_json

logger = logging.getLogger(__name__)

SERVICE = 'GitLab'


class GitLabClient:
    """Minimal GitLab v4 API client authenticated with a private token."""

    def __init__(self, token: str, base_url: str = "http://git.esphere.local", timeout: float = 30.0):
        self.token = token
        self.base_url = base_url.rstrip('/')
        self.api_url = f"{self.base_url}/api/v4"
        self.timeout = timeout
        self.headers = {
            "PRIVATE-TOKEN": self.token,
            "Accept": "application/json",
        }

    def get_user(self) -> GitLabUser:
        """Return the user the token belongs to."""
        data = get_json(SERVICE, f"{self.api_url}/user", self.headers, timeout=self.timeout)
        return normalize_user(data)

    def get_user_events(self, user_id: int, window: ReportWindow) -> List[RawEvent]:
        """Return the user's events inside the window (GitLab's `after`/`before` bounds are exclusive dates)."""
        url = f"{self.api_url}/users/{user_id}/events"
        params = {
            "after": window.from_date.strftime("%Y-%m-%d"),
            "before": window.to_date.strftime("%Y-%m-%d"),
        }
        data = get_json(SERVICE, url, self.headers, params=params, timeout=self.timeout)
        if not isinstance(data, list):
            raise MalformedResponseError(f"{SERVICE} events response for {url} is not a list")
        events = [parse_event(item) for item in data]
        logger.debug("Fetched %d GitLab events for user %s", len(events), user_id)
        return events

    def get_weight_grid(self, window: ReportWindow, user_id: int) -> AllocationGrid:
        """Allocate the window's duration across the issues the user's events mention."""
        events = self.get_user_events(user_id, window)
        activities = link_events_to_issues(events)
        logger.info("Found %d issue activities in %d GitLab events", len(activities), len(events))
        return build_weight_grid(window.duration, activities)


def raw_events_from_payload(payload: List[Dict[str, Any]]) -> List[RawEvent]:
    """Parse a saved events API payload (a JSON array) into RawEvent objects."""
    if not isinstance(payload, list):
        raise MalformedResponseError("events payload must be a JSON array")
    return [parse_event(item) for item in payload]
