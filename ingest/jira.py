"""
Jira ingestion client used by the CLI.
Searches the issues the current user logged work on inside the reporting window.
"""

import base64
import logging
from typing import List

from models import ReportWindow
from normalize.models import JiraIssue
from normalize.util import normalize_jira_issue
from worktime import DEFAULT_WORKDAY_HOURS
from .errors import MalformedResponseError
from .http import post_json

logger = logging.getLogger(__name__)

SERVICE = 'Jira'


def basic_auth_header(login: str, password: str) -> str:
    token = base64.b64encode(f"{login}:{password}".encode('utf-8')).decode('ascii')
    return f"Basic {token}"


class JiraClient:
    """Minimal Jira REST v2 client using HTTP basic authentication."""

    def __init__(self, login: str, password: str, base_url: str = "https://jira.esphere.ru", timeout: float = 30.0, max_results: int = 50):
        self.login = login
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_results = max_results
        self.headers = {
            "Authorization": basic_auth_header(login, password),
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    @staticmethod
    def worklog_jql(window: ReportWindow) -> str:
        return (
            f'worklogAuthor = currentUser() AND '
            f'worklogDate > {window.from_date:%Y-%m-%d} AND worklogDate < {window.to_date:%Y-%m-%d}'
        )

    def search_issues(self, window: ReportWindow, workday_hours: int = DEFAULT_WORKDAY_HOURS) -> List[JiraIssue]:
        """Return issues with worklogs by the current user in the window (first page only)."""
        url = f"{self.base_url}/rest/api/2/search"
        payload = {
            "jql": self.worklog_jql(window),
            "startAt": 0,
            "maxResults": self.max_results,
            "fields": ["summary", "timespent"],
        }
        data = post_json(SERVICE, url, self.headers, payload, timeout=self.timeout)
        if not isinstance(data, dict) or not isinstance(data.get('issues'), list):
            raise MalformedResponseError(f"{SERVICE} search response for {url} has no issues list")
        issues = [normalize_jira_issue(raw, workday_hours) for raw in data['issues']]
        logger.info("Found %d Jira issues with worklogs", len(issues))
        return issues
