"""
Ingest package: HTTP clients for GitLab and Jira and the errors they raise.
"""

from .errors import IngestError, RequestFailedError, BadStatusError, MalformedResponseError

__all__ = ["IngestError", "RequestFailedError", "BadStatusError", "MalformedResponseError"]
