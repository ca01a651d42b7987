"""
Error kinds raised at the HTTP/deserialization boundary of the ingestion clients.
"""


class IngestError(Exception):
    """Base class for failures while fetching or decoding tracker data."""


class RequestFailedError(IngestError):
    """The request never produced an HTTP response (connection, DNS, timeout...)."""

    def __init__(self, service: str, url: str, cause: Exception):
        super().__init__(f"{service} request to {url} failed: {cause}")
        self.service = service
        self.url = url
        self.cause = cause


class BadStatusError(IngestError):
    def __init__(self, service: str, url: str, status_code: int):
        super().__init__(f"{service} returned bad status code {status_code} for {url}")
        self.service = service
        self.url = url
        self.status_code = status_code


class MalformedResponseError(IngestError):
    """The response body is not JSON or lacks fields the models require."""
