"""
Thin JSON-over-HTTP helpers shared by the GitLab and Jira clients.
Every transport or decoding failure is mapped onto an ingest.errors error kind.
"""
import logging
from typing import Any, Dict, Optional

import requests

from .errors import BadStatusError, MalformedResponseError, RequestFailedError

logger = logging.getLogger(__name__)


def _decode(service: str, url: str, resp) -> Any:
    if resp.status_code != 200:
        raise BadStatusError(service, url, resp.status_code)
    try:
        return resp.json()
    except ValueError as ex:
        raise MalformedResponseError(f"{service} returned a non-JSON body for {url}") from ex


def get_json(service: str, url: str, headers: Dict[str, str], params: Optional[Dict[str, Any]] = None, timeout: float = 30.0) -> Any:
    logger.debug("GET %s params=%s", url, params)
    try:
        resp = requests.get(url, headers=headers, params=params or {}, timeout=timeout)
    except requests.RequestException as ex:
        raise RequestFailedError(service, url, ex) from ex
    return _decode(service, url, resp)


def post_json(service: str, url: str, headers: Dict[str, str], payload: Dict[str, Any], timeout: float = 30.0) -> Any:
    logger.debug("POST %s", url)
    try:
        resp = requests.post(url, headers=headers, json=payload, timeout=timeout)
    except requests.RequestException as ex:
        raise RequestFailedError(service, url, ex) from ex
    return _decode(service, url, resp)
