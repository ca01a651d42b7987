"""
Runtime configuration: tracker credentials and report settings.
Credentials come from CLI flags or environment variables (a local .env file is honoured);
report settings come from the bundled settings.yaml (or a file given explicitly) with built-in defaults.
"""
import os
from importlib import resources
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

# filename used for the YAML settings file
SETTINGS_FILENAME = 'settings.yaml'

DEFAULT_SETTINGS: Dict[str, Any] = {
    'gitlab_url': 'http://git.esphere.local',
    'jira_url': 'https://jira.esphere.ru',
    'workday_hours': 8,
    'window_days': 7,
    'jira_max_results': 50,
    'timeout': 30.0,
}

# option name -> (CLI flag, environment variable)
CREDENTIAL_SOURCES = {
    'gitlab_token': ('--gitlab_token', 'GITLAB_TOKEN'),
    'jira_login': ('--jira_login', 'JIRA_LOGIN'),
    'jira_password': ('--jira_password', 'JIRA_PASSWORD'),
}


class MissingCredentialsError(Exception):
    def __init__(self, missing):
        self.missing = list(missing)
        hints = [f"{name} (CLI flag {CREDENTIAL_SOURCES[name][0]} or env {CREDENTIAL_SOURCES[name][1]})" for name in self.missing]
        super().__init__('Missing required credentials: ' + ', '.join(hints))


class Credentials:
    """
    Tracker credentials, resolved once at startup and handed to the client constructors.
    """

    def __init__(self, gitlab_token: str, jira_login: str, jira_password: str):
        self.gitlab_token = gitlab_token
        self.jira_login = jira_login
        self.jira_password = jira_password

    @classmethod
    def resolve(cls, overrides: Optional[Dict[str, Optional[str]]] = None, environ=None, required=CREDENTIAL_SOURCES.keys()) -> "Credentials":
        """
        Resolve credentials; explicit overrides (CLI flags) win over environment variables.

        Parameters:
            overrides: option name -> value, empty values are ignored.
            environ: mapping to read variables from (defaults to os.environ).
            required: option names that must resolve to a non-empty value.

        Raises:
            MissingCredentialsError: listing every required option that is missing.
        """
        overrides = overrides or {}
        environ = os.environ if environ is None else environ
        values = {}
        for name, (_flag, env_var) in CREDENTIAL_SOURCES.items():
            values[name] = overrides.get(name) or environ.get(env_var) or ''
        missing = [name for name in CREDENTIAL_SOURCES if name in required and not values[name]]
        if missing:
            raise MissingCredentialsError(missing)
        return cls(**values)


class ReportSettings:
    """
    Non-secret settings: tracker base URLs, workday length, window size and HTTP knobs.
    """

    def __init__(self, gitlab_url: str, jira_url: str, workday_hours: int, window_days: int, jira_max_results: int, timeout: float):
        if not 0 < workday_hours <= 24:
            raise ValueError(f"workday_hours must be within 1..24, got {workday_hours}")
        if window_days < 1:
            raise ValueError(f"window_days must be positive, got {window_days}")
        self.gitlab_url = gitlab_url.rstrip('/')
        self.jira_url = jira_url.rstrip('/')
        self.workday_hours = workday_hours
        self.window_days = window_days
        self.jira_max_results = jira_max_results
        self.timeout = timeout

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "ReportSettings":
        merged = DEFAULT_SETTINGS.copy()
        merged.update({k: v for k, v in (data or {}).items() if k in DEFAULT_SETTINGS and v is not None})
        try:
            return cls(
                gitlab_url=str(merged['gitlab_url']),
                jira_url=str(merged['jira_url']),
                workday_hours=int(merged['workday_hours']),
                window_days=int(merged['window_days']),
                jira_max_results=int(merged['jira_max_results']),
                timeout=float(merged['timeout']),
            )
        except (TypeError, ValueError) as ex:
            raise ValueError(f"Invalid report settings: {ex}") from ex


def _parse_settings_yaml(text: str, source: str) -> Dict[str, Any]:
    try:
        doc = yaml.safe_load(text) or {}
    except yaml.YAMLError as ex:
        raise ValueError(f"Failed to parse settings file {source}: {ex}") from ex
    if not isinstance(doc, dict):
        raise ValueError(f"Settings file {source} must contain a mapping")
    return doc


def read_bundled_settings() -> Dict[str, Any]:
    """Settings shipped next to this module as package data; empty when the file is absent."""
    resource = resources.files(__package__).joinpath(SETTINGS_FILENAME)
    if not resource.is_file():
        return {}
    return _parse_settings_yaml(resource.read_text(encoding='utf-8'), f"<bundled {SETTINGS_FILENAME}>")


def load_settings(path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> ReportSettings:
    """
    Load report settings from an explicit YAML file, or from the bundled one when no path is given.
    An explicit path must exist. Overrides (e.g. from CLI flags) are applied last; None values are skipped.

    Raises:
        FileNotFoundError: when `path` is given and does not exist.
        ValueError: on unparsable YAML or invalid values.
    """
    if path:
        if not os.path.isfile(path):
            raise FileNotFoundError(f"Settings file not found: {path}")
        with open(path, 'r', encoding='utf-8') as f:
            data = _parse_settings_yaml(f.read(), path)
    else:
        data = read_bundled_settings()
    data.update({k: v for k, v in (overrides or {}).items() if v is not None})
    return ReportSettings.from_mapping(data)


def load_env_file(path: Optional[str] = None) -> bool:
    """Load variables from a .env file (current directory by default) without overriding the environment."""
    return load_dotenv(path or os.path.join(os.getcwd(), '.env'), override=False)
