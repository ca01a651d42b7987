"""
Settings package: credentials resolution and report settings (bundled defaults in settings.yaml).
"""

from .config import (
    CREDENTIAL_SOURCES,
    DEFAULT_SETTINGS,
    Credentials,
    MissingCredentialsError,
    ReportSettings,
    load_env_file,
    load_settings,
    read_bundled_settings,
)

__all__ = [
    "CREDENTIAL_SOURCES",
    "DEFAULT_SETTINGS",
    "Credentials",
    "MissingCredentialsError",
    "ReportSettings",
    "load_env_file",
    "load_settings",
    "read_bundled_settings",
]
