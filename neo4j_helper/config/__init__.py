# neo4j_helper/config/__init__.py
"""Expose neo4j_helper configuration as module-level constants.

The primary API is the [`settings`](settings.py) singleton. The constants below
mirror its fields for callers that prefer `config.NEO4J_URI` style access.
[`reload()`](__init__.py) re-reads `.env` and refreshes both.
"""

from typing import Any

from .settings import HelperSettings as HelperSettings
from .settings import settings as settings

NEO4J_URI = settings.NEO4J_URI
NEO4J_USER = settings.NEO4J_USER
NEO4J_PASSWORD = settings.NEO4J_PASSWORD
NEO4J_DATABASE = settings.NEO4J_DATABASE
APP_ENV = settings.APP_ENV
TIMESTAMP_FIELDS = settings.TIMESTAMP_FIELDS
LOG_LEVEL_STR = settings.LOG_LEVEL_STR
LOG_FORMAT = settings.LOG_FORMAT
LOG_DATE_FORMAT = settings.LOG_DATE_FORMAT
LOG_FILE = settings.LOG_FILE


def get(key: str) -> Any:
    """Return the value of a configuration attribute from `settings`.

    Raises:
        AttributeError: If `key` is not a valid attribute on `settings`.
    """
    return getattr(settings, key)


def set(key: str, value: Any) -> None:
    """Set a configuration attribute on `settings` at runtime.

    This mutates the in-memory settings instance and does not persist to `.env`.
    """
    setattr(settings, key, value)


def reload() -> bool:
    """Reload configuration and refresh this package's exported constants."""
    from .loader import reload_settings

    return reload_settings()
