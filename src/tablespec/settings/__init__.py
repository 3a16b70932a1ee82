"""Settings module providing configuration management for tablespec.

Built on Pydantic Settings. Values come from, in precedence order:

    1. Environment variables prefixed with ``TABLESPEC_``
    2. A ``.env`` file in the working directory
    3. Default values in code

Quick Start:
    >>> from tablespec.settings import get_settings
    >>> settings = get_settings()
    >>> settings.database_url
    'sqlite://'
"""

from .main import _Settings, get_settings, _reload_settings, sqlite_url
from .base import TablespecBaseSettings

__all__ = [
    "get_settings",
    "sqlite_url",
]
