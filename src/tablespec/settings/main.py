from typing import Optional

from pydantic import Field, field_validator

from .base import TablespecBaseSettings

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class _Settings(TablespecBaseSettings):

    database_path: str = Field(
        default=":memory:",
        min_length=1,
        description="SQLite database file used when Database() is created without a path"
    )
    echo_sql: bool = Field(
        default=False,
        description="Forwarded to SQLAlchemy create_engine(echo=...)"
    )
    log_level: str = Field(
        default="INFO",
        description="Default level for setup_logging()"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Use one of: {', '.join(_LOG_LEVELS)}"
            )
        return level

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL for ``database_path``."""
        return sqlite_url(self.database_path)


def sqlite_url(path: str) -> str:
    """Build a SQLAlchemy SQLite URL for a file path or ``:memory:``."""
    if path == ":memory:":
        return "sqlite://"
    return f"sqlite:///{path}"


_settings: Optional[_Settings] = None


def get_settings(force_reload: bool = False) -> _Settings:
    """Get the singleton settings instance for the application.

    Settings are loaded from ``TABLESPEC_*`` environment variables (and a
    ``.env`` file when present) on first access.

    Args:
        force_reload: If True, creates a new Settings instance even if
                     one already exists. Useful for testing or when
                     environment variables have changed.

    Returns:
        Settings: The singleton Settings instance

    Example:
        ```python
        settings = get_settings()
        settings2 = get_settings()
        assert settings is settings2
        ```
    """
    global _settings

    if _settings is None or force_reload:
        _settings = _Settings()

    return _settings


def _reload_settings() -> _Settings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.
    """
    global _settings
    _settings = None
    return get_settings(force_reload=True)
