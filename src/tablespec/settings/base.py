from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TablespecBaseSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TABLESPEC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )

    max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Maximum number of retry attempts when the database reports a transient error"
    )
    retry_delay_seconds: float = Field(
        default=0.1,
        ge=0.0,
        le=60.0,
        description="Initial delay between retry attempts in seconds"
    )
