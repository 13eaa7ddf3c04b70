"""Application settings powered by Pydantic BaseSettings."""

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Centralized environment configuration.

    Every field reads ``TYPED_REQUEST_<FIELD>`` from the environment or
    from a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TYPED_REQUEST_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 0 disables the request timeout
    default_timeout_seconds: Annotated[float, Field(ge=0.0, le=3600.0)] = 30.0
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = (
        "typed-request/1.0"
    )
    log_level: str = "INFO"
    log_json: bool = True


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
