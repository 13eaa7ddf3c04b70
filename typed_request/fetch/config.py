"""Configuration model for the request executor."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from typed_request.fetch.constants import DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from typed_request.fetch.redact import SENSITIVE_HEADERS
from typed_request.settings import AppSettings, get_settings


class ExecutorConfig(BaseModel):
    """Configuration for the request executor.

    Holds the defaults applied to every request unless the request
    overrides them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = (
        DEFAULT_USER_AGENT
    )
    default_timeout_seconds: Annotated[float, Field(gt=0.0, le=3600.0)] | None = (
        DEFAULT_TIMEOUT_SECONDS
    )
    default_headers: dict[str, str] = Field(
        default_factory=dict, description="Headers added to every request"
    )

    @field_validator("default_headers")
    @classmethod
    def validate_no_auth_headers(cls, v: dict[str, str]) -> dict[str, str]:
        """Ensure no credentials are stored in shared config."""
        for key in v:
            if key.lower() in SENSITIVE_HEADERS:
                msg = (
                    f"Header '{key}' must not be stored in config; "
                    "pass it per request"
                )
                raise ValueError(msg)
        return v

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None) -> "ExecutorConfig":
        """Build a config from environment settings.

        Args:
            settings: Settings to read; loaded from the environment if None.

        Returns:
            Executor configuration.
        """
        settings = settings or get_settings()
        timeout = settings.default_timeout_seconds or None
        return cls(user_agent=settings.user_agent, default_timeout_seconds=timeout)

    def timeout_for(self, timeout_seconds: float | None) -> float | None:
        """Resolve the timeout for a request.

        Args:
            timeout_seconds: Per-request override.

        Returns:
            Timeout in seconds, or None for no timeout.
        """
        if timeout_seconds is not None:
            return timeout_seconds
        return self.default_timeout_seconds
