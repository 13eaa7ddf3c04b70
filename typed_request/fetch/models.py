"""Data models for the request layer."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from typed_request.fetch.constants import HTTP_STATUS_OK_MAX, HTTP_STATUS_OK_MIN
from typed_request.fetch.errors import ClassifiedError


T = TypeVar("T")


class HttpMethod(str, Enum):
    """HTTP methods supported by the executor."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class RequestSpec(BaseModel):
    """Transport configuration for a single request.

    Constructed fresh per call. The cancellation token is not part of the
    spec; the executor owns it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: HttpMethod = HttpMethod.GET
    headers: dict[str, str] = Field(
        default_factory=dict, description="Request headers"
    )
    body: bytes | None = Field(default=None, description="Raw request body")
    # Overrides the executor default timeout when set
    timeout_seconds: Annotated[float, Field(gt=0.0, le=3600.0)] | None = None


class HttpResponse(BaseModel):
    """Response returned by a transport."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    status_code: int = Field(ge=0, le=999, description="HTTP status code")
    status_text: str = Field(default="", description="Reason phrase")
    headers: dict[str, str] = Field(
        default_factory=dict, description="Response headers"
    )
    body: bytes = Field(default=b"", description="Response body")

    @property
    def ok(self) -> bool:
        """Check if the status is in the 2xx range."""
        return HTTP_STATUS_OK_MIN <= self.status_code < HTTP_STATUS_OK_MAX

    async def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            json.JSONDecodeError: If the body is not valid JSON.
        """
        return json.loads(self.body)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful request outcome."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed request outcome carrying the classified error."""

    error: ClassifiedError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise self.error


RequestOutcome = Ok[T] | Err
