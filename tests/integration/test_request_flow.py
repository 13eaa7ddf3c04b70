"""Integration tests for the request flow over httpx."""

import asyncio
import json

import httpx
import pytest
from pydantic import BaseModel

from typed_request.fetch.errors import (
    AbortError,
    ClientError,
    NetworkError,
    SchemaValidationError,
    ServerError,
)
from typed_request.fetch.executor import RequestExecutor, request
from typed_request.fetch.metrics import RequestMetrics
from typed_request.fetch.models import HttpMethod, RequestSpec
from typed_request.fetch.transport import HttpxTransport
from typed_request.fetch.verbs import get, post


BASE_URL = "https://api.example.com"


class User(BaseModel):
    """Response schema."""

    id: int
    name: str


class NewUser(BaseModel):
    """Outgoing body schema."""

    name: str


def _executor(handler) -> RequestExecutor:  # noqa: ANN001
    transport = HttpxTransport(transport=httpx.MockTransport(handler))
    return RequestExecutor(transport=transport, metrics=RequestMetrics())


def _users_api(req: httpx.Request) -> httpx.Response:
    """Small fake API for the happy and failing paths."""
    if req.url.path == "/users/1":
        return httpx.Response(200, json={"id": 1, "name": "Ana"})
    if req.url.path == "/users" and req.method == "POST":
        body = json.loads(req.content)
        return httpx.Response(201, json={"id": 2, **body})
    if req.url.path == "/broken":
        return httpx.Response(500)
    if req.url.path == "/malformed":
        return httpx.Response(200, json={"id": "one"})
    return httpx.Response(404)


class TestRequestFlow:
    """End-to-end tests through HttpxTransport."""

    def test_get_user(self) -> None:
        """Test the canonical user lookup resolves to the validated user."""
        executor = _executor(_users_api)

        user = asyncio.run(request(f"{BASE_URL}/users/1", None, User, executor=executor))

        assert user == User(id=1, name="Ana")

    def test_headers_reach_the_wire(self) -> None:
        """Test caching is disabled and the API key is sent."""
        seen: list[httpx.Request] = []

        def handler(req: httpx.Request) -> httpx.Response:
            seen.append(req)
            return _users_api(req)

        asyncio.run(get(f"{BASE_URL}/users/1", User, "key-123", executor=_executor(handler)))

        assert seen[0].method == "GET"
        assert seen[0].headers["cache-control"] == "no-store"
        assert seen[0].headers["x-api-key"] == "key-123"

    def test_post_round_trip(self) -> None:
        """Test a validated body is posted and the response validated."""
        user = asyncio.run(
            post(
                f"{BASE_URL}/users",
                NewUser,
                {"name": "Bo"},
                User,
                executor=_executor(_users_api),
            )
        )

        assert user == User(id=2, name="Bo")

    def test_not_found(self) -> None:
        """Test 404 surfaces as ClientError with the reason phrase."""
        with pytest.raises(ClientError) as exc_info:
            asyncio.run(
                request(f"{BASE_URL}/missing", None, User, executor=_executor(_users_api))
            )

        assert exc_info.value.message == "404: Not Found"

    def test_server_error(self) -> None:
        """Test 500 surfaces as ServerError with the reason phrase."""
        with pytest.raises(ServerError) as exc_info:
            asyncio.run(
                request(f"{BASE_URL}/broken", None, User, executor=_executor(_users_api))
            )

        assert exc_info.value.message == "500: Internal Server Error"

    def test_malformed_body(self) -> None:
        """Test a 200 with the wrong shape is a validation failure."""
        with pytest.raises(SchemaValidationError):
            asyncio.run(
                request(f"{BASE_URL}/malformed", None, User, executor=_executor(_users_api))
            )

    def test_connection_failure(self) -> None:
        """Test connection errors surface as NetworkError."""

        def refuse(req: httpx.Request) -> httpx.Response:
            msg = "Connection refused"
            raise httpx.ConnectError(msg, request=req)

        with pytest.raises(NetworkError, match="Connection refused") as exc_info:
            asyncio.run(request(f"{BASE_URL}/users/1", None, User, executor=_executor(refuse)))

        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    def test_slow_server_times_out(self) -> None:
        """Test a handler slower than the timeout is aborted."""

        async def slow(req: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5.0)
            return _users_api(req)

        spec = RequestSpec(method=HttpMethod.GET, timeout_seconds=0.05)

        with pytest.raises(AbortError):
            asyncio.run(request(f"{BASE_URL}/users/1", spec, User, executor=_executor(slow)))
