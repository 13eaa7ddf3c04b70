"""Transport boundary between the executor and the network."""

from typing import Protocol, runtime_checkable

import httpx

from typed_request.fetch.errors import NetworkError
from typed_request.fetch.models import HttpResponse, RequestSpec


@runtime_checkable
class Transport(Protocol):
    """Protocol for anything that can perform one HTTP round trip.

    Implementations return a response for every status code. When no
    response was obtained (connection, DNS, protocol errors) they raise
    NetworkError.
    """

    async def send(self, url: str, spec: RequestSpec) -> HttpResponse:
        """Perform the request.

        Args:
            url: Target URL.
            spec: Method, headers and body to send.

        Returns:
            The response, whatever its status.
        """
        ...


class HttpxTransport:
    """Transport backed by ``httpx.AsyncClient``.

    A client is opened and closed per request; connections are not shared
    between calls. Timeouts are left to the cancellation token.
    """

    def __init__(
        self,
        follow_redirects: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            follow_redirects: Whether httpx should follow 3xx responses.
            transport: Optional low-level httpx transport (e.g. MockTransport).
        """
        self._follow_redirects = follow_redirects
        self._transport = transport

    async def send(self, url: str, spec: RequestSpec) -> HttpResponse:
        try:
            async with httpx.AsyncClient(
                timeout=None,
                follow_redirects=self._follow_redirects,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    spec.method.value,
                    url,
                    headers=spec.headers,
                    content=spec.body,
                )
        except httpx.TransportError as e:
            msg = f"Network request failed: {e}"
            raise NetworkError(msg, cause=e) from e

        return HttpResponse(
            status_code=response.status_code,
            status_text=response.reason_phrase,
            headers=dict(response.headers),
            body=response.content,
        )
