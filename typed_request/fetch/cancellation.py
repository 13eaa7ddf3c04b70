"""Cancellation token scoped to a single request."""

import asyncio
import inspect
from collections.abc import Awaitable
from types import TracebackType
from typing import TypeVar

from typed_request.fetch.errors import AbortError


T = TypeVar("T")

DEFAULT_ABORT_REASON = "Request was aborted"


class CancellationToken:
    """Handle that signals an in-flight request to stop waiting.

    A token is used as an async context manager around exactly one request.
    Entering arms the optional timeout timer; leaving releases the token,
    which aborts anything still bound to it and disarms the timer. Release
    happens once per token. Cancelling after release is a no-op.

    Example:
        async with CancellationToken(timeout_seconds=5.0) as token:
            response = await token.guard(transport.send(url, spec))
    """

    def __init__(self, timeout_seconds: float | None = None) -> None:
        """Initialize the token.

        Args:
            timeout_seconds: Fire the token after this many seconds once
                entered. None disables the timer.
        """
        self._timeout_seconds = timeout_seconds
        self._event = asyncio.Event()
        self._timer: asyncio.TimerHandle | None = None
        self._reason: str | None = None
        self._entered = False
        self._release_count = 0

    @property
    def cancelled(self) -> bool:
        """Whether the token fired before release."""
        return self._reason is not None

    @property
    def reason(self) -> str | None:
        """Why the token fired, if it did."""
        return self._reason

    @property
    def entered(self) -> bool:
        """Whether the token was already bound to a request."""
        return self._entered

    @property
    def released(self) -> bool:
        """Whether the owning request has concluded."""
        return self._release_count > 0

    @property
    def release_count(self) -> int:
        """Number of times the token was released (0 or 1)."""
        return self._release_count

    @property
    def timeout_seconds(self) -> float | None:
        return self._timeout_seconds

    def cancel(self, reason: str = DEFAULT_ABORT_REASON) -> None:
        """Fire the token.

        Args:
            reason: Message carried by the resulting AbortError.
        """
        if self.released or self.cancelled:
            return
        self._reason = reason
        self._event.set()

    def release(self) -> None:
        """Release the token at the end of its request.

        Disarms the timer and wakes anything still waiting on the token.
        Only the first call has an effect.
        """
        if self.released:
            return
        self._release_count += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._event.set()

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the token fires first.

        Args:
            awaitable: The in-flight operation bound to this token.

        Returns:
            The operation's result.

        Raises:
            AbortError: If the token fired before the operation completed.
        """
        if self.cancelled:
            # Never start an operation on an already aborted token
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            raise AbortError(self._reason or DEFAULT_ABORT_REASON)

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()

        if task in done and not self.cancelled:
            return task.result()

        # Let the cancelled operation unwind before reporting the abort
        await asyncio.wait({task})
        if not task.cancelled():
            task.exception()
        raise AbortError(self._reason or DEFAULT_ABORT_REASON)

    async def __aenter__(self) -> "CancellationToken":
        if self._entered:
            msg = "CancellationToken is scoped to a single request and cannot be reused"
            raise RuntimeError(msg)
        self._entered = True
        if self._timeout_seconds is not None:
            loop = asyncio.get_running_loop()
            self._timer = loop.call_later(
                self._timeout_seconds,
                self.cancel,
                f"Request timed out after {self._timeout_seconds}s",
            )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
