"""Classified error types for the request layer.

Every failure of a request surfaces as exactly one subclass of
``ClassifiedError``. The set of subclasses is closed and maps one-to-one
onto ``ErrorKind``.
"""

from enum import Enum
from typing import Literal

from typed_request.fetch.constants import HTTP_STATUS_SERVER_ERROR_MIN


class ErrorKind(str, Enum):
    """Classification of request failures.

    - NETWORK: Transport failed before a response was received
    - CLIENT: Response status 400-499
    - SERVER: Response status 500 and above
    - ABORT: Cancellation token fired before completion
    - VALIDATION: Body did not match its schema
    - UNEXPECTED: Anything else
    """

    NETWORK = "NetworkError"
    CLIENT = "ClientError"
    SERVER = "ServerError"
    ABORT = "AbortError"
    VALIDATION = "ValidationError"
    UNEXPECTED = "UnexpectedError"


class ClassifiedError(Exception):
    """Base class for all classified request failures.

    Attributes:
        kind: Classification of the failure.
        message: Human-readable message.
        cause: Underlying exception, if any.
        status_code: HTTP status code when a response was received.
    """

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.status_code = status_code
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class NetworkError(ClassifiedError):
    """Transport-level failure with no usable response."""

    kind = ErrorKind.NETWORK


class ClientError(ClassifiedError):
    """Response status in the 4xx range."""

    kind = ErrorKind.CLIENT


class ServerError(ClassifiedError):
    """Response status of 500 or above."""

    kind = ErrorKind.SERVER


class AbortError(ClassifiedError):
    """Request was cancelled before it completed."""

    kind = ErrorKind.ABORT


class SchemaValidationError(ClassifiedError):
    """Outgoing or incoming body failed schema validation.

    Attributes:
        target: Which body failed, ``"request"`` or ``"response"``.
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        target: Literal["request", "response"] = "response",
    ) -> None:
        super().__init__(message, cause=cause)
        self.target = target


class UnexpectedError(ClassifiedError):
    """Failure that matches no other kind."""

    kind = ErrorKind.UNEXPECTED


def http_status_error(status_code: int, status_text: str) -> ClientError | ServerError:
    """Build the error for a failing HTTP status.

    Args:
        status_code: HTTP status code, 400 or above.
        status_text: Reason phrase from the response.

    Returns:
        ClientError for 4xx, ServerError for 5xx and above.
    """
    message = f"{status_code}: {status_text}"
    if status_code >= HTTP_STATUS_SERVER_ERROR_MIN:
        return ServerError(message, status_code=status_code)
    return ClientError(message, status_code=status_code)
