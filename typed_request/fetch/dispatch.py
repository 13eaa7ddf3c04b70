"""Error dispatch for classified request failures.

Each failure is handed to exactly one handler selected by its kind.
Handlers only produce a side effect (a structured log line); they never
alter the error or the caller's control flow.
"""

import contextlib
from collections.abc import Callable, Mapping
from types import MappingProxyType

import structlog

from typed_request.fetch.errors import ClassifiedError, ErrorKind


logger = structlog.get_logger()

ErrorHandler = Callable[[BaseException], None]


def _error_fields(error: BaseException) -> dict[str, object]:
    """Extract log fields from an error."""
    if isinstance(error, ClassifiedError):
        cause = error.cause
        return {
            "kind": error.kind.value,
            "message": error.message,
            "cause": repr(cause) if cause is not None else None,
            "status_code": error.status_code,
        }
    cause = error.__cause__
    return {
        "kind": type(error).__name__,
        "message": str(error),
        "cause": repr(cause) if cause is not None else None,
        "status_code": None,
    }


def handle_network_error(error: BaseException) -> None:
    logger.error("network_error", component="fetch", **_error_fields(error))


def handle_client_error(error: BaseException) -> None:
    logger.error("client_error", component="fetch", **_error_fields(error))


def handle_server_error(error: BaseException) -> None:
    logger.error("server_error", component="fetch", **_error_fields(error))


def handle_abort_error(error: BaseException) -> None:
    logger.warning("request_aborted", component="fetch", **_error_fields(error))


def handle_unexpected_error(error: BaseException) -> None:
    logger.error("unexpected_error", component="fetch", **_error_fields(error))


ERROR_HANDLERS: Mapping[ErrorKind, ErrorHandler] = MappingProxyType(
    {
        ErrorKind.ABORT: handle_abort_error,
        ErrorKind.NETWORK: handle_network_error,
        ErrorKind.CLIENT: handle_client_error,
        ErrorKind.SERVER: handle_server_error,
    }
)


def handler_for(kind: ErrorKind | None) -> ErrorHandler:
    """Look up the handler for an error kind.

    Args:
        kind: Error kind, or None for unclassified errors.

    Returns:
        The kind's handler, or the unexpected-error handler.
    """
    if kind is None:
        return handle_unexpected_error
    return ERROR_HANDLERS.get(kind, handle_unexpected_error)


def dispatch_error(error: BaseException) -> None:
    """Route an error to its handler.

    Never raises; the caller re-raises or returns the same error afterwards.

    Args:
        error: The failure to report.
    """
    kind = error.kind if isinstance(error, ClassifiedError) else None
    handler = handler_for(kind)
    # Reporting must not replace the error being reported
    with contextlib.suppress(Exception):
        handler(error)
