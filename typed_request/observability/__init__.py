"""Observability module for logging."""

from typed_request.observability.logging import (
    bound_request_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


__all__ = [
    "bound_request_context",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
]
