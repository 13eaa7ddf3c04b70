"""Typed HTTP request layer.

This module provides single typed HTTP requests with:
- Timeout and caller-driven abort through a scoped cancellation token
- Status-code based error classification
- Schema validation of outgoing and incoming bodies
- Kind-keyed error dispatch for logging
- Metrics collection for observability
"""

from typed_request.fetch.cancellation import CancellationToken
from typed_request.fetch.config import ExecutorConfig
from typed_request.fetch.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    HTTP_STATUS_CLIENT_ERROR_MIN,
    HTTP_STATUS_OK_MAX,
    HTTP_STATUS_OK_MIN,
    HTTP_STATUS_SERVER_ERROR_MIN,
)
from typed_request.fetch.dispatch import ERROR_HANDLERS, dispatch_error, handler_for
from typed_request.fetch.errors import (
    AbortError,
    ClassifiedError,
    ClientError,
    ErrorKind,
    NetworkError,
    SchemaValidationError,
    ServerError,
    UnexpectedError,
)
from typed_request.fetch.executor import RequestExecutor, get_default_executor, request
from typed_request.fetch.metrics import RequestMetrics
from typed_request.fetch.models import (
    Err,
    HttpMethod,
    HttpResponse,
    Ok,
    RequestOutcome,
    RequestSpec,
)
from typed_request.fetch.redact import redact_headers, redact_url_credentials
from typed_request.fetch.transport import HttpxTransport, Transport
from typed_request.fetch.validation import ResponseValidator, SchemaValidator
from typed_request.fetch.verbs import delete, get, patch, post, put


__all__ = [
    # Executor
    "RequestExecutor",
    "get_default_executor",
    "request",
    # Verbs
    "get",
    "post",
    "put",
    "patch",
    "delete",
    # Cancellation
    "CancellationToken",
    # Config
    "ExecutorConfig",
    # Models
    "HttpMethod",
    "RequestSpec",
    "HttpResponse",
    "RequestOutcome",
    "Ok",
    "Err",
    # Errors
    "ErrorKind",
    "ClassifiedError",
    "NetworkError",
    "ClientError",
    "ServerError",
    "AbortError",
    "SchemaValidationError",
    "UnexpectedError",
    # Dispatch
    "ERROR_HANDLERS",
    "dispatch_error",
    "handler_for",
    # Transport
    "Transport",
    "HttpxTransport",
    # Validation
    "ResponseValidator",
    "SchemaValidator",
    # Constants
    "DEFAULT_TIMEOUT_SECONDS",
    "HTTP_STATUS_OK_MIN",
    "HTTP_STATUS_OK_MAX",
    "HTTP_STATUS_CLIENT_ERROR_MIN",
    "HTTP_STATUS_SERVER_ERROR_MIN",
    # Metrics
    "RequestMetrics",
    # Redaction
    "redact_headers",
    "redact_url_credentials",
]
