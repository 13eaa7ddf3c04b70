"""Typed HTTP requests with classified errors and schema validation."""

from typed_request.fetch import (
    AbortError,
    CancellationToken,
    ClassifiedError,
    ClientError,
    ErrorKind,
    HttpMethod,
    NetworkError,
    RequestExecutor,
    RequestSpec,
    SchemaValidationError,
    ServerError,
    UnexpectedError,
    delete,
    get,
    patch,
    post,
    put,
    request,
)


__all__ = [
    "AbortError",
    "CancellationToken",
    "ClassifiedError",
    "ClientError",
    "ErrorKind",
    "HttpMethod",
    "NetworkError",
    "RequestExecutor",
    "RequestSpec",
    "SchemaValidationError",
    "ServerError",
    "UnexpectedError",
    "delete",
    "get",
    "patch",
    "post",
    "put",
    "request",
]
