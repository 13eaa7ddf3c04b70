"""Verb helpers binding fixed configuration onto the executor.

``get`` sends an optional static API key. The body-carrying verbs validate
the outgoing query against its schema and send it as JSON.
"""

from typing import Any, TypeVar

from pydantic_core import PydanticSerializationError, to_json

from typed_request.fetch.constants import (
    CONTENT_TYPE_JSON,
    HEADER_API_KEY,
    HEADER_CONTENT_TYPE,
)
from typed_request.fetch.dispatch import dispatch_error
from typed_request.fetch.errors import SchemaValidationError
from typed_request.fetch.executor import RequestExecutor, get_default_executor
from typed_request.fetch.models import HttpMethod, RequestSpec
from typed_request.fetch.validation import ResponseValidator, as_validator, validate_body


T = TypeVar("T")
Q = TypeVar("Q")


def encode_json_body(query_schema: ResponseValidator[Q] | type[Q] | Any, query: Any) -> bytes:
    """Validate an outgoing query and encode it as JSON.

    Args:
        query_schema: Validator or type for the query.
        query: Value to send.

    Returns:
        UTF-8 JSON bytes of the validated query.

    Raises:
        SchemaValidationError: If the query does not match its schema or
            cannot be encoded as JSON. The error is dispatched before
            being raised.
    """
    try:
        validated = validate_body(as_validator(query_schema), query, "request")
    except SchemaValidationError as e:
        dispatch_error(e)
        raise

    try:
        return to_json(validated)
    except PydanticSerializationError as e:
        error = SchemaValidationError(
            f"Request body is not JSON serializable: {e}", cause=e, target="request"
        )
        dispatch_error(error)
        raise error from e


async def get(
    url: str,
    response_schema: ResponseValidator[T] | type[T] | Any,
    api_key: str | None = None,
    *,
    executor: RequestExecutor | None = None,
) -> T:
    """Send a GET request.

    Args:
        url: The API endpoint.
        response_schema: Schema the response body must match.
        api_key: Sent as the X-API-KEY header when given.
        executor: Executor to use (default: shared executor).

    Returns:
        The validated response body.
    """
    headers = {HEADER_API_KEY: api_key} if api_key else {}
    spec = RequestSpec(method=HttpMethod.GET, headers=headers)
    return await (executor or get_default_executor()).request(url, spec, response_schema)


async def _send_json(
    method: HttpMethod,
    url: str,
    query_schema: ResponseValidator[Q] | type[Q] | Any,
    query: Any,
    response_schema: ResponseValidator[T] | type[T] | Any,
    executor: RequestExecutor | None,
) -> T:
    spec = RequestSpec(
        method=method,
        headers={HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON},
        body=encode_json_body(query_schema, query),
    )
    return await (executor or get_default_executor()).request(url, spec, response_schema)


async def post(
    url: str,
    query_schema: ResponseValidator[Q] | type[Q] | Any,
    query: Any,
    response_schema: ResponseValidator[T] | type[T] | Any,
    *,
    executor: RequestExecutor | None = None,
) -> T:
    """Send a POST request with a validated JSON body.

    Args:
        url: The API endpoint.
        query_schema: Schema the query must match before sending.
        query: Value sent as the JSON body.
        response_schema: Schema the response body must match.
        executor: Executor to use (default: shared executor).

    Returns:
        The validated response body.
    """
    return await _send_json(
        HttpMethod.POST, url, query_schema, query, response_schema, executor
    )


async def put(
    url: str,
    query_schema: ResponseValidator[Q] | type[Q] | Any,
    query: Any,
    response_schema: ResponseValidator[T] | type[T] | Any,
    *,
    executor: RequestExecutor | None = None,
) -> T:
    """Send a PUT request with a validated JSON body."""
    return await _send_json(
        HttpMethod.PUT, url, query_schema, query, response_schema, executor
    )


async def patch(
    url: str,
    query_schema: ResponseValidator[Q] | type[Q] | Any,
    query: Any,
    response_schema: ResponseValidator[T] | type[T] | Any,
    *,
    executor: RequestExecutor | None = None,
) -> T:
    """Send a PATCH request with a validated JSON body."""
    return await _send_json(
        HttpMethod.PATCH, url, query_schema, query, response_schema, executor
    )


async def delete(
    url: str,
    query_schema: ResponseValidator[Q] | type[Q] | Any,
    query: Any,
    response_schema: ResponseValidator[T] | type[T] | Any,
    *,
    executor: RequestExecutor | None = None,
) -> T:
    """Send a DELETE request with a validated JSON body."""
    return await _send_json(
        HttpMethod.DELETE, url, query_schema, query, response_schema, executor
    )
