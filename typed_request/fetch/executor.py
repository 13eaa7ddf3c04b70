"""Request executor: one typed HTTP round trip with classified failures."""

import time
from collections.abc import Mapping
from typing import Any, TypeVar

import structlog

from typed_request.fetch.cancellation import CancellationToken
from typed_request.fetch.config import ExecutorConfig
from typed_request.fetch.constants import (
    CACHE_CONTROL_NO_STORE,
    HEADER_CACHE_CONTROL,
    HEADER_USER_AGENT,
    HTTP_STATUS_CLIENT_ERROR_MIN,
)
from typed_request.fetch.dispatch import dispatch_error
from typed_request.fetch.errors import (
    ClassifiedError,
    UnexpectedError,
    http_status_error,
)
from typed_request.fetch.metrics import RequestMetrics
from typed_request.fetch.models import Err, Ok, RequestOutcome, RequestSpec
from typed_request.fetch.redact import redact_headers, redact_url_credentials
from typed_request.fetch.transport import HttpxTransport, Transport
from typed_request.fetch.validation import (
    ResponseValidator,
    as_validator,
    validate_body,
)
from typed_request.observability.logging import bound_request_context


T = TypeVar("T")

SpecLike = RequestSpec | Mapping[str, Any] | None

logger = structlog.get_logger()


class RequestExecutor:
    """Performs typed HTTP requests.

    Each call:
    - owns one cancellation token, armed with the request timeout and
      released exactly once when the call concludes
    - classifies 4xx as ClientError and 5xx as ServerError
    - decodes the JSON body and validates it against the caller's schema
    - reports every failure through the error dispatch before handing it
      back to the caller
    """

    def __init__(
        self,
        transport: Transport | None = None,
        config: ExecutorConfig | None = None,
        metrics: RequestMetrics | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            transport: Transport performing the round trip (default: httpx).
            config: Executor defaults (default: ExecutorConfig()).
            metrics: Metrics sink (default: the shared instance).
        """
        self._transport = transport or HttpxTransport()
        self._config = config or ExecutorConfig()
        self._metrics = metrics or RequestMetrics.get_instance()
        self._log = logger.bind(component="fetch")

    @property
    def config(self) -> ExecutorConfig:
        return self._config

    async def execute(
        self,
        url: str,
        spec: SpecLike,
        validator: ResponseValidator[T] | type[T] | Any,
        *,
        token: CancellationToken | None = None,
    ) -> RequestOutcome[T]:
        """Execute a request and return its outcome.

        Args:
            url: Target URL, non-empty.
            spec: Method, headers, body and timeout, as a RequestSpec or a
                mapping of its fields (default: plain GET).
            validator: Response validator, or a type pydantic can validate.
            token: Fresh token to cancel the call from outside. One is
                created from the resolved timeout when omitted.

        Returns:
            Ok with the validated value, or Err with the classified error.

        Raises:
            ValueError: If ``url`` is empty, ``token`` was already used, or
                a mapping ``spec`` has invalid fields.
        """
        if not url:
            msg = "url must be a non-empty string"
            raise ValueError(msg)

        spec = _coerce_spec(spec)
        response_validator: ResponseValidator[T] = as_validator(validator)
        if token is None:
            token = CancellationToken(self._config.timeout_for(spec.timeout_seconds))
        elif token.entered:
            msg = "CancellationToken was already used by another request"
            raise ValueError(msg)
        prepared = self._prepare(spec)

        redacted_url = redact_url_credentials(url)
        log = self._log.bind(url=redacted_url, method=spec.method.value)
        start_time_ns = time.perf_counter_ns()
        outcome: RequestOutcome[T]

        with bound_request_context(redacted_url, spec.method.value):
            try:
                async with token:
                    value = await self._perform(
                        url, prepared, response_validator, token, log
                    )
                outcome = Ok(value)
            except ClassifiedError as e:
                outcome = Err(e)
            except Exception as e:  # noqa: BLE001
                outcome = Err(UnexpectedError(f"Unexpected error: {e}", cause=e))
            finally:
                if token.released:
                    self._metrics.record_release()

            duration_ms = (time.perf_counter_ns() - start_time_ns) / 1_000_000
            self._metrics.record_duration(duration_ms)

            error = outcome.error if isinstance(outcome, Err) else None
            if error is not None:
                self._metrics.record_failure(error.kind)
                dispatch_error(error)

            log.info(
                "request_complete",
                ok=outcome.is_ok,
                error_kind=error.kind.value if error else None,
                status_code=error.status_code if error else None,
                duration_ms=round(duration_ms, 2),
            )
        return outcome

    async def request(
        self,
        url: str,
        spec: SpecLike,
        validator: ResponseValidator[T] | type[T] | Any,
        *,
        token: CancellationToken | None = None,
    ) -> T:
        """Execute a request and return the validated value.

        Raises:
            ClassifiedError: The classified failure, after dispatch.
        """
        outcome = await self.execute(url, spec, validator, token=token)
        return outcome.unwrap()

    def _prepare(self, spec: RequestSpec) -> RequestSpec:
        """Apply executor defaults to a request.

        Caller headers win over defaults. Caching is always disabled unless
        the caller sets Cache-Control explicitly.
        """
        headers: dict[str, str] = {
            HEADER_USER_AGENT: self._config.user_agent,
            HEADER_CACHE_CONTROL: CACHE_CONTROL_NO_STORE,
        }
        headers.update(self._config.default_headers)
        caller_keys = {key.lower() for key in spec.headers}
        headers = {k: v for k, v in headers.items() if k.lower() not in caller_keys}
        headers.update(spec.headers)
        return spec.model_copy(update={"headers": headers})

    async def _perform(
        self,
        url: str,
        spec: RequestSpec,
        validator: ResponseValidator[T],
        token: CancellationToken,
        log: structlog.stdlib.BoundLogger,
    ) -> T:
        """Run the round trip, classify the status and validate the body."""
        log.debug("request_start", headers=redact_headers(spec.headers))

        response = await token.guard(self._transport.send(url, spec))
        self._metrics.record_response(response.status_code)

        if response.status_code >= HTTP_STATUS_CLIENT_ERROR_MIN:
            raise http_status_error(response.status_code, response.status_text)

        try:
            payload = await token.guard(response.json())
        except ValueError as e:
            msg = f"Invalid JSON response body: {e}"
            raise UnexpectedError(msg, cause=e, status_code=response.status_code) from e

        return validate_body(validator, payload, "response")


def _coerce_spec(spec: SpecLike) -> RequestSpec:
    """Build a RequestSpec from a spec, a mapping of its fields, or None."""
    if spec is None:
        return RequestSpec()
    if isinstance(spec, RequestSpec):
        return spec
    return RequestSpec.model_validate(dict(spec))


_default_executor: RequestExecutor | None = None


def get_default_executor() -> RequestExecutor:
    """Get the shared executor configured from environment settings."""
    global _default_executor  # noqa: PLW0603
    if _default_executor is None:
        _default_executor = RequestExecutor(config=ExecutorConfig.from_settings())
    return _default_executor


async def request(
    url: str,
    spec: SpecLike,
    validator: ResponseValidator[T] | type[T] | Any,
    *,
    executor: RequestExecutor | None = None,
    token: CancellationToken | None = None,
) -> T:
    """Execute a request on the given or shared executor.

    Args:
        url: Target URL.
        spec: Method, headers, body and timeout, or a mapping of them.
        validator: Response validator, or a type pydantic can validate.
        executor: Executor to use (default: shared executor).
        token: Optional caller-owned cancellation token.

    Returns:
        The validated response value.

    Raises:
        ClassifiedError: The classified failure, after dispatch.
    """
    executor = executor or get_default_executor()
    return await executor.request(url, spec, validator, token=token)
