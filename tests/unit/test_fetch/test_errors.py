"""Unit tests for classified errors."""

import pytest

from typed_request.fetch.errors import (
    AbortError,
    ClassifiedError,
    ClientError,
    ErrorKind,
    NetworkError,
    SchemaValidationError,
    ServerError,
    UnexpectedError,
    http_status_error,
)


class TestErrorKinds:
    """Tests for the closed error hierarchy."""

    @pytest.mark.parametrize(
        ("error_type", "kind"),
        [
            (NetworkError, "NetworkError"),
            (ClientError, "ClientError"),
            (ServerError, "ServerError"),
            (AbortError, "AbortError"),
            (SchemaValidationError, "ValidationError"),
            (UnexpectedError, "UnexpectedError"),
        ],
    )
    def test_kind_names(self, error_type: type[ClassifiedError], kind: str) -> None:
        """Test each error class carries its kind name."""
        error = error_type("message")

        assert error.kind.value == kind
        assert isinstance(error, ClassifiedError)

    def test_one_class_per_kind(self) -> None:
        """Test every kind has exactly one error class."""
        kinds = {cls.kind for cls in ClassifiedError.__subclasses__()}

        assert kinds == set(ErrorKind)

    def test_cause_is_chained(self) -> None:
        """Test the cause is exposed and chained."""
        cause = TimeoutError("slow")
        error = NetworkError("failed", cause=cause)

        assert error.cause is cause
        assert error.__cause__ is cause

    def test_validation_target_defaults_to_response(self) -> None:
        """Test validation errors default to the response body."""
        assert SchemaValidationError("bad").target == "response"
        assert SchemaValidationError("bad", target="request").target == "request"


class TestHttpStatusError:
    """Tests for status-code error construction."""

    @pytest.mark.parametrize("status", [400, 401, 404, 429, 499])
    def test_4xx_is_client_error(self, status: int) -> None:
        """Test 4xx statuses build ClientError."""
        error = http_status_error(status, "Reason")

        assert isinstance(error, ClientError)
        assert error.message == f"{status}: Reason"
        assert error.status_code == status

    @pytest.mark.parametrize("status", [500, 502, 503, 599, 600])
    def test_5xx_and_above_is_server_error(self, status: int) -> None:
        """Test 500 and above build ServerError."""
        error = http_status_error(status, "Reason")

        assert isinstance(error, ServerError)
        assert str(error) == f"{status}: Reason"
