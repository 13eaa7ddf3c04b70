"""Metrics collection for the request layer."""

from dataclasses import dataclass, field
from typing import ClassVar

from typed_request.fetch.errors import ErrorKind


@dataclass
class RequestMetrics:
    """Metrics for executed requests.

    Singleton class that tracks request counts by status, failures by
    kind, cancellation token releases, and cumulative duration.
    """

    requests_total: dict[int, int] = field(default_factory=dict)
    failures_total: dict[str, int] = field(default_factory=dict)
    tokens_released_total: int = 0
    duration_ms_total: float = 0.0
    request_count: int = 0

    _instance: ClassVar["RequestMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "RequestMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_response(self, status_code: int) -> None:
        """Record a response received from the transport.

        Args:
            status_code: HTTP status code.
        """
        self.requests_total[status_code] = self.requests_total.get(status_code, 0) + 1

    def record_failure(self, kind: ErrorKind) -> None:
        """Record a classified failure.

        Args:
            kind: Classification of the failure.
        """
        key = kind.value
        self.failures_total[key] = self.failures_total.get(key, 0) + 1

    def record_release(self) -> None:
        """Record a cancellation token release."""
        self.tokens_released_total += 1

    def record_duration(self, duration_ms: float) -> None:
        """Record a finished request.

        Args:
            duration_ms: Duration in milliseconds.
        """
        self.duration_ms_total += duration_ms
        self.request_count += 1

    def to_dict(self) -> dict[str, int | float | dict[str, int] | dict[int, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "requests_total": dict(self.requests_total),
            "failures_total": dict(self.failures_total),
            "tokens_released_total": self.tokens_released_total,
            "duration_ms_total": self.duration_ms_total,
            "request_count": self.request_count,
        }

    @property
    def avg_duration_ms(self) -> float:
        """Calculate average request duration.

        Returns:
            Average duration in milliseconds.
        """
        if self.request_count == 0:
            return 0.0
        return self.duration_ms_total / self.request_count
