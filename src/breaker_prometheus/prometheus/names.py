"""Configurable names of the exported circuit breaker metric families."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from breaker_prometheus.errors import InvalidArgumentError

DEFAULT_CIRCUIT_BREAKER_CALLS = "resilience4j_circuitbreaker_calls"
DEFAULT_CIRCUIT_BREAKER_STATE = "resilience4j_circuitbreaker_state"
DEFAULT_CIRCUIT_BREAKER_BUFFERED_CALLS = "resilience4j_circuitbreaker_buffered_calls"
DEFAULT_CIRCUIT_BREAKER_FAILURE_RATE = "resilience4j_circuitbreaker_failure_rate"
DEFAULT_CIRCUIT_BREAKER_SLOW_CALL_RATE = "resilience4j_circuitbreaker_slow_call_rate"

# Classic exposition charset; prometheus_client escapes anything else on scrape.
_METRIC_NAME_RE = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")


def _require_name(argument: str, value: object) -> str:
    if value is None:
        raise InvalidArgumentError(argument)
    if not isinstance(value, str):
        raise InvalidArgumentError(argument, "must be a string")
    if not value.strip():
        raise InvalidArgumentError(argument, "must be non-empty")
    if not _METRIC_NAME_RE.match(value):
        raise InvalidArgumentError(argument, "must be a valid Prometheus metric name")
    return value


@dataclass(frozen=True, slots=True)
class MetricNames:
    """Names of the five metric families exported per circuit breaker.

    Every name has a default, so callers only rename the families they care
    about. Use ``MetricNames.of_defaults()`` or ``MetricNames.custom()``.

    Attributes:
        calls_metric_name: Histogram of calls by kind.
        state_metric_name: Gauge of the breaker state.
        buffered_calls_metric_name: Gauge of calls in the sliding window.
        failure_rate_metric_name: Gauge of the failure rate.
        slow_call_rate_metric_name: Gauge of the slow call rate.
    """

    calls_metric_name: str = DEFAULT_CIRCUIT_BREAKER_CALLS
    state_metric_name: str = DEFAULT_CIRCUIT_BREAKER_STATE
    buffered_calls_metric_name: str = DEFAULT_CIRCUIT_BREAKER_BUFFERED_CALLS
    failure_rate_metric_name: str = DEFAULT_CIRCUIT_BREAKER_FAILURE_RATE
    slow_call_rate_metric_name: str = DEFAULT_CIRCUIT_BREAKER_SLOW_CALL_RATE

    def __post_init__(self) -> None:
        _require_name("calls_metric_name", self.calls_metric_name)
        _require_name("state_metric_name", self.state_metric_name)
        _require_name("buffered_calls_metric_name", self.buffered_calls_metric_name)
        _require_name("failure_rate_metric_name", self.failure_rate_metric_name)
        _require_name("slow_call_rate_metric_name", self.slow_call_rate_metric_name)

    @classmethod
    def of_defaults(cls) -> MetricNames:
        """Return the default metric names."""
        return cls()

    @classmethod
    def custom(cls) -> MetricNamesBuilder:
        """Return a builder seeded with the default metric names."""
        return MetricNamesBuilder()


class MetricNamesBuilder:
    """Fluent builder for custom ``MetricNames`` instances."""

    def __init__(self) -> None:
        self._names = MetricNames()

    def _override(self, argument: str, value: str) -> MetricNamesBuilder:
        _require_name(argument, value)
        self._names = replace(self._names, **{argument: value})
        return self

    def calls_metric_name(self, value: str) -> MetricNamesBuilder:
        """Override ``DEFAULT_CIRCUIT_BREAKER_CALLS``."""
        return self._override("calls_metric_name", value)

    def state_metric_name(self, value: str) -> MetricNamesBuilder:
        """Override ``DEFAULT_CIRCUIT_BREAKER_STATE``."""
        return self._override("state_metric_name", value)

    def buffered_calls_metric_name(self, value: str) -> MetricNamesBuilder:
        """Override ``DEFAULT_CIRCUIT_BREAKER_BUFFERED_CALLS``."""
        return self._override("buffered_calls_metric_name", value)

    def failure_rate_metric_name(self, value: str) -> MetricNamesBuilder:
        """Override ``DEFAULT_CIRCUIT_BREAKER_FAILURE_RATE``."""
        return self._override("failure_rate_metric_name", value)

    def slow_call_rate_metric_name(self, value: str) -> MetricNamesBuilder:
        """Override ``DEFAULT_CIRCUIT_BREAKER_SLOW_CALL_RATE``."""
        return self._override("slow_call_rate_metric_name", value)

    def build(self) -> MetricNames:
        """Return an immutable snapshot of the configured names."""
        return self._names
