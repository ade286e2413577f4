"""Prometheus exporters for circuit breaker metrics.

Each exporter owns a private ``CollectorRegistry`` holding the calls
histogram and renders the per-breaker gauges on every scrape. Register an
exporter into the registry served by your scrape endpoint:

    collector = CircuitBreakerMetricsCollector.of_circuit_breaker(breaker)
    REGISTRY.register(collector)
"""

from breaker_prometheus.prometheus.base import (
    KIND_FAILED,
    KIND_IGNORED,
    KIND_NOT_PERMITTED,
    KIND_SUCCESSFUL,
    NAME,
    NAME_AND_KIND,
    NAME_AND_STATE,
    AbstractCircuitBreakerMetrics,
    CallKind,
)
from breaker_prometheus.prometheus.collector import (
    BreakerSupplier,
    CircuitBreakerMetricsCollector,
)
from breaker_prometheus.prometheus.names import (
    DEFAULT_CIRCUIT_BREAKER_BUFFERED_CALLS,
    DEFAULT_CIRCUIT_BREAKER_CALLS,
    DEFAULT_CIRCUIT_BREAKER_FAILURE_RATE,
    DEFAULT_CIRCUIT_BREAKER_SLOW_CALL_RATE,
    DEFAULT_CIRCUIT_BREAKER_STATE,
    MetricNames,
    MetricNamesBuilder,
)

__all__ = [
    "DEFAULT_CIRCUIT_BREAKER_BUFFERED_CALLS",
    "DEFAULT_CIRCUIT_BREAKER_CALLS",
    "DEFAULT_CIRCUIT_BREAKER_FAILURE_RATE",
    "DEFAULT_CIRCUIT_BREAKER_SLOW_CALL_RATE",
    "DEFAULT_CIRCUIT_BREAKER_STATE",
    "KIND_FAILED",
    "KIND_IGNORED",
    "KIND_NOT_PERMITTED",
    "KIND_SUCCESSFUL",
    "NAME",
    "NAME_AND_KIND",
    "NAME_AND_STATE",
    "AbstractCircuitBreakerMetrics",
    "BreakerSupplier",
    "CallKind",
    "CircuitBreakerMetricsCollector",
    "MetricNames",
    "MetricNamesBuilder",
]
