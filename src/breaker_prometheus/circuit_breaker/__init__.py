"""Breaker-side contract consumed by the Prometheus exporters.

This package does not implement a circuit breaker. It describes what an
exporter needs from one:
  - A synchronous read surface (``ObservedCircuitBreaker``) sampled on every
    scrape: name, current ``CircuitState`` and ``BreakerMetrics``.
  - An async event surface (``BreakerListener``) through which a breaker
    pushes call outcomes and state transitions.
"""

from breaker_prometheus.circuit_breaker.metrics import BreakerListener
from breaker_prometheus.circuit_breaker.state import (
    NOT_ENOUGH_CALLS,
    BreakerMetrics,
    CircuitState,
    ObservedCircuitBreaker,
)

__all__ = [
    "NOT_ENOUGH_CALLS",
    "BreakerListener",
    "BreakerMetrics",
    "CircuitState",
    "ObservedCircuitBreaker",
]
