"""Prometheus collector for observed circuit breakers."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

import structlog
from prometheus_client.core import GaugeMetricFamily
from prometheus_client.metrics_core import Metric

from breaker_prometheus.circuit_breaker import (
    BreakerListener,
    CircuitState,
    ObservedCircuitBreaker,
)
from breaker_prometheus.errors import InvalidArgumentError
from breaker_prometheus.logging import ExporterLogger, log_info, log_warning
from breaker_prometheus.prometheus.base import (
    NAME,
    NAME_AND_KIND,
    NAME_AND_STATE,
    AbstractCircuitBreakerMetrics,
    CallKind,
)
from breaker_prometheus.prometheus.names import MetricNames

BreakerSupplier = Callable[[], Iterable[ObservedCircuitBreaker]]

_OPEN_STATES = frozenset({CircuitState.OPEN, CircuitState.FORCED_OPEN})


class CircuitBreakerMetricsCollector(AbstractCircuitBreakerMetrics, BreakerListener):
    """Export state, buffered calls and rates for a set of circuit breakers.

    Breakers are read from ``supplier`` on every scrape. Call outcomes reach
    the calls histogram through the ``BreakerListener`` hooks or
    ``record_call``.
    """

    def __init__(
        self,
        names: MetricNames,
        supplier: BreakerSupplier,
        *,
        logger: ExporterLogger | None = None,
    ) -> None:
        """Build a collector over the breakers returned by ``supplier``.

        Args:
            names: Metric family names.
            supplier: Callable returning the breakers to sample on each scrape.
            logger: Optional structured logger. Defaults to a structlog logger.

        Raises:
            InvalidArgumentError: If ``names`` or ``supplier`` is missing.
        """
        if supplier is None:
            raise InvalidArgumentError("supplier")
        super().__init__(names)
        self._supplier = supplier
        self._logger = structlog.get_logger(__name__) if logger is None else logger
        log_info(
            self._logger,
            "circuit_breaker_metrics_registered",
            calls_metric_name=names.calls_metric_name,
        )

    @classmethod
    def of_circuit_breaker(
        cls,
        breaker: ObservedCircuitBreaker,
        names: MetricNames | None = None,
        *,
        logger: ExporterLogger | None = None,
    ) -> CircuitBreakerMetricsCollector:
        """Create a collector exporting a single breaker."""
        if breaker is None:
            raise InvalidArgumentError("breaker")
        return cls.of_iterable((breaker,), names, logger=logger)

    @classmethod
    def of_iterable(
        cls,
        breakers: Iterable[ObservedCircuitBreaker],
        names: MetricNames | None = None,
        *,
        logger: ExporterLogger | None = None,
    ) -> CircuitBreakerMetricsCollector:
        """Create a collector exporting a fixed collection of breakers."""
        if breakers is None:
            raise InvalidArgumentError("breakers")
        snapshot = tuple(breakers)
        return cls.of_supplier(lambda: snapshot, names, logger=logger)

    @classmethod
    def of_supplier(
        cls,
        supplier: BreakerSupplier,
        names: MetricNames | None = None,
        *,
        logger: ExporterLogger | None = None,
    ) -> CircuitBreakerMetricsCollector:
        """Create a collector re-reading its breakers on every scrape.

        Use this for registries whose breakers are added at runtime.
        """
        resolved = MetricNames.of_defaults() if names is None else names
        return cls(resolved, supplier, logger=logger)

    def collect(self) -> Iterator[Metric]:
        """Yield the private registry families followed by the per-breaker gauges."""
        state_family = GaugeMetricFamily(
            self.names.state_metric_name,
            "The state of the circuit breaker",
            labels=NAME_AND_STATE,
        )
        buffered_calls_family = GaugeMetricFamily(
            self.names.buffered_calls_metric_name,
            "The number of buffered calls",
            labels=NAME_AND_KIND,
        )
        failure_rate_family = GaugeMetricFamily(
            self.names.failure_rate_metric_name,
            "The failure rate",
            labels=NAME,
        )
        slow_call_rate_family = GaugeMetricFamily(
            self.names.slow_call_rate_metric_name,
            "The slow call rate",
            labels=NAME,
        )

        for breaker in self._supplier():
            name = breaker.name
            current = breaker.state
            for state in CircuitState:
                state_family.add_metric(
                    [name, state.value], 1.0 if state == current else 0.0
                )

            metrics = breaker.metrics
            buffered_calls_family.add_metric(
                [name, CallKind.SUCCESSFUL.value], metrics.number_of_successful_calls
            )
            buffered_calls_family.add_metric(
                [name, CallKind.FAILED.value], metrics.number_of_failed_calls
            )
            failure_rate_family.add_metric([name], metrics.failure_rate)
            slow_call_rate_family.add_metric([name], metrics.slow_call_rate)

        yield from self.collector_registry.collect()
        yield state_family
        yield buffered_calls_family
        yield failure_rate_family
        yield slow_call_rate_family

    async def on_state_change(
        self, name: str, old: CircuitState, new: CircuitState
    ) -> None:
        log_fn = log_warning if new in _OPEN_STATES else log_info
        log_fn(
            self._logger,
            "circuit_breaker_state_changed",
            breaker=name,
            old_state=str(old),
            new_state=str(new),
        )

    async def on_call_rejected(self, name: str) -> None:
        self.record_call(name, CallKind.NOT_PERMITTED)

    async def on_call_succeeded(self, name: str, elapsed: float) -> None:
        self.record_call(name, CallKind.SUCCESSFUL, elapsed)

    async def on_call_failed(self, name: str, exc: Exception, elapsed: float) -> None:
        self.record_call(name, CallKind.FAILED, elapsed)

    async def on_call_ignored(
        self, name: str, exc: Exception, elapsed: float
    ) -> None:
        self.record_call(name, CallKind.IGNORED, elapsed)
