"""Registration contract shared by every circuit breaker metrics exporter."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from enum import StrEnum

from prometheus_client import CollectorRegistry, Histogram
from prometheus_client.metrics_core import Metric

from breaker_prometheus.errors import InvalidArgumentError
from breaker_prometheus.prometheus.names import MetricNames


class CallKind(StrEnum):
    """Outcome of a single call made through a circuit breaker."""

    FAILED = "failed"
    SUCCESSFUL = "successful"
    IGNORED = "ignored"
    NOT_PERMITTED = "not_permitted"


KIND_FAILED = CallKind.FAILED.value
KIND_SUCCESSFUL = CallKind.SUCCESSFUL.value
KIND_IGNORED = CallKind.IGNORED.value
KIND_NOT_PERMITTED = CallKind.NOT_PERMITTED.value

NAME = ("name",)
NAME_AND_STATE = ("name", "state")
NAME_AND_KIND = ("name", "kind")

CALLS_DOCUMENTATION = "Total number of calls by kind"


class AbstractCircuitBreakerMetrics(ABC):
    """Base Prometheus collector for circuit breaker metrics.

    Each instance owns a private ``CollectorRegistry`` holding the calls
    histogram, so two exporters never share series. Subclasses implement
    ``collect`` to add the per-breaker gauge families.

    Attributes:
        names: Metric family names used by this exporter.
        collector_registry: Registry owned by this exporter.
        calls_histogram: Histogram of calls labeled by ``(name, kind)``.
    """

    def __init__(self, names: MetricNames) -> None:
        """Create the private registry and register the calls histogram.

        Args:
            names: Metric family names.

        Raises:
            InvalidArgumentError: If ``names`` is missing.
        """
        if names is None:
            raise InvalidArgumentError("names")
        if not isinstance(names, MetricNames):
            raise InvalidArgumentError("names", "must be a MetricNames instance")
        self.names = names
        self.collector_registry = CollectorRegistry(auto_describe=True)
        self.calls_histogram = Histogram(
            names.calls_metric_name,
            CALLS_DOCUMENTATION,
            labelnames=NAME_AND_KIND,
            registry=self.collector_registry,
        )

    def record_call(
        self, name: str, kind: CallKind | str, elapsed: float = 0.0
    ) -> None:
        """Observe one call of ``kind`` for breaker ``name``.

        Args:
            name: Breaker name.
            kind: One of the four ``CallKind`` values.
            elapsed: Call duration in seconds.

        Raises:
            InvalidArgumentError: If ``name`` is missing or ``kind`` is unknown.
        """
        if name is None:
            raise InvalidArgumentError("name")
        try:
            call_kind = CallKind(kind)
        except ValueError as error:
            choices = ", ".join(member.value for member in CallKind)
            raise InvalidArgumentError("kind", f"must be one of: {choices}") from error
        self.calls_histogram.labels(name, call_kind.value).observe(elapsed)

    def describe(self) -> list[Metric]:
        return []

    @abstractmethod
    def collect(self) -> Iterable[Metric]:
        """Return every metric family exported for the observed breakers."""
