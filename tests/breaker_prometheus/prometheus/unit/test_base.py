from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from typing import Any, cast

import pytest
from prometheus_client import REGISTRY, CollectorRegistry, generate_latest
from prometheus_client.metrics_core import Metric

from breaker_prometheus.errors import InvalidArgumentError
from breaker_prometheus.prometheus.base import (
    KIND_FAILED,
    KIND_IGNORED,
    KIND_NOT_PERMITTED,
    KIND_SUCCESSFUL,
    NAME_AND_KIND,
    NAME_AND_STATE,
    AbstractCircuitBreakerMetrics,
    CallKind,
)
from breaker_prometheus.prometheus.names import MetricNames

_COUNT = "resilience4j_circuitbreaker_calls_count"


class _CallsOnlyMetrics(AbstractCircuitBreakerMetrics):
    def collect(self) -> Iterator[Metric]:
        yield from self.calls_histogram.collect()


def _count(metrics: AbstractCircuitBreakerMetrics, name: str, kind: str) -> float:
    value = metrics.collector_registry.get_sample_value(
        _COUNT, {"name": name, "kind": kind}
    )
    return 0.0 if value is None else value


def test_call_kinds_are_a_closed_set() -> None:
    assert [kind.value for kind in CallKind] == [
        "failed",
        "successful",
        "ignored",
        "not_permitted",
    ]
    assert (KIND_FAILED, KIND_SUCCESSFUL, KIND_IGNORED, KIND_NOT_PERMITTED) == (
        "failed",
        "successful",
        "ignored",
        "not_permitted",
    )


def test_label_conventions() -> None:
    assert NAME_AND_STATE == ("name", "state")
    assert NAME_AND_KIND == ("name", "kind")


def test_constructor_rejects_missing_names() -> None:
    with pytest.raises(InvalidArgumentError) as error:
        _CallsOnlyMetrics(cast(Any, None))

    assert error.value.argument == "names"


def test_constructor_rejects_non_metric_names() -> None:
    with pytest.raises(InvalidArgumentError):
        _CallsOnlyMetrics(cast(Any, "resilience4j_circuitbreaker_calls"))


def test_abstract_base_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        cast(Any, AbstractCircuitBreakerMetrics)(MetricNames.of_defaults())


def test_histogram_registered_into_private_registry() -> None:
    metrics = _CallsOnlyMetrics(MetricNames.of_defaults())

    assert metrics.collector_registry is not REGISTRY
    families = list(metrics.collector_registry.collect())
    assert [family.name for family in families] == [
        "resilience4j_circuitbreaker_calls"
    ]
    assert families[0].type == "histogram"
    assert families[0].documentation == "Total number of calls by kind"


def test_record_call_observes_name_and_kind() -> None:
    metrics = _CallsOnlyMetrics(MetricNames.of_defaults())

    metrics.record_call("backend", CallKind.SUCCESSFUL, 0.25)
    metrics.record_call("backend", "failed", 0.5)

    assert _count(metrics, "backend", "successful") == 1.0
    assert _count(metrics, "backend", "failed") == 1.0
    assert metrics.collector_registry.get_sample_value(
        "resilience4j_circuitbreaker_calls_sum",
        {"name": "backend", "kind": "failed"},
    ) == pytest.approx(0.5)


def test_record_call_rejects_unknown_kind() -> None:
    metrics = _CallsOnlyMetrics(MetricNames.of_defaults())

    with pytest.raises(InvalidArgumentError) as error:
        metrics.record_call("backend", "timeout")

    assert error.value.argument == "kind"
    assert _count(metrics, "backend", "timeout") == 0.0


def test_record_call_rejects_missing_name() -> None:
    metrics = _CallsOnlyMetrics(MetricNames.of_defaults())

    with pytest.raises(InvalidArgumentError):
        metrics.record_call(cast(Any, None), CallKind.FAILED)


def test_two_exporters_never_share_a_registry() -> None:
    names = MetricNames.of_defaults()
    first = _CallsOnlyMetrics(names)
    second = _CallsOnlyMetrics(names)

    first.record_call("backend", CallKind.SUCCESSFUL)

    assert first.collector_registry is not second.collector_registry
    assert _count(first, "backend", "successful") == 1.0
    assert _count(second, "backend", "successful") == 0.0
    assert [family.name for family in first.collector_registry.collect()] == [
        family.name for family in second.collector_registry.collect()
    ]


def test_custom_calls_name_replaces_default() -> None:
    names = MetricNames.custom().calls_metric_name("breaker_calls").build()
    metrics = _CallsOnlyMetrics(names)
    metrics.record_call("backend", CallKind.IGNORED)

    exposition = generate_latest(metrics.collector_registry).decode()

    assert "breaker_calls_count" in exposition
    assert "resilience4j_circuitbreaker_calls" not in exposition


def test_concurrent_recordings_are_partitioned_by_kind() -> None:
    metrics = _CallsOnlyMetrics(MetricNames.of_defaults())
    split = {
        CallKind.SUCCESSFUL: 10,
        CallKind.FAILED: 5,
        CallKind.IGNORED: 2,
        CallKind.NOT_PERMITTED: 3,
    }
    kinds = [kind for kind, count in split.items() for _ in range(count)]

    with ThreadPoolExecutor(max_workers=8) as executor:
        list(executor.map(lambda kind: metrics.record_call("backend", kind), kinds))

    counts = {kind: _count(metrics, "backend", kind.value) for kind in CallKind}
    assert counts == {kind: float(count) for kind, count in split.items()}
    assert sum(counts.values()) == 20.0


def test_exporter_registers_into_scrape_registry_without_collecting() -> None:
    metrics = _CallsOnlyMetrics(MetricNames.of_defaults())
    scrape_registry = CollectorRegistry()

    scrape_registry.register(metrics)
    metrics.record_call("backend", CallKind.FAILED)

    assert (
        scrape_registry.get_sample_value(
            _COUNT, {"name": "backend", "kind": "failed"}
        )
        == 1.0
    )
