from __future__ import annotations

from dataclasses import dataclass, field

from breaker_prometheus.circuit_breaker import BreakerMetrics, CircuitState


class FakeLogger:
    """Capture structured logger events for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict[str, object]]] = []

    def _record(self, level: str, event: str, **kwargs: object) -> None:
        self.calls.append((level, event, kwargs))

    def info(self, event: str, **kwargs: object) -> None:
        self._record("info", event, **kwargs)

    def warning(self, event: str, **kwargs: object) -> None:
        self._record("warning", event, **kwargs)


@dataclass(slots=True)
class FakeBreaker:
    """Mutable stand-in for an observed circuit breaker."""

    name: str
    state: CircuitState = CircuitState.CLOSED
    metrics: BreakerMetrics = field(default_factory=BreakerMetrics)
