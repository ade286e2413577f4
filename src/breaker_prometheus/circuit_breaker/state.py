"""Circuit breaker state primitives."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, runtime_checkable

NOT_ENOUGH_CALLS = -1.0


class CircuitState(StrEnum):
    """Circuit breaker state values."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"
    DISABLED = "disabled"
    FORCED_OPEN = "forced_open"
    METRICS_ONLY = "metrics_only"


@dataclass(frozen=True, slots=True)
class BreakerMetrics:
    """Point-in-time view of the calls buffered by a breaker.

    Attributes:
        number_of_successful_calls: Successful calls in the sliding window.
        number_of_failed_calls: Failed calls in the sliding window.
        failure_rate: Failure percentage, or ``NOT_ENOUGH_CALLS``.
        slow_call_rate: Slow call percentage, or ``NOT_ENOUGH_CALLS``.
    """

    number_of_successful_calls: int = 0
    number_of_failed_calls: int = 0
    failure_rate: float = NOT_ENOUGH_CALLS
    slow_call_rate: float = NOT_ENOUGH_CALLS


@runtime_checkable
class ObservedCircuitBreaker(Protocol):
    """Read-only breaker surface sampled on every scrape.

    Notes:
        Every member is read synchronously from the scrape thread, so
        implementations must not block.
    """

    @property
    def name(self) -> str:
        """Unique breaker name used as the ``name`` label."""

    @property
    def state(self) -> CircuitState:
        """Current breaker state."""

    @property
    def metrics(self) -> BreakerMetrics:
        """Current sliding-window metrics."""
