"""Observability hooks for circuit breakers."""

from typing import Protocol

from breaker_prometheus.circuit_breaker.state import CircuitState


class BreakerListener(Protocol):
    """Listener protocol for circuit breaker events.

    Notes:
        Each completed call is reported through exactly one of
        ``on_call_succeeded``, ``on_call_failed`` or ``on_call_ignored``.
        Calls refused by an open breaker never run and are reported through
        ``on_call_rejected`` only.
    """

    async def on_state_change(
        self, name: str, old: CircuitState, new: CircuitState
    ) -> None:
        """Handle circuit state transitions."""

    async def on_call_rejected(self, name: str) -> None:
        """Handle call rejection while the circuit is open."""

    async def on_call_succeeded(self, name: str, elapsed: float) -> None:
        """Handle successful protected call completion."""

    async def on_call_failed(self, name: str, exc: Exception, elapsed: float) -> None:
        """Handle failed protected call completion."""

    async def on_call_ignored(
        self, name: str, exc: Exception, elapsed: float
    ) -> None:
        """Handle a call whose exception is excluded from failure counting."""
