"""Shared error types for breaker_prometheus."""


class BreakerPrometheusError(Exception):
    """Base exception for the breaker_prometheus package."""


class InvalidArgumentError(BreakerPrometheusError, ValueError):
    """Raised when a required argument is missing or unusable.

    Attributes:
        argument: Name of the rejected argument.
    """

    def __init__(self, argument: str, reason: str = "must not be None") -> None:
        """Initialize an invalid-argument exception payload.

        Args:
            argument: Argument that was rejected.
            reason: Human readable reason for the rejection.
        """
        self.argument = argument
        super().__init__(f"{argument} {reason}")
