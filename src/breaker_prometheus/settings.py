from __future__ import annotations

import structlog
from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from breaker_prometheus.logging import configure_structlog, get_log_level_value
from breaker_prometheus.prometheus.names import (
    DEFAULT_CIRCUIT_BREAKER_BUFFERED_CALLS,
    DEFAULT_CIRCUIT_BREAKER_CALLS,
    DEFAULT_CIRCUIT_BREAKER_FAILURE_RATE,
    DEFAULT_CIRCUIT_BREAKER_SLOW_CALL_RATE,
    DEFAULT_CIRCUIT_BREAKER_STATE,
    MetricNames,
)

ENV_PREFIX = "BREAKER_PROMETHEUS_"


def prefixed_settings_config(prefix: str) -> SettingsConfigDict:
    """Build standard Pydantic settings config for prefixed environments."""
    return SettingsConfigDict(env_prefix=prefix, case_sensitive=False)


class MetricNamesSettings(BaseSettings):
    """Environment overrides for exported metric family names."""

    model_config = prefixed_settings_config(ENV_PREFIX)

    calls_metric_name: str = DEFAULT_CIRCUIT_BREAKER_CALLS
    state_metric_name: str = DEFAULT_CIRCUIT_BREAKER_STATE
    buffered_calls_metric_name: str = DEFAULT_CIRCUIT_BREAKER_BUFFERED_CALLS
    failure_rate_metric_name: str = DEFAULT_CIRCUIT_BREAKER_FAILURE_RATE
    slow_call_rate_metric_name: str = DEFAULT_CIRCUIT_BREAKER_SLOW_CALL_RATE
    log_level: str = "INFO"

    @field_validator(
        "calls_metric_name",
        "state_metric_name",
        "buffered_calls_metric_name",
        "failure_rate_metric_name",
        "slow_call_rate_metric_name",
        mode="before",
    )
    @classmethod
    def _validate_metric_name(cls, value: object, info: ValidationInfo) -> object:
        if not isinstance(value, str):
            return value
        normalized = value.strip()
        if not normalized:
            raise ValueError(f"{info.field_name} must be non-empty")
        return normalized

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        get_log_level_value(value)
        return value.strip().upper()

    def to_metric_names(self) -> MetricNames:
        """Build ``MetricNames`` from the configured overrides."""
        return (
            MetricNames.custom()
            .calls_metric_name(self.calls_metric_name)
            .state_metric_name(self.state_metric_name)
            .buffered_calls_metric_name(self.buffered_calls_metric_name)
            .failure_rate_metric_name(self.failure_rate_metric_name)
            .slow_call_rate_metric_name(self.slow_call_rate_metric_name)
            .build()
        )

    def configure_logging(self) -> structlog.stdlib.BoundLogger:
        """Configure structlog at ``log_level`` and return the exporter logger."""
        return configure_structlog(log_level=self.log_level)
