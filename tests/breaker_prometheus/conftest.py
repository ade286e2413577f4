from __future__ import annotations

import pytest

from tests.breaker_prometheus.support.fakes import FakeBreaker, FakeLogger


@pytest.fixture
def fake_logger() -> FakeLogger:
    """Provide a fresh structured logger test double per test."""
    return FakeLogger()


@pytest.fixture
def fake_breaker() -> FakeBreaker:
    """Provide a closed breaker with an empty sliding window."""
    return FakeBreaker("backend")
