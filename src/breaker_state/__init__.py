"""Lazily evaluated circuit breaker state.

This package implements the state half of the circuit breaker pattern from
*Release It!*: callers ask ``test()`` before calling a dependency and report
the outcome with ``succeed()`` or ``fail()``. The breaker never runs the
protected work itself.

Key behavior notes:
  - Only ``CLOSED`` and ``OPEN`` are stored. ``HALF_OPEN`` is derived from the
    time elapsed since the breaker opened; there are no timers.
  - Half-open probing is permissive: every caller is admitted until the first
    recorded outcome closes or reopens the breaker.
  - ``test()`` returns a ``CircuitOpenError`` instead of raising it.
"""

from breaker_state.breaker import CircuitBreaker, CircuitBreakerConfig, create_breaker
from breaker_state.exceptions import (
    CircuitBreakerError,
    CircuitOpenError,
)
from breaker_state.metrics import BreakerListener
from breaker_state.settings import BreakerSettings, create_breaker_from_settings
from breaker_state.state import CircuitState, StatsSnapshot
from breaker_state.stats import MAX_SAFE_INTEGER, BreakerStats, Metric

__all__ = [
    "MAX_SAFE_INTEGER",
    "BreakerListener",
    "BreakerSettings",
    "BreakerStats",
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitBreakerError",
    "CircuitOpenError",
    "CircuitState",
    "Metric",
    "StatsSnapshot",
    "create_breaker",
    "create_breaker_from_settings",
]
