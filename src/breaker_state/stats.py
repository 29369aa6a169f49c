"""Execution-outcome counters owned by a circuit breaker."""

from __future__ import annotations

import threading
from collections.abc import Callable
from enum import StrEnum

from breaker_state.state import StatsSnapshot

# Largest integer a float64 consumer of exported metrics can represent exactly.
MAX_SAFE_INTEGER = 2**53 - 1


class Metric(StrEnum):
    """Metric names maintained by the breaker itself."""

    EXECUTIONS = "executions"
    SUCCESSES = "successes"
    FAILURES = "failures"


class BreakerStats:
    """Named metric accumulator with wrap-around increments.

    The known ``Metric`` values exist from construction. Any other string name
    is created at 0 on first use.
    """

    def __init__(
        self,
        *,
        is_open: Callable[[], bool] | None = None,
        lock: threading.RLock | None = None,
    ) -> None:
        """Build an empty counter set.

        Args:
            is_open: Callable reporting whether the owning breaker is open.
                Snapshots report ``open=False`` when omitted.
            lock: Re-entrant lock shared with the owning breaker so state
                transitions and counter updates are serialized together.
        """
        self._counts: dict[str, int] = {str(metric): 0 for metric in Metric}
        self._is_open = is_open
        self._lock = threading.RLock() if lock is None else lock

    def increment(self, name: str) -> int:
        """Add one to ``name`` and return the new value.

        A metric sitting at ``MAX_SAFE_INTEGER`` restarts from zero, so the
        result is 1.
        """
        key = str(name)
        with self._lock:
            current = self._counts.get(key, 0)
            if current >= MAX_SAFE_INTEGER:
                current = 0
            current += 1
            self._counts[key] = current
            return current

    def get(self, name: str) -> int:
        """Return the current value of ``name``, 0 when never seen."""
        with self._lock:
            return self._counts.get(str(name), 0)

    def reset(self, name: str) -> None:
        """Set ``name`` back to 0."""
        with self._lock:
            self._counts[str(name)] = 0

    def reset_all(self) -> None:
        """Set every known metric back to 0."""
        with self._lock:
            for key in self._counts:
                self._counts[key] = 0

    def snapshot(self) -> StatsSnapshot:
        """Return an immutable copy of all counters plus the breaker open flag."""
        with self._lock:
            counts = dict(self._counts)
            is_open = False if self._is_open is None else self._is_open()
        return StatsSnapshot(
            executions=counts[Metric.EXECUTIONS],
            successes=counts[Metric.SUCCESSES],
            failures=counts[Metric.FAILURES],
            open=is_open,
            counts=counts,
        )
