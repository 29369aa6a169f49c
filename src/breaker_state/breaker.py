"""Core circuit breaker implementation."""

import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from breaker_state.exceptions import CircuitOpenError
from breaker_state.logging import (
    BreakerLogger,
    get_logger,
    log_exception,
    log_info,
    log_warning,
)
from breaker_state.metrics import BreakerListener
from breaker_state.state import CircuitState
from breaker_state.stats import BreakerStats, Metric

Clock = Callable[[], float]

_Event = tuple[str, tuple[Any, ...]]


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass(slots=True)
class CircuitBreakerConfig:
    """Circuit breaker configuration values.

    Attributes:
        max_failures: Consecutive failures while ``CLOSED`` before opening.
        reset_timeout: Milliseconds to stay ``OPEN`` before admitting probes.
    """

    max_failures: int = 3
    reset_timeout: int = 10_000

    def __post_init__(self) -> None:
        if self.max_failures < 1:
            raise ValueError("max_failures must be >= 1")
        if self.reset_timeout < 0:
            raise ValueError("reset_timeout must be >= 0")


class CircuitBreaker:
    """Guard state for calls to an unreliable dependency.

    The breaker never runs the protected work. Callers ask ``test()`` before
    each call and report the outcome with ``succeed()`` or ``fail()``.

    Only ``CLOSED`` and ``OPEN`` are stored. ``HALF_OPEN`` is derived on every
    query from the time elapsed since the breaker opened, so no timers are
    involved.
    """

    def __init__(
        self,
        name: str = "default",
        *,
        config: CircuitBreakerConfig | None = None,
        clock: Clock | None = None,
        logger: BreakerLogger | None = None,
        listeners: Sequence[BreakerListener] | None = None,
    ) -> None:
        """Build a closed circuit breaker with zeroed counters.

        Args:
            name: Breaker name used in log events and errors.
            config: Breaker behavior configuration. Defaults to
                ``CircuitBreakerConfig()``.
            clock: Callable returning a monotonic time in milliseconds.
                Defaults to ``time.monotonic``.
            logger: Structured logger for transition events.
            listeners: Optional listener hooks for breaker events.
        """
        self.name = name
        self.config = CircuitBreakerConfig() if config is None else config
        self._clock = clock
        self._logger = get_logger(__name__) if logger is None else logger
        self._listeners = tuple(listeners) if listeners is not None else ()
        self._lock = threading.RLock()
        self._state = CircuitState.CLOSED
        self._failures = 0
        self._opened_at: float | None = None
        self._stats = BreakerStats(is_open=self.is_open, lock=self._lock)

    @classmethod
    def create(
        cls,
        name: str = "default",
        *,
        max_failures: int = 3,
        reset_timeout: int = 10_000,
        **kwargs: Any,
    ) -> "CircuitBreaker":
        """Build a breaker from plain threshold values."""
        config = CircuitBreakerConfig(
            max_failures=max_failures,
            reset_timeout=reset_timeout,
        )
        return cls(name, config=config, **kwargs)

    @property
    def max_failures(self) -> int:
        return self.config.max_failures

    @property
    def reset_timeout(self) -> int:
        return self.config.reset_timeout

    @property
    def failures(self) -> int:
        """Consecutive failures counted while closed."""
        with self._lock:
            return self._failures

    @property
    def opened_at(self) -> float | None:
        """Clock reading, in milliseconds, when the breaker last opened."""
        with self._lock:
            return self._opened_at

    @property
    def stats(self) -> BreakerStats:
        return self._stats

    @property
    def state(self) -> CircuitState:
        """Observed state, with ``HALF_OPEN`` derived from elapsed time."""
        with self._lock:
            return self._observe(self._now())

    def _now(self) -> float:
        if self._clock is None:
            return _monotonic_ms()
        return self._clock()

    def _observe(self, now: float) -> CircuitState:
        if self._state == CircuitState.CLOSED or self._opened_at is None:
            return CircuitState.CLOSED
        if now - self._opened_at >= self.config.reset_timeout:
            return CircuitState.HALF_OPEN
        return CircuitState.OPEN

    def is_closed(self) -> bool:
        return self.state == CircuitState.CLOSED

    def is_open(self) -> bool:
        return self.state == CircuitState.OPEN

    def is_half_open(self) -> bool:
        return self.state == CircuitState.HALF_OPEN

    def record_success(self) -> None:
        """Record a successful protected call.

        A success while half-open closes the breaker. A success while strictly
        open is counted but leaves the breaker open.
        """
        with self._lock:
            observed = self._observe(self._now())
            if observed == CircuitState.CLOSED:
                self._failures = 0
            elif observed == CircuitState.HALF_OPEN:
                self._state = CircuitState.CLOSED
                self._opened_at = None
                self._failures = 0
            self._stats.increment(Metric.SUCCESSES)
            self._stats.increment(Metric.EXECUTIONS)

        events: list[_Event] = [("on_success", (self.name,))]
        if observed == CircuitState.HALF_OPEN:
            log_info(self._logger, "circuit_breaker.closed", breaker=self.name)
            events.append(
                (
                    "on_state_change",
                    (self.name, CircuitState.HALF_OPEN, CircuitState.CLOSED),
                )
            )
        self._emit(events)

    def record_failure(self) -> None:
        """Record a failed protected call.

        Reaching ``max_failures`` while closed opens the breaker. A failure
        while half-open reopens it and restarts the reset timeout.
        """
        opened = False
        with self._lock:
            now = self._now()
            observed = self._observe(now)
            if observed == CircuitState.CLOSED:
                self._failures += 1
                if self._failures >= self.config.max_failures:
                    self._open(now)
                    opened = True
            elif observed == CircuitState.HALF_OPEN:
                self._open(now)
                opened = True
            self._stats.increment(Metric.FAILURES)
            self._stats.increment(Metric.EXECUTIONS)

        events: list[_Event] = [("on_failure", (self.name,))]
        if opened:
            event = (
                "circuit_breaker.opened"
                if observed == CircuitState.CLOSED
                else "circuit_breaker.reopened"
            )
            log_warning(
                self._logger,
                event,
                breaker=self.name,
                max_failures=self.config.max_failures,
                reset_timeout=self.config.reset_timeout,
            )
            events.append(
                ("on_state_change", (self.name, observed, CircuitState.OPEN))
            )
        self._emit(events)

    def _open(self, now: float) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = now
        self._failures = 0

    def succeed(self) -> None:
        """Record a success. Alias of ``record_success``."""
        self.record_success()

    def fail(self) -> None:
        """Record a failure. Alias of ``record_failure``."""
        self.record_failure()

    def test(self) -> CircuitOpenError | None:
        """Return an error while the circuit is open, ``None`` otherwise.

        Half-open breakers return ``None`` so callers may probe the
        dependency. Counters are never touched.
        """
        with self._lock:
            if self._observe(self._now()) != CircuitState.OPEN:
                return None
        self._emit([("on_call_rejected", (self.name,))])
        return CircuitOpenError(self.name)

    def _emit(self, events: list[_Event]) -> None:
        for hook, args in events:
            for listener in self._listeners:
                try:
                    getattr(listener, hook)(*args)
                except Exception:
                    log_exception(
                        self._logger,
                        "circuit_breaker.listener_failed",
                        breaker=self.name,
                        hook=hook,
                    )


def create_breaker(
    name: str = "default",
    *,
    max_failures: int = 3,
    reset_timeout: int = 10_000,
    **kwargs: Any,
) -> CircuitBreaker:
    """Build a closed breaker. Equivalent to ``CircuitBreaker.create``."""
    return CircuitBreaker.create(
        name,
        max_failures=max_failures,
        reset_timeout=reset_timeout,
        **kwargs,
    )
