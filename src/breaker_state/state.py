"""Circuit breaker state primitives."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType


class CircuitState(StrEnum):
    """Circuit breaker state values."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass(frozen=True)
class StatsSnapshot:
    """Point-in-time view of breaker counters useful for metrics/logging.

    Attributes:
        executions: Outcomes recorded in total.
        successes: Successful outcomes recorded.
        failures: Failed outcomes recorded.
        open: Whether the breaker was strictly open when the snapshot was taken.
        counts: Every metric value, including custom metric names.
    """

    executions: int
    successes: int
    failures: int
    open: bool
    counts: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze the counts mapping to keep snapshots read-only."""
        object.__setattr__(self, "counts", MappingProxyType(dict(self.counts)))
