"""Observability hooks for circuit breakers."""

from typing import Protocol

from breaker_state.state import CircuitState


class BreakerListener(Protocol):
    """Listener protocol for circuit breaker events.

    Notes:
        Hooks run after the breaker commits a change and outside its lock.
        ``HALF_OPEN`` is never stored, so ``on_state_change`` reports it only as
        the ``old`` side of a probe outcome (``HALF_OPEN -> CLOSED`` or
        ``HALF_OPEN -> OPEN``).
    """

    def on_state_change(self, name: str, old: CircuitState, new: CircuitState) -> None:
        """Handle circuit state transitions."""

    def on_call_rejected(self, name: str) -> None:
        """Handle a guard check refused while the circuit is open."""

    def on_success(self, name: str) -> None:
        """Handle a recorded successful outcome."""

    def on_failure(self, name: str) -> None:
        """Handle a recorded failed outcome."""
