"""Circuit breaker exceptions.

Callers can distinguish between:
  - A call being refused because the circuit is open.

``CircuitOpenError`` is returned by ``CircuitBreaker.test()`` rather than
raised. Callers that prefer exceptions may raise the returned value.
"""

from errno import EPERM, errorcode

OPEN_MESSAGE = "Circuit breaker is open"


class CircuitBreakerError(Exception):
    """Base exception for the breaker_state package."""


class CircuitOpenError(CircuitBreakerError):
    """Describes a call refused because the circuit is open.

    Attributes:
        breaker_name: Name of the breaker refusing the call.
        message: Human readable reason, always ``"Circuit breaker is open"``.
        name: Stable error kind, ``"CircuitBreakerOpenError"``.
        code: Machine-readable "operation not permitted" code, ``"EPERM"``.
        errno: Numeric errno matching ``code``.
    """

    name = "CircuitBreakerOpenError"
    code = errorcode[EPERM]
    errno = EPERM

    def __init__(self, breaker_name: str) -> None:
        """Initialize a circuit-open error payload.

        Args:
            breaker_name: Breaker refusing the call.
        """
        self.breaker_name = breaker_name
        self.message = OPEN_MESSAGE
        super().__init__(OPEN_MESSAGE)
