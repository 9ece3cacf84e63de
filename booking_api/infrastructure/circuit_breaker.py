"""
Circuit breaker para el proveedor de pagos.

- CLOSED: las llamadas pasan
- OPEN: tras ``fail_max`` fallos seguidos las llamadas fallan de inmediato
- HALF_OPEN: tras ``reset_timeout`` segundos se permite una llamada de prueba
"""

import logging

from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

logger = logging.getLogger(__name__)


class LoggingListener(CircuitBreakerListener):
    def __init__(self, name: str):
        self.name = name

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "Circuit breaker state changed",
            extra={
                "breaker_name": self.name,
                "old_state": old_state.name if old_state else None,
                "new_state": new_state.name,
            },
        )


stripe_breaker = CircuitBreaker(
    fail_max=5,
    reset_timeout=60,
    name="stripe_circuit_breaker",
    listeners=[LoggingListener("stripe")],
)


__all__ = [
    "stripe_breaker",
    "CircuitBreakerError",
]
