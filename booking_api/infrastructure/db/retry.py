"""
Reintentos ante fallos transitorios de la base de datos.

Los deadlocks y lock timeouts se reintentan con backoff exponencial; cualquier
otro error se propaga de inmediato.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_MARKERS = (
    "1213",  # MySQL deadlock
    "1205",  # MySQL lock wait timeout
    "40P01",  # PostgreSQL deadlock_detected
    "40001",  # PostgreSQL serialization_failure
    "database is locked",  # SQLite
)


def is_deadlock_error(error: Exception) -> bool:
    if isinstance(error, (OperationalError, DBAPIError)):
        error_str = str(error)
        return any(marker in error_str for marker in TRANSIENT_MARKERS)
    return False


async def retry_on_deadlock(
    func: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 0.1,
) -> T:
    """
    Ejecuta ``func`` y lo reintenta mientras falle por deadlock.

    El backoff es ``base_delay * (2 ** attempt)``.

    Raises:
        La excepción original si no es un deadlock o se agotan los intentos.
    """
    for attempt in range(max_attempts):
        try:
            return await func()
        except Exception as e:
            if not is_deadlock_error(e) or attempt == max_attempts - 1:
                if is_deadlock_error(e):
                    logger.error(
                        "Database deadlock persists after max retries",
                        extra={"attempts": max_attempts, "error": str(e)},
                    )
                raise

            delay = base_delay * (2 ** attempt)
            logger.warning(
                "Database deadlock detected, retrying",
                extra={
                    "attempt": attempt + 1,
                    "max_attempts": max_attempts,
                    "retry_delay": delay,
                    "error": str(e),
                },
            )
            await asyncio.sleep(delay)

    raise RuntimeError("retry_on_deadlock called with max_attempts < 1")
