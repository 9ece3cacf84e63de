from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol


class TransactionManager(Protocol):
    """Unidad de trabajo: el bloque se confirma completo o no se confirma."""

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        yield
