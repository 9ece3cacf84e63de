"""Interface DraftStorage - almacenamiento clave/valor del borrador."""

from typing import Protocol


class DraftStorage(Protocol):
    """
    Almacenamiento del cliente para el borrador serializado.

    La implementación puede ser memoria, una tabla o cualquier otro
    backend; el asistente solo conoce get/set.
    """

    async def get(self, key: str) -> bytes | None: ...

    async def set(self, key: str, value: bytes) -> None: ...
