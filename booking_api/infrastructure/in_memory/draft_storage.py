from booking_api.application.interfaces.draft_storage import DraftStorage


class InMemoryDraftStorage(DraftStorage):
    """Dict compartido, un espacio de nombres por sesión de cliente."""

    def __init__(self, data: dict[tuple[str, str], bytes] | None = None, namespace: str = "default") -> None:
        self._data = data if data is not None else {}
        self._namespace = namespace

    def for_namespace(self, namespace: str) -> "InMemoryDraftStorage":
        return InMemoryDraftStorage(self._data, namespace)

    async def get(self, key: str) -> bytes | None:
        return self._data.get((self._namespace, key))

    async def set(self, key: str, value: bytes) -> None:
        self._data[(self._namespace, key)] = value
