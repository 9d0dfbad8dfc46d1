from dealdesk.domain.ports import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value
