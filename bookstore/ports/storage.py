from typing import Any, Protocol


class KeyValueStorePort(Protocol):
    """
    Client-local key/value storage (the browser's localStorage, or a file on
    desktop). Values are JSON-serialisable.
    """

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None when absent or unreadable."""
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def remove(self, key: str) -> None:
        ...
