# Key/Value Store Contract
# The credential manager depends only on get/set; persistence belongs to
# the host application. MemoryStore is the in-process implementation used
# by tests and by embedders that persist state themselves.

import threading
from typing import Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Contract the credential manager needs from its store."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Thread-safe in-memory key/value store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value
