"""
String-keyed memoisation store.

A Cache is always handed to the code that uses it; nothing in the package
keeps one as module state.
"""

import logging
import threading
from typing import Callable, Generic, Optional, TypeVar

LOG = logging.getLogger(__name__)

T = TypeVar("T")


class Cache(Generic[T]):
    """Thread-safe key → value store."""

    def __init__(self) -> None:
        self._data: dict[str, T] = {}
        self._lock = threading.Lock()

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: str, default: Optional[T] = None) -> Optional[T]:
        return self._data.get(key, default)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def cache_and_return(self, key: str, factory: Callable[[], T]) -> T:
        """Return the value stored under ``key``, computing it with ``factory`` on a miss."""
        if key in self._data:
            return self._data[key]
        with self._lock:
            # another writer may have filled the key while we waited
            if key not in self._data:
                LOG.debug("cache miss: %s", key)
                self._data[key] = factory()
            return self._data[key]
