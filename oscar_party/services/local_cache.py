"""
Local cache: the synchronous key-value store every read is served from.

Four collections live under fixed storage keys, each holding the JSON form
of a list, list, mapping and string. A stored value that cannot be parsed
reads back as absent.
"""

from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy.orm import sessionmaker

from oscar_party.core.keys import Collection
from oscar_party.models import CacheEntry

logger = logging.getLogger(__name__)

StorageListener = Callable[[str], None]


class StorageNotifier:
    """Storage-level change signal shared by caches over the same storage.

    A write through one cache is reported to every *other* attached cache,
    like the browser ``storage`` event: only the key is known, not why it
    changed.
    """

    def __init__(self):
        self._listeners: List[Tuple["LocalCache", StorageListener]] = []
        self._lock = threading.Lock()

    def listen(self, cache: "LocalCache", listener: StorageListener) -> Callable[[], None]:
        entry = (cache, listener)
        with self._lock:
            self._listeners.append(entry)

        def unlisten():
            with self._lock:
                if entry in self._listeners:
                    self._listeners.remove(entry)

        return unlisten

    def notify(self, origin: "LocalCache", key: str) -> None:
        with self._lock:
            targets = [listener for cache, listener in self._listeners if cache is not origin]
        for listener in targets:
            try:
                listener(key)
            except Exception as e:
                logger.error(f"Storage listener failed for {key}: {e}")


class LocalCache(ABC):
    """Synchronous read/write of whole collections"""

    def __init__(self, notifier: Optional[StorageNotifier] = None):
        self.notifier = notifier
        # Serializes read-modify-write against snapshots applied from listener threads
        self.lock = threading.RLock()

    @abstractmethod
    def _load(self, key: str) -> Optional[str]: ...

    @abstractmethod
    def _store(self, key: str, raw: str) -> None: ...

    def read(self, collection: Collection) -> Any:
        """Return the stored value, or None when absent or unreadable"""
        key = collection.storage_key
        raw = self._load(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Ignoring corrupt cache entry {key}: {e}")
            return None

    def write(self, collection: Collection, value: Any) -> None:
        key = collection.storage_key
        self._store(key, json.dumps(value, ensure_ascii=False))
        if self.notifier is not None:
            self.notifier.notify(self, key)

    def add_storage_listener(self, listener: StorageListener) -> Callable[[], None]:
        """Listen for writes made through other caches sharing this storage"""
        if self.notifier is None:
            return lambda: None
        return self.notifier.listen(self, listener)


class MemoryLocalCache(LocalCache):
    """Cache over a plain dict of serialized entries.

    Pass the same ``storage`` dict and notifier to model several tabs of one
    browser profile.
    """

    def __init__(self, storage: Optional[Dict[str, str]] = None, notifier: Optional[StorageNotifier] = None):
        super().__init__(notifier)
        self.storage = storage if storage is not None else {}

    def _load(self, key: str) -> Optional[str]:
        return self.storage.get(key)

    def _store(self, key: str, raw: str) -> None:
        self.storage[key] = raw


class SqlLocalCache(LocalCache):
    """Cache persisted as one ``cache_entries`` row per storage key"""

    def __init__(self, session_factory: sessionmaker, notifier: Optional[StorageNotifier] = None):
        super().__init__(notifier)
        self.session_factory = session_factory

    def _load(self, key: str) -> Optional[str]:
        with self.session_factory() as db:
            entry = db.get(CacheEntry, key)
            return entry.value if entry else None

    def _store(self, key: str, raw: str) -> None:
        with self.session_factory() as db:
            db.merge(CacheEntry(key=key, value=raw))
            db.commit()
