"""
Remote store: the shared multi-device mirror of guests and configuration.

Firestore shape: collection ``guests/{guest_id}`` with one document per
person, and a single ``config/main`` document holding categories, winners
and showDate.
"""

from __future__ import annotations

import copy
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

GuestDocs = List[Tuple[str, Dict[str, Any]]]
GuestsCallback = Callable[[GuestDocs], None]
ConfigCallback = Callable[[Dict[str, Any]], None]

GUESTS_COLLECTION = "guests"
CONFIG_COLLECTION = "config"
CONFIG_DOCUMENT = "main"


class RemoteStore(ABC):
    """Blocking remote operations; the sync client runs them off the caller's path"""

    @abstractmethod
    def set_guest(self, guest_id: str, data: Dict[str, Any]) -> None: ...

    @abstractmethod
    def delete_guest(self, guest_id: str) -> None: ...

    @abstractmethod
    def merge_config(self, fields: Dict[str, Any]) -> None: ...

    @abstractmethod
    def watch_guests(self, callback: GuestsCallback) -> Callable[[], None]:
        """Deliver the full guest collection now and on every change"""

    @abstractmethod
    def watch_config(self, callback: ConfigCallback) -> Callable[[], None]:
        """Deliver the config document now (if it exists) and on every change"""


class FirestoreRemoteStore(RemoteStore):
    def __init__(self, client):
        self.client = client

    def _config_ref(self):
        return self.client.collection(CONFIG_COLLECTION).document(CONFIG_DOCUMENT)

    def set_guest(self, guest_id: str, data: Dict[str, Any]) -> None:
        self.client.collection(GUESTS_COLLECTION).document(guest_id).set(data)

    def delete_guest(self, guest_id: str) -> None:
        self.client.collection(GUESTS_COLLECTION).document(guest_id).delete()

    def merge_config(self, fields: Dict[str, Any]) -> None:
        self._config_ref().set(fields, merge=True)

    def watch_guests(self, callback: GuestsCallback) -> Callable[[], None]:
        def on_snapshot(docs, changes, read_time):
            callback([(doc.id, doc.to_dict() or {}) for doc in docs])

        watch = self.client.collection(GUESTS_COLLECTION).on_snapshot(on_snapshot)
        return watch.unsubscribe

    def watch_config(self, callback: ConfigCallback) -> Callable[[], None]:
        def on_snapshot(docs, changes, read_time):
            for doc in docs:
                if doc.exists:
                    callback(doc.to_dict() or {})

        watch = self._config_ref().on_snapshot(on_snapshot)
        return watch.unsubscribe


class InMemoryRemoteStore(RemoteStore):
    """Process-local stand-in for Firestore shared by several devices.

    Every write notifies all watchers with a full snapshot, synchronously on
    the writing thread. Values are deep-copied in and out so devices never
    share mutable state.
    """

    def __init__(self):
        self._guests: Dict[str, Dict[str, Any]] = {}
        self._config: Dict[str, Any] = {}
        self._guest_watchers: List[GuestsCallback] = []
        self._config_watchers: List[ConfigCallback] = []
        self._lock = threading.RLock()

    def set_guest(self, guest_id: str, data: Dict[str, Any]) -> None:
        with self._lock:
            self._guests[guest_id] = copy.deepcopy(data)
            self._notify_guests()

    def delete_guest(self, guest_id: str) -> None:
        with self._lock:
            self._guests.pop(guest_id, None)
            self._notify_guests()

    def merge_config(self, fields: Dict[str, Any]) -> None:
        with self._lock:
            self._config.update(copy.deepcopy(fields))
            self._notify_config()

    def watch_guests(self, callback: GuestsCallback) -> Callable[[], None]:
        with self._lock:
            self._guest_watchers.append(callback)
            callback(self.guest_snapshot())
        return lambda: self._unwatch(self._guest_watchers, callback)

    def watch_config(self, callback: ConfigCallback) -> Callable[[], None]:
        with self._lock:
            self._config_watchers.append(callback)
            if self._config:
                callback(copy.deepcopy(self._config))
        return lambda: self._unwatch(self._config_watchers, callback)

    def guest_snapshot(self) -> GuestDocs:
        with self._lock:
            return [(guest_id, copy.deepcopy(data)) for guest_id, data in self._guests.items()]

    def config_snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._config)

    def _unwatch(self, watchers: list, callback) -> None:
        with self._lock:
            if callback in watchers:
                watchers.remove(callback)

    def _notify_guests(self) -> None:
        for callback in list(self._guest_watchers):
            callback(self.guest_snapshot())

    def _notify_config(self) -> None:
        for callback in list(self._config_watchers):
            callback(copy.deepcopy(self._config))
