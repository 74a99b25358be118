"""
Event channel: "a collection changed" notifications within and across tabs
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from oscar_party.core.keys import Collection, EventType, EVENT_COLLECTIONS
from oscar_party.services.local_cache import LocalCache

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL_NAME = "oscar-party"


@dataclass
class SyncMessage:
    type: str
    payload: Dict[str, Any] = field(default_factory=dict)
    ts: int = field(default_factory=lambda: int(time.time() * 1000))

    @property
    def collection(self) -> Optional[Collection]:
        """The collection this message is about, if it can be told"""
        if self.type == EventType.STORAGE_CHANGE.value:
            return Collection.from_storage_key(self.payload.get("key", ""))
        try:
            return EVENT_COLLECTIONS.get(EventType(self.type))
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "payload": self.payload, "ts": self.ts}


SyncCallback = Callable[[SyncMessage], None]


class BroadcastHub:
    """Cross-tab transport: channels joined under the same name hear each
    other's messages. A sender never receives its own post."""

    def __init__(self):
        self._channels: Dict[str, List["EventChannel"]] = {}
        self._lock = threading.Lock()

    def join(self, name: str, channel: "EventChannel") -> Callable[[], None]:
        with self._lock:
            self._channels.setdefault(name, []).append(channel)
            logger.info(f"Channel joined {name}. Total channels: {len(self._channels[name])}")

        def leave():
            with self._lock:
                members = self._channels.get(name, [])
                if channel in members:
                    members.remove(channel)
                if not members:
                    self._channels.pop(name, None)

        return leave

    def post(self, name: str, sender: "EventChannel", message: SyncMessage) -> None:
        with self._lock:
            receivers = [ch for ch in self._channels.get(name, []) if ch is not sender]
        for channel in receivers:
            channel.deliver(message)

    def channel_count(self, name: str) -> int:
        return len(self._channels.get(name, []))


class EventChannel:
    """Per-tab publish/subscribe endpoint.

    Listeners receive messages published in this tab, messages posted by
    other tabs through the hub, and storage-change signals raised by the
    local cache when another tab writes the shared storage.
    """

    def __init__(
        self,
        name: str = DEFAULT_CHANNEL_NAME,
        hub: Optional[BroadcastHub] = None,
        cache: Optional[LocalCache] = None,
    ):
        self.name = name
        self.hub = hub
        self._listeners: List[SyncCallback] = []
        self._lock = threading.Lock()
        self._leave = hub.join(name, self) if hub is not None else None
        self._unwatch = cache.add_storage_listener(self._on_storage_change) if cache is not None else None

    def publish(self, type: EventType | str, payload: Optional[Dict[str, Any]] = None) -> SyncMessage:
        message = SyncMessage(type=EventType(type).value, payload=dict(payload or {}))
        if self.hub is not None:
            self.hub.post(self.name, self, message)
        self.deliver(message)
        return message

    def on_sync(self, callback: SyncCallback) -> Callable[[], None]:
        """Register a listener for every message; returns its unsubscribe"""
        with self._lock:
            self._listeners.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return unsubscribe

    def subscribe(self, collection: Collection | str, handler: SyncCallback) -> Callable[[], None]:
        """Register a listener for messages about one collection"""
        wanted = Collection(collection)

        def filtered(message: SyncMessage):
            if message.collection == wanted:
                handler(message)

        return self.on_sync(filtered)

    def deliver(self, message: SyncMessage) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for callback in listeners:
            try:
                callback(message)
            except Exception as e:
                logger.error(f"Error delivering {message.type} on {self.name}: {e}")

    def close(self) -> None:
        if self._leave is not None:
            self._leave()
            self._leave = None
        if self._unwatch is not None:
            self._unwatch()
            self._unwatch = None
        with self._lock:
            self._listeners.clear()

    def _on_storage_change(self, key: str) -> None:
        if Collection.from_storage_key(key) is None:
            return
        self.deliver(SyncMessage(type=EventType.STORAGE_CHANGE.value, payload={"key": key}))
