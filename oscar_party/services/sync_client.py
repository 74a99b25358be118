"""
Sync client: keeps the local cache eventually consistent with the remote store.

Outbound writes are fire-and-forget on a single worker thread, so they
reach the remote in the order they were issued. Inbound snapshots replace
the matching cache collection wholesale and are announced on the event
channel exactly like local changes.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from oscar_party.core.keys import Collection, EventType, CONFIG_EVENTS
from oscar_party.schemas.category import PartyConfig
from oscar_party.services.event_channel import EventChannel
from oscar_party.services.local_cache import LocalCache
from oscar_party.services.remote_store import GuestDocs, RemoteStore

logger = logging.getLogger(__name__)


@dataclass
class SyncFailure:
    operation: str
    target: str
    error: str
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class SyncErrorLog:
    """Bounded record of recent remote sync failures"""

    def __init__(self, maxlen: int = 50):
        self._entries: deque[SyncFailure] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def record(self, operation: str, target: str, error: BaseException) -> SyncFailure:
        failure = SyncFailure(operation=operation, target=target, error=f"{type(error).__name__}: {error}")
        with self._lock:
            self._entries.append(failure)
        return failure

    def recent(self) -> List[SyncFailure]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class SyncClient:
    """Bridge between one device's local cache and the shared remote store.

    Constructed with ``remote=None`` it stays in local-only mode: pushes are
    no-ops and no subscription is opened.
    """

    def __init__(
        self,
        remote: Optional[RemoteStore],
        cache: LocalCache,
        channel: EventChannel,
        error_log: Optional[SyncErrorLog] = None,
    ):
        self.remote = remote
        self.cache = cache
        self.channel = channel
        self.error_log = error_log if error_log is not None else SyncErrorLog()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._pending: set[Future] = set()
        self._pending_lock = threading.Lock()
        self._unsubscribers: List[Callable[[], None]] = []
        if remote is not None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="remote-sync")

    @property
    def enabled(self) -> bool:
        return self.remote is not None and self._executor is not None

    # ---- lifecycle ----

    def start(self) -> None:
        """Open the standing subscriptions to the remote guests and config"""
        if not self.enabled:
            logger.info("No remote store configured, sync client in local-only mode")
            return
        for operation, watch, callback in (
            ("watch-guests", self.remote.watch_guests, self.apply_guest_snapshot),
            ("watch-config", self.remote.watch_config, self.apply_config_snapshot),
        ):
            try:
                self._unsubscribers.append(watch(callback))
            except Exception as e:
                self._record_failure(operation, "remote", e)
        logger.info(f"Sync client started with {len(self._unsubscribers)} subscriptions")

    def stop(self) -> None:
        """Close subscriptions and let queued writes finish"""
        for unsubscribe in self._unsubscribers:
            try:
                unsubscribe()
            except Exception as e:
                logger.warning(f"Error closing remote subscription: {e}")
        self._unsubscribers.clear()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait for outstanding remote writes; True when none are left"""
        with self._pending_lock:
            pending = list(self._pending)
        if not pending:
            return True
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    # ---- outbound ----

    def push_guest(self, guest_id: str, data: Dict[str, Any]) -> None:
        self._submit("set-guest", guest_id, lambda: self.remote.set_guest(guest_id, data))

    def push_guest_deletion(self, guest_id: str) -> None:
        self._submit("delete-guest", guest_id, lambda: self.remote.delete_guest(guest_id))

    def push_categories(self, categories: List[Dict[str, Any]]) -> None:
        self._push_config(PartyConfig(categories=categories))

    def push_winners(self, winners: Dict[str, str]) -> None:
        self._push_config(PartyConfig(winners=winners))

    def push_show_date(self, show_date: str) -> None:
        self._push_config(PartyConfig(show_date=show_date))

    def _push_config(self, config: PartyConfig) -> None:
        fields = config.to_remote()
        self._submit("merge-config", ",".join(fields), lambda: self.remote.merge_config(fields))

    def _submit(self, operation: str, target: str, call: Callable[[], None]) -> None:
        if not self.enabled:
            return
        try:
            future = self._executor.submit(call)
        except RuntimeError as e:
            # executor already shut down
            self._record_failure(operation, target, e)
            return
        with self._pending_lock:
            self._pending.add(future)
        future.add_done_callback(lambda f: self._on_done(operation, target, f))

    def _on_done(self, operation: str, target: str, future: Future) -> None:
        with self._pending_lock:
            self._pending.discard(future)
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self._record_failure(operation, target, error)

    def _record_failure(self, operation: str, target: str, error: BaseException) -> None:
        logger.warning(f"Remote sync {operation} failed for {target}: {error}")
        self.error_log.record(operation, target, error)

    # ---- inbound ----

    def apply_guest_snapshot(self, docs: GuestDocs) -> None:
        """Replace the whole local guest list with the remote one"""
        guests = [{**data, "id": doc_id} for doc_id, data in docs]
        with self.cache.lock:
            self.cache.write(Collection.GUESTS, guests)
        logger.debug(f"Applied remote guest snapshot ({len(guests)} guests)")
        self.channel.publish(EventType.GUEST_UPDATED, {})

    def apply_config_snapshot(self, data: Dict[str, Any]) -> None:
        """Replace only the config fields present in the snapshot"""
        try:
            config = PartyConfig.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed remote config snapshot: {e}")
            return
        if "categories" in config.model_fields_set:
            self._apply_config_field(Collection.CATEGORIES, [c.model_dump() for c in config.categories or []])
        if "winners" in config.model_fields_set:
            self._apply_config_field(Collection.WINNERS, dict(config.winners or {}))
        if "show_date" in config.model_fields_set:
            self._apply_config_field(Collection.SHOW_DATE, config.show_date or "")

    def _apply_config_field(self, collection: Collection, value: Any) -> None:
        with self.cache.lock:
            self.cache.write(collection, value)
        self.channel.publish(CONFIG_EVENTS[collection], {})
