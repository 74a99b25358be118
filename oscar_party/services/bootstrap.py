"""
Wiring of one device: local cache, event channel, sync client and party service
"""

import logging
from typing import Optional

from oscar_party.core.config import Settings
from oscar_party.core.db import SessionLocal
from oscar_party.services.event_channel import BroadcastHub, EventChannel
from oscar_party.services.firebase_client import build_remote_store
from oscar_party.services.local_cache import SqlLocalCache
from oscar_party.services.party_service import PartyService
from oscar_party.services.remote_store import RemoteStore
from oscar_party.services.sync_client import SyncClient, SyncErrorLog

logger = logging.getLogger(__name__)


def create_party_service(
    settings: Settings,
    hub: Optional[BroadcastHub] = None,
    remote: Optional[RemoteStore] = None,
    session_factory=SessionLocal,
) -> PartyService:
    """Build a party service on the SQL cache; the sync client is not started"""
    cache = SqlLocalCache(session_factory)
    channel = EventChannel(settings.SYNC_CHANNEL_NAME, hub=hub, cache=cache)
    if remote is None:
        remote = build_remote_store(settings)
    sync = SyncClient(remote, cache, channel, error_log=SyncErrorLog(settings.SYNC_ERROR_LOG_SIZE))
    logger.info(f"Party service ready ({'remote sync' if sync.enabled else 'local only'})")
    return PartyService(cache, channel, sync, reminder_urgent_days=settings.REMINDER_URGENT_DAYS)
