"""
Tests for the local cache and storage-change notifications
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from oscar_party.core.db import Base
from oscar_party.core.keys import Collection
from oscar_party.models import CacheEntry
from oscar_party.services.local_cache import MemoryLocalCache, SqlLocalCache, StorageNotifier

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_cache.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def sql_cache():
    """SQL-backed cache on a fresh test database"""
    Base.metadata.create_all(bind=engine)
    try:
        yield SqlLocalCache(TestingSessionLocal)
    finally:
        Base.metadata.drop_all(bind=engine)

def test_missing_collection_reads_as_none(sql_cache):
    assert sql_cache.read(Collection.GUESTS) is None

def test_write_then_read_round_trips(sql_cache):
    """Each collection is stored whole under its storage key"""
    sql_cache.write(Collection.WINNERS, {"Best Picture": "Oppenheimer"})
    sql_cache.write(Collection.SHOW_DATE, "2025-03-02T23:00:00Z")

    assert sql_cache.read(Collection.WINNERS) == {"Best Picture": "Oppenheimer"}
    assert sql_cache.read(Collection.SHOW_DATE) == "2025-03-02T23:00:00Z"

    with TestingSessionLocal() as db:
        keys = {entry.key for entry in db.query(CacheEntry).all()}
    assert keys == {"oscar_winners", "oscar_show_date"}

def test_overwrite_replaces_value(sql_cache):
    sql_cache.write(Collection.GUESTS, [{"id": "a", "name": "Alice"}])
    sql_cache.write(Collection.GUESTS, [])

    assert sql_cache.read(Collection.GUESTS) == []

def test_corrupt_entry_reads_as_none(sql_cache, caplog):
    """Unparseable JSON is treated as absent and logged"""
    with TestingSessionLocal() as db:
        db.add(CacheEntry(key="oscar_guests", value="{not json"))
        db.commit()

    assert sql_cache.read(Collection.GUESTS) is None
    assert "corrupt cache entry oscar_guests" in caplog.text

def test_other_caches_are_notified():
    storage = {}
    notifier = StorageNotifier()
    tab_one = MemoryLocalCache(storage, notifier)
    tab_two = MemoryLocalCache(storage, notifier)

    heard_one, heard_two = [], []
    tab_one.add_storage_listener(heard_one.append)
    tab_two.add_storage_listener(heard_two.append)

    tab_one.write(Collection.CATEGORIES, [])

    assert heard_one == []
    assert heard_two == ["oscar_categories"]
    assert tab_two.read(Collection.CATEGORIES) == []

def test_unlisten_stops_notifications():
    storage = {}
    notifier = StorageNotifier()
    writer = MemoryLocalCache(storage, notifier)
    reader = MemoryLocalCache(storage, notifier)

    heard = []
    unlisten = reader.add_storage_listener(heard.append)
    unlisten()
    writer.write(Collection.WINNERS, {})

    assert heard == []

def test_failing_listener_does_not_block_others():
    notifier = StorageNotifier()
    writer = MemoryLocalCache(notifier=notifier)
    broken = MemoryLocalCache(notifier=notifier)
    healthy = MemoryLocalCache(notifier=notifier)

    def explode(key):
        raise RuntimeError("boom")

    heard = []
    broken.add_storage_listener(explode)
    healthy.add_storage_listener(heard.append)

    writer.write(Collection.GUESTS, [])

    assert heard == ["oscar_guests"]

def test_cache_without_notifier_accepts_listeners():
    cache = MemoryLocalCache()
    unlisten = cache.add_storage_listener(lambda key: None)
    cache.write(Collection.GUESTS, [])
    unlisten()
