"""
Named collections, their fixed storage keys and sync event types
"""

from enum import Enum
from typing import Optional


class Collection(str, Enum):
    """The four collections kept in the local cache and mirrored remotely"""

    CATEGORIES = "categories"
    GUESTS = "guests"
    WINNERS = "winners"
    SHOW_DATE = "showDate"

    @property
    def storage_key(self) -> str:
        return STORAGE_KEYS[self]

    @classmethod
    def from_storage_key(cls, key: str) -> Optional["Collection"]:
        for collection, storage_key in STORAGE_KEYS.items():
            if storage_key == key:
                return collection
        return None


STORAGE_KEYS = {
    Collection.CATEGORIES: "oscar_categories",
    Collection.GUESTS: "oscar_guests",
    Collection.WINNERS: "oscar_winners",
    Collection.SHOW_DATE: "oscar_show_date",
}


class EventType(str, Enum):
    """Sync message types published on the event channel"""

    CATEGORIES_UPDATED = "categories-updated"
    GUEST_UPDATED = "guest-updated"
    WINNERS_UPDATED = "winners-updated"
    SHOW_DATE_UPDATED = "show-date-updated"
    STORAGE_CHANGE = "storage-change"


EVENT_COLLECTIONS = {
    EventType.CATEGORIES_UPDATED: Collection.CATEGORIES,
    EventType.GUEST_UPDATED: Collection.GUESTS,
    EventType.WINNERS_UPDATED: Collection.WINNERS,
    EventType.SHOW_DATE_UPDATED: Collection.SHOW_DATE,
}

CONFIG_EVENTS = {
    Collection.CATEGORIES: EventType.CATEGORIES_UPDATED,
    Collection.WINNERS: EventType.WINNERS_UPDATED,
    Collection.SHOW_DATE: EventType.SHOW_DATE_UPDATED,
}
