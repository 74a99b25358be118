"""
Database models package
"""

from .cache_entry import CacheEntry

__all__ = ["CacheEntry"]
