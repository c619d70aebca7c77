"""
Expiring cache for standings payloads.

Usage:
    from standings_dashboard.cache import StatsCache, create_cache_store

    cache = StatsCache(create_cache_store(get_settings()))
    cache.save(payload, "mlb_standings_2000_2024", expiry_days=30)
    payload = cache.load("mlb_standings_2000_2024", expiry_days=30)
"""

from .stats_cache import CACHE_VERSION, StatsCache
from .storage import (
    MS_PER_DAY,
    CookieJarStorage,
    LocalStorage,
    MemoryStorage,
    RedisStorage,
    Storage,
    now_ms,
)
from .store import EXPIRES_SUFFIX, CacheStore, create_cache_store

__all__ = [
    "CACHE_VERSION",
    "EXPIRES_SUFFIX",
    "MS_PER_DAY",
    "CacheStore",
    "CookieJarStorage",
    "LocalStorage",
    "MemoryStorage",
    "RedisStorage",
    "StatsCache",
    "Storage",
    "create_cache_store",
    "now_ms",
]
