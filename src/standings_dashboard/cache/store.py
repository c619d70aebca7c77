"""
Two-tier cache store with size-aware fallback.

Writes go to the size-limited primary tier first and are verified with an
immediate read-back. A rejected (oversized) or failed write falls back to the
unlimited secondary tier, together with a ``<key>_expires`` marker holding
the absolute expiry in epoch milliseconds, since that tier has no native
expiry.

Storage failures never propagate: a failed read is a miss, a failed write
is a no-op.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..core.config import Settings
from ..core.errors import CacheError
from .storage import (
    MS_PER_DAY,
    Clock,
    CookieJarStorage,
    LocalStorage,
    MemoryStorage,
    RedisStorage,
    Storage,
    now_ms,
)

logger = logging.getLogger(__name__)

EXPIRES_SUFFIX = "_expires"


class CacheStore:
    """String cache over a primary and a secondary storage tier."""

    def __init__(self, primary: Storage, secondary: Storage, clock: Clock = now_ms):
        self.primary = primary
        self.secondary = secondary
        self._clock = clock

    @staticmethod
    def _marker(key: str) -> str:
        return f"{key}{EXPIRES_SUFFIX}"

    def set(self, key: str, value: str, expiry_days: float) -> None:
        """
        Store ``value`` under ``key`` for ``expiry_days``.

        Args:
            key: Cache name
            value: String to store
            expiry_days: Lifetime in days (fractions allowed)
        """
        expires_at = self._clock() + int(expiry_days * MS_PER_DAY)

        try:
            self.primary.set(key, value, expires_at=expires_at)
            if self.primary.get(key) == value:
                # A copy left in the secondary tier by an earlier fallback is stale now
                self._discard_secondary(key)
                return
            logger.info(f"Cache entry {key} rejected by primary storage, using secondary storage")
        except CacheError as e:
            logger.warning(f"Primary cache storage failed, falling back to secondary storage: {e}")

        # An older value left in the primary tier would shadow the fallback copy
        try:
            self.primary.delete(key)
        except CacheError as e:
            logger.warning(f"Failed to remove stale cache entry {key} from primary storage: {e}")

        # Marker first, so a value never sits in the secondary tier without an expiry
        try:
            self.secondary.set(self._marker(key), str(expires_at))
        except CacheError as e:
            logger.warning(f"Failed to write cache entry {key}: {e}")
            self._discard_secondary(key)
            return
        try:
            self.secondary.set(key, value)
        except CacheError as e:
            logger.warning(f"Failed to write cache entry {key}: {e}")
            try:
                self.secondary.delete(self._marker(key))
            except CacheError:
                logger.debug(f"Orphaned expiry marker left for {key}")

    def get(self, key: str) -> Optional[str]:
        """
        Get a stored value, honouring expiry on both tiers.

        Returns:
            The stored string, or None if absent, expired or unreadable
        """
        try:
            value = self.primary.get(key)
        except CacheError as e:
            logger.warning(f"Primary cache read failed for {key}: {e}")
            value = None
        if value is not None:
            return value

        try:
            value = self.secondary.get(key)
            if value is None:
                return None
            marker = self.secondary.get(self._marker(key))
            if marker is not None and self._is_expired(marker):
                logger.debug(f"Cache entry {key} expired in secondary storage")
                self._discard_secondary(key)
                return None
            return value
        except CacheError as e:
            logger.warning(f"Secondary cache read failed for {key}: {e}")
            return None

    def _is_expired(self, marker: str) -> bool:
        try:
            expires_at = int(marker)
        except ValueError:
            # Unreadable marker: the entry's lifetime is unknown
            return True
        return self._clock() > expires_at

    def _discard_secondary(self, key: str) -> None:
        try:
            if self.secondary.get(key) is not None:
                self.secondary.delete(key)
                self.secondary.delete(self._marker(key))
        except CacheError as e:
            logger.warning(f"Failed to remove cache entry {key} from secondary storage: {e}")

    def delete(self, key: str) -> None:
        """Remove ``key`` from both tiers."""
        try:
            self.primary.delete(key)
        except CacheError as e:
            logger.warning(f"Failed to remove cache entry {key} from primary storage: {e}")
        self._discard_secondary(key)

    def keys(self, pattern: str = "*") -> list[str]:
        """Cache names matching ``pattern`` in either tier (expiry markers excluded)."""
        names: set[str] = set()
        for tier in (self.primary, self.secondary):
            try:
                names.update(k for k in tier.keys(pattern) if not k.endswith(EXPIRES_SUFFIX))
            except CacheError as e:
                logger.warning(f"Failed to list cache keys: {e}")
        return sorted(names)

    def clear(self, pattern: str = "*") -> int:
        """
        Remove every cache entry matching ``pattern``.

        Returns:
            Number of entries removed
        """
        names = self.keys(pattern)
        for name in names:
            self.delete(name)
        return len(names)


def create_cache_store(settings: Settings, clock: Clock = now_ms) -> CacheStore:
    """
    Build the cache store for the configured tiers.

    The primary tier is always a cookie jar. The secondary tier is Redis when
    a Redis URL is configured and reachable, otherwise a JSON file under the
    cache directory, otherwise memory.
    """
    primary = CookieJarStorage(
        path=settings.cookie_jar_path,
        max_bytes=settings.cookie_max_bytes,
        clock=clock,
    )

    secondary: Storage | None = None
    if settings.redis_url:
        try:
            secondary = RedisStorage(settings.redis_url)
            logger.info("Using Redis as secondary cache storage")
        except CacheError as e:
            logger.info(f"Redis unavailable, using local storage: {e}")

    if secondary is None and settings.local_storage_path:
        try:
            secondary = LocalStorage(settings.local_storage_path)
        except CacheError as e:
            logger.warning(f"Local storage unusable, using in-memory storage: {e}")

    if secondary is None:
        secondary = MemoryStorage()

    return CacheStore(primary, secondary, clock=clock)
