"""Application-level JSON cache with timestamped, versioned envelopes."""

from __future__ import annotations

import logging
from typing import Any, Optional

import msgspec

from ..core.models import CacheEntry
from .storage import MS_PER_DAY, Clock, now_ms
from .store import CacheStore

logger = logging.getLogger(__name__)

# Bump when the shape of cached payloads changes; older entries then read as misses.
CACHE_VERSION = "1.0"


class StatsCache:
    """
    Get/set arbitrary JSON payloads by cache name.

    Expiry is checked here against the embedded write timestamp as well as in
    CacheStore. The primary tier expires entries natively, but the embedded
    timestamp is what bounds an entry's age after a fallback.
    """

    def __init__(
        self,
        store: CacheStore,
        clock: Clock = now_ms,
        version: str = CACHE_VERSION,
    ):
        self.store = store
        self._clock = clock
        self._version = version

    def save(self, payload: Any, key: str, expiry_days: float) -> None:
        """
        Cache ``payload`` under ``key``.

        Args:
            payload: Any JSON-serialisable value
            key: Cache name
            expiry_days: Lifetime in days
        """
        entry = CacheEntry(data=payload, timestamp=self._clock(), version=self._version)
        try:
            raw = msgspec.json.encode(entry).decode("utf-8")
        except (TypeError, msgspec.EncodeError) as e:
            logger.warning(f"Failed to save stats to cache: {e}")
            return
        self.store.set(key, raw, expiry_days)

    def load(self, key: str, expiry_days: float) -> Optional[Any]:
        """
        Load a cached payload.

        Returns:
            The payload, or None if absent, expired, from another cache
            version, or unreadable
        """
        raw = self.store.get(key)
        if raw is None:
            return None

        try:
            entry = msgspec.json.decode(raw, type=CacheEntry)
        except msgspec.DecodeError as e:
            logger.warning(f"Failed to load stats from cache: {e}")
            return None

        if entry.version != self._version:
            logger.info(f"Ignoring cache entry {key} with version {entry.version}")
            return None

        age = self._clock() - entry.timestamp
        if age > expiry_days * MS_PER_DAY:
            return None

        return entry.data

    def invalidate(self, key: str) -> None:
        """Drop a cached payload."""
        self.store.delete(key)
