"""
Key/value storage tiers for the standings cache.

Two kinds of tier exist, mirroring what a browser offers a dashboard:

- CookieJarStorage: small (~4KB per entry) with native expiry. Oversized
  writes are dropped silently, the way a browser drops an oversized cookie.
- MemoryStorage / LocalStorage / RedisStorage: no size ceiling and no
  native expiry. Callers that need expiry store their own marker.

Every tier raises CacheError on I/O failure; CacheStore turns that into a
cache miss.
"""

from __future__ import annotations

import fnmatch
import json
import logging
import threading
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional

from ..core.errors import CacheError

logger = logging.getLogger(__name__)

MS_PER_DAY = 86_400_000

Clock = Callable[[], int]


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


class Storage(ABC):
    """Abstract base class for a storage tier."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get a stored string, or None."""
        pass

    @abstractmethod
    def set(self, key: str, value: str, expires_at: Optional[int] = None) -> None:
        """Store a string. Tiers without native expiry ignore ``expires_at``."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete a key; missing keys are ignored."""
        pass

    @abstractmethod
    def keys(self, pattern: str = "*") -> list[str]:
        """Get keys matching a glob pattern."""
        pass


def _read_json_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CacheError(f"Could not read {path}: {e}") from e
    if not isinstance(data, dict):
        raise CacheError(f"Unexpected content in {path}")
    return data


def _write_json_file(path: Path, data: dict) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f)
        tmp.replace(path)
    except OSError as e:
        raise CacheError(f"Could not write {path}: {e}") from e


def _is_cookie_entry(entry: object) -> bool:
    # Persisted form is [value, expires_at]
    if not isinstance(entry, list) or len(entry) != 2:
        return False
    value, expires_at = entry
    if not isinstance(value, str):
        return False
    return expires_at is None or (isinstance(expires_at, int) and not isinstance(expires_at, bool))


class CookieJarStorage(Storage):
    """
    Size-limited tier with native expiry.

    An entry is accepted only if its ``name=value`` cookie string fits in
    ``max_bytes``. Expired entries are dropped on read. When ``path`` is
    given the jar is persisted as JSON: ``{name: [value, expires_at]}``.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        max_bytes: int = 4096,
        clock: Clock = now_ms,
    ):
        self.path = Path(path) if path else None
        self.max_bytes = max_bytes
        self._clock = clock
        self._lock = threading.RLock()
        self._jar: dict[str, tuple[str, Optional[int]]] = {}
        if self.path:
            try:
                raw = _read_json_file(self.path)
            except CacheError as e:
                logger.warning(f"Discarding unreadable cookie jar: {e}")
                raw = {}
            for k, v in raw.items():
                if _is_cookie_entry(v):
                    self._jar[k] = (v[0], v[1])
                else:
                    logger.warning(f"Discarding malformed cookie {k}")

    def _persist_locked(self) -> None:
        if self.path:
            _write_json_file(self.path, {k: [v, exp] for k, (v, exp) in self._jar.items()})

    def fits(self, key: str, value: str) -> bool:
        return len(f"{key}={value}".encode("utf-8")) <= self.max_bytes

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._jar.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and self._clock() > expires_at:
                del self._jar[key]
                self._persist_locked()
                return None
            return value

    def set(self, key: str, value: str, expires_at: Optional[int] = None) -> None:
        if not self.fits(key, value):
            logger.debug(f"Cookie {key} exceeds {self.max_bytes} bytes, dropped")
            return
        with self._lock:
            self._jar[key] = (value, expires_at)
            self._persist_locked()

    def delete(self, key: str) -> None:
        with self._lock:
            if self._jar.pop(key, None) is not None:
                self._persist_locked()

    def keys(self, pattern: str = "*") -> list[str]:
        now = self._clock()
        with self._lock:
            return [
                k
                for k, (_, exp) in self._jar.items()
                if (exp is None or now <= exp) and fnmatch.fnmatch(k, pattern)
            ]


class MemoryStorage(Storage):
    """Thread-safe unlimited in-memory tier without native expiry."""

    def __init__(self):
        self._data: dict[str, str] = {}
        self._lock = threading.RLock()

    def _persist_locked(self) -> None:
        pass

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str, expires_at: Optional[int] = None) -> None:
        with self._lock:
            self._data[key] = value
            self._persist_locked()

    def delete(self, key: str) -> None:
        with self._lock:
            if self._data.pop(key, None) is not None:
                self._persist_locked()

    def keys(self, pattern: str = "*") -> list[str]:
        with self._lock:
            return [k for k in self._data if fnmatch.fnmatch(k, pattern)]


class LocalStorage(MemoryStorage):
    """Unlimited tier persisted to a single JSON file."""

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)
        raw = _read_json_file(self.path)
        self._data = {k: v for k, v in raw.items() if isinstance(v, str)}

    def _persist_locked(self) -> None:
        _write_json_file(self.path, self._data)


class RedisStorage(Storage):
    """Unlimited tier backed by Redis."""

    def __init__(self, url: str, prefix: str = "standings:"):
        try:
            import redis

            self._redis = redis.from_url(url, decode_responses=True)
            self._prefix = prefix
            # Test connection
            self._redis.ping()
            logger.info("Redis storage connected")
        except Exception as e:
            raise CacheError(f"Redis connection failed: {e}") from e

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        try:
            return self._redis.get(self._key(key))
        except Exception as e:
            raise CacheError(f"Redis get error: {e}") from e

    def set(self, key: str, value: str, expires_at: Optional[int] = None) -> None:
        try:
            self._redis.set(self._key(key), value)
        except Exception as e:
            raise CacheError(f"Redis set error: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._redis.delete(self._key(key))
        except Exception as e:
            raise CacheError(f"Redis delete error: {e}") from e

    def keys(self, pattern: str = "*") -> list[str]:
        try:
            prefix_len = len(self._prefix)
            return [k[prefix_len:] for k in self._redis.scan_iter(f"{self._prefix}{pattern}")]
        except Exception as e:
            raise CacheError(f"Redis keys error: {e}") from e
