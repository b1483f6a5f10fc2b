"""In-memory cache with per-entry time-to-live."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry:
    """Stored value and its expiry time."""

    key: str
    value: Any
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class TTLCache:
    """Process-local key/value store with lazy expiry.

    Entries are only checked when read; nothing runs in the background and
    there is no size bound. Writes are last-write-wins.
    """

    def __init__(self, default_ttl_hours: float = 1.0, clock: Optional[Clock] = None) -> None:
        if default_ttl_hours <= 0:
            raise ValueError("default_ttl_hours must be positive")
        self.default_ttl_hours = default_ttl_hours
        self._clock = clock or _utc_now
        self._entries: dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value, or default when missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return default

        if entry.is_expired(self._clock()):
            del self._entries[key]
            self._misses += 1
            return default

        self._hits += 1
        return entry.value

    def set(self, key: str, value: Any, ttl_hours: Optional[float] = None) -> None:
        """Store value under key, replacing any previous entry."""
        ttl = self.default_ttl_hours if ttl_hours is None else ttl_hours
        if ttl <= 0:
            raise ValueError("ttl_hours must be positive")

        self._entries[key] = CacheEntry(
            key=key,
            value=value,
            expires_at=self._clock() + timedelta(hours=ttl),
        )

    def delete(self, key: str) -> bool:
        """Drop an entry. Returns True if one was stored."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def prune_expired(self) -> int:
        """Remove every expired entry.

        Never called by the cache itself; long-running callers that need
        bounded memory can schedule it.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]

        if expired:
            logger.debug("Pruned %d expired cache entries", len(expired))
        return len(expired)

    def get_stats(self) -> dict[str, int]:
        """Get statistics about cache usage."""
        return {
            "entries": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
        }

    def __len__(self) -> int:
        return len(self._entries)
