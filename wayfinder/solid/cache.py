"""Short-lived in-process cache for resolved pod profiles.

Entries are immutable values replaced wholesale, expire after a fixed TTL and
are never written anywhere durable: the pod owner stays the source of truth.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from wayfinder.core.config import settings
from wayfinder.models.resolution import LiveResult
from wayfinder.utils.monitoring import observe_cache_lookup

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    value: LiveResult
    expires_at: float


class ProfileCache:
    """Expiring map of WebID to the last live resolution."""

    def __init__(self, ttl_seconds: Optional[float] = None, *, clock: Clock = time.monotonic) -> None:
        self.ttl_seconds = settings.PROFILE_CACHE_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, web_id: str) -> Optional[LiveResult]:
        entry = self._entries.get(web_id)
        if entry is not None and self._clock() >= entry.expires_at:
            self._entries.pop(web_id, None)
            logger.debug("Evicted expired profile cache entry for %s", web_id)
            entry = None
        observe_cache_lookup(entry is not None)
        return entry.value if entry is not None else None

    def set(self, web_id: str, value: LiveResult) -> None:
        # Entries for WebIDs that are never read again are dropped on the next write.
        self.purge_expired()
        self._entries[web_id] = CacheEntry(value=value, expires_at=self._clock() + self.ttl_seconds)

    def purge_expired(self) -> int:
        now = self._clock()
        expired = [web_id for web_id, entry in self._entries.items() if now >= entry.expires_at]
        for web_id in expired:
            del self._entries[web_id]
        return len(expired)

    def __contains__(self, web_id: object) -> bool:
        entry = self._entries.get(web_id)  # type: ignore[arg-type]
        return entry is not None and self._clock() < entry.expires_at

    def __len__(self) -> int:
        return len(self._entries)
