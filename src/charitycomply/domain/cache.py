"""Statistics cache interface and implementations.

Caches are passed explicitly to the services that use them. Entries are keyed
by organization ID and a computation kind, and recomputation is idempotent,
so a stale or missing entry is never a correctness problem.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class StatisticsCache(ABC):
    """Abstract cache keyed by (organization ID, computation kind)."""

    @abstractmethod
    def get(self, organization_id: int, kind: str) -> Optional[Any]:
        """Return the cached value, or None if absent or expired."""
        pass

    @abstractmethod
    def set(self, organization_id: int, kind: str, value: Any) -> None:
        """Store a value."""
        pass

    @abstractmethod
    def invalidate(self, organization_id: int, kind: Optional[str] = None) -> None:
        """Drop one kind for an organization, or every kind when kind is None."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry for every organization."""
        pass


class NullStatisticsCache(StatisticsCache):
    """Cache that never stores anything."""

    def get(self, organization_id: int, kind: str) -> Optional[Any]:
        return None

    def set(self, organization_id: int, kind: str, value: Any) -> None:
        pass

    def invalidate(self, organization_id: int, kind: Optional[str] = None) -> None:
        pass

    def clear(self) -> None:
        pass


class InMemoryStatisticsCache(StatisticsCache):
    """Per-instance TTL cache."""

    def __init__(self, ttl_seconds: float = 60.0, clock: Callable[[], float] = time.monotonic):
        """Initialize cache.

        Args:
            ttl_seconds: Lifetime of an entry in seconds
            clock: Monotonic time source, replaceable in tests
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[int, str], tuple[float, Any]] = {}

    def get(self, organization_id: int, kind: str) -> Optional[Any]:
        key = (organization_id, kind)
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            logger.debug("Cache entry expired for organization %s (%s)", organization_id, kind)
            return None
        return value

    def set(self, organization_id: int, kind: str, value: Any) -> None:
        now = self._clock()
        self._purge_expired(now)
        self._entries[(organization_id, kind)] = (now + self.ttl_seconds, value)

    def _purge_expired(self, now: float) -> None:
        # Kinds are keyed by as-of date, so stale keys are rarely read again.
        expired = [key for key, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Purged %s expired cache entries", len(expired))

    def invalidate(self, organization_id: int, kind: Optional[str] = None) -> None:
        if kind is not None:
            self._entries.pop((organization_id, kind), None)
            return
        for key in [k for k in self._entries if k[0] == organization_id]:
            del self._entries[key]
        logger.debug("Invalidated cached statistics for organization %s", organization_id)

    def clear(self) -> None:
        self._entries.clear()
        logger.debug("Cleared all cached statistics")

    def __len__(self) -> int:
        return len(self._entries)
