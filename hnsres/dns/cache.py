"""
Time-bounded record cache for domain lookups.

Maps a normalized domain name to the records fetched for it. A lookup that
returned no records is stored as ``None`` and counts as a live entry, so an
unconfigured domain is not re-queried until its TTL elapses.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from loguru import logger

from hnsres.datastructures.type_aliases import DomainName, DurationSeconds, Timestamp

from .records import HnsRecord

DEFAULT_TTL_SECONDS: DurationSeconds = 300.0

CachedRecords: TypeAlias = tuple[HnsRecord, ...] | None
Clock: TypeAlias = Callable[[], Timestamp]


@dataclass(frozen=True, slots=True)
class RecordCacheEntry:
    """Immutable snapshot of the records cached for one domain."""

    value: CachedRecords
    expires_at: Timestamp

    def is_expired(self, now: Timestamp) -> bool:
        return now >= self.expires_at


@dataclass(slots=True)
class RecordCacheStatistics:
    """Record cache performance statistics."""

    hits: int = 0
    misses: int = 0
    sets: int = 0
    expirations: int = 0
    entry_count: int = 0

    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


@dataclass(slots=True)
class RecordCache:
    ttl_seconds: DurationSeconds = DEFAULT_TTL_SECONDS
    clock: Clock = time.monotonic
    _entries: dict[DomainName, RecordCacheEntry] = field(
        default_factory=dict, init=False
    )
    _stats: RecordCacheStatistics = field(
        default_factory=RecordCacheStatistics, init=False
    )

    def __post_init__(self) -> None:
        if self.ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {self.ttl_seconds}")

    def _live_entry(self, key: DomainName) -> RecordCacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self.clock()):
            del self._entries[key]
            self._stats.expirations += 1
            logger.debug("Record cache entry for {} expired", key)
            return None
        return entry

    def has(self, key: DomainName) -> bool:
        return self._live_entry(key) is not None

    def get(self, key: DomainName, default: Any = None) -> CachedRecords | Any:
        """Return the live cached value for ``key`` or ``default``.

        A cached ``None`` is returned as ``None``; use :meth:`has` to tell it
        apart from a miss.
        """
        entry = self._live_entry(key)
        if entry is None:
            self._stats.misses += 1
            return default
        self._stats.hits += 1
        return entry.value

    def set(self, key: DomainName, value: CachedRecords) -> None:
        if value is not None:
            value = tuple(value)
        self._entries[key] = RecordCacheEntry(
            value=value, expires_at=self.clock() + self.ttl_seconds
        )
        self._stats.sets += 1

    def purge_expired(self) -> int:
        now = self.clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        self._stats.expirations += len(expired)
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def statistics(self) -> RecordCacheStatistics:
        self.purge_expired()
        self._stats.entry_count = len(self._entries)
        return self._stats

    def __len__(self) -> int:
        now = self.clock()
        return sum(1 for entry in self._entries.values() if not entry.is_expired(now))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)
