"""Pytest configuration and fixtures for hnsres testing.

Fixtures build resolvers on top of in-memory record sources and a manually
advanced clock, so cache expiry can be exercised without sleeping.
"""

from collections.abc import Iterator

import pytest
from loguru import logger

from hnsres.dns.cache import RecordCache
from hnsres.dns.resolver import HnsResolver
from hnsres.dns.source import StaticRecordSource


class ManualClock:
    """Monotonic clock stand-in that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def record_cache(clock: ManualClock) -> RecordCache:
    return RecordCache(ttl_seconds=300.0, clock=clock)


@pytest.fixture
def static_source() -> StaticRecordSource:
    return StaticRecordSource()


@pytest.fixture
def resolver(
    static_source: StaticRecordSource, record_cache: RecordCache
) -> HnsResolver:
    return HnsResolver(static_source, cache=record_cache)


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect formatted loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level} {message}")
    try:
        yield messages
    finally:
        logger.remove(handler_id)
