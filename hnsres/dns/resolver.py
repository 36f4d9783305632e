from __future__ import annotations

import asyncio
import json
from collections.abc import Sequence

from loguru import logger

from hnsres.core.errors import (
    IncompatibleRecordsError,
    RecordDecodeError,
    ResolutionError,
)
from hnsres.datastructures.type_aliases import DomainName, DurationSeconds

from .cache import DEFAULT_TTL_SECONDS, CachedRecords, RecordCache
from .matchers import (
    decode_registry_entry,
    is_compatible_value,
    is_valid_registry_entry,
    is_valid_skylink,
)
from .names import normalize_domain_name
from .records import (
    HnsRecord,
    ResolvedName,
    ResolvedRegistryEntry,
    ResolvedSkylink,
)
from .source import RecordSource

_MISSING = object()


def _records_for_log(records: CachedRecords) -> str:
    if records is None:
        return "null"
    return json.dumps([record.to_dict() for record in records])


class HnsResolver:
    """Resolve Handshake names into skylinks or skynet registry entries.

    Records fetched from the source are cached per normalized name, including
    the "no records" answer. Concurrent lookups of the same uncached name
    share one in-flight source query.
    """

    def __init__(
        self,
        source: RecordSource,
        *,
        cache: RecordCache | None = None,
        cache_ttl_seconds: DurationSeconds = DEFAULT_TTL_SECONDS,
    ) -> None:
        self.source = source
        self.cache = cache if cache is not None else RecordCache(cache_ttl_seconds)
        self._in_flight: dict[DomainName, asyncio.Task[CachedRecords]] = {}

    async def resolve(self, raw_domain_name: str) -> ResolvedName:
        domain = normalize_domain_name(raw_domain_name)
        records = await self.get_domain_records(domain)
        if records is None:
            raise ResolutionError(f"No records found for {domain}")

        record = self.find_compatible_record(records)
        if record is None:
            raise IncompatibleRecordsError(
                f"No skynet compatible records found in dns records of {domain}"
            )

        return self.create_response(record)

    async def get_domain_records(self, name: DomainName) -> CachedRecords:
        cached = self.cache.get(name, _MISSING)
        if cached is not _MISSING:
            logger.debug("Record cache hit for {}", name)
            return cached

        task = self._in_flight.get(name)
        if task is None:
            task = asyncio.ensure_future(self._fetch_domain_records(name))
            self._in_flight[name] = task
            task.add_done_callback(lambda done: self._forget_in_flight(name, done))
        # Cancelling one caller must not cancel the query other callers share.
        return await asyncio.shield(task)

    async def _fetch_domain_records(self, name: DomainName) -> CachedRecords:
        fetched = await self.source.query_records(name)
        records = tuple(fetched) if fetched is not None else None
        logger.info("{} => {}", name, _records_for_log(records))
        self.cache.set(name, records)
        return records

    def _forget_in_flight(
        self, name: DomainName, done: asyncio.Task[CachedRecords]
    ) -> None:
        if self._in_flight.get(name) is done:
            del self._in_flight[name]
        if not done.cancelled():
            # Callers re-raise it; mark retrieved when every caller has gone.
            done.exception()

    def find_compatible_record(
        self, records: Sequence[HnsRecord]
    ) -> HnsRecord | None:
        """Return the last compatible record.

        Walking the list backwards lets operators publish a new link by adding
        a record while older ones stay in place for backwards compatibility.
        """
        for record in reversed(records):
            if any(is_compatible_value(value) for value in record.values):
                return record
        return None

    def create_response(self, record: HnsRecord) -> ResolvedName:
        skylink = next(
            (value for value in record.values if is_valid_skylink(value)), None
        )
        if skylink:
            return ResolvedSkylink(skylink=skylink)

        entry = next(
            (value for value in record.values if is_valid_registry_entry(value)),
            None,
        )
        if entry:
            return ResolvedRegistryEntry(registry=decode_registry_entry(entry))

        raise RecordDecodeError(f"No skylink in record: {json.dumps(record.to_dict())}")
