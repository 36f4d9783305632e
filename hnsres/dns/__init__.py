"""Handshake name resolution: records, matchers, cache, sources and resolver."""

from .cache import RecordCache, RecordCacheStatistics
from .matchers import (
    decode_registry_entry,
    encode_registry_entry,
    is_valid_registry_entry,
    is_valid_skylink,
)
from .names import normalize_domain_name
from .records import (
    HnsRecord,
    RegistryEntry,
    ResolvedRegistryEntry,
    ResolvedSkylink,
)
from .resolver import HnsResolver
from .source import HsdClientOptions, HsdRecordSource, RecordSource, StaticRecordSource

__all__ = [
    "HnsRecord",
    "HnsResolver",
    "HsdClientOptions",
    "HsdRecordSource",
    "RecordCache",
    "RecordCacheStatistics",
    "RecordSource",
    "RegistryEntry",
    "ResolvedRegistryEntry",
    "ResolvedSkylink",
    "StaticRecordSource",
    "decode_registry_entry",
    "encode_registry_entry",
    "is_valid_registry_entry",
    "is_valid_skylink",
    "normalize_domain_name",
]
