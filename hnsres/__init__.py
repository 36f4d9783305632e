"""
hnsres - Handshake name resolver for Skynet content

Resolves Handshake domain names into skylinks or skynet registry entries by
reading the domain's TXT records from an hsd node.

## Quick Start

```python
from hnsres import HnsResolver, HsdClientOptions, HsdRecordSource

async with HsdRecordSource(HsdClientOptions(api_key="...")) as source:
    resolver = HnsResolver(source)
    result = await resolver.resolve("example")
    print(result.to_dict())
```
"""

from .core.errors import (
    HnsResolverError,
    IncompatibleRecordsError,
    RecordDecodeError,
    RecordSourceError,
    ResolutionError,
)
from .dns import (
    HnsRecord,
    HnsResolver,
    HsdClientOptions,
    HsdRecordSource,
    RecordCache,
    RegistryEntry,
    ResolvedRegistryEntry,
    ResolvedSkylink,
    StaticRecordSource,
)

__version__ = "1.0.0"

__all__ = [
    "HnsRecord",
    "HnsResolver",
    "HnsResolverError",
    "HsdClientOptions",
    "HsdRecordSource",
    "IncompatibleRecordsError",
    "RecordCache",
    "RecordDecodeError",
    "RecordSourceError",
    "RegistryEntry",
    "ResolutionError",
    "ResolvedRegistryEntry",
    "ResolvedSkylink",
    "StaticRecordSource",
]
