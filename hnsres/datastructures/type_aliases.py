"""
Semantic type aliases for hnsres.

Meaningful aliases keep signatures self-documenting where raw ``str`` and
``float`` would hide what a value represents.
"""

from typing import Any, TypeAlias

# Time and timestamp types
Timestamp: TypeAlias = float
DurationSeconds: TypeAlias = float

# Naming types
DomainName: TypeAlias = str
RecordValue: TypeAlias = str
RecordType: TypeAlias = str

# Registry entry components
PublicKey: TypeAlias = str
DataKey: TypeAlias = str

# Wire payloads
JsonDict: TypeAlias = dict[str, Any]
