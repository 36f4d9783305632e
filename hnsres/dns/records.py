from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from hnsres.datastructures.type_aliases import (
    DataKey,
    JsonDict,
    PublicKey,
    RecordType,
    RecordValue,
)

TXT_RECORD_TYPE = "TXT"


@dataclass(frozen=True, slots=True)
class HnsRecord:
    """A single resource record as reported by hsd.

    Only TXT records carry values; every other kind keeps an empty tuple so
    the resolver can skip it without special cases.
    """

    type: RecordType
    values: tuple[RecordValue, ...] = ()

    @property
    def is_txt(self) -> bool:
        return self.type.upper() == TXT_RECORD_TYPE

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> HnsRecord:
        record_type = str(payload.get("type") or "")
        if record_type.upper() != TXT_RECORD_TYPE:
            return cls(type=record_type)
        raw_values = payload.get("txt") or ()
        if isinstance(raw_values, str):
            raw_values = (raw_values,)
        values = tuple(value for value in raw_values if isinstance(value, str))
        return cls(type=record_type, values=values)

    def to_dict(self) -> JsonDict:
        if not self.is_txt:
            return {"type": self.type}
        return {"type": self.type, "txt": list(self.values)}


def records_from_payload(
    payload: Iterable[Mapping[str, Any]] | None,
) -> tuple[HnsRecord, ...] | None:
    if payload is None:
        return None
    return tuple(
        HnsRecord.from_dict(item) for item in payload if isinstance(item, Mapping)
    )


@dataclass(frozen=True, slots=True)
class ResolvedSkylink:
    skylink: RecordValue

    def to_dict(self) -> JsonDict:
        return {"skylink": self.skylink}


@dataclass(frozen=True, slots=True)
class RegistryEntry:
    public_key: PublicKey
    data_key: DataKey

    def to_dict(self) -> JsonDict:
        return {"publickey": self.public_key, "datakey": self.data_key}


@dataclass(frozen=True, slots=True)
class ResolvedRegistryEntry:
    registry: RegistryEntry

    def to_dict(self) -> JsonDict:
        return {"registry": self.registry.to_dict()}


ResolvedName: TypeAlias = ResolvedSkylink | ResolvedRegistryEntry
