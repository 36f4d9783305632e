"""
Record sources for Handshake domain lookups.

The resolver only needs a single asynchronous query operation, expressed by
the :class:`RecordSource` protocol. :class:`HsdRecordSource` talks JSON-RPC
to an hsd node; :class:`StaticRecordSource` serves records from memory.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import aiohttp
from loguru import logger

from hnsres.core.config import HnsResolverSettings
from hnsres.core.errors import RecordSourceError
from hnsres.datastructures.type_aliases import DomainName, JsonDict

from .records import HnsRecord, records_from_payload

HSD_RPC_USERNAME = "x"
GET_NAME_RESOURCE_METHOD = "getnameresource"


class RecordSource(Protocol):
    async def query_records(
        self, name: DomainName
    ) -> tuple[HnsRecord, ...] | None: ...


@dataclass(frozen=True, slots=True)
class HsdClientOptions:
    network: str = "main"
    host: str = "localhost"
    port: int = 12037
    api_key: str = field(default="", repr=False)
    timeout_seconds: float = 10.0
    ssl: bool = False

    @property
    def url(self) -> str:
        scheme = "https" if self.ssl else "http"
        return f"{scheme}://{self.host}:{self.port}/"

    @classmethod
    def from_settings(cls, settings: HnsResolverSettings) -> HsdClientOptions:
        return cls(
            network=settings.hsd_network,
            host=settings.hsd_host,
            port=settings.hsd_port,
            api_key=settings.hsd_api_key,
            timeout_seconds=settings.hsd_timeout_seconds,
        )


class HsdRecordSource:
    """Fetch name resources from an hsd node over JSON-RPC.

    Transport failures (``aiohttp.ClientError``, timeouts) propagate to the
    caller untouched. Answers that arrive but cannot be used raise
    :class:`RecordSourceError`.
    """

    def __init__(
        self,
        options: HsdClientOptions,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._options = options
        self._session = session
        self._owns_session = session is None
        self._request_ids = itertools.count(1)

    @property
    def options(self) -> HsdClientOptions:
        return self._options

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def execute(self, method: str, params: list[Any]) -> Any:
        """Run one JSON-RPC call against the node and return its ``result``."""
        request_id = next(self._request_ids)
        body = {"method": method, "params": params, "id": request_id}
        session = self._get_session()
        async with session.post(
            self._options.url,
            json=body,
            auth=aiohttp.BasicAuth(HSD_RPC_USERNAME, self._options.api_key),
            timeout=aiohttp.ClientTimeout(total=self._options.timeout_seconds),
        ) as response:
            if response.status == 401:
                raise RecordSourceError(
                    "hsd authentication failed (bad API key)", status=401
                )
            try:
                payload = await response.json(content_type=None)
            except ValueError as exc:
                raise RecordSourceError(
                    f"hsd returned a malformed response (HTTP {response.status})",
                    status=response.status,
                ) from exc
            if not isinstance(payload, dict):
                raise RecordSourceError(
                    "hsd returned a non-object JSON-RPC response",
                    status=response.status,
                )
            error = payload.get("error")
            if error:
                raise _rpc_error(method, error, response.status)
            if response.status >= 400:
                raise RecordSourceError(
                    f"hsd request failed with HTTP {response.status}",
                    status=response.status,
                )
            return payload.get("result")

    async def query_records(self, name: DomainName) -> tuple[HnsRecord, ...] | None:
        logger.debug(
            "Querying hsd ({}) at {} for {}",
            self._options.network,
            self._options.url,
            name,
        )
        result = await self.execute(GET_NAME_RESOURCE_METHOD, [name])
        if result is None:
            return None
        if not isinstance(result, dict):
            raise RecordSourceError(
                f"Unexpected {GET_NAME_RESOURCE_METHOD} result for {name}"
            )
        raw_records = result.get("records")
        if raw_records is not None and not isinstance(raw_records, list):
            raise RecordSourceError(f"Unexpected records payload for {name}")
        return records_from_payload(raw_records)

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> HsdRecordSource:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


def _rpc_error(method: str, error: Any, status: int) -> RecordSourceError:
    if isinstance(error, Mapping):
        message = str(error.get("message") or "unknown error")
        rpc_code = error.get("code")
    else:
        message = str(error)
        rpc_code = None
    detail = f"{message} (code {rpc_code})" if rpc_code is not None else message
    return RecordSourceError(f"hsd {method} failed: {detail}", status=status)


class StaticRecordSource:
    """In-memory record source keyed by normalized domain name."""

    def __init__(
        self,
        records: Mapping[DomainName, Iterable[HnsRecord | JsonDict] | None]
        | None = None,
    ) -> None:
        self._records: dict[DomainName, tuple[HnsRecord, ...] | None] = {}
        self.query_count = 0
        self.queried_names: list[DomainName] = []
        for name, items in (records or {}).items():
            self.set_records(name, items)

    def set_records(
        self, name: DomainName, items: Iterable[HnsRecord | JsonDict] | None
    ) -> None:
        if items is None:
            self._records[name] = None
            return
        self._records[name] = tuple(
            item if isinstance(item, HnsRecord) else HnsRecord.from_dict(item)
            for item in items
        )

    async def query_records(self, name: DomainName) -> tuple[HnsRecord, ...] | None:
        self.query_count += 1
        self.queried_names.append(name)
        return self._records.get(name)
