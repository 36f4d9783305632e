"""Error taxonomy shared by the resolver, the record source and the HTTP layer.

Every error carries a ``code`` in the HTTP status space so the server can
map failures to responses without knowing each error type.
"""

from __future__ import annotations


class HnsResolverError(Exception):
    """Base class for all hnsres failures."""

    default_code: int = 500

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = self.default_code if code is None else int(code)


class ResolutionError(HnsResolverError):
    """No records exist for the requested domain."""

    default_code = 404


class IncompatibleRecordsError(HnsResolverError):
    """Records exist but none holds a skylink or registry entry."""


class RecordDecodeError(HnsResolverError):
    """A value selected as compatible could not be decoded."""


class RecordSourceError(HnsResolverError):
    """The record source answered, but not with a usable record list."""

    default_code = 502

    def __init__(
        self, message: str, code: int | None = None, *, status: int | None = None
    ) -> None:
        super().__init__(message, code)
        self.status = status
