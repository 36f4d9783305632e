"""Core infrastructure: configuration, logging and errors."""

from .config import HnsResolverSettings
from .errors import (
    HnsResolverError,
    IncompatibleRecordsError,
    RecordDecodeError,
    RecordSourceError,
    ResolutionError,
)

__all__ = [
    "HnsResolverError",
    "HnsResolverSettings",
    "IncompatibleRecordsError",
    "RecordDecodeError",
    "RecordSourceError",
    "ResolutionError",
]
