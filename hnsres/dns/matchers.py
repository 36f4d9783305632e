from __future__ import annotations

import re
from urllib.parse import quote, unquote

from hnsres.core.errors import RecordDecodeError

from .records import RegistryEntry

REGISTRY_ENTRY_SCHEME = "skyns://"
SKYLINK_LENGTH = 46

# Match both `sia://HASH` and `HASH` links; anything after the hash is ignored.
SKYLINK_RE = re.compile(r"(?:sia://)?[a-zA-Z0-9_-]{%d}" % SKYLINK_LENGTH)
REGISTRY_ENTRY_RE = re.compile(
    r"skyns://(?P<publickey>[a-zA-Z0-9%]+)/(?P<datakey>[a-zA-Z0-9%]+)"
)


def is_valid_skylink(value: str | None) -> bool:
    if not value:
        return False
    return SKYLINK_RE.match(value) is not None


def is_valid_registry_entry(value: str | None) -> bool:
    if not value:
        return False
    return REGISTRY_ENTRY_RE.fullmatch(value) is not None


def is_compatible_value(value: str | None) -> bool:
    return is_valid_skylink(value) or is_valid_registry_entry(value)


_MALFORMED_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _percent_decode(token: str) -> str:
    if _MALFORMED_ESCAPE_RE.search(token):
        raise RecordDecodeError(f"Malformed percent-encoding in {token!r}")
    try:
        return unquote(token, errors="strict")
    except UnicodeDecodeError as exc:
        raise RecordDecodeError(f"Malformed percent-encoding in {token!r}") from exc


def decode_registry_entry(value: str) -> RegistryEntry:
    """Split a ``skyns://`` reference into its percent-decoded keys."""
    match = REGISTRY_ENTRY_RE.fullmatch(value or "")
    if match is None:
        raise RecordDecodeError(f"Not a registry entry reference: {value!r}")
    return RegistryEntry(
        public_key=_percent_decode(match.group("publickey")),
        data_key=_percent_decode(match.group("datakey")),
    )


def _encode_token(token: str) -> str:
    # quote() keeps "_.-~" but the reference pattern only admits alphanumerics and "%".
    quoted = quote(token, safe="")
    return "".join(f"%{ord(char):02X}" if char in "_.-~" else char for char in quoted)


def encode_registry_entry(entry: RegistryEntry) -> str:
    """Build the ``skyns://`` reference for ``entry``."""
    return (
        f"{REGISTRY_ENTRY_SCHEME}{_encode_token(entry.public_key)}"
        f"/{_encode_token(entry.data_key)}"
    )
