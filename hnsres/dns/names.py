from __future__ import annotations

import re

ACE_PREFIX = "xn--"

# IDNA2003 label separators: full stop, ideographic, fullwidth and halfwidth.
_LABEL_SEPARATOR_RE = re.compile("[.。．｡]")


def _label_to_ascii(label: str) -> str:
    if label.isascii():
        return label
    encoded = label.encode("punycode").decode("ascii")
    return f"{ACE_PREFIX}{encoded}"


def normalize_domain_name(raw_name: str) -> str:
    """Convert a user supplied domain name to its ASCII (punycode) form.

    ASCII labels are kept verbatim so the conversion is idempotent.
    """
    labels = _LABEL_SEPARATOR_RE.split(raw_name)
    return ".".join(_label_to_ascii(label) for label in labels)
