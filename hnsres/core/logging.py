"""Central logging configuration helpers for hnsres."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable
from typing import Any

from loguru import logger

LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{name}:{function}:{line} - {message}"
)
PACKAGE_PREFIX = "hnsres."


def parse_debug_scopes(scopes: Iterable[str] | str) -> tuple[str, ...]:
    """Normalize scopes to fully qualified module prefixes.

    Accepts a comma separated string (as read from the environment) or an
    iterable of such strings. ``dns.cache`` and ``hnsres.dns.cache`` name the
    same scope.
    """
    if isinstance(scopes, str):
        scopes = (scopes,)
    parsed: list[str] = []
    for chunk in scopes:
        for scope in chunk.split(","):
            scope = scope.strip()
            if not scope:
                continue
            if scope != "hnsres" and not scope.startswith(PACKAGE_PREFIX):
                scope = PACKAGE_PREFIX + scope
            if scope not in parsed:
                parsed.append(scope)
    return tuple(parsed)


def debug_scope_filter(scopes: tuple[str, ...]) -> Callable[[dict[str, Any]], bool]:
    """Build a loguru filter passing DEBUG records from modules under ``scopes``."""

    def _filter(record: dict[str, Any]) -> bool:
        if record["level"].name != "DEBUG":
            return False
        name = record["name"] or ""
        return any(name == scope or name.startswith(scope + ".") for scope in scopes)

    return _filter


def configure_logging(
    level: str,
    *,
    debug_scopes: Iterable[str] | str = (),
    colorize: bool = False,
) -> tuple[int, ...]:
    """Send hnsres logs to stderr at ``level``.

    Modules named in ``debug_scopes`` additionally log at DEBUG through a
    second, filtered sink. Returns the loguru handler ids.
    """
    logger.remove()
    handler_ids = [
        logger.add(sys.stderr, level=level, format=LOG_FORMAT, colorize=colorize)
    ]

    scopes = parse_debug_scopes(debug_scopes)
    if scopes and level.upper() != "DEBUG":
        handler_ids.append(
            logger.add(
                sys.stderr,
                level="DEBUG",
                format=LOG_FORMAT,
                colorize=colorize,
                filter=debug_scope_filter(scopes),
            )
        )

    return tuple(handler_ids)
