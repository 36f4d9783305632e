#!/usr/bin/env python3
"""
Main CLI Entry Point for hnsres.

- ``serve``: run the ``/hnsres/{name}`` HTTP service against an hsd node
- ``resolve``: resolve a single name and print the result as JSON
"""

import asyncio
import json
import sys
from pathlib import Path

import aiohttp
import click
from loguru import logger
from rich.console import Console

from hnsres.core.config import HnsResolverSettings
from hnsres.core.errors import HnsResolverError
from hnsres.core.logging import configure_logging
from hnsres.dns.resolver import HnsResolver
from hnsres.dns.source import HsdClientOptions, HsdRecordSource, StaticRecordSource
from hnsres.server import HnsResolverServer

error_console = Console(stderr=True)


def _load_static_source(records_file: str) -> StaticRecordSource:
    try:
        data = json.loads(Path(records_file).read_text())
    except json.JSONDecodeError as e:
        raise click.BadParameter(
            f"records file is not valid JSON: {e}", param_hint="--records-file"
        ) from e
    if not isinstance(data, dict):
        raise click.BadParameter(
            "records file must map domain names to record lists",
            param_hint="--records-file",
        )
    return StaticRecordSource(data)


async def _serve(settings: HnsResolverSettings) -> None:
    source = HsdRecordSource(HsdClientOptions.from_settings(settings))
    resolver = HnsResolver(source, cache_ttl_seconds=settings.cache_ttl_seconds)
    server = HnsResolverServer(resolver, host=settings.host, port=settings.port)
    await server.start()
    try:
        await asyncio.Event().wait()
    finally:
        await server.stop()
        await source.close()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--debug-scope",
    "debug_scopes",
    multiple=True,
    help="Log DEBUG output for a module such as dns.cache (repeatable)",
)
@click.pass_context
def cli(ctx, verbose: bool, debug_scopes: tuple[str, ...]):
    """Resolve Handshake names into skylinks and skynet registry entries."""
    settings = HnsResolverSettings()
    configure_logging(
        "DEBUG" if verbose else settings.log_level,
        debug_scopes=(settings.debug_scopes, *debug_scopes),
    )
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["settings"] = settings


@cli.command()
@click.option("--host", default=None, help="Listen address (defaults to HOSTNAME)")
@click.option("--port", type=int, default=None, help="Listen port (defaults to PORT)")
@click.pass_context
def serve(ctx, host: str | None, port: int | None):
    """Run the HTTP resolution service."""
    settings: HnsResolverSettings = ctx.obj["settings"]
    overrides = {
        key: value
        for key, value in (("host", host), ("port", port))
        if value is not None
    }
    if overrides:
        settings = settings.model_copy(update=overrides)
    try:
        asyncio.run(_serve(settings))
    except KeyboardInterrupt:
        logger.info("Shutting down")


@cli.command()
@click.argument("name")
@click.option(
    "--records-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON file mapping domain names to records, used instead of hsd",
)
@click.pass_context
def resolve(ctx, name: str, records_file: str | None):
    """Resolve NAME once and print the result."""
    settings: HnsResolverSettings = ctx.obj["settings"]

    async def _resolve():
        if records_file:
            resolver = HnsResolver(_load_static_source(records_file))
            return await resolver.resolve(name)
        async with HsdRecordSource(HsdClientOptions.from_settings(settings)) as source:
            return await HnsResolver(source).resolve(name)

    try:
        result = asyncio.run(_resolve())
    except (HnsResolverError, aiohttp.ClientError, TimeoutError) as e:
        error_console.print(
            f"Handshake error: {e}", style="red", markup=False, soft_wrap=True
        )
        sys.exit(1)

    click.echo(json.dumps(result.to_dict(), indent=2))


def main():
    """Main CLI entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        error_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    main()
