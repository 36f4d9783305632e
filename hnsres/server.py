"""
HTTP surface for the Handshake resolver.

Exposes ``GET /hnsres/{name}``: a resolved name is answered with JSON, any
failure with a ``text/plain`` body so error messages are never rendered as
markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from aiohttp import web
from loguru import logger

from hnsres.core.errors import HnsResolverError
from hnsres.dns.resolver import HnsResolver

ERROR_PREFIX = "Handshake error"


def error_status(error: Exception) -> int:
    if isinstance(error, HnsResolverError):
        return error.code
    return 500


@dataclass(slots=True)
class HnsResolverServer:
    resolver: HnsResolver
    host: str = "0.0.0.0"
    port: int = 3100
    app: web.Application = field(init=False)
    runner: web.AppRunner | None = field(default=None, init=False)
    site: web.TCPSite | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.app = self.build_app()

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/hnsres/{name}", self._resolve_name)
        return app

    async def _resolve_name(self, request: web.Request) -> web.Response:
        name = request.match_info["name"]
        try:
            result = await self.resolver.resolve(name)
        except Exception as error:
            status = error_status(error)
            logger.warning("Resolving {} failed with {}: {}", name, status, error)
            return web.Response(
                status=status,
                text=f"{ERROR_PREFIX}: {error}",
                content_type="text/plain",
                charset="utf-8",
            )
        return web.json_response(result.to_dict())

    async def start(self) -> None:
        """Start serving on ``host``:``port`` (port 0 picks a free port)."""
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()

        self.site = web.TCPSite(self.runner, host=self.host, port=self.port)
        await self.site.start()

        if self.port == 0 and self.site._server and self.site._server.sockets:
            self.port = self.site._server.sockets[0].getsockname()[1]

        logger.info("Server listening at http://{}:{}", self.host, self.port)

    async def stop(self) -> None:
        if self.site:
            await self.site.stop()
            self.site = None
        if self.runner:
            await self.runner.cleanup()
            self.runner = None
