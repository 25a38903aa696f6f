#!/usr/bin/env python3
"""
Live HTTP endpoint serving the latest original -> resolved mapping.

The mapping is read from the provider registries on every request, so a
request never waits for a refresh cycle.
"""

import logging
from typing import Callable, List, Optional

from aiohttp import web

from .exceptions import ServeError
from .formatters import sources_to_mapping
from .models import Source

logger = logging.getLogger(__name__)

SnapshotFunc = Callable[[], List[Source]]


def create_app(snapshot: SnapshotFunc) -> web.Application:
    """
    Build the aiohttp application.

    Args:
        snapshot: Callable returning the current source snapshot
    """
    async def handle_sources(request: web.Request) -> web.Response:
        mapping = sources_to_mapping(snapshot())
        logger.debug(f"Serving {len(mapping)} sources to {request.remote}")
        return web.json_response(mapping)

    app = web.Application()
    app.router.add_get('/', handle_sources)
    return app


class LiveServer:
    """Runs the live endpoint on a TCP port."""

    def __init__(self, snapshot: SnapshotFunc, host: str = "0.0.0.0", port: int = 8080,
                 shutdown_timeout: float = 10.0):
        self.host = host
        self.port = port
        self.shutdown_timeout = shutdown_timeout
        self.app = create_app(snapshot)
        self._runner: Optional[web.AppRunner] = None

    async def start(self) -> None:
        """
        Bind and start serving.

        Raises:
            ServeError: If the address cannot be bound
        """
        runner = web.AppRunner(self.app, access_log=None, shutdown_timeout=self.shutdown_timeout)
        await runner.setup()
        site = web.TCPSite(runner, self.host, self.port)
        try:
            await site.start()
        except OSError as e:
            await runner.cleanup()
            raise ServeError(self.host, self.port, e)

        self._runner = runner
        logger.info(f"Serving resolved sources on http://{self.host}:{self.port}/")

    async def stop(self) -> None:
        """Stop accepting connections and let in-flight responses finish."""
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
            logger.info("Live endpoint stopped")

    @property
    def bound_port(self) -> Optional[int]:
        """Actual listening port (useful when started with port 0)."""
        if self._runner is None:
            return None
        for address in self._runner.addresses:
            if isinstance(address, tuple) and len(address) >= 2:
                return address[1]
        return None
