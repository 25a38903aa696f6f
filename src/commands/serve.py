#!/usr/bin/env python3
"""
Live serving command.

Keeps sources refreshed on an interval and serves the latest mapping over
HTTP until SIGINT or SIGTERM.
"""

import asyncio
import logging
import signal
from argparse import Namespace
from typing import List, Optional

from rtsp_resolver.config import LiveModeSettings
from rtsp_resolver.live_server import LiveServer
from rtsp_resolver.orchestrator import AggregationOrchestrator
from rtsp_resolver.providers import SourceProvider
from rtsp_resolver.scheduler import RefreshScheduler

from .base import BaseCommand, EXIT_OK

logger = logging.getLogger(__name__)

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ServeCommand(BaseCommand):
    """Serve resolved sources on http:<port>, refreshed every <interval> seconds."""

    def execute(self, mode: str, args: Namespace) -> int:
        """Execute live mode."""
        try:
            settings: LiveModeSettings = args.live_settings

            providers = self.build_providers(args.sources)
            if not providers:
                self.logger.warning("No usable sources given, nothing to serve")
                return EXIT_OK

            asyncio.run(self.serve(providers, settings))
            return EXIT_OK

        except Exception as e:
            return self.handle_error(e, f"serve {mode}")

    async def serve(self, providers: List[SourceProvider], settings: LiveModeSettings,
                    stop_event: Optional[asyncio.Event] = None) -> None:
        """
        Run the refresh loop and live endpoint until ``stop_event`` is set.

        The first cycle completes before the endpoint accepts requests; a stop
        requested during that cycle ends the command without serving. On
        stop the endpoint shuts down gracefully and an in-flight cycle is
        allowed to finish.

        Args:
            providers: Providers to refresh and resolve
            settings: Port and refresh interval
            stop_event: Cancellation signal; SIGINT/SIGTERM handlers are
                installed when not supplied
        """
        orchestrator = AggregationOrchestrator(providers)
        scheduler = RefreshScheduler(orchestrator, settings.interval_seconds)
        server = LiveServer(
            orchestrator.snapshot,
            host=self.config.server.host,
            port=settings.port,
            shutdown_timeout=self.config.server.shutdown_timeout
        )
        self.live_server = server

        installed_signals = []
        if stop_event is None:
            stop_event = asyncio.Event()
            installed_signals = self._install_signal_handlers(stop_event)

        try:
            await scheduler.run_once()
            if stop_event.is_set():
                self.logger.info("Stopped during the first refresh cycle, not serving")
                return

            await server.start()
            scheduler_task = asyncio.create_task(scheduler.run(stop_event))
            try:
                await stop_event.wait()
            finally:
                stop_event.set()
                await server.stop()
                await scheduler_task
        finally:
            self._remove_signal_handlers(installed_signals)

    def _install_signal_handlers(self, stop_event: asyncio.Event) -> list:
        loop = asyncio.get_running_loop()
        installed = []
        for sig in STOP_SIGNALS:
            try:
                loop.add_signal_handler(sig, self._on_signal, sig, stop_event)
                installed.append(sig)
            except (NotImplementedError, RuntimeError):
                # Platforms without loop signal support fall back to KeyboardInterrupt
                logger.debug(f"Cannot install handler for {sig.name}")
        return installed

    def _remove_signal_handlers(self, installed: list) -> None:
        loop = asyncio.get_running_loop()
        for sig in installed:
            loop.remove_signal_handler(sig)

    def _on_signal(self, sig: signal.Signals, stop_event: asyncio.Event) -> None:
        self.logger.info(f"Received {sig.name} signal, shutting down")
        stop_event.set()
