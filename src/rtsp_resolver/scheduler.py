#!/usr/bin/env python3
"""
Refresh scheduler for live mode.

Drives the orchestrator on a fixed interval until a stop event is set. A
cycle that has started is always allowed to finish.
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Optional

from .orchestrator import AggregationOrchestrator, CycleStats

logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    """Lifecycle of the refresh loop."""
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class RefreshScheduler:
    """
    Fixed-rate refresh loop.

    Ticks are spaced ``interval_seconds`` apart measured from the start of
    the previous cycle; a cycle that overruns the interval is followed
    immediately by the next one.
    """

    def __init__(self, orchestrator: AggregationOrchestrator, interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.orchestrator = orchestrator
        self.interval_seconds = interval_seconds
        self.state = SchedulerState.IDLE
        self.cycle_count = 0
        self.last_stats: Optional[CycleStats] = None
        self._last_started: Optional[float] = None

    async def run_once(self) -> CycleStats:
        """Run a single refresh cycle."""
        self.state = SchedulerState.RUNNING
        self._last_started = time.monotonic()
        try:
            stats = await self.orchestrator.refresh_and_resolve()
        finally:
            self.state = SchedulerState.IDLE
        self.cycle_count += 1
        self.last_stats = stats
        logger.debug(f"Refresh cycle {self.cycle_count} finished")
        return stats

    async def run(self, stop_event: asyncio.Event) -> None:
        """
        Tick until ``stop_event`` is set.

        The first tick waits one interval when a cycle already ran (see
        ``run_once``); otherwise it starts immediately.
        """
        logger.info(f"Refresh scheduler started (every {self.interval_seconds}s)")
        try:
            while not stop_event.is_set():
                if await self._wait_for_next_tick(stop_event):
                    break
                try:
                    await self.run_once()
                except Exception as e:
                    # Keep serving the previous snapshot
                    logger.error(f"Refresh cycle failed: {e}", exc_info=True)
        finally:
            self.state = SchedulerState.STOPPED
            logger.info(f"Refresh scheduler stopped after {self.cycle_count} cycles")

    async def _wait_for_next_tick(self, stop_event: asyncio.Event) -> bool:
        """Sleep until the next tick; returns True if stopped meanwhile."""
        if self._last_started is None:
            return stop_event.is_set()

        delay = self._last_started + self.interval_seconds - time.monotonic()
        if delay <= 0:
            return stop_event.is_set()

        try:
            await asyncio.wait_for(stop_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return False
        return True
