#!/usr/bin/env python3
"""
Aggregation Orchestrator

Runs refresh-then-resolve cycles across all providers in parallel and
flattens their registries into snapshots for output.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .models import Source
from .providers import SourceProvider

logger = logging.getLogger(__name__)


@dataclass
class CycleStats:
    """Outcome of one refresh cycle."""
    providers_total: int = 0
    providers_refreshed: int = 0
    sources_total: int = 0
    sources_resolved: int = 0
    duration_seconds: float = 0.0

    @property
    def providers_failed(self) -> int:
        return self.providers_total - self.providers_refreshed


class AggregationOrchestrator:
    """Fans refresh and resolution out over a fixed list of providers."""

    def __init__(self, providers: Sequence[SourceProvider]):
        self.providers: List[SourceProvider] = list(providers)

    async def refresh_and_resolve(self) -> CycleStats:
        """
        Run one refresh cycle.

        Each provider gets its own task that refreshes and then resolves; the
        call returns once every task has finished.
        """
        stats = CycleStats(providers_total=len(self.providers))
        if not self.providers:
            return stats

        logger.info(f"Refreshing {len(self.providers)} providers in parallel")
        start_time = time.time()

        results = await asyncio.gather(
            *(self._refresh_provider(provider) for provider in self.providers),
            return_exceptions=True
        )

        for provider, result in zip(self.providers, results):
            if isinstance(result, BaseException):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                logger.error(f"Refresh cycle failed for {provider!r}", exc_info=result)
                continue
            refreshed, resolved = result
            stats.providers_refreshed += int(refreshed)
            stats.sources_resolved += resolved

        stats.sources_total = sum(len(provider.registry) for provider in self.providers)
        stats.duration_seconds = time.time() - start_time
        logger.info(
            f"Refreshed {stats.providers_refreshed}/{stats.providers_total} providers, "
            f"resolved {stats.sources_resolved}/{stats.sources_total} sources "
            f"in {stats.duration_seconds:.2f}s"
        )
        return stats

    async def _refresh_provider(self, provider: SourceProvider) -> Tuple[bool, int]:
        refreshed = await provider.refresh_sources()
        resolved = await provider.resolve_sources()
        return refreshed, resolved

    def snapshot(self) -> List[Source]:
        """Flatten every provider's registry into one list (order unspecified)."""
        sources: List[Source] = []
        for provider in self.providers:
            provider.iterate(sources.append)
        return sources

    def mapping(self) -> Dict[str, str]:
        """Current original -> resolved mapping across all providers."""
        return {source.original: source.resolved for source in self.snapshot()}
