#!/usr/bin/env python3
"""
Concurrency-safe registry of stream sources.

Maps each original address to its Source. A single lock guards the backing
dict and is only ever held for dict reads and writes, never across an await.
"""

import asyncio
import logging
import threading
from typing import Callable, Dict, Iterable, List, Optional

from .exceptions import ResolverError
from .models import Source

logger = logging.getLogger(__name__)


class SourceRegistry:
    """Thread-safe mapping from original address to Source."""

    def __init__(self, sources: Optional[Iterable[Source]] = None):
        """
        Initialize registry.

        Args:
            sources: Optional initial sources (later duplicates win)
        """
        self._sources: Dict[str, Source] = {}
        self._lock = threading.Lock()

        for source in sources or []:
            self._sources[source.original] = source

    def add(self, source: Source) -> None:
        """Insert or overwrite the entry keyed by ``source.original``."""
        with self._lock:
            self._sources[source.original] = source

    def merge(self, sources: Iterable[Source]) -> None:
        """Upsert many sources as one atomic step."""
        staged = {source.original: source for source in sources}
        with self._lock:
            self._sources.update(staged)

    def get(self, original: str) -> Optional[Source]:
        """Look up a source by its original address."""
        with self._lock:
            return self._sources.get(original)

    def snapshot(self) -> List[Source]:
        """Return a point-in-time copy of all entries (order unspecified)."""
        with self._lock:
            return list(self._sources.values())

    def iterate(self, visit: Callable[[Source], None]) -> None:
        """
        Call ``visit`` once per entry.

        Entries are copied under the lock and visited outside it, so ``visit``
        only ever sees complete Sources and may call back into the registry.
        """
        for source in self.snapshot():
            visit(source)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sources)

    def __contains__(self, original: object) -> bool:
        with self._lock:
            return original in self._sources

    async def resolve_all(self, resolver) -> int:
        """
        Resolve every current entry concurrently and merge the successes.

        Results are staged in a separate dict and merged only once every
        attempt has finished; failed entries keep their prior value.

        Args:
            resolver: Object exposing ``async resolve(source) -> Source``

        Returns:
            Number of sources resolved in this pass
        """
        pending = self.snapshot()
        if not pending:
            return 0

        results = await asyncio.gather(
            *(resolver.resolve(source) for source in pending),
            return_exceptions=True
        )

        staged: Dict[str, Source] = {}
        for source, result in zip(pending, results):
            if isinstance(result, ResolverError):
                logger.warning(f"Failed to resolve {source.original}: {result}")
                continue
            if isinstance(result, BaseException):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                logger.error(f"Unexpected error resolving {source.original}", exc_info=result)
                continue
            if result.original != source.original:
                logger.error(f"Resolver returned {result.original!r} for {source.original!r}, discarding")
                continue
            staged[result.original] = result

        self.merge(staged.values())
        logger.debug(f"Resolved {len(staged)}/{len(pending)} sources")
        return len(staged)
