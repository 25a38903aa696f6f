#!/usr/bin/env python3
"""
Base classes for source providers.

A provider owns exactly one SourceRegistry and knows how to (re)fill it from
its origin: a fixed list, a local file, or a remote endpoint.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Iterable, List, Optional

from ..models import Source
from ..registry import SourceRegistry

logger = logging.getLogger(__name__)


class ProviderKind(Enum):
    """Closed set of provider variants."""
    STATIC = "static"
    FILE = "file"
    REMOTE = "remote"


class SourceProvider(ABC):
    """
    Abstract base class for all source providers.

    Refreshing only adds or replaces entries; addresses that disappear from
    the origin are never retracted.
    """

    kind: ProviderKind

    def __init__(self, resolver, sources: Optional[Iterable[Source]] = None):
        """
        Initialize provider.

        Args:
            resolver: Redirect resolver used by ``resolve_sources``
            sources: Optional initial sources for the registry
        """
        self.resolver = resolver
        self.registry = SourceRegistry(sources)

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable origin of this provider's sources."""
        pass

    @abstractmethod
    async def refresh_sources(self) -> bool:
        """
        Reload the source list from the provider's origin.

        Failures are logged and leave the registry untouched.

        Returns:
            True if the origin was read and decoded
        """
        pass

    async def resolve_sources(self) -> int:
        """Resolve every source in the registry; returns the success count."""
        return await self.registry.resolve_all(self.resolver)

    def add(self, source: Source) -> None:
        self.registry.add(source)

    def get(self, original: str) -> Optional[Source]:
        return self.registry.get(original)

    def iterate(self, visit: Callable[[Source], None]) -> None:
        self.registry.iterate(visit)

    def snapshot(self) -> List[Source]:
        return self.registry.snapshot()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.location!r}, sources={len(self.registry)})"
