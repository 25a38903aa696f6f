#!/usr/bin/env python3
"""
Static-list provider for addresses given directly on the command line.
"""

from typing import Iterable

from ..models import Source
from .base import ProviderKind, SourceProvider


class StaticSourceProvider(SourceProvider):
    """Provider whose source set is fixed at construction."""

    kind = ProviderKind.STATIC

    def __init__(self, sources: Iterable[Source], resolver):
        sources = list(sources)
        super().__init__(resolver, sources)
        self._location = ", ".join(source.original for source in sources)

    @property
    def location(self) -> str:
        return self._location

    async def refresh_sources(self) -> bool:
        return True
