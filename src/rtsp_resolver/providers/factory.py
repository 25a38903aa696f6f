#!/usr/bin/env python3
"""
Provider factory mapping command-line addresses to provider variants.
"""

import logging
from typing import Iterable, List, Optional

from ..models import Source
from ..rtsp import DEFAULT_USER_AGENT
from .base import SourceProvider
from .decoders import SourceFormat
from .file import FileSourceProvider
from .remote import RemoteSourceProvider
from .static import StaticSourceProvider

logger = logging.getLogger(__name__)


class ProviderFactory:
    """Builds one provider per input argument."""

    def __init__(self, resolver, fetch_timeout: float = 5, user_agent: str = DEFAULT_USER_AGENT):
        """
        Initialize factory.

        Args:
            resolver: Redirect resolver shared by every provider
            fetch_timeout: Timeout for remote source lists in seconds
            user_agent: User-Agent for remote source list requests
        """
        self.resolver = resolver
        self.fetch_timeout = fetch_timeout
        self.user_agent = user_agent

    def create(self, address: str) -> Optional[SourceProvider]:
        """
        Create the provider matching ``address``.

        Checked in order: http(s) endpoint, .json file, rtsp(s) stream,
        .csv file. Anything else is logged and skipped.

        Returns:
            Provider instance, or None if the address is unsupported
        """
        if address.startswith('http'):
            return RemoteSourceProvider(address, self.resolver, self.fetch_timeout, self.user_agent)
        if address.endswith('.json'):
            return FileSourceProvider(address, SourceFormat.JSON, self.resolver)
        if address.startswith('rtsp'):
            return StaticSourceProvider([Source(original=address)], self.resolver)
        if address.endswith('.csv'):
            return FileSourceProvider(address, SourceFormat.CSV, self.resolver)

        logger.warning(f"Unsupported source: {address}")
        return None

    def create_all(self, addresses: Iterable[str]) -> List[SourceProvider]:
        """Create providers for every supported address, skipping the rest."""
        providers = []
        for address in addresses:
            provider = self.create(address)
            if provider is not None:
                logger.debug(f"Created {provider.kind.value} provider for {address}")
                providers.append(provider)
        return providers
