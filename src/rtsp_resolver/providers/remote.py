#!/usr/bin/env python3
"""
Remote-endpoint provider fetching a JSON array of addresses over HTTP.
"""

import asyncio
import logging

import aiohttp

from ..exceptions import ProviderError, ProviderFetchError
from ..rtsp import DEFAULT_USER_AGENT
from .base import ProviderKind, SourceProvider
from .decoders import decode_json_sources

logger = logging.getLogger(__name__)


class RemoteSourceProvider(SourceProvider):
    """Provider backed by an HTTP(S) endpoint, fetched on every refresh."""

    kind = ProviderKind.REMOTE

    def __init__(self, url: str, resolver, timeout: float = 5,
                 user_agent: str = DEFAULT_USER_AGENT):
        """
        Initialize remote provider.

        Args:
            url: Endpoint returning a JSON array of address strings
            resolver: Redirect resolver for this provider's sources
            timeout: Total request timeout in seconds
            user_agent: Value of the User-Agent header
        """
        super().__init__(resolver)
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent

    @property
    def location(self) -> str:
        return self.url

    async def refresh_sources(self) -> bool:
        try:
            text = await self._fetch()
            sources = decode_json_sources(text)
        except ProviderError as e:
            logger.warning(f"Keeping previous sources for {self.url}: {e}")
            return False

        self.registry.merge(sources)
        logger.info(f"Fetched {len(sources)} sources from {self.url}")
        return True

    async def _fetch(self) -> str:
        logger.debug(f"Fetching source list from: {self.url}")
        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={'User-Agent': self.user_agent}
            ) as session:
                async with session.get(self.url) as response:
                    response.raise_for_status()
                    return await response.text()
        except asyncio.TimeoutError:
            raise ProviderFetchError(self.url, TimeoutError(f"no response within {self.timeout}s"))
        except (aiohttp.ClientError, UnicodeDecodeError, ValueError) as e:
            raise ProviderFetchError(self.url, e)
