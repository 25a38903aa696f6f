#!/usr/bin/env python3
"""
Redirect Resolver

Discovers the final destination of a stream address by issuing RTSP
DESCRIBE requests and following redirect responses until the server
answers with success.
"""

import asyncio
import logging
import ssl
from typing import Optional

from .exceptions import ResolutionProtocolError, ResolutionTimeoutError
from .models import Source
from .rtsp import DEFAULT_USER_AGENT, RtspClient, StreamAddress, parse_address

logger = logging.getLogger(__name__)


class RedirectResolver:
    """Resolves stream addresses through RTSP redirect chains."""

    def __init__(self,
                 timeout: float = 15,
                 max_redirects: int = 10,
                 user_agent: str = DEFAULT_USER_AGENT,
                 verify_tls: bool = True):
        """
        Initialize resolver.

        Args:
            timeout: Overall time budget in seconds for one resolution
            max_redirects: Maximum redirect hops to follow
            user_agent: Value of the User-Agent header
            verify_tls: Verify server certificates for rtsps addresses
        """
        self.timeout = timeout
        self.max_redirects = max_redirects
        self.user_agent = user_agent
        self.verify_tls = verify_tls
        self._ssl_context: Optional[ssl.SSLContext] = None

    async def resolve(self, source: Source) -> Source:
        """
        Resolve one source.

        Args:
            source: Source whose original address is resolved

        Returns:
            A new Source with ``resolved`` set to the final URL

        Raises:
            AddressError: If the original address cannot be parsed
            ResolutionError: On connection failure, timeout or error status
        """
        address = parse_address(source.original)

        try:
            final_url = await asyncio.wait_for(self._follow(address), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise ResolutionTimeoutError(source.original, self.timeout)

        if final_url != source.original:
            logger.info(f"Resolved {source.original} -> {final_url}")
        else:
            logger.debug(f"{source.original} is served without redirect")
        return source.with_resolved(final_url)

    async def _follow(self, address: StreamAddress) -> str:
        hops = 0
        while True:
            async with RtspClient(address, self.user_agent, self._tls_context(address)) as client:
                response = await client.describe()

            if response.is_success:
                return address.raw

            if not response.is_redirect:
                raise ResolutionProtocolError(
                    address.request_url,
                    f"{response.status_code} {response.reason}".strip(),
                    response.status_code
                )

            location = response.location
            if not location:
                raise ResolutionProtocolError(
                    address.request_url,
                    f"redirect {response.status_code} without Location",
                    response.status_code
                )

            hops += 1
            if hops > self.max_redirects:
                raise ResolutionProtocolError(
                    address.request_url,
                    f"more than {self.max_redirects} redirects",
                    response.status_code
                )

            next_address = address.join(location)
            logger.debug(f"Redirect {response.status_code}: {address.request_url} -> {next_address.request_url}")
            address = next_address

    def _tls_context(self, address: StreamAddress) -> Optional[ssl.SSLContext]:
        if not address.uses_tls:
            return None
        if self._ssl_context is None:
            context = ssl.create_default_context()
            if not self.verify_tls:
                context.check_hostname = False
                context.verify_mode = ssl.CERT_NONE
            self._ssl_context = context
        return self._ssl_context
