#!/usr/bin/env python3
"""
Minimal asyncio RTSP client.

Opens one connection to a stream server and performs DESCRIBE requests on
it, answering a single authentication challenge when the address carries
credentials.
"""

import asyncio
import logging
import ssl
from typing import Optional

from multidict import CIMultiDict

from ..exceptions import ResolutionConnectionError, ResolutionProtocolError
from .auth import build_authorization, select_challenge
from .messages import MessageError, RtspRequest, RtspResponse, read_response
from .url import StreamAddress

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "rtsp-redirect-resolver/1.0"


class RtspClient:
    """RTSP connection bound to one server (use as async context manager)."""

    def __init__(self,
                 address: StreamAddress,
                 user_agent: str = DEFAULT_USER_AGENT,
                 ssl_context: Optional[ssl.SSLContext] = None):
        """
        Initialize client.

        Args:
            address: Parsed stream address to connect to
            user_agent: Value of the User-Agent header
            ssl_context: TLS context for rtsps (default context if None)
        """
        self.address = address
        self.user_agent = user_agent
        self.ssl_context = ssl_context
        self._reader: Optional[asyncio.StreamReader] = None
        self._writer: Optional[asyncio.StreamWriter] = None
        self._cseq = 0

    async def __aenter__(self):
        """Connect to the server."""
        ssl_arg = None
        if self.address.uses_tls:
            ssl_arg = self.ssl_context or ssl.create_default_context()
        try:
            self._reader, self._writer = await asyncio.open_connection(
                self.address.host, self.address.port, ssl=ssl_arg
            )
        except (OSError, ssl.SSLError) as e:
            raise ResolutionConnectionError(self.address.request_url, e)
        logger.debug(f"Connected to {self.address.host}:{self.address.port}")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Close the connection."""
        if self._writer:
            self._writer.close()
            try:
                await self._writer.wait_closed()
            except (OSError, ssl.SSLError) as e:
                logger.debug(f"Error closing connection to {self.address.host}: {e}")
            self._writer = None
            self._reader = None

    async def describe(self) -> RtspResponse:
        """
        Send DESCRIBE for the bound address.

        Returns:
            The final response (after at most one authentication retry)

        Raises:
            ResolutionConnectionError: If the connection drops
            ResolutionProtocolError: If the response is malformed
        """
        url = self.address.request_url
        response = await self._request('DESCRIBE', url)

        if response.status_code == 401 and self.address.has_credentials:
            challenge = select_challenge(response.headers.getall('WWW-Authenticate', []))
            if challenge is None:
                raise ResolutionProtocolError(url, "no supported authentication challenge", 401)
            try:
                authorization = build_authorization(
                    challenge, 'DESCRIBE', url,
                    self.address.username, self.address.password
                )
            except ValueError as e:
                raise ResolutionProtocolError(url, str(e), 401)
            logger.debug(f"Retrying DESCRIBE {url} with {challenge['scheme']} authentication")
            response = await self._request('DESCRIBE', url, {'Authorization': authorization})

        return response

    async def _request(self, method: str, url: str, extra_headers: Optional[dict] = None) -> RtspResponse:
        if self._writer is None:
            raise RuntimeError("RtspClient must be used as async context manager")

        self._cseq += 1
        headers = CIMultiDict({
            'User-Agent': self.user_agent,
            'Accept': 'application/sdp',
        })
        headers.update(extra_headers or {})
        request = RtspRequest(method=method, url=url, cseq=self._cseq, headers=headers)

        try:
            self._writer.write(request.encode())
            await self._writer.drain()
            response = await read_response(self._reader)
        except MessageError as e:
            raise ResolutionProtocolError(url, str(e))
        except (OSError, ssl.SSLError) as e:
            raise ResolutionConnectionError(url, e)

        if response.cseq is not None and response.cseq != request.cseq:
            raise ResolutionProtocolError(url, f"CSeq mismatch: sent {request.cseq}, got {response.cseq}")

        logger.debug(f"{method} {url} -> {response.status_code} {response.reason}")
        return response
