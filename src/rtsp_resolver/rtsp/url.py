#!/usr/bin/env python3
"""
Stream address parsing.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote, urljoin, urlsplit, urlunsplit

from ..exceptions import AddressError

DEFAULT_PORTS = {
    'rtsp': 554,
    'rtsps': 322,
}


@dataclass(frozen=True)
class StreamAddress:
    """A parsed rtsp:// or rtsps:// address."""
    raw: str
    scheme: str
    host: str
    port: int
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def uses_tls(self) -> bool:
        return self.scheme == 'rtsps'

    @property
    def has_credentials(self) -> bool:
        return self.username is not None

    @property
    def request_url(self) -> str:
        """The address as sent on the request line (userinfo stripped)."""
        parts = urlsplit(self.raw)
        netloc = parts.netloc.rpartition('@')[2]
        return urlunsplit((parts.scheme, netloc, parts.path, parts.query, ''))

    def join(self, location: str) -> "StreamAddress":
        """
        Resolve a redirect ``Location`` against this address.

        Credentials are carried over when the target is on the same host
        and does not bring its own. They never appear in the joined ``raw``.
        """
        target = parse_address(_join_url(self.request_url, location))
        if not target.has_credentials and self.has_credentials and target.host == self.host:
            return StreamAddress(
                raw=target.raw,
                scheme=target.scheme,
                host=target.host,
                port=target.port,
                username=self.username,
                password=self.password,
            )
        return target


def parse_address(address: str) -> StreamAddress:
    """
    Parse a stream address into scheme, host and port.

    Raises:
        AddressError: If the address is not a usable rtsp/rtsps URL
    """
    if not address or any(ch.isspace() for ch in address):
        raise AddressError(address, "empty or contains whitespace")

    try:
        parts = urlsplit(address)
        port = parts.port
    except ValueError as e:
        raise AddressError(address, str(e))

    scheme = parts.scheme.lower()
    if scheme not in DEFAULT_PORTS:
        raise AddressError(address, f"unsupported scheme {parts.scheme!r}")
    if not parts.hostname:
        raise AddressError(address, "missing host")

    username = password = None
    if parts.username is not None:
        username = unquote(parts.username)
        password = unquote(parts.password or "")

    return StreamAddress(
        raw=address,
        scheme=scheme,
        host=parts.hostname,
        port=port or DEFAULT_PORTS[scheme],
        username=username,
        password=password,
    )


def _join_url(base: str, location: str) -> str:
    if urlsplit(location).scheme:
        return location
    parts = urlsplit(base)
    # urljoin only resolves relative references for schemes it knows
    joined = urljoin(urlunsplit(('rtsp',) + tuple(parts[1:])), location)
    return parts.scheme + joined[len('rtsp'):]
