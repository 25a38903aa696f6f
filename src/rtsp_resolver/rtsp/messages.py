#!/usr/bin/env python3
"""
RTSP/1.0 message encoding and decoding.

Covers what a DESCRIBE exchange needs: request serialization and response
parsing (status line, headers, Content-Length body) from an asyncio stream.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Optional, Tuple

from multidict import CIMultiDict

PROTOCOL_VERSION = "RTSP/1.0"
MAX_HEADER_LINES = 256
MAX_BODY_BYTES = 1024 * 1024


class MessageError(ValueError):
    """Malformed RTSP message on the wire."""
    pass


@dataclass
class RtspRequest:
    """An outgoing RTSP request."""
    method: str
    url: str
    cseq: int
    headers: CIMultiDict = field(default_factory=CIMultiDict)
    body: bytes = b""

    def encode(self) -> bytes:
        lines = [f"{self.method} {self.url} {PROTOCOL_VERSION}", f"CSeq: {self.cseq}"]
        for name, value in self.headers.items():
            if name.lower() in ('cseq', 'content-length'):
                continue
            lines.append(f"{name}: {value}")
        if self.body:
            lines.append(f"Content-Length: {len(self.body)}")
        head = "\r\n".join(lines) + "\r\n\r\n"
        return head.encode('utf-8') + self.body


@dataclass
class RtspResponse:
    """A parsed RTSP response."""
    status_code: int
    reason: str
    headers: CIMultiDict = field(default_factory=CIMultiDict)
    body: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400

    @property
    def location(self) -> Optional[str]:
        return self.headers.get('Location')

    @property
    def cseq(self) -> Optional[int]:
        value = self.headers.get('CSeq')
        try:
            return int(value) if value is not None else None
        except ValueError:
            return None


def parse_status_line(line: str) -> Tuple[int, str]:
    """Split ``RTSP/1.0 302 Moved Temporarily`` into (code, reason)."""
    parts = line.split(' ', 2)
    if len(parts) < 2 or not parts[0].startswith('RTSP/'):
        raise MessageError(f"Invalid status line: {line!r}")
    try:
        status_code = int(parts[1])
    except ValueError:
        raise MessageError(f"Invalid status code in {line!r}")
    reason = parts[2] if len(parts) > 2 else ""
    return status_code, reason


async def read_response(reader: asyncio.StreamReader) -> RtspResponse:
    """
    Read one RTSP response from the stream.

    Raises:
        MessageError: If the response is malformed or the peer closes early
    """
    status_line = await _read_line(reader)
    # Skip stray blank lines some servers emit between messages
    while status_line == "":
        status_line = await _read_line(reader)
    status_code, reason = parse_status_line(status_line)

    headers = CIMultiDict()
    for _ in range(MAX_HEADER_LINES):
        line = await _read_line(reader)
        if line == "":
            break
        if ':' not in line:
            raise MessageError(f"Invalid header line: {line!r}")
        name, value = line.split(':', 1)
        headers.add(name.strip(), value.strip())
    else:
        raise MessageError("Too many header lines")

    body = b""
    length_value = headers.get('Content-Length')
    if length_value:
        try:
            length = int(length_value)
        except ValueError:
            raise MessageError(f"Invalid Content-Length: {length_value!r}")
        if length < 0 or length > MAX_BODY_BYTES:
            raise MessageError(f"Unacceptable Content-Length: {length}")
        try:
            body = await reader.readexactly(length)
        except asyncio.IncompleteReadError:
            raise MessageError("Connection closed while reading body")

    return RtspResponse(status_code=status_code, reason=reason, headers=headers, body=body)


async def _read_line(reader: asyncio.StreamReader) -> str:
    raw = await reader.readline()
    if not raw:
        raise MessageError("Connection closed by server")
    if not raw.endswith(b"\n"):
        raise MessageError("Connection closed mid-line")
    return raw.decode('utf-8', errors='replace').rstrip("\r\n")
