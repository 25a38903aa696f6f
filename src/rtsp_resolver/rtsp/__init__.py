#!/usr/bin/env python3
"""
RTSP protocol support for the redirect resolver.
"""

from .client import RtspClient, DEFAULT_USER_AGENT
from .messages import RtspRequest, RtspResponse, MessageError, read_response
from .url import StreamAddress, parse_address

__all__ = [
    'RtspClient', 'DEFAULT_USER_AGENT', 'RtspRequest', 'RtspResponse',
    'MessageError', 'read_response', 'StreamAddress', 'parse_address'
]
