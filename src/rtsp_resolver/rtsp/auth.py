#!/usr/bin/env python3
"""
RTSP authentication helpers (Basic and Digest).

Servers challenge with ``WWW-Authenticate``; credentials come from the
userinfo part of the stream address.
"""

import base64
import hashlib
import os
import re
from typing import Dict, List, Optional

_PARAM_PATTERN = re.compile(r'(\w+)\s*=\s*(?:"([^"]*)"|([^\s,]+))')


def parse_challenge(header: str) -> Dict[str, str]:
    """
    Parse a single ``WWW-Authenticate`` header value.

    Returns:
        Dict with a lowercased ``scheme`` key plus the challenge parameters
    """
    header = header.strip()
    scheme, _, rest = header.partition(' ')
    params = {'scheme': scheme.lower()}
    for match in _PARAM_PATTERN.finditer(rest):
        key = match.group(1).lower()
        params[key] = match.group(2) if match.group(2) is not None else match.group(3)
    return params


def select_challenge(headers: List[str]) -> Optional[Dict[str, str]]:
    """Pick the strongest supported challenge (Digest over Basic)."""
    challenges = [parse_challenge(value) for value in headers]
    for wanted in ('digest', 'basic'):
        for challenge in challenges:
            if challenge['scheme'] == wanted:
                return challenge
    return None


def _md5(value: str) -> str:
    return hashlib.md5(value.encode('utf-8')).hexdigest()


def build_authorization(challenge: Dict[str, str], method: str, uri: str,
                        username: str, password: str) -> str:
    """
    Build the ``Authorization`` header answering a challenge.

    Raises:
        ValueError: If the challenge scheme or digest algorithm is unsupported
    """
    scheme = challenge.get('scheme')

    if scheme == 'basic':
        token = base64.b64encode(f"{username}:{password}".encode('utf-8')).decode('ascii')
        return f"Basic {token}"

    if scheme != 'digest':
        raise ValueError(f"Unsupported authentication scheme: {scheme}")

    algorithm = challenge.get('algorithm', 'MD5')
    if algorithm.upper() != 'MD5':
        raise ValueError(f"Unsupported digest algorithm: {algorithm}")

    realm = challenge.get('realm', '')
    nonce = challenge.get('nonce', '')
    ha1 = _md5(f"{username}:{realm}:{password}")
    ha2 = _md5(f"{method}:{uri}")

    fields = [
        f'username="{username}"',
        f'realm="{realm}"',
        f'nonce="{nonce}"',
        f'uri="{uri}"',
    ]

    qop_options = [q.strip() for q in challenge.get('qop', '').split(',') if q.strip()]
    if 'auth' in qop_options:
        nc = '00000001'
        cnonce = os.urandom(8).hex()
        response = _md5(f"{ha1}:{nonce}:{nc}:{cnonce}:auth:{ha2}")
        fields.extend([f'response="{response}"', 'qop=auth', f'nc={nc}', f'cnonce="{cnonce}"'])
    else:
        response = _md5(f"{ha1}:{nonce}:{ha2}")
        fields.append(f'response="{response}"')

    if 'opaque' in challenge:
        fields.append(f'opaque="{challenge["opaque"]}"')
    if 'algorithm' in challenge:
        fields.append(f'algorithm={algorithm}')

    return "Digest " + ", ".join(fields)
