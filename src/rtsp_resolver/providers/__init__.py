#!/usr/bin/env python3
"""
Source providers for stream address aggregation.

Supports three origins: addresses given directly, local JSON/CSV files and
remote HTTP endpoints.
"""

from .base import ProviderKind, SourceProvider
from .decoders import SourceFormat, decode_csv_sources, decode_json_sources, decode_sources
from .factory import ProviderFactory
from .file import FileSourceProvider
from .remote import RemoteSourceProvider
from .static import StaticSourceProvider

__all__ = [
    'ProviderKind', 'SourceProvider', 'SourceFormat', 'decode_csv_sources',
    'decode_json_sources', 'decode_sources', 'ProviderFactory',
    'FileSourceProvider', 'RemoteSourceProvider', 'StaticSourceProvider'
]
