#!/usr/bin/env python3
"""
File provider reading addresses from a local JSON or CSV file.
"""

import asyncio
import logging
from pathlib import Path
from typing import Union

from ..exceptions import ProviderError, ProviderFetchError
from .base import ProviderKind, SourceProvider
from .decoders import SourceFormat, decode_sources

logger = logging.getLogger(__name__)


class FileSourceProvider(SourceProvider):
    """Provider backed by a local file, re-read on every refresh."""

    kind = ProviderKind.FILE

    def __init__(self, path: Union[str, Path], source_format: SourceFormat, resolver):
        """
        Initialize file provider.

        Args:
            path: Path to the source file
            source_format: Encoding of the file
            resolver: Redirect resolver for this provider's sources
        """
        super().__init__(resolver)
        self.path = Path(path).expanduser()
        self.source_format = source_format

    @property
    def location(self) -> str:
        return str(self.path)

    async def refresh_sources(self) -> bool:
        loop = asyncio.get_running_loop()
        try:
            text = await loop.run_in_executor(None, self._read_text)
            sources = decode_sources(text, self.source_format)
        except ProviderError as e:
            logger.warning(f"Keeping previous sources for {self.path}: {e}")
            return False

        # Fresh entries: resolved values are cleared until this cycle resolves them
        self.registry.merge(sources)
        logger.info(f"Loaded {len(sources)} sources from {self.path}")
        return True

    def _read_text(self) -> str:
        try:
            with open(self.path, 'r', encoding='utf-8-sig') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ProviderFetchError(str(self.path), e)
