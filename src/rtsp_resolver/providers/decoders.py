#!/usr/bin/env python3
"""
Decoders turning provider input into fresh Sources.
"""

import csv
import io
import json
from enum import Enum
from typing import List

from ..exceptions import ProviderDecodeError
from ..models import Source


class SourceFormat(Enum):
    """Encodings a file provider can read."""
    JSON = "json"
    CSV = "csv"


def decode_json_sources(text: str) -> List[Source]:
    """
    Decode a JSON array of address strings.

    Raises:
        ProviderDecodeError: If the document is not an array of strings
    """
    try:
        values = json.loads(text)
    except json.JSONDecodeError as e:
        raise ProviderDecodeError(SourceFormat.JSON.value, str(e))

    if not isinstance(values, list):
        raise ProviderDecodeError(SourceFormat.JSON.value, f"expected array, got {type(values).__name__}")

    sources = []
    for index, value in enumerate(values):
        if not isinstance(value, str):
            raise ProviderDecodeError(
                SourceFormat.JSON.value,
                f"element {index} is {type(value).__name__}, expected string"
            )
        sources.append(Source(original=value))
    return sources


def decode_csv_sources(text: str) -> List[Source]:
    """
    Decode CSV rows, taking the address from the first column.

    Blank lines are skipped.

    Raises:
        ProviderDecodeError: If the text is not valid CSV
    """
    try:
        rows = list(csv.reader(io.StringIO(text, newline=''), strict=True))
    except csv.Error as e:
        raise ProviderDecodeError(SourceFormat.CSV.value, str(e))

    return [Source(original=row[0]) for row in rows if row]


def decode_sources(text: str, source_format: SourceFormat) -> List[Source]:
    """Decode ``text`` with the decoder for ``source_format``."""
    if source_format is SourceFormat.JSON:
        return decode_json_sources(text)
    if source_format is SourceFormat.CSV:
        return decode_csv_sources(text)
    raise ValueError(f"Unknown source format: {source_format}")
